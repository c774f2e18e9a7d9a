"""
Distance and analogy queries over a loaded VectorTable.
"""

from typing import List

import numpy as np

from ..util.logging import logger
from .errors import UnknownWordError
from .search import combine, search
from .types import VectorTable, WordDistance


def lookup(table: VectorTable, word: str) -> np.ndarray:
    """Return the stored vector for ``word`` or raise UnknownWordError."""
    try:
        return table[word]
    except KeyError:
        raise UnknownWordError(word) from None


def distance(table: VectorTable, word: str, limit: int) -> List[WordDistance]:
    """Nearest neighbours of ``word``, excluding the word itself."""
    try:
        vec = lookup(table, word)
    except UnknownWordError:
        logger.log_query("distance", [word], limit, 0, "unknown_word")
        raise

    results = search(table, vec, frozenset([word]), limit)
    logger.log_query("distance", [word], limit, len(results))
    return results


def analogy(table: VectorTable, word1: str, word2: str, word3: str, limit: int) -> List[WordDistance]:
    """
    Nearest neighbours of ``word2 - word1 + word3`` ("word1 is to word2 as word3 is to ?").

    The combined query vector is not re-normalized, so scores rank correctly
    within one call but are not comparable across calls. All three operands
    are excluded from the results.

    Raises:
        UnknownWordError: For the first operand missing from the table
    """
    words = [word1, word2, word3]
    try:
        v1, v2, v3 = (lookup(table, w) for w in words)
    except UnknownWordError:
        logger.log_query("analogy", words, limit, 0, "unknown_word")
        raise

    results = search(table, combine(v1, v2, v3), frozenset(words), limit)
    logger.log_query("analogy", words, limit, len(results))
    return results
