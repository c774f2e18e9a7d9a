"""
Exact top-k similarity search over a VectorTable.
"""

from typing import AbstractSet, List

import numpy as np

from .types import VECTOR_DTYPE, VectorTable, WordDistance


def dot_product(v: np.ndarray, w: np.ndarray) -> float:
    """Dot product of two equal-length vectors (cosine similarity for unit vectors)."""
    return float(np.dot(v, w))


def vector_norm(vec: np.ndarray) -> float:
    return float(np.sqrt(np.dot(vec, vec)))


def normalize(vec: np.ndarray) -> np.ndarray:
    """Return a float32 copy of ``vec`` divided by its Euclidean norm.

    A zero vector yields NaN components rather than an error.
    """
    vec = np.asarray(vec, dtype=VECTOR_DTYPE)
    length = VECTOR_DTYPE(np.sqrt(np.dot(vec, vec)))
    with np.errstate(divide="ignore", invalid="ignore"):
        return vec / length


def combine(v1: np.ndarray, v2: np.ndarray, v3: np.ndarray) -> np.ndarray:
    """Analogy query vector ``(v2 - v1) + v3``, not re-normalized."""
    return (np.asarray(v2, dtype=VECTOR_DTYPE) - v1) + v3


def insertion_point(results: List[WordDistance], score: float) -> int:
    """Index of the first result whose score is <= ``score`` (``len(results)`` if none)."""
    lo, hi = 0, len(results)
    while lo < hi:
        mid = (lo + hi) // 2
        if results[mid].score <= score:
            hi = mid
        else:
            lo = mid + 1
    return lo


def insert_with_limit(results: List[WordDistance], limit: int, index: int, value: WordDistance) -> None:
    """Insert ``value`` at ``index`` and drop whatever falls past ``limit``."""
    results.insert(index, value)
    if len(results) > limit:
        results.pop()


def search(table: VectorTable, query_vector: np.ndarray, skip: AbstractSet[str], k: int) -> List[WordDistance]:
    """Return the ``k`` table entries most similar to ``query_vector``.

    Walks the table once, keeping a buffer of at most ``k`` results sorted by
    descending score. Each candidate goes to the first slot whose score is
    <= its own, so a newcomer ties ahead of existing equal scores; candidates
    that would land at or past slot ``k`` are dropped.

    Args:
        table: Table to search
        query_vector: Query of length ``table.dimension``
        skip: Words excluded from the candidates
        k: Maximum number of results

    Returns:
        Up to ``k`` WordDistance entries, best first
    """
    results: List[WordDistance] = []
    if k <= 0 or len(table) == 0:
        return results

    query = np.asarray(query_vector, dtype=VECTOR_DTYPE)
    if query.shape != (table.dimension,):
        raise ValueError(f"Query dimension {query.shape} does not match table dimension {table.dimension}")

    scores = table.matrix @ query

    for word, score in zip(table, scores.tolist()):
        if word in skip:
            continue

        ip = insertion_point(results, score)
        if ip < k:
            insert_with_limit(results, k, ip, WordDistance(word, score))

    return results
