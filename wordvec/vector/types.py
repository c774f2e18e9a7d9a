"""
Word vector table and search result types.
The table is built once at load time and is read-only afterwards.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

import numpy as np

# float32, one row per word
VECTOR_DTYPE = np.float32


@dataclass(frozen=True)
class WordDistance:
    """A single ranked search result."""

    word: str
    """The matching word"""

    score: float
    """Similarity of the word's vector to the query vector"""


class VectorTable(Mapping):
    """Immutable mapping from word to unit-length embedding vector.

    Vectors are stored row-stacked in a single float32 matrix so a query can
    score every entry with one matrix-vector product. Rows are flagged
    non-writeable; lookups return read-only views.
    """

    def __init__(self, words: List[str], matrix: np.ndarray, dimension: Optional[int] = None, copy: bool = True):
        if matrix.ndim != 2:
            raise ValueError(f"Expected a 2-D vector matrix, got {matrix.ndim}-D")
        if len(words) != matrix.shape[0]:
            raise ValueError(f"Got {len(words)} words for {matrix.shape[0]} vectors")
        if dimension is not None and matrix.shape[1] != dimension:
            raise ValueError(f"Vector dimension {matrix.shape[1]} does not match expected dimension {dimension}")

        self._words = list(words)
        self._index = {word: i for i, word in enumerate(self._words)}
        if len(self._index) != len(self._words):
            raise ValueError("Duplicate words in vector table")

        if copy:
            self._matrix = np.array(matrix, dtype=VECTOR_DTYPE)
        else:
            # takes ownership; the caller must not keep writing to it
            self._matrix = np.ascontiguousarray(matrix, dtype=VECTOR_DTYPE)
        self._matrix.flags.writeable = False

    @classmethod
    def from_vectors(cls, vectors: Dict[str, object], dimension: Optional[int] = None) -> "VectorTable":
        """Build a table from raw (unnormalized) vectors, normalizing each once."""
        from .search import normalize

        rows = [normalize(np.asarray(vec, dtype=VECTOR_DTYPE)) for vec in vectors.values()]
        if rows:
            matrix = np.vstack(rows)
        else:
            matrix = np.zeros((0, dimension or 0), dtype=VECTOR_DTYPE)
        return cls(list(vectors.keys()), matrix, dimension, copy=False)

    @property
    def dimension(self) -> int:
        return self._matrix.shape[1]

    @property
    def words(self) -> List[str]:
        return list(self._words)

    @property
    def matrix(self) -> np.ndarray:
        """Read-only ``len(table) x dimension`` array, rows in table order."""
        return self._matrix

    def __getitem__(self, word: str) -> np.ndarray:
        return self._matrix[self._index[word]]

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self):
        return f"VectorTable(words={len(self)}, dimension={self.dimension})"
