"""
Word vector loading and exact nearest-neighbour queries.
"""

# Package initialization for vector module
from .errors import VectorError, FormatError, UnknownWordError, DegenerateVectorError
from .types import VectorTable, WordDistance
from .reader import decode, load_vectors
from .writer import encode, save_vectors
from .search import search, dot_product, normalize
from .query import distance, analogy

__all__ = [
    'VectorError',
    'FormatError',
    'UnknownWordError',
    'DegenerateVectorError',
    'VectorTable',
    'WordDistance',
    'decode',
    'load_vectors',
    'encode',
    'save_vectors',
    'search',
    'dot_product',
    'normalize',
    'distance',
    'analogy'
]
