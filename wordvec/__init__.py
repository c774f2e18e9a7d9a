"""
wordvec - word embedding distance and analogy queries.
"""

from .core.config import VERSION

__version__ = VERSION
