"""
Typed failures for vector loading and word lookup.
"""


class VectorError(Exception):
    """Base class for all vector table errors."""
    pass


class FormatError(VectorError):
    """The vector file header is unparsable or the data is truncated."""
    pass


class UnknownWordError(VectorError, KeyError):
    """A query referenced a word that is not in the table."""

    def __init__(self, word: str):
        super().__init__(word)
        self.word = word

    def __str__(self):
        return f"Unknown word: {self.word}"


class DegenerateVectorError(VectorError):
    """A vector has zero length and cannot be normalized."""

    def __init__(self, word: str):
        super().__init__(word)
        self.word = word

    def __str__(self):
        return f"Zero-norm vector for word: {self.word}"
