"""
Binary vector file encoding, the inverse of reader.decode.
"""

from typing import BinaryIO, List, Mapping, Optional, Tuple

import numpy as np

from ..core.config import get_encoding
from ..util.logging import logger

FLOAT_DTYPE = np.dtype("<f4")


def _prepare_rows(vectors: Mapping[str, object], encoding: str) -> Tuple[List[Tuple[bytes, np.ndarray]], int]:
    """Check and encode every entry up front so nothing is written for a bad table."""
    rows = []
    dimension = None
    for word, vec in vectors.items():
        if not word or any(ch.isspace() for ch in word):
            raise ValueError(f"Word must be non-empty and contain no whitespace: {word!r}")

        vec = np.asarray(vec, dtype=FLOAT_DTYPE).ravel()
        if dimension is None:
            dimension = len(vec)
        elif len(vec) != dimension:
            raise ValueError(f"Vector dimension {len(vec)} does not match expected dimension {dimension}")

        rows.append((word.encode(encoding, "surrogateescape"), vec))

    if dimension is None:
        dimension = getattr(vectors, "dimension", 0)
    return rows, dimension


def _write_rows(rows, dimension: int, stream: BinaryIO, newline: bool) -> int:
    written = stream.write(f"{len(rows)} {dimension}\n".encode("ascii"))
    for word, vec in rows:
        written += stream.write(word + b" ")
        written += stream.write(vec.tobytes())
        if newline:
            written += stream.write(b"\n")
    return written


def encode(vectors: Mapping[str, object], stream: BinaryIO, encoding: Optional[str] = None, newline: bool = True) -> int:
    """
    Write ``vectors`` to ``stream`` in the binary vector format.

    Vectors are written as given; nothing is normalized here. Every entry is
    validated before the first byte goes out.

    Args:
        vectors: Mapping of word to equal-length vectors (a VectorTable works)
        stream: Binary file-like object
        encoding: Word token encoding, defaults to WORDVEC_ENCODING
        newline: Emit a newline after each vector like the word2vec tool does

    Returns:
        Number of bytes written

    Raises:
        ValueError: A word is empty or contains whitespace, or dimensions differ
    """
    rows, dimension = _prepare_rows(vectors, encoding or get_encoding())
    return _write_rows(rows, dimension, stream, newline)


def save_vectors(vectors: Mapping[str, object], path, encoding: Optional[str] = None) -> None:
    """Write ``vectors`` to the file at ``path``. The file is untouched if validation fails."""
    rows, dimension = _prepare_rows(vectors, encoding or get_encoding())
    with open(path, "wb") as f:
        size = _write_rows(rows, dimension, f, newline=True)
    logger.log_operation("vectors.save", "success", {"path": str(path), "words": len(rows), "bytes": size})
