"""
Binary word2vec-style vector file decoding.

Layout:
    <nWords> <vSize>
    nWords times: <word bytes><space><vSize little-endian float32>
"""

import time
from typing import BinaryIO, Dict, List, Optional

import numpy as np

from ..core.config import get_encoding, reject_degenerate_enabled
from ..util.logging import logger
from .errors import DegenerateVectorError, FormatError
from .search import normalize, vector_norm
from .types import VECTOR_DTYPE, VectorTable

FLOAT_SIZE = 4
FLOAT_DTYPE = np.dtype("<f4")

# Largest single read; a bogus header size must not turn into one huge allocation
READ_CHUNK = 1 << 20


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes or fail on a short read."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(min(remaining, READ_CHUNK))
        if not chunk:
            raise FormatError(f"Unexpected end of data: wanted {size} bytes, got {size - remaining}")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def _read_header_int(stream: BinaryIO, name: str) -> int:
    """Read one whitespace-delimited unsigned decimal from the header."""
    b = stream.read(1)
    while b and b.isspace():
        b = stream.read(1)

    digits = bytearray()
    while b and b.isdigit():
        digits += b
        b = stream.read(1)

    if not digits:
        raise FormatError(f"Cannot parse {name} in vector file header")
    if b and not b.isspace():
        raise FormatError(f"Cannot parse {name} in vector file header: unexpected byte {b!r}")
    return int(digits)


def _read_word(stream: BinaryIO, encoding: str) -> str:
    buf = bytearray()
    while True:
        b = stream.read(1)
        if not b:
            raise FormatError("Unexpected end of data while reading word")
        if b == b" ":
            break
        buf += b
    # surrogateescape keeps arbitrary bytes round-trippable
    return buf.decode(encoding, "surrogateescape").strip()


def decode(stream: BinaryIO, reject_degenerate: Optional[bool] = None, encoding: Optional[str] = None) -> VectorTable:
    """
    Decode a binary vector file into a normalized VectorTable.

    Args:
        stream: Binary file-like object positioned at the header
        reject_degenerate: Raise on zero-norm vectors instead of keeping NaN
            components; defaults to the WORDVEC_REJECT_DEGENERATE setting
        encoding: Word token encoding, defaults to WORDVEC_ENCODING

    Returns:
        The loaded table. A repeated word keeps its last vector.

    Raises:
        FormatError: Header unparsable or data truncated
        DegenerateVectorError: Zero-norm vector with rejection enabled
    """
    if reject_degenerate is None:
        reject_degenerate = reject_degenerate_enabled()
    encoding = encoding or get_encoding()

    n_words = _read_header_int(stream, "word count")
    v_size = _read_header_int(stream, "vector size")

    rows: List[np.ndarray] = []
    index: Dict[str, int] = {}

    for _ in range(n_words):
        word = _read_word(stream, encoding)
        data = _read_exact(stream, v_size * FLOAT_SIZE)
        vec = np.frombuffer(data, dtype=FLOAT_DTYPE).astype(VECTOR_DTYPE)

        if vector_norm(vec) == 0:
            if reject_degenerate:
                logger.log_degenerate_vector(word, "rejected")
                raise DegenerateVectorError(word)
            logger.log_degenerate_vector(word)

        vec = normalize(vec)

        if word in index:
            rows[index[word]] = vec
        else:
            index[word] = len(rows)
            rows.append(vec)

    if rows:
        matrix = np.vstack(rows)
    else:
        matrix = np.zeros((0, v_size), dtype=VECTOR_DTYPE)

    return VectorTable(list(index), matrix, v_size, copy=False)


def load_vectors(path, reject_degenerate: Optional[bool] = None, encoding: Optional[str] = None) -> VectorTable:
    """Open ``path`` in binary mode and decode it."""
    start_time = time.time()
    try:
        with open(path, "rb") as f:
            table = decode(f, reject_degenerate=reject_degenerate, encoding=encoding)
    except Exception as e:
        logger.log_load(path, start_time, time.time(), "failed", {"error": str(e)})
        raise

    logger.log_load(path, start_time, time.time(), details={
        "words": len(table),
        "dimension": table.dimension
    })
    return table
