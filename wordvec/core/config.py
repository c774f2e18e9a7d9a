"""
Runtime configuration for vector loading and querying.
All settings come from environment variables with safe defaults.
"""

import os

# Vector file location (the classic word2vec output name)
VECTORS_PATH = os.getenv("WORDVEC_VECTORS_PATH", "./vectors.bin")

# Default number of neighbours per query (WORDVEC_TOP_K overrides)
TOP_K = 10

# Zero-norm vectors: false propagates NaN, true raises DegenerateVectorError
REJECT_DEGENERATE = os.getenv("WORDVEC_REJECT_DEGENERATE", "false").lower() == "true"

# Encoding of word tokens in the vector file
ENCODING = os.getenv("WORDVEC_ENCODING", "utf-8")

LOG_LEVEL = os.getenv("WORDVEC_LOG_LEVEL", "INFO").upper()
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# Version string
VERSION = "0.1.0"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_vectors_path():
    """Get the default vector file path."""
    return os.getenv("WORDVEC_VECTORS_PATH", VECTORS_PATH)


def get_top_k():
    """Get the default result limit."""
    return int(os.getenv("WORDVEC_TOP_K", str(TOP_K)))


def reject_degenerate_enabled():
    """Check if zero-norm vectors should fail the load."""
    return os.getenv("WORDVEC_REJECT_DEGENERATE", "false").lower() == "true"


def get_encoding():
    """Get the word token encoding."""
    return os.getenv("WORDVEC_ENCODING", ENCODING)


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def get_log_level():
    """Get the effective log level name. DEBUG=true wins over WORDVEC_LOG_LEVEL."""
    if debug_enabled():
        return "DEBUG"
    return os.getenv("WORDVEC_LOG_LEVEL", LOG_LEVEL).upper()


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    top_k = os.getenv("WORDVEC_TOP_K", str(TOP_K))
    try:
        if int(top_k) < 0:
            issues.append("WORDVEC_TOP_K must be >= 0")
    except ValueError:
        issues.append(f"Invalid WORDVEC_TOP_K: {top_k}")

    level = get_log_level()
    if level not in VALID_LOG_LEVELS:
        issues.append(f"Invalid WORDVEC_LOG_LEVEL: {level}")

    try:
        "".encode(get_encoding())
    except LookupError:
        issues.append(f"Unknown WORDVEC_ENCODING: {get_encoding()}")

    return issues
