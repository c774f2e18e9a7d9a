"""
Structured logging for vector loading and query operations.
"""

import logging
from typing import Any, Dict

from ..core.config import get_log_level


class StructuredLogger:
    """Structured logger for load and query operations."""

    def __init__(self, name: str = "wordvec"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, get_log_level(), logging.INFO))

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_load(self, path: str, start_time: float, end_time: float, status: str = "success", details: Dict[str, Any] = None):
        """Log a vector file load."""
        duration_ms = round((end_time - start_time) * 1000, 2)
        log_details = {"path": str(path), "duration_ms": duration_ms}
        if details:
            log_details.update(details)

        level = logging.INFO if status == "success" else logging.ERROR
        self.log_operation("vectors.load", status, log_details, level)

    def log_query(self, query_type: str, words, limit: int, result_count: int, status: str = "success"):
        """Log a distance or analogy query."""
        log_details = {
            "words": list(words),
            "limit": limit,
            "results": result_count
        }
        level = logging.DEBUG if status == "success" else logging.WARNING
        self.log_operation(f"query.{query_type}", status, log_details, level)

    def log_degenerate_vector(self, word: str, action: str = "propagated"):
        """Log a zero-norm vector found during decoding."""
        # Truncate very long tokens
        shown = word[:47] + "..." if len(word) > 50 else word
        self.log_operation("vectors.degenerate", action, {"word": shown}, logging.WARNING)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()
