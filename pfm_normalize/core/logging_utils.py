"""Logging utilities for consistent status messages."""

import logging
import sys
from typing import Optional


class StatusLogger:
    """Simple status logger with consistent formatting.

    Provides methods for success, error, warning and info messages
    with consistent prefixes for easy parsing and reading.
    """

    def __init__(self, name: str = "pfm_normalize", verbose: bool = True):
        """Initialize the status logger.

        Args:
            name: Logger name for Python logging integration
            verbose: If False, suppresses info messages
        """
        self.verbose = verbose
        self._logger = logging.getLogger(name)

        # Configure handler if not already configured
        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter('%(message)s'))
            self._logger.addHandler(handler)
            self._logger.setLevel(logging.DEBUG)

    def success(self, message: str, indent: int = 0) -> None:
        """Log a success message with [OK] prefix.

        Args:
            message: The message to log
            indent: Number of spaces to indent
        """
        prefix = " " * indent
        self._logger.info(f"{prefix}[OK] {message}")

    def error(self, message: str, indent: int = 0) -> None:
        """Log an error message with [ERROR] prefix."""
        prefix = " " * indent
        self._logger.error(f"{prefix}[ERROR] {message}")

    def warning(self, message: str, indent: int = 0) -> None:
        """Log a warning message with [WARNING] prefix."""
        prefix = " " * indent
        self._logger.warning(f"{prefix}[WARNING] {message}")

    def info(self, message: str, indent: int = 0) -> None:
        """Log an info message (respects verbose setting).

        Args:
            message: The message to log
            indent: Number of spaces to indent
        """
        if self.verbose:
            prefix = " " * indent
            self._logger.info(f"{prefix}{message}")

    def set_verbose(self, verbose: bool) -> None:
        """Set verbose mode.

        Args:
            verbose: If False, info messages are suppressed
        """
        self.verbose = verbose


# Global default logger instance
_default_logger: Optional[StatusLogger] = None


def get_logger(verbose: Optional[bool] = None) -> StatusLogger:
    """Get the default status logger instance.

    Args:
        verbose: If given, updates the verbose setting of the shared logger

    Returns:
        StatusLogger instance
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = StatusLogger(verbose=True if verbose is None else verbose)
    elif verbose is not None:
        _default_logger.set_verbose(verbose)
    return _default_logger
