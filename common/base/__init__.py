"""Low-level shared utilities for the prefix tools."""

from .logging import get_logger, setup_logging, shutdown_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "shutdown_logging",
]
