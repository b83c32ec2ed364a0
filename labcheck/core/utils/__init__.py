"""
Shared utilities for caching and logging.

This module provides reusable utilities that can be used across the codebase
to avoid code duplication and ensure consistent behavior.
"""

from labcheck.core.utils.caching import ExpiringCache
from labcheck.core.utils.logging import configure_logging, log_operation

__all__ = [
    "ExpiringCache",
    "configure_logging",
    "log_operation",
]
