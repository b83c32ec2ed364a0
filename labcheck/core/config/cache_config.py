"""
Cache configuration.

Defines configurable settings for the hydrated-exercise cache.
"""

from dataclasses import dataclass


@dataclass
class CacheConfig:
    """Cache configuration."""

    maxsize: int = 1024
    ttl: int = 60  # seconds; exercises are re-read from their source after this

    # Master switch; a disabled cache hydrates on every lookup
    enable_cache: bool = True
