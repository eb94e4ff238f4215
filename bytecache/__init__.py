"""
bytecache - Byte-Bounded LRU Cache
==================================

An in-process key/value store that evicts least-recently-used entries once a
byte budget is exceeded.
"""

__version__ = "0.1.0"

from .cache_store import (
    LRUCache,
    CacheMetrics,
    Value,
    EvictionCallback,
    ByteView,
    ArrayView,
    SizedValue,
)
from .config import CacheConfig
from .exceptions import (
    ByteCacheError,
    ConfigurationError,
    ValidationError,
    CacheOperationError,
    ReentrantCallError,
)
from .utils.logging import get_logger, initialize_logging

__all__ = [
    "LRUCache",
    "CacheMetrics",
    "Value",
    "EvictionCallback",
    "ByteView",
    "ArrayView",
    "SizedValue",
    "CacheConfig",
    "ByteCacheError",
    "ConfigurationError",
    "ValidationError",
    "CacheOperationError",
    "ReentrantCallError",
    "get_logger",
    "initialize_logging",
]
