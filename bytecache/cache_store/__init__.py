"""
Cache store package for bytecache.

Contains the LRU engine, the value capability protocol and ready-made value types.
"""

# Base types
from .base import Value, EvictionCallback, key_size, entry_size

# Engine
from .lru import LRUCache
from .metrics import CacheMetrics

# Values
from .values import ByteView, ArrayView, SizedValue

__all__ = [
    # Base types
    "Value",
    "EvictionCallback",
    "key_size",
    "entry_size",
    # Engine
    "LRUCache",
    "CacheMetrics",
    # Values
    "ByteView",
    "ArrayView",
    "SizedValue",
]
