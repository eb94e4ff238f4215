"""
Validated settings for building caches.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from bytecache.cache_store.base import EvictionCallback
from bytecache.cache_store.lru import LRUCache
from bytecache.exceptions import ConfigurationError


class CacheConfig(BaseModel):
    """
    Configuration for an LRUCache.

    Raises:
        ConfigurationError: If the settings do not validate.
    """
    max_bytes: int = Field(0, ge=0, description="Byte budget; 0 means unbounded")
    name: str = Field("default", min_length=1, description="Label used in log records")

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise ConfigurationError("Invalid cache configuration", e) from e

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "CacheConfig":
        """
        Build a config from a plain mapping, e.g. a section of an app config file.

        Raises:
            ConfigurationError: If the settings do not validate.
        """
        return cls(**dict(settings))

    def build(self, on_evicted: Optional[EvictionCallback] = None) -> LRUCache:
        """Create an empty cache with these settings."""
        return LRUCache(max_bytes=self.max_bytes, on_evicted=on_evicted, name=self.name)
