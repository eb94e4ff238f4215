"""
Byte-bounded least-recently-used cache.

The recency order and the key index live in one ``OrderedDict``: the end of
the dict is the most recently used entry and the beginning is the next
eviction candidate. Every public operation is O(1) apart from the eviction
loop, which is O(k) for k evicted entries.

Not safe for concurrent access. Callers that share a cache between threads
must serialize every call themselves.
"""

import logging
from collections import OrderedDict
from typing import Any, Iterator, List, Optional, Tuple

from bytecache.cache_store.base import EvictionCallback, Value, key_size
from bytecache.cache_store.metrics import CacheMetrics
from bytecache.exceptions import ReentrantCallError
from bytecache.utils.logging import CacheEventLogger
from bytecache.utils.validation import measure_value, validate_key, validate_max_bytes

logger = logging.getLogger(__name__)


class _Entry:
    """A stored value together with the byte size measured when it was added."""

    __slots__ = ("value", "nbytes", "key_nbytes")

    def __init__(self, value: Value, nbytes: int, key_nbytes: int):
        self.value = value
        self.nbytes = nbytes
        self.key_nbytes = key_nbytes


class LRUCache:
    """
    In-process key/value store that evicts least-recently-used entries once the
    tracked bytes exceed ``max_bytes``.

    Each entry costs ``len(key.encode("utf-8")) + len(value)`` bytes. Both
    ``get`` and ``add`` mark an entry as most recently used.

    Args:
        max_bytes: Byte budget; 0 disables eviction entirely
        on_evicted: Optional callback invoked with ``(key, value)`` for every
            entry that leaves the cache. It runs synchronously after the cache
            is consistent again and must not call ``add``, ``remove_oldest``,
            ``remove`` or ``clear`` on the same cache; such calls raise
            ``ReentrantCallError``.
        name: Label used in log records

    Raises:
        ValidationError: If ``max_bytes`` is not a non-negative integer.
    """

    def __init__(
        self,
        max_bytes: int = 0,
        on_evicted: Optional[EvictionCallback] = None,
        name: str = "default",
    ):
        validate_max_bytes(max_bytes)
        self._max_bytes = max_bytes
        self._used_bytes = 0
        self._entries: "OrderedDict[str, _Entry]" = OrderedDict()
        self.on_evicted = on_evicted
        self.name = name

        self._in_callback = False
        self._events = CacheEventLogger(logger, cache_name=name)
        self._metrics = CacheMetrics(max_bytes=max_bytes)

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    @property
    def used_bytes(self) -> int:
        """Bytes currently tracked across all live entries."""
        return self._used_bytes

    def __len__(self) -> int:
        return len(self._entries)

    def size(self) -> int:
        """Number of live entries."""
        return len(self._entries)

    def __contains__(self, key: Any) -> bool:
        validate_key(key)
        return key in self._entries

    def __repr__(self) -> str:
        return (
            f"LRUCache(name={self.name!r}, entries={len(self._entries)}, "
            f"used_bytes={self._used_bytes}, max_bytes={self._max_bytes})"
        )

    def get(self, key: str) -> Tuple[Optional[Value], bool]:
        """
        Look up a key and mark it as most recently used.

        Returns:
            ``(value, True)`` if the key is present, ``(None, False)`` otherwise.
        """
        validate_key(key)
        entry = self._entries.get(key)
        if entry is None:
            self._metrics.misses += 1
            if self._events.enabled:
                self._events.log_cache_miss(key)
            return None, False

        self._entries.move_to_end(key)
        self._metrics.hits += 1
        if self._events.enabled:
            self._events.log_cache_hit(key)
        return entry.value, True

    def peek(self, key: str) -> Tuple[Optional[Value], bool]:
        """Look up a key without changing its recency or the hit counters."""
        validate_key(key)
        entry = self._entries.get(key)
        if entry is None:
            return None, False
        return entry.value, True

    def add(self, key: str, value: Value) -> None:
        """
        Insert or replace a value and mark its key as most recently used.

        Afterwards the oldest entries are evicted until the budget holds again.
        A value larger than the whole budget is still inserted first, so the
        loop evicts it (and everything else) and reports it to ``on_evicted``.

        Raises:
            ValidationError: If the key is not a string or the value cannot
                report a non-negative size.
            ReentrantCallError: If called from inside ``on_evicted``.
            Exception: The first error raised by ``on_evicted`` during the
                eviction loop, re-raised once the budget holds again.
        """
        self._check_not_in_callback("add")
        validate_key(key)
        nbytes = measure_value(value)
        key_nbytes = key_size(key)

        entry = self._entries.get(key)
        if entry is not None:
            self._entries.move_to_end(key)
            self._used_bytes += nbytes - entry.nbytes
            entry.value = value
            entry.nbytes = nbytes
        else:
            self._entries[key] = _Entry(value, nbytes, key_nbytes)
            self._used_bytes += key_nbytes + nbytes

        callback_error = None
        while self._max_bytes != 0 and self._used_bytes > self._max_bytes:
            try:
                self._evict_oldest()
            except Exception as e:
                # keep evicting so the budget holds; report the first callback failure
                if callback_error is None:
                    callback_error = e
        if callback_error is not None:
            raise callback_error

    def remove_oldest(self) -> Optional[Tuple[str, Value]]:
        """
        Evict the least recently used entry.

        Returns:
            The evicted ``(key, value)`` pair, or None if the cache was empty.
        """
        self._check_not_in_callback("remove_oldest")
        return self._evict_oldest()

    def remove(self, key: str) -> bool:
        """
        Evict a specific key, reporting it to ``on_evicted``.

        Returns:
            True if the key was present.
        """
        self._check_not_in_callback("remove")
        validate_key(key)
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        self._release(key, entry)
        return True

    def clear(self) -> None:
        """
        Evict every entry, oldest first, reporting each to ``on_evicted``.

        If the callback raises, the cache is still emptied and the first
        callback error is re-raised afterwards.
        """
        self._check_not_in_callback("clear")
        callback_error = None
        while self._entries:
            try:
                self._evict_oldest()
            except Exception as e:
                if callback_error is None:
                    callback_error = e
        if callback_error is not None:
            raise callback_error

    def oldest(self) -> Optional[Tuple[str, Value]]:
        """The next eviction candidate, without removing or promoting it."""
        if not self._entries:
            return None
        key = next(iter(self._entries))
        return key, self._entries[key].value

    def keys(self) -> List[str]:
        """Keys ordered from most to least recently used."""
        return list(reversed(self._entries))

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def get_metrics(self) -> CacheMetrics:
        """
        Get a snapshot of the cache counters.

        Returns:
            CacheMetrics: A copy; later cache activity does not change it
        """
        return CacheMetrics(
            hits=self._metrics.hits,
            misses=self._metrics.misses,
            evictions=self._metrics.evictions,
            current_size=len(self._entries),
            current_bytes=self._used_bytes,
            max_bytes=self._max_bytes,
        )

    def _evict_oldest(self) -> Optional[Tuple[str, Value]]:
        if not self._entries:
            return None
        key, entry = self._entries.popitem(last=False)
        self._release(key, entry)
        return key, entry.value

    def _release(self, key: str, entry: _Entry) -> None:
        # The entry is already out of the dict; settle accounting before the callback sees the cache.
        released = entry.key_nbytes + entry.nbytes
        self._used_bytes -= released
        self._metrics.evictions += 1
        if self._events.enabled:
            self._events.log_eviction(key, released, used_bytes=self._used_bytes)

        if self.on_evicted is not None:
            self._in_callback = True
            try:
                self.on_evicted(key, entry.value)
            finally:
                self._in_callback = False

    def _check_not_in_callback(self, operation: str) -> None:
        if self._in_callback:
            raise ReentrantCallError(
                f"{operation}() called from inside the eviction callback of cache {self.name!r}"
            )
