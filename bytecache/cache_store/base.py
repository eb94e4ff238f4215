"""
Capability types shared by the cache engine and the value wrappers.
"""

from typing import Callable

from typing_extensions import Protocol, TypeAlias, runtime_checkable


@runtime_checkable
class Value(Protocol):
    """
    Anything the cache can store.

    A value reports how many bytes it occupies through ``__len__``. The size is
    read once when the value is added and is assumed stable afterwards; the
    cache never re-measures it. ``bytes``, ``bytearray`` and the wrappers in
    ``bytecache.cache_store.values`` all qualify.
    """

    def __len__(self) -> int:
        ...


EvictionCallback: TypeAlias = Callable[[str, Value], None]
"""Invoked with the key and value of every entry that leaves the cache."""


def key_size(key: str) -> int:
    """
    Bytes a key contributes: the length of its UTF-8 encoding.

    Lone surrogates (e.g. from ``os.fsdecode``) are counted as their 3-byte
    encoded form instead of failing.
    """
    return len(key.encode("utf-8", errors="surrogatepass"))


def entry_size(key: str, value: Value) -> int:
    """Bytes an entry contributes to the cache's budget."""
    return key_size(key) + len(value)
