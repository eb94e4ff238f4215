"""
Ready-made value types for the cache.

Each type copies its input on construction so a cached value cannot be changed
behind the cache's back, which would leave the byte accounting stale.
"""

from typing import Any, Union

import numpy as np
import numpy.typing as npt

from bytecache.exceptions import ValidationError
from bytecache.utils.validation import validate_size


class ByteView:
    """
    Immutable view over a chunk of bytes.

    Args:
        data: Bytes to hold; ``str`` is encoded as UTF-8
    """

    __slots__ = ("_data",)

    def __init__(self, data: Union[bytes, bytearray, memoryview, str]):
        if isinstance(data, str):
            data = data.encode("utf-8")
        elif not isinstance(data, (bytes, bytearray, memoryview)):
            raise ValidationError(
                f"ByteView requires bytes-like or str data, got {type(data).__name__}."
            )
        self._data = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    def as_bytes(self) -> bytes:
        return self._data

    def as_bytearray(self) -> bytearray:
        """Return a mutable copy; changing it does not affect the view."""
        return bytearray(self._data)

    def __str__(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"ByteView({self._data!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ByteView):
            return self._data == other._data
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._data)


class ArrayView:
    """
    Read-only numpy array, sized by ``ndarray.nbytes``.

    Useful for caching embeddings or other numeric results next to byte blobs.

    Args:
        array: Array-like input; it is copied into a fresh contiguous array
        dtype: Optional dtype to convert to
    """

    __slots__ = ("_array",)

    def __init__(self, array: npt.ArrayLike, dtype: Any = None):
        copied = np.array(array, dtype=dtype, copy=True)
        copied.setflags(write=False)
        self._array = copied

    def __len__(self) -> int:
        return int(self._array.nbytes)

    @property
    def array(self) -> np.ndarray:
        """The cached array; writes to it raise ``ValueError``."""
        return self._array

    @property
    def shape(self):
        return self._array.shape

    @property
    def dtype(self):
        return self._array.dtype

    def __repr__(self) -> str:
        return f"ArrayView(shape={self._array.shape}, dtype={self._array.dtype}, nbytes={len(self)})"


class SizedValue:
    """
    Any object paired with an explicit byte size.

    Use it when the stored object cannot measure itself. The size is trusted
    as given.

    Args:
        value: Object to store
        nbytes: Bytes the object should count for
    """

    __slots__ = ("value", "nbytes")

    def __init__(self, value: Any, nbytes: int):
        validate_size(nbytes, what="nbytes")
        self.value = value
        self.nbytes = nbytes

    def __len__(self) -> int:
        return self.nbytes

    def __repr__(self) -> str:
        return f"SizedValue({self.value!r}, nbytes={self.nbytes})"
