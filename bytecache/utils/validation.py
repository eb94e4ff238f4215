from typing import Any

import numpy as np

from bytecache.exceptions import ValidationError

# Types whose __len__ counts items rather than bytes, with the wrapper to use instead
_ITEM_COUNTED = (
    (str, "wrap text in ByteView"),
    (np.ndarray, "wrap arrays in ArrayView"),
    (memoryview, "wrap it in ByteView"),
    ((list, tuple, dict, set, frozenset), "wrap containers in SizedValue"),
)

def validate_key(key: Any):
    """Ensures the key is a string."""
    if not isinstance(key, str):
        raise ValidationError(f"Key must be a string, got {type(key).__name__}.")

def validate_max_bytes(max_bytes: Any):
    """Ensures the byte budget is a non-negative integer (0 means unbounded)."""
    if isinstance(max_bytes, bool) or not isinstance(max_bytes, int):
        raise ValidationError("max_bytes must be an integer.")

    if max_bytes < 0:
        raise ValidationError("max_bytes must be non-negative.")

def validate_size(size: Any, what: str = "Value size"):
    """Checks that a reported size is a non-negative integer."""
    if isinstance(size, bool) or not isinstance(size, int):
        raise ValidationError(f"{what} must be an integer, got {type(size).__name__}.")

    if size < 0:
        raise ValidationError(f"{what} must be non-negative, got {size}.")

def measure_value(value: Any) -> int:
    """
    Returns the byte size a value reports through ``__len__``.

    Raises:
        ValidationError: If the value cannot report a size or reports a bad one.
    """
    for kinds, hint in _ITEM_COUNTED:
        if isinstance(value, kinds):
            raise ValidationError(
                f"Value of type {type(value).__name__} does not report its size in bytes; {hint}."
            )

    try:
        size = len(value)
    except TypeError as e:
        raise ValidationError(
            f"Value of type {type(value).__name__} does not report its size in bytes."
        ) from e
    except ValueError as e:
        # len() rejects negative __len__ results itself
        raise ValidationError(f"Value size must be non-negative ({e}).") from e

    validate_size(size)
    return size
