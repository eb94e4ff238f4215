import numpy as np
import pytest

from bytecache.cache_store import ByteView, ArrayView, SizedValue, Value, LRUCache
from bytecache.exceptions import ValidationError


class TestByteView:

    def test_len_is_byte_length(self):
        assert len(ByteView(b"hello")) == 5
        assert len(ByteView("héllo")) == 6

    def test_input_is_copied(self):
        raw = bytearray(b"abc")
        view = ByteView(raw)
        raw[0] = ord("z")
        assert view.as_bytes() == b"abc"

    def test_bytearray_copy_is_independent(self):
        view = ByteView(b"abc")
        copy = view.as_bytearray()
        copy[0] = ord("z")
        assert view.as_bytes() == b"abc"

    def test_str_decodes_utf8(self):
        assert str(ByteView("héllo")) == "héllo"

    def test_equality_and_hash(self):
        assert ByteView(b"x") == ByteView("x")
        assert hash(ByteView(b"x")) == hash(ByteView(b"x"))
        assert ByteView(b"x") != ByteView(b"y")

    def test_rejects_other_types(self):
        with pytest.raises(ValidationError, match="bytes-like or str"):
            ByteView(123)


class TestArrayView:

    def test_len_is_nbytes(self):
        view = ArrayView(np.zeros((4, 8), dtype=np.float32))
        assert len(view) == 4 * 8 * 4
        assert view.shape == (4, 8)
        assert view.dtype == np.float32

    def test_dtype_conversion(self):
        view = ArrayView([1, 2, 3], dtype=np.int8)
        assert len(view) == 3

    def test_array_is_read_only_copy(self):
        source = np.arange(5)
        view = ArrayView(source)
        source[0] = 99
        assert view.array[0] == 0
        with pytest.raises(ValueError):
            view.array[0] = 1

    def test_cache_accounts_array_bytes(self):
        cache = LRUCache(max_bytes=100)
        cache.add("emb", ArrayView(np.ones(16, dtype=np.float32)))
        assert cache.used_bytes == 3 + 64


class TestSizedValue:

    def test_reports_given_size(self):
        payload = {"any": "object"}
        value = SizedValue(payload, 42)
        assert len(value) == 42
        assert value.value is payload

    @pytest.mark.parametrize("bad", [-1, 2.5, "3"])
    def test_rejects_bad_sizes(self, bad):
        with pytest.raises(ValidationError):
            SizedValue(None, bad)


@pytest.mark.parametrize("value", [b"", bytearray(), ByteView(b""), SizedValue(None, 0)])
def test_value_protocol_is_satisfied(value):
    assert isinstance(value, Value)


def test_value_protocol_rejects_unsized_objects():
    assert not isinstance(42, Value)
