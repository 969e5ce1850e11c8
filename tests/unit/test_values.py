# =============================================================================
# File: tests/unit/test_values.py
# Description: Argument classification and normalization
# =============================================================================

import pytest

from sio_emitter.common.exceptions.exceptions import UnencodableValue
from sio_emitter.protocol.types import ValueKind
from sio_emitter.protocol.values import (
    MAX_DEPTH,
    classify,
    has_binary,
    normalize_args,
    normalize_value,
)


@pytest.mark.unit
class TestClassify:

    @pytest.mark.parametrize("value,kind", [
        (1, ValueKind.INTEGER),
        (1.5, ValueKind.FLOAT),
        ("a", ValueKind.STRING),
        (True, ValueKind.BOOLEAN),
        (None, ValueKind.NULL),
        ([1], ValueKind.SEQUENCE),
        ((1,), ValueKind.SEQUENCE),
        ({"a": 1}, ValueKind.MAPPING),
        (b"\x00", ValueKind.BYTES),
        (bytearray(b"x"), ValueKind.BYTES),
    ])
    def test_supported_kinds(self, value, kind):
        assert classify(value) is kind

    def test_bool_is_not_integer(self):
        assert classify(False) is ValueKind.BOOLEAN

    @pytest.mark.parametrize("value", [object(), {1, 2}, lambda: None])
    def test_unsupported_kinds(self, value):
        with pytest.raises(UnencodableValue):
            classify(value)


@pytest.mark.unit
class TestNormalizeValue:

    def test_nested_structure(self):
        value = {"user": {"id": 7, "tags": ("a", "b")}, "blob": bytearray(b"\x01")}
        assert normalize_value(value) == {
            "user": {"id": 7, "tags": ["a", "b"]},
            "blob": b"\x01",
        }

    def test_memoryview_becomes_bytes(self):
        assert normalize_value(memoryview(b"abc")) == b"abc"

    def test_cyclic_list_rejected(self):
        cyclic = []
        cyclic.append(cyclic)
        with pytest.raises(UnencodableValue):
            normalize_value(cyclic)

    def test_cyclic_dict_rejected(self):
        cyclic = {}
        cyclic["self"] = cyclic
        with pytest.raises(UnencodableValue):
            normalize_value(cyclic)

    def test_shared_reference_is_not_a_cycle(self):
        """The same object twice side by side is a DAG, not a cycle."""
        shared = [1, 2]
        assert normalize_value([shared, shared]) == [[1, 2], [1, 2]]

    def test_non_string_key_rejected(self):
        with pytest.raises(UnencodableValue) as exc_info:
            normalize_value({1: "a"})
        assert exc_info.value.value_type == "int"

    @pytest.mark.parametrize("value", [2 ** 64, -(2 ** 63) - 1])
    def test_integer_out_of_range(self, value):
        with pytest.raises(UnencodableValue):
            normalize_value(value)

    @pytest.mark.parametrize("value", [2 ** 64 - 1, -(2 ** 63)])
    def test_integer_bounds_accepted(self, value):
        assert normalize_value(value) == value

    def test_nested_function_rejected(self):
        with pytest.raises(UnencodableValue) as exc_info:
            normalize_args([1, {"cb": print}])
        assert exc_info.value.value_type == "builtin_function_or_method"


@pytest.mark.unit
class TestHasBinary:

    def test_flat_args(self):
        assert has_binary([1, "a", None]) is False
        assert has_binary([1, b"x"]) is True

    def test_nested_in_mapping(self):
        assert has_binary([{"file": {"data": b"\xff"}}]) is True

    def test_string_is_not_binary(self):
        assert has_binary(["bytes"]) is False


def _nested_list(depth):
    value = []
    for _ in range(depth - 1):
        value = [value]
    return value


@pytest.mark.unit
class TestValueLimits:

    def test_lone_surrogate_string_rejected(self):
        with pytest.raises(UnencodableValue) as exc_info:
            normalize_value("\ud800")
        assert exc_info.value.value_type == "str"

    def test_lone_surrogate_mapping_key_rejected(self):
        with pytest.raises(UnencodableValue):
            normalize_value({"ok": 1, "\udcff": 2})

    def test_nesting_at_limit_accepted(self):
        assert normalize_value(_nested_list(MAX_DEPTH)) == _nested_list(MAX_DEPTH)

    @pytest.mark.parametrize("depth", [MAX_DEPTH + 1, 5000])
    def test_nesting_past_limit_rejected(self, depth):
        with pytest.raises(UnencodableValue):
            normalize_value(_nested_list(depth))

    def test_deep_mapping_rejected(self):
        value = {}
        for _ in range(MAX_DEPTH + 1):
            value = {"child": value}
        with pytest.raises(UnencodableValue):
            normalize_value(value)
