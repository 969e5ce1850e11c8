# =============================================================================
# File: sio_emitter/protocol/values.py
# Description: Argument value model - classification and normalization
# =============================================================================

"""
Argument Values

Event arguments are restricted to a closed set of variants (ValueKind).
normalize_value() walks an argument recursively, rejects anything outside
the set, and returns the plain structure msgpack packs:

    int / float / str / bool / None   -> unchanged
    list / tuple                      -> list
    dict with str keys                -> dict
    bytes / bytearray / memoryview    -> bytes

Cyclic or overly deep containers, non-string mapping keys, strings that
are not valid UTF-8 and integers outside the 64-bit range raise
UnencodableValue.
"""

from collections.abc import Mapping
from typing import Any, Iterable, Optional, Set

from sio_emitter.common.exceptions.exceptions import UnencodableValue
from sio_emitter.protocol.types import ValueKind

# msgpack integer range (int64 min .. uint64 max)
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 64 - 1

_BYTES_TYPES = (bytes, bytearray, memoryview)

# Container levels allowed inside one argument. The envelope adds three more,
# and msgpack refuses to pack past 511.
MAX_DEPTH = 256


def classify(value: Any) -> ValueKind:
    """Return the wire variant of a single value (non-recursive)."""
    # bool before int: bool is an int subclass
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, _BYTES_TYPES):
        return ValueKind.BYTES
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    raise UnencodableValue(
        f"Cannot encode value of type {type(value).__name__}",
        value_type=type(value).__name__,
    )


def check_text(text: str) -> str:
    """Reject strings msgpack cannot write as UTF-8 (lone surrogates)."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise UnencodableValue(
            f"String is not valid UTF-8: {e.reason} at position {e.start}",
            value_type="str",
        ) from e
    return text


def normalize_value(value: Any, _path: Optional[Set[int]] = None, _depth: int = 0) -> Any:
    """
    Validate and convert a value into its wire structure.

    Raises:
        UnencodableValue: if the value (or anything nested in it) is not
            one of the supported variants
    """
    kind = classify(value)

    if kind is ValueKind.INTEGER:
        if not INT_MIN <= value <= INT_MAX:
            raise UnencodableValue(
                f"Integer {value} is outside the 64-bit range",
                value_type="int",
            )
        return int(value)

    if kind is ValueKind.STRING:
        return check_text(value)

    if kind is ValueKind.BYTES:
        return bytes(value)

    if kind not in (ValueKind.SEQUENCE, ValueKind.MAPPING):
        return value

    if _depth >= MAX_DEPTH:
        raise UnencodableValue(
            f"Nesting deeper than {MAX_DEPTH} levels cannot be encoded",
            value_type=type(value).__name__,
        )

    if _path is None:
        _path = set()
    marker = id(value)
    if marker in _path:
        raise UnencodableValue(
            f"Cyclic {kind.value} cannot be encoded",
            value_type=type(value).__name__,
        )
    _path.add(marker)
    try:
        if kind is ValueKind.SEQUENCE:
            items = []
            for item in value:
                items.append(normalize_value(item, _path, _depth + 1))
            return items

        normalized = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnencodableValue(
                    f"Mapping keys must be strings, got {type(key).__name__}",
                    value_type=type(key).__name__,
                )
            normalized[check_text(key)] = normalize_value(item, _path, _depth + 1)
        return normalized
    finally:
        _path.discard(marker)


def normalize_args(args: Iterable[Any]) -> list:
    """Normalize an ordered argument sequence."""
    return [normalize_value(arg) for arg in args]


def has_binary(value: Any) -> bool:
    """True if a normalized value contains a bytes blob at any depth."""
    if isinstance(value, _BYTES_TYPES):
        return True
    if isinstance(value, Mapping):
        value = value.values()
    elif not isinstance(value, (list, tuple)):
        return False
    for item in value:
        if has_binary(item):
            return True
    return False
