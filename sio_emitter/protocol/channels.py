# =============================================================================
# File: sio_emitter/protocol/channels.py
# Description: Channel naming shared with the receiving adapters
# =============================================================================

"""
Channel grammar:

    <key>#<namespace>#               broadcast to a namespace
    <key>#<namespace>#<target>#      broadcast to a room / socket id

The namespace always starts with "/". Derivation is pure.
"""

from typing import Optional

from sio_emitter.config.emitter_config import CHANNEL_DELIMITER, DEFAULT_KEY
from sio_emitter.protocol.types import ROOT_NAMESPACE


def normalize_namespace(name: Optional[str]) -> str:
    """"" and None map to the root namespace; a leading "/" is added if missing."""
    if not name:
        return ROOT_NAMESPACE
    _check_segment(name, "namespace")
    return name if name.startswith("/") else f"/{name}"


def normalize_target(target: Optional[str]) -> Optional[str]:
    """"" and None mean no target."""
    if not target:
        return None
    _check_segment(target, "target")
    return target


def channel_name(key: str = DEFAULT_KEY,
                 namespace: str = ROOT_NAMESPACE,
                 target: Optional[str] = None) -> str:
    channel = f"{key}{CHANNEL_DELIMITER}{namespace}{CHANNEL_DELIMITER}"
    if target:
        channel += f"{target}{CHANNEL_DELIMITER}"
    return channel


def _check_segment(value: str, what: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{what} must be a string, got {type(value).__name__}")
    if CHANNEL_DELIMITER in value:
        raise ValueError(f"{what} cannot contain '{CHANNEL_DELIMITER}': {value!r}")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueError(f"{what} is not valid UTF-8: {value!r}") from e
