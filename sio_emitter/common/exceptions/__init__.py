# =============================================================================
# File: sio_emitter/common/exceptions/__init__.py
# =============================================================================

from sio_emitter.common.exceptions.exceptions import (
    EmitterException,
    PacketDecodeError,
    TransportError,
    UnencodableValue,
)

__all__ = [
    "EmitterException",
    "PacketDecodeError",
    "TransportError",
    "UnencodableValue",
]
