# =============================================================================
# socket.io Redis emitter - Main Package
# =============================================================================
"""
sio_emitter - publish socket.io events through Redis

Backend processes without WebSocket connections broadcast events to a
socket.io server fleet by publishing packets on the channels its Redis
adapter listens to.

Usage:
    from sio_emitter import Emitter

    emitter = Emitter.create("localhost:6379")
    emitter.of("/chat").to("room42").emit("message", {"text": "hi"})
"""

from __future__ import annotations


def _get_version() -> str:
    """Get package version from installed metadata."""
    from importlib.metadata import version, PackageNotFoundError
    try:
        return version("socketio-redis-emitter")
    except PackageNotFoundError:
        return "0.0.0-unknown"


__version__: str = _get_version()

from sio_emitter.common.exceptions.exceptions import (  # noqa: E402
    EmitterException,
    PacketDecodeError,
    TransportError,
    UnencodableValue,
)
from sio_emitter.config.emitter_config import EmitterConfig  # noqa: E402
from sio_emitter.emitter import AddressingBuilder, AsyncEmitter, Emitter  # noqa: E402
from sio_emitter.protocol import (  # noqa: E402
    BroadcastRequest,
    PacketCodec,
    PacketOptions,
    decode_packet,
    encode_packet,
)

# =============================================================================
# EXPORTS
# =============================================================================
__all__ = [
    "__version__",
    # Emitters
    "AddressingBuilder",
    "AsyncEmitter",
    "Emitter",
    "EmitterConfig",
    # Protocol
    "BroadcastRequest",
    "PacketCodec",
    "PacketOptions",
    "decode_packet",
    "encode_packet",
    # Errors
    "EmitterException",
    "PacketDecodeError",
    "TransportError",
    "UnencodableValue",
]
