# =============================================================================
# File: sio_emitter/protocol/__init__.py
# Description: Packet encoding and channel addressing
# =============================================================================

"""
Protocol - what goes on the bus

Components:
- channels: channel naming (<key>#<namespace>#[<target>#])
- values: argument value model (closed set of variants)
- codec: length-prefixed MessagePack frames
- types: request / options records and publisher protocols
"""

from sio_emitter.protocol.channels import channel_name, normalize_namespace, normalize_target
from sio_emitter.protocol.codec import PacketCodec, decode_packet, encode_packet
from sio_emitter.protocol.types import (
    ROOT_NAMESPACE,
    BroadcastRequest,
    DecodedPacket,
    PacketOptions,
    PacketType,
    ValueKind,
)
from sio_emitter.protocol.values import classify, has_binary, normalize_value

__all__ = [
    "ROOT_NAMESPACE",
    "BroadcastRequest",
    "DecodedPacket",
    "PacketCodec",
    "PacketOptions",
    "PacketType",
    "ValueKind",
    "channel_name",
    "classify",
    "decode_packet",
    "encode_packet",
    "has_binary",
    "normalize_namespace",
    "normalize_target",
    "normalize_value",
]
