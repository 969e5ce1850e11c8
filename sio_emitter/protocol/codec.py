# =============================================================================
# File: sio_emitter/protocol/codec.py
# Description: Packet codec - length-prefixed MessagePack frames
# =============================================================================

"""
Packet Codec

Frame layout:

    +-----------------------+--------------------------------------+
    | uint32 big-endian len | msgpack array [uid, packet, opts]    |
    +-----------------------+--------------------------------------+

    packet = {"type": 2, "data": [event, *args], "nsp": namespace}
             ("nsp" only present for non-root namespaces)
    opts   = {"rooms": [target] | [], "flags": {name: true}}

The codec is a pure function of its inputs plus the uid generator.
"""

import logging
import struct
from typing import Any, Callable, Dict, Optional

import msgpack

from sio_emitter.common.exceptions.exceptions import PacketDecodeError, UnencodableValue
from sio_emitter.protocol.types import (
    ROOT_NAMESPACE,
    BroadcastRequest,
    DecodedPacket,
    PacketOptions,
    PacketType,
)
from sio_emitter.protocol.values import check_text, normalize_args
from sio_emitter.utils.uuid_utils import generate_packet_uid

log = logging.getLogger("sio_emitter.codec")

LENGTH_PREFIX = struct.Struct(">I")
MAX_BODY_SIZE = 2 ** 32 - 1


class PacketCodec:
    """Encode broadcast requests into frames and decode them back"""

    def __init__(self, uid_factory: Optional[Callable[[], str]] = None):
        self.uid_factory = uid_factory or generate_packet_uid
        self.stats = {
            'total_encoded': 0,
            'total_decoded': 0,
            'encode_failures': 0,
            'decode_failures': 0,
        }

    # ─────────────────────────────────────────────────────────────────────
    # Encoding
    # ─────────────────────────────────────────────────────────────────────

    def encode(self, request: BroadcastRequest, options: PacketOptions) -> bytes:
        """
        Serialize a request and its options into a frame.

        Raises:
            UnencodableValue: an argument is outside the supported value set,
                or the encoded body does not fit the length prefix
        """
        if not isinstance(request.event, str):
            self.stats['encode_failures'] += 1
            raise UnencodableValue(
                f"Event name must be a string, got {type(request.event).__name__}",
                value_type=type(request.event).__name__,
            )

        try:
            data = [check_text(request.event), *normalize_args(request.args)]
        except UnencodableValue as e:
            self.stats['encode_failures'] += 1
            log.warning(f"Rejected argument for event '{request.event}': {e}")
            raise

        packet: Dict[str, Any] = {"type": int(PacketType.EVENT), "data": data}
        if request.namespace != ROOT_NAMESPACE:
            packet["nsp"] = request.namespace

        try:
            body = msgpack.packb(
                [self.uid_factory(), packet, options.to_wire()],
                use_bin_type=True,
            )
        except (ValueError, OverflowError) as e:
            self.stats['encode_failures'] += 1
            log.warning(f"msgpack rejected packet for event '{request.event}': {e}")
            raise UnencodableValue(f"Packet cannot be packed: {e}") from e

        if len(body) > MAX_BODY_SIZE:
            self.stats['encode_failures'] += 1
            raise UnencodableValue(f"Packet body of {len(body)} bytes exceeds the frame limit")

        self.stats['total_encoded'] += 1
        log.debug(
            f"Encoded '{request.event}' for {request.namespace}: "
            f"{len(data) - 1} args -> {len(body)} bytes"
        )
        return LENGTH_PREFIX.pack(len(body)) + body

    # ─────────────────────────────────────────────────────────────────────
    # Decoding
    # ─────────────────────────────────────────────────────────────────────

    def decode(self, frame: bytes) -> DecodedPacket:
        """
        Parse a frame produced by encode().

        Raises:
            PacketDecodeError: truncated frame, length mismatch, malformed
                envelope or a packet type other than EVENT
        """
        try:
            decoded = self._decode(frame)
        except PacketDecodeError as e:
            self.stats['decode_failures'] += 1
            log.error(f"Packet decoding failed: {e}")
            raise
        self.stats['total_decoded'] += 1
        return decoded

    def _decode(self, frame: bytes) -> DecodedPacket:
        if len(frame) < LENGTH_PREFIX.size:
            raise PacketDecodeError(f"Frame too short: {len(frame)} bytes")

        (declared,) = LENGTH_PREFIX.unpack_from(frame)
        body = frame[LENGTH_PREFIX.size:]
        if declared != len(body):
            raise PacketDecodeError(
                f"Length prefix says {declared} bytes, frame carries {len(body)}"
            )

        try:
            envelope = msgpack.unpackb(body, raw=False)
        except (ValueError, TypeError) as e:
            raise PacketDecodeError(f"Invalid MessagePack body: {e}") from e

        if not isinstance(envelope, list) or len(envelope) != 3:
            raise PacketDecodeError("Envelope must be a 3-element array [uid, packet, opts]")

        uid, packet, opts = envelope
        if not isinstance(uid, str) or not isinstance(packet, dict) or not isinstance(opts, dict):
            raise PacketDecodeError("Envelope elements have unexpected types")

        if packet.get("type") != PacketType.EVENT:
            raise PacketDecodeError(f"Unsupported packet type: {packet.get('type')!r}")

        data = packet.get("data")
        if not isinstance(data, list) or not data or not isinstance(data[0], str):
            raise PacketDecodeError("Packet data must start with the event name")

        request = BroadcastRequest(
            event=data[0],
            args=tuple(data[1:]),
            namespace=packet.get("nsp", ROOT_NAMESPACE),
        )
        return DecodedPacket(
            uid=uid,
            request=request,
            options=PacketOptions.from_wire(opts),
            packet_type=PacketType.EVENT,
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get codec statistics"""
        return dict(self.stats)


_default_codec = PacketCodec()


def encode_packet(request: BroadcastRequest, options: PacketOptions) -> bytes:
    """Encode with the module-level codec (random uid per call)"""
    return _default_codec.encode(request, options)


def decode_packet(frame: bytes) -> DecodedPacket:
    """Decode with the module-level codec"""
    return _default_codec.decode(frame)
