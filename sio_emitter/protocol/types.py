# =============================================================================
# File: sio_emitter/protocol/types.py
# Description: Emitter Type Definitions (Enums, Protocols, Dataclasses)
# =============================================================================

"""
Protocol Types

Type definitions shared by the addressing builder and the packet codec:
- PacketType: socket.io packet type discriminants
- ValueKind: closed set of argument value variants
- BroadcastRequest: event name + ordered args + namespace
- PacketOptions: reach metadata (target, flags)
- DecodedPacket: result of decoding a frame
- Publisher / AsyncPublisher: the bus operation the emitter depends on
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Awaitable, Dict, List, Optional, Protocol, Tuple

ROOT_NAMESPACE = "/"


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────

class PacketType(IntEnum):
    """socket.io packet types"""
    CONNECT = 0
    DISCONNECT = 1
    EVENT = 2
    ACK = 3
    CONNECT_ERROR = 4
    BINARY_EVENT = 5
    BINARY_ACK = 6


class ValueKind(Enum):
    """Variants an event argument may take on the wire"""
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    BYTES = "bytes"


class PacketFlag(str, Enum):
    """Flag names carried in the options record"""
    BROADCAST = "broadcast"
    BINARY = "binary"
    JSON = "json"
    VOLATILE = "volatile"


# ─────────────────────────────────────────────────────────────────────────────
# Dataclasses
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BroadcastRequest:
    """A single event to broadcast"""
    event: str
    args: Tuple[Any, ...] = ()
    namespace: str = ROOT_NAMESPACE

    @property
    def data(self) -> List[Any]:
        """The data array: event name followed by the arguments"""
        return [self.event, *self.args]


@dataclass(frozen=True)
class PacketOptions:
    """
    Reach metadata sent alongside the packet.

    Wire form: {"rooms": [target] | [], "flags": {name: True, ...}}
    where a flag appears only when set.
    """
    target: Optional[str] = None
    all_sockets: bool = False
    has_binary: bool = False
    json: bool = False
    volatile: bool = False

    def flag_names(self) -> List[str]:
        names = []
        if self.all_sockets:
            names.append(PacketFlag.BROADCAST.value)
        if self.has_binary:
            names.append(PacketFlag.BINARY.value)
        if self.json:
            names.append(PacketFlag.JSON.value)
        if self.volatile:
            names.append(PacketFlag.VOLATILE.value)
        return names

    def to_wire(self) -> Dict[str, Any]:
        return {
            "rooms": [self.target] if self.target is not None else [],
            "flags": {name: True for name in self.flag_names()},
        }

    @classmethod
    def from_wire(cls, record: Dict[str, Any]) -> 'PacketOptions':
        rooms = record.get("rooms") or []
        flags = record.get("flags") or {}
        return cls(
            target=rooms[0] if rooms else None,
            all_sockets=bool(flags.get(PacketFlag.BROADCAST.value, False)),
            has_binary=bool(flags.get(PacketFlag.BINARY.value, False)),
            json=bool(flags.get(PacketFlag.JSON.value, False)),
            volatile=bool(flags.get(PacketFlag.VOLATILE.value, False)),
        )


@dataclass(frozen=True)
class DecodedPacket:
    """A frame decoded back into its parts"""
    uid: str
    request: BroadcastRequest
    options: PacketOptions
    packet_type: PacketType = PacketType.EVENT


# ─────────────────────────────────────────────────────────────────────────────
# Protocols
# ─────────────────────────────────────────────────────────────────────────────

class Publisher(Protocol):
    """Blocking bus publish operation"""

    def publish(self, channel: str, payload: bytes) -> Any:
        ...


class AsyncPublisher(Protocol):
    """Awaitable bus publish operation"""

    def publish(self, channel: str, payload: bytes) -> Awaitable[Any]:
        ...
