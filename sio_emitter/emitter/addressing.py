# =============================================================================
# File: sio_emitter/emitter/addressing.py
# Description: Immutable addressing state - namespace, target, flags
# =============================================================================

"""
Addressing Builder

Every narrowing call returns a new value; the receiver is never modified,
so handles derived from a shared root can be used concurrently.

    root = Emitter.create("localhost:6379")
    chat = root.of("/chat")                  # root unchanged
    room = chat.to("room42").volatile()      # chat unchanged
    room.channel                             # "socket.io#/chat#room42#"
"""

from dataclasses import dataclass, replace
from typing import Any, FrozenSet, Optional, Sequence

from sio_emitter.config.emitter_config import CHANNEL_DELIMITER, DEFAULT_KEY
from sio_emitter.protocol.channels import channel_name, normalize_namespace, normalize_target
from sio_emitter.protocol.types import (
    ROOT_NAMESPACE,
    BroadcastRequest,
    PacketFlag,
    PacketOptions,
)
from sio_emitter.protocol.values import has_binary


@dataclass(frozen=True)
class AddressingBuilder:
    """Targeting state for one logical client handle"""

    key: str = DEFAULT_KEY
    namespace: str = ROOT_NAMESPACE
    target: Optional[str] = None
    flags: FrozenSet[PacketFlag] = frozenset()

    def __post_init__(self):
        if not isinstance(self.key, str) or not self.key:
            raise ValueError("key must be a non-empty string")
        if CHANNEL_DELIMITER in self.key:
            raise ValueError(f"key cannot contain '{CHANNEL_DELIMITER}': {self.key!r}")

    # ─────────────────────────────────────────────────────────────────────
    # Narrowing
    # ─────────────────────────────────────────────────────────────────────

    def with_namespace(self, name: Optional[str]):
        """Replace the namespace ("" means the root namespace)."""
        return replace(self, namespace=normalize_namespace(name))

    def with_target(self, target: Optional[str]):
        """Select a room or socket id, replacing any previous target."""
        return replace(self, target=normalize_target(target))

    # socket.io naming
    of = with_namespace
    to = with_target
    in_ = with_target

    def json(self):
        return self._with_flag(PacketFlag.JSON)

    def volatile(self):
        return self._with_flag(PacketFlag.VOLATILE)

    def broadcast(self):
        """Also deliver to the all-sockets audience."""
        return self._with_flag(PacketFlag.BROADCAST)

    def _with_flag(self, flag: PacketFlag):
        return replace(self, flags=self.flags | {flag})

    # ─────────────────────────────────────────────────────────────────────
    # Derivation
    # ─────────────────────────────────────────────────────────────────────

    @property
    def channel(self) -> str:
        return channel_name(self.key, self.namespace, self.target)

    def build_request(self, event: str, args: Sequence[Any]) -> BroadcastRequest:
        return BroadcastRequest(event=event, args=tuple(args), namespace=self.namespace)

    def build_options(self, args: Sequence[Any]) -> PacketOptions:
        return PacketOptions(
            target=self.target,
            all_sockets=PacketFlag.BROADCAST in self.flags,
            has_binary=has_binary(args),
            json=PacketFlag.JSON in self.flags,
            volatile=PacketFlag.VOLATILE in self.flags,
        )

