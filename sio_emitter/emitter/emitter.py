# =============================================================================
# File: sio_emitter/emitter/emitter.py
# Description: Emitters - addressing builder bound to a bus publisher
# =============================================================================

"""
Emitter / AsyncEmitter

Flow of a single emit:

    builder state ──► channel name ─┐
    event + args  ──► request ──────┼─► PacketCodec.encode ─► publish (once)
                  └─► options ──────┘

The channel and the frame are fully computed before the publish call, so
UnencodableValue never leaves a partial publish behind. TransportError from
the publisher propagates unchanged; nothing is retried.

Clones returned by of()/to()/json()/... share the publisher and codec by
reference. close() therefore closes the connection for every clone.
"""

import inspect
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

from sio_emitter.common.exceptions.exceptions import TransportError
from sio_emitter.config.emitter_config import DEFAULT_KEY
from sio_emitter.emitter.addressing import AddressingBuilder
from sio_emitter.infra.metrics.emitter_metrics import record_publish, record_publish_error
from sio_emitter.infra.persistence.redis_client import (
    ConnectionTarget,
    build_async_publisher,
    build_publisher,
)
from sio_emitter.protocol.codec import PacketCodec
from sio_emitter.protocol.values import normalize_args

log = logging.getLogger("sio_emitter.emitter")


@dataclass(frozen=True)
class _BoundBuilder(AddressingBuilder):
    publisher: Any = field(default=None, compare=False, repr=False)
    codec: PacketCodec = field(default_factory=PacketCodec, compare=False, repr=False)

    def __post_init__(self):
        super().__post_init__()
        if self.publisher is None:
            raise ValueError("publisher is required")

    def prepare(self, event: str, args: Tuple[Any, ...]) -> Tuple[str, bytes]:
        """Compute (channel, frame) for an emit without publishing."""
        normalized = normalize_args(args)
        request = self.build_request(event, normalized)
        options = self.build_options(normalized)
        return self.channel, self.codec.encode(request, options)


class Emitter(_BoundBuilder):
    """
    Blocking emitter.

    Example Usage:
        ```python
        emitter = Emitter.create("localhost:6379")
        emitter.emit("time", "12:00")
        emitter.of("/admin").to("room42").emit("alert", {"level": 2})
        ```
    """

    @classmethod
    def create(cls,
               target: ConnectionTarget = None,
               *,
               key: Optional[str] = None,
               uid_factory: Optional[Callable[[], str]] = None) -> 'Emitter':
        """
        Build a root emitter (root namespace, no target, no flags).

        Args:
            target: EmitterConfig, "host:port" / redis URL, redis.Redis client,
                any object with publish(channel, payload), or None to read
                the SOCKETIO_EMITTER_* environment
            key: Channel prefix override
            uid_factory: Packet identifier generator
        """
        publisher, config = build_publisher(target, key)
        if key is not None:
            resolved_key = key
        else:
            resolved_key = config.key if config else DEFAULT_KEY
        emitter = cls(key=resolved_key, publisher=publisher, codec=PacketCodec(uid_factory))
        log.info(f"Emitter ready on key '{resolved_key}'")
        return emitter

    def emit(self, event: str, *args: Any) -> None:
        """
        Broadcast an event to the current namespace / target.

        Raises:
            UnencodableValue: an argument cannot be encoded (nothing is published)
            TransportError: the publish call failed
        """
        channel, frame = self.prepare(event, args)

        start_time = time.perf_counter()
        try:
            self.publisher.publish(channel, frame)
        except TransportError as e:
            record_publish_error(self.namespace, e)
            raise
        latency = time.perf_counter() - start_time

        record_publish(self.namespace, len(frame), latency)
        log.debug(
            f"Published '{event}' to {channel}: "
            f"{len(frame)}B in {latency * 1000:.2f}ms"
        )

    def close(self) -> None:
        """Close the shared publisher (affects every clone of this emitter)."""
        close = getattr(self.publisher, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> 'Emitter':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class AsyncEmitter(_BoundBuilder):
    """
    asyncio emitter over redis.asyncio.

    Example Usage:
        ```python
        emitter = AsyncEmitter.create("redis://localhost:6379/0")
        await emitter.to("room42").emit("ping")
        ```
    """

    @classmethod
    def create(cls,
               target: ConnectionTarget = None,
               *,
               key: Optional[str] = None,
               uid_factory: Optional[Callable[[], str]] = None) -> 'AsyncEmitter':
        """Build a root async emitter. See Emitter.create for the arguments."""
        publisher, config = build_async_publisher(target, key)
        if key is not None:
            resolved_key = key
        else:
            resolved_key = config.key if config else DEFAULT_KEY
        emitter = cls(key=resolved_key, publisher=publisher, codec=PacketCodec(uid_factory))
        log.info(f"Async emitter ready on key '{resolved_key}'")
        return emitter

    async def emit(self, event: str, *args: Any) -> None:
        """Async counterpart of Emitter.emit()."""
        channel, frame = self.prepare(event, args)

        start_time = time.perf_counter()
        try:
            await self.publisher.publish(channel, frame)
        except TransportError as e:
            record_publish_error(self.namespace, e)
            raise
        latency = time.perf_counter() - start_time

        record_publish(self.namespace, len(frame), latency)
        log.debug(
            f"Published '{event}' to {channel}: "
            f"{len(frame)}B in {latency * 1000:.2f}ms"
        )

    async def close(self) -> None:
        """Close the shared publisher (affects every clone of this emitter)."""
        close = getattr(self.publisher, "close", None)
        if close is not None:
            result = close()
            if inspect.isawaitable(result):
                await result

    async def __aenter__(self) -> 'AsyncEmitter':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
