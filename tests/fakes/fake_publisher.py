# =============================================================================
# File: tests/fakes/fake_publisher.py
# Description: Fake bus publishers and Redis clients for unit testing
# Pattern: Ports & Adapters - Fake/Stub adapter
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from redis.exceptions import ConnectionError as RedisConnectionError

from sio_emitter.common.exceptions.exceptions import TransportError


@dataclass
class PublishRecord:
    """Record of a publish call for verification."""
    channel: str
    payload: bytes


class FakePublisher:
    """
    In-memory publisher recording every publish call.

    Usage:
        fake = FakePublisher()
        emitter = Emitter.create(fake)
        emitter.emit("ping")

        assert fake.publish_count == 1
        assert fake.last.channel == "socket.io#/#"
    """

    def __init__(self):
        self.published: List[PublishRecord] = []
        self.closed = False
        self._error: Optional[str] = None

    # =========================================================================
    # Test Setup Methods
    # =========================================================================

    def configure_failure(self, error_message: str) -> None:
        """Make every subsequent publish raise TransportError."""
        self._error = error_message

    def clear(self) -> None:
        self.published.clear()
        self._error = None

    # =========================================================================
    # Publisher interface
    # =========================================================================

    def publish(self, channel: str, payload: bytes) -> int:
        if self._error:
            raise TransportError(self._error, channel=channel)
        self.published.append(PublishRecord(channel=channel, payload=payload))
        return 1

    def close(self) -> None:
        self.closed = True

    # =========================================================================
    # Test Verification Methods
    # =========================================================================

    @property
    def publish_count(self) -> int:
        return len(self.published)

    @property
    def last(self) -> Optional[PublishRecord]:
        return self.published[-1] if self.published else None


class FakeAsyncPublisher(FakePublisher):
    """Awaitable variant of FakePublisher."""

    async def publish(self, channel: str, payload: bytes) -> int:  # type: ignore[override]
        return FakePublisher.publish(self, channel, payload)

    async def close(self) -> None:  # type: ignore[override]
        self.closed = True


class FakeRedisClient:
    """Stands in for redis.Redis: records publish() calls, can simulate outages."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def publish(self, channel: str, message: bytes) -> int:
        if self.fail:
            raise RedisConnectionError("Connection refused")
        self.calls.append({"channel": channel, "message": message})
        return 0

    def close(self) -> None:
        self.closed = True


class FakeAsyncRedisClient(FakeRedisClient):
    """Stands in for redis.asyncio.Redis."""

    async def publish(self, channel: str, message: bytes) -> int:  # type: ignore[override]
        return FakeRedisClient.publish(self, channel, message)

    async def aclose(self) -> None:
        self.closed = True
