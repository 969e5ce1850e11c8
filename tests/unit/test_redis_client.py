# =============================================================================
# File: tests/unit/test_redis_client.py
# Description: Redis publishers and connection descriptor resolution
# =============================================================================

import pytest
import redis
import redis.asyncio as aioredis
from redis.exceptions import ConnectionError as RedisConnectionError

from sio_emitter.common.exceptions.exceptions import TransportError
from sio_emitter.config.emitter_config import EmitterConfig
from sio_emitter.infra.persistence.redis_client import (
    AsyncRedisPublisher,
    RedisPublisher,
    build_async_publisher,
    build_publisher,
)
from tests.fakes.fake_publisher import FakeAsyncRedisClient, FakePublisher, FakeRedisClient


@pytest.mark.unit
class TestRedisPublisher:

    def test_publish_forwards_to_client(self):
        client = FakeRedisClient()
        RedisPublisher(client).publish("socket.io#/#", b"frame")
        assert client.calls == [{"channel": "socket.io#/#", "message": b"frame"}]

    def test_redis_error_becomes_transport_error(self):
        publisher = RedisPublisher(FakeRedisClient(fail=True))
        with pytest.raises(TransportError) as exc_info:
            publisher.publish("socket.io#/#", b"frame")
        assert exc_info.value.channel == "socket.io#/#"
        assert isinstance(exc_info.value.__cause__, RedisConnectionError)

    def test_borrowed_client_is_not_closed(self):
        client = FakeRedisClient()
        RedisPublisher(client).close()
        assert client.closed is False

    def test_owned_client_is_closed(self):
        client = FakeRedisClient()
        RedisPublisher(client, owns_client=True).close()
        assert client.closed is True

    def test_client_required(self):
        with pytest.raises(ValueError):
            RedisPublisher(None)


@pytest.mark.unit
@pytest.mark.asyncio
class TestAsyncRedisPublisher:

    async def test_publish_forwards_to_client(self):
        client = FakeAsyncRedisClient()
        await AsyncRedisPublisher(client).publish("k#/#", b"frame")
        assert client.calls[0]["message"] == b"frame"

    async def test_redis_error_becomes_transport_error(self):
        publisher = AsyncRedisPublisher(FakeAsyncRedisClient(fail=True))
        with pytest.raises(TransportError) as exc_info:
            await publisher.publish("k#/#", b"frame")
        assert isinstance(exc_info.value.__cause__, RedisConnectionError)

    async def test_owned_client_is_closed(self):
        client = FakeAsyncRedisClient()
        await AsyncRedisPublisher(client, owns_client=True).close()
        assert client.closed is True


@pytest.mark.unit
class TestBuildPublisher:

    def test_config_builds_owned_publisher(self):
        publisher, config = build_publisher(EmitterConfig(host="cache", port=6400))
        assert isinstance(publisher, RedisPublisher)
        assert config.host == "cache"
        assert publisher.client.connection_pool.connection_kwargs["host"] == "cache"

    def test_key_override_copies_config(self):
        original = EmitterConfig()
        _, config = build_publisher(original, key="other")
        assert config.key == "other"
        assert original.key == "socket.io"

    def test_existing_client_is_wrapped(self):
        client = redis.Redis()
        publisher, config = build_publisher(client)
        assert isinstance(publisher, RedisPublisher)
        assert publisher.client is client
        assert config is None

    def test_custom_publisher_passes_through(self):
        fake = FakePublisher()
        publisher, config = build_publisher(fake)
        assert publisher is fake
        assert config is None

    def test_async_client_rejected(self):
        with pytest.raises(TypeError):
            build_publisher(aioredis.Redis())

    def test_async_variant_wraps_async_client(self):
        client = aioredis.Redis()
        publisher, _ = build_async_publisher(client)
        assert isinstance(publisher, AsyncRedisPublisher)
        assert publisher.client is client

    def test_unknown_object_rejected(self):
        with pytest.raises(TypeError):
            build_async_publisher(object())
