# =============================================================================
# File: sio_emitter/infra/persistence/redis_client.py — Redis bus publishers
# =============================================================================
# • Builds sync (redis.Redis) and async (redis.asyncio.Redis) clients from
#   EmitterConfig.
# • Wraps them behind a single publish(channel, payload) operation.
# • Maps redis-py failures to TransportError. No retry, no buffering:
#   pub/sub delivery is at-most-once.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple, Union

import redis
import redis.asyncio as aioredis
from redis.exceptions import RedisError

from sio_emitter.common.exceptions.exceptions import TransportError
from sio_emitter.config.emitter_config import (
    EmitterConfig,
    config_from_address,
    get_emitter_config,
)

log = logging.getLogger("sio_emitter.infra.redis_client")

ConnectionTarget = Union[EmitterConfig, str, redis.Redis, aioredis.Redis, Any, None]


# -----------------------------------------------------------------------------
# Client factories
# -----------------------------------------------------------------------------

def create_redis_client(config: EmitterConfig) -> redis.Redis:
    """Create a blocking Redis client from config (connects lazily)."""
    client = redis.Redis.from_url(config.get_redis_url(), **config.get_connection_kwargs())
    log.info(f"Redis client created for {_safe_target(config)}")
    return client


def create_async_redis_client(config: EmitterConfig) -> aioredis.Redis:
    """Create an asyncio Redis client from config (connects lazily)."""
    client = aioredis.Redis.from_url(config.get_redis_url(), **config.get_connection_kwargs())
    log.info(f"Async Redis client created for {_safe_target(config)}")
    return client


def _safe_target(config: EmitterConfig) -> str:
    if config.redis_url:
        # Drop credentials embedded in the URL
        return config.redis_url.rsplit('@', 1)[-1]
    if config.unix_socket_path:
        return f"unix:{config.unix_socket_path}"
    return f"{config.host}:{config.port}/{config.db}"


# -----------------------------------------------------------------------------
# Publishers
# -----------------------------------------------------------------------------

class RedisPublisher:
    """Blocking publisher over a shared redis.Redis client"""

    def __init__(self, client: redis.Redis, owns_client: bool = False):
        if client is None:
            raise ValueError("client is required")
        self.client = client
        self._owns_client = owns_client

    @classmethod
    def from_config(cls, config: EmitterConfig) -> RedisPublisher:
        return cls(create_redis_client(config), owns_client=True)

    def publish(self, channel: str, payload: bytes) -> int:
        """
        Publish a frame.

        Returns:
            Number of subscribers that received it

        Raises:
            TransportError: the Redis call failed
        """
        try:
            return self.client.publish(channel, payload)
        except RedisError as e:
            log.error(f"Failed to publish to {channel}: {e}", exc_info=True)
            raise TransportError(f"Publish to {channel} failed: {e}", channel=channel) from e

    def close(self) -> None:
        """Close the client if this publisher created it."""
        if self._owns_client:
            self.client.close()
            log.info("Redis client closed")


class AsyncRedisPublisher:
    """Awaitable publisher over a shared redis.asyncio.Redis client"""

    def __init__(self, client: aioredis.Redis, owns_client: bool = False):
        if client is None:
            raise ValueError("client is required")
        self.client = client
        self._owns_client = owns_client

    @classmethod
    def from_config(cls, config: EmitterConfig) -> AsyncRedisPublisher:
        return cls(create_async_redis_client(config), owns_client=True)

    async def publish(self, channel: str, payload: bytes) -> int:
        """
        Publish a frame.

        Raises:
            TransportError: the Redis call failed
        """
        try:
            return await self.client.publish(channel, payload)
        except RedisError as e:
            log.error(f"Failed to publish to {channel}: {e}", exc_info=True)
            raise TransportError(f"Publish to {channel} failed: {e}", channel=channel) from e

    async def close(self) -> None:
        """Close the client if this publisher created it."""
        if self._owns_client:
            await self.client.aclose()
            log.info("Async Redis client closed")


# -----------------------------------------------------------------------------
# Resolution of connection descriptors
# -----------------------------------------------------------------------------

def _resolve_config(target: ConnectionTarget, key: Optional[str]) -> Optional[EmitterConfig]:
    if target is None:
        config = get_emitter_config()
    elif isinstance(target, EmitterConfig):
        config = target
    elif isinstance(target, str):
        config = config_from_address(target)
    else:
        return None
    if key is not None and key != config.key:
        config = config.model_copy(update={"key": key})
    return config


def build_publisher(target: ConnectionTarget = None,
                    key: Optional[str] = None) -> Tuple[Any, Optional[EmitterConfig]]:
    """
    Turn a connection descriptor into a blocking publisher.

    Accepts an EmitterConfig, an address string, a redis.Redis client, any
    object with a publish(channel, payload) method, or None for the
    environment config.
    """
    config = _resolve_config(target, key)
    if config is not None:
        return RedisPublisher.from_config(config), config
    if isinstance(target, aioredis.Redis):
        raise TypeError("redis.asyncio.Redis requires AsyncEmitter")
    if isinstance(target, redis.Redis):
        return RedisPublisher(target), None
    if callable(getattr(target, "publish", None)):
        return target, None
    raise TypeError(f"Cannot build a publisher from {type(target).__name__}")


def build_async_publisher(target: ConnectionTarget = None,
                          key: Optional[str] = None) -> Tuple[Any, Optional[EmitterConfig]]:
    """Async counterpart of build_publisher()."""
    config = _resolve_config(target, key)
    if config is not None:
        return AsyncRedisPublisher.from_config(config), config
    if isinstance(target, redis.Redis):
        raise TypeError("redis.Redis requires Emitter; use redis.asyncio.Redis with AsyncEmitter")
    if isinstance(target, aioredis.Redis):
        return AsyncRedisPublisher(target), None
    if callable(getattr(target, "publish", None)):
        return target, None
    raise TypeError(f"Cannot build a publisher from {type(target).__name__}")
