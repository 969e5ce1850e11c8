# =============================================================================
# File: sio_emitter/config/emitter_config.py
# Description: Configuration for the Redis emitter with Pydantic v2
# =============================================================================
from functools import lru_cache
from typing import Optional, Dict, Any
from urllib.parse import quote

from pydantic import Field, SecretStr, field_validator

from sio_emitter.common.base.base_config import BaseConfig, prefixed_settings

DEFAULT_KEY = "socket.io"
CHANNEL_DELIMITER = "#"


# noinspection PyMethodParameters
class EmitterConfig(BaseConfig):
    """
    Connection and addressing configuration for the emitter.

    This configuration controls:
    - Redis connection (host/port, unix socket, or full URL)
    - Authentication and TLS
    - The channel key prefix shared with the receiving adapters
    """

    model_config = prefixed_settings('SOCKETIO_EMITTER_')

    # =========================================================================
    # Connection Settings
    # =========================================================================

    host: str = Field(
        default="localhost",
        description="Redis hostname"
    )

    port: int = Field(
        default=6379,
        description="Redis port"
    )

    db: int = Field(
        default=0,
        ge=0,
        description="Redis logical database"
    )

    unix_socket_path: Optional[str] = Field(
        default=None,
        description="Unix socket path (takes precedence over host/port)"
    )

    redis_url: Optional[str] = Field(
        default=None,
        description="Full Redis URL (takes precedence over all other connection fields)"
    )

    socket_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Socket timeout in seconds"
    )

    socket_connect_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Socket connection timeout in seconds"
    )

    # =========================================================================
    # Security
    # =========================================================================

    username: Optional[str] = Field(
        default=None,
        description="Redis username (Redis 6+ ACL)"
    )

    password: Optional[SecretStr] = Field(
        default=None,
        description="Redis password"
    )

    ssl_enabled: bool = Field(
        default=False,
        description="Enable SSL/TLS"
    )

    # =========================================================================
    # Addressing
    # =========================================================================

    key: str = Field(
        default=DEFAULT_KEY,
        description="Channel prefix shared with the receiving adapters"
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator('port')
    def validate_port(cls, v):
        """Ensure port is a valid TCP port"""
        if not 1 <= v <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator('redis_url')
    def validate_redis_url(cls, v):
        """Validate Redis URL scheme"""
        if v is None:
            return v
        if not v.startswith(('redis://', 'rediss://', 'unix://')):
            raise ValueError("redis_url must start with redis://, rediss://, or unix://")
        return v

    @field_validator('key')
    def validate_key(cls, v):
        """The key is the first channel segment"""
        if not v:
            raise ValueError("key cannot be empty")
        if CHANNEL_DELIMITER in v:
            raise ValueError(f"key cannot contain the channel delimiter '{CHANNEL_DELIMITER}'")
        return v

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def get_redis_url(self) -> str:
        """Build the connection URL (credentials are passed separately)"""
        if self.redis_url:
            return self.redis_url
        if self.unix_socket_path:
            return f"unix://{quote(self.unix_socket_path)}?db={self.db}"
        scheme = "rediss" if self.ssl_enabled else "redis"
        return f"{scheme}://{self.host}:{self.port}/{self.db}"

    def get_connection_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for Redis.from_url"""
        kwargs: Dict[str, Any] = {
            'socket_timeout': self.socket_timeout,
            'socket_connect_timeout': self.socket_connect_timeout,
        }

        if self.password:
            kwargs['password'] = self.password.get_secret_value()

        if self.username:
            kwargs['username'] = self.username

        return kwargs


# =============================================================================
# Factory Functions
# =============================================================================

def config_from_address(address: str, **overrides: Any) -> EmitterConfig:
    """
    Build a config from a connection string.

    Accepts a full URL (redis://, rediss://, unix://) or a bare "host:port"
    / "host" address.
    """
    if address.startswith(('redis://', 'rediss://', 'unix://')):
        return EmitterConfig(redis_url=address, **overrides)

    host, sep, port = address.rpartition(':')
    if not sep:
        return EmitterConfig(host=address, **overrides)
    if not host or not port.isdigit():
        raise ValueError(f"Invalid Redis address: {address!r}")
    return EmitterConfig(host=host, port=int(port), **overrides)


@lru_cache(maxsize=1)
def get_emitter_config() -> EmitterConfig:
    """Get emitter configuration singleton (cached)."""
    return EmitterConfig()


def reset_emitter_config() -> None:
    """Reset config singleton (for testing)."""
    get_emitter_config.cache_clear()
