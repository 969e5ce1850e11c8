# sio_emitter/common/base/base_config.py
# =============================================================================
# BaseConfig - settings base for the emitter
#
# - .env file loading, case-insensitive environment variables
# - SecretStr fields masked in repr() and to_dict()
# - prefixed_settings() builds a subclass model_config with its own env prefix
#
# Usage:
#     class MyConfig(BaseConfig):
#         model_config = prefixed_settings("MY_")
#         timeout_ms: int = 5000
# =============================================================================

from typing import Any, Dict, Iterator, Tuple

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

MASKED = "**********"


class BaseConfig(BaseSettings):
    """Base class for emitter settings.

    Subclasses declare their prefix through prefixed_settings(); the raw
    value of a SecretStr is only exposed by to_dict(mask_secrets=False).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def _field_values(self) -> Iterator[Tuple[str, Any]]:
        for field_name in type(self).model_fields:
            yield field_name, getattr(self, field_name)

    def to_dict(self, mask_secrets: bool = True) -> Dict[str, Any]:
        """Convert config to dictionary.

        Args:
            mask_secrets: If True (default), SecretStr values stay masked.
        """
        if mask_secrets:
            return self.model_dump()
        return {
            name: value.get_secret_value() if isinstance(value, SecretStr) else value
            for name, value in self._field_values()
        }

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}=SecretStr('{MASKED}')" if isinstance(value, SecretStr) else f"{name}={value!r}"
            for name, value in self._field_values()
        )
        return f"{type(self).__name__}({fields})"


def prefixed_settings(env_prefix: str) -> SettingsConfigDict:
    """BaseConfig.model_config with the given env prefix.

    BaseSettings already defines env_prefix, so it is replaced in the merged
    dict rather than passed as a second keyword.
    """
    return SettingsConfigDict(**{**BaseConfig.model_config, "env_prefix": env_prefix})
