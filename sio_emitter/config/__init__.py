# =============================================================================
# File: sio_emitter/config/__init__.py
# =============================================================================

from sio_emitter.config.emitter_config import (
    EmitterConfig,
    config_from_address,
    get_emitter_config,
    reset_emitter_config,
)

__all__ = [
    "EmitterConfig",
    "config_from_address",
    "get_emitter_config",
    "reset_emitter_config",
]
