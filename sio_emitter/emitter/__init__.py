# =============================================================================
# File: sio_emitter/emitter/__init__.py
# =============================================================================

from sio_emitter.emitter.addressing import AddressingBuilder
from sio_emitter.emitter.emitter import AsyncEmitter, Emitter

__all__ = [
    "AddressingBuilder",
    "AsyncEmitter",
    "Emitter",
]
