# =============================================================================
# File: sio_emitter/utils/uuid_utils.py — Packet identifier utilities
# =============================================================================
# Each published packet carries an identifier. Receiving adapters compare it
# with their own server uid to skip packets they published themselves, so an
# emitter uid only has to differ from every server uid.
# =============================================================================

import uuid
from typing import Callable


def generate_packet_uid() -> str:
    """
    Generate a new packet identifier (UUIDv4, 32 hex chars, no dashes).

    Returns:
        Hex string
    """
    return uuid.uuid4().hex


def fixed_uid(value: str) -> Callable[[], str]:
    """
    Return a generator that always yields the same identifier.

    Useful to pin the identifier when byte-identical frames are required.
    """
    if not value:
        raise ValueError("uid cannot be empty")

    def _uid() -> str:
        return value

    return _uid
