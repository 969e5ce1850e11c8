# =============================================================================
# File: tests/conftest.py
# Description: Shared fixtures
# =============================================================================

import pytest

from sio_emitter import AsyncEmitter, Emitter, PacketCodec
from sio_emitter.config.emitter_config import reset_emitter_config
from sio_emitter.utils.uuid_utils import fixed_uid
from tests.fakes.fake_publisher import FakeAsyncPublisher, FakePublisher

PINNED_UID = "emitter"


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    """Keep SOCKETIO_EMITTER_* variables and .env files out of the tests."""
    import os

    for name in list(os.environ):
        if name.startswith("SOCKETIO_EMITTER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    reset_emitter_config()
    yield
    reset_emitter_config()


@pytest.fixture
def publisher():
    return FakePublisher()


@pytest.fixture
def async_publisher():
    return FakeAsyncPublisher()


@pytest.fixture
def codec():
    return PacketCodec(uid_factory=fixed_uid(PINNED_UID))


@pytest.fixture
def emitter(publisher):
    return Emitter.create(publisher, uid_factory=fixed_uid(PINNED_UID))


@pytest.fixture
def async_emitter(async_publisher):
    return AsyncEmitter.create(async_publisher, uid_factory=fixed_uid(PINNED_UID))
