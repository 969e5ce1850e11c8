# =============================================================================
# File: tests/unit/test_logging_config.py
# Description: Logging setup
# =============================================================================

import json
import logging

import pytest

from sio_emitter.config.logging_config import (
    ProductionFormatter,
    get_logger_level_from_env,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestLogging:

    def test_json_formatter_includes_context(self):
        record = logging.LogRecord("sio_emitter.emitter", logging.INFO, __file__, 1,
                                   "published", None, None)
        record.channel = "socket.io#/#"
        payload = json.loads(ProductionFormatter().format(record))
        assert payload["message"] == "published"
        assert payload["channel"] == "socket.io#/#"
        assert payload["level"] == "INFO"

    def test_logger_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOGLEVEL_SIO_EMITTER_CODEC", "debug")
        assert get_logger_level_from_env("sio_emitter.codec", logging.INFO) == logging.DEBUG
        assert get_logger_level_from_env("sio_emitter.emitter", logging.INFO) == logging.INFO

    def test_json_handler(self, restore_root_logger):
        setup_logging(log_level="warning", enable_json=True)
        assert restore_root_logger.level == logging.WARNING
        assert isinstance(restore_root_logger.handlers[0].formatter, ProductionFormatter)

    def test_file_handler(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "emitter.log"
        setup_logging(log_level="info", log_file=str(log_file), enable_json=True)
        assert len(restore_root_logger.handlers) == 2
        assert log_file.exists()
