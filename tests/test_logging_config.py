import io
import logging
import sys

from trmap.logging_config import configure_logging


def test_configure_logging_installs_single_handler(restore_root_logger, monkeypatch):
    monkeypatch.delenv("TRMAP_LOG_LEVEL", raising=False)
    configure_logging(logging.DEBUG)
    configure_logging(logging.DEBUG)
    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.level == logging.DEBUG


def test_env_var_overrides_level(restore_root_logger, monkeypatch):
    monkeypatch.setenv("TRMAP_LOG_LEVEL", "warning")
    configure_logging(logging.DEBUG)
    assert restore_root_logger.level == logging.WARNING


def test_logs_go_to_stderr_by_default(restore_root_logger, monkeypatch):
    monkeypatch.delenv("TRMAP_LOG_LEVEL", raising=False)
    handler = configure_logging()
    assert handler.stream is sys.stderr


def test_custom_stream_receives_formatted_records(restore_root_logger, monkeypatch):
    monkeypatch.delenv("TRMAP_LOG_LEVEL", raising=False)
    stream = io.StringIO()
    configure_logging(logging.INFO, stream=stream)
    logging.getLogger("trmap.test").info("saved %d bytes", 16)
    line = stream.getvalue().strip()
    assert line.endswith("| INFO     | trmap.test: saved 16 bytes")
