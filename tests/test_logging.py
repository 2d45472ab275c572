from __future__ import annotations

import logging
from pathlib import Path

import pytest

from bizops_pipeline.logging_config import configure_logging, resolve_level


def test_configure_logging_adds_stream_handler() -> None:
    # Ensure configuring logging doesn't raise and attaches a StreamHandler
    configure_logging(None)
    root = logging.getLogger()
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)


def test_configure_logging_writes_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "bizops.log"
    configure_logging(log_file)
    logging.getLogger("bizops_pipeline.test").info("hello")
    for h in logging.getLogger().handlers:
        h.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")
    configure_logging(None)


def test_level_comes_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIZOPS_LOG_LEVEL", "warning")
    assert configure_logging(None) == logging.WARNING
    assert logging.getLogger().level == logging.WARNING

    # an explicit level wins over the environment
    assert configure_logging(None, "DEBUG") == logging.DEBUG
    monkeypatch.delenv("BIZOPS_LOG_LEVEL")
    assert configure_logging(None) == logging.INFO


def test_unknown_level_name_rejected() -> None:
    with pytest.raises(RuntimeError):
        resolve_level("chatty")
    assert resolve_level("15") == 15


def test_third_party_loggers_quieted_unless_debugging() -> None:
    configure_logging(None, logging.INFO)
    assert logging.getLogger("distributed").level == logging.WARNING
    assert logging.getLogger("pymongo").level == logging.WARNING

    configure_logging(None, logging.DEBUG)
    assert logging.getLogger("pymongo").level == logging.NOTSET
    configure_logging(None)
