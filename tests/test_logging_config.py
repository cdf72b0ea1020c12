"""
tests/test_logging_config.py — Tests for traficsecure_app/logging_config.py

Called by: pytest
Depends on: traficsecure_app/logging_config.py
"""

import logging

from traficsecure_app.logging_config import LOGGER_NAME, setup_logging


def _flush(logger):
    for h in logger.handlers:
        h.flush()


def test_setup_logging_file_and_console(tmp_path, monkeypatch):
    monkeypatch.setenv("TRAFICSECURE_LOG_DIR", str(tmp_path))
    monkeypatch.delenv("TRAFICSECURE_LOG_FILE", raising=False)
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert len(logger.handlers) == 2
    assert logger.propagate is False

    logger.info("zona creada id=%s", 9)
    _flush(logger)
    text = (tmp_path / "traficsecure_app.log").read_text(encoding="utf-8")
    assert "zona creada id=9" in text
    assert "[traficsecure]" in text


def test_setup_logging_is_idempotent(tmp_path, monkeypatch):
    monkeypatch.setenv("TRAFICSECURE_LOG_DIR", str(tmp_path))
    setup_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 2


def test_level_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("TRAFICSECURE_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("TRAFICSECURE_LOG_LEVEL", "WARNING")
    logger = setup_logging()
    assert logger.level == logging.WARNING


def test_db_password_redacted(tmp_path, monkeypatch):
    monkeypatch.setenv("TRAFICSECURE_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("TRAFICSECURE_LOG_LEVEL", "INFO")
    monkeypatch.setenv("DB_PASSWORD", "s3cret-pw")
    logger = setup_logging()

    logger.error("connect failed mysql://root:s3cret-pw@db/TraficSecure1")
    logger.error("dsn=%s", "mysql://root:s3cret-pw@db")
    _flush(logger)

    text = (tmp_path / "traficsecure_app.log").read_text(encoding="utf-8")
    assert "s3cret-pw" not in text
    assert text.count("***") >= 2
