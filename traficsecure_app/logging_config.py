#!/usr/bin/env python3
#
###################################################################
# Project: TraficSecure
# File: traficsecure_app/logging_config.py
# Purpose: Centralized logging setup (rotating file, redaction, levels)
#
# Description of code and how it works:
# - Creates a TimedRotatingFileHandler (daily) + console handler.
# - Redacts DB_PASSWORD if it ever appears in logs (e.g. in a DSN).
# - Respects env: TRAFICSECURE_LOG_DIR, TRAFICSECURE_LOG_FILE, TRAFICSECURE_LOG_LEVEL.
# - Idempotent: a second call does not stack handlers.
#
# Author: TraficSecure Team
# Created: 2026-10-19
#
# Version: 1.0.0
# Last Modified: 2026-10-19 by TraficSecure Team
#
# Revision History:
# - 1.0.0 (2026-10-19): Initial logging bundle.
###################################################################
#
from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

LOGGER_NAME = "traficsecure"


def _ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


class _RedactFilter(logging.Filter):
    def __init__(self, secret: str | None):
        super().__init__()
        self.secret = secret or ""

    def _scrub(self, v):
        if isinstance(v, str) and self.secret in v:
            return v.replace(self.secret, "***")
        return v

    def filter(self, record: logging.LogRecord) -> bool:
        if self.secret:
            record.msg = self._scrub(record.msg)
            if isinstance(record.args, dict):
                record.args = {k: self._scrub(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._scrub(v) for v in record.args)
        return True


def setup_logging() -> logging.Logger:
    # Where to write logs
    project_root = Path(__file__).resolve().parents[1]
    log_dir = Path(os.getenv("TRAFICSECURE_LOG_DIR", project_root / "logs"))
    _ensure_dir(log_dir)
    log_file = Path(os.getenv("TRAFICSECURE_LOG_FILE", log_dir / "traficsecure_app.log"))

    # Level
    level_name = os.getenv("TRAFICSECURE_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False  # don't double-log to root

    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S%z",
    )
    redact_filter = _RedactFilter(os.getenv("DB_PASSWORD"))

    # File handler: rotate at midnight, keep 7 days
    fh = TimedRotatingFileHandler(str(log_file), when="midnight", backupCount=7, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    fh.addFilter(redact_filter)
    logger.addHandler(fh)

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(redact_filter)
    logger.addHandler(ch)

    logger.info("Logging initialized at %s (file=%s)", level_name, log_file)
    return logger
