#!/usr/bin/env python3
#
###################################################################
# Project: TraficSecure
# File: traficsecure_app/database.py
# Purpose: SQLAlchemy engine/session owner.
#
# Description of code and how it works:
# - Database wraps one engine + session factory; the app factory builds it
#   and the lifespan pings/disposes it.
# - get_db yields a per-request session from the app's Database.
# - SQLite engines get ST_* shims so the POINT column works without MySQL.
#
# Author: TraficSecure Team
# Created: 2026-10-19
#
# Version: 0.3.0
# Last Modified: 2026-10-19 by TraficSecure Team
#
# Revision History:
# - 0.3.0 (2026-10-19): SQLite spatial shims for local runs and tests.
# - 0.2.0 (2026-10-19): Database object injected via app.state.
# - 0.1.0 (2026-10-19): MySQL engine options / pool_pre_ping.
###################################################################
#
from __future__ import annotations

import re
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import database_url

Base = declarative_base()

_WKT_POINT = re.compile(r"^\s*POINT\s*\(\s*(\S+)\s+(\S+)\s*\)\s*$", re.IGNORECASE)


def parse_wkt_point(wkt):
    """'POINT(lng lat)' -> (lng, lat); None for anything else."""
    if wkt is None:
        return None
    if isinstance(wkt, bytes):
        wkt = wkt.decode("utf-8")
    m = _WKT_POINT.match(wkt)
    if not m:
        return None
    return float(m.group(1)), float(m.group(2))


def _st_x(wkt):
    p = parse_wkt_point(wkt)
    return p[0] if p else None


def _st_y(wkt):
    p = parse_wkt_point(wkt)
    return p[1] if p else None


def _sqlite_on_connect(dbapi_conn, _):
    # SQLite stores POINT as WKT text; mirror the MySQL functions we use.
    dbapi_conn.create_function("ST_GeomFromText", 1, lambda wkt: wkt, deterministic=True)
    dbapi_conn.create_function("ST_AsText", 1, lambda wkt: wkt, deterministic=True)
    dbapi_conn.create_function("ST_X", 1, _st_x, deterministic=True)
    dbapi_conn.create_function("ST_Y", 1, _st_y, deterministic=True)
    # SQLite ignores FKs by default
    dbapi_conn.execute("PRAGMA foreign_keys=ON")


class Database:
    def __init__(self, url: Optional[str] = None, **engine_kw):
        self.url = url or database_url()
        kw = {"pool_pre_ping": True, "future": True}
        if self.url.startswith("sqlite"):
            kw["connect_args"] = {"check_same_thread": False}
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                # one shared connection, otherwise every checkout is a new empty db
                kw["poolclass"] = StaticPool
        else:
            kw["pool_recycle"] = 3600
        kw.update(engine_kw)

        self.engine = create_engine(self.url, **kw)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _sqlite_on_connect)

        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, autocommit=False, future=True)

    @property
    def name(self) -> str:
        return self.engine.url.database or ""

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def create_all(self) -> None:
        from . import models  # noqa: F401  (register tables on Base)
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
