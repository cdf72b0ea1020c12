"""
conftest.py — Shared test fixtures for TraficSecure

Provides a fresh in-memory SQLite database per test (ST_* functions shimmed
by traficsecure_app.database), a TestClient built from create_app(), and
zone/sensor factory fixtures.

Called by: all test files via pytest autodiscovery
Depends on: traficsecure_app.database, traficsecure_app.main
"""

import os
import tempfile

# Must be set before importing app modules (main builds a default app)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TRAFICSECURE_LOG_DIR"] = tempfile.mkdtemp(prefix="traficsecure-logs-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from traficsecure_app.database import Database
from traficsecure_app.main import create_app
from traficsecure_app.models import Sensor, Zona


@pytest.fixture()
def database():
    """Create all tables on a private in-memory database, then tear down."""
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture()
def db_session(database: Database):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(database: Database):
    app = create_app(database)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def zonas(db_session: Session):
    """Two zones with known coordinates (inserted out of id order on purpose)."""
    norte = Zona(id_zona=2, nombre="Norte", coordenadas=(-74.0445, 4.7110), nivel_riesgo="medio")
    centro = Zona(id_zona=1, nombre="Centro", coordenadas=(-74.0817, 4.6097), nivel_riesgo="alto")
    db_session.add_all([norte, centro])
    db_session.commit()
    return {"centro": 1, "norte": 2}


@pytest.fixture()
def sensores(db_session: Session, zonas):
    db_session.add_all([
        Sensor(id_sensor=3, tipo_sensor="camara", estado="activo", id_zona=zonas["norte"]),
        Sensor(id_sensor=1, tipo_sensor="radar", estado="activo", id_zona=zonas["centro"]),
        Sensor(id_sensor=2, tipo_sensor="lazo", estado="mantenimiento", id_zona=zonas["centro"]),
    ])
    db_session.commit()
