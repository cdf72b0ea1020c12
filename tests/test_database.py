"""
tests/test_database.py — Tests for database.py, the POINT column and startup

Called by: pytest
Depends on: traficsecure_app/database.py, traficsecure_app/models.py
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func

from traficsecure_app.database import Database, parse_wkt_point
from traficsecure_app.main import create_app
from traficsecure_app.models import Zona


@pytest.mark.parametrize("wkt, expected", [
    ("POINT(-74.08 4.6)", (-74.08, 4.6)),
    ("point ( 1 2 )", (1.0, 2.0)),
    (b"POINT(3.5 -7)", (3.5, -7.0)),
    ("LINESTRING(0 0, 1 1)", None),
    (None, None),
])
def test_parse_wkt_point(wkt, expected):
    assert parse_wkt_point(wkt) == expected


def test_point_column_round_trip(db_session):
    db_session.add(Zona(nombre="Sur", coordenadas=(-74.1, 4.57), nivel_riesgo="bajo"))
    db_session.commit()
    db_session.expunge_all()

    zona = db_session.query(Zona).one()
    assert zona.coordenadas == pytest.approx((-74.1, 4.57))
    lng, lat = db_session.query(func.ST_X(Zona.coordenadas), func.ST_Y(Zona.coordenadas)).one()
    assert (lng, lat) == pytest.approx((-74.1, 4.57))


def test_sqlite_foreign_keys_enabled(database):
    with database.engine.connect() as conn:
        assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1


def test_database_name_from_url(tmp_path):
    db = Database("sqlite:///%s" % (tmp_path / "trafico.db"))
    try:
        assert db.name.endswith("trafico.db")
    finally:
        db.dispose()


def test_unreachable_store_keeps_app_running(tmp_path):
    db = Database("sqlite:///%s" % (tmp_path / "missing" / "dir" / "trafico.db"))
    app = create_app(db)
    with TestClient(app) as c:
        resp = c.get("/")
        assert resp.status_code == 200
        assert resp.json()["database"].endswith("trafico.db")

        resp = c.get("/zonas")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Error al obtener zonas"}


def test_file_sqlite_tables_created_on_startup(tmp_path):
    db = Database("sqlite:///%s" % (tmp_path / "trafico.db"))
    with TestClient(create_app(db)) as c:
        assert c.get("/zonas").json() == []
