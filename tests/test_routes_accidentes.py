"""
tests/test_routes_accidentes.py — Tests for GET/POST /accidentes

Called by: pytest
Depends on: traficsecure_app/main.py
"""

import pytest

from traficsecure_app.models import Accidente


def _accidente(**kw):
    body = {
        "tipo": "collision",
        "gravedad": "moderate",
        "causa": "exceso de velocidad",
        "fecha": "2024-03-10",
        "hora": "17:20",
        "id_zona": 2,
    }
    body.update(kw)
    return body


def test_create_and_list_accidente(client, zonas):
    resp = client.post("/accidentes", json=_accidente())
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Accidente registrado exitosamente"
    assert body["id"] > 0

    rows = client.get("/accidentes").json()
    assert rows == [{
        "id_accidente": body["id"],
        "tipo": "collision",
        "gravedad": "moderate",
        "causa": "exceso de velocidad",
        "fecha": "2024-03-10",
        "hora": "17:20:00",
        "id_zona": 2,
        "zona_nombre": "Norte",
    }]


def test_causa_defaults_to_empty(client, zonas):
    body = _accidente()
    del body["causa"]
    assert client.post("/accidentes", json=body).status_code == 201
    assert client.get("/accidentes").json()[0]["causa"] == ""


@pytest.mark.parametrize("tipo, gravedad, stored", [
    ("atropello", "leve", ("pedestrian-strike", "minor")),
    ("colisión", "grave", ("collision", "severe")),
    ("volcamiento", "fatal", ("rollover", "fatal")),
    ("otro", "moderado", ("other", "moderate")),
])
def test_spanish_aliases(client, zonas, tipo, gravedad, stored):
    assert client.post("/accidentes", json=_accidente(tipo=tipo, gravedad=gravedad)).status_code == 201
    row = client.get("/accidentes").json()[0]
    assert (row["tipo"], row["gravedad"]) == stored


@pytest.mark.parametrize("field", ["tipo", "gravedad", "fecha", "hora", "id_zona"])
def test_missing_required_field(client, zonas, db_session, field):
    body = _accidente()
    del body[field]
    resp = client.post("/accidentes", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Los campos tipo, gravedad, fecha, hora e id_zona son requeridos"
    assert db_session.query(Accidente).count() == 0


def test_invalid_tipo(client, zonas):
    resp = client.post("/accidentes", json=_accidente(tipo="derrumbe"))
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"].startswith("Tipo de accidente no válido")
    assert body["permitidos"] == ["collision", "pedestrian-strike", "rollover", "other"]


def test_invalid_gravedad(client, zonas):
    resp = client.post("/accidentes", json=_accidente(gravedad="catastrofica"))
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"].startswith("Gravedad no válida")
    assert body["permitidos"] == ["minor", "moderate", "severe", "fatal"]


def test_tipo_checked_before_gravedad(client, zonas):
    resp = client.post("/accidentes", json=_accidente(tipo="x", gravedad="y"))
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Tipo de accidente no válido")


def test_accidentes_sorted_by_date_then_time_desc(client, zonas):
    for fecha, hora in [("2024-03-10", "09:00"), ("2024-03-11", "01:00"), ("2024-03-10", "21:00")]:
        client.post("/accidentes", json=_accidente(fecha=fecha, hora=hora))
    got = [(r["fecha"], r["hora"]) for r in client.get("/accidentes").json()]
    assert got == [("2024-03-11", "01:00:00"), ("2024-03-10", "21:00:00"), ("2024-03-10", "09:00:00")]


def test_store_error_on_write(client, database):
    database.drop_all()
    resp = client.post("/accidentes", json=_accidente())
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Error al guardar el accidente"
    assert body["details"]
