#!/usr/bin/env python3
#
###################################################################
# Project: TraficSecure
# File: traficsecure_app/main.py
# Purpose: FastAPI app (zones, events, accidents, weather, sensors)
#
# Description of code and how it works:
# - create_app() builds the app around one Database (injected or from env);
#   the lifespan pings it at startup and disposes the pool at shutdown.
# - A failed startup ping is logged; the app keeps serving and store-backed
#   routes answer 500 until the database is reachable.
# - Writes: validate (400) -> insert -> 201 {message, id}; store errors are
#   500 with a details string. Reads: joined SELECTs, store errors are 500.
# - Zone points are decomposed with ST_X/ST_Y into lng/lat.
#
# Author: TraficSecure Team
# Created: 2026-10-19
#
# Version: 0.4.0
# Last Modified: 2026-10-19 by TraficSecure Team
#
# Revision History:
# - 0.4.0 (2026-10-19): App factory + lifespan-owned Database.
# - 0.3.0 (2026-10-19): 400 for malformed bodies; catch-all 500 handler.
# - 0.2.0 (2026-10-19): Accident/weather/sensor routes.
# - 0.1.0 (2026-10-19): Zones + traffic events.
###################################################################
#

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import config
from .database import Database, get_db
from .logging_config import LOGGER_NAME, setup_logging
from .models import Accidente, Clima, EventoTrafico, Sensor, Zona
from .schemas import (
    AccidenteIn,
    AccidenteOut,
    ClimaIn,
    ClimaOut,
    CreatedOut,
    EventoIn,
    EventoOut,
    PayloadError,
    SensorOut,
    ZonaOut,
)

log = logging.getLogger(LOGGER_NAME)

ENDPOINTS = ["/zonas", "/eventos", "/accidentes", "/clima", "/sensores"]

router = APIRouter()

# ------------------------------------------------------------------------------
# Query helpers
# ------------------------------------------------------------------------------

def _lng():
    return func.ST_X(Zona.coordenadas).label("lng")


def _lat():
    return func.ST_Y(Zona.coordenadas).label("lat")


def _list(q, what: str):
    try:
        rows = q.all()
    except SQLAlchemyError as e:
        log.exception("Error al obtener %s: %s", what, e)
        return JSONResponse({"error": "Error al obtener %s" % what}, status_code=500)
    return [dict(r._mapping) for r in rows]


def _insert(db: Session, row, pk: str, error: str, message: str):
    try:
        db.add(row)
        db.flush()
        new_id = getattr(row, pk)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        log.exception("%s: %s", error, e)
        detail = getattr(e, "orig", None) or e
        return JSONResponse({"error": error, "details": str(detail)}, status_code=500)
    log.info("%s table=%s id=%s", message, row.__tablename__, new_id)
    return JSONResponse({"message": message, "id": new_id}, status_code=201)

# ------------------------------------------------------------------------------
# Root
# ------------------------------------------------------------------------------

@router.get("/")
def root(request: Request):
    return {
        "message": "¡Servidor TraficSecure funcionando!",
        "database": request.app.state.database.name,
        "endpoints": ENDPOINTS,
    }

# ------------------------------------------------------------------------------
# Zones
# ------------------------------------------------------------------------------

@router.get("/zonas", response_model=List[ZonaOut])
def list_zonas(db: Session = Depends(get_db)):
    q = db.query(
        Zona.id_zona,
        Zona.nombre,
        _lng(),
        _lat(),
        Zona.nivel_riesgo,
    ).order_by(Zona.id_zona.asc())
    return _list(q, "zonas")

# ------------------------------------------------------------------------------
# Traffic events
# ------------------------------------------------------------------------------

@router.get("/eventos", response_model=List[EventoOut])
def list_eventos(db: Session = Depends(get_db)):
    q = (
        db.query(
            EventoTrafico.id_evento,
            EventoTrafico.tipo_evento,
            EventoTrafico.descripcion,
            EventoTrafico.fecha,
            EventoTrafico.hora,
            EventoTrafico.id_zona,
            Zona.nombre.label("zona_nombre"),
            _lng(),
            _lat(),
            EventoTrafico.id_usuario_operador,
        )
        .join(Zona, EventoTrafico.id_zona == Zona.id_zona)
        .order_by(EventoTrafico.fecha.desc(), EventoTrafico.hora.desc())
    )
    return _list(q, "eventos")


@router.post("/eventos", status_code=201, response_model=CreatedOut)
def create_evento(payload: Optional[EventoIn] = None, db: Session = Depends(get_db)):
    row = (payload or EventoIn()).to_model()
    return _insert(db, row, "id_evento", "Error al guardar el evento", "Evento registrado exitosamente")

# ------------------------------------------------------------------------------
# Accidents
# ------------------------------------------------------------------------------

@router.post("/accidentes", status_code=201, response_model=CreatedOut)
def create_accidente(payload: Optional[AccidenteIn] = None, db: Session = Depends(get_db)):
    row = (payload or AccidenteIn()).to_model()
    return _insert(db, row, "id_accidente", "Error al guardar el accidente", "Accidente registrado exitosamente")


@router.get("/accidentes", response_model=List[AccidenteOut])
def list_accidentes(db: Session = Depends(get_db)):
    q = (
        db.query(
            Accidente.id_accidente,
            Accidente.tipo,
            Accidente.gravedad,
            Accidente.causa,
            Accidente.fecha,
            Accidente.hora,
            Accidente.id_zona,
            Zona.nombre.label("zona_nombre"),
        )
        .join(Zona, Accidente.id_zona == Zona.id_zona)
        .order_by(Accidente.fecha.desc(), Accidente.hora.desc())
    )
    return _list(q, "accidentes")

# ------------------------------------------------------------------------------
# Weather
# ------------------------------------------------------------------------------

@router.post("/clima", status_code=201, response_model=CreatedOut)
def create_clima(payload: Optional[ClimaIn] = None, db: Session = Depends(get_db)):
    row = (payload or ClimaIn()).to_model()
    return _insert(db, row, "id_clima", "Error al guardar datos climáticos", "Datos climáticos registrados exitosamente")


@router.get("/clima", response_model=List[ClimaOut])
def list_clima(db: Session = Depends(get_db)):
    q = (
        db.query(
            Clima.id_clima,
            Clima.temperatura,
            Clima.humedad,
            Clima.visibilidad,
            Clima.condicion,
            Clima.fecha,
            Clima.hora,
            Clima.id_zona,
            Zona.nombre.label("zona_nombre"),
        )
        .join(Zona, Clima.id_zona == Zona.id_zona)
        .order_by(Clima.fecha.desc(), Clima.hora.desc())
    )
    return _list(q, "datos climáticos")

# ------------------------------------------------------------------------------
# Sensors (read-only)
# ------------------------------------------------------------------------------

@router.get("/sensores", response_model=List[SensorOut])
def list_sensores(db: Session = Depends(get_db)):
    q = (
        db.query(
            Sensor.id_sensor,
            Sensor.tipo_sensor,
            Sensor.estado,
            Sensor.id_zona,
            Zona.nombre.label("zona_nombre"),
            _lng(),
            _lat(),
        )
        .join(Zona, Sensor.id_zona == Zona.id_zona)
        .order_by(Sensor.id_sensor.asc())
    )
    return _list(q, "sensores")

# ------------------------------------------------------------------------------
# Error handlers
# ------------------------------------------------------------------------------

async def _payload_error(request: Request, exc: PayloadError):
    log.info("Solicitud rechazada %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(exc.to_dict(), status_code=400)


async def _request_validation_error(request: Request, exc: RequestValidationError):
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        parts.append("%s: %s" % (".".join(loc) or "body", err.get("msg")))
    message = "Solicitud no válida: " + "; ".join(parts)
    log.info("Solicitud rechazada %s %s: %s", request.method, request.url.path, message)
    return JSONResponse({"error": message}, status_code=400)


async def _unhandled_error(request: Request, exc: Exception):
    log.exception("Error no capturado en %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": "Error interno del servidor"}, status_code=500)

# ------------------------------------------------------------------------------
# App factory
# ------------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    try:
        database.ping()
        if database.engine.dialect.name == "sqlite":
            database.create_all()
        log.info("Conectado a la base de datos - %s", database.name)
    except SQLAlchemyError as e:
        log.error("Error al conectar a la base de datos: %s", e)
    yield
    database.dispose()


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(title="TraficSecure", lifespan=lifespan)
    app.state.database = database or Database()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(PayloadError, _payload_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(Exception, _unhandled_error)
    app.include_router(router)
    return app


setup_logging()
app = create_app()


def run() -> None:
    import uvicorn

    log.info("Servidor TraficSecure corriendo en http://%s:%s", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
