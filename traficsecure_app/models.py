#!/usr/bin/env python3
#
###################################################################
# Project: TraficSecure
# File: traficsecure_app/models.py
# Purpose: ORM models (MySQL via SQLAlchemy 2.x)
#
# Description of code and how it works:
# - Zona, Evento_Trafico, Accidente, Clima and Sensor tables.
# - Point: POINT column written with ST_GeomFromText, read as WKT and
#   decomposed with ST_X/ST_Y in queries (lng/lat).
#
# Author: TraficSecure Team
# Created: 2026-10-19
#
# Version: 0.2.0
# Last Modified: 2026-10-19 by TraficSecure Team
#
# Revision History:
# - 0.2.0 (2026-10-19): Enum columns backed by enums.py value sets.
# - 0.1.0 (2026-10-19): Initial tables.
###################################################################
#
from sqlalchemy import Column, Date, Enum, Float, ForeignKey, Integer, String, Text, Time, func
from sqlalchemy.types import UserDefinedType

from .database import Base, parse_wkt_point
from .enums import CondicionClima, Gravedad, TipoAccidente, TipoEvento


class Point(UserDefinedType):
    """Geometry POINT; Python side is a (lng, lat) tuple."""

    cache_ok = True

    def get_col_spec(self, **kw):
        return "POINT"

    def bind_expression(self, bindvalue):
        return func.ST_GeomFromText(bindvalue, type_=self)

    def column_expression(self, col):
        return func.ST_AsText(col, type_=self)

    def bind_processor(self, dialect):
        def process(value):
            if value is None or isinstance(value, str):
                return value
            lng, lat = value
            return "POINT(%r %r)" % (float(lng), float(lat))
        return process

    def result_processor(self, dialect, coltype):
        return parse_wkt_point


def _enum(cls, name):
    # store member values ('closure'), not member names ('CLOSURE')
    return Enum(cls, name=name, values_callable=lambda e: [m.value for m in e], validate_strings=True)


class Zona(Base):
    __tablename__ = "Zona"

    id_zona = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(100), nullable=False)
    coordenadas = Column(Point(), nullable=False)
    nivel_riesgo = Column(String(16), nullable=True)


class EventoTrafico(Base):
    __tablename__ = "Evento_Trafico"

    id_evento = Column(Integer, primary_key=True, autoincrement=True)
    tipo_evento = Column(_enum(TipoEvento, "tipo_evento"), nullable=False)
    descripcion = Column(Text, nullable=True)
    fecha = Column(Date, nullable=False, index=True)
    hora = Column(Time, nullable=False)
    id_zona = Column(Integer, ForeignKey("Zona.id_zona"), nullable=False, index=True)
    id_usuario_operador = Column(Integer, nullable=True)


class Accidente(Base):
    __tablename__ = "Accidente"

    id_accidente = Column(Integer, primary_key=True, autoincrement=True)
    tipo = Column(_enum(TipoAccidente, "tipo_accidente"), nullable=False)
    gravedad = Column(_enum(Gravedad, "gravedad"), nullable=False)
    causa = Column(Text, nullable=True)
    fecha = Column(Date, nullable=False, index=True)
    hora = Column(Time, nullable=False)
    id_zona = Column(Integer, ForeignKey("Zona.id_zona"), nullable=False, index=True)


class Clima(Base):
    __tablename__ = "Clima"

    id_clima = Column(Integer, primary_key=True, autoincrement=True)
    temperatura = Column(Float, nullable=True)
    humedad = Column(Float, nullable=True)
    visibilidad = Column(Float, nullable=True)
    condicion = Column(_enum(CondicionClima, "condicion"), nullable=False)
    fecha = Column(Date, nullable=False, index=True)
    hora = Column(Time, nullable=False)
    id_zona = Column(Integer, ForeignKey("Zona.id_zona"), nullable=False, index=True)
    id_usuario_operador = Column(Integer, nullable=True)


class Sensor(Base):
    __tablename__ = "Sensor"

    id_sensor = Column(Integer, primary_key=True, autoincrement=True)
    tipo_sensor = Column(String(64), nullable=False)
    estado = Column(String(32), nullable=True)
    id_zona = Column(Integer, ForeignKey("Zona.id_zona"), nullable=False, index=True)
