#!/usr/bin/env python3
#
###################################################################
# Project: TraficSecure
# File: traficsecure_app/schemas.py
# Purpose: Pydantic models for API payloads + write validation.
#
# Description of code and how it works:
# - *In models accept the raw JSON body; every field is optional so the
#   required check can report all missing fields in one message.
# - to_model() runs required -> enum checks and builds the ORM row,
#   raising PayloadError (HTTP 400) on the first failed step.
# - *Out models describe the joined rows returned by the list routes.
#
# Author: TraficSecure Team
# Created: 2026-10-19
#
# Version: 0.3.1
# Last Modified: 2026-10-19 by TraficSecure Team
#
# Revision History:
# - 0.3.1 (2026-10-19): Zero readings stored as null; ids capped to INT range.
# - 0.3.0 (2026-10-19): Blank strings treated as missing.
# - 0.2.0 (2026-10-19): PayloadError + enum messages with aliases.
# - 0.1.0 (2026-10-19): Initial payload models.
###################################################################
#
from __future__ import annotations

from datetime import date, time
from typing import ClassVar, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import CondicionClima, Gravedad, TipoAccidente, TipoEvento
from .models import Accidente, Clima, EventoTrafico

DEFAULT_OPERATOR_ID = 2

# INT columns are 32-bit signed
INT_MIN = -2**31
INT_MAX = 2**31 - 1


class PayloadError(Exception):
    def __init__(self, message: str, allowed: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.allowed = allowed

    def to_dict(self) -> dict:
        out = {"error": self.message}
        if self.allowed is not None:
            out["permitidos"] = self.allowed
        return out


def _join_fields(fields: Sequence[str]) -> str:
    if len(fields) == 1:
        return fields[0]
    return "%s e %s" % (", ".join(fields[:-1]), fields[-1])


def _choice(cls, value, label: str):
    try:
        return cls(value)
    except ValueError:
        raise PayloadError("%s. Debe ser: %s" % (label, cls.describe()), allowed=cls.values())


# ------------------------------------------------------------------------------
# Request payloads
# ------------------------------------------------------------------------------

class _Payload(BaseModel):
    required: ClassVar[Tuple[str, ...]] = ()

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def check_required(self) -> None:
        # falsy counts as missing (0 is not a valid id)
        if any(not getattr(self, f) for f in self.required):
            raise PayloadError("Los campos %s son requeridos" % _join_fields(self.required))


class EventoIn(_Payload):
    required: ClassVar[Tuple[str, ...]] = ("tipo_evento", "fecha", "hora", "id_zona")

    tipo_evento: Optional[str] = None
    descripcion: Optional[str] = None
    fecha: Optional[date] = None
    hora: Optional[time] = None
    id_zona: Optional[int] = Field(None, ge=INT_MIN, le=INT_MAX)
    id_usuario_operador: Optional[int] = Field(None, ge=INT_MIN, le=INT_MAX)

    def to_model(self) -> EventoTrafico:
        self.check_required()
        tipo = _choice(TipoEvento, self.tipo_evento, "Tipo de evento no válido")
        return EventoTrafico(
            tipo_evento=tipo,
            descripcion=self.descripcion or "",
            fecha=self.fecha,
            hora=self.hora,
            id_zona=self.id_zona,
            id_usuario_operador=self.id_usuario_operador or DEFAULT_OPERATOR_ID,
        )


class AccidenteIn(_Payload):
    required: ClassVar[Tuple[str, ...]] = ("tipo", "gravedad", "fecha", "hora", "id_zona")

    tipo: Optional[str] = None
    gravedad: Optional[str] = None
    causa: Optional[str] = None
    fecha: Optional[date] = None
    hora: Optional[time] = None
    id_zona: Optional[int] = Field(None, ge=INT_MIN, le=INT_MAX)

    def to_model(self) -> Accidente:
        self.check_required()
        tipo = _choice(TipoAccidente, self.tipo, "Tipo de accidente no válido")
        gravedad = _choice(Gravedad, self.gravedad, "Gravedad no válida")
        return Accidente(
            tipo=tipo,
            gravedad=gravedad,
            causa=self.causa or "",
            fecha=self.fecha,
            hora=self.hora,
            id_zona=self.id_zona,
        )


class ClimaIn(_Payload):
    required: ClassVar[Tuple[str, ...]] = ("condicion", "fecha", "hora", "id_zona")

    temperatura: Optional[float] = None
    humedad: Optional[float] = None
    visibilidad: Optional[float] = None
    condicion: Optional[str] = None
    fecha: Optional[date] = None
    hora: Optional[time] = None
    id_zona: Optional[int] = Field(None, ge=INT_MIN, le=INT_MAX)
    id_usuario_operador: Optional[int] = Field(None, ge=INT_MIN, le=INT_MAX)

    def to_model(self) -> Clima:
        self.check_required()
        condicion = _choice(CondicionClima, self.condicion, "Condición no válida")
        return Clima(
            temperatura=self.temperatura or None,
            humedad=self.humedad or None,
            visibilidad=self.visibilidad or None,
            condicion=condicion,
            fecha=self.fecha,
            hora=self.hora,
            id_zona=self.id_zona,
            id_usuario_operador=self.id_usuario_operador or DEFAULT_OPERATOR_ID,
        )


# ------------------------------------------------------------------------------
# Responses
# ------------------------------------------------------------------------------

class CreatedOut(BaseModel):
    message: str
    id: int


class ZonaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id_zona: int
    nombre: str
    lng: Optional[float]
    lat: Optional[float]
    nivel_riesgo: Optional[str]


class EventoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id_evento: int
    tipo_evento: TipoEvento
    descripcion: Optional[str]
    fecha: date
    hora: time
    id_zona: int
    zona_nombre: str
    lng: Optional[float]
    lat: Optional[float]
    id_usuario_operador: Optional[int]


class AccidenteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id_accidente: int
    tipo: TipoAccidente
    gravedad: Gravedad
    causa: Optional[str]
    fecha: date
    hora: time
    id_zona: int
    zona_nombre: str


class ClimaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id_clima: int
    temperatura: Optional[float]
    humedad: Optional[float]
    visibilidad: Optional[float]
    condicion: CondicionClima
    fecha: date
    hora: time
    id_zona: int
    zona_nombre: str


class SensorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id_sensor: int
    tipo_sensor: str
    estado: Optional[str]
    id_zona: int
    zona_nombre: str
    lng: Optional[float]
    lat: Optional[float]
