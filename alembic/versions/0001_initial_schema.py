#!/usr/bin/env python3
#
###################################################################
# Project: TraficSecure
# File: alembic/versions/0001_initial_schema.py
# Purpose: Create Zona, Evento_Trafico, Accidente, Clima and Sensor.
#
# Description of code and how it works:
# - Zona.coordenadas is a POINT; child tables reference Zona.id_zona.
# - Enum columns carry the canonical (English) value sets.
#
# Author: TraficSecure Team
# Created: 2026-10-19
#
# Version: 0.1.0
# Last Modified: 2026-10-19 by TraficSecure Team
#
# Revision History:
# - 0.1.0 (2026-10-19): Initial schema.
###################################################################
#
from alembic import op
import sqlalchemy as sa

from traficsecure_app.models import Point

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

TIPO_EVENTO = ("congestion", "closure", "detour", "slow")
TIPO_ACCIDENTE = ("collision", "pedestrian-strike", "rollover", "other")
GRAVEDAD = ("minor", "moderate", "severe", "fatal")
CONDICION = ("clear", "cloudy", "rain", "fog", "storm")


def _zona_fk():
    return sa.Column("id_zona", sa.Integer, sa.ForeignKey("Zona.id_zona"), nullable=False, index=True)


def upgrade():
    op.create_table(
        "Zona",
        sa.Column("id_zona", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("nombre", sa.String(100), nullable=False),
        sa.Column("coordenadas", Point(), nullable=False),
        sa.Column("nivel_riesgo", sa.String(16), nullable=True),
    )
    op.create_table(
        "Evento_Trafico",
        sa.Column("id_evento", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("tipo_evento", sa.Enum(*TIPO_EVENTO, name="tipo_evento"), nullable=False),
        sa.Column("descripcion", sa.Text, nullable=True),
        sa.Column("fecha", sa.Date, nullable=False, index=True),
        sa.Column("hora", sa.Time, nullable=False),
        _zona_fk(),
        sa.Column("id_usuario_operador", sa.Integer, nullable=True),
    )
    op.create_table(
        "Accidente",
        sa.Column("id_accidente", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("tipo", sa.Enum(*TIPO_ACCIDENTE, name="tipo_accidente"), nullable=False),
        sa.Column("gravedad", sa.Enum(*GRAVEDAD, name="gravedad"), nullable=False),
        sa.Column("causa", sa.Text, nullable=True),
        sa.Column("fecha", sa.Date, nullable=False, index=True),
        sa.Column("hora", sa.Time, nullable=False),
        _zona_fk(),
    )
    op.create_table(
        "Clima",
        sa.Column("id_clima", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("temperatura", sa.Float, nullable=True),
        sa.Column("humedad", sa.Float, nullable=True),
        sa.Column("visibilidad", sa.Float, nullable=True),
        sa.Column("condicion", sa.Enum(*CONDICION, name="condicion"), nullable=False),
        sa.Column("fecha", sa.Date, nullable=False, index=True),
        sa.Column("hora", sa.Time, nullable=False),
        _zona_fk(),
        sa.Column("id_usuario_operador", sa.Integer, nullable=True),
    )
    op.create_table(
        "Sensor",
        sa.Column("id_sensor", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("tipo_sensor", sa.String(64), nullable=False),
        sa.Column("estado", sa.String(32), nullable=True),
        _zona_fk(),
    )


def downgrade():
    for table in ("Sensor", "Clima", "Accidente", "Evento_Trafico", "Zona"):
        op.drop_table(table)
