#!/usr/bin/env python3
#
###################################################################
# Project: TraficSecure
# File: alembic/env.py
# Purpose: Alembic env that resolves the DB URL like the app and escapes % for ConfigParser.
#
# Description of code and how it works:
# - Loads .env explicitly from project root.
# - Uses traficsecure_app.config.database_url() (DATABASE_URL or DB_* parts).
# - Percent-escapes '%' to '%%' before setting sqlalchemy.url to satisfy ConfigParser.
# - Imports models' Base.metadata for autogeneration.
#
# Author: TraficSecure Team
# Created: 2026-10-19
#
# Version: 0.1.0
# Last Modified: 2026-10-19 by TraficSecure Team
#
# Revision History:
# - 0.1.0 (2026-10-19): Initial env.
###################################################################
#
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool

# Resolve project root (alembic/env.py -> project root)
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env explicitly (before the app reads its settings)
load_dotenv(PROJECT_ROOT / ".env")

from traficsecure_app.config import database_url  # noqa: E402
from traficsecure_app.database import Base  # noqa: E402
from traficsecure_app import models  # noqa: E402,F401

config = context.config

# Escape % to avoid ConfigParser interpolation errors
config.set_main_option("sqlalchemy.url", database_url().replace("%", "%%"))

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
