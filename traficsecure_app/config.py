#!/usr/bin/env python3
#
###################################################################
# Project: TraficSecure
# File: traficsecure_app/config.py
# Purpose: Environment configuration (.env aware).
#
# Description of code and how it works:
# - Loads .env once and exposes plain module-level settings.
# - DATABASE_URL wins; otherwise the URL is built from DB_* parts.
#
# Author: TraficSecure Team
# Created: 2026-10-19
#
# Version: 0.2.0
# Last Modified: 2026-10-19 by TraficSecure Team
#
# Revision History:
# - 0.2.0 (2026-10-19): DB_* parts + CORS origins.
# - 0.1.0 (2026-10-19): Initial settings.
###################################################################
#
from __future__ import annotations

import os
from typing import List
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()

# --- Environment / defaults ---
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int(os.getenv("DB_PORT", "3306"))
DB_USER = os.getenv("DB_USER", "root")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_NAME = os.getenv("DB_NAME", "TraficSecure1")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "4000"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")


def database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return "mysql+pymysql://{user}:{pw}@{host}:{port}/{name}?charset=utf8mb4".format(
        user=quote_plus(DB_USER),
        pw=quote_plus(DB_PASSWORD),
        host=DB_HOST,
        port=DB_PORT,
        name=DB_NAME,
    )


def cors_origins() -> List[str]:
    return [o.strip() for o in CORS_ORIGINS.split(",") if o.strip()]
