#!/usr/bin/env python3
#
###################################################################
# Project: TraficSecure
# File: traficsecure_app/enums.py
# Purpose: Closed value sets for enumerated columns.
#
# Description of code and how it works:
# - One str Enum per field; the member value is what gets stored.
# - Spanish values used by the first TraficSecure schema are accepted as
#   aliases through Enum._missing_ and resolve to the canonical member.
#
# Author: TraficSecure Team
# Created: 2026-10-19
#
# Version: 0.2.1
# Last Modified: 2026-10-19 by TraficSecure Team
#
# Revision History:
# - 0.2.1 (2026-10-19): Alias lookup is exact (no case folding or trimming).
# - 0.2.0 (2026-10-19): Spanish aliases.
# - 0.1.0 (2026-10-19): Initial value sets.
###################################################################
#
from __future__ import annotations

import enum
from typing import Dict, List


class _Choice(str, enum.Enum):
    @classmethod
    def _missing_(cls, value):
        # exact match only; "SLOW" or " lluvia" are not in the set
        if isinstance(value, str):
            canonical = ALIASES.get(cls.__name__, {}).get(value)
            if canonical is not None:
                return cls(canonical)
        return None

    @classmethod
    def values(cls) -> List[str]:
        return [m.value for m in cls]

    @classmethod
    def describe(cls) -> str:
        """'closure (cierre), detour (desvio), ...' for error messages."""
        aliases = ALIASES.get(cls.__name__, {})
        parts = []
        for m in cls:
            syn = [a for a, v in aliases.items() if v == m.value and a != m.value]
            parts.append("%s (%s)" % (m.value, "/".join(syn)) if syn else m.value)
        return ", ".join(parts)

    def __str__(self) -> str:
        return self.value


class TipoEvento(_Choice):
    CONGESTION = "congestion"
    CLOSURE = "closure"
    DETOUR = "detour"
    SLOW = "slow"


class TipoAccidente(_Choice):
    COLLISION = "collision"
    PEDESTRIAN_STRIKE = "pedestrian-strike"
    ROLLOVER = "rollover"
    OTHER = "other"


class Gravedad(_Choice):
    MINOR = "minor"
    MODERATE = "moderate"
    SEVERE = "severe"
    FATAL = "fatal"


class CondicionClima(_Choice):
    CLEAR = "clear"
    CLOUDY = "cloudy"
    RAIN = "rain"
    FOG = "fog"
    STORM = "storm"


ALIASES: Dict[str, Dict[str, str]] = {
    "TipoEvento": {
        "congestión": "congestion",
        "cierre": "closure",
        "desvio": "detour",
        "desvío": "detour",
        "lento": "slow",
    },
    "TipoAccidente": {
        "colisión": "collision",
        "colision": "collision",
        "atropello": "pedestrian-strike",
        "volcamiento": "rollover",
        "otro": "other",
    },
    "Gravedad": {
        "leve": "minor",
        "moderado": "moderate",
        "grave": "severe",
    },
    "CondicionClima": {
        "soleado": "clear",
        "despejado": "clear",
        "nublado": "cloudy",
        "lluvia": "rain",
        "niebla": "fog",
        "tormenta": "storm",
    },
}
