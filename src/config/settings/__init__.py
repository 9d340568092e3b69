"""Agregador de settings do cliente Viber.

Re-exporta as settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.viber import ViberSettings, get_viber_settings

__all__ = [
    "ViberSettings",
    "get_viber_settings",
]
