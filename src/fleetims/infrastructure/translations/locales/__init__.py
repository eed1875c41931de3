"""Bundled message catalogs, keyed by locale code."""

from typing import Any

from fleetims.infrastructure.translations.locales import en_us, es_mx

LOCALES: dict[str, dict[str, dict[str, Any]]] = {
    "es-MX": es_mx.MESSAGES,
    "en-US": en_us.MESSAGES,
}

__all__ = ["LOCALES"]
