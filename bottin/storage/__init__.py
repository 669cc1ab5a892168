"""
Pacchetto storage: interfaccia unica e due backend intercambiabili.

Il backend viene scelto da ``STORAGE_BACKEND`` in configurazione e
agganciato all'app in ``app.extensions["storage"]``.
"""

from __future__ import annotations

from typing import Any, Mapping

from flask import current_app

from .base import Storage
from .database import DatabaseStorage
from .memory import MemoryStorage

BACKENDS = {
    "sql": DatabaseStorage,
    "memory": MemoryStorage,
}


def build_storage(config: Mapping[str, Any]) -> Storage:
    """Istanzia il backend indicato in configurazione."""
    backend = (config.get("STORAGE_BACKEND") or "sql").lower()
    try:
        storage_cls = BACKENDS[backend]
    except KeyError:
        raise ValueError(
            f"STORAGE_BACKEND non valido: {backend!r} (ammessi: {', '.join(BACKENDS)})"
        ) from None
    return storage_cls()


def get_storage() -> Storage:
    """Storage dell'app corrente (da usare dentro un contesto Flask)."""
    return current_app.extensions["storage"]


__all__ = [
    "Storage",
    "DatabaseStorage",
    "MemoryStorage",
    "build_storage",
    "get_storage",
]
