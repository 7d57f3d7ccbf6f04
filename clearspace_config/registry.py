"""Wires the shared ClearspaceManager to the configured property store."""
from __future__ import annotations

import logging
from functools import lru_cache

from .config import Settings, get_settings
from .manager import ClearspaceManager
from .properties import InMemoryPropertyStore, PropertyStore, SQLitePropertyStore, XMLPropertyStore

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("xml", "sqlite", "memory")


def build_property_store(settings: Settings) -> PropertyStore:
    backend = settings.store_backend
    if backend == "xml":
        return XMLPropertyStore(settings.properties_path)
    if backend == "sqlite":
        return SQLitePropertyStore(settings.properties_path)
    if backend == "memory":
        return InMemoryPropertyStore()
    raise ValueError(f"Unknown property store backend {backend!r}; expected one of {', '.join(STORE_BACKENDS)}")


@lru_cache(maxsize=1)
def get_manager() -> ClearspaceManager:
    """Return the process-wide ClearspaceManager, creating it on first use."""
    settings = get_settings()
    logger.info("Loading Clearspace settings from %s store at %s", settings.store_backend, settings.properties_path)
    return ClearspaceManager(build_property_store(settings))
