"""Clearspace connection settings backed by a persistent property store."""
from importlib.metadata import version

from .manager import ClearspaceManager, ConnectionSettings, parse_port
from .properties import InMemoryPropertyStore, PropertyStore, SQLitePropertyStore, XMLPropertyStore
from .registry import get_manager

__all__ = [
    "ClearspaceManager",
    "ConnectionSettings",
    "InMemoryPropertyStore",
    "PropertyStore",
    "SQLitePropertyStore",
    "XMLPropertyStore",
    "get_manager",
    "parse_port",
    "__version__",
]

try:
    __version__ = version("clearspace-settings")
except Exception:  # pragma: no cover - fallback when package metadata missing
    __version__ = "0.1.0"
