"""Runtime configuration helpers."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    store_backend: str = "xml"
    properties_path: Path = Path("conf") / "openfire.xml"
    host: str = "127.0.0.1"
    port: int = 9095
    log_level: str = "info"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    store_backend = os.getenv("CLEARSPACE_STORE_BACKEND", "xml").strip().lower()
    properties_path = Path(os.getenv("CLEARSPACE_PROPERTIES_PATH", str(Settings.properties_path))).expanduser()
    host = os.getenv("CLEARSPACE_SERVICE_HOST", "127.0.0.1")
    port = int(os.getenv("CLEARSPACE_SERVICE_PORT", "9095"))
    log_level = os.getenv("CLEARSPACE_LOG_LEVEL", "info").lower()
    return Settings(
        store_backend=store_backend,
        properties_path=properties_path,
        host=host,
        port=port,
        log_level=log_level,
    )
