"""CLI entrypoint for launching the Clearspace settings service with Uvicorn."""
from __future__ import annotations

import logging

import uvicorn

from .api import app
from .config import get_settings
from .registry import get_manager


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")

    manager = get_manager()
    logging.info("Serving Clearspace settings (host=%s, port=%d)", manager.host, manager.port)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
