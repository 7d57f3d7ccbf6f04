"""Opt-in HTTP reachability check for the configured Clearspace service."""
from __future__ import annotations

import logging

import requests

from .manager import ClearspaceManager

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10


def probe_connection(manager: ClearspaceManager, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> bool:
    """Send a GET to the connection URI and report whether the service answered."""
    if manager.host is None:
        logger.warning("Skipping Clearspace probe: no host configured")
        return False

    url = manager.connection_uri
    try:
        response = requests.get(url, timeout=timeout, allow_redirects=False)
    except requests.RequestException as exc:
        logger.error("Failed to reach Clearspace at %s: %s", url, exc)
        return False

    if response.status_code >= 400:
        logger.warning("Unexpected response %s from %s", response.status_code, url)
        return False
    return True
