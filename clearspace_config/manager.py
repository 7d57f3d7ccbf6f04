"""Connection settings for the Clearspace integration."""
from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from typing import Optional

from .properties import PropertyStore

logger = logging.getLogger(__name__)

PROPERTY_PREFIX = "clearspace."
HOST_KEY = PROPERTY_PREFIX + "host"
PORT_KEY = PROPERTY_PREFIX + "port"
PATH_KEY = PROPERTY_PREFIX + "path"
SHARED_SECRET_KEY = PROPERTY_PREFIX + "sharedSecret"
SECURE_KEY = PROPERTY_PREFIX + "secure"

DEFAULT_PORT = 80
DEFAULT_PATH = "clearspace"
UNREACHABLE_TEST_HOST = "notlocalhost"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+\Z")
# Stored ports must fit a signed 32-bit int.
PORT_MIN = -(2**31)
PORT_MAX = 2**31 - 1


@dataclass(frozen=True)
class ConnectionSettings:
    host: Optional[str]
    port: int
    path: str
    shared_secret: Optional[str]
    secure: bool
    connection_uri: str


def parse_port(raw: str, default: int = DEFAULT_PORT) -> int:
    """Parse a port number, falling back to ``default`` when it is not an integer."""
    port: Optional[int] = None
    if _INTEGER_RE.match(raw):
        try:
            port = int(raw)
        except ValueError:
            # Longer than the interpreter allows for int(str).
            port = None
    if port is None or not PORT_MIN <= port <= PORT_MAX:
        logger.error("Invalid %s value %r, keeping %d", PORT_KEY, raw[:40], default)
        return default
    return port


def _equals_ignore_case(left: str, right: str) -> bool:
    if len(left) != len(right):
        return False
    return all(
        a == b or a.upper() == b.upper() or a.lower() == b.lower()
        for a, b in zip(left, right)
    )


def parse_secure(raw: Optional[str]) -> bool:
    if raw is None:
        return True
    return not (_equals_ignore_case(raw, "false") or raw == "0")


class ClearspaceManager:
    """Holds the Clearspace connection settings.

    Host, port and shared secret are written through to the property store as
    soon as they change; path and secure only live for the current process.
    Applications share one instance through
    :func:`clearspace_config.registry.get_manager`; tests construct their own
    around an in-memory store.
    """

    def __init__(self, properties: PropertyStore):
        self.properties = properties
        self.lock = threading.RLock()

        self._secure = parse_secure(properties.get(SECURE_KEY))
        self._host: Optional[str] = properties.get(HOST_KEY)

        self._port = DEFAULT_PORT
        port_str = properties.get(PORT_KEY)
        if port_str is not None:
            self._port = parse_port(port_str, self._port)

        path = properties.get(PATH_KEY)
        self._path = path if path is not None else DEFAULT_PATH
        self._shared_secret: Optional[str] = properties.get(SHARED_SECRET_KEY)

        logger.debug(
            "Created new ClearspaceManager instance: host=%s port=%d path=%s sharedSecret=%s secure=%s",
            self._host,
            self._port,
            self._path,
            "********" if self._shared_secret else None,
            "yes" if self._secure else "no",
        )

    def _persist(self, key: str, value: Optional[str]) -> None:
        if value is None:
            self.properties.remove(key)
        else:
            self.properties.put(key, value)

    @property
    def host(self) -> Optional[str]:
        return self._host

    @host.setter
    def host(self, value: Optional[str]) -> None:
        with self.lock:
            self._host = value
            self._persist(HOST_KEY, value)

    @property
    def port(self) -> int:
        return self._port

    @port.setter
    def port(self, value: int) -> None:
        with self.lock:
            self._port = value
            self._persist(PORT_KEY, str(value))

    @property
    def path(self) -> str:
        """Path component of the connection URI, without the leading ``/``."""
        return self._path

    @path.setter
    def path(self, value: str) -> None:
        with self.lock:
            self._path = value

    @property
    def shared_secret(self) -> Optional[str]:
        return self._shared_secret

    @shared_secret.setter
    def shared_secret(self, value: Optional[str]) -> None:
        with self.lock:
            self._shared_secret = value
            self._persist(SHARED_SECRET_KEY, value)

    @property
    def secure(self) -> bool:
        return self._secure

    @secure.setter
    def secure(self, value: bool) -> None:
        with self.lock:
            self._secure = value

    @property
    def connection_uri(self) -> str:
        with self.lock:
            scheme = "https" if self._secure else "http"
            if self._host is None:
                logger.warning("Building Clearspace URI without a host; %s is not set", HOST_KEY)
            return f"{scheme}://{self._host}:{self._port}/{self._path}"

    def test_connection(self) -> bool:
        """Placeholder connectivity check; performs no I/O.

        Fails only for the host ``notlocalhost``. Use
        :func:`clearspace_config.probe.probe_connection` for a real request.
        """
        return self._host != UNREACHABLE_TEST_HOST

    def snapshot(self) -> ConnectionSettings:
        with self.lock:
            return ConnectionSettings(
                host=self._host,
                port=self._port,
                path=self._path,
                shared_secret=self._shared_secret,
                secure=self._secure,
                connection_uri=self.connection_uri,
            )

    # Accessor-style API

    def get_host(self) -> Optional[str]:
        return self.host

    def set_host(self, host: Optional[str]) -> None:
        self.host = host

    def get_port(self) -> int:
        return self.port

    def set_port(self, port: int) -> None:
        self.port = port

    def get_path(self) -> str:
        return self.path

    def set_path(self, path: str) -> None:
        self.path = path

    def get_shared_secret(self) -> Optional[str]:
        return self.shared_secret

    def set_shared_secret(self, shared_secret: Optional[str]) -> None:
        self.shared_secret = shared_secret

    def is_secure(self) -> bool:
        return self.secure

    def set_secure(self, secure: bool) -> None:
        self.secure = secure

    def get_connection_uri(self) -> str:
        return self.connection_uri
