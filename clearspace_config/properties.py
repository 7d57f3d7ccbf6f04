"""Key-value property stores backing the Clearspace settings."""
from __future__ import annotations

import base64
import logging
import re
import sqlite3
import threading
import xml.etree.ElementTree as ET
from contextlib import closing
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

# Characters XML 1.0 cannot carry, plus CR which parsers normalize to LF.
_XML_UNSAFE_RE = re.compile("[^\t\n\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")
BASE64_ENCODING = "base64"


class PropertyStore(Protocol):
    """The get/put/remove capability the settings manager relies on."""

    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class InMemoryPropertyStore:
    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def put(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)


class XMLPropertyStore:
    """Dotted keys stored as nested elements of an XML document.

    ``clearspace.host`` lives at ``<jive><clearspace><host>...``. The file is
    re-read on every ``get`` so edits made by other processes are visible.
    """

    def __init__(self, path: Path, root_tag: str = "jive"):
        self.path = Path(path)
        self.root_tag = root_tag
        self.lock = threading.Lock()

    def _load(self) -> ET.Element:
        if not self.path.exists():
            return ET.Element(self.root_tag)
        return ET.parse(self.path).getroot()

    def _write(self, root: ET.Element) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tree = ET.ElementTree(root)
        ET.indent(tree)
        tree.write(self.path, encoding="utf-8", xml_declaration=True)

    @staticmethod
    def _split(key: str) -> List[str]:
        parts = [part for part in key.split(".") if part]
        if not parts:
            raise ValueError(f"Invalid property name: {key!r}")
        return parts

    def get(self, key: str) -> Optional[str]:
        with self.lock:
            node = self._load()
        for part in self._split(key):
            node = node.find(part)
            if node is None:
                return None
        if node.text is None:
            return None
        if node.get("encoding") == BASE64_ENCODING:
            return base64.b64decode(node.text.strip()).decode("utf-8", "surrogatepass")
        return node.text.strip()

    def put(self, key: str, value: str) -> None:
        with self.lock:
            root = self._load()
            node = root
            for part in self._split(key):
                child = node.find(part)
                if child is None:
                    child = ET.SubElement(node, part)
                node = child
            if _XML_UNSAFE_RE.search(value):
                logger.debug("Storing %s base64-encoded; value is not valid XML text", key)
                node.set("encoding", BASE64_ENCODING)
                node.text = base64.b64encode(value.encode("utf-8", "surrogatepass")).decode("ascii")
            else:
                node.attrib.pop("encoding", None)
                node.text = value
            self._write(root)

    def remove(self, key: str) -> None:
        with self.lock:
            root = self._load()
            chain = [root]
            for part in self._split(key):
                child = chain[-1].find(part)
                if child is None:
                    return
                chain.append(child)
            # Drop the element, then any ancestors left without children.
            for parent, child in zip(reversed(chain[:-1]), reversed(chain[1:])):
                if child is chain[-1] or (len(child) == 0 and not (child.text or "").strip()):
                    parent.remove(child)
                else:
                    break
            self._write(root)


class SQLitePropertyStore:
    """Properties kept in a single ``properties`` table."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def ensure_schema(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with closing(self._connect()) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS properties (
                    name TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()

    def get(self, key: str) -> Optional[str]:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT value FROM properties WHERE name = ?", (key,)).fetchone()
        if row is None:
            return None
        return str(row[0])

    def put(self, key: str, value: str) -> None:
        with closing(self._connect()) as conn:
            conn.execute(
                """
                INSERT INTO properties (name, value)
                VALUES (?, ?)
                ON CONFLICT(name) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )
            conn.commit()

    def remove(self, key: str) -> None:
        with closing(self._connect()) as conn:
            removed = conn.execute("DELETE FROM properties WHERE name = ?", (key,)).rowcount
            conn.commit()
        if not removed:
            logger.debug("Property %s was not set; nothing to remove", key)
