import xml.etree.ElementTree as ET

import pytest

from clearspace_config.manager import ClearspaceManager
from clearspace_config.properties import InMemoryPropertyStore, SQLitePropertyStore, XMLPropertyStore


def test_in_memory_store_seed_and_remove():
    store = InMemoryPropertyStore({"a": "1"})
    assert store.get("a") == "1"
    store.remove("a")
    store.remove("missing")
    assert store.get("a") is None


def test_xml_store_missing_file_is_empty(tmp_path):
    store = XMLPropertyStore(tmp_path / "conf" / "openfire.xml")
    assert store.get("clearspace.host") is None
    store.remove("clearspace.host")
    assert not (tmp_path / "conf" / "openfire.xml").exists()


def test_xml_store_nests_dotted_keys(tmp_path):
    path = tmp_path / "conf" / "openfire.xml"
    store = XMLPropertyStore(path)
    store.put("clearspace.host", "cs.example.org")
    store.put("clearspace.port", "8080")

    root = ET.parse(path).getroot()
    assert root.tag == "jive"
    assert root.findtext("clearspace/host") == "cs.example.org"
    assert root.findtext("clearspace/port") == "8080"

    reopened = XMLPropertyStore(path)
    assert reopened.get("clearspace.host") == "cs.example.org"


def test_xml_store_overwrites_and_strips(tmp_path):
    path = tmp_path / "openfire.xml"
    path.write_text("<jive><clearspace><host>\n  old.example.org\n</host></clearspace></jive>", encoding="utf-8")
    store = XMLPropertyStore(path)
    assert store.get("clearspace.host") == "old.example.org"
    store.put("clearspace.host", "new.example.org")
    assert store.get("clearspace.host") == "new.example.org"


def test_xml_store_remove_prunes_empty_parents(tmp_path):
    path = tmp_path / "openfire.xml"
    store = XMLPropertyStore(path)
    store.put("clearspace.host", "h")
    store.put("clearspace.port", "80")
    store.put("other.value", "x")

    store.remove("clearspace.host")
    assert store.get("clearspace.port") == "80"
    store.remove("clearspace.port")

    root = ET.parse(path).getroot()
    assert root.find("clearspace") is None
    assert root.findtext("other/value") == "x"


def test_xml_store_rejects_empty_key(tmp_path):
    with pytest.raises(ValueError):
        XMLPropertyStore(tmp_path / "openfire.xml").put("", "x")


def test_sqlite_store(tmp_path):
    store = SQLitePropertyStore(tmp_path / "data" / "properties.db")
    assert store.get("clearspace.host") is None
    store.put("clearspace.host", "a")
    store.put("clearspace.host", "b")
    assert store.get("clearspace.host") == "b"
    store.remove("clearspace.host")
    store.remove("clearspace.host")
    assert store.get("clearspace.host") is None


@pytest.mark.parametrize("factory", [XMLPropertyStore, SQLitePropertyStore])
def test_manager_persists_through_file_stores(tmp_path, factory):
    path = tmp_path / "props"
    manager = ClearspaceManager(factory(path))
    manager.host = "cs.example.org"
    manager.port = 8443
    manager.shared_secret = "s3cret"

    reloaded = ClearspaceManager(factory(path))
    assert reloaded.host == "cs.example.org"
    assert reloaded.port == 8443
    assert reloaded.shared_secret == "s3cret"


@pytest.mark.parametrize("value", ["a\x01b", "line\r\nbreak", "nul\x00", "\ufffe", "lone\ud800"])
def test_xml_store_keeps_file_readable_for_unsafe_text(tmp_path, value):
    path = tmp_path / "openfire.xml"
    store = XMLPropertyStore(path)
    store.put("clearspace.host", value)
    store.put("clearspace.port", "8080")

    root = ET.parse(path).getroot()
    assert root.find("clearspace/host").get("encoding") == "base64"
    assert root.findtext("clearspace/port") == "8080"
    assert XMLPropertyStore(path).get("clearspace.host") == value


def test_xml_store_plain_value_replaces_encoded_one(tmp_path):
    path = tmp_path / "openfire.xml"
    store = XMLPropertyStore(path)
    store.put("clearspace.host", "a\x01b")
    store.put("clearspace.host", "cs.example.org")

    assert ET.parse(path).getroot().find("clearspace/host").get("encoding") is None
    assert store.get("clearspace.host") == "cs.example.org"


def test_manager_setters_survive_control_characters(tmp_path):
    path = tmp_path / "openfire.xml"
    manager = ClearspaceManager(XMLPropertyStore(path))
    manager.host = "a\x01b"
    manager.port = 8080
    manager.shared_secret = "\x07bell"

    reloaded = ClearspaceManager(XMLPropertyStore(path))
    assert reloaded.host == "a\x01b"
    assert reloaded.port == 8080
    assert reloaded.shared_secret == "\x07bell"
