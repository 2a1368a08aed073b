"""Tests for AliasStore loading and atomic saving."""

import json
from unittest.mock import patch

import pytest

from ttynamed.aliases.store import AliasStore
from ttynamed.core.errors import ConfigLoadError, ConfigSaveError
from ttynamed.devices.identity import TtyIdentity


class TestAliasStoreLoad:
    """Tests for AliasStore.load()."""

    def test_missing_file_is_empty_store(self, store_path):
        store = AliasStore.load(store_path)
        assert len(store) == 0
        assert store.path == store_path
        assert not store_path.exists()

    def test_loads_entries(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({
            "ttys": {
                "gps": {"manufacturer": "u-blox AG", "model": "u-blox 7", "serial": "A1B2"},
                "bare": {},
            }
        }))

        store = AliasStore.load(store_path)

        assert store.get("gps") == TtyIdentity("u-blox AG", "u-blox 7", "A1B2")
        assert store.get("bare") == TtyIdentity()
        assert list(store) == ["bare", "gps"]

    @pytest.mark.parametrize("content", [
        "{not json",
        "",
        "[]",
        '{"ttys": []}',
        '{"aliases": {}}',
        '{"ttys": {}, "extra": 1}',
        '{"ttys": {"gps": "u-blox"}}',
        '{"ttys": {"gps": {"serial": 42}}}',
        '{"ttys": {"gps": {"vendor": "u-blox"}}}',
    ])
    def test_corrupt_store_raises(self, store_path, content):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(content)

        with pytest.raises(ConfigLoadError, match=str(store_path.name)):
            AliasStore.load(store_path)

    def test_unreadable_store_raises(self, store_path):
        store_path.mkdir(parents=True)  # a directory cannot be read as text

        with pytest.raises(ConfigLoadError, match="Error reading"):
            AliasStore.load(store_path)


class TestAliasStoreSave:
    """Tests for AliasStore.save()."""

    def test_round_trip(self, store_path):
        store = AliasStore(store_path, {
            "gps": TtyIdentity("u-blox AG", "u-blox 7", "A1B2"),
            "partial": TtyIdentity("FTDI", None, None),
            "anonymous": TtyIdentity(None, None, None),
            "unicode": TtyIdentity("Müller GmbH", "Gerät", "Ω1"),
        })

        store.save()
        reloaded = AliasStore.load(store_path)

        assert reloaded == store
        assert reloaded.get("anonymous") == TtyIdentity()

    def test_round_trip_empty(self, store_path):
        AliasStore(store_path).save()
        assert AliasStore.load(store_path) == AliasStore(store_path)

    def test_absent_fields_omitted_on_disk(self, store_path):
        AliasStore(store_path, {"gps": TtyIdentity("u-blox AG", None, None)}).save()
        document = json.loads(store_path.read_text())
        assert document == {"ttys": {"gps": {"manufacturer": "u-blox AG"}}}

    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "ttys.json"
        AliasStore(target).save()
        assert target.exists()

    def test_write_failure_keeps_previous_file(self, store_path):
        AliasStore(store_path, {"gps": TtyIdentity("u-blox AG", "u-blox 7", "A1B2")}).save()
        before = store_path.read_bytes()

        changed = AliasStore.load(store_path)
        changed.remove("gps")
        with patch("ttynamed.core.file_sync_utils.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(ConfigSaveError, match="disk full"):
                changed.save()

        assert store_path.read_bytes() == before
        leftovers = [p for p in store_path.parent.iterdir() if p != store_path]
        assert leftovers == []

    def test_encode_failure_keeps_previous_file(self, store_path):
        AliasStore(store_path, {"gps": TtyIdentity("u-blox AG")}).save()
        before = store_path.read_bytes()

        with patch.object(AliasStore, "encode", side_effect=ValueError("bad data")):
            with pytest.raises(ConfigSaveError, match="encode"):
                AliasStore.load(store_path).save()

        assert store_path.read_bytes() == before


class TestAliasStoreMapping:
    def test_names_for(self, store_path):
        identity = TtyIdentity("FTDI", "FT232R", "A1")
        store = AliasStore(store_path, {
            "b": identity,
            "a": identity,
            "c": TtyIdentity("FTDI", "FT232R", "A2"),
        })
        assert store.names_for(identity) == ["a", "b"]

    def test_set_and_remove(self, store_path):
        store = AliasStore(store_path)
        store.set("gps", TtyIdentity("u-blox AG"))
        assert "gps" in store
        assert store.remove("gps") == TtyIdentity("u-blox AG")
        assert "gps" not in store
