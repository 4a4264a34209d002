"""Tests for the mapping-backed storage grips."""

from gripx import caching_grip
from gripx.storage import storage_json_grip, storage_string_grip


class TestStorageString:
    def test_default_when_missing(self):
        grip = storage_string_grip("lang", "en", {})
        assert grip.value == "en"

    def test_reads_existing_value(self):
        grip = storage_string_grip("lang", "en", {"lang": "de"})
        assert grip.value == "de"

    def test_writes_to_store(self):
        store = {}
        grip = storage_string_grip("lang", "en", store)
        assert grip.set("fr") == "fr"
        assert store == {"lang": "fr"}
        assert grip.value == "fr"

    def test_keys_are_independent(self):
        store = {"a": "1", "b": "2"}
        assert storage_string_grip("a", "", store).value == "1"
        assert storage_string_grip("b", "", store).value == "2"


class TestStorageJSON:
    def test_default_when_missing(self):
        grip = storage_json_grip("prefs", {"dark": False}, {})
        assert grip.value == {"dark": False}

    def test_round_trip(self):
        store = {}
        grip = storage_json_grip("prefs", {}, store)
        grip.set({"dark": True, "size": [1, 2]})
        assert store["prefs"] == '{"dark": true, "size": [1, 2]}'
        assert grip.value == {"dark": True, "size": [1, 2]}

    def test_composes_with_caching(self):
        store = {}
        grip = caching_grip(storage_json_grip("n", 0, store))
        assert grip.value == 0
        store["n"] = "5"  # out-of-band write
        assert grip.value == 0
        grip.expire()
        assert grip.value == 5
