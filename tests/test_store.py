"""
Tests for the data stores.
"""

import json
from uuid import uuid4

import pytest

from conftest import make_npc, make_place

from initiative.storage import (
    DataStore,
    DataStoreError,
    JsonDataStore,
    MemoryDataStore,
    NullDataStore,
)
from initiative.storage.store import open_data_store
from initiative.world.npc import Gender, Species
from initiative.world.place import PlaceType


def saved(thing):
    thing.uuid = uuid4()
    return thing


class TestProtocol:
    """Every store satisfies the DataStore protocol."""

    @pytest.mark.parametrize("store", [MemoryDataStore(), NullDataStore()])
    def test_is_data_store(self, store):
        assert isinstance(store, DataStore)

    def test_json_store_is_data_store(self, tmp_path):
        assert isinstance(JsonDataStore(tmp_path), DataStore)


class TestNullDataStore:
    """The null store fails loudly so the repository can degrade."""

    def test_every_call_fails(self, null_store):
        with pytest.raises(DataStoreError):
            null_store.get_all_the_things()
        with pytest.raises(DataStoreError):
            null_store.get_value("time")
        with pytest.raises(DataStoreError):
            null_store.set_value("time", "1:08:00:00")
        with pytest.raises(DataStoreError):
            null_store.save_thing(saved(make_npc("Penelope")))
        with pytest.raises(DataStoreError):
            null_store.delete_thing_by_uuid(uuid4())


class TestMemoryDataStore:
    """In-memory store copies things in and out."""

    def test_stored_things_are_copies(self, memory_store):
        thing = saved(make_npc("Penelope"))
        memory_store.save_thing(thing)
        thing.name.unlock()
        thing.name.replace("Changed")

        [loaded] = memory_store.get_all_the_things()
        assert str(loaded.name) == "Penelope"

    def test_delete_missing_fails(self, memory_store):
        with pytest.raises(DataStoreError):
            memory_store.delete_thing_by_uuid(uuid4())

    def test_save_requires_uuid(self, memory_store):
        with pytest.raises(DataStoreError):
            memory_store.save_thing(make_npc("Penelope"))


class TestJsonDataStore:
    """File-backed store."""

    def test_round_trip_across_instances(self, tmp_path):
        npc = saved(make_npc("Penelope", Gender.NON_BINARY, Species.HALF_ELF))
        place = saved(make_place("The Green Dragon", PlaceType.TAVERN))

        store = JsonDataStore(tmp_path)
        store.save_thing(npc)
        store.save_thing(place)
        store.set_value("time", "2:10:00:00")

        reopened = JsonDataStore(tmp_path)
        things = {thing.uuid: thing for thing in reopened.get_all_the_things()}

        assert things[npc.uuid] == npc
        assert things[place.uuid] == place
        assert things[npc.uuid].species.is_locked
        assert reopened.get_value("time") == "2:10:00:00"
        assert reopened.get_value("missing") is None

    def test_save_replaces_by_uuid(self, tmp_path):
        store = JsonDataStore(tmp_path)
        thing = saved(make_npc("Penelope"))
        store.save_thing(thing)
        store.save_thing(thing)

        assert len(store.get_all_the_things()) == 1

    def test_delete(self, tmp_path):
        store = JsonDataStore(tmp_path)
        thing = saved(make_npc("Penelope"))
        store.save_thing(thing)
        store.delete_thing_by_uuid(thing.uuid)

        assert store.get_all_the_things() == []
        with pytest.raises(DataStoreError):
            store.delete_thing_by_uuid(thing.uuid)

    def test_backup_written(self, tmp_path):
        store = JsonDataStore(tmp_path)
        store.set_value("a", "1")
        store.set_value("b", "2")

        backup = json.loads((tmp_path / "key_value.json.bak").read_text())
        assert backup == {"a": "1"}

    def test_corrupt_file_raises(self, tmp_path):
        (tmp_path / "things.json").write_text("not json")
        store = JsonDataStore(tmp_path)

        with pytest.raises(DataStoreError):
            store.get_all_the_things()

    def test_records_are_tagged(self, tmp_path):
        store = JsonDataStore(tmp_path)
        store.save_thing(saved(make_place("The Green Dragon")))

        [record] = json.loads((tmp_path / "things.json").read_text())
        assert record["type"] == "place"
        assert record["subtype"] == "inn"


class TestOpenDataStore:
    """Store selection from configuration."""

    def test_kinds(self, tmp_path):
        assert isinstance(open_data_store("memory"), MemoryDataStore)
        assert isinstance(open_data_store("null"), NullDataStore)
        assert isinstance(open_data_store("json", tmp_path / "data"), JsonDataStore)

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            open_data_store("sqlite")
