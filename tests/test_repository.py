"""
Tests for the Repository - cache, recent buffer and persistence fallbacks.
"""

from uuid import uuid4

import pytest

from conftest import make_npc, make_place

from initiative.storage import (
    Create,
    CreateAndSave,
    DataStoreError,
    DataStoreFailed,
    Edit,
    MemoryDataStore,
    NameAlreadyExists,
    NotFound,
    Repository,
    Save,
)
from initiative.storage.repository import RECENT_MAX_LEN
from initiative.time.clock import Interval, Time
from initiative.world.field import Field
from initiative.world.npc import Npc, Species
from initiative.world.thing import thing_name


class FailingSaveStore(MemoryDataStore):
    """Loads fine, but refuses to save or delete."""

    def __init__(self):
        super().__init__()
        self.save_calls = 0
        self.delete_calls = 0

    def save_thing(self, thing):
        self.save_calls += 1
        raise DataStoreError("disk full")

    def delete_thing_by_uuid(self, uuid):
        self.delete_calls += 1
        raise DataStoreError("disk full")


class CountingStore(MemoryDataStore):
    def __init__(self):
        super().__init__()
        self.calls = []

    def save_thing(self, thing):
        self.calls.append("save_thing")
        super().save_thing(thing)

    def delete_thing_by_uuid(self, uuid):
        self.calls.append("delete_thing_by_uuid")
        super().delete_thing_by_uuid(uuid)


class TestRecent:
    """The recent buffer is bounded."""

    def test_push_recent_caps_length(self, repository):
        things = [make_npc(f"Npc {i}") for i in range(RECENT_MAX_LEN + 1)]
        for thing in things:
            repository.push_recent(thing)

        recent = repository.recent()
        assert len(recent) == RECENT_MAX_LEN
        assert things[0] not in recent
        assert recent[0] is things[1]
        assert recent[-1] is things[-1]

    def test_create_rejects_duplicate_name(self, repository):
        repository.modify(Create(make_npc("Penelope")))

        with pytest.raises(NameAlreadyExists) as exc:
            repository.modify(Create(make_npc("penelope")))

        assert "already in use" in exc.value.message
        assert len(repository.recent()) == 1


class TestSave:
    """Saving moves things from recent into the cache."""

    def test_save_moves_to_cache(self, repository, memory_store):
        thing = make_npc("Penelope")
        repository.modify(Create(thing))

        output = repository.save_thing_by_name("penelope")

        assert output == "`Penelope` (adult elf, she/her) was successfully saved."
        assert repository.recent() == []
        assert thing.uuid in repository.cache
        assert repository.is_saved(thing)
        assert len(memory_store.get_all_the_things()) == 1

    def test_saves_get_unique_uuids(self, repository):
        for name in ("Penelope", "Telemachus"):
            repository.modify(Create(make_npc(name)))
            repository.modify(Save(name))

        assert len(repository.cache) == 2

    def test_save_twice_is_an_error(self, repository):
        repository.modify(Create(make_npc("Penelope")))
        repository.save_thing_by_name("Penelope")

        with pytest.raises(NameAlreadyExists) as exc:
            repository.save_thing_by_name("Penelope")
        assert exc.value.message == "`Penelope` has already been saved to your `journal`"

    def test_save_unknown_name(self, repository):
        with pytest.raises(NotFound) as exc:
            repository.save_thing_by_name("Nobody")
        assert exc.value.message == 'No matches for "Nobody"'

    def test_save_failure_restores_recent(self):
        store = FailingSaveStore()
        repository = Repository(store)
        repository.init()

        first, target, last = make_npc("A"), make_npc("Penelope"), make_npc("Z")
        for thing in (first, target, last):
            repository.modify(Create(thing))

        with pytest.raises(DataStoreFailed) as exc:
            repository.save_thing_by_name("Penelope")

        assert exc.value.message == "Couldn't save `Penelope`"
        assert repository.recent() == [first, target, last]
        assert target.uuid is None
        assert repository.cache == {}
        assert repository.load_thing_by_name("Penelope") is target

    def test_create_and_save(self, repository, memory_store):
        thing = repository.modify(CreateAndSave(make_place("The Green Dragon")))

        assert repository.is_saved(thing)
        assert repository.recent() == []
        assert len(memory_store.things) == 1


class TestDelete:
    """Deleting from the journal or from recent."""

    def test_delete_recent_does_not_touch_store(self):
        store = CountingStore()
        repository = Repository(store)
        repository.init()
        repository.modify(Create(make_npc("Penelope")))

        output = repository.delete_thing_by_name("Penelope")

        assert output.startswith("Penelope deleted from recent entries.")
        assert store.calls == []
        assert repository.recent() == []

    def test_delete_saved(self, repository, memory_store):
        repository.modify(CreateAndSave(make_npc("Penelope")))

        assert repository.delete_thing_by_name("penelope") == "Penelope was successfully deleted."
        assert repository.cache == {}
        assert memory_store.things == {}

    def test_delete_absent(self, repository):
        with pytest.raises(NotFound) as exc:
            repository.delete_thing_by_name("Nobody")
        assert exc.value.message == "There is no entity named Nobody."

    def test_delete_survives_store_failure(self):
        store = FailingSaveStore()
        thing = make_npc("Penelope")
        thing.uuid = uuid4()
        store.things[thing.uuid] = thing
        repository = Repository(store)
        repository.init()

        assert repository.delete_thing_by_name("Penelope") == "Penelope was successfully deleted."
        assert store.delete_calls == 1
        assert repository.cache == {}


class TestEdit:
    """Edits apply the locked attributes of a diff."""

    def test_edit_recent(self, repository):
        original = make_npc("Penelope")
        repository.modify(Create(original))

        edited = repository.modify(Edit("Penelope", Npc(species=Field(Species.DWARF))))

        assert edited.species.value == Species.DWARF
        assert thing_name(edited) == "Penelope"
        assert repository.recent() == [edited]

    def test_edit_saved_persists(self, repository, memory_store):
        thing = repository.modify(CreateAndSave(make_npc("Penelope")))

        repository.modify(Edit("Penelope", Npc(species=Field(Species.GNOME))))

        stored = memory_store.get_all_the_things()
        assert stored[0].species.value == Species.GNOME
        assert repository.cache[thing.uuid].species.value == Species.GNOME

    def test_edit_missing(self, repository):
        with pytest.raises(NotFound) as exc:
            repository.modify(Edit("Nobody", Npc(species=Field(Species.ELF))))
        assert exc.value.message == "There is no character named Nobody."

    def test_rename_into_existing_name(self, repository):
        repository.modify(Create(make_npc("Penelope")))
        repository.modify(Create(make_npc("Helen")))

        with pytest.raises(NameAlreadyExists):
            repository.modify(Edit("Helen", Npc(name=Field("Penelope"))))


class TestInitAndTime:
    """Startup and the world clock."""

    def test_broken_store_disables_persistence(self, null_store):
        repository = Repository(null_store)
        repository.init()

        assert repository.data_store_enabled is False
        assert repository.get_time() == Time()

    def test_time_is_restored(self, memory_store):
        memory_store.set_value("time", "3:14:30:00")
        repository = Repository(memory_store)
        repository.init()

        assert repository.get_time() == Time(3, 14, 30, 0)

    def test_set_time_persists(self, repository, memory_store):
        repository.set_time(Time().checked_add(Interval.parse("1d")))
        assert memory_store.get_value("time") == "2:08:00:00"

    def test_set_time_without_store(self, null_store):
        repository = Repository(null_store)
        repository.init()
        repository.set_time(Time(2))

        assert repository.get_time() == Time(2)

    def test_journal_is_sorted(self, repository):
        for name in ("zed", "Alice", "bob"):
            repository.modify(CreateAndSave(make_npc(name)))

        assert [thing_name(thing) for thing in repository.journal()] == ["Alice", "bob", "zed"]
