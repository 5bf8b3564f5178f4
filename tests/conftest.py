"""
Pytest fixtures for initiative.sh tests.

Provides in-memory and failing stores and a seeded session.
"""

import pytest

from initiative import App
from initiative.app.meta import AppMeta
from initiative.storage import MemoryDataStore, NullDataStore, Repository
from initiative.world.field import Field
from initiative.world.npc import Age, Gender, Npc, Species
from initiative.world.place import Place, PlaceType

SEED = 1234


@pytest.fixture
def memory_store():
    """In-memory data store for testing."""
    return MemoryDataStore()


@pytest.fixture
def null_store():
    """Store that fails every call."""
    return NullDataStore()


@pytest.fixture
def repository(memory_store):
    """Initialized repository backed by the memory store."""
    repository = Repository(memory_store)
    repository.init()
    return repository


@pytest.fixture
def app_meta(memory_store):
    """Seeded session context with an initialized repository."""
    meta = AppMeta.new(memory_store, seed=SEED)
    meta.repository.init()
    return meta


@pytest.fixture
def app(memory_store):
    """Seeded app with an in-memory journal."""
    app = App(memory_store, seed=SEED)
    app.init()
    return app


def make_npc(name: str, gender: Gender = Gender.FEMININE, species: Species = Species.ELF) -> Npc:
    return Npc(
        name=Field(name),
        gender=Field(gender),
        age=Field(Age.ADULT),
        age_years=Field(35),
        species=Field(species),
    )


def make_place(name: str, subtype: PlaceType = PlaceType.INN) -> Place:
    return Place(name=Field(name), subtype=Field(subtype))


@pytest.fixture
def npc():
    """Sample character, not yet in any repository."""
    return make_npc("Odysseus", Gender.MASCULINE, Species.HUMAN)


@pytest.fixture
def place():
    """Sample inn."""
    return make_place("The Prancing Pony")
