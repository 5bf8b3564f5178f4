"""Persistence: the repository, its data stores and the export document."""

from .store import DataStore, DataStoreError, JsonDataStore, MemoryDataStore, NullDataStore
from .repository import (
    Change,
    Create,
    CreateAndSave,
    DataStoreFailed,
    Edit,
    NameAlreadyExists,
    NotFound,
    Repository,
    RepositoryError,
    Save,
)

__all__ = [
    # Stores
    "DataStore",
    "DataStoreError",
    "JsonDataStore",
    "MemoryDataStore",
    "NullDataStore",
    # Repository
    "Repository",
    "RepositoryError",
    "NameAlreadyExists",
    "NotFound",
    "DataStoreFailed",
    # Changes
    "Change",
    "Create",
    "CreateAndSave",
    "Save",
    "Edit",
]
