"""
Data store abstraction.

Separates persistence from the repository for testability. Every call may
fail with DataStoreError; the repository decides how to degrade.
"""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable
from uuid import UUID

from pydantic import ValidationError

from ..world.thing import Thing, clone
from .schema import from_record, things_adapter, to_record

logger = logging.getLogger(__name__)


class DataStoreError(Exception):
    """A persistence call failed."""


@runtime_checkable
class DataStore(Protocol):
    """
    Storage interface for things and key/value pairs.

    Implementations:
    - JsonDataStore: File-based persistence (production)
    - MemoryDataStore: In-memory storage (testing)
    - NullDataStore: No persistence at all (ephemeral mode)
    """

    def get_all_the_things(self) -> list[Thing]:
        """Load every persisted thing."""
        ...

    def get_value(self, key: str) -> str | None:
        """Read a value. Returns None if the key is absent."""
        ...

    def set_value(self, key: str, value: str) -> None:
        """Write a value."""
        ...

    def save_thing(self, thing: Thing) -> None:
        """Insert or replace a thing, keyed by its uuid."""
        ...

    def delete_thing_by_uuid(self, uuid: UUID) -> None:
        """Delete a thing. Raises DataStoreError if it isn't there."""
        ...


class NullDataStore:
    """A store that refuses everything. Used when nothing can be persisted."""

    def get_all_the_things(self) -> list[Thing]:
        raise DataStoreError("no data store available")

    def get_value(self, key: str) -> str | None:
        raise DataStoreError("no data store available")

    def set_value(self, key: str, value: str) -> None:
        raise DataStoreError("no data store available")

    def save_thing(self, thing: Thing) -> None:
        raise DataStoreError("no data store available")

    def delete_thing_by_uuid(self, uuid: UUID) -> None:
        raise DataStoreError("no data store available")


class MemoryDataStore:
    """
    In-memory storage for testing.

    No file I/O - all data lives in memory. Things are copied on the way
    in and out so callers can't mutate stored state by accident.
    """

    def __init__(self):
        self.things: dict[UUID, Thing] = {}
        self.key_value: dict[str, str] = {}

    def get_all_the_things(self) -> list[Thing]:
        return [clone(thing) for thing in self.things.values()]

    def get_value(self, key: str) -> str | None:
        return self.key_value.get(key)

    def set_value(self, key: str, value: str) -> None:
        self.key_value[key] = value

    def save_thing(self, thing: Thing) -> None:
        if thing.uuid is None:
            raise DataStoreError("cannot save a thing without a uuid")
        self.things[thing.uuid] = clone(thing)

    def delete_thing_by_uuid(self, uuid: UUID) -> None:
        if uuid not in self.things:
            raise DataStoreError(f"no thing with uuid {uuid}")
        del self.things[uuid]

    def clear(self) -> None:
        """Clear all data (test utility)."""
        self.things.clear()
        self.key_value.clear()


class JsonDataStore:
    """
    File-based storage using JSON.

    Layout inside data_dir:
    - things.json: list of thing records
    - key_value.json: flat string map

    The previous version of a file is kept as *.json.bak on every write.
    """

    THINGS_FILE = "things.json"
    KEY_VALUE_FILE = "key_value.json"

    def __init__(self, data_dir: Path | str = "data"):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.things_file = self.data_dir / self.THINGS_FILE
        self.key_value_file = self.data_dir / self.KEY_VALUE_FILE

    # -------------------------------------------------------------------------
    # File helpers
    # -------------------------------------------------------------------------

    def _write(self, path: Path, text: str) -> None:
        try:
            if path.exists():
                backup = path.with_suffix(".json.bak")
                backup.write_text(path.read_text(encoding="utf-8"), encoding="utf-8")
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise DataStoreError(f"failed to write {path.name}") from e

    def _load_things(self) -> list[Thing]:
        if not self.things_file.exists():
            return []
        try:
            records = things_adapter.validate_json(self.things_file.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.error(f"Failed to read {self.things_file}: {e}")
            raise DataStoreError(f"failed to read {self.things_file.name}") from e
        return [from_record(record) for record in records]

    def _save_things(self, things: list[Thing]) -> None:
        records = [to_record(thing) for thing in things]
        self._write(self.things_file, things_adapter.dump_json(records, indent=2).decode("utf-8"))

    def _load_key_value(self) -> dict[str, str]:
        if not self.key_value_file.exists():
            return {}
        try:
            data = json.loads(self.key_value_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read {self.key_value_file}: {e}")
            raise DataStoreError(f"failed to read {self.key_value_file.name}") from e
        if not isinstance(data, dict):
            raise DataStoreError(f"{self.key_value_file.name} is not an object")
        return data

    # -------------------------------------------------------------------------
    # DataStore
    # -------------------------------------------------------------------------

    def get_all_the_things(self) -> list[Thing]:
        return self._load_things()

    def get_value(self, key: str) -> str | None:
        return self._load_key_value().get(key)

    def set_value(self, key: str, value: str) -> None:
        data = self._load_key_value()
        data[key] = value
        self._write(self.key_value_file, json.dumps(data, indent=2))

    def save_thing(self, thing: Thing) -> None:
        if thing.uuid is None:
            raise DataStoreError("cannot save a thing without a uuid")
        things = [t for t in self._load_things() if t.uuid != thing.uuid]
        things.append(thing)
        self._save_things(things)

    def delete_thing_by_uuid(self, uuid: UUID) -> None:
        things = self._load_things()
        remaining = [t for t in things if t.uuid != uuid]
        if len(remaining) == len(things):
            raise DataStoreError(f"no thing with uuid {uuid}")
        self._save_things(remaining)


def open_data_store(kind: str, data_dir: Path | str = "data") -> DataStore:
    """Build the configured store. A JSON store that can't be created degrades to null."""
    if kind == "memory":
        return MemoryDataStore()
    if kind == "null":
        return NullDataStore()
    if kind != "json":
        raise ValueError(f"Unknown data store: {kind!r}")

    try:
        return JsonDataStore(data_dir)
    except OSError as e:
        logger.warning(f"Cannot use {data_dir} for storage, continuing without persistence: {e}")
        return NullDataStore()
