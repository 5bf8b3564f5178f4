"""
The repository: every thing the session knows about.

Saved things live in the cache (keyed by uuid and mirrored in the data
store); freshly generated things live in the bounded recent buffer until
the user saves them. A thing is never in both places at once.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union
from uuid import UUID, uuid4

from ..time.clock import Time
from ..world.thing import Thing, apply_diff, clone, names_match, thing_name
from .store import DataStore, DataStoreError

if TYPE_CHECKING:
    from .export import ExportData

logger = logging.getLogger(__name__)

RECENT_MAX_LEN = 100


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------

class RepositoryError(Exception):
    """A repository operation failed. The message is user-facing."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NameAlreadyExists(RepositoryError):
    def __init__(self, message: str, existing: Thing | None = None):
        super().__init__(message)
        self.existing = existing


class NotFound(RepositoryError):
    pass


class DataStoreFailed(RepositoryError):
    pass


# -----------------------------------------------------------------------------
# Changes
# -----------------------------------------------------------------------------

@dataclass
class Create:
    """Add a generated thing to the recent buffer."""
    thing: Thing


@dataclass
class CreateAndSave:
    """Add a thing straight to the journal."""
    thing: Thing


@dataclass
class Save:
    """Move a recent thing into the journal."""
    name: str


@dataclass
class Edit:
    """Apply the locked attributes of diff to the thing called name."""
    name: str
    diff: Thing
    uuid: UUID | None = None


Change = Union[Create, CreateAndSave, Save, Edit]


# -----------------------------------------------------------------------------
# Repository
# -----------------------------------------------------------------------------

class Repository:
    """
    Owns the cache, the recent buffer, the world clock and the data store.

    Store failures never escape as DataStoreError: they either degrade to
    ephemeral behaviour or surface as a RepositoryError with a message.
    """

    def __init__(self, data_store: DataStore):
        self.data_store = data_store
        self.data_store_enabled = False
        self.cache: dict[UUID, Thing] = {}
        self._recent: deque[Thing] = deque(maxlen=RECENT_MAX_LEN)
        self._time = Time()

    def init(self) -> None:
        """Load persisted things and the clock. A broken store is not fatal."""
        try:
            things = self.data_store.get_all_the_things()
        except DataStoreError as e:
            logger.warning(f"Data store unavailable, continuing without persistence: {e}")
        else:
            self.cache = {thing.uuid: thing for thing in things if thing.uuid is not None}
            self.data_store_enabled = True
            logger.info(f"Loaded {len(self.cache)} thing(s) from the data store")

        try:
            value = self.data_store.get_value("time")
        except DataStoreError:
            value = None

        if value:
            time = Time.parse(value)
            if time is not None:
                self._time = time
            else:
                logger.warning(f"Ignoring unreadable stored time: {value!r}")

    # -------------------------------------------------------------------------
    # Recent
    # -------------------------------------------------------------------------

    def push_recent(self, thing: Thing) -> None:
        """Append to recent, evicting the oldest entry when full."""
        self._recent.append(thing)

    def recent(self) -> list[Thing]:
        return list(self._recent)

    def _recent_index(self, name: str) -> int | None:
        for index, thing in enumerate(self._recent):
            if names_match(thing, name):
                return index
        return None

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def _cached_by_name(self, name: str) -> Thing | None:
        for thing in self.cache.values():
            if names_match(thing, name):
                return thing
        return None

    def load_thing_by_name(self, name: str) -> Thing | None:
        """Case-insensitive lookup, journal first."""
        thing = self._cached_by_name(name)
        if thing is not None:
            return thing

        index = self._recent_index(name)
        return self._recent[index] if index is not None else None

    def is_saved(self, thing: Thing) -> bool:
        return thing.uuid is not None and thing.uuid in self.cache

    def journal(self) -> list[Thing]:
        return sorted(self.cache.values(), key=lambda thing: thing_name(thing).lower())

    def all_things(self) -> list[Thing]:
        return list(self.cache.values()) + self.recent()

    # -------------------------------------------------------------------------
    # Save / delete
    # -------------------------------------------------------------------------

    def save_thing_by_name(self, name: str) -> str:
        thing = self._save(name)
        return f"{thing.display_summary()} was successfully saved."

    def _save(self, name: str) -> Thing:
        existing = self._cached_by_name(name)
        if existing is not None:
            raise NameAlreadyExists(
                f"`{thing_name(existing)}` has already been saved to your `journal`",
                existing,
            )

        index = self._recent_index(name)
        if index is None:
            raise NotFound(f'No matches for "{name}"')

        thing = self._recent[index]
        del self._recent[index]
        thing.uuid = uuid4()

        try:
            self.data_store.save_thing(thing)
        except DataStoreError as e:
            logger.warning(f"Failed to save {thing_name(thing)}: {e}")
            thing.uuid = None
            self._recent.insert(index, thing)
            raise DataStoreFailed(f"Couldn't save `{thing_name(thing)}`") from e

        self.cache[thing.uuid] = thing
        return thing

    def delete_thing_by_name(self, name: str) -> str:
        """Delete from the journal (and store), or failing that from recent."""
        thing = self._cached_by_name(name)
        if thing is not None:
            name = thing_name(thing)

            store_deleted = True
            try:
                self.data_store.delete_thing_by_uuid(thing.uuid)
            except DataStoreError as e:
                logger.warning(f"Failed to delete {name} from the data store: {e}")
                store_deleted = False

            cache_deleted = self.cache.pop(thing.uuid, None) is not None

            if store_deleted or cache_deleted:
                return f"{name} was successfully deleted."
            raise DataStoreFailed(f"Could not delete {name}.")

        index = self._recent_index(name)
        if index is not None:
            name = thing_name(self._recent[index])
            del self._recent[index]
            return (
                f"{name} deleted from recent entries. This isn't normally necessary "
                "as recent entries aren't automatically saved from one session to another."
            )

        raise NotFound(f"There is no entity named {name}.")

    # -------------------------------------------------------------------------
    # Changes
    # -------------------------------------------------------------------------

    def modify(self, change: Change) -> Thing:
        """Apply a change, returning the affected thing."""
        if isinstance(change, Create):
            self._check_name_available(change.thing)
            self.push_recent(change.thing)
            return change.thing
        elif isinstance(change, CreateAndSave):
            return self._create_and_save(change.thing)
        elif isinstance(change, Save):
            return self._save(change.name)
        elif isinstance(change, Edit):
            return self._edit(change)
        raise TypeError(f"Unknown change: {change!r}")

    def _check_name_available(self, thing: Thing, ignore: Thing | None = None) -> None:
        if thing.name.is_none:
            return
        for other in self.all_things():
            if other is not ignore and names_match(other, thing_name(thing)):
                raise NameAlreadyExists(
                    f"That name is already in use by {other.display_summary()}.",
                    other,
                )

    def _create_and_save(self, thing: Thing) -> Thing:
        self._check_name_available(thing)
        thing.uuid = uuid4()
        try:
            self.data_store.save_thing(thing)
        except DataStoreError as e:
            logger.warning(f"Failed to save {thing_name(thing)}: {e}")
            thing.uuid = None
            raise DataStoreFailed(f"Couldn't save `{thing_name(thing)}`") from e
        self.cache[thing.uuid] = thing
        return thing

    def _edit(self, change: Edit) -> Thing:
        if change.uuid is not None and change.uuid in self.cache:
            thing = self.cache[change.uuid]
        else:
            thing = self.load_thing_by_name(change.name)

        if thing is None or type(thing) is not type(change.diff):
            raise NotFound(f"There is no {change.diff.kind} named {change.name}.")

        edited = clone(thing)
        apply_diff(edited, change.diff)
        self._check_name_available(edited, ignore=thing)

        if self.is_saved(thing):
            try:
                self.data_store.save_thing(edited)
            except DataStoreError as e:
                logger.warning(f"Failed to save edits to {thing_name(thing)}: {e}")
                raise DataStoreFailed(f"Couldn't save `{thing_name(thing)}`") from e
            self.cache[edited.uuid] = edited
        else:
            index = next(i for i, other in enumerate(self._recent) if other is thing)
            self._recent[index] = edited

        return edited

    # -------------------------------------------------------------------------
    # Time
    # -------------------------------------------------------------------------

    def get_time(self) -> Time:
        return self._time

    def set_time(self, time: Time) -> None:
        """Move the clock. Persisting it is best-effort."""
        self._time = time
        try:
            self.data_store.set_value("time", time.display_short())
        except DataStoreError as e:
            logger.debug(f"Time not persisted: {e}")

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export(self) -> "ExportData":
        from .export import build_export

        return build_export(self)
