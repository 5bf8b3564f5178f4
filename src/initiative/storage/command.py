"""
Storage commands: the journal and everything that moves things in and out
of it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..app.alias import CommandAlias, register_alias
from ..app.runnable import CommandError, Suggestion, keyword_suggestions
from ..world.npc import Npc
from ..world.thing import them, thing_name
from .repository import RepositoryError

if TYPE_CHECKING:
    from ..app.meta import AppMeta


class StorageAction(str, Enum):
    JOURNAL = "journal"
    EXPORT = "export"
    LOAD = "load"
    SAVE = "save"
    DELETE = "delete"


NAMED_ACTIONS = (StorageAction.LOAD, StorageAction.SAVE, StorageAction.DELETE)

KEYWORDS = {
    "journal": "list journal contents",
    "export": "export the journal as JSON",
}

SUMMARIES = {
    StorageAction.LOAD: "load an entry",
    StorageAction.SAVE: "save an entry to your journal",
    StorageAction.DELETE: "remove an entry from your journal",
}


@dataclass
class StorageCommand:
    action: StorageAction
    name: str | None = None

    @classmethod
    def load(cls, name: str) -> "StorageCommand":
        return cls(StorageAction.LOAD, name)

    @classmethod
    def save(cls, name: str) -> "StorageCommand":
        return cls(StorageAction.SAVE, name)

    @classmethod
    def delete(cls, name: str) -> "StorageCommand":
        return cls(StorageAction.DELETE, name)

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    @classmethod
    def parse_input(cls, input: str, app_meta: "AppMeta") -> tuple["StorageCommand | None", list]:
        lower = input.lower()

        if lower == "journal":
            return cls(StorageAction.JOURNAL), []
        if lower == "export":
            return cls(StorageAction.EXPORT), []

        for action in NAMED_ACTIONS:
            prefix = f"{action.value} "
            if lower.startswith(prefix) and input[len(prefix):].strip():
                return cls(action, input[len(prefix):].strip()), []

        if input and app_meta.repository.load_thing_by_name(input) is not None:
            return cls.load(input), []

        return None, []

    @classmethod
    def autocomplete(cls, input: str, app_meta: "AppMeta") -> list[Suggestion]:
        if not input:
            return []

        suggestions = keyword_suggestions(input, KEYWORDS)
        lower = input.lower()
        things = app_meta.repository.all_things()

        for action in NAMED_ACTIONS:
            prefix = f"{action.value} "
            if lower.startswith(prefix):
                partial = lower[len(prefix):]
                for thing in things:
                    if action == StorageAction.SAVE and app_meta.repository.is_saved(thing):
                        continue
                    name = thing_name(thing)
                    if name.lower().startswith(partial):
                        suggestions.append((f"{prefix}{name}", f"{action.value} {thing.kind}"))
            elif prefix.startswith(lower):
                suggestions.append((f"{action.value} [name]", SUMMARIES[action]))

        for thing in things:
            name = thing_name(thing)
            if name.lower().startswith(lower):
                suggestions.append((name, f"load {thing.kind}"))

        return suggestions

    # -------------------------------------------------------------------------
    # Running
    # -------------------------------------------------------------------------

    def run(self, input: str, app_meta: "AppMeta") -> str:
        repository = app_meta.repository

        try:
            if self.action == StorageAction.JOURNAL:
                return self._journal(app_meta)
            elif self.action == StorageAction.EXPORT:
                return f"```json\n{repository.export().to_json()}\n```"
            elif self.action == StorageAction.LOAD:
                return self._load(app_meta)
            elif self.action == StorageAction.SAVE:
                return repository.save_thing_by_name(self.name)
            else:
                return repository.delete_thing_by_name(self.name)
        except RepositoryError as e:
            raise CommandError(e.message) from e

    def _load(self, app_meta: "AppMeta") -> str:
        repository = app_meta.repository
        thing = repository.load_thing_by_name(self.name)
        if thing is None:
            raise CommandError(f'No matches for "{self.name}"')

        output = thing.display_details()
        if not repository.is_saved(thing) and repository.data_store_enabled:
            name = thing_name(thing)
            output += (
                f"\n\n_{name} has not yet been saved. Use ~save~ to save {them(thing)} "
                "to your `journal`._"
            )
            register_alias(app_meta, CommandAlias.literal(
                "save", f"save {name}", StorageCommand.save(name),
            ))
        return output

    def _journal(self, app_meta: "AppMeta") -> str:
        repository = app_meta.repository
        things = repository.journal()
        output = "# Journal"

        npcs = [thing for thing in things if isinstance(thing, Npc)]
        places = [thing for thing in things if not isinstance(thing, Npc)]

        if npcs:
            output += "\n\n## NPCs\n" + "\\\n".join(thing.display_summary() for thing in npcs)
        if places:
            output += "\n\n## Places\n" + "\\\n".join(thing.display_summary() for thing in places)
        if not things:
            output += "\n\n*Your journal is currently empty.*"

        if not repository.data_store_enabled:
            output += (
                "\n\n! The data store is unavailable. Anything you save will be lost "
                "at the end of this session."
            )
        return output

    def __str__(self) -> str:
        if self.name is None:
            return self.action.value
        return f"{self.action.value} {self.name}"
