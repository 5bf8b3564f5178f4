"""
World commands: generating and editing characters and places.

    create elderly elf       exact
    elderly elf              fuzzy (no "create" prefix)
    Hans Bauer is an elf     fuzzy edit of an existing thing
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..app.alias import CommandAlias, register_alias
from ..app.runnable import CommandError, Suggestion
from ..storage.command import StorageCommand
from ..storage.repository import (
    Create,
    CreateAndSave,
    Edit,
    NameAlreadyExists,
    RepositoryError,
)
from .parse import autocomplete_description, parse_as, parse_thing
from .thing import ParsedThing, Thing, clone, them, thing_name

if TYPE_CHECKING:
    from ..app.meta import AppMeta

MAX_ATTEMPTS = 10
ALTERNATIVES = 3
MORE_COUNT = 10

CREATE_PREFIX = "create "
EDIT_SEPARATOR = " is "


class WorldAction(str, Enum):
    CREATE = "create"
    CREATE_MULTIPLE = "create-multiple"
    EDIT = "edit"


@dataclass
class WorldCommand:
    action: WorldAction
    parsed: ParsedThing
    name: str | None = None

    @classmethod
    def create(cls, parsed: ParsedThing) -> "WorldCommand":
        return cls(WorldAction.CREATE, parsed)

    @classmethod
    def create_multiple(cls, thing: Thing) -> "WorldCommand":
        return cls(WorldAction.CREATE_MULTIPLE, ParsedThing(thing))

    @classmethod
    def edit(cls, name: str, parsed: ParsedThing) -> "WorldCommand":
        return cls(WorldAction.EDIT, parsed, name)

    @property
    def unknown_words(self) -> list[range]:
        return self.parsed.unknown_words

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    @classmethod
    def parse_input(cls, input: str, app_meta: "AppMeta") -> tuple["WorldCommand | None", list["WorldCommand"]]:
        if input.lower().startswith(CREATE_PREFIX):
            parsed = parse_thing(input[len(CREATE_PREFIX):])
            if parsed is None:
                return None, []
            command = cls.create(parsed.offset(len(CREATE_PREFIX)))
            if command.unknown_words:
                return None, [command]
            return command, []

        fuzzy_matches = []
        edit = cls._parse_edit(input, app_meta)

        parsed = parse_thing(input)
        if parsed is not None:
            # Alongside an edit, only offer a create that understood most of the words
            known = parsed.word_count - len(parsed.unknown_words)
            if edit is None or known > len(parsed.unknown_words):
                fuzzy_matches.append(cls.create(parsed))

        if edit is not None:
            fuzzy_matches.append(edit)
        return None, fuzzy_matches

    @classmethod
    def _parse_edit(cls, input: str, app_meta: "AppMeta") -> "WorldCommand | None":
        name, separator, description = input.partition(EDIT_SEPARATOR)
        name = name.strip()
        if not separator or not name:
            return None

        existing = app_meta.repository.load_thing_by_name(name)
        if existing is not None:
            parsed = parse_as(existing.kind, description)
        else:
            parsed = parse_thing(description)

        if parsed is None:
            return None
        return cls.edit(name, parsed.offset(len(input) - len(description)))

    @classmethod
    def autocomplete(cls, input: str, app_meta: "AppMeta") -> list[Suggestion]:
        if not input:
            return []

        suggestions = []
        prefix, text = "", input
        if input.lower().startswith(CREATE_PREFIX):
            prefix, text = input[:len(CREATE_PREFIX)], input[len(CREATE_PREFIX):]
        elif "create".startswith(input):
            suggestions.append(("create [description]", "create a character or place"))

        for candidate, parsed in autocomplete_description(text):
            suggestions.append((prefix + candidate, f"create {parsed.thing.display_description()}"))

        if not prefix:
            suggestions.extend(cls._autocomplete_edit(input, app_meta))

        return suggestions

    @classmethod
    def _autocomplete_edit(cls, input: str, app_meta: "AppMeta") -> list[Suggestion]:
        name, separator, description = input.partition(EDIT_SEPARATOR)
        if separator:
            thing = app_meta.repository.load_thing_by_name(name.strip())
            if thing is None:
                return []
            return [
                (f"{name}{separator}{candidate}", f"edit {thing.kind}")
                for candidate, _ in autocomplete_description(
                    description, lambda text: parse_as(thing.kind, text)
                )
            ]

        suggestions = []
        lower = input.lower()
        for thing in app_meta.repository.all_things():
            full_name = thing_name(thing)
            stem = f"{full_name}{EDIT_SEPARATOR}"
            if lower == full_name.lower() or (lower.startswith(full_name.lower() + " ") and stem.lower().startswith(lower)):
                suggestions.append((f"{stem}[{thing.kind} description]", f"edit {thing.kind}"))
        return suggestions

    # -------------------------------------------------------------------------
    # Running
    # -------------------------------------------------------------------------

    def run(self, input: str, app_meta: "AppMeta") -> str:
        if self.action == WorldAction.CREATE:
            return self._run_create(app_meta)
        elif self.action == WorldAction.CREATE_MULTIPLE:
            return self._run_create_multiple(app_meta)
        return self._run_edit(app_meta)

    def _run_create(self, app_meta: "AppMeta") -> str:
        diff = self.parsed.thing
        repository = app_meta.repository
        name_locked = diff.name.is_locked

        for _ in range(MAX_ATTEMPTS):
            thing = clone(diff)
            thing.regenerate(app_meta.rng, app_meta.demographics)

            if name_locked and repository.data_store_enabled:
                change = CreateAndSave(thing)
            else:
                change = Create(thing)

            try:
                thing = repository.modify(change)
            except NameAlreadyExists as e:
                if name_locked:
                    raise CommandError(e.message) from e
                continue
            except RepositoryError as e:
                raise CommandError(e.message) from e
            break
        else:
            raise CommandError(f"Couldn't create a unique {diff.display_description()} name.")

        output = thing.display_details()
        name = thing_name(thing)

        if name_locked:
            if repository.is_saved(thing):
                output += (
                    f"\n\n_Because you specified a name, {name} has been automatically "
                    "added to your `journal`._"
                )
            return output

        alternatives = self._generate_alternatives(diff, ALTERNATIVES, app_meta)
        if alternatives:
            output += "\n\n_Alternatives:_ \\\n" + "\\\n".join(alternatives)

        if repository.data_store_enabled:
            output += (
                f"\n\n_{name} has not yet been saved. Use ~save~ to save {them(thing)} to your "
                "`journal`. For more suggestions, type ~more~._"
            )
            register_alias(app_meta, CommandAlias.literal(
                "save", f"save {name}", StorageCommand.save(name),
            ))
        else:
            output += "\n\n_For more suggestions, type ~more~._"

        self._register_more(diff, app_meta)
        return output

    def _run_create_multiple(self, app_meta: "AppMeta") -> str:
        diff = self.parsed.thing
        output = f'# Alternative suggestions for "{diff.display_description()}"\n\n'

        alternatives = self._generate_alternatives(diff, MORE_COUNT, app_meta)
        output += "\\\n".join(alternatives)
        if len(alternatives) < MORE_COUNT:
            output += "\n\n! An error occurred generating additional results."

        output += "\n\n_For even more suggestions, type ~more~._"
        self._register_more(diff, app_meta)
        return output

    def _run_edit(self, app_meta: "AppMeta") -> str:
        try:
            thing = app_meta.repository.modify(Edit(self.name, self.parsed.thing))
        except RepositoryError as e:
            raise CommandError(e.message) from e
        return f"{thing.display_summary()} was successfully edited."

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _generate_alternatives(self, diff: Thing, count: int, app_meta: "AppMeta") -> list[str]:
        """Generate up to count more things into recent, each behind a numbered alias."""
        lines = []
        for i in range(1, count + 1):
            for _ in range(MAX_ATTEMPTS):
                thing = clone(diff)
                thing.regenerate(app_meta.rng, app_meta.demographics)
                try:
                    app_meta.repository.modify(Create(thing))
                except NameAlreadyExists:
                    continue

                term = str(i % 10)
                name = thing_name(thing)
                lines.append(f"~{term}~ {thing.display_summary()}")
                register_alias(app_meta, CommandAlias.literal(
                    term, f"load {name}", StorageCommand.load(name),
                ))
                break
            else:
                break
        return lines

    def _register_more(self, diff: Thing, app_meta: "AppMeta") -> None:
        register_alias(app_meta, CommandAlias.literal(
            "more",
            f"create {diff.display_description()}",
            WorldCommand.create_multiple(diff),
        ))

    def __str__(self) -> str:
        description = self.parsed.thing.display_description()
        if self.action == WorldAction.EDIT:
            return f"{self.name} is {description}"
        elif self.action == WorldAction.CREATE_MULTIPLE:
            return "more"
        return f"create {description}"
