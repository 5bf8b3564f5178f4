"""
Command aliases: short-lived shortcuts installed by command output.

"save", "more" and the numbered suggestions ("1", "2", ...) are all literal
aliases. The tutorial pins itself with a strict wildcard, which matches
whatever the user types next.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .runnable import Runnable, Suggestion

if TYPE_CHECKING:
    from .meta import AppMeta


class CommandAlias:
    """
    A shortcut bound to a fully-formed command.

    Identity is the term alone: two aliases with the same term are the same
    set member whatever their summary or command. Strict wildcards have no
    term and are all equal to each other.

    source_input is the text a numbered interpretation was offered for;
    the wrapped command's unknown word spans point into it.
    """

    __slots__ = ("term", "summary", "command", "source_input")

    def __init__(self, term: str | None, summary: str, command: Runnable, source_input: str | None = None):
        self.term = term
        self.summary = summary
        self.command = command
        self.source_input = source_input

    @classmethod
    def literal(
        cls, term: str, summary: str, command: Runnable, source_input: str | None = None,
    ) -> "CommandAlias":
        return cls(term, summary, command, source_input)

    @classmethod
    def strict_wildcard(cls, command: Runnable) -> "CommandAlias":
        return cls(None, "", command)

    @property
    def is_strict_wildcard(self) -> bool:
        return self.term is None

    # -------------------------------------------------------------------------
    # Runnable
    # -------------------------------------------------------------------------

    def run(self, input: str, app_meta: "AppMeta") -> str:
        if self.is_strict_wildcard:
            # Other aliases stay visible to the wrapped command
            app_meta.command_aliases.discard(self)
            return self.command.run(input, app_meta)

        previous = app_meta.command_aliases
        app_meta.command_aliases = set()

        try:
            return self.command.run(input, app_meta)
        finally:
            if not app_meta.command_aliases:
                app_meta.command_aliases = previous
            else:
                # Freshly registered aliases win on term collision
                for alias in previous:
                    if alias not in app_meta.command_aliases:
                        app_meta.command_aliases.add(alias)

    @classmethod
    def parse_input(cls, input: str, app_meta: "AppMeta") -> tuple["CommandAlias | None", list]:
        for alias in app_meta.command_aliases:
            if alias.is_strict_wildcard:
                return alias, []

        for alias in app_meta.command_aliases:
            if alias.term == input:
                return alias, []

        return None, []

    @classmethod
    def autocomplete(cls, input: str, app_meta: "AppMeta") -> list[Suggestion]:
        if not input:
            return []
        return [
            (alias.term, alias.summary)
            for alias in app_meta.command_aliases
            if not alias.is_strict_wildcard and alias.term.startswith(input)
        ]

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandAlias):
            return NotImplemented
        return self.term == other.term

    def __hash__(self) -> int:
        return hash(self.term)

    def __str__(self) -> str:
        return self.term if self.term is not None else str(self.command)

    def __repr__(self) -> str:
        if self.is_strict_wildcard:
            return f"CommandAlias.strict_wildcard({self.command!r})"
        return f"CommandAlias.literal({self.term!r}, {self.summary!r}, {self.command!r})"


def register_alias(app_meta: "AppMeta", alias: CommandAlias) -> None:
    """Add an alias, replacing any existing alias with the same term."""
    app_meta.command_aliases.discard(alias)
    app_meta.command_aliases.add(alias)
