"""
The capability set shared by every command family.
"""

from __future__ import annotations

from typing import Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from .meta import AppMeta

Suggestion = tuple[str, str]  # (text to type, what it does)


class CommandError(Exception):
    """A command failed. The message is shown to the user verbatim."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@runtime_checkable
class Runnable(Protocol):
    """
    A parsed command.

    run() returns the output text or raises CommandError; parse_input() and
    autocomplete() are classmethods on each family.
    """

    def run(self, input: str, app_meta: "AppMeta") -> str:
        ...

    @classmethod
    def parse_input(cls, input: str, app_meta: "AppMeta") -> tuple["Runnable | None", list["Runnable"]]:
        """Return (exact match, fuzzy matches)."""
        ...

    @classmethod
    def autocomplete(cls, input: str, app_meta: "AppMeta") -> list[Suggestion]:
        ...


def keyword_suggestions(input: str, keywords: dict[str, str]) -> list[Suggestion]:
    """Offer every keyword the input is a literal prefix of."""
    if not input:
        return []
    return [(word, summary) for word, summary in keywords.items() if word.startswith(input)]
