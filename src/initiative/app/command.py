"""
Command dispatch across every command family.

Families are consulted in priority order, aliases first, so a shortcut
always shadows the generic grammar. The first exact match wins; fuzzy
matches are pooled and the caller decides what to do with them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..reference.command import ReferenceCommand
from ..storage.command import StorageCommand
from ..time.command import TimeCommand
from ..world.command import WorldCommand
from .alias import CommandAlias
from .app_command import AppCommand
from .runnable import CommandError, Runnable, Suggestion
from .tutorial import TutorialCommand

if TYPE_CHECKING:
    from .meta import AppMeta

logger = logging.getLogger(__name__)

COMMAND_FAMILIES = (
    CommandAlias,
    AppCommand,
    ReferenceCommand,
    StorageCommand,
    TimeCommand,
    TutorialCommand,
    WorldCommand,
)

AUTOCOMPLETE_LIMIT = 10
MAX_INTERPRETATIONS = 9

NBSP = "\u00a0"


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------

def parse_input(input: str, app_meta: "AppMeta") -> tuple[Runnable | None, list[Runnable]]:
    fuzzy_matches: list[Runnable] = []

    for family in COMMAND_FAMILIES:
        exact_match, matches = family.parse_input(input, app_meta)
        fuzzy_matches.extend(matches)
        if exact_match is not None:
            return exact_match, fuzzy_matches

    return None, fuzzy_matches


def autocomplete(input: str, app_meta: "AppMeta") -> list[Suggestion]:
    """Merged suggestions: first summary per text wins, sorted, capped."""
    suggestions: dict[str, str] = {}

    for family in COMMAND_FAMILIES:
        for text, summary in family.autocomplete(input, app_meta):
            suggestions.setdefault(text, summary)

    return sorted(suggestions.items())[:AUTOCOMPLETE_LIMIT]


# -----------------------------------------------------------------------------
# Running
# -----------------------------------------------------------------------------

def run_command(command: Runnable, input: str, app_meta: "AppMeta") -> str:
    """Run a command. Anything but an alias discards the current aliases."""
    if not isinstance(command, CommandAlias):
        app_meta.command_aliases.clear()
    return command.run(input, app_meta)


def run_input(input: str, app_meta: "AppMeta") -> str:
    """
    Parse and run raw input.

    Runs the exact match, or the only fuzzy match. Several fuzzy matches are
    offered back as numbered aliases; none at all is an error.
    """
    exact_match, fuzzy_matches = parse_input(input, app_meta)

    if exact_match is not None:
        command = exact_match
    elif len(fuzzy_matches) == 1:
        command = fuzzy_matches[0]
    elif fuzzy_matches:
        raise CommandError(_offer_interpretations(fuzzy_matches, input, app_meta))
    else:
        raise CommandError(f'Unknown command: "{input}"')

    logger.debug(f"Running {command!r}")
    unknown_words, notice_input = _unknown_words(command, input)

    try:
        output = run_command(command, input, app_meta)
    except CommandError as e:
        raise CommandError(append_unknown_words_notice(e.message, notice_input, unknown_words)) from e

    return append_unknown_words_notice(output, notice_input, unknown_words)


def _unknown_words(command: Runnable, input: str) -> tuple[list[range], str]:
    """Unknown word spans for command, and the text they point into."""
    if isinstance(command, CommandAlias) and command.source_input is not None:
        return getattr(command.command, "unknown_words", []), command.source_input
    return getattr(command, "unknown_words", []), input


def _offer_interpretations(candidates: list[Runnable], input: str, app_meta: "AppMeta") -> str:
    app_meta.command_aliases.clear()

    lines = []
    for i, command in enumerate(candidates[:MAX_INTERPRETATIONS], start=1):
        lines.append(f"~{i}~ `{command}`")
        app_meta.command_aliases.add(CommandAlias.literal(str(i), str(command), command, input))

    return (
        "There are several possible interpretations of this command. Did you mean:\n\n"
        + "\\\n".join(lines)
    )


# -----------------------------------------------------------------------------
# Unknown word notice
# -----------------------------------------------------------------------------

def append_unknown_words_notice(output: str, input: str, unknown_words: list[range]) -> str:
    """
    Point out the words that weren't understood.

    The input is echoed with unknown words in bold, then underlined with
    carets on the following line.
    """
    if not unknown_words:
        return output

    highlighted = []
    carets = []
    position = 0

    for span in unknown_words:
        highlighted.append(input[position:span.start])
        highlighted.append(f"**{input[span.start:span.stop]}**")
        carets.append(NBSP * (span.start - position))
        carets.append("^" * (span.stop - span.start))
        position = span.stop

    highlighted.append(input[position:])

    return (
        f"{output}\n\n! initiative.sh doesn't know some of those words, but it did its best.\n\n"
        f"\\> {''.join(highlighted)}\\\n{NBSP * 2}{''.join(carets)}\\\n"
        "Want to help improve its vocabulary? Type ~help~ to see the words it already knows."
    )
