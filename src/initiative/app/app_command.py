"""
Application-level commands: about, help, debug and dice rolls.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..tools.dice import parse_dice, roll
from .runnable import CommandError, Suggestion, keyword_suggestions

if TYPE_CHECKING:
    from .meta import AppMeta

ROLL_PREFIX = "roll "

KEYWORDS = {
    "about": "about initiative.sh",
    "help": "how to use initiative.sh",
    "debug": "show the session state",
}

ABOUT_TEXT = """\
# About initiative.sh

initiative.sh is a command-line helper for game masters running tabletop \
role-playing games. It generates characters and places on the fly, keeps a \
journal of the ones worth remembering, tracks the passage of in-game time \
and looks up spells and weapons from the SRD.

Type ~tutorial~ for a guided walkthrough, or ~help~ for a list of commands."""

HELP_TEXT = """\
# Help

**Creating things**\\
`npc`, `elf`, `inn`, `village`, `elderly dwarf`, `create a tavern`\\
`Hans Bauer is a dwarf` edits an existing character

**Your journal**\\
`journal`, `save [name]`, `load [name]`, `delete [name]`, `export`

**Time**\\
`now`, `+30m`, `+1d6h`, `-2h`

**Dice**\\
`d20`, `roll 2d6+3`

**Reference**\\
`spells`, `Fireball`, `weapons`

**Other**\\
`tutorial`, `about`, `help`

Words it understands when describing characters: \
{npc_words}

Words it understands when describing places: \
{place_words}"""


class AppAction(str, Enum):
    ABOUT = "about"
    HELP = "help"
    DEBUG = "debug"
    ROLL = "roll"


@dataclass
class AppCommand:
    action: AppAction
    expression: str | None = None

    @classmethod
    def parse_input(cls, input: str, app_meta: "AppMeta") -> tuple["AppCommand | None", list]:
        lower = input.lower()

        for action in (AppAction.ABOUT, AppAction.HELP, AppAction.DEBUG):
            if lower == action.value:
                return cls(action), []

        expression = input[len(ROLL_PREFIX):] if lower.startswith(ROLL_PREFIX) else input
        if parse_dice(expression) is not None:
            return cls(AppAction.ROLL, expression.strip()), []

        return None, []

    @classmethod
    def autocomplete(cls, input: str, app_meta: "AppMeta") -> list[Suggestion]:
        if not input:
            return []

        suggestions = keyword_suggestions(input, {k: v for k, v in KEYWORDS.items() if k != "debug"})
        if ROLL_PREFIX.startswith(input.lower()):
            suggestions.append(("roll [dice]", "roll eg. 8d6 or d20+3"))

        dice = parse_dice(input[len(ROLL_PREFIX):] if input.lower().startswith(ROLL_PREFIX) else input)
        if dice is not None:
            suggestions.append((input, f"roll {dice}"))
        return suggestions

    def run(self, input: str, app_meta: "AppMeta") -> str:
        if self.action == AppAction.ABOUT:
            return ABOUT_TEXT
        elif self.action == AppAction.HELP:
            return help_text()
        elif self.action == AppAction.DEBUG:
            return debug_text(app_meta)

        result = roll(self.expression, app_meta.rng)
        if result is None:
            raise CommandError(f'Invalid dice expression "{self.expression}"')
        return result.narrative

    def __str__(self) -> str:
        if self.action == AppAction.ROLL:
            return f"roll {self.expression}"
        return self.action.value


def help_text() -> str:
    from ..world.parse import NPC_VOCABULARY, PLACE_VOCABULARY

    return HELP_TEXT.format(
        npc_words=", ".join(f"`{word}`" for word in sorted(NPC_VOCABULARY)),
        place_words=", ".join(f"`{word}`" for word in sorted(PLACE_VOCABULARY)),
    )


def debug_text(app_meta: "AppMeta") -> str:
    repository = app_meta.repository
    aliases = sorted(str(alias) for alias in app_meta.command_aliases)
    return (
        "# Debug\n\n"
        f"**Data store enabled:** {repository.data_store_enabled}\\\n"
        f"**Saved:** {len(repository.cache)}\\\n"
        f"**Recent:** {len(repository.recent())}\\\n"
        f"**Time:** {repository.get_time().display_short()}\\\n"
        f"**Aliases:** {', '.join(aliases) or 'none'}"
    )
