"""
The guided tutorial.

The tutorial never replaces the real commands. While it is active it pins a
strict wildcard alias, so every input comes here first; accepted inputs are
run as normal commands and the next lesson is appended to their output,
anything else gets a reminder that the tutorial is still running.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from functools import lru_cache
from importlib import resources
from typing import TYPE_CHECKING

from ..world.npc import Gender, Npc
from ..world.thing import thing_name
from .alias import CommandAlias, register_alias
from .runnable import CommandError, Suggestion

if TYPE_CHECKING:
    from .meta import AppMeta

logger = logging.getLogger(__name__)

SECTION_BREAK = "\n\n#\n\n"
CANCEL = "cancel"
CANCELLED = "The tutorial has been cancelled."


class TutorialStep(str, Enum):
    INTRODUCTION = "introduction"
    INN = "inn"
    SAVE = "save"
    NPC = "npc"
    NPC_OTHER = "npc-other"
    SAVE_BY_NAME = "save-by-name"
    JOURNAL = "journal"
    LOAD_BY_NAME = "load-by-name"
    SPELL = "spell"
    WEAPONS = "weapons"
    ROLL = "roll"
    DELETE = "delete"
    ADJUST_TIME = "adjust-time"
    TIME = "time"
    CONCLUSION = "conclusion"


STEPS = list(TutorialStep)

# The lesson shown on entering a step explains the input that step accepts
LESSONS = {
    TutorialStep.INN: "00-intro",
    TutorialStep.SAVE: "01-inn",
    TutorialStep.NPC: "02-save",
    TutorialStep.NPC_OTHER: "03-npc",
    TutorialStep.SAVE_BY_NAME: "04-npc-other",
    TutorialStep.JOURNAL: "05-save-by-name",
    TutorialStep.LOAD_BY_NAME: "06-journal",
    TutorialStep.SPELL: "07-load-by-name",
    TutorialStep.WEAPONS: "08-spell",
    TutorialStep.ROLL: "09-weapons",
    TutorialStep.DELETE: "10-roll",
    TutorialStep.ADJUST_TIME: "11-delete",
    TutorialStep.TIME: "12-adjust-time",
    TutorialStep.CONCLUSION: "13-time",
}
CONCLUSION_LESSON = "99-conclusion"
STILL_ACTIVE_LESSON = "xx-still-active"


@lru_cache(maxsize=None)
def read_lesson(name: str) -> str:
    path = resources.files("initiative") / "data" / "tutorial" / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def _named(prefix: str, input: str, name: str | None) -> bool:
    return name is not None and input == f"{prefix}{name}"


def _heading(output: str) -> str:
    return output.splitlines()[0].lstrip(" #") if output else ""


@dataclass
class TutorialCommand:
    step: TutorialStep = TutorialStep.INTRODUCTION
    inn_name: str | None = None
    npc_name: str | None = None
    npc_gender: Gender | None = None
    other_npc_name: str | None = None

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    @classmethod
    def parse_input(cls, input: str, app_meta: "AppMeta") -> tuple["TutorialCommand | None", list]:
        if input == "tutorial":
            return cls(), []
        return None, []

    @classmethod
    def autocomplete(cls, input: str, app_meta: "AppMeta") -> list[Suggestion]:
        if input and "tutorial".startswith(input):
            return [("tutorial", "feature walkthrough")]
        return []

    def accepts(self, input: str) -> bool:
        """Whether input moves the tutorial on from the current step."""
        step = self.step
        if step == TutorialStep.INTRODUCTION:
            return True
        elif step == TutorialStep.INN:
            return input == "next"
        elif step == TutorialStep.SAVE:
            return input == "inn"
        elif step == TutorialStep.NPC:
            return input == "save" or _named("save ", input, self.inn_name)
        elif step == TutorialStep.NPC_OTHER:
            return input == "npc"
        elif step == TutorialStep.SAVE_BY_NAME:
            return input in ("1", self.npc_name) or _named("load ", input, self.npc_name)
        elif step == TutorialStep.JOURNAL:
            return input == "save" or _named("save ", input, self.npc_name)
        elif step == TutorialStep.LOAD_BY_NAME:
            return input == "journal"
        elif step == TutorialStep.SPELL:
            return input == self.npc_name or _named("load ", input, self.npc_name)
        elif step == TutorialStep.WEAPONS:
            return input == "Fireball"
        elif step == TutorialStep.ROLL:
            return input == "weapons"
        elif step == TutorialStep.DELETE:
            return input == "d20+4"
        elif step == TutorialStep.ADJUST_TIME:
            return _named("delete ", input, self.npc_name)
        elif step == TutorialStep.TIME:
            return input == "+30m"
        return input in ("time", "date", "now")

    # -------------------------------------------------------------------------
    # Running
    # -------------------------------------------------------------------------

    def run(self, input: str, app_meta: "AppMeta") -> str:
        if input == CANCEL:
            # Drops "next" along with anything the lessons registered
            app_meta.command_aliases.clear()
            return CANCELLED

        if not self.accepts(input):
            self._pin(app_meta)
            return read_lesson(STILL_ACTIVE_LESSON)

        if self.step == TutorialStep.INTRODUCTION:
            register_alias(app_meta, CommandAlias.literal(
                "next", "continue the tutorial", TutorialCommand(TutorialStep.INN),
            ))
            return self._advance("", app_meta)
        elif self.step == TutorialStep.INN:
            return self._advance("", app_meta)

        output, ok = self._run_inner(input, app_meta)

        if self.step == TutorialStep.CONCLUSION:
            if not ok:
                raise CommandError(output)
            return output + SECTION_BREAK + read_lesson(CONCLUSION_LESSON)

        # These steps capture names from the output, so a failure can't move on
        if self.step in (TutorialStep.SAVE, TutorialStep.NPC_OTHER, TutorialStep.SAVE_BY_NAME):
            if not ok:
                self._pin(app_meta)
                raise CommandError(output)

        following = self._capture(output, app_meta)
        if following is None:
            self._pin(app_meta)
            return output

        output = following._advance_from(output, app_meta)
        if not ok:
            raise CommandError(output)
        return output

    def _run_inner(self, input: str, app_meta: "AppMeta") -> tuple[str, bool]:
        from .command import run_input

        try:
            return run_input(input, app_meta), True
        except CommandError as e:
            return e.message, False

    def _capture(self, output: str, app_meta: "AppMeta") -> "TutorialCommand | None":
        """The next step, carrying whatever the current output revealed."""
        following = replace(self, step=STEPS[STEPS.index(self.step) + 1])

        if self.step == TutorialStep.SAVE:
            following.inn_name = _heading(output) or None
            if following.inn_name is None:
                logger.debug(f"No inn name in output of {self.step.value!r} step")
                return None
            return following

        if self.step == TutorialStep.NPC_OTHER:
            following.other_npc_name = _heading(output) or None
            following.npc_name = _first_alternative(output)
            following.npc_gender = _recent_gender(following.npc_name, app_meta)
            if following.other_npc_name and following.npc_name and following.npc_gender:
                return following
            logger.debug(
                f"Missing NPC details in output of {self.step.value!r} step: "
                f"name={following.npc_name!r} other={following.other_npc_name!r}"
            )
            return None

        return following

    def _advance(self, output: str, app_meta: "AppMeta") -> str:
        following = replace(self, step=STEPS[STEPS.index(self.step) + 1])
        return following._advance_from(output, app_meta)

    def _advance_from(self, output: str, app_meta: "AppMeta") -> str:
        """Pin this step and append its lesson to output."""
        self._pin(app_meta)
        lesson = self.lesson()
        return f"{output}{SECTION_BREAK}{lesson}" if output else lesson

    def _pin(self, app_meta: "AppMeta") -> None:
        register_alias(app_meta, CommandAlias.strict_wildcard(self))

    def lesson(self) -> str:
        gender = self.npc_gender or Gender.NON_BINARY
        return read_lesson(LESSONS[self.step]).format(
            inn_name=self.inn_name,
            npc_name=self.npc_name,
            other_npc_name=self.other_npc_name,
            they_cap=gender.they_cap,
            them=gender.them,
            their=gender.their,
            theyre=gender.theyre,
            theyre_cap=gender.theyre_cap,
            theyve=gender.theyve,
            pulls=gender.conjugate("pulls", "pull"),
        )

    def __str__(self) -> str:
        return "tutorial" if self.step == TutorialStep.INTRODUCTION else ""


def _first_alternative(output: str) -> str | None:
    for line in output.splitlines():
        if line.startswith("~1~ "):
            start, end = line.find("`"), line.rfind("`")
            if start != -1 and end > start:
                return line[start + 1:end]
            return None
    return None


def _recent_gender(name: str | None, app_meta: "AppMeta") -> Gender | None:
    if name is None:
        return None
    for thing in app_meta.repository.recent():
        if isinstance(thing, Npc) and thing_name(thing) == name:
            return thing.gender.value
    return None
