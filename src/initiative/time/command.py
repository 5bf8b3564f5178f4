"""
Time commands: "+30m", "-1d", "time", "now", "date".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..app.runnable import CommandError, Suggestion, keyword_suggestions
from .clock import Interval

if TYPE_CHECKING:
    from ..app.meta import AppMeta

NOW_WORDS = ("time", "now", "date")

KEYWORDS = {
    "time": "get the current time",
    "now": "get the current time",
    "date": "get the current time",
}


class TimeAction(str, Enum):
    ADD = "add"
    SUB = "sub"
    NOW = "now"


@dataclass
class TimeCommand:
    action: TimeAction
    interval: Interval | None = None

    @classmethod
    def parse_input(cls, input: str, app_meta: "AppMeta") -> tuple["TimeCommand | None", list]:
        if input.lower() in NOW_WORDS:
            return cls(TimeAction.NOW), []

        if input[:1] in ("+", "-"):
            interval = Interval.parse(input[1:])
            if interval is not None:
                action = TimeAction.ADD if input[0] == "+" else TimeAction.SUB
                return cls(action, interval), []

        return None, []

    @classmethod
    def autocomplete(cls, input: str, app_meta: "AppMeta") -> list[Suggestion]:
        suggestions = keyword_suggestions(input, KEYWORDS)

        if input[:1] in ("+", "-"):
            verb = "advance" if input[0] == "+" else "rewind"
            rest = input[1:]
            interval = Interval.parse(rest)
            if interval is not None:
                suggestions.append((input, f"{verb} time by {interval.display_long()}"))
            elif rest == "" or rest.isdigit():
                count = rest or "1"
                for unit in ("d", "h", "m", "s"):
                    interval = Interval.parse(f"{count}{unit}")
                    suggestions.append((f"{input[0]}{count}{unit}", f"{verb} time by {interval.display_long()}"))

        return suggestions

    def run(self, input: str, app_meta: "AppMeta") -> str:
        repository = app_meta.repository
        time = repository.get_time()

        if self.action == TimeAction.NOW:
            return f"It is currently {time.display_long()}."

        if self.action == TimeAction.ADD:
            new_time = time.checked_add(self.interval)
        else:
            new_time = time.checked_sub(self.interval)
            if new_time is None:
                raise CommandError("You can't go back that far.")

        repository.set_time(new_time)
        return f"It is now {new_time.display_long()}."

    def __str__(self) -> str:
        if self.action == TimeAction.NOW:
            return "time"
        sign = "+" if self.action == TimeAction.ADD else "-"
        return f"{sign}{self.interval}"
