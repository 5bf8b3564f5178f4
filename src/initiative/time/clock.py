"""
In-world clock.

Time counts from day 1 at 08:00:00. Intervals are written like "30m",
"1d6h" or "d" (a bare unit means one).
"""

import re
from dataclasses import dataclass

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR

_UNITS = {
    "d": SECONDS_PER_DAY,
    "h": SECONDS_PER_HOUR,
    "m": SECONDS_PER_MINUTE,
    "s": 1,
}
_UNIT_NAMES = {"d": "day", "h": "hour", "m": "minute", "s": "second"}

_INTERVAL_RE = re.compile(r"(\d*)([dhms])")
_SHORT_RE = re.compile(r"^(\d+):(\d{2}):(\d{2}):(\d{2})$")


@dataclass(frozen=True)
class Interval:
    """A span of in-world time, kept as its parsed (count, unit) parts."""
    parts: tuple[tuple[int, str], ...]

    @classmethod
    def parse(cls, text: str) -> "Interval | None":
        text = text.strip().lower()
        if not text:
            return None

        parts = []
        position = 0
        for match in _INTERVAL_RE.finditer(text):
            if match.start() != position:
                return None
            count = int(match.group(1)) if match.group(1) else 1
            parts.append((count, match.group(2)))
            position = match.end()

        if position != len(text) or not parts:
            return None
        return cls(tuple(parts))

    @property
    def seconds(self) -> int:
        return sum(count * _UNITS[unit] for count, unit in self.parts)

    def display_long(self) -> str:
        words = []
        for count, unit in self.parts:
            name = _UNIT_NAMES[unit]
            words.append(f"{count} {name}" + ("" if count == 1 else "s"))
        return ", ".join(words)

    def __str__(self) -> str:
        return "".join(f"{count}{unit}" for count, unit in self.parts)


@dataclass(frozen=True, order=True)
class Time:
    """A point on the in-world clock. Days start at 1."""
    days: int = 1
    hours: int = 8
    minutes: int = 0
    seconds: int = 0

    @classmethod
    def from_seconds(cls, total: int) -> "Time":
        days, rest = divmod(total, SECONDS_PER_DAY)
        hours, rest = divmod(rest, SECONDS_PER_HOUR)
        minutes, seconds = divmod(rest, SECONDS_PER_MINUTE)
        return cls(days + 1, hours, minutes, seconds)

    @classmethod
    def parse(cls, text: str) -> "Time | None":
        """Parse the display_short() form, e.g. "1:08:00:00"."""
        match = _SHORT_RE.match(text.strip())
        if not match:
            return None
        days, hours, minutes, seconds = (int(group) for group in match.groups())
        if days < 1 or hours > 23 or minutes > 59 or seconds > 59:
            return None
        return cls(days, hours, minutes, seconds)

    def total_seconds(self) -> int:
        return (
            (self.days - 1) * SECONDS_PER_DAY
            + self.hours * SECONDS_PER_HOUR
            + self.minutes * SECONDS_PER_MINUTE
            + self.seconds
        )

    def checked_add(self, interval: Interval) -> "Time":
        return Time.from_seconds(self.total_seconds() + interval.seconds)

    def checked_sub(self, interval: Interval) -> "Time | None":
        total = self.total_seconds() - interval.seconds
        if total < 0:
            return None
        return Time.from_seconds(total)

    def display_short(self) -> str:
        return f"{self.days}:{self.hours:02}:{self.minutes:02}:{self.seconds:02}"

    def display_long(self) -> str:
        hour = self.hours % 12 or 12
        meridiem = "am" if self.hours < 12 else "pm"
        return f"day {self.days} at {hour}:{self.minutes:02}:{self.seconds:02} {meridiem}"

    def __str__(self) -> str:
        return self.display_long()
