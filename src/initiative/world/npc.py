"""
Non-player characters.

Enum values are the persisted terms, so they double as vocabulary words.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, TYPE_CHECKING
from uuid import UUID

from .field import Field

if TYPE_CHECKING:
    from .generate import Demographics


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class Species(str, Enum):
    DRAGONBORN = "dragonborn"
    DWARF = "dwarf"
    ELF = "elf"
    GNOME = "gnome"
    HALF_ELF = "half-elf"
    HALF_ORC = "half-orc"
    HALFLING = "halfling"
    HUMAN = "human"
    TIEFLING = "tiefling"


class Gender(str, Enum):
    MASCULINE = "masculine"
    FEMININE = "feminine"
    NON_BINARY = "non-binary"

    @property
    def pronouns(self) -> str:
        return _PRONOUNS[self][0] + "/" + _PRONOUNS[self][1]

    @property
    def they(self) -> str:
        return _PRONOUNS[self][0]

    @property
    def they_cap(self) -> str:
        return self.they.capitalize()

    @property
    def them(self) -> str:
        return _PRONOUNS[self][1]

    @property
    def their(self) -> str:
        return _PRONOUNS[self][2]

    @property
    def theyre(self) -> str:
        return _PRONOUNS[self][3]

    @property
    def theyre_cap(self) -> str:
        return self.theyre.capitalize()

    @property
    def theyve(self) -> str:
        return _PRONOUNS[self][4]

    def conjugate(self, singular: str, plural: str) -> str:
        """Pick the verb form agreeing with the pronoun ("pulls" vs "pull")."""
        return plural if self is Gender.NON_BINARY else singular


# they, them, their, they're, they've
_PRONOUNS: dict[Gender, tuple[str, str, str, str, str]] = {
    Gender.MASCULINE: ("he", "him", "his", "he's", "he's"),
    Gender.FEMININE: ("she", "her", "her", "she's", "she's"),
    Gender.NON_BINARY: ("they", "them", "their", "they're", "they've"),
}


class Age(str, Enum):
    INFANT = "infant"
    CHILD = "child"
    ADOLESCENT = "adolescent"
    YOUNG_ADULT = "young-adult"
    ADULT = "adult"
    MIDDLE_AGED = "middle-aged"
    ELDERLY = "elderly"
    GERIATRIC = "geriatric"

    @property
    def adjective(self) -> str:
        return self.value.replace("young-", "young ")

    @property
    def noun(self) -> str:
        """Stand-alone noun used when no species is known."""
        if self in (Age.MIDDLE_AGED, Age.ELDERLY, Age.GERIATRIC):
            return f"{self.adjective} person"
        return self.adjective

    @property
    def years(self) -> tuple[int, int]:
        return _AGE_YEARS[self]


_AGE_YEARS: dict[Age, tuple[int, int]] = {
    Age.INFANT: (0, 1),
    Age.CHILD: (2, 9),
    Age.ADOLESCENT: (10, 19),
    Age.YOUNG_ADULT: (20, 29),
    Age.ADULT: (30, 39),
    Age.MIDDLE_AGED: (40, 59),
    Age.ELDERLY: (60, 79),
    Age.GERIATRIC: (80, 99),
}


# -----------------------------------------------------------------------------
# Model
# -----------------------------------------------------------------------------

@dataclass
class Npc:
    """A generated character. Every attribute is a Field."""
    uuid: UUID | None = None
    name: Field[str] = field(default_factory=Field)
    gender: Field[Gender] = field(default_factory=Field)
    age: Field[Age] = field(default_factory=Field)
    age_years: Field[int] = field(default_factory=Field)
    species: Field[Species] = field(default_factory=Field)

    kind: ClassVar[str] = "character"

    def display_description(self) -> str:
        """Short phrase like "elderly elf" or "child, he/him"."""
        species, age, gender = self.species.value, self.age.value, self.gender.value

        if species is not None and age is not None:
            noun = f"{age.adjective} {species.value}"
        elif species is not None:
            noun = species.value
        elif age is not None:
            noun = age.noun
        else:
            noun = "person"

        if gender is not None:
            return f"{noun}, {gender.pronouns}"
        return noun

    def display_summary(self) -> str:
        return f"`{self.name}` ({self.display_description()})"

    def display_details(self) -> str:
        lines = [f"# {self.name}", f"*{self.display_description()}*", ""]
        details = []
        if self.species.is_some:
            details.append(f"**Species:** {self.species}")
        if self.gender.is_some:
            details.append(f"**Gender:** {self.gender} ({self.gender.value.pronouns})")
        if self.age_years.is_some:
            details.append(f"**Age:** {self.age_years} years")
        elif self.age.is_some:
            details.append(f"**Age:** {self.age.value.adjective}")
        lines.append("\\\n".join(details))
        return "\n".join(lines).rstrip()

    def regenerate(self, rng: random.Random, demographics: "Demographics") -> None:
        """Fill every unlocked attribute with freshly generated values."""
        from .generate import gen_npc_name

        self.species.replace_with(lambda _: demographics.gen_species(rng))
        self.age.replace_with(lambda _: demographics.gen_age(rng))
        self.gender.replace_with(lambda _: demographics.gen_gender(rng))
        self.age_years.replace_with(lambda _: rng.randint(*self.age.value.years))
        self.name.replace_with(lambda _: gen_npc_name(rng, self.gender.value))
