"""
SRD reference data, loaded once from the bundled YAML file.
"""

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources

import yaml

ORDINALS = {1: "1st", 2: "2nd", 3: "3rd"}


@dataclass(frozen=True)
class Spell:
    name: str
    level: int
    school: str
    casting_time: str
    range: str
    components: str
    duration: str
    description: str
    ritual: bool = False

    @property
    def tagline(self) -> str:
        if self.level == 0:
            return f"{self.school.capitalize()} cantrip"
        level = ORDINALS.get(self.level, f"{self.level}th")
        ritual = " (ritual)" if self.ritual else ""
        return f"{level}-level {self.school}{ritual}"


@dataclass(frozen=True)
class Weapon:
    name: str
    category: str
    cost: str
    damage: str
    weight: str
    properties: str


@dataclass(frozen=True)
class ReferenceData:
    spells: tuple[Spell, ...]
    weapons: tuple[Weapon, ...]

    def spell(self, name: str) -> Spell | None:
        for spell in self.spells:
            if spell.name.lower() == name.lower():
                return spell
        return None


@lru_cache(maxsize=1)
def load_reference() -> ReferenceData:
    text = resources.files(__package__).joinpath("srd.yaml").read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return ReferenceData(
        spells=tuple(Spell(**entry) for entry in data["spells"]),
        weapons=tuple(Weapon(**entry) for entry in data["weapons"]),
    )
