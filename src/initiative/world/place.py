"""
Places: buildings, locations and settlements.
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


class PlaceCategory(str, Enum):
    BUILDING = "building"
    HOSTELRY = "hostelry"
    LOCATION = "location"
    SETTLEMENT = "settlement"


class PlaceType(str, Enum):
    ABBEY = "abbey"
    BAKERY = "bakery"
    BANK = "bank"
    BARONY = "barony"
    BARRACKS = "barracks"
    BATHHOUSE = "bathhouse"
    BEACH = "beach"
    BLACKSMITH = "blacksmith"
    BREWERY = "brewery"
    BRIDGE = "bridge"
    CASTLE = "castle"
    CEMETERY = "cemetery"
    CITY = "city"
    CRYPT = "crypt"
    FOREST = "forest"
    INN = "inn"
    LIBRARY = "library"
    MARKET = "market"
    MONASTERY = "monastery"
    SHOP = "shop"
    SHRINE = "shrine"
    TAVERN = "tavern"
    TEMPLE = "temple"
    TOMB = "tomb"
    TOWER = "tower"
    TOWN = "town"
    VILLAGE = "village"
    WAREHOUSE = "warehouse"

    @property
    def category(self) -> PlaceCategory:
        return _CATEGORIES.get(self, PlaceCategory.BUILDING)

    @property
    def article(self) -> str:
        return "an" if self.value[0] in "aeiou" else "a"


_CATEGORIES: dict[PlaceType, PlaceCategory] = {
    PlaceType.INN: PlaceCategory.HOSTELRY,
    PlaceType.TAVERN: PlaceCategory.HOSTELRY,
    PlaceType.BEACH: PlaceCategory.LOCATION,
    PlaceType.BRIDGE: PlaceCategory.LOCATION,
    PlaceType.FOREST: PlaceCategory.LOCATION,
    PlaceType.BARONY: PlaceCategory.SETTLEMENT,
    PlaceType.CITY: PlaceCategory.SETTLEMENT,
    PlaceType.TOWN: PlaceCategory.SETTLEMENT,
    PlaceType.VILLAGE: PlaceCategory.SETTLEMENT,
}

# Extra words that resolve to an existing place type
PLACE_TYPE_ALIASES: dict[str, PlaceType] = {
    "bar": PlaceType.TAVERN,
    "pub": PlaceType.TAVERN,
    "saloon": PlaceType.TAVERN,
    "hotel": PlaceType.INN,
    "lodge": PlaceType.INN,
    "church": PlaceType.TEMPLE,
    "mosque": PlaceType.TEMPLE,
    "synagogue": PlaceType.TEMPLE,
    "graveyard": PlaceType.CEMETERY,
    "necropolis": PlaceType.CEMETERY,
    "hermitage": PlaceType.MONASTERY,
    "nunnery": PlaceType.MONASTERY,
    "mausoleum": PlaceType.TOMB,
    "smithy": PlaceType.BLACKSMITH,
    "store": PlaceType.SHOP,
    "fort": PlaceType.CASTLE,
    "fortress": PlaceType.CASTLE,
    "keep": PlaceType.CASTLE,
    "hamlet": PlaceType.VILLAGE,
    "woods": PlaceType.FOREST,
}


@dataclass
class Place:
    uuid: UUID | None = None
    name: Field[str] = field(default_factory=Field)
    subtype: Field[PlaceType] = field(default_factory=Field)

    kind: ClassVar[str] = "place"

    def display_description(self) -> str:
        if self.subtype.is_some:
            return self.subtype.value.value
        return "place"

    def display_summary(self) -> str:
        return f"`{self.name}` ({self.display_description()})"

    def display_details(self) -> str:
        subtype = self.subtype.value
        if subtype is not None:
            tagline = f"{subtype.article} {subtype.value}"
        else:
            tagline = "a place"
        return f"# {self.name}\n*{tagline}*"

    def regenerate(self, rng: random.Random, demographics: "Demographics") -> None:
        from .generate import gen_place_name

        self.subtype.replace_with(lambda _: rng.choice(list(PlaceType)))
        self.name.replace_with(lambda _: gen_place_name(rng, self.subtype.value))
