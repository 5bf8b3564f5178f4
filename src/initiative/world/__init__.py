"""The world model: characters, places and the words that describe them."""

from .field import Field
from .npc import Age, Gender, Npc, Species
from .place import Place, PlaceCategory, PlaceType
from .thing import ParsedThing, Thing

__all__ = [
    "Field",
    "Age",
    "Gender",
    "Npc",
    "Species",
    "Place",
    "PlaceCategory",
    "PlaceType",
    "ParsedThing",
    "Thing",
]
