"""
Random content tables for generated characters and places.

Deliberately small: enough variety to give every generated thing a
plausible, mostly-unique name.
"""

import random
from dataclasses import dataclass, field

from .npc import Age, Gender, Species
from .place import PlaceCategory, PlaceType


FEMININE_NAMES = [
    "Adelhayt", "Affra", "Agatha", "Allet", "Angnes", "Anna", "Apell", "Applonia", "Barbara",
    "Brida", "Brigita", "Cecilia", "Clara", "Dorothea", "Duretta", "Ella", "Els", "Elsbeth",
    "Engel", "Enlein", "Enndlin", "Eva", "Fela", "Fronicka", "Genefe", "Geras", "Gerhauss",
    "Gertrudt", "Guttel", "Helena", "Irmel", "Jonata", "Kuen", "Kungund", "Lucia", "Madalena",
    "Magdalen", "Margret", "Marlein", "Martha", "Otilia", "Ottilg", "Peternella", "Reusin",
    "Sibilla", "Ursel", "Vrsula", "Walpurg",
]

MASCULINE_NAMES = [
    "Albrecht", "Allexander", "Baltasar", "Benedick", "Berhart", "Caspar", "Clas", "Cristin",
    "Cristoff", "Dieterich", "Engelhart", "Erhart", "Felix", "Frantz", "Fritz", "Gerhart",
    "Gotleib", "Hans", "Hartmann", "Heintz", "Herman", "Jacob", "Jeremias", "Jorg", "Karil",
    "Kilian", "Linhart", "Lorentz", "Ludwig", "Marx", "Melchor", "Mertin", "Michel", "Moritz",
    "Osswald", "Ott", "Peter", "Rudolff", "Ruprecht", "Sewastian", "Sigmund", "Steffan",
    "Symon", "Thoman", "Ulrich", "Vallentin", "Wendel", "Wilhelm", "Wolff", "Wolfgang",
]

SURNAMES = [
    "Bauer", "Becker", "Brandt", "Eckhart", "Fischer", "Graf", "Hahn", "Hartmann", "Hoffmann",
    "Jaeger", "Kaiser", "Keller", "Koch", "Kraus", "Lang", "Lehmann", "Meyer", "Neumann",
    "Richter", "Schmidt", "Schneider", "Schulz", "Schwarz", "Vogel", "Wagner", "Weber",
    "Winkler", "Wolf", "Zimmermann",
]

PLACE_ADJECTIVES = [
    "Amber", "Black", "Broken", "Copper", "Crooked", "Drunken", "Gilded", "Golden", "Green",
    "Howling", "Laughing", "Lonely", "Merry", "Prancing", "Red", "Rusty", "Silver", "Sleeping",
    "Thirsty", "Wandering",
]

PLACE_NOUNS = [
    "Badger", "Barrel", "Boar", "Crown", "Dragon", "Flagon", "Fox", "Griffin", "Hart",
    "Horseshoe", "Lantern", "Lion", "Mermaid", "Owl", "Pony", "Raven", "Stag", "Swan",
    "Tankard", "Unicorn",
]

SETTLEMENT_PREFIXES = [
    "Ash", "Black", "Bramble", "Cold", "Elm", "Fair", "Green", "High", "Iron", "Mill",
    "Oak", "Red", "Stone", "Thorn", "White", "Wil",
]

SETTLEMENT_SUFFIXES = [
    "bridge", "brook", "bury", "dale", "field", "ford", "gate", "haven", "hollow", "marsh",
    "mere", "stead", "ton", "vale", "wick",
]


# -----------------------------------------------------------------------------
# Demographics
# -----------------------------------------------------------------------------

DEFAULT_SPECIES_WEIGHTS: dict[Species, int] = {
    Species.HUMAN: 50,
    Species.ELF: 10,
    Species.DWARF: 10,
    Species.HALFLING: 10,
    Species.GNOME: 5,
    Species.HALF_ELF: 5,
    Species.HALF_ORC: 4,
    Species.TIEFLING: 3,
    Species.DRAGONBORN: 3,
}

DEFAULT_GENDER_WEIGHTS: dict[Gender, int] = {
    Gender.FEMININE: 46,
    Gender.MASCULINE: 46,
    Gender.NON_BINARY: 8,
}

DEFAULT_AGE_WEIGHTS: dict[Age, int] = {
    Age.INFANT: 2,
    Age.CHILD: 8,
    Age.ADOLESCENT: 10,
    Age.YOUNG_ADULT: 20,
    Age.ADULT: 25,
    Age.MIDDLE_AGED: 20,
    Age.ELDERLY: 12,
    Age.GERIATRIC: 3,
}


@dataclass
class Demographics:
    """Weighted distributions used when generating characters."""
    species: dict[Species, int] = field(default_factory=lambda: dict(DEFAULT_SPECIES_WEIGHTS))
    genders: dict[Gender, int] = field(default_factory=lambda: dict(DEFAULT_GENDER_WEIGHTS))
    ages: dict[Age, int] = field(default_factory=lambda: dict(DEFAULT_AGE_WEIGHTS))

    def gen_species(self, rng: random.Random) -> Species:
        return _weighted(rng, self.species)

    def gen_gender(self, rng: random.Random) -> Gender:
        return _weighted(rng, self.genders)

    def gen_age(self, rng: random.Random) -> Age:
        return _weighted(rng, self.ages)


def _weighted(rng: random.Random, weights: dict):
    return rng.choices(list(weights), weights=list(weights.values()))[0]


# -----------------------------------------------------------------------------
# Names
# -----------------------------------------------------------------------------

def gen_npc_name(rng: random.Random, gender: Gender | None) -> str:
    if gender is Gender.MASCULINE:
        first = rng.choice(MASCULINE_NAMES)
    elif gender is Gender.FEMININE:
        first = rng.choice(FEMININE_NAMES)
    else:
        first = rng.choice(MASCULINE_NAMES + FEMININE_NAMES)
    return f"{first} {rng.choice(SURNAMES)}"


def gen_settlement_name(rng: random.Random) -> str:
    return rng.choice(SETTLEMENT_PREFIXES) + rng.choice(SETTLEMENT_SUFFIXES)


def gen_place_name(rng: random.Random, subtype: PlaceType | None) -> str:
    if subtype is None:
        return gen_settlement_name(rng)

    category = subtype.category
    if category == PlaceCategory.HOSTELRY:
        return f"The {rng.choice(PLACE_ADJECTIVES)} {rng.choice(PLACE_NOUNS)}"
    elif category == PlaceCategory.SETTLEMENT:
        return gen_settlement_name(rng)
    elif category == PlaceCategory.LOCATION:
        return f"{gen_settlement_name(rng)} {subtype.value.capitalize()}"
    else:
        return f"The {rng.choice(PLACE_ADJECTIVES)} {subtype.value.capitalize()}"
