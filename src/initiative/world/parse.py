"""
Description parsing.

Turns phrases like "elderly dwarf named Gimli" or "a quiet bar" into partial
things. Every word is either recognized (and locks an attribute), an
article (ignored), or unknown (recorded for later annotation).
"""

import re
from dataclasses import dataclass
from typing import Callable

from .field import Field
from .npc import Age, Gender, Npc, Species
from .place import PLACE_TYPE_ALIASES, Place, PlaceType
from .thing import ParsedThing, Thing

ARTICLES = {"a", "an", "the"}
NAME_MARKERS = {"named", "called"}

Vocabulary = dict[str, tuple[tuple[str, object], ...]]


# -----------------------------------------------------------------------------
# Words
# -----------------------------------------------------------------------------

_WORD_RE = re.compile(r'"([^"]*)"?|(\S+)')


@dataclass(frozen=True)
class Word:
    text: str
    span: range


def quoted_words(text: str) -> list[Word]:
    """
    Split on whitespace, keeping "quoted phrases" together.

    Each word carries its half-open span in the original text (quotes
    included); the text itself is unquoted.
    """
    words = []
    for match in _WORD_RE.finditer(text):
        quoted, bare = match.groups()
        words.append(Word(quoted if quoted is not None else bare, range(match.start(), match.end())))
    return words


# -----------------------------------------------------------------------------
# Vocabulary
# -----------------------------------------------------------------------------

NPC_VOCABULARY: Vocabulary = {
    "npc": (),
    "character": (),
    "person": (),
    "baby": (("age", Age.INFANT),),
    "infant": (("age", Age.INFANT),),
    "child": (("age", Age.CHILD),),
    "kid": (("age", Age.CHILD),),
    "boy": (("gender", Gender.MASCULINE),),
    "girl": (("gender", Gender.FEMININE),),
    "adolescent": (("age", Age.ADOLESCENT),),
    "teen": (("age", Age.ADOLESCENT),),
    "teenager": (("age", Age.ADOLESCENT),),
    "young-adult": (("age", Age.YOUNG_ADULT),),
    "adult": (("age", Age.ADULT),),
    "middle-aged": (("age", Age.MIDDLE_AGED),),
    "elderly": (("age", Age.ELDERLY),),
    "old": (("age", Age.ELDERLY),),
    "geriatric": (("age", Age.GERIATRIC),),
    "man": (("gender", Gender.MASCULINE),),
    "woman": (("gender", Gender.FEMININE),),
    "male": (("gender", Gender.MASCULINE),),
    "masculine": (("gender", Gender.MASCULINE),),
    "he": (("gender", Gender.MASCULINE),),
    "female": (("gender", Gender.FEMININE),),
    "feminine": (("gender", Gender.FEMININE),),
    "she": (("gender", Gender.FEMININE),),
    "enby": (("gender", Gender.NON_BINARY),),
    "non-binary": (("gender", Gender.NON_BINARY),),
    "nonbinary": (("gender", Gender.NON_BINARY),),
    "they": (("gender", Gender.NON_BINARY),),
    "dwarven": (("species", Species.DWARF),),
    "dwarvish": (("species", Species.DWARF),),
    "elven": (("species", Species.ELF),),
    "elvish": (("species", Species.ELF),),
    "gnomish": (("species", Species.GNOME),),
    "half-elven": (("species", Species.HALF_ELF),),
    "half-orcish": (("species", Species.HALF_ORC),),
}
NPC_VOCABULARY.update({species.value: (("species", species),) for species in Species})

# Applied after parsing, only to attributes no word set explicitly
IMPLIED: Vocabulary = {
    "boy": (("age", Age.CHILD),),
    "girl": (("age", Age.CHILD),),
    "man": (("age", Age.ADULT),),
    "woman": (("age", Age.ADULT),),
}

PLACE_VOCABULARY: Vocabulary = {
    "place": (),
    "building": (),
    "location": (),
}
PLACE_VOCABULARY.update({subtype.value: (("subtype", subtype),) for subtype in PlaceType})
PLACE_VOCABULARY.update({word: (("subtype", subtype),) for word, subtype in PLACE_TYPE_ALIASES.items()})


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------

def _parse(text: str, vocabulary: Vocabulary, factory: Callable[[], Thing]) -> ParsedThing | None:
    thing = factory()
    unknown_words: list[range] = []
    word_count = 0
    recognized = 0
    implied: list[tuple[str, object]] = []

    words = quoted_words(text)
    for i, word in enumerate(words):
        lower = word.text.lower()
        if lower in ARTICLES:
            continue
        word_count += 1

        if lower in NAME_MARKERS and i + 1 < len(words):
            name = text[words[i + 1].span.start:].strip().strip('"').strip()
            if name:
                thing.name = Field(name)
                recognized += 1
                break

        if lower in vocabulary:
            for attribute, value in vocabulary[lower]:
                setattr(thing, attribute, Field(value))
            implied.extend(IMPLIED.get(lower, ()))
            recognized += 1
        else:
            unknown_words.append(word.span)

    for attribute, value in implied:
        if getattr(thing, attribute).is_none:
            setattr(thing, attribute, Field(value))

    if recognized == 0:
        return None
    return ParsedThing(thing, unknown_words, word_count)


def parse_npc(text: str) -> ParsedThing[Npc] | None:
    return _parse(text, NPC_VOCABULARY, Npc)


def parse_place(text: str) -> ParsedThing[Place] | None:
    return _parse(text, PLACE_VOCABULARY, Place)


def parse_thing(text: str) -> ParsedThing[Thing] | None:
    """Parse as both kinds, keeping whichever understood more (NPCs win ties)."""
    npc = parse_npc(text)
    place = parse_place(text)

    if npc is None or place is None:
        return npc or place
    if len(place.unknown_words) < len(npc.unknown_words):
        return place
    return npc


def parse_as(kind: str, text: str) -> ParsedThing | None:
    """Parse text as a description of a specific kind ("character"/"place")."""
    if kind == Place.kind:
        return parse_place(text)
    return parse_npc(text)


# -----------------------------------------------------------------------------
# Autocomplete
# -----------------------------------------------------------------------------

def split_last_word(text: str) -> tuple[str, str]:
    index = text.rfind(" ") + 1
    return text[:index], text[index:]


def autocomplete_description(
    text: str,
    parse: Callable[[str], ParsedThing | None] = parse_thing,
) -> list[tuple[str, ParsedThing]]:
    """
    Complete the last word of a description against the vocabulary.

    Only words the typed fragment is a literal prefix of are offered, and
    only completions that parse without unknown words survive.
    """
    prefix, partial = split_last_word(text)
    if not partial:
        return []

    words = sorted(set(NPC_VOCABULARY) | set(PLACE_VOCABULARY))
    suggestions = []
    for word in words:
        if not word.startswith(partial):
            continue
        candidate = prefix + word
        parsed = parse(candidate)
        if parsed is not None and not parsed.unknown_words:
            suggestions.append((candidate, parsed))
    return suggestions
