"""
Thing: the union of everything the world can generate.
"""

import copy
from dataclasses import dataclass, field, fields
from typing import Generic, TypeVar, Union

from .field import Field
from .npc import Npc
from .place import Place

Thing = Union[Npc, Place]

T = TypeVar("T")


@dataclass
class ParsedThing(Generic[T]):
    """
    A (possibly partial) thing read from a description.

    unknown_words holds half-open ranges into the parsed text for words that
    were not understood; word_count counts every non-article word.
    """
    thing: T
    unknown_words: list[range] = field(default_factory=list)
    word_count: int = 0

    def offset(self, by: int) -> "ParsedThing[T]":
        """Shift unknown word ranges, for text parsed out of a longer input."""
        return ParsedThing(
            thing=self.thing,
            unknown_words=[range(r.start + by, r.stop + by) for r in self.unknown_words],
            word_count=self.word_count,
        )


def attribute_names(thing: Thing) -> list[str]:
    """Names of the Field attributes of a thing (everything but uuid)."""
    return [f.name for f in fields(thing) if f.name != "uuid"]


def clone(thing: Thing) -> Thing:
    return copy.deepcopy(thing)


def apply_diff(thing: Thing, diff: Thing) -> None:
    """Copy every locked attribute of diff onto thing."""
    for name in attribute_names(diff):
        diff_field: Field = getattr(diff, name)
        if diff_field.is_locked and hasattr(thing, name):
            setattr(thing, name, diff_field.copy())


def lock_all(thing: Thing) -> None:
    for name in attribute_names(thing):
        value: Field = getattr(thing, name)
        if value.is_some:
            value.lock()


def thing_name(thing: Thing) -> str:
    return str(thing.name)


def names_match(thing: Thing, name: str) -> bool:
    return thing.name.is_some and thing_name(thing).lower() == name.lower()


def them(thing: Thing) -> str:
    """Object pronoun for a thing ("him", "her", "them", "it")."""
    if isinstance(thing, Npc):
        return thing.gender.value.them if thing.gender.is_some else "them"
    return "it"
