"""
Provenance-tracked attribute values.

A Field remembers whether its value was supplied by the user (locked) or
filled in by the generator (unlocked). Regeneration may call replace()
freely; locked values are never touched.
"""

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Field(Generic[T]):
    """
    An optional value with a locked/unlocked flag.

    Field("Bob")            -> locked, value "Bob"
    Field()                 -> unlocked, empty
    Field.generated("Bob")  -> unlocked, value "Bob"
    """

    __slots__ = ("_value", "_locked")

    def __init__(self, value: T | None = None, locked: bool | None = None):
        self._value = value
        self._locked = value is not None if locked is None else locked

    @classmethod
    def generated(cls, value: T) -> "Field[T]":
        """Unlocked field holding a generator-supplied value."""
        return cls(value, locked=False)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def value(self) -> T | None:
        return self._value

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def is_unlocked(self) -> bool:
        return not self._locked

    @property
    def is_some(self) -> bool:
        return self._value is not None

    @property
    def is_none(self) -> bool:
        return self._value is None

    # -------------------------------------------------------------------------
    # Mutation (no-ops while locked)
    # -------------------------------------------------------------------------

    def replace(self, value: T | None) -> None:
        self.replace_with(lambda _: value)

    def replace_with(self, f: Callable[[T | None], T | None]) -> None:
        """Replace the value with f(old) unless the field is locked."""
        if not self._locked:
            self._value = f(self._value)

    def clear(self) -> None:
        if not self._locked:
            self._value = None

    def lock(self) -> None:
        self._locked = True

    def unlock(self) -> None:
        self._locked = False

    def copy(self) -> "Field[T]":
        return Field(self._value, locked=self._locked)

    # -------------------------------------------------------------------------
    # Dunder
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return NotImplemented
        return self._locked == other._locked and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._locked, self._value))

    def __repr__(self) -> str:
        state = "locked" if self._locked else "unlocked"
        return f"Field({self._value!r}, {state})"

    def __str__(self) -> str:
        if self._value is None:
            return ""
        # str Enum values render as their term
        return str(getattr(self._value, "value", self._value))
