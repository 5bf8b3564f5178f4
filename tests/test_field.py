"""
Tests for Field - provenance-tracked attribute values.
"""

from initiative.world.field import Field
from initiative.world.npc import Gender


class TestFieldLocking:
    """Locked values survive regeneration."""

    def test_value_defaults_locked(self):
        assert Field("Bob").is_locked
        assert Field().is_unlocked
        assert Field.generated("Bob").is_unlocked

    def test_locked_field_ignores_replace_and_clear(self):
        field = Field("Bob")

        for value in ("Alice", None, "Carol"):
            field.replace(value)
            field.clear()
            field.replace_with(lambda _: "Dave")

        assert field.value == "Bob"

    def test_unlocked_field_replace(self):
        field = Field.generated("Bob")

        field.replace("Alice")
        assert field.value == "Alice"

        field.replace_with(lambda old: old + "!")
        assert field.value == "Alice!"

        field.clear()
        assert field.is_none

    def test_lock_and_unlock(self):
        field = Field.generated(3)
        field.lock()
        field.replace(4)
        assert field.value == 3

        field.unlock()
        field.replace(4)
        assert field.value == 4


class TestFieldIdentity:
    """Equality covers both the value and the lock."""

    def test_equality_includes_lock(self):
        assert Field("Bob") == Field("Bob")
        assert Field("Bob") != Field.generated("Bob")
        assert hash(Field("Bob")) == hash(Field("Bob"))

    def test_copy_is_independent(self):
        field = Field.generated("Bob")
        copy = field.copy()
        copy.replace("Alice")

        assert field.value == "Bob"
        assert copy == Field.generated("Alice")

    def test_str_uses_enum_term(self):
        assert str(Field(Gender.NON_BINARY)) == "non-binary"
        assert str(Field()) == ""
