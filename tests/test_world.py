"""
Tests for description parsing and the world commands.
"""

import pytest

from conftest import make_npc

from initiative.app.command import run_input
from initiative.app.runnable import CommandError
from initiative.storage import Create
from initiative.world.command import WorldAction, WorldCommand
from initiative.world.field import Field
from initiative.world.npc import Age, Gender, Npc, Species
from initiative.world.parse import parse_npc, parse_thing, quoted_words
from initiative.world.place import Place, PlaceType
from initiative.world.thing import thing_name


def alias_terms(app_meta):
    return {alias.term for alias in app_meta.command_aliases}


class TestParse:
    """Phrases become partial things with locked attributes."""

    def test_npc_with_name(self):
        parsed = parse_npc("elderly dwarf named Gimli son of Gloin")

        assert parsed.thing.species.value == Species.DWARF
        assert parsed.thing.age.value == Age.ELDERLY
        assert thing_name(parsed.thing) == "Gimli son of Gloin"
        assert parsed.thing.name.is_locked
        assert parsed.unknown_words == []

    def test_articles_are_ignored(self):
        parsed = parse_thing("an elf")
        assert parsed.unknown_words == []
        assert parsed.word_count == 1

    def test_place_alias(self):
        parsed = parse_thing("a quiet bar")

        assert isinstance(parsed.thing, Place)
        assert parsed.thing.subtype.value == PlaceType.TAVERN
        assert parsed.unknown_words == [range(2, 7)]

    def test_unrecognized(self):
        assert parse_thing("potato") is None

    def test_npc_wins_ties(self):
        parsed = parse_thing("elf inn")
        assert isinstance(parsed.thing, Npc)
        assert parsed.thing.species.value == Species.ELF
        assert parsed.unknown_words == [range(4, 7)]

    @pytest.mark.parametrize("text, age, gender", [
        ("elderly woman", Age.ELDERLY, Gender.FEMININE),
        ("woman elderly", Age.ELDERLY, Gender.FEMININE),
        ("old man", Age.ELDERLY, Gender.MASCULINE),
        ("teen boy", Age.ADOLESCENT, Gender.MASCULINE),
        ("woman", Age.ADULT, Gender.FEMININE),
        ("girl", Age.CHILD, Gender.FEMININE),
    ])
    def test_explicit_age_beats_implied(self, text, age, gender):
        parsed = parse_npc(text)

        assert parsed.thing.age.value == age
        assert parsed.thing.gender.value == gender
        assert parsed.unknown_words == []

    def test_quoted_words(self):
        words = quoted_words('named "Long John" Silver')
        assert [word.text for word in words] == ["named", "Long John", "Silver"]
        assert words[1].span == range(6, 17)


class TestWorldParseInput:
    """Exact and fuzzy recognition."""

    def test_bare_species_is_fuzzy(self, app_meta):
        exact, fuzzy = WorldCommand.parse_input("elf", app_meta)

        assert exact is None
        assert len(fuzzy) == 1
        assert fuzzy[0].action == WorldAction.CREATE
        assert isinstance(fuzzy[0].parsed.thing, Npc)
        assert fuzzy[0].parsed.thing.species.value == Species.ELF

    def test_create_prefix_is_exact(self, app_meta):
        exact, fuzzy = WorldCommand.parse_input("create elf", app_meta)

        assert exact.action == WorldAction.CREATE
        assert exact.parsed.thing.species.value == Species.ELF
        assert fuzzy == []

    def test_create_with_unknown_words_is_fuzzy(self, app_meta):
        exact, fuzzy = WorldCommand.parse_input("create big elf", app_meta)

        assert exact is None
        assert fuzzy[0].unknown_words == [range(7, 10)]

    def test_unknown_word_is_nothing(self, app_meta):
        assert WorldCommand.parse_input("potato", app_meta) == (None, [])

    def test_edit_existing(self, app_meta):
        app_meta.repository.modify(Create(Npc(name=Field("Spot"))))

        exact, fuzzy = WorldCommand.parse_input("Spot is a good boy", app_meta)

        assert exact is None
        [edit] = fuzzy
        assert edit.action == WorldAction.EDIT
        assert edit.name == "Spot"
        assert edit.parsed.thing.age.value == Age.CHILD
        assert edit.parsed.thing.gender.value == Gender.MASCULINE
        assert edit.unknown_words == [range(10, 14)]
        assert edit.parsed.word_count == 2


class TestCreate:
    """Generating things."""

    def test_create_registers_aliases(self, app_meta):
        output = run_input("create elf", app_meta)

        assert output.startswith("# ")
        assert "_Alternatives:_" in output
        assert "~1~ `" in output
        assert "Use ~save~ to save" in output
        assert alias_terms(app_meta) == {"save", "more", "1", "2", "3"}
        assert len(app_meta.repository.recent()) == 4
        assert all(thing.species.value == Species.ELF for thing in app_meta.repository.recent())

    def test_named_create_saves(self, app_meta):
        output = run_input("create elf named Legolas", app_meta)

        assert output.startswith("# Legolas")
        assert "automatically added to your `journal`" in output
        legolas = app_meta.repository.load_thing_by_name("Legolas")
        assert app_meta.repository.is_saved(legolas)

    def test_named_create_conflict(self, app_meta):
        run_input("create elf named Legolas", app_meta)

        with pytest.raises(CommandError) as exc:
            run_input("create dwarf named legolas", app_meta)
        assert exc.value.message.startswith("That name is already in use by `Legolas`")

    def test_named_create_without_store(self, null_store):
        from initiative.app.meta import AppMeta

        app_meta = AppMeta.new(null_store, seed=1)
        app_meta.repository.init()

        output = run_input("create inn named The Yawning Portal", app_meta)

        assert output.startswith("# The Yawning Portal")
        assert "journal" not in output
        assert app_meta.repository.load_thing_by_name("the yawning portal") is not None

    def test_more(self, app_meta):
        run_input("create inn", app_meta)
        output = run_input("more", app_meta)

        assert output.startswith('# Alternative suggestions for "inn"')
        assert output.count("(inn)") == 10
        assert "~0~ " in output
        assert output.endswith("_For even more suggestions, type ~more~._")
        assert "more" in alias_terms(app_meta)

    def test_save_alias(self, app_meta):
        output = run_input("create elf", app_meta)
        name = output.splitlines()[0][2:]

        assert run_input("save", app_meta).endswith("was successfully saved.")
        assert app_meta.repository.is_saved(app_meta.repository.load_thing_by_name(name))

    def test_numbered_alias_loads(self, app_meta):
        output = run_input("create elf", app_meta)
        line = next(line for line in output.splitlines() if line.startswith("~2~ "))
        name = line[line.find("`") + 1:line.rfind("`")]

        assert run_input("2", app_meta).startswith(f"# {name}")


class TestEdit:
    """Editing existing things."""

    def test_edit_runs(self, app_meta):
        app_meta.repository.modify(Create(make_npc("Penelope")))

        output = run_input("Penelope is a dwarf", app_meta)

        assert output == "`Penelope` (adult dwarf, she/her) was successfully edited."

    def test_ambiguous_input_offers_numbered_choices(self, app_meta):
        with pytest.raises(CommandError) as exc:
            run_input("elderly elf is dwarf", app_meta)

        message = exc.value.message
        assert message.startswith("There are several possible interpretations of this command.")
        assert "~1~ `create elderly dwarf`" in message
        assert "~2~ `elderly elf is dwarf`" in message
        assert alias_terms(app_meta) == {"1", "2"}

        with pytest.raises(CommandError) as exc:
            run_input("2", app_meta)
        assert exc.value.message == "There is no character named elderly elf."
