"""
Tests for CommandAlias - identity and the swap/restore/merge rule.
"""

from dataclasses import dataclass

import pytest

from initiative.app.alias import CommandAlias, register_alias
from initiative.app.command import run_input
from initiative.app.runnable import CommandError
from initiative.storage.command import StorageCommand
from initiative.time.command import TimeAction, TimeCommand


@dataclass
class Recorder:
    """Command that records its input and optionally registers aliases."""
    registers: tuple = ()
    output: str = "ok"

    def __post_init__(self):
        self.inputs = []

    def run(self, input, app_meta):
        self.inputs.append(input)
        for term in self.registers:
            register_alias(app_meta, CommandAlias.literal(term, f"new {term}", Recorder()))
        return self.output

    def __str__(self):
        return "recorder"


def terms(app_meta):
    return {alias.term for alias in app_meta.command_aliases}


def summary_of(app_meta, term):
    return next(alias.summary for alias in app_meta.command_aliases if alias.term == term)


class TestAliasIdentity:
    """Equality and hash depend on the term alone."""

    def test_same_term_is_equal(self):
        a = CommandAlias.literal("save", "save one", StorageCommand.save("One"))
        b = CommandAlias.literal("save", "save two", TimeCommand(TimeAction.NOW))

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_terms_differ(self):
        a = CommandAlias.literal("1", "x", Recorder())
        b = CommandAlias.literal("2", "x", Recorder())
        assert a != b

    def test_register_replaces_same_term(self, app_meta):
        register_alias(app_meta, CommandAlias.literal("save", "old", Recorder()))
        register_alias(app_meta, CommandAlias.literal("save", "new", Recorder()))

        assert len(app_meta.command_aliases) == 1
        assert summary_of(app_meta, "save") == "new"


class TestAliasRun:
    """Running an alias swaps the alias set out and back in."""

    def test_restores_when_nothing_registered(self, app_meta):
        target = Recorder()
        register_alias(app_meta, CommandAlias.literal("go", "go", target))
        register_alias(app_meta, CommandAlias.literal("other", "other", Recorder()))

        assert run_input("go", app_meta) == "ok"

        assert target.inputs == ["go"]
        assert terms(app_meta) == {"go", "other"}

    def test_new_aliases_merge_with_old(self, app_meta):
        register_alias(app_meta, CommandAlias.literal("go", "go", Recorder(registers=("save", "more"))))
        register_alias(app_meta, CommandAlias.literal("save", "old save", Recorder()))
        register_alias(app_meta, CommandAlias.literal("1", "one", Recorder()))

        run_input("go", app_meta)

        assert terms(app_meta) == {"go", "save", "more", "1"}
        assert summary_of(app_meta, "save") == "new save"

    def test_restores_after_error(self, app_meta):
        register_alias(app_meta, CommandAlias.literal("gone", "load", StorageCommand.load("Nobody")))

        with pytest.raises(CommandError) as exc:
            run_input("gone", app_meta)

        assert exc.value.message == 'No matches for "Nobody"'
        assert terms(app_meta) == {"gone"}

    def test_non_alias_command_clears_aliases(self, app_meta):
        register_alias(app_meta, CommandAlias.literal("go", "go", Recorder()))

        run_input("now", app_meta)

        assert app_meta.command_aliases == set()

    def test_alias_never_fuzzy_matches(self, app_meta):
        register_alias(app_meta, CommandAlias.literal("save", "save", Recorder()))

        exact, fuzzy = CommandAlias.parse_input("sav", app_meta)
        assert exact is None
        assert fuzzy == []


class TestStrictWildcard:
    """A strict wildcard takes whatever comes next."""

    def test_wildcard_matches_anything(self, app_meta):
        target = Recorder()
        register_alias(app_meta, CommandAlias.literal("journal", "x", Recorder()))
        register_alias(app_meta, CommandAlias.strict_wildcard(target))

        run_input("journal", app_meta)

        assert target.inputs == ["journal"]

    def test_wildcard_removes_only_itself(self, app_meta):
        register_alias(app_meta, CommandAlias.literal("save", "save", Recorder()))
        register_alias(app_meta, CommandAlias.strict_wildcard(Recorder()))

        run_input("anything at all", app_meta)

        assert terms(app_meta) == {"save"}

    def test_wildcards_are_not_suggested(self, app_meta):
        register_alias(app_meta, CommandAlias.strict_wildcard(Recorder()))
        register_alias(app_meta, CommandAlias.literal("save", "save it", Recorder()))

        assert CommandAlias.autocomplete("s", app_meta) == [("save", "save it")]
