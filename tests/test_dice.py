"""
Tests for dice rolling.
"""

import random

import pytest

from initiative.tools.dice import DiceExpression, RollResult, parse_dice, roll


class TestParseDice:
    """Expression parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("d20", DiceExpression(1, 20, 0)),
        ("2d6+3", DiceExpression(2, 6, 3)),
        ("4d8 - 1", DiceExpression(4, 8, -1)),
        ("D12", DiceExpression(1, 12, 0)),
    ])
    def test_valid(self, text, expected):
        assert parse_dice(text) == expected

    @pytest.mark.parametrize("text", ["", "d", "20", "2d", "d0", "101d6", "d1001", "2d6+", "elf"])
    def test_invalid(self, text):
        assert parse_dice(text) is None

    def test_str_is_canonical(self):
        assert str(DiceExpression(1, 20, -2)) == "d20-2"
        assert str(DiceExpression(3, 6, 1)) == "3d6+1"


class TestRoll:
    """Rolling honours dice count, sides and modifier."""

    def test_roll_totals(self):
        result = roll("3d6+2", random.Random(7))

        assert len(result.rolls) == 3
        assert all(1 <= value <= 6 for value in result.rolls)
        assert result.total == sum(result.rolls) + 2
        assert result.expression == "3d6+2"

    def test_seeded_rolls_repeat(self):
        first = roll("10d20", random.Random(99))
        second = roll("10d20", random.Random(99))
        assert first.rolls == second.rolls

    def test_invalid_expression(self):
        assert roll("banana") is None

    def test_narrative(self):
        assert RollResult("d20+4", [12], 4, 16).narrative == "`d20+4` = [12] + 4 = **16**"
        assert RollResult("d20-2", [5], -2, 3).narrative == "`d20-2` = [5] - 2 = **3**"
        assert RollResult("2d6", [3, 4], 0, 7).narrative == "`2d6` = [3, 4] = **7**"
