"""Table tools."""

from .dice import RollResult, parse_dice, roll

__all__ = ["RollResult", "parse_dice", "roll"]
