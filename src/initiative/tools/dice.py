"""
Dice rolling tools.

Handles expressions like "d20", "2d6+3" or "4d8 - 1".
"""

import random
import re
from dataclasses import dataclass

MAX_DICE = 100
MAX_SIDES = 1000

_DICE_RE = re.compile(r"^(\d*)d(\d+)(?:([+-])(\d+))?$")


@dataclass
class RollResult:
    """Result of a dice roll."""
    expression: str
    rolls: list[int]  # Every die rolled
    modifier: int
    total: int

    @property
    def narrative(self) -> str:
        """Markdown line showing the working, e.g. `d20+4` = [12] + 4 = **16**"""
        working = f"[{', '.join(str(roll) for roll in self.rolls)}]"
        if self.modifier > 0:
            working += f" + {self.modifier}"
        elif self.modifier < 0:
            working += f" - {-self.modifier}"
        return f"`{self.expression}` = {working} = **{self.total}**"


@dataclass(frozen=True)
class DiceExpression:
    count: int
    sides: int
    modifier: int = 0

    def __str__(self) -> str:
        text = f"{self.count if self.count != 1 else ''}d{self.sides}"
        if self.modifier > 0:
            text += f"+{self.modifier}"
        elif self.modifier < 0:
            text += str(self.modifier)
        return text


def parse_dice(expression: str) -> DiceExpression | None:
    """Parse "NdS+M". Returns None for anything else, including silly sizes."""
    match = _DICE_RE.match(expression.replace(" ", "").lower())
    if not match:
        return None

    count = int(match.group(1)) if match.group(1) else 1
    sides = int(match.group(2))
    modifier = int(match.group(4)) if match.group(4) else 0
    if match.group(3) == "-":
        modifier = -modifier

    if not 1 <= count <= MAX_DICE or not 1 <= sides <= MAX_SIDES:
        return None
    return DiceExpression(count, sides, modifier)


def roll(expression: str, rng: random.Random | None = None) -> RollResult | None:
    """
    Roll a dice expression.

    Args:
        expression: Text like "d20+4"
        rng: Random source (defaults to the module-level generator)

    Returns:
        RollResult, or None if the expression doesn't parse
    """
    dice = parse_dice(expression)
    if dice is None:
        return None

    rng = rng or random
    rolls = [rng.randint(1, dice.sides) for _ in range(dice.count)]

    return RollResult(
        expression=str(dice),
        rolls=rolls,
        modifier=dice.modifier,
        total=sum(rolls) + dice.modifier,
    )
