"""
Reference commands: look up SRD spells and weapons.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..app.runnable import CommandError, Suggestion, keyword_suggestions
from .data import Spell, load_reference

if TYPE_CHECKING:
    from ..app.meta import AppMeta

SPELL_PREFIX = "spell "

KEYWORDS = {
    "spells": "SRD index",
    "weapons": "SRD item category",
}


class ReferenceAction(str, Enum):
    SPELL = "spell"
    SPELLS = "spells"
    WEAPONS = "weapons"


@dataclass
class ReferenceCommand:
    action: ReferenceAction
    name: str | None = None

    @classmethod
    def parse_input(cls, input: str, app_meta: "AppMeta") -> tuple["ReferenceCommand | None", list]:
        lower = input.lower()
        if lower == "spells":
            return cls(ReferenceAction.SPELLS), []
        if lower == "weapons":
            return cls(ReferenceAction.WEAPONS), []

        name = input[len(SPELL_PREFIX):] if lower.startswith(SPELL_PREFIX) else input
        spell = load_reference().spell(name.strip())
        if spell is not None:
            return cls(ReferenceAction.SPELL, spell.name), []

        return None, []

    @classmethod
    def autocomplete(cls, input: str, app_meta: "AppMeta") -> list[Suggestion]:
        if not input:
            return []

        suggestions = keyword_suggestions(input, KEYWORDS)
        lower = input.lower()
        prefix = ""
        if lower.startswith(SPELL_PREFIX):
            prefix, lower = input[:len(SPELL_PREFIX)], lower[len(SPELL_PREFIX):]

        for spell in load_reference().spells:
            if spell.name.lower().startswith(lower):
                suggestions.append((prefix + spell.name, f"SRD spell: {spell.tagline}"))
        return suggestions

    def run(self, input: str, app_meta: "AppMeta") -> str:
        reference = load_reference()

        if self.action == ReferenceAction.SPELLS:
            lines = [f"`{spell.name}` ({spell.tagline})" for spell in reference.spells]
            return "# Spells\n\n" + "\\\n".join(lines)

        if self.action == ReferenceAction.WEAPONS:
            return format_weapons_table(reference.weapons)

        spell = reference.spell(self.name)
        if spell is None:
            raise CommandError(f'No matches for "{self.name}"')
        return format_spell(spell)

    def __str__(self) -> str:
        if self.action == ReferenceAction.SPELL:
            return self.name
        return self.action.value


def format_spell(spell: Spell) -> str:
    return (
        f"# {spell.name}\n"
        f"*{spell.tagline}*\n\n"
        f"**Casting Time:** {spell.casting_time}\\\n"
        f"**Range:** {spell.range}\\\n"
        f"**Components:** {spell.components}\\\n"
        f"**Duration:** {spell.duration}\n\n"
        f"{spell.description}"
    )


def format_weapons_table(weapons) -> str:
    lines = [
        "# Weapons",
        "",
        "| Name | Category | Cost | Damage | Weight | Properties |",
        "|---|---|---|---|---|---|",
    ]
    for weapon in weapons:
        lines.append(
            f"| {weapon.name} | {weapon.category} | {weapon.cost} | {weapon.damage} "
            f"| {weapon.weight} | {weapon.properties} |"
        )
    return "\n".join(lines)
