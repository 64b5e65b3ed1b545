"""
Roll Rules - Damage, healing and attack rolls.

Supported phrasings:
- "5 (1d6+2) fire damage"   -> [[/damage 1d6+2 fire average=true]] damage
- "1d6 + 3 piercing damage" -> [[/damage 1d6+3 piercing]] damage
- "2d8 + 5 hit points"      -> [[/damage 2d8+5 healing]]
- "1d10 temporary hit points" -> [[/damage 1d10 temphp]]
- "+6 to hit"               -> [[/r 1d20+6]] to hit

Dice expressions lose their internal whitespace. Damage types keep the
casing they had in the source.
"""

import re

from dire.core.logging import get_rule_logger
from dire.ir.enums import RuleId, VocabularyCategory
from dire.rules.base import DICE, compact
from dire.vocabulary.resolver import VocabularyResolver

DAMAGE_ROLL = re.compile(
    rf"\b(?:(\d+)\s*\(\s*({DICE})\s*\)|({DICE}))\s*(\w+)?\s*damage",
    re.IGNORECASE,
)
HEALING_ROLL = re.compile(
    rf"\b({DICE})\s+(temporary\s+hit\s*points|hit\s*points)\b",
    re.IGNORECASE,
)
ATTACK_ROLL = re.compile(r"\+\s*(\d+)\s*to\s+hit\b", re.IGNORECASE)

_damage_log = get_rule_logger(RuleId.DAMAGE.value)
_healing_log = get_rule_logger(RuleId.HEALING.value)
_attack_log = get_rule_logger(RuleId.ATTACKS.value)


def enrich_damage_rolls(content: str, resolver: VocabularyResolver) -> str:
    """Rewrite damage expressions whose damage type resolves."""

    def replace(match: re.Match) -> str:
        average, dice_in_parens, dice_plain, damage_type = match.groups()
        if not damage_type or resolver.resolve(VocabularyCategory.DAMAGE_TYPES, damage_type) is None:
            return match.group(0)

        dice = compact(dice_in_parens or dice_plain)
        _damage_log.verbose("rewrote", matched_text=match.group(0)[:50], average=bool(average))
        if average:
            return f"[[/damage {dice} {damage_type} average=true]] damage"
        return f"[[/damage {dice} {damage_type}]] damage"

    return DAMAGE_ROLL.sub(replace, content)


def enrich_healing_rolls(content: str, resolver: VocabularyResolver) -> str:
    """Rewrite hit point and temporary hit point rolls."""

    def replace(match: re.Match) -> str:
        dice, healing = match.group(1), match.group(2)
        kind = "temphp" if "temporary" in healing.lower() else "healing"
        _healing_log.verbose("rewrote", matched_text=match.group(0)[:50], kind=kind)
        return f"[[/damage {compact(dice)} {kind}]]"

    return HEALING_ROLL.sub(replace, content)


def enrich_attack_rolls(content: str, resolver: VocabularyResolver) -> str:
    """Rewrite attack bonuses as a d20 roll."""

    def replace(match: re.Match) -> str:
        _attack_log.verbose("rewrote", matched_text=match.group(0)[:50])
        return f"[[/r 1d20+{match.group(1)}]] to hit"

    return ATTACK_ROLL.sub(replace, content)
