"""
Check Rules - Ability, skill, tool and passive checks.

Supported phrasings:
- "DC 15 Strength check"
- "DC 15 Wisdom (Perception) check"
- "DC 12 Dexterity (Stealth or Acrobatics) check"
- "DC 15 Dexterity (Thieves' Tools) check"
- "passive Wisdom (Perception) score of 20 or higher"
- "passive Perception score of 14"

Abilities, skills and tools are emitted as their canonical keys. A match is
only rewritten when every term in it resolves.
"""

import re

from dire.core.logging import get_rule_logger
from dire.ir.enums import RuleId, VocabularyCategory
from dire.rules.base import split_alternatives
from dire.vocabulary.resolver import VocabularyResolver

ABILITIES = VocabularyCategory.ABILITIES
SKILLS = VocabularyCategory.SKILLS
TOOLS = VocabularyCategory.TOOLS

ABILITY_CHECK = re.compile(r"\bDC\s+(\d+)\s+(\w+)\s+check", re.IGNORECASE)
PARENTHESIZED_CHECK = re.compile(
    r"\bDC\s+(\d+)\s+(\w+)\s*\(([^()\n]*?)\)\s+check", re.IGNORECASE
)
PASSIVE_WITH_ABILITY = re.compile(
    r"\bpassive\s+([\w\s'’]+?)\s*\(([^()\n]*?)\)\s+score\s+of\s+(\d+)(?:\s+or\s+higher)?",
    re.IGNORECASE,
)
PASSIVE_SKILL = re.compile(
    r"\bpassive\s+([\w\s'’]+?)\s+score\s+of\s+(\d+)(?:\s+or\s+higher)?",
    re.IGNORECASE,
)

_ability_log = get_rule_logger(RuleId.ABILITIES.value)
_skill_log = get_rule_logger(RuleId.SKILLS.value)
_tool_log = get_rule_logger(RuleId.TOOLS.value)
_passive_log = get_rule_logger(RuleId.PASSIVES.value)


def enrich_ability_checks(content: str, resolver: VocabularyResolver) -> str:
    """DC 15 Strength check -> [[/check str 15]] check"""

    def replace(match: re.Match) -> str:
        dc, ability = match.group(1), match.group(2)
        entry = resolver.resolve(ABILITIES, ability)
        if entry is None:
            return match.group(0)
        _ability_log.verbose("rewrote", matched_text=match.group(0)[:50])
        return f"[[/check {entry.key} {dc}]] check"

    return ABILITY_CHECK.sub(replace, content)


def enrich_skill_checks(content: str, resolver: VocabularyResolver) -> str:
    """
    DC 12 Dexterity (Stealth or Acrobatics) check ->
    [[/skill dex ste 12]] or [[/skill dex acr 12]] check
    """

    def replace(match: re.Match) -> str:
        dc, ability, skills = match.group(1), match.group(2), match.group(3)
        ability_entry = resolver.resolve(ABILITIES, ability)
        if ability_entry is None:
            return match.group(0)

        skill_entries = [resolver.resolve(SKILLS, s) for s in split_alternatives(skills)]
        if not skill_entries or any(e is None for e in skill_entries):
            return match.group(0)

        _skill_log.verbose("rewrote", matched_text=match.group(0)[:50], alternatives=len(skill_entries))
        directives = [f"[[/skill {ability_entry.key} {e.key} {dc}]]" for e in skill_entries]
        return " or ".join(directives) + " check"

    return PARENTHESIZED_CHECK.sub(replace, content)


def enrich_tool_checks(content: str, resolver: VocabularyResolver) -> str:
    """DC 15 Dexterity (Thieves' Tools) check -> [[/tool dex thief 15]] check"""

    def replace(match: re.Match) -> str:
        dc, ability, tool = match.group(1), match.group(2), match.group(3)
        ability_entry = resolver.resolve(ABILITIES, ability)
        tool_entry = resolver.resolve(TOOLS, tool)
        if ability_entry is None or tool_entry is None:
            return match.group(0)
        _tool_log.verbose("rewrote", matched_text=match.group(0)[:50])
        return f"[[/tool {ability_entry.key} {tool_entry.key} {dc}]] check"

    return PARENTHESIZED_CHECK.sub(replace, content)


def enrich_passive_checks(content: str, resolver: VocabularyResolver) -> str:
    """
    Passive scores, with or without the governing ability.

    The ability form runs first; whatever it leaves is offered to the
    skill-only form.
    """

    def replace_with_ability(match: re.Match) -> str:
        ability, skill_or_tool, dc = match.group(1), match.group(2), match.group(3)
        ability_entry = resolver.resolve(ABILITIES, ability.strip())
        if ability_entry is None:
            return match.group(0)

        skill_entry = resolver.resolve(SKILLS, skill_or_tool)
        if skill_entry is not None:
            _passive_log.verbose("rewrote", form="skill", matched_text=match.group(0)[:50])
            return f"[[/skill {ability_entry.key} {skill_entry.key} {dc} passive format=long]]"

        tool_entry = resolver.resolve(TOOLS, skill_or_tool)
        if tool_entry is not None:
            _passive_log.verbose("rewrote", form="tool", matched_text=match.group(0)[:50])
            return f"[[/tool {ability_entry.key} {tool_entry.key} {dc} passive format=long]]"

        return match.group(0)

    def replace_skill_only(match: re.Match) -> str:
        skill, dc = match.group(1), match.group(2)
        skill_entry = resolver.resolve(SKILLS, skill)
        if skill_entry is None:
            return match.group(0)
        _passive_log.verbose("rewrote", form="skill_only", matched_text=match.group(0)[:50])
        return f"[[/skill {skill_entry.key} {dc} passive format=long]]"

    content = PASSIVE_WITH_ABILITY.sub(replace_with_ability, content)
    return PASSIVE_SKILL.sub(replace_skill_only, content)
