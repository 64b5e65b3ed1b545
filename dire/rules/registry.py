"""
Rule Registry - The closed catalog of enrichment rules.

Every RuleId maps to exactly one rule. Application order comes from
RuleId.ordered() and never from the order rules were selected in.
"""

from dire.ir.enums import RuleId
from dire.ir.schema import EnrichmentOptions
from dire.rules.awards import enrich_awards
from dire.rules.base import EnrichmentRule
from dire.rules.checks import (
    enrich_ability_checks,
    enrich_passive_checks,
    enrich_skill_checks,
    enrich_tool_checks,
)
from dire.rules.references import (
    enrich_area_of_effect,
    enrich_conditions,
    enrich_creature_types,
    enrich_rules,
    enrich_spell_components,
    enrich_spell_schools,
)
from dire.rules.rolls import enrich_attack_rolls, enrich_damage_rolls, enrich_healing_rolls
from dire.rules.saves import enrich_saving_throws

RULES: dict[RuleId, EnrichmentRule] = {
    rule.id: rule
    for rule in (
        EnrichmentRule(RuleId.ABILITIES, "Ability checks", enrich_ability_checks),
        EnrichmentRule(RuleId.AOE, "Area of effect references", enrich_area_of_effect),
        EnrichmentRule(RuleId.ATTACKS, "Attack rolls", enrich_attack_rolls),
        EnrichmentRule(RuleId.AWARDS, "Currency and experience awards", enrich_awards),
        EnrichmentRule(RuleId.CONDITIONS, "Condition references", enrich_conditions),
        EnrichmentRule(RuleId.CREATURE_TYPE, "Creature type references", enrich_creature_types),
        EnrichmentRule(RuleId.DAMAGE, "Damage rolls", enrich_damage_rolls),
        EnrichmentRule(RuleId.HEALING, "Healing and temporary hit points", enrich_healing_rolls),
        EnrichmentRule(RuleId.PASSIVES, "Passive skill and tool scores", enrich_passive_checks),
        EnrichmentRule(RuleId.RULES, "Named rule references", enrich_rules),
        EnrichmentRule(RuleId.SAVES, "Saving throws", enrich_saving_throws),
        EnrichmentRule(RuleId.SKILLS, "Skill checks", enrich_skill_checks),
        EnrichmentRule(RuleId.SPELL_COMPONENTS, "Spell component and tag references", enrich_spell_components),
        EnrichmentRule(RuleId.SPELL_SCHOOL, "Spell school references", enrich_spell_schools),
        EnrichmentRule(RuleId.TOOLS, "Tool checks", enrich_tool_checks),
    )
}

_missing = set(RuleId) - set(RULES)
if _missing:
    raise RuntimeError(f"Rules without a transform: {sorted(r.value for r in _missing)}")


def get_rule(rule_id: RuleId) -> EnrichmentRule:
    return RULES[rule_id]


def ordered_rules() -> list[EnrichmentRule]:
    """All rules in application order."""
    return [RULES[rule_id] for rule_id in RuleId.ordered()]


def rules_for(options: EnrichmentOptions) -> list[EnrichmentRule]:
    """The enabled rules of a snapshot, in application order."""
    return [RULES[rule_id] for rule_id in options.enabled_rules()]
