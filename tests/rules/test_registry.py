"""
Tests for the rule catalog and application order.
"""

import pytest

from dire.ir.enums import RuleId
from dire.ir.schema import EnrichmentOptions
from dire.rules.registry import RULES, get_rule, ordered_rules, rules_for


class TestRuleId:
    """Tests for the closed rule id set."""

    def test_application_order(self):
        assert [r.value for r in RuleId.ordered()] == [
            "abilities",
            "AOE",
            "attacks",
            "awards",
            "conditions",
            "creatureType",
            "damage",
            "healing",
            "passives",
            "rules",
            "saves",
            "skills",
            "spellComponents",
            "spellSchool",
            "tools",
        ]

    def test_from_string_ignores_case(self):
        assert RuleId.from_string("aoe") is RuleId.AOE
        assert RuleId.from_string("CreatureType") is RuleId.CREATURE_TYPE

    def test_from_string_unknown(self):
        with pytest.raises(ValueError):
            RuleId.from_string("fireball")


class TestRegistry:
    """Tests for the registry lookups."""

    def test_every_rule_registered(self):
        assert set(RULES) == set(RuleId)

    def test_get_rule(self):
        assert get_rule(RuleId.SAVES).id is RuleId.SAVES

    def test_ordered_rules(self):
        assert [r.id for r in ordered_rules()] == RuleId.ordered()

    def test_rules_for_ignores_selection_order(self):
        options = EnrichmentOptions.only(RuleId.TOOLS, RuleId.DAMAGE, RuleId.ABILITIES)
        assert [r.id for r in rules_for(options)] == [RuleId.ABILITIES, RuleId.DAMAGE, RuleId.TOOLS]

    def test_rules_for_nothing_enabled(self):
        assert rules_for(EnrichmentOptions()) == []


class TestIdempotence:
    """Applying any rule twice gives the same text as applying it once."""

    @pytest.mark.parametrize("rule", ordered_rules(), ids=lambda r: r.id.value)
    def test_rule_is_idempotent(self, rule, resolver, sample_texts):
        for text in sample_texts:
            once = rule(text, resolver)
            assert rule(once, resolver) == once, text
