"""
Tests for tri-state group selection.
"""

import pytest

from dire.groups import (
    all_state,
    apply_profile,
    default_selections,
    derive_options_snapshot,
    empty_selections,
    get_tree,
    group_state,
    load_profile,
    toggle,
    toggle_all,
)
from dire.ir.enums import GroupState, RuleId

CHECKS = [RuleId.ABILITIES, RuleId.PASSIVES, RuleId.SKILLS, RuleId.TOOLS]
REFERENCES = [
    RuleId.AOE,
    RuleId.CONDITIONS,
    RuleId.CREATURE_TYPE,
    RuleId.RULES,
    RuleId.SPELL_COMPONENTS,
    RuleId.SPELL_SCHOOL,
]


@pytest.fixture
def tree():
    return get_tree()


class TestDefaults:
    """Tests for initial selections."""

    def test_everything_selected(self, tree):
        selections = default_selections(tree)
        assert set(selections) == set(RuleId)
        assert all(selections.values())
        assert all_state(tree, selections) == GroupState.ALL

    def test_empty(self, tree):
        selections = empty_selections(tree)
        assert not any(selections.values())
        assert all_state(tree, selections) == GroupState.NONE


class TestToggle:
    """Tests for toggling groups and rules."""

    def test_parent_sets_all_children(self, tree):
        selections = toggle(tree, default_selections(tree), "checks", False)
        assert [selections[r] for r in CHECKS] == [False] * 4
        assert group_state(tree, selections, "checks") == GroupState.NONE
        assert all_state(tree, selections) == GroupState.PARTIAL

    def test_single_child_makes_parent_partial(self, tree):
        selections = toggle(tree, default_selections(tree), "skills", False)
        assert group_state(tree, selections, "checks") == GroupState.PARTIAL
        assert group_state(tree, selections, "references") == GroupState.ALL

    def test_rechecking_last_child_restores_all(self, tree):
        selections = toggle(tree, default_selections(tree), "skills", False)
        selections = toggle(tree, selections, "skills", True)
        assert group_state(tree, selections, "checks") == GroupState.ALL

    def test_leaf_group_is_its_own_rule(self, tree):
        selections = toggle(tree, default_selections(tree), "attacks", False)
        assert selections[RuleId.ATTACKS] is False
        assert group_state(tree, selections, "attacks") == GroupState.NONE

    def test_rule_id_case_insensitive(self, tree):
        selections = toggle(tree, default_selections(tree), "aoe", False)
        assert selections[RuleId.AOE] is False

    def test_does_not_mutate_input(self, tree):
        selections = default_selections(tree)
        toggle(tree, selections, "checks", False)
        assert all(selections.values())

    def test_unknown_node(self, tree):
        with pytest.raises(ValueError):
            toggle(tree, default_selections(tree), "spells", True)

    def test_toggle_all(self, tree):
        selections = toggle_all(tree, default_selections(tree), False)
        assert all_state(tree, selections) == GroupState.NONE
        for group in tree.groups:
            assert group_state(tree, selections, group.id) == GroupState.NONE


class TestGroupState:
    """Tests for state derivation."""

    def test_unknown_group(self, tree):
        with pytest.raises(ValueError):
            group_state(tree, default_selections(tree), "spells")

    def test_missing_entries_count_as_unchecked(self, tree):
        assert group_state(tree, {RuleId.ABILITIES: True}, "checks") == GroupState.PARTIAL


class TestSnapshot:
    """Tests for the options snapshot handed to a run."""

    def test_snapshot_matches_selections(self, tree):
        selections = toggle(tree, default_selections(tree), "references", False)
        options = derive_options_snapshot(tree, selections)
        assert options.enabled_rules() == [
            RuleId.ABILITIES,
            RuleId.ATTACKS,
            RuleId.AWARDS,
            RuleId.DAMAGE,
            RuleId.HEALING,
            RuleId.PASSIVES,
            RuleId.SAVES,
            RuleId.SKILLS,
            RuleId.TOOLS,
        ]

    def test_snapshot_is_independent_of_later_toggles(self, tree):
        selections = default_selections(tree)
        options = derive_options_snapshot(tree, selections)
        toggle(tree, selections, "checks", False)
        assert options.is_enabled(RuleId.SKILLS)


class TestProfiles:
    """Tests for applying the bundled profiles."""

    def test_all(self, tree):
        selections = apply_profile(tree, load_profile("all", tree))
        assert all_state(tree, selections) == GroupState.ALL

    def test_rolls(self, tree):
        selections = apply_profile(tree, load_profile("rolls", tree))
        assert group_state(tree, selections, "references") == GroupState.NONE
        assert group_state(tree, selections, "checks") == GroupState.ALL

    def test_references(self, tree):
        selections = apply_profile(tree, load_profile("references", tree))
        options = derive_options_snapshot(tree, selections)
        assert options.enabled_rules() == REFERENCES
