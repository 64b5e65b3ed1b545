"""
Group Tree - Pure selection logic over the rule group tree.

Selections are plain `{rule_id: bool}` maps. Every function returns a new
map; nothing here mutates its input or knows what a rule does.

- Toggling a parent sets all of its children to the parent's new state.
- A parent's state is recomputed from its children: all, none or partial.
- The options snapshot is what the orchestrator consumes.
"""

from collections.abc import Mapping

from dire.ir.enums import GroupState, RuleId
from dire.ir.schema import EnrichmentOptions
from dire.groups.models import GroupTree, SelectionProfile

Selections = dict[RuleId, bool]


def default_selections(tree: GroupTree) -> Selections:
    """Every rule in the tree selected."""
    return {rule_id: True for rule_id in tree.rule_ids()}


def empty_selections(tree: GroupTree) -> Selections:
    return {rule_id: False for rule_id in tree.rule_ids()}


def _node_rules(tree: GroupTree, node_id: str) -> list[RuleId]:
    group = tree.get_group(node_id)
    if group is not None:
        return group.rule_ids()

    rule_id = RuleId.from_string(node_id)
    if rule_id not in tree.rule_ids():
        raise ValueError(f"Rule {node_id!r} is not part of the group tree")
    return [rule_id]


def toggle(
    tree: GroupTree,
    selections: Mapping[RuleId, bool],
    node_id: str,
    checked: bool,
) -> Selections:
    """
    Set a group (and all its children) or a single rule.

    Raises:
        ValueError: If node_id is neither a group nor a rule in the tree
    """
    updated = dict(selections)
    for rule_id in _node_rules(tree, node_id):
        updated[rule_id] = checked
    return updated


def toggle_all(tree: GroupTree, selections: Mapping[RuleId, bool], checked: bool) -> Selections:
    """The "Select All" box."""
    updated = dict(selections)
    for rule_id in tree.rule_ids():
        updated[rule_id] = checked
    return updated


def _state_of(rule_ids: list[RuleId], selections: Mapping[RuleId, bool]) -> GroupState:
    checked = [selections.get(rule_id, False) for rule_id in rule_ids]
    if checked and all(checked):
        return GroupState.ALL
    if any(checked):
        return GroupState.PARTIAL
    return GroupState.NONE


def group_state(tree: GroupTree, selections: Mapping[RuleId, bool], group_id: str) -> GroupState:
    """
    Tri-state of a group derived from its children.

    Raises:
        ValueError: If the group doesn't exist
    """
    group = tree.get_group(group_id)
    if group is None:
        raise ValueError(f"Unknown group: {group_id!r}")
    return _state_of(group.rule_ids(), selections)


def all_state(tree: GroupTree, selections: Mapping[RuleId, bool]) -> GroupState:
    """State of the "Select All" box."""
    return _state_of(tree.rule_ids(), selections)


def apply_profile(tree: GroupTree, profile: SelectionProfile) -> Selections:
    """Selections described by a profile."""
    selections = default_selections(tree) if profile.base == "all" else empty_selections(tree)
    for node_id in profile.enable:
        selections = toggle(tree, selections, node_id, True)
    for node_id in profile.disable:
        selections = toggle(tree, selections, node_id, False)
    return selections


def derive_options_snapshot(tree: GroupTree, selections: Mapping[RuleId, bool]) -> EnrichmentOptions:
    """Freeze the current selections into the options a run consumes."""
    return EnrichmentOptions(
        enabled={rule_id: bool(selections.get(rule_id, False)) for rule_id in tree.rule_ids()}
    )
