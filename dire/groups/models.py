"""
Group Models - Rule group tree and selection profiles.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from dire.ir.enums import RuleId


class RuleGroup(BaseModel):
    """
    A togglable node.

    A group without children is itself a rule toggle and its id must be a
    rule id. A group with children toggles all of them at once.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Node id (checks, attacks)")
    label: str = Field(..., description="Human-readable label")
    children: list[RuleId] = Field(default_factory=list, description="Child rule ids")

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def rule_ids(self) -> list[RuleId]:
        """Rules controlled by this node."""
        if self.is_leaf:
            return [RuleId.from_string(self.id)]
        return list(self.children)


class GroupTree(BaseModel):
    """The forest of rule groups."""

    model_config = ConfigDict(frozen=True)

    version: str = "1.0"
    groups: list[RuleGroup] = Field(default_factory=list)

    def get_group(self, group_id: str) -> Optional[RuleGroup]:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def parent_of(self, rule_id: RuleId) -> Optional[RuleGroup]:
        """The group a rule belongs to as a child (None for leaf groups)."""
        for group in self.groups:
            if rule_id in group.children:
                return group
        return None

    def rule_ids(self) -> list[RuleId]:
        """Every rule controlled by the tree, in tree order."""
        return [rule_id for group in self.groups for rule_id in group.rule_ids()]

    def node_ids(self) -> list[str]:
        """Every togglable id: groups and their child rules."""
        ids: list[str] = []
        for group in self.groups:
            ids.append(group.id)
            ids.extend(child.value for child in group.children)
        return ids


class ProfileInfo(BaseModel):
    name: str
    description: str = ""


class SelectionProfile(BaseModel):
    """
    A named selection preset.

    Starts from every rule selected (`base: all`) or none (`base: none`),
    then applies `enable` and `disable` node ids in that order.
    """

    profile: ProfileInfo
    base: Literal["all", "none"] = "all"
    enable: list[str] = Field(default_factory=list)
    disable: list[str] = Field(default_factory=list)
