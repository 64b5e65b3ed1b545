"""
Group Loader - Load the rule group tree and selection profiles from YAML.

The tree is validated on load:
- every referenced rule id exists
- no rule belongs to more than one group
- every rule is reachable from the tree
"""

from collections import Counter
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from dire.core.logging import LogChannel, get_logger
from dire.ir.enums import RuleId
from dire.groups.models import GroupTree, SelectionProfile

log = get_logger(LogChannel.GROUPS)

GROUPS_FILE = Path(__file__).parent / "groups.yaml"
PROFILES_DIR = Path(__file__).parent / "profiles"


class GroupConfigError(ValueError):
    """The group tree or a profile is invalid."""


def parse_tree(data: dict) -> GroupTree:
    """
    Parse and validate a group tree from its dictionary form.

    Raises:
        GroupConfigError: If the tree breaks an invariant
    """
    try:
        tree = GroupTree.model_validate(data)
    except ValidationError as e:
        raise GroupConfigError(f"Invalid group tree: {e}") from e

    rule_ids: list[RuleId] = []
    for group in tree.groups:
        if group.is_leaf:
            try:
                rule_ids.append(RuleId.from_string(group.id))
            except ValueError as e:
                raise GroupConfigError(f"Leaf group {group.id!r} is not a rule") from e
        else:
            rule_ids.extend(group.children)

    duplicates = sorted(r.value for r, n in Counter(rule_ids).items() if n > 1)
    if duplicates:
        raise GroupConfigError(f"Rules in more than one group: {duplicates}")

    group_ids = [g.id for g in tree.groups]
    if len(set(group_ids)) != len(group_ids):
        raise GroupConfigError(f"Duplicate group ids: {group_ids}")

    missing = sorted(r.value for r in set(RuleId) - set(rule_ids))
    if missing:
        raise GroupConfigError(f"Rules missing from the group tree: {missing}")

    return tree


def load_tree(path: Union[str, Path, None] = None) -> GroupTree:
    """
    Load the group tree (the bundled one by default).

    Raises:
        FileNotFoundError: If the file doesn't exist
        GroupConfigError: If the tree is invalid
    """
    path = Path(path) if path else GROUPS_FILE
    if not path.exists():
        raise FileNotFoundError(f"Group tree not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    tree = parse_tree(data)
    log.verbose("group_tree_loaded", path=str(path), groups=len(tree.groups))
    return tree


def load_profile(name: str, tree: Optional[GroupTree] = None) -> SelectionProfile:
    """
    Load a selection profile by name from profiles/.

    Raises:
        FileNotFoundError: If the profile doesn't exist
        GroupConfigError: If it names unknown groups or rules
    """
    path = PROFILES_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Profile not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        profile = SelectionProfile.model_validate(data)
    except ValidationError as e:
        raise GroupConfigError(f"Invalid profile {name!r}: {e}") from e

    tree = tree or get_tree()
    known = set(tree.node_ids())
    unknown = [n for n in profile.enable + profile.disable if n not in known]
    if unknown:
        raise GroupConfigError(f"Profile {name!r} names unknown nodes: {unknown}")

    log.verbose("profile_loaded", profile=name)
    return profile


def list_profiles() -> list[str]:
    """List available profile names."""
    if not PROFILES_DIR.exists():
        return []
    return sorted(p.stem for p in PROFILES_DIR.glob("*.yaml"))


# Cache for the bundled tree
_tree: Optional[GroupTree] = None


def get_tree() -> GroupTree:
    """Get the bundled group tree, loading it once."""
    global _tree
    if _tree is None:
        _tree = load_tree()
    return _tree


def clear_cache() -> None:
    global _tree
    _tree = None
