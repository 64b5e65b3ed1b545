"""Groups - Rule group tree, tri-state selection and profiles."""

from dire.groups.loader import (
    GroupConfigError,
    clear_cache,
    get_tree,
    list_profiles,
    load_profile,
    load_tree,
    parse_tree,
)
from dire.groups.models import GroupTree, RuleGroup, SelectionProfile
from dire.groups.tree import (
    all_state,
    apply_profile,
    default_selections,
    derive_options_snapshot,
    empty_selections,
    group_state,
    toggle,
    toggle_all,
)

__all__ = [
    "GroupConfigError",
    "GroupTree",
    "RuleGroup",
    "SelectionProfile",
    "all_state",
    "apply_profile",
    "clear_cache",
    "default_selections",
    "derive_options_snapshot",
    "empty_selections",
    "get_tree",
    "group_state",
    "list_profiles",
    "load_profile",
    "load_tree",
    "parse_tree",
    "toggle",
    "toggle_all",
]
