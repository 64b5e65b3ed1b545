"""Rules - Pattern rules that rewrite narrative text into directives."""

from dire.rules.base import EnrichmentRule, RuleFn
from dire.rules.references import annotate
from dire.rules.registry import RULES, get_rule, ordered_rules, rules_for

__all__ = [
    "EnrichmentRule",
    "RULES",
    "RuleFn",
    "annotate",
    "get_rule",
    "ordered_rules",
    "rules_for",
]
