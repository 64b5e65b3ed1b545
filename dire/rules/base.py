"""
Rule Base - Shared types and helpers for enrichment rules.

A rule is a pure function over the whole document text. It consults the
vocabulary through a resolver and returns the rewritten text, or the same
text when nothing resolved.
"""

import re
from dataclasses import dataclass
from typing import Callable

from dire.ir.enums import RuleId
from dire.vocabulary.resolver import VocabularyResolver

# Type alias for a rule transform
RuleFn = Callable[[str, VocabularyResolver], str]

# Dice expression: 2d6, 1d8+3, 2d8 + 5
DICE = r"\d+d\d+\s*(?:[+-]\s*\d+)?"

_DIRECTIVE = re.compile(r"\[\[.*?\]\]", re.DOTALL)
_MARKUP = re.compile(r"<[A-Za-z/!][^<>]*>")
_WHITESPACE = re.compile(r"\s+")
_OR = re.compile(r"\s*\bor\b\s*", re.IGNORECASE)


@dataclass(frozen=True)
class EnrichmentRule:
    """A registered rule: id, human description and transform."""

    id: RuleId
    description: str
    transform: RuleFn

    def __call__(self, content: str, resolver: VocabularyResolver) -> str:
        return self.transform(content, resolver)


def compact(expr: str) -> str:
    """Remove all whitespace from a dice or number expression."""
    return _WHITESPACE.sub("", expr)


def split_alternatives(text: str) -> list[str]:
    """Split "Stealth or Acrobatics" on a whole-word, case-insensitive "or"."""
    return [part.strip() for part in _OR.split(text)]


def directive_spans(content: str) -> list[tuple[int, int]]:
    """Character ranges of existing [[...]] directives."""
    return [(m.start(), m.end()) for m in _DIRECTIVE.finditer(content)]


def overlaps(spans: list[tuple[int, int]], start: int, end: int) -> bool:
    """True if [start, end) overlaps any of the spans."""
    return any(start < s_end and end > s_start for s_start, s_end in spans)


def markup_spans(content: str) -> list[tuple[int, int]]:
    """Character ranges of HTML tags, attributes included."""
    return [(m.start(), m.end()) for m in _MARKUP.finditer(content)]


def protected_spans(content: str) -> list[tuple[int, int]]:
    """Ranges no rule may rewrite inside: directives and tag markup."""
    return directive_spans(content) + markup_spans(content)
