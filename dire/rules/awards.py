"""
Award Rule

"50 gp", "250ep each", "1,000 xp" -> "[[/award 50gp]]", "[[/award 250ep each]]",
"[[/award 1000xp]]"

Currencies come from the vocabulary; "xp" is always accepted. Thousands
separators are dropped from the amount. An amount that continues a larger
number ("1.5 gp", "12,34 gp") is left alone, as are amounts inside a
directive or inside tag markup.
"""

import re

from dire.core.logging import get_rule_logger
from dire.ir.enums import RuleId, VocabularyCategory
from dire.rules.base import overlaps, protected_spans
from dire.vocabulary.resolver import VocabularyResolver

EXPERIENCE = "xp"

# "1,000" or "1000"; never the tail of a longer number
AMOUNT = r"(?<![\d,.])\b(\d{1,3}(?:,\d{3})+|\d+)"

log = get_rule_logger(RuleId.AWARDS.value)


def award_pattern(currencies: list[str]) -> re.Pattern:
    """Build the award regex for a set of currency keys."""
    units = sorted({c.lower() for c in currencies} | {EXPERIENCE}, key=len, reverse=True)
    alternation = "|".join(re.escape(u) for u in units)
    return re.compile(rf"{AMOUNT}\s*({alternation})(\s+each)?\b", re.IGNORECASE)


def enrich_awards(content: str, resolver: VocabularyResolver) -> str:
    pattern = award_pattern(resolver.keys(VocabularyCategory.CURRENCIES))
    spans = protected_spans(content)

    def replace(match: re.Match) -> str:
        if overlaps(spans, match.start(), match.end()):
            return match.group(0)
        amount, unit, each = match.groups()
        amount = amount.replace(",", "")
        log.verbose("rewrote", matched_text=match.group(0)[:50])
        if each:
            return f"[[/award {amount}{unit} each]]"
        return f"[[/award {amount}{unit}]]"

    return pattern.sub(replace, content)
