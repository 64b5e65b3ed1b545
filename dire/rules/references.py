"""
Reference Rules - Back-reference annotation of rule terms.

A referenceable term (condition, creature type, area shape, spell school,
spell component or tag, named rule) gets one annotation per document:

    "creature is Blinded."  ->  "creature is Blinded (See &Reference[blinded])."

Occurrences are skipped when they sit inside parentheses, are already
followed by a parenthetical, or lie inside a directive or inside
tag markup such as an attribute value. A label that already carries the
annotation anywhere in the document is never annotated again.
"""

import re
from collections.abc import Iterable

from dire.core.logging import get_rule_logger
from dire.ir.enums import RuleId, VocabularyCategory
from dire.rules.base import overlaps, protected_spans
from dire.vocabulary.resolver import VocabularyResolver
from dire.vocabulary.schema import VocabularyEntry

ANNOTATION = " (See &Reference[{key}])"

# Categories consulted by each reference rule
REFERENCE_CATEGORIES: dict[RuleId, tuple[VocabularyCategory, ...]] = {
    RuleId.AOE: (VocabularyCategory.AREA_TARGET_TYPES,),
    RuleId.CONDITIONS: (VocabularyCategory.CONDITIONS,),
    RuleId.CREATURE_TYPE: (VocabularyCategory.CREATURE_TYPES,),
    RuleId.RULES: (VocabularyCategory.RULES,),
    RuleId.SPELL_COMPONENTS: (VocabularyCategory.SPELL_TAGS, VocabularyCategory.SPELL_COMPONENTS),
    RuleId.SPELL_SCHOOL: (VocabularyCategory.SPELL_SCHOOLS,),
}

log = get_rule_logger("references")


def reference_key(entry: VocabularyEntry) -> str:
    return entry.label.lower()


def is_annotated(content: str, label: str) -> bool:
    """True if `label (See &Reference[` already appears in the document."""
    pattern = rf"\b{re.escape(label)}\s*\(See\s+&(?:amp;)?Reference\["
    return re.search(pattern, content, re.IGNORECASE) is not None


def annotate(content: str, entries: Iterable[VocabularyEntry]) -> str:
    """
    Annotate the first qualifying occurrence of each referenceable label.

    Args:
        content: Document text
        entries: Candidate entries; only those flagged `reference` are used

    Returns:
        The annotated text (unchanged if nothing qualified)
    """
    by_label: dict[str, VocabularyEntry] = {}
    for entry in entries:
        if entry.reference and entry.label:
            by_label.setdefault(entry.label.lower(), entry)

    if not by_label:
        return content

    # Longest first so "Half Cover" wins over "Cover"
    labels = sorted((e.label for e in by_label.values()), key=len, reverse=True)
    alternation = "|".join(re.escape(label) for label in labels)
    pattern = re.compile(
        rf"\b({alternation})\b(?![^()]*\))(?!\s*\()",
        re.IGNORECASE,
    )

    annotated = {lower for lower, entry in by_label.items() if is_annotated(content, entry.label)}
    spans = protected_spans(content)

    def replace(match: re.Match) -> str:
        text = match.group(1)
        lower = text.lower()
        if lower in annotated or overlaps(spans, match.start(), match.end()):
            return text
        annotated.add(lower)
        log.verbose("annotated", label=text)
        return text + ANNOTATION.format(key=reference_key(by_label[lower]))

    return pattern.sub(replace, content)


def _reference_rule(rule_id: RuleId):
    categories = REFERENCE_CATEGORIES[rule_id]

    def enrich(content: str, resolver: VocabularyResolver) -> str:
        return annotate(content, resolver.vocabulary.referenceable(*categories))

    enrich.__name__ = f"enrich_{rule_id.value}"
    return enrich


enrich_area_of_effect = _reference_rule(RuleId.AOE)
enrich_conditions = _reference_rule(RuleId.CONDITIONS)
enrich_creature_types = _reference_rule(RuleId.CREATURE_TYPE)
enrich_rules = _reference_rule(RuleId.RULES)
enrich_spell_components = _reference_rule(RuleId.SPELL_COMPONENTS)
enrich_spell_schools = _reference_rule(RuleId.SPELL_SCHOOL)
