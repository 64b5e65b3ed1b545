"""
Saving Throw Rule

"DC 15 Strength saving throw" -> "[[/save str 15]] saving throw"
"""

import re

from dire.core.logging import get_rule_logger
from dire.ir.enums import RuleId, VocabularyCategory
from dire.vocabulary.resolver import VocabularyResolver

SAVING_THROW = re.compile(r"\bDC\s+(\d+)\s+(\w+)\s+saving\s+throw", re.IGNORECASE)

log = get_rule_logger(RuleId.SAVES.value)


def enrich_saving_throws(content: str, resolver: VocabularyResolver) -> str:
    def replace(match: re.Match) -> str:
        dc, ability = match.group(1), match.group(2)
        entry = resolver.resolve(VocabularyCategory.ABILITIES, ability)
        if entry is None:
            return match.group(0)
        log.verbose("rewrote", matched_text=match.group(0)[:50])
        return f"[[/save {entry.key} {dc}]] saving throw"

    return SAVING_THROW.sub(replace, content)
