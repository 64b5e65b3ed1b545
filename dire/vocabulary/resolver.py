"""
Vocabulary Resolver

Maps free text found in prose to canonical vocabulary entries.

Resolution is exact after normalization. There is no fuzzy or partial
matching: an unresolved term yields None and the caller leaves the text
alone.
"""

import re
from typing import Optional, Union

from dire.core.logging import LogChannel, get_logger
from dire.ir.enums import VocabularyCategory
from dire.vocabulary.schema import Vocabulary, VocabularyEntry

log = get_logger(LogChannel.VOCAB)

_APOSTROPHES = re.compile("['‘’]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Strip apostrophes (straight and curly) and whitespace, then lowercase."""
    return _WHITESPACE.sub("", _APOSTROPHES.sub("", text)).lower()


class VocabularyResolver:
    """
    Read-only lookup over a vocabulary.

    Each entry is reachable by its normalized key, label and full key.
    Indexes are built once per category on first use.
    """

    def __init__(self, vocabulary: Vocabulary) -> None:
        self.vocabulary = vocabulary
        self._indexes: dict[str, dict[str, VocabularyEntry]] = {}

    def _index(self, category: str) -> dict[str, VocabularyEntry]:
        index = self._indexes.get(category)
        if index is not None:
            return index

        index = {}
        for entry in self.vocabulary.category(category).values():
            for form in (entry.key, entry.label, entry.full_key):
                if form:
                    # First entry wins on collisions
                    index.setdefault(normalize_text(form), entry)
        self._indexes[category] = index
        return index

    def resolve(
        self,
        category: Union[VocabularyCategory, str],
        free_text: str,
    ) -> Optional[VocabularyEntry]:
        """
        Resolve free text to a canonical entry of a category.

        Returns:
            The entry, or None if the term (or the category) is unknown
        """
        if isinstance(category, VocabularyCategory):
            category = category.value
        entry = self._index(category).get(normalize_text(free_text))
        if entry is None:
            log.debug("unresolved_term", category=category, term=free_text[:40])
        return entry

    def keys(self, category: Union[VocabularyCategory, str]) -> list[str]:
        """Canonical keys of a category, in dataset order."""
        return self.vocabulary.keys(category)
