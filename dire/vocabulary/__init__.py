"""Vocabulary - Read-only domain dataset and term resolution."""

from dire.vocabulary.loader import clear_cache, get_vocabulary, load_vocabulary, parse_vocabulary
from dire.vocabulary.resolver import VocabularyResolver, normalize_text
from dire.vocabulary.schema import Vocabulary, VocabularyEntry

__all__ = [
    "Vocabulary",
    "VocabularyEntry",
    "VocabularyResolver",
    "clear_cache",
    "get_vocabulary",
    "load_vocabulary",
    "normalize_text",
    "parse_vocabulary",
]
