"""
Vocabulary Loader

Load and validate vocabulary datasets from YAML files.

Dataset layout:

    name: dnd5e
    version: "1.0"
    categories:
      abilities:
        str: {label: Strength, full_key: strength}
      conditions:
        blinded: {label: Blinded, reference: true}
    rules:            # free-standing rule terms, always referenceable
      - Advantage
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml

from dire.core.logging import LogChannel, get_logger
from dire.ir.enums import VocabularyCategory
from dire.vocabulary.schema import Vocabulary

log = get_logger(LogChannel.VOCAB)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_DATASET = "dnd5e"

# Vocabulary cache, keyed by resolved path
_cache: dict[str, Vocabulary] = {}


def load_vocabulary(path: Path | str) -> Vocabulary:
    """
    Load a vocabulary dataset from a YAML file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the dataset doesn't match the schema
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Vocabulary file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    vocabulary = parse_vocabulary(data)
    log.info(
        "vocabulary_loaded",
        name=vocabulary.name,
        path=str(path),
        categories=len(vocabulary.categories),
    )
    return vocabulary


def parse_vocabulary(data: dict) -> Vocabulary:
    """Parse a vocabulary from its dictionary form."""
    categories: dict[str, dict[str, dict]] = {}

    for category, entries in (data.get("categories") or {}).items():
        categories[category] = {
            str(key): {"key": str(key), **(entry or {})}
            for key, entry in (entries or {}).items()
        }

    # Rule terms are label-only and always referenceable
    rule_terms = data.get("rules") or []
    if rule_terms:
        categories[VocabularyCategory.RULES.value] = {
            str(term): {"key": str(term), "label": str(term), "reference": True}
            for term in rule_terms
        }

    return Vocabulary.model_validate({
        "name": data.get("name", "unnamed"),
        "version": str(data.get("version", "1.0")),
        "categories": categories,
    })


def default_vocabulary_path() -> Path:
    """Bundled dataset path, overridable with DIRE_VOCABULARY."""
    override = os.environ.get("DIRE_VOCABULARY")
    if override:
        return Path(override)
    return DATA_DIR / f"{DEFAULT_DATASET}.yaml"


def get_vocabulary(path: Optional[Path | str] = None, use_cache: bool = True) -> Vocabulary:
    """Get a vocabulary, using the cache by default."""
    resolved = str(Path(path) if path else default_vocabulary_path())
    if use_cache and resolved in _cache:
        return _cache[resolved]

    vocabulary = load_vocabulary(resolved)
    _cache[resolved] = vocabulary
    return vocabulary


def clear_cache() -> None:
    """Clear the vocabulary cache."""
    _cache.clear()
