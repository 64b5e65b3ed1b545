"""
Tests for loading vocabulary datasets.
"""

import pytest
from pydantic import ValidationError

from dire.ir.enums import VocabularyCategory
from dire.vocabulary import loader
from dire.vocabulary.loader import (
    clear_cache,
    default_vocabulary_path,
    get_vocabulary,
    load_vocabulary,
    parse_vocabulary,
)


MINIMAL = """\
name: tiny
version: 2
categories:
  abilities:
    str: {label: Strength, full_key: strength}
  conditions:
    prone: {label: Prone, reference: true}
    bleeding: {label: Bleeding}
rules:
  - Advantage
"""


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_cache()
    yield
    clear_cache()


class TestParseVocabulary:
    """Tests for the dictionary form of a dataset."""

    def test_key_is_taken_from_mapping(self):
        vocabulary = parse_vocabulary({"categories": {"abilities": {"dex": {"label": "Dexterity"}}}})
        entry = vocabulary.category(VocabularyCategory.ABILITIES)["dex"]
        assert entry.key == "dex"
        assert entry.label == "Dexterity"
        assert entry.reference is False

    def test_rules_list_becomes_referenceable_category(self):
        vocabulary = parse_vocabulary({"rules": ["Advantage", "Half Cover"]})
        entries = vocabulary.referenceable(VocabularyCategory.RULES)
        assert [e.label for e in entries] == ["Advantage", "Half Cover"]

    def test_referenceable_filters_flag(self):
        vocabulary = parse_vocabulary({
            "categories": {
                "conditions": {
                    "prone": {"label": "Prone", "reference": True},
                    "bleeding": {"label": "Bleeding"},
                }
            }
        })
        assert [e.key for e in vocabulary.referenceable("conditions")] == ["prone"]

    def test_entry_without_label_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_vocabulary({"categories": {"abilities": {"str": {"full_key": "strength"}}}})


class TestLoadVocabulary:
    """Tests for reading datasets from disk."""

    def test_bundled_dataset_has_every_category(self):
        vocabulary = load_vocabulary(default_vocabulary_path())
        assert vocabulary.name == "dnd5e"
        for category in VocabularyCategory:
            assert vocabulary.category(category), category

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_vocabulary(tmp_path / "nope.yaml")

    def test_custom_file(self, tmp_path):
        path = tmp_path / "tiny.yaml"
        path.write_text(MINIMAL, encoding="utf-8")
        vocabulary = load_vocabulary(path)
        assert vocabulary.name == "tiny"
        assert vocabulary.version == "2"
        assert vocabulary.keys("conditions") == ["prone", "bleeding"]

    def test_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / "tiny.yaml"
        path.write_text(MINIMAL, encoding="utf-8")
        monkeypatch.setenv("DIRE_VOCABULARY", str(path))
        assert default_vocabulary_path() == path
        assert get_vocabulary().name == "tiny"


class TestCache:
    """Tests for the vocabulary cache."""

    def test_cached_instance_is_reused(self):
        assert get_vocabulary() is get_vocabulary()

    def test_bypass_cache(self):
        assert get_vocabulary() is not get_vocabulary(use_cache=False)

    def test_clear_cache(self):
        first = get_vocabulary()
        clear_cache()
        assert not loader._cache
        assert get_vocabulary() is not first
