"""
Vocabulary Schema

Pydantic models for the externally supplied domain vocabulary.

A vocabulary holds, per category (abilities, skills, tools, damage types,
currencies, reference categories), a mapping of canonical key to entry.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from dire.ir.enums import VocabularyCategory


class VocabularyEntry(BaseModel):
    """A single canonical domain concept."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Canonical key emitted in directives (str, ste, thief)")
    label: str = Field(..., description="Display label as it appears in prose")
    full_key: Optional[str] = Field(None, description="Long-form key (strength, sleightOfHand)")
    reference: bool = Field(False, description="Eligible for back-reference annotation")


class Vocabulary(BaseModel):
    """Complete read-only vocabulary dataset."""

    model_config = ConfigDict(frozen=True)

    name: str = Field("unnamed", description="Dataset name (dnd5e)")
    version: str = Field("1.0", description="Dataset version")
    categories: dict[str, dict[str, VocabularyEntry]] = Field(
        default_factory=dict,
        description="Map of category -> canonical key -> entry",
    )

    def category(self, name: Union[VocabularyCategory, str]) -> dict[str, VocabularyEntry]:
        """Entries of a category (empty if the dataset lacks it)."""
        if isinstance(name, VocabularyCategory):
            name = name.value
        return self.categories.get(name, {})

    def keys(self, name: Union[VocabularyCategory, str]) -> list[str]:
        return list(self.category(name))

    def referenceable(self, *names: Union[VocabularyCategory, str]) -> list[VocabularyEntry]:
        """Referenceable entries across the given categories, in dataset order."""
        entries: list[VocabularyEntry] = []
        for name in names:
            entries.extend(e for e in self.category(name).values() if e.reference)
        return entries
