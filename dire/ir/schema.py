"""
IR Schema - Pydantic models exchanged between the engine and its callers.

Documents go in, updates and diagnostics come out. Nothing here holds
behaviour beyond small accessors.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from dire.ir.enums import BatchStatus, DiagnosticLevel, RuleId


class TextDocument(BaseModel):
    """A page of narrative text owned by the document store."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Document identifier in the store")
    content: str = Field(default="", description="Page text (usually HTML)")
    type: str = Field(default="text", description="Page type; only 'text' is enriched")
    name: Optional[str] = Field(None, description="Display name, if any")


class EnrichmentOptions(BaseModel):
    """
    Immutable snapshot of which rules are enabled for one run.

    Ids missing from `enabled` count as disabled.
    """

    model_config = ConfigDict(frozen=True)

    enabled: dict[RuleId, bool] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "EnrichmentOptions":
        """
        Build a snapshot from a flat `{rule_id: bool}` map.

        Values go through pydantic's bool validation, so "false" and 0 mean
        disabled and anything that is not a boolean is rejected.

        Raises:
            ValueError: If the map names an unknown rule id or a value is
                not a boolean (pydantic's ValidationError is a ValueError)
        """
        return cls(enabled={RuleId.from_string(k): v for k, v in mapping.items()})

    @classmethod
    def all_enabled(cls) -> "EnrichmentOptions":
        return cls(enabled={rule_id: True for rule_id in RuleId})

    @classmethod
    def only(cls, *rule_ids: RuleId) -> "EnrichmentOptions":
        """Snapshot with exactly the given rules enabled."""
        return cls(enabled={rule_id: rule_id in rule_ids for rule_id in RuleId})

    def is_enabled(self, rule_id: RuleId) -> bool:
        return self.enabled.get(rule_id, False)

    def enabled_rules(self) -> list[RuleId]:
        """Enabled rule ids in application order."""
        return [r for r in RuleId.ordered() if self.is_enabled(r)]

    def to_mapping(self) -> dict[str, bool]:
        return {rule_id.value: self.is_enabled(rule_id) for rule_id in RuleId.ordered()}


class DocumentUpdate(BaseModel):
    """New content for a document that changed during a run."""

    id: str = Field(..., description="Document identifier")
    content: str = Field(..., description="Enriched content")
    rules_applied: list[RuleId] = Field(
        default_factory=list,
        description="Rules that changed this document, in application order",
    )


class Diagnostic(BaseModel):
    """A diagnostic message raised during a run."""

    id: str = Field(..., description="Unique diagnostic identifier")
    level: DiagnosticLevel
    code: str = Field(..., description="Machine-readable code (e.g., RULE_ERROR)")
    message: str
    source: str = Field(..., description="Component that raised it")
    affected_ids: list[str] = Field(default_factory=list)


class TraceEntry(BaseModel):
    """Record of one rule changing one document."""

    rule_id: RuleId
    document_id: str
    action: str
    before_chars: int
    after_chars: int


class BatchResult(BaseModel):
    """Result of applying the enabled rules to a batch of documents."""

    run_id: str
    timestamp: datetime = Field(default_factory=datetime.now)
    processing_duration_ms: float = 0.0
    status: BatchStatus = BatchStatus.UNCHANGED
    rules: list[RuleId] = Field(default_factory=list, description="Rules that were run")
    changed: list[str] = Field(default_factory=list, description="Ids of changed documents")
    results: list[DocumentUpdate] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    trace: list[TraceEntry] = Field(default_factory=list)

    def get_update(self, document_id: str) -> Optional[DocumentUpdate]:
        for update in self.results:
            if update.id == document_id:
                return update
        return None
