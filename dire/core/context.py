"""
DocumentContext - Mutable state for one document during a run.

Rules never see the context; the orchestrator threads content through them
and records what changed.
"""

from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4

from dire.ir.enums import DiagnosticLevel, RuleId
from dire.ir.schema import Diagnostic, TextDocument, TraceEntry
from dire.rules.base import EnrichmentRule
from dire.vocabulary.resolver import VocabularyResolver


@dataclass
class DocumentContext:
    """
    Working state for a single document.

    `original` is the content the run started from; `content` is the
    current text after every rule applied so far.
    """

    document: TextDocument
    resolver: VocabularyResolver
    rules: list[EnrichmentRule]
    content: str = ""

    rules_applied: list[RuleId] = field(default_factory=list)
    trace: list[TraceEntry] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @classmethod
    def from_document(
        cls,
        document: TextDocument,
        resolver: VocabularyResolver,
        rules: list[EnrichmentRule],
    ) -> "DocumentContext":
        return cls(document=document, resolver=resolver, rules=rules, content=document.content)

    @property
    def original(self) -> str:
        return self.document.content

    @property
    def changed(self) -> bool:
        return self.content != self.original

    def record_rule(self, rule_id: RuleId, before: str, after: str) -> None:
        """Record that a rule changed the content."""
        self.rules_applied.append(rule_id)
        self.trace.append(
            TraceEntry(
                rule_id=rule_id,
                document_id=self.document.id,
                action="rewrote",
                before_chars=len(before),
                after_chars=len(after),
            )
        )

    def add_diagnostic(
        self,
        level: str,
        code: str,
        message: str,
        source: str,
        affected_ids: Optional[list[str]] = None,
    ) -> None:
        """Add a diagnostic message."""
        self.diagnostics.append(
            Diagnostic(
                id=str(uuid4()),
                level=DiagnosticLevel(level),
                code=code,
                message=message,
                source=source,
                affected_ids=affected_ids or [self.document.id],
            )
        )
