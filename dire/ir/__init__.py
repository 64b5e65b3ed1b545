"""IR - Enums and models shared by every component."""

from dire.ir.enums import BatchStatus, DiagnosticLevel, GroupState, RuleId, VocabularyCategory
from dire.ir.schema import (
    BatchResult,
    Diagnostic,
    DocumentUpdate,
    EnrichmentOptions,
    TextDocument,
    TraceEntry,
)

__all__ = [
    "BatchResult",
    "BatchStatus",
    "Diagnostic",
    "DiagnosticLevel",
    "DocumentUpdate",
    "EnrichmentOptions",
    "GroupState",
    "RuleId",
    "TextDocument",
    "TraceEntry",
    "VocabularyCategory",
]
