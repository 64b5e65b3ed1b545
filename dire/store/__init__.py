"""Store - Document store contract, JSON file adapter and journal workflow."""

from dire.store.base import DocumentStore, StoreError
from dire.store.file_store import Journal, JournalFileStore
from dire.store.journal import NO_CHANGES, JournalOutcome, enrich_journal

__all__ = [
    "DocumentStore",
    "Journal",
    "JournalFileStore",
    "JournalOutcome",
    "NO_CHANGES",
    "StoreError",
    "enrich_journal",
]
