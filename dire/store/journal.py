"""
Journal Workflow - Enrich every text page of a journal and persist changes.

Only changed pages are sent to the store, in a single call. A run that
changes nothing never touches the store. Store errors propagate.
"""

from dataclasses import dataclass
from typing import Optional

from dire.core.engine import Enricher, get_enricher
from dire.core.logging import LogChannel, get_logger
from dire.ir.schema import BatchResult, EnrichmentOptions
from dire.store.base import DocumentStore

log = get_logger(LogChannel.STORE)

NO_CHANGES = "No changes were needed."


@dataclass
class JournalOutcome:
    """What happened to a journal."""

    journal_id: str
    result: BatchResult
    persisted: bool

    @property
    def updated(self) -> int:
        return len(self.result.changed)

    @property
    def message(self) -> str:
        if not self.updated:
            return NO_CHANGES
        return f"Updated {self.updated} page(s) with enriched rolls."


def enrich_journal(
    store: DocumentStore,
    journal_id: str,
    options: EnrichmentOptions,
    enricher: Optional[Enricher] = None,
    dry_run: bool = False,
) -> JournalOutcome:
    """
    Enrich a journal's text pages and persist the changed subset.

    Raises:
        StoreError: Propagated from the store, unmodified
    """
    enricher = enricher or get_enricher()
    pages = store.list_text_pages(journal_id)
    result = enricher.apply_all(pages, options)

    persisted = False
    if result.results and not dry_run:
        store.update_contents(journal_id, result.results)
        persisted = True

    outcome = JournalOutcome(journal_id=journal_id, result=result, persisted=persisted)
    log.info("journal_enriched", journal=journal_id, updated=outcome.updated, persisted=persisted)
    return outcome
