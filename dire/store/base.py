"""
Store Contract - What the engine expects from a document store.

The store is an external collaborator: it lists a journal's text pages and
persists updates. The engine only ever hands it the changed subset.
"""

from typing import Protocol

from dire.ir.schema import DocumentUpdate, TextDocument


class StoreError(RuntimeError):
    """The store could not read or persist a journal."""


class DocumentStore(Protocol):
    """Protocol for document stores."""

    def list_text_pages(self, journal_id: str) -> list[TextDocument]:
        """Text pages of a journal, in store order."""
        ...

    def update_contents(self, journal_id: str, updates: list[DocumentUpdate]) -> None:
        """
        Persist new content for the given pages.

        Raises:
            StoreError: If the store rejects the update
        """
        ...
