"""
Journal File Store - A DocumentStore over a directory of JSON journals.

Each journal lives in `<root>/<journal_id>.json`:

    {
      "name": "Chapter 1",
      "pages": [
        {"id": "p1", "name": "Intro", "type": "text", "content": "<p>...</p>"}
      ]
    }
"""

import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, ValidationError

from dire.core.logging import LogChannel, get_logger
from dire.ir.schema import DocumentUpdate, TextDocument
from dire.store.base import StoreError

log = get_logger(LogChannel.STORE)


class Journal(BaseModel):
    """On-disk journal format."""

    name: str = ""
    pages: list[TextDocument] = Field(default_factory=list)


class JournalFileStore:
    """Reads and writes journals as JSON files under a root directory."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    @classmethod
    def for_file(cls, path: Union[str, Path]) -> tuple["JournalFileStore", str]:
        """Store and journal id addressing a single journal file."""
        path = Path(path)
        return cls(path.parent), path.stem

    def path_for(self, journal_id: str) -> Path:
        return self.root / f"{journal_id}.json"

    def read_journal(self, journal_id: str) -> Journal:
        path = self.path_for(journal_id)
        if not path.exists():
            raise StoreError(f"Journal not found: {path}")
        try:
            return Journal.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise StoreError(f"Invalid journal {journal_id!r}: {e}") from e

    def list_text_pages(self, journal_id: str) -> list[TextDocument]:
        journal = self.read_journal(journal_id)
        pages = [p for p in journal.pages if p.type == "text"]
        log.verbose("pages_listed", journal=journal_id, pages=len(journal.pages), text_pages=len(pages))
        return pages

    def update_contents(self, journal_id: str, updates: list[DocumentUpdate]) -> None:
        journal = self.read_journal(journal_id)
        by_id = {update.id: update for update in updates}

        known = {page.id for page in journal.pages}
        unknown = sorted(set(by_id) - known)
        if unknown:
            raise StoreError(f"Journal {journal_id!r} has no pages {unknown}")

        pages = [
            page.model_copy(update={"content": by_id[page.id].content}) if page.id in by_id else page
            for page in journal.pages
        ]
        data = journal.model_copy(update={"pages": pages}).model_dump(mode="json")

        path = self.path_for(journal_id)
        try:
            path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Could not write journal {journal_id!r}: {e}") from e
        log.info("journal_updated", journal=journal_id, pages=len(updates))
