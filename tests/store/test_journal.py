"""
Tests for the journal workflow and the JSON file store.
"""

import json

import pytest

from dire.ir.enums import BatchStatus, RuleId
from dire.ir.schema import DocumentUpdate, EnrichmentOptions, TextDocument
from dire.store import (
    NO_CHANGES,
    JournalFileStore,
    StoreError,
    enrich_journal,
)


class FakeStore:
    """In-memory DocumentStore recording every update call."""

    def __init__(self, pages, fail=False):
        self.pages = pages
        self.fail = fail
        self.calls = []

    def list_text_pages(self, journal_id):
        return [p for p in self.pages if p.type == "text"]

    def update_contents(self, journal_id, updates):
        if self.fail:
            raise StoreError("permission denied")
        self.calls.append((journal_id, list(updates)))


def _write_journal(path, pages):
    path.write_text(json.dumps({"name": "Chapter 1", "pages": pages}), encoding="utf-8")


class TestEnrichJournal:
    """Tests for enrich_journal against a fake store."""

    def test_only_changed_pages_persisted_once(self, enricher):
        store = FakeStore([
            TextDocument(id="p1", content="DC 15 Strength check"),
            TextDocument(id="p2", content="Plain prose."),
            TextDocument(id="p3", content="+4 to hit"),
        ])
        outcome = enrich_journal(store, "j1", EnrichmentOptions.all_enabled(), enricher)

        assert len(store.calls) == 1
        journal_id, updates = store.calls[0]
        assert journal_id == "j1"
        assert [u.id for u in updates] == ["p1", "p3"]
        assert outcome.updated == 2
        assert outcome.persisted is True
        assert outcome.message == "Updated 2 page(s) with enriched rolls."

    def test_no_changes_never_touches_store(self, enricher):
        store = FakeStore([TextDocument(id="p1", content="Plain prose.")])
        outcome = enrich_journal(store, "j1", EnrichmentOptions.all_enabled(), enricher)

        assert store.calls == []
        assert outcome.updated == 0
        assert outcome.persisted is False
        assert outcome.message == NO_CHANGES
        assert outcome.result.status == BatchStatus.UNCHANGED

    def test_dry_run(self, enricher):
        store = FakeStore([TextDocument(id="p1", content="DC 15 Strength check")])
        outcome = enrich_journal(store, "j1", EnrichmentOptions.all_enabled(), enricher, dry_run=True)

        assert store.calls == []
        assert outcome.updated == 1
        assert outcome.persisted is False

    def test_store_error_propagates(self, enricher):
        store = FakeStore([TextDocument(id="p1", content="DC 15 Strength check")], fail=True)
        with pytest.raises(StoreError, match="permission denied"):
            enrich_journal(store, "j1", EnrichmentOptions.all_enabled(), enricher)

    def test_disabled_rules_leave_pages_alone(self, enricher):
        store = FakeStore([TextDocument(id="p1", content="DC 15 Strength check")])
        outcome = enrich_journal(store, "j1", EnrichmentOptions.only(RuleId.DAMAGE), enricher)
        assert outcome.message == NO_CHANGES


class TestJournalFileStore:
    """Tests for the JSON file adapter."""

    def test_lists_text_pages_only(self, tmp_path):
        _write_journal(tmp_path / "j1.json", [
            {"id": "p1", "name": "Intro", "type": "text", "content": "Hello"},
            {"id": "p2", "name": "Map", "type": "image"},
        ])
        pages = JournalFileStore(tmp_path).list_text_pages("j1")
        assert [p.id for p in pages] == ["p1"]

    def test_missing_journal(self, tmp_path):
        with pytest.raises(StoreError, match="not found"):
            JournalFileStore(tmp_path).list_text_pages("nope")

    def test_invalid_journal(self, tmp_path):
        (tmp_path / "j1.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreError, match="Invalid journal"):
            JournalFileStore(tmp_path).list_text_pages("j1")

    def test_update_rewrites_only_given_pages(self, tmp_path):
        path = tmp_path / "j1.json"
        _write_journal(path, [
            {"id": "p1", "type": "text", "content": "old"},
            {"id": "p2", "type": "text", "content": "keep"},
            {"id": "p3", "type": "image"},
        ])
        JournalFileStore(tmp_path).update_contents("j1", [DocumentUpdate(id="p1", content="new")])

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["name"] == "Chapter 1"
        assert [p["content"] for p in data["pages"]] == ["new", "keep", ""]
        assert data["pages"][2]["type"] == "image"

    def test_update_unknown_page(self, tmp_path):
        _write_journal(tmp_path / "j1.json", [{"id": "p1", "type": "text", "content": "x"}])
        with pytest.raises(StoreError, match="no pages"):
            JournalFileStore(tmp_path).update_contents("j1", [DocumentUpdate(id="p9", content="y")])

    def test_for_file(self, tmp_path):
        store, journal_id = JournalFileStore.for_file(tmp_path / "chapter.json")
        assert journal_id == "chapter"
        assert store.path_for(journal_id) == tmp_path / "chapter.json"

    def test_end_to_end(self, tmp_path, enricher):
        path = tmp_path / "j1.json"
        _write_journal(path, [
            {"id": "p1", "type": "text", "content": "<p>DC 12 Dexterity (Stealth) check</p>"},
            {"id": "p2", "type": "text", "content": "<p>Quiet.</p>"},
        ])
        outcome = enrich_journal(JournalFileStore(tmp_path), "j1", EnrichmentOptions.all_enabled(), enricher)

        assert outcome.message == "Updated 1 page(s) with enriched rolls."
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["pages"][0]["content"] == "<p>[[/skill dex ste 12]] check</p>"
        assert data["pages"][1]["content"] == "<p>Quiet.</p>"
