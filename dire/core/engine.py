"""
Engine - Batch orchestration.

The engine selects the enabled rules, runs them in their fixed order over
each document, and reports the documents whose content changed.

The engine is NOT where pattern logic lives, and it performs no I/O.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Optional
from uuid import uuid4

from dire.core.context import DocumentContext
from dire.core.contracts import Validator
from dire.core.logging import RunLogger
from dire.ir.enums import BatchStatus
from dire.ir.schema import BatchResult, DocumentUpdate, EnrichmentOptions, TextDocument
from dire.rules.registry import rules_for
from dire.vocabulary.loader import get_vocabulary
from dire.vocabulary.resolver import VocabularyResolver
from dire.vocabulary.schema import Vocabulary

SOURCE = "engine"


class Enricher:
    """
    Rule orchestrator.

    Holds the read-only vocabulary. Each call receives its own options
    snapshot, so one instance serves any number of runs.
    """

    def __init__(
        self,
        vocabulary: Vocabulary,
        validators: Optional[list[Validator]] = None,
    ) -> None:
        self.vocabulary = vocabulary
        self.resolver = VocabularyResolver(vocabulary)
        self.validators: list[Validator] = list(validators or [])

    def enrich_document(
        self,
        document: TextDocument,
        options: EnrichmentOptions,
        run_log: Optional[RunLogger] = None,
    ) -> DocumentContext:
        """
        Run the enabled rules over one document.

        A rule that raises is recorded as a RULE_ERROR diagnostic and
        skipped; the rules after it still run on the last good content.
        """
        ctx = DocumentContext.from_document(document, self.resolver, rules_for(options))

        for rule in ctx.rules:
            before = ctx.content
            try:
                if run_log:
                    run_log.rule_start(rule.id.value, document.id)
                after = rule(before, self.resolver)
                if run_log:
                    run_log.rule_end(rule.id.value, document.id, changed=after != before)
            except Exception as e:
                if run_log:
                    run_log.rule_error(rule.id.value, document.id, e)
                ctx.add_diagnostic(
                    level="error",
                    code="RULE_ERROR",
                    message=f"Rule '{rule.id.value}' failed: {e}",
                    source=SOURCE,
                )
                continue

            if after != before:
                ctx.content = after
                ctx.record_rule(rule.id, before, after)

        for validator in self.validators:
            for problem in validator.validate(ctx):
                ctx.add_diagnostic(
                    level="warning",
                    code=validator.name.upper(),
                    message=problem,
                    source=validator.name,
                )

        return ctx

    def enrich_text(self, content: str, options: Optional[EnrichmentOptions] = None) -> str:
        """Enrich a single string (all rules enabled by default)."""
        options = options or EnrichmentOptions.all_enabled()
        document = TextDocument(id="text", content=content)
        return self.enrich_document(document, options).content

    def apply_all(
        self,
        documents: Iterable[TextDocument],
        options: EnrichmentOptions,
        run_id: Optional[str] = None,
    ) -> BatchResult:
        """
        Apply the enabled rules to every text document.

        Args:
            documents: Documents to enrich; non-text pages are skipped
            options: Immutable snapshot of enabled rules
            run_id: Identifier bound to logs (generated if omitted)

        Returns:
            BatchResult listing only the documents whose content changed
        """
        run_id = run_id or str(uuid4())
        start = datetime.now()
        text_documents = [d for d in documents if d.type == "text"]
        rule_ids = options.enabled_rules()

        run_log = RunLogger(run_id)
        run_log.run_start(documents=len(text_documents), rules=[r.value for r in rule_ids])

        result = BatchResult(run_id=run_id, timestamp=start, rules=rule_ids)
        for document in text_documents:
            ctx = self.enrich_document(document, options, run_log)
            result.diagnostics.extend(ctx.diagnostics)
            result.trace.extend(ctx.trace)
            if ctx.changed:
                result.changed.append(document.id)
                result.results.append(
                    DocumentUpdate(id=document.id, content=ctx.content, rules_applied=ctx.rules_applied)
                )

        result.status = BatchStatus.CHANGED if result.changed else BatchStatus.UNCHANGED
        result.processing_duration_ms = (datetime.now() - start).total_seconds() * 1000

        run_log.run_complete(
            status=result.status.value,
            documents=len(text_documents),
            changed=len(result.changed),
            diagnostics=len(result.diagnostics),
        )
        return result


# Global enricher over the default vocabulary
_enricher: Optional[Enricher] = None


def get_enricher() -> Enricher:
    """Get or create the global enricher instance."""
    global _enricher
    if _enricher is None:
        _enricher = Enricher(get_vocabulary())
    return _enricher


def enrich(text: str, options: Optional[EnrichmentOptions] = None) -> str:
    """
    Convenience function for enriching a single string.

    Args:
        text: Narrative text
        options: Enabled rules (all by default)

    Returns:
        The enriched text
    """
    return get_enricher().enrich_text(text, options)
