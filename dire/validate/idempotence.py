"""
Idempotence Validator - Checks enrichment is stable.

Re-running a rule on the final content must not change it again;
otherwise a second invocation would double-wrap directives.
"""

from dire.core.context import DocumentContext
from dire.core.contracts import Validator


class IdempotenceValidator(Validator):
    """Re-applies every rule of the run to the final content."""

    @property
    def name(self) -> str:
        return "idempotence"

    def validate(self, ctx: DocumentContext) -> list[str]:
        problems = []
        for rule in ctx.rules:
            if rule(ctx.content, ctx.resolver) != ctx.content:
                problems.append(
                    f"Rule '{rule.id.value}' changes document '{ctx.document.id}' when re-run"
                )
        return problems
