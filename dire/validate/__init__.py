"""Validators run after enrichment."""

from dire.validate.idempotence import IdempotenceValidator

__all__ = ["IdempotenceValidator"]
