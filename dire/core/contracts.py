"""
Contracts - Interfaces for components plugged into the orchestrator.
"""

from abc import ABC, abstractmethod

from dire.core.context import DocumentContext


class Validator(ABC):
    """Abstract base for post-run validators."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Validator name for diagnostics."""
        ...

    @abstractmethod
    def validate(self, ctx: DocumentContext) -> list[str]:
        """
        Validate a document after all rules ran.

        Returns:
            List of problems (empty if valid)
        """
        ...
