"""Sink protocol — the contract between the scanner and rule evaluation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from scopewalk.models import Block


@runtime_checkable
class Sink(Protocol):
    """Receiver for the blocks a scanning pass emits.

    Calls are fire-and-forget; the scanner never inspects a return value.
    """

    def lint_text(self, block: Block) -> None:
        """Evaluate a block that already carries its final scope."""
        ...

    def lint_prose(self, block: Block) -> None:
        """Evaluate a generic prose paragraph.

        Rule engines usually split these further into sentences.
        """
        ...

    def update_comments(self, comment: str) -> None:
        """Record a markup comment (e.g. inline rule toggles)."""
        ...
