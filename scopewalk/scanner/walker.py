"""Walker — recovers source line numbers for rendered text.

Rendering loses the link between text and the line it came from.  The walker
gets it back by searching the original document for each fragment of text it
is handed.  To make sure a phrase that occurs several times is attributed to
the right occurrence, every fragment that has contributed to an emitted block
is *consumed*: its first occurrence in the remaining context is overwritten
with sentinel characters of the same length.  Newlines are left in place, so
counting them still yields the right line.
"""

from __future__ import annotations

import logging

from scopewalk.models import Block, Token

logger = logging.getLogger(__name__)

SENTINEL = "@"

# Attributes whose values appear verbatim in the source but never as prose.
_ATTR_TAGS = frozenset({"img", "a", "p", "script"})
_ATTR_KEYS = frozenset({"href", "id", "src"})


def _find(context: str, line: str) -> int:
    """Two-tier search for one line of a fragment.

    Whole line first; if that fails, each word in turn, keeping the position
    of the last word (``-1`` if the last word isn't found either).
    """
    pos = context.find(line)
    if pos < 0:
        for word in line.split():
            pos = context.find(word)
    return pos


def substitute(context: str, sub: str, char: str = SENTINEL) -> tuple[str, bool]:
    """Mask the first occurrence of *sub* in *context* with *char*.

    Newlines inside *sub* are preserved.  Returns the new text and whether a
    match was found.
    """
    if not sub:
        return context, False
    idx = context.find(sub)
    if idx < 0:
        return context, False
    repl = "".join(c if c == "\n" else char for c in sub)
    return context[:idx] + repl + context[idx + len(sub):], True


def consume(context: str, fragment: str) -> str:
    """Return *context* with *fragment* masked, line by line.

    A line that can't be found whole is masked word by word instead.
    """
    if not fragment:
        return context
    for line in fragment.split("\n"):
        context, found = substitute(context, line)
        if not found:
            for word in line.split():
                context, _ = substitute(context, word)
    return context


class Walker:
    """Mutable position-tracking state for one document pass."""

    def __init__(self, context: str, offset: int = 0) -> None:
        self.lines = offset
        self.context = context
        # Highest 0-indexed line recovered so far.
        self.cursor = 0
        # Text fragments seen since the last block boundary.
        self.queue: list[str] = []
        # Tags opened since the last block boundary, e.g. [ul, li, p].
        self.tag_history: list[str] = []
        self.active_tag = ""

    def advance(self, fragment: str) -> int:
        """Return the line of *fragment* if it lies past the cursor, else -1."""
        pos = 0
        for line in fragment.split("\n"):
            pos = _find(self.context, line)
        if pos >= 0:
            line_idx = self.context.count("\n", 0, pos)
            if line_idx > self.cursor:
                return line_idx
        return -1

    def append(self, fragment: str) -> None:
        if not fragment:
            return
        pos = self.advance(fragment)
        if pos > -1:
            self.cursor = pos
        else:
            logger.debug("No position past line %d for %r", self.cursor, fragment)
        self.queue.append(fragment)

    def add_tag(self, name: str) -> None:
        self.tag_history.append(name)
        self.active_tag = name

    def reset(self) -> None:
        """Consume the queued fragments and start a new block."""
        for fragment in self.queue:
            self.context = consume(self.context, fragment)
        self.queue = []
        self.tag_history = []

    def temporary_context(self) -> str:
        """Context as it would be if the current block ended now."""
        ctx = self.context
        for fragment in self.queue:
            ctx = consume(ctx, fragment)
        return ctx

    def consume_attributes(self, tok: Token) -> None:
        """Mark link targets, ids and sources as already seen."""
        if tok.data not in _ATTR_TAGS:
            return
        for key, value in tok.attrs:
            if key in _ATTR_KEYS:
                self.context = consume(self.context, value)

    def line_number(self, line_idx: int) -> int:
        """Convert a 0-indexed context line into a reported source line."""
        return self.lines + line_idx + 1

    def block(self, text: str, scope: str, context: str | None = None) -> Block:
        """Package *text* as a block on the best line known for it."""
        line = self.cursor
        pos = self.advance(text)
        if pos > -1:
            line = pos
        return Block(
            context=self.context if context is None else context,
            text=text,
            scope=scope,
            line=self.line_number(line),
        )
