"""HTML scanner — turns rendered markup into scoped, line-mapped blocks.

The scanner makes one pass over the token stream.  Text is buffered per
block (a paragraph, heading, list item, table cell, ...) and emitted when a
block-level end tag closes it.  Inline elements with a scope of their own
(links, emphasis, inline code) are additionally emitted on their own the
moment their text is seen.
"""

from __future__ import annotations

import logging

from scopewalk.models import Block, BlockCollector, Document, Token, TokenType
from scopewalk.scanner.scopes import (
    ALT_SCOPE,
    PROSE_SCOPE,
    RAW_SCOPE,
    SUMMARY_SCOPE,
    ScopeTables,
    clean,
    in_nested_code_span,
    resolve_scope,
)
from scopewalk.scanner.tokens import TokenStream
from scopewalk.scanner.walker import Walker
from scopewalk.sink import Sink

logger = logging.getLogger(__name__)


class _HTMLPass:
    """State for a single scan of one document."""

    def __init__(self, document: Document, sink: Sink, tables: ScopeTables) -> None:
        self.document = document
        self.ext = document.normed_ext
        self.sink = sink
        self.tables = tables
        self.walker = Walker(document.content, document.offset)

        self.buf: list[str] = []
        self.summary: list[str] = []

        self.suppressed = False  # inside a skip tag
        self.inline = False  # last opened tag is inline
        self.skip = False  # next text is code content
        self.skip_class = False  # previous token carried a skip class

    # -- driver --------------------------------------------------------------

    def run(self, markup: str) -> None:
        for tok in TokenStream(markup):
            if tok.type is TokenType.END:
                break
            self._dispatch(tok)
            self._after(tok)
        self._finish()

    def _dispatch(self, tok: Token) -> None:
        tables = self.tables
        name = tok.text

        if tok.type is TokenType.START_TAG and tables.is_skip_tag(name) and not self.suppressed:
            logger.debug("Suppressing <%s> subtree", name)
            self.suppressed = True
        elif self.suppressed and tok.is_tag and tables.is_skip_tag(name):
            logger.debug("Leaving <%s> subtree", name)
            self.suppressed = False
        elif tok.type is TokenType.START_TAG:
            self.inline = tables.is_inline(name)
            self.skip = tables.is_skip_content(name)
            self.walker.add_tag(name)
        elif tok.type is TokenType.END_TAG and tables.is_inline(name):
            self.walker.active_tag = ""
        elif tok.type is TokenType.COMMENT:
            self.sink.update_comments(tok.text)
        elif tok.type is TokenType.TEXT:
            self._text(tok.text)

        if tok.type is TokenType.END_TAG and not tables.is_inline(name):
            self._flush()

    def _after(self, tok: Token) -> None:
        # A class applies to the text that follows its tag.
        self.skip_class = self.tables.has_skip_class(tok.attr("class"))
        self.walker.consume_attributes(tok)

        if tok.is_tag and tok.data == "img":
            alt = tok.attr("alt").strip()
            if alt:
                self.sink.lint_text(self.walker.block(alt, ALT_SCOPE))

    # -- handlers ------------------------------------------------------------

    def _text(self, txt: str) -> None:
        walker = self.walker
        self.skip = self.skip or in_nested_code_span(walker.tag_history, self.ext, self.tables)

        scope = self.tables.inline_scope(walker.active_tag)
        if scope is not None and txt and not self.suppressed:
            # Linted twice: once on its own (e.g. as a `link`) and once as part
            # of the enclosing paragraph.  The context excludes only what came
            # before this fragment.
            ctx = walker.temporary_context()
            self.sink.lint_text(walker.block(txt, scope, context=ctx))
            walker.active_tag = ""

        walker.append(txt)
        if not self.suppressed and txt:
            fragment, self.skip = clean(txt, self.ext, self.skip, self.skip_class, self.inline)
            self.buf.append(fragment)

    def _flush(self) -> None:
        content = "".join(self.buf)
        if content.strip():
            self._emit(content)
        self.walker.reset()
        self.buf = []

    def _emit(self, content: str) -> None:
        walker = self.walker
        text = content.lstrip(" ")
        scope = resolve_scope(walker.tag_history, self.ext, self.tables)
        if scope is not None:
            self.sink.lint_text(walker.block(text, scope))
            return

        # Headings, list items and table cells stay out of the summary.
        self.summary.append(text)
        self.sink.lint_prose(walker.block(text, PROSE_SCOPE + self.ext))

    def _finish(self) -> None:
        first_line = self.walker.line_number(0)
        content = self.document.content
        self.sink.lint_text(
            Block(content, " ".join(self.summary), SUMMARY_SCOPE + self.ext, first_line)
        )
        self.sink.lint_text(Block("", content, RAW_SCOPE + self.ext, first_line))


def lint_html(
    document: Document,
    markup: str,
    sink: Sink,
    tables: ScopeTables | None = None,
) -> None:
    """Scan *markup* rendered from *document* and send its blocks to *sink*."""
    _HTMLPass(document, sink, tables or ScopeTables()).run(markup)


def scan_html(
    document: Document,
    markup: str,
    tables: ScopeTables | None = None,
) -> BlockCollector:
    """Scan *markup* and return the collected blocks."""
    collector = BlockCollector()
    lint_html(document, markup, collector, tables)
    return collector
