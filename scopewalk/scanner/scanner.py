"""Scanner — dispatch a document to the markup or code scanner."""

from __future__ import annotations

import logging
from pathlib import Path

from scopewalk.config import MarkupConfig
from scopewalk.models import MARKUP_EXTS, BlockCollector, Document
from scopewalk.render import UnsupportedFormatError, render_html
from scopewalk.scanner.code import comment_syntax, lint_code
from scopewalk.scanner.html import lint_html
from scopewalk.scanner.scopes import ScopeTables
from scopewalk.sink import Sink

logger = logging.getLogger(__name__)


def lint_document(
    document: Document,
    sink: Sink,
    config: MarkupConfig | None = None,
    html: str | None = None,
) -> None:
    """Scan *document* and send its blocks to *sink*.

    Dispatches on the normalized extension:
    - markup (``.md``, ``.rst``, ``.adoc``, ``.html``) → HTML scanner, using
      *html* when given and the built-in renderer otherwise
    - languages with a known comment syntax → comment scanner

    Raises:
        UnsupportedFormatError: for any other format, or for markup that
            needs an external renderer when *html* isn't supplied.
    """
    ext = document.normed_ext

    if html is not None or ext in MARKUP_EXTS:
        markup = html if html is not None else render_html(document)
        # Tables are resolved once and shared by the whole pass.
        tables = ScopeTables.from_config(config)
        logger.debug("Scanning %s as markup (%d chars of HTML)", document.path, len(markup))
        lint_html(document, markup, sink, tables)
        return

    if comment_syntax(ext) is not None:
        lines = lint_code(document, sink)
        logger.debug("Scanned %d lines of %s for comments", lines, document.path)
        return

    raise UnsupportedFormatError(ext, "neither markup nor a known code format")


def lint_file(
    path: str | Path,
    sink: Sink,
    config: MarkupConfig | None = None,
    html: str | None = None,
    offset: int = 0,
) -> Document:
    """Read *path* and scan it; returns the document that was scanned."""
    document = Document.from_path(path, offset=offset)
    lint_document(document, sink, config=config, html=html)
    return document


def scan_file(
    path: str | Path,
    config: MarkupConfig | None = None,
    html: str | None = None,
    offset: int = 0,
) -> BlockCollector:
    """Scan *path* and return the collected blocks."""
    collector = BlockCollector()
    lint_file(path, collector, config=config, html=html, offset=offset)
    return collector
