"""Rendering — turn a source document into the HTML the scanner walks.

Markdown is rendered with ``markdown-it-py`` (CommonMark plus GFM tables).
HTML is passed through unchanged.  Other markup formats need an external
renderer; callers supply the resulting HTML themselves.
"""

from __future__ import annotations

from markdown_it import MarkdownIt

from scopewalk.models import Document


class UnsupportedFormatError(ValueError):
    """Raised when a document's format can't be handled."""

    def __init__(self, ext: str, reason: str = "no renderer available") -> None:
        self.ext = ext
        super().__init__(f"Unsupported format {ext or '(none)'}: {reason}")


def _markdown() -> MarkdownIt:
    return MarkdownIt("commonmark").enable("table")


def render_html(document: Document) -> str:
    """Return the HTML rendering of *document*."""
    ext = document.normed_ext
    if ext == ".md":
        return _markdown().render(document.content)
    if ext == ".html":
        return document.content
    raise UnsupportedFormatError(ext)
