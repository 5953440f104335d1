"""Tag/scope classification tables and the helpers built on them.

The defaults below describe what HTML renderers for Markdown,
reStructuredText and AsciiDoc produce.  A :class:`ScopeTables` value is
resolved from configuration once per pass and never mutated afterwards.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from scopewalk.scanner.walker import substitute

if TYPE_CHECKING:
    from scopewalk.config import MarkupConfig

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

# Subtrees that are never linted.
DEFAULT_SKIP_TAGS: tuple[str, ...] = ("script", "style", "pre", "figure")

# Classes whose content is masked:
#   - `problematic` is added by rst2html to processing errors (e.g.
#     unresolved file-insertion URLs).
#   - `pre` is added by rst2html to code spans.
DEFAULT_SKIP_CLASSES: tuple[str, ...] = ("problematic", "pre")

# Tags whose content is masked but still flows into the paragraph.
DEFAULT_SKIP_CONTENT_TAGS: tuple[str, ...] = ("tt", "code")

INLINE_TAGS: tuple[str, ...] = (
    "b", "big", "i", "small", "abbr", "acronym", "cite", "dfn", "em", "kbd",
    "strong", "a", "br", "img", "span", "sub", "sup", "code", "tt", "del",
)

TAG_TO_SCOPE: Mapping[str, str] = MappingProxyType({
    "th": "text.table.header",
    "td": "text.table.cell",
    "li": "text.list",
    "blockquote": "text.blockquote",

    # Inline scopes don't inherit from `text`, otherwise their content would
    # be linted twice by text rules.
    "strong": "strong",
    "b": "strong",
    "a": "link",
    "em": "emphasis",
    "i": "emphasis",
    "code": "code",
})

HEADING_PATTERN = re.compile(r"^h\d$")

PROSE_SCOPE = "text"
ALT_SCOPE = "text.attr.alt"
SUMMARY_SCOPE = "summary"
RAW_SCOPE = "raw"

_PUNCT = frozenset(".?!,:;")
_MASK = "*"


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScopeTables:
    """Immutable classification tables for one scanning pass."""

    skip_tags: frozenset[str] = frozenset(DEFAULT_SKIP_TAGS)
    skip_classes: frozenset[str] = frozenset(DEFAULT_SKIP_CLASSES)
    skip_content_tags: frozenset[str] = frozenset(DEFAULT_SKIP_CONTENT_TAGS)
    inline_tags: frozenset[str] = frozenset(INLINE_TAGS)
    tag_to_scope: Mapping[str, str] = field(default_factory=lambda: TAG_TO_SCOPE)

    @classmethod
    def from_config(cls, markup: MarkupConfig | None = None) -> ScopeTables:
        """Resolve tables from a markup configuration.

        ``skipped_scopes`` and ``ignored_scopes`` replace their defaults when
        non-empty; ``ignored_classes`` extends the default skip classes.
        """
        if markup is None:
            return cls()
        return cls(
            skip_tags=_override(markup.skipped_scopes, DEFAULT_SKIP_TAGS),
            skip_classes=frozenset(DEFAULT_SKIP_CLASSES) | frozenset(markup.ignored_classes),
            skip_content_tags=_override(markup.ignored_scopes, DEFAULT_SKIP_CONTENT_TAGS),
        )

    def is_inline(self, tag: str) -> bool:
        return tag in self.inline_tags

    def is_skip_tag(self, tag: str) -> bool:
        return tag in self.skip_tags

    def is_skip_content(self, tag: str) -> bool:
        return tag in self.skip_content_tags

    def has_skip_class(self, class_attr: str) -> bool:
        """True if any class in a ``class="..."`` value is a skip class."""
        return any(c in self.skip_classes for c in class_attr.split())

    def inline_scope(self, tag: str) -> str | None:
        """Terminal scope for an inline tag that is linted on its own."""
        if tag in self.inline_tags:
            return self.tag_to_scope.get(tag)
        return None


def _override(values: Iterable[str], default: Iterable[str]) -> frozenset[str]:
    values = frozenset(values)
    return values if values else frozenset(default)


# ---------------------------------------------------------------------------
# Scope resolution
# ---------------------------------------------------------------------------


def resolve_scope(tag_history: Sequence[str], ext: str, tables: ScopeTables) -> str | None:
    """Return the scope for a finished block, or None for plain prose.

    The history is searched innermost first; the first block-level tag with a
    mapped scope, or the first heading, decides.
    """
    for tag in reversed(tag_history):
        scope = tables.tag_to_scope.get(tag)
        if scope is not None and not tables.is_inline(tag):
            return scope + ext
        if HEADING_PATTERN.match(tag):
            return f"text.heading.{tag}{ext}"
    return None


# ---------------------------------------------------------------------------
# Masking
# ---------------------------------------------------------------------------


def in_nested_code_span(tag_history: Sequence[str], ext: str, tables: ScopeTables) -> bool:
    """Detect text in a ``span`` that a renderer inserted into a code tag.

    docutils' syntax highlighting wraps tokens of inline literals in spans;
    those are still code.
    """
    if ext != ".rst":
        return False
    n = len(tag_history)
    for i in range(n - 1, -1, -1):
        if tag_history[i] == "span":
            continue
        return tables.is_skip_content(tag_history[i]) and i + 1 != n
    return False


def codify(ext: str, text: str) -> str:
    """Wrap *text* in the inline-code delimiter of the source format."""
    if ext in (".md", ".adoc"):
        return f"`{text}`"
    if ext == ".rst":
        return f"``{text}``"
    return text


def mask(text: str) -> str:
    masked, _ = substitute(text, text, _MASK)
    return masked


def clean(text: str, ext: str, skip: bool, skip_class: bool, inline: bool) -> tuple[str, bool]:
    """Prepare a text fragment for the paragraph buffer.

    Code content is masked and codified; inline fragments get a separating
    space unless they start with punctuation.  Returns the fragment and the
    new value of the *skip* flag (masking consumes it).
    """
    starter = text[:1] in _PUNCT and not skip
    if skip or skip_class:
        text = codify(ext, mask(text))
        skip = False
    if inline and not starter:
        text = " " + text
    return text, skip
