"""Data models used throughout scopewalk."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------

# Aliases that share a renderer / comment syntax with a canonical extension.
_EXT_ALIASES: dict[str, str] = {
    ".markdown": ".md",
    ".mdown": ".md",
    ".mkd": ".md",
    ".rest": ".rst",
    ".asciidoc": ".adoc",
    ".asc": ".adoc",
    ".htm": ".html",
    ".xhtml": ".html",
    ".bash": ".sh",
    ".zsh": ".sh",
    ".pyi": ".py",
    ".h": ".c",
    ".cc": ".c",
    ".cpp": ".c",
    ".hpp": ".c",
    ".cs": ".c",
    ".go": ".c",
    ".java": ".c",
    ".js": ".c",
    ".jsx": ".c",
    ".ts": ".c",
    ".tsx": ".c",
    ".rs": ".c",
    ".swift": ".c",
    ".kt": ".c",
    ".scala": ".c",
}

MARKUP_EXTS: frozenset[str] = frozenset({".md", ".rst", ".adoc", ".html"})


def normalize_ext(ext: str) -> str:
    """Return the canonical form of a file extension (``.markdown`` → ``.md``)."""
    ext = ext.lower()
    return _EXT_ALIASES.get(ext, ext)


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Document:
    """One source document and the text every block is mapped back onto."""

    content: str
    ext: str = ".md"
    path: str = ""
    offset: int = 0  # lines preceding this document in an enclosing file

    @property
    def normed_ext(self) -> str:
        return normalize_ext(self.ext)

    @classmethod
    def from_path(cls, path: str | Path, offset: int = 0) -> Document:
        p = Path(path)
        return cls(
            content=p.read_text(encoding="utf-8", errors="replace"),
            ext=p.suffix.lower(),
            path=str(p),
            offset=offset,
        )


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


class TokenType(enum.Enum):
    """Kinds of token produced by the markup tokenizer."""

    START_TAG = "start"
    END_TAG = "end"
    SELF_CLOSING_TAG = "self-closing"
    TEXT = "text"
    COMMENT = "comment"
    END = "eof"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A single markup token.

    ``data`` is the tag name for tag tokens and the decoded text for text and
    comment tokens; ``text`` is ``data`` with outer whitespace stripped.
    """

    type: TokenType
    raw: str = ""
    data: str = ""
    attrs: tuple[tuple[str, str], ...] = ()

    @property
    def text(self) -> str:
        return self.data.strip()

    @property
    def is_tag(self) -> bool:
        return self.type in (
            TokenType.START_TAG,
            TokenType.END_TAG,
            TokenType.SELF_CLOSING_TAG,
        )

    def attr(self, key: str) -> str:
        """Return the first value of attribute *key*, or ``""``."""
        for name, value in self.attrs:
            if name == key:
                return value
        return ""


# ---------------------------------------------------------------------------
# Block
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Block:
    """A run of text with a semantic scope and a recovered source line."""

    context: str
    text: str
    scope: str
    line: int = 1  # 1-indexed, includes the document offset

    def sort_key(self) -> tuple:
        return (self.line, self.scope)


# ---------------------------------------------------------------------------
# Collected output
# ---------------------------------------------------------------------------


@dataclass
class BlockCollector:
    """In-memory sink: records every block and comment it is handed."""

    blocks: list[Block] = field(default_factory=list)
    prose: list[Block] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)

    def lint_text(self, block: Block) -> None:
        self.blocks.append(block)

    def lint_prose(self, block: Block) -> None:
        self.blocks.append(block)
        self.prose.append(block)

    def update_comments(self, comment: str) -> None:
        self.comments.append(comment)

    def scoped(self, prefix: str) -> list[Block]:
        """Return the blocks whose scope starts with *prefix*."""
        return [b for b in self.blocks if b.scope.startswith(prefix)]
