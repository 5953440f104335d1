"""Comment scanner — extracts line and block comments from source code.

Only the comments of a code file are prose, so they are emitted as
``text.comment.line`` / ``text.comment.block`` blocks; the code itself is
never linted.  Syntaxes are plain regexes keyed by normalized extension.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from scopewalk.models import Block, Document
from scopewalk.sink import Sink


@dataclass(frozen=True)
class CommentSyntax:
    """Comment delimiters for one language family."""

    inline: re.Pattern[str]
    block_start: re.Pattern[str] | None = None
    block_end: re.Pattern[str] | None = None


_HASH = re.compile(r"(?:^|\s)(#.*)$")

COMMENT_SYNTAX: dict[str, CommentSyntax] = {
    ".py": CommentSyntax(
        inline=_HASH,
        block_start=re.compile(r'^\s*[rRuUbB]?("""|\'\'\')'),
        block_end=re.compile(r'("""|\'\'\')'),
    ),
    ".rb": CommentSyntax(
        inline=_HASH,
        block_start=re.compile(r"^=begin"),
        block_end=re.compile(r"^=end"),
    ),
    ".sh": CommentSyntax(inline=_HASH),
    ".c": CommentSyntax(
        inline=re.compile(r"(?:^|[^:])(//.*)$"),
        block_start=re.compile(r"/\*"),
        block_end=re.compile(r"\*/"),
    ),
    ".lua": CommentSyntax(
        inline=re.compile(r"(--(?!\[\[).*)$"),
        block_start=re.compile(r"--\[\["),
        block_end=re.compile(r"\]\]"),
    ),
}


def comment_syntax(ext: str) -> CommentSyntax | None:
    return COMMENT_SYNTAX.get(ext)


def lint_code(document: Document, sink: Sink) -> int:
    """Send the comments of *document* to *sink*; return the lines scanned.

    Documents without a known comment syntax are skipped (0 lines).
    """
    syntax = comment_syntax(document.normed_ext)
    if syntax is None:
        return 0

    ext = document.normed_ext
    line_scope = "text.comment.line" + ext
    block_scope = "text.comment.block" + ext

    block: list[str] = []
    block_line = 0
    lines = 0
    # Set between a stray closing delimiter and the next one, e.g. the two
    # ends of ``x = """...""" `` in Python.
    ignore = False

    for raw in document.content.splitlines():
        line = raw + "\n"
        lines += 1
        src_line = document.offset + lines

        if block:
            # Inside a block comment.
            block.append(line)
            if syntax.block_end and syntax.block_end.search(line):
                txt = "".join(block)
                sink.lint_text(Block(txt, txt, block_scope, block_line))
                block = []
            continue

        match = syntax.inline.search(raw)
        if match is not None:
            txt = match.group(1)
            sink.lint_text(Block(txt, txt, line_scope, src_line))
            continue

        if syntax.block_start is None or syntax.block_end is None:
            continue

        start = syntax.block_start.search(line)
        if start is not None and not ignore:
            # A delimiter after the opening one closes the block on this line.
            if syntax.block_end.search(line, start.end()):
                sink.lint_text(Block(line, line, block_scope, src_line))
            else:
                block = [line]
                block_line = src_line
        elif syntax.block_end.search(line):
            ignore = not ignore

    if block:
        # Unterminated block comment: emit what we have.
        txt = "".join(block)
        sink.lint_text(Block(txt, txt, block_scope, block_line))

    return lines
