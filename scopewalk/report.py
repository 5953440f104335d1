"""Report rendering — text and JSON views of scanned blocks."""

from __future__ import annotations

import json
from typing import Any

import scopewalk
from scopewalk.models import Block

# Document-level scopes whose text is the whole file.
_DOCUMENT_SCOPES = ("summary", "raw")

_EXCERPT_WIDTH = 72


def _is_document_scope(scope: str) -> bool:
    return scope.split(".", 1)[0] in _DOCUMENT_SCOPES


def _excerpt(text: str, width: int = _EXCERPT_WIDTH) -> str:
    flat = " ".join(text.split())
    if len(flat) <= width:
        return flat
    return flat[: width - 1] + "…"


def filter_blocks(blocks: list[Block], prefixes: tuple[str, ...] = ()) -> list[Block]:
    """Keep blocks whose scope starts with any of *prefixes* (all if empty)."""
    if not prefixes:
        return list(blocks)
    return [b for b in blocks if b.scope.startswith(prefixes)]


# ---------------------------------------------------------------------------
# Text output
# ---------------------------------------------------------------------------


def render_text(path: str, blocks: list[Block], show_document: bool = False) -> str:
    """Produce human-friendly text output."""
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append("scopewalk blocks")
    lines.append("=" * 60)
    lines.append(f"Path:     {path}")
    lines.append("")

    shown = [b for b in blocks if show_document or not _is_document_scope(b.scope)]
    if not shown:
        lines.append("No blocks.")
    else:
        width = max(len(b.scope) for b in shown)
        for b in shown:
            lines.append(f"  {b.line:>5}  {b.scope:<{width}}  {_excerpt(b.text)}")
        lines.append("")

    lines.append("-" * 60)
    scopes = {b.scope for b in shown}
    lines.append(f"Blocks: {len(shown)} in {len(scopes)} scopes")
    lines.append("=" * 60)

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


def _block_to_dict(b: Block) -> dict[str, Any]:
    return {
        "scope": b.scope,
        "line": b.line,
        "text": b.text,
    }


def render_json(path: str, blocks: list[Block]) -> str:
    """Produce JSON output; blocks keep their emission order."""
    counts: dict[str, int] = {}
    for b in blocks:
        counts[b.scope] = counts.get(b.scope, 0) + 1

    doc: dict[str, Any] = {
        "tool": "scopewalk",
        "version": scopewalk.__version__,
        "path": path,
        "summary": {
            "total_blocks": len(blocks),
            "scopes": dict(sorted(counts.items())),
        },
        "blocks": [_block_to_dict(b) for b in blocks],
    }
    return json.dumps(doc, indent=2, ensure_ascii=False)
