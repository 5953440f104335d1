"""Tests for report rendering."""

import json

import scopewalk
from scopewalk.models import Block
from scopewalk.report import filter_blocks, render_json, render_text


def _blocks() -> list[Block]:
    return [
        Block("", "Setup", "text.heading.h2.md", 3),
        Block("", "the docs", "link", 5),
        Block("", "See the docs for more.", "text.md", 5),
        Block("", "See the docs for more.", "summary.md", 1),
        Block("", "## Setup\n", "raw.md", 1),
    ]


class TestTextOutput:
    def test_contains_blocks(self):
        output = render_text("/docs/guide.md", _blocks())
        assert "/docs/guide.md" in output
        assert "text.heading.h2.md" in output
        assert "See the docs for more." in output

    def test_document_blocks_hidden_by_default(self):
        output = render_text("/docs/guide.md", _blocks())
        assert "summary.md" not in output
        assert "raw.md" not in output
        assert "Blocks: 3 in 3 scopes" in output

    def test_show_document(self):
        output = render_text("/docs/guide.md", _blocks(), show_document=True)
        assert "summary.md" in output
        assert "Blocks: 5 in 5 scopes" in output

    def test_long_text_truncated(self):
        output = render_text("x", [Block("", "word " * 40, "text.md", 1)])
        assert "…" in output

    def test_empty(self):
        assert "No blocks." in render_text("x", [])


class TestJsonOutput:
    def test_valid_json(self):
        doc = json.loads(render_json("/docs/guide.md", _blocks()))
        assert doc["tool"] == "scopewalk"
        assert doc["version"] == scopewalk.__version__
        assert doc["path"] == "/docs/guide.md"

    def test_emission_order_kept(self):
        doc = json.loads(render_json("x", _blocks()))
        assert [b["scope"] for b in doc["blocks"]] == [b.scope for b in _blocks()]
        assert doc["blocks"][0] == {"scope": "text.heading.h2.md", "line": 3, "text": "Setup"}

    def test_summary_counts(self):
        doc = json.loads(render_json("x", _blocks()))
        assert doc["summary"]["total_blocks"] == 5
        assert doc["summary"]["scopes"]["link"] == 1


class TestFilter:
    def test_prefixes(self):
        kept = filter_blocks(_blocks(), ("text.", "link"))
        assert [b.scope for b in kept] == ["text.heading.h2.md", "link", "text.md"]

    def test_no_prefixes_keeps_all(self):
        assert len(filter_blocks(_blocks())) == 5
