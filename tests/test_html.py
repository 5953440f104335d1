"""Tests for the HTML scanner (scopewalk.scanner.html)."""

from scopewalk.config import MarkupConfig
from scopewalk.models import Document
from scopewalk.render import render_html
from scopewalk.scanner.html import scan_html
from scopewalk.scanner.scopes import ScopeTables

_DOCUMENT_SCOPES = ("summary", "raw")


def _fragments(collector):
    """Blocks other than the whole-document summary/raw blocks."""
    return [b for b in collector.blocks if not b.scope.startswith(_DOCUMENT_SCOPES)]


def _scan_md(source: str, **kwargs):
    doc = Document(source, ".md", **kwargs)
    return scan_html(doc, render_html(doc))


class TestScopes:
    def test_heading_list_and_prose(self):
        out = _scan_md("# Title\n\nSome prose.\n\n- first item\n- second item\n")
        scopes = [(b.scope, b.text) for b in _fragments(out)]
        assert scopes == [
            ("text.heading.h1.md", "Title"),
            ("text.md", "Some prose."),
            ("text.list.md", "first item"),
            ("text.list.md", "second item"),
        ]

    def test_table_cells(self):
        out = _scan_md("| Name | Role |\n|------|------|\n| Ada | Author |\n")
        headers = [b.text for b in out.scoped("text.table.header")]
        cells = [b.text for b in out.scoped("text.table.cell")]
        assert headers == ["Name", "Role"]
        assert cells == ["Ada", "Author"]

    def test_blockquote(self):
        out = _scan_md("> Quoted words here.\n")
        assert [b.text for b in out.scoped("text.blockquote.md")] == ["Quoted words here."]

    def test_prose_goes_through_lint_prose(self):
        out = _scan_md("Just a paragraph.\n")
        assert [b.scope for b in out.prose] == ["text.md"]


class TestDoubleLint:
    def test_link_text_linted_twice(self):
        doc = Document("See [the docs](x) for more.\n", ".md")
        out = scan_html(doc, '<p>See <a href="x">the docs</a> for more.</p>\n')
        hits = [b for b in _fragments(out) if "the docs" in b.text]
        assert len(hits) == 2
        assert {b.scope for b in hits} == {"link", "text.md"}
        prose = next(b for b in hits if b.scope == "text.md")
        assert prose.text == "See the docs for more."

    def test_link_context_excludes_only_prior_fragments(self):
        doc = Document("See [the docs](x) for more.\n", ".md")
        out = scan_html(doc, '<p>See <a href="x">the docs</a> for more.</p>\n')
        link = out.scoped("link")[0]
        assert link.context.startswith("@@@ [the docs]")

    def test_emphasis(self):
        out = _scan_md("This is *very* important.\n")
        assert [b.text for b in out.scoped("emphasis")] == ["very"]
        assert out.prose[0].text == "This is very important."

    def test_punctuation_after_inline_is_not_padded(self):
        out = _scan_md("Read **this**, then that.\n")
        assert out.prose[0].text == "Read this, then that."


class TestMasking:
    def test_inline_code_masked_in_paragraph(self):
        doc = Document("Run `rm -rf /` now.\n", ".md")
        out = scan_html(doc, "<p>Run <code>rm -rf /</code> now.</p>\n")
        prose = out.prose[0].text
        assert prose == "Run `********` now."
        assert "rm -rf" not in prose
        masked = prose.split("`")[1]
        assert len(masked) == len("rm -rf /")

    def test_skip_class_masked(self):
        doc = Document("Use ``ls -la`` here.\n", ".rst")
        out = scan_html(doc, '<p>Use <span class="pre">ls -la</span> here.</p>\n')
        assert out.prose[0].text == "Use ``******`` here."

    def test_rst_span_inside_tt(self):
        doc = Document("Call ``foo`` now.\n", ".rst")
        html = '<p>Call <tt class="docutils literal"><span class="name">foo</span></tt>.</p>'
        out = scan_html(doc, html)
        assert "foo" not in out.prose[0].text
        assert "``***``" in out.prose[0].text

    def test_configured_skip_content(self):
        doc = Document("Press Ctrl then `x`.\n", ".md")
        tables = ScopeTables.from_config(MarkupConfig(ignored_scopes=["kbd"]))
        out = scan_html(doc, "<p>Press <kbd>Ctrl</kbd> then <code>x</code>.</p>", tables)
        assert out.prose[0].text == "Press `****` then x."


class TestSkipTags:
    def test_pre_block_not_linted(self):
        out = _scan_md("Intro.\n\n```\nsecret code\n```\n\nOutro.\n")
        texts = [b.text for b in _fragments(out)]
        assert texts == ["Intro.", "Outro."]

    def test_skipped_text_is_still_consumed(self):
        source = "Intro.\n\n```\nOutro.\n```\n\nOutro.\n"
        out = _scan_md(source)
        outro = [b for b in _fragments(out) if b.text == "Outro."]
        assert [b.line for b in outro] == [7]

    def test_script_and_style(self):
        doc = Document("x\n", ".html")
        html = "<style>p { color: red }</style><script>var a = 1;</script><p>Body.</p>"
        out = scan_html(doc, html)
        assert [b.text for b in _fragments(out)] == ["Body."]

    def test_unbalanced_skip_tag_toggles(self):
        doc = Document("a\n", ".html")
        out = scan_html(doc, "<pre>hidden<pre><p>shown</p>")
        assert [b.text for b in _fragments(out)] == ["shown"]


class TestLineNumbers:
    def test_repeated_heading_maps_to_later_occurrence(self):
        lines = ["# Guide", "", "## Setup", ""]
        lines += [f"Filler paragraph number {n}." for n in range(5, 39)]
        lines += ["", "## Setup", "", "Done."]
        assert lines[39] == "## Setup"
        out = _scan_md("\n".join(lines) + "\n")
        setups = out.scoped("text.heading.h2")
        assert [b.line for b in setups] == [3, 40]

    def test_paragraph_lines(self):
        out = _scan_md("First.\n\nSecond.\n\n\nThird.\n")
        assert [(b.text, b.line) for b in out.prose] == [
            ("First.", 1),
            ("Second.", 3),
            ("Third.", 6),
        ]

    def test_offset(self):
        out = _scan_md("Intro.\n\nBody.\n", offset=10)
        assert [b.line for b in out.prose] == [11, 13]
        assert out.scoped("summary")[0].line == 11

    def test_link_target_does_not_attract_prose(self):
        source = "[Install](install)\n\ninstall\n"
        out = _scan_md(source)
        last = out.prose[-1]
        assert last.text == "install"
        assert last.line == 3


class TestImagesAndComments:
    def test_alt_text(self):
        out = _scan_md("Intro.\n\n![A sleepy cat](cat.png)\n")
        alts = out.scoped("text.attr.alt")
        assert [(b.text, b.line) for b in alts] == [("A sleepy cat", 3)]

    def test_alt_text_inside_skipped_figure(self):
        doc = Document("Intro\n![A sleepy cat](a.png)\n", ".html")
        out = scan_html(doc, '<figure><img src=a.png alt="A sleepy cat"></figure>')
        alts = out.scoped("text.attr.alt")
        assert [(b.text, b.line) for b in alts] == [("A sleepy cat", 2)]
        assert out.prose == []

    def test_blank_alt_ignored(self):
        doc = Document("x\n", ".html")
        out = scan_html(doc, '<p><img src="a.png" alt=" "></p>')
        assert out.scoped("text.attr.alt") == []

    def test_comments_forwarded(self):
        doc = Document("x\n", ".html")
        out = scan_html(doc, "<!-- vale off --><p>Hi.</p>")
        assert out.comments == ["vale off"]


class TestDocumentBlocks:
    def test_summary_is_prose_only(self):
        source = (
            "# Title\n\nFirst paragraph.\n\n- item one\n- item two\n\n"
            "Second paragraph.\n\n| A | B |\n|---|---|\n| c | d |\n"
        )
        out = _scan_md(source)
        summaries = out.scoped("summary")
        assert len(summaries) == 1
        assert summaries[0].scope == "summary.md"
        assert summaries[0].text == "First paragraph. Second paragraph."
        assert summaries[0].context == source

    def test_raw_block(self):
        source = "Hello.\n"
        out = _scan_md(source)
        raw = out.scoped("raw")
        assert len(raw) == 1
        assert raw[0].scope == "raw.md"
        assert raw[0].text == source
        assert raw[0].context == ""

    def test_always_emitted(self):
        out = scan_html(Document("", ".md"), "")
        assert [b.scope for b in out.blocks] == ["summary.md", "raw.md"]

    def test_blank_paragraph_skipped(self):
        out = scan_html(Document("x\n", ".html"), "<p>   </p>")
        assert _fragments(out) == []

    def test_trailing_text_without_block_not_emitted(self):
        out = scan_html(Document("Loose text\n", ".html"), "Loose text")
        assert out.prose == []
        assert [b.scope for b in out.blocks] == ["summary.html", "raw.html"]
        assert out.blocks[0].text == ""

    def test_scope_suffix_uses_normalized_ext(self):
        doc = Document("Hi.\n", ".markdown")
        out = scan_html(doc, "<p>Hi.</p>")
        assert [b.scope for b in out.blocks] == ["text.md", "summary.md", "raw.md"]
