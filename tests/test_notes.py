"""Tests for Markdown notes and text exports."""

from mindpad.notes import html_document, markdown_outline, note_preview_page, render_markdown
from mindpad.tree import add_child, new_tree


class TestRenderMarkdown:

    def test_blank(self):
        assert render_markdown("") == ""
        assert render_markdown("  \n ") == ""

    def test_basic_markup(self):
        html = render_markdown("# Title\n\nSome *text*.")
        assert "<h1>Title</h1>" in html
        assert "<em>text</em>" in html

    def test_fenced_code(self):
        html = render_markdown("```\nx = 1\n```")
        assert "<code>" in html
        assert "x = 1" in html

    def test_tables(self):
        html = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |")
        assert "<table>" in html


class TestMarkdownOutline:

    def test_levels(self):
        root = new_tree("Project")
        a = add_child(root, "Design")
        b = add_child(a, "Layout")
        c = add_child(b, "Rings")
        add_child(c, "Spacing")

        text = markdown_outline(root)
        assert text.splitlines() == [
            "# Project",
            "",
            "## Design",
            "### Layout",
            "- Rings",
            "  - Spacing",
        ]
        assert text.endswith("\n")

    def test_title_frontmatter(self, small_tree):
        lines = markdown_outline(small_tree, title="Plan").splitlines()
        assert lines[:4] == ["---", "title: Plan", "---", ""]

    def test_notes_quoted(self):
        root = new_tree("R")
        root.note = "first\nsecond"
        child = add_child(root, "C")
        child.note = "child note"

        lines = markdown_outline(root).splitlines()
        assert "> first" in lines
        assert "> second" in lines
        assert lines[lines.index("## C") + 1] == "> child note"

    def test_notes_can_be_left_out(self):
        root = new_tree("R")
        root.note = "secret"
        assert "secret" not in markdown_outline(root, include_notes=False)


class TestHtmlDocument:

    def test_structure_and_escaping(self):
        root = new_tree("A <b> & C")
        child = add_child(root, "Child")
        child.note = "**note**"

        page = html_document(root)
        assert page.startswith("<!DOCTYPE html>")
        assert "<title>A &lt;b&gt; &amp; C</title>" in page
        assert "<strong>note</strong>" in page
        assert page.count("<li>") == 2

    def test_explicit_title(self, small_tree):
        assert "<h1>My map</h1>" in html_document(small_tree, title="My map")


class TestNotePreviewPage:

    def test_escapes_label_and_embeds_html(self):
        page = note_preview_page("<Plan>", "<p>Body</p>", refresh_seconds=5)
        assert "<h1>&lt;Plan&gt;</h1>" in page
        assert "<p>Body</p>" in page
        assert 'content="5"' in page

    def test_empty_note_placeholder(self):
        assert "No notes for this node." in note_preview_page("R", "")
