"""Markdown rendering of node notes and text exports of whole maps."""

import html
from typing import List

import markdown

from mindpad.tree import Node

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


def render_markdown(text: str) -> str:
    """Render a note's Markdown to an HTML fragment."""
    if not text or not text.strip():
        return ""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def markdown_outline(root: Node, title: str = "", include_notes: bool = True) -> str:
    """Export a map as a Markdown outline.

    The root becomes the document heading, the first two levels below it
    become sub-headings and anything deeper becomes nested bullets. Notes
    are quoted under their node.
    """
    lines: List[str] = []

    if title:
        lines.append("---")
        lines.append(f"title: {title}")
        lines.append("---")
        lines.append("")

    lines.append(f"# {root.label}")
    lines.append("")
    if include_notes and root.note.strip():
        for note_line in root.note.strip().split("\n"):
            lines.append(f"> {note_line}")
        lines.append("")

    def add_children(node: Node, depth: int):
        for child in node.children:
            # Heading or bullet based on depth
            if depth == 1:
                lines.append(f"## {child.label}")
            elif depth == 2:
                lines.append(f"### {child.label}")
            else:
                indent = "  " * (depth - 3)
                lines.append(f"{indent}- {child.label}")

            if include_notes and child.note.strip():
                note_indent = "  " * (depth - 2) if depth > 2 else ""
                for note_line in child.note.strip().split("\n"):
                    lines.append(f"{note_indent}> {note_line}")
                lines.append("")

            add_children(child, depth + 1)

    add_children(root, 1)
    return "\n".join(lines) + "\n"


def html_document(root: Node, title: str = "") -> str:
    """Export a map as a standalone HTML page with rendered notes."""
    page_title = html.escape(title or root.label)

    def render(node: Node) -> str:
        parts = [f"<li><span class=\"label\">{html.escape(node.label)}</span>"]
        note_html = render_markdown(node.note)
        if note_html:
            parts.append(f"<div class=\"note\">{note_html}</div>")
        if node.children:
            parts.append("<ul>")
            parts.extend(render(child) for child in node.children)
            parts.append("</ul>")
        parts.append("</li>")
        return "".join(parts)

    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n<meta charset=\"utf-8\">\n"
        f"<title>{page_title}</title>\n"
        "<style>body{font-family:sans-serif;max-width:60em;margin:2em auto}"
        ".label{font-weight:bold}.note{margin:0.25em 0 0.75em 1em;color:#444}</style>\n"
        "</head>\n<body>\n"
        f"<h1>{page_title}</h1>\n"
        f"<ul>{render(root)}</ul>\n"
        "</body>\n</html>\n"
    )


def note_preview_page(label: str, note_html: str, refresh_seconds: int = 2) -> str:
    """A small HTML page showing one rendered note.

    The page reloads itself every ``refresh_seconds`` so a browser showing
    it follows edits as the preview file is rewritten.
    """
    body = note_html or "<p class=\"empty\">No notes for this node.</p>"
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n<meta charset=\"utf-8\">\n"
        f"<meta http-equiv=\"refresh\" content=\"{int(refresh_seconds)}\">\n"
        f"<title>{html.escape(label)} - notes</title>\n"
        "<style>body{font-family:sans-serif;max-width:50em;margin:2em auto}"
        ".empty{color:#888}</style>\n"
        "</head>\n<body>\n"
        f"<h1>{html.escape(label)}</h1>\n"
        f"{body}\n"
        "</body>\n</html>\n"
    )
