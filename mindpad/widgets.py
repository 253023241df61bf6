"""Custom widgets for MindPad application."""

import logging
from pathlib import Path
from typing import Optional

import gi

gi.require_version("Gtk", "4.0")
from gi.repository import Gio, GLib, Gtk, Pango

from mindpad.errors import MindPadError
from mindpad.session import MindMapSession
from mindpad.tree import Node

logger = logging.getLogger(__name__)


class NotesPanel(Gtk.Box):
    """Right sidebar for editing the selected node's Markdown note."""

    def __init__(self, session: MindMapSession):
        super().__init__(orientation=Gtk.Orientation.VERTICAL)
        self.session = session
        self.current_node: Optional[Node] = None

        self.add_css_class("notes-panel")
        self.set_size_request(350, -1)

        # Header
        header = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        header.set_margin_start(16)
        header.set_margin_end(16)
        header.set_margin_top(12)
        header.set_margin_bottom(12)

        title = Gtk.Label(label="NOTES")
        title.set_hexpand(True)
        title.set_halign(Gtk.Align.START)
        title.add_css_class("sidebar-title")
        header.append(title)

        self.preview_btn = Gtk.ToggleButton()
        self.preview_btn.set_icon_name("document-print-preview-symbolic")
        self.preview_btn.set_tooltip_text("Live preview in browser")
        self.preview_btn.connect("toggled", self._on_preview_toggled)
        header.append(self.preview_btn)

        self.append(header)

        # Node info
        self.node_info = Gtk.Label(label="")
        self.node_info.set_halign(Gtk.Align.START)
        self.node_info.set_margin_start(16)
        self.node_info.set_margin_bottom(8)
        self.node_info.set_ellipsize(Pango.EllipsizeMode.END)
        self.node_info.add_css_class("dim-label")
        self.append(self.node_info)

        self.append(Gtk.Separator(orientation=Gtk.Orientation.HORIZONTAL))

        # Text editor
        scrolled = Gtk.ScrolledWindow()
        scrolled.set_vexpand(True)
        scrolled.set_policy(Gtk.PolicyType.AUTOMATIC, Gtk.PolicyType.AUTOMATIC)

        self.text_view = Gtk.TextView()
        self.text_view.set_wrap_mode(Gtk.WrapMode.WORD_CHAR)
        self.text_view.set_left_margin(16)
        self.text_view.set_right_margin(16)
        self.text_view.set_top_margin(16)
        self.text_view.set_bottom_margin(16)
        self.text_view.add_css_class("notes-editor")
        self.text_view.set_monospace(True)

        self.text_buffer = self.text_view.get_buffer()
        self.text_buffer.connect("changed", self._on_text_changed)

        scrolled.set_child(self.text_view)
        self.append(scrolled)

        hint = Gtk.Label(
            label="Markdown supported. Preview opens the rendered note in "
                  "your browser and follows your edits."
        )
        hint.set_margin_start(16)
        hint.set_margin_end(16)
        hint.set_margin_top(8)
        hint.set_margin_bottom(8)
        hint.set_wrap(True)
        hint.add_css_class("dim-label")
        self.append(hint)

        self.show_notes_for_node(session.selected)

    def show_notes_for_node(self, node: Node):
        """Show notes for a specific node."""
        self.current_node = node
        self.node_info.set_label(f"Node: {node.label}")

        # Block handler while setting text
        self.text_buffer.handler_block_by_func(self._on_text_changed)
        self.text_buffer.set_text(node.note)
        self.text_buffer.handler_unblock_by_func(self._on_text_changed)
        self._update_preview()

    def _on_text_changed(self, buffer):
        """Write edits straight into the node."""
        if not self.current_node:
            return

        start = self.text_buffer.get_start_iter()
        end = self.text_buffer.get_end_iter()
        content = self.text_buffer.get_text(start, end, True)

        self.session.set_note(content, self.current_node)
        self._update_preview()

    # ==================== Preview ====================

    def _on_preview_toggled(self, button):
        if not button.get_active():
            return
        path = self._update_preview()
        if path is None:
            button.set_active(False)
            return
        try:
            Gio.AppInfo.launch_default_for_uri(path.as_uri(), None)
        except GLib.Error as exc:
            logger.warning("Could not open note preview: %s", exc.message)
            button.set_active(False)

    def _update_preview(self) -> Optional[Path]:
        """Rewrite the preview file while the preview is on."""
        if not self.current_node or not self.preview_btn.get_active():
            return None
        try:
            return self.session.write_note_preview(self.current_node)
        except MindPadError as exc:
            logger.warning("Could not update note preview: %s", exc)
            return None
