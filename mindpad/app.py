"""Main MindPad application."""

import logging
import sys
from pathlib import Path
from typing import Optional

import gi
gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
gi.require_version("Gdk", "4.0")
from gi.repository import Gtk, Gdk, Gio, GLib, Adw

from mindpad import __version__, __app_id__
from mindpad.canvas import MindMapCanvas
from mindpad.errors import MindPadError
from mindpad.session import MindMapSession
from mindpad.settings import AppSettings, load_settings, save_settings
from mindpad.storage import get_export_dir, get_maps_dir
from mindpad.tree import Node, iter_nodes
from mindpad.widgets import NotesPanel

logger = logging.getLogger(__name__)

EXPORT_FORMATS = {
    "png": ("PNG Images", "image/png"),
    "pdf": ("PDF Documents", "application/pdf"),
    "md": ("Markdown Files", "text/markdown"),
    "html": ("HTML Pages", "text/html"),
}


class MindPadWindow(Adw.ApplicationWindow):
    """Main application window."""

    def __init__(self, app: Adw.Application, settings: AppSettings):
        super().__init__(application=app)
        self.settings = settings
        self.session = MindMapSession(settings)

        self.set_title("MindPad")
        self.set_default_size(1200, 800)

        self._load_css()
        self._build_ui()
        self._setup_shortcuts()

        self.session.on_selection_changed = self._on_node_selected
        self.session.on_tree_changed = self.canvas.refresh
        self.session.history.on_state_changed = self._update_history_buttons
        self._update_history_buttons()

        if settings.last_file and Path(settings.last_file).exists():
            self._open_path(settings.last_file)

    def _load_css(self):
        """Load custom CSS theme."""
        css_path = Path(__file__).parent / "theme.css"
        if css_path.exists():
            css_provider = Gtk.CssProvider()
            css_provider.load_from_path(str(css_path))
            Gtk.StyleContext.add_provider_for_display(
                Gdk.Display.get_default(),
                css_provider,
                Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION
            )

    def _build_ui(self):
        """Build the main UI layout."""
        main_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        main_box.append(self._build_header())

        self.paned = Gtk.Paned(orientation=Gtk.Orientation.HORIZONTAL)
        self.paned.set_vexpand(True)

        self.canvas = MindMapCanvas(self.session)
        self.canvas.on_add_requested = self._add_node

        canvas_frame = Gtk.Frame()
        canvas_frame.set_child(self.canvas)
        self.paned.set_start_child(canvas_frame)
        self.paned.set_shrink_start_child(False)

        self.notes_panel = NotesPanel(self.session)
        self.notes_revealer = Gtk.Revealer()
        self.notes_revealer.set_transition_type(Gtk.RevealerTransitionType.SLIDE_LEFT)
        self.notes_revealer.set_reveal_child(True)
        self.notes_revealer.set_child(self.notes_panel)
        self.paned.set_end_child(self.notes_revealer)
        self.paned.set_shrink_end_child(False)
        self.paned.set_resize_end_child(False)

        # Wrap in toast overlay for in-app notifications
        self.toast_overlay = Adw.ToastOverlay()
        self.toast_overlay.set_child(self.paned)
        main_box.append(self.toast_overlay)

        self.set_content(main_box)

    def _build_header(self) -> Adw.HeaderBar:
        """Build the header bar."""
        header = Adw.HeaderBar()

        menu = Gio.Menu()

        file_section = Gio.Menu()
        file_section.append("Open...", "win.open")
        file_section.append("Save", "win.save")
        file_section.append("Save As...", "win.save-as")
        menu.append_section(None, file_section)

        export_menu = Gio.Menu()
        export_menu.append("Export as PNG...", "win.export-png")
        export_menu.append("Export as PDF...", "win.export-pdf")
        export_menu.append("Export as Markdown...", "win.export-md")
        export_menu.append("Export as HTML...", "win.export-html")
        export_section = Gio.Menu()
        export_section.append_submenu("Export", export_menu)
        menu.append_section(None, export_section)

        help_section = Gio.Menu()
        help_section.append("About MindPad", "win.show-about")
        menu.append_section(None, help_section)

        menu_btn = Gtk.MenuButton()
        menu_btn.set_icon_name("open-menu-symbolic")
        menu_btn.set_tooltip_text("Menu")
        menu_btn.set_popover(Gtk.PopoverMenu.new_from_model(menu))
        header.pack_start(menu_btn)

        add_btn = Gtk.Button()
        add_btn.set_icon_name("list-add-symbolic")
        add_btn.set_tooltip_text("Add child node (Tab)")
        add_btn.connect("clicked", lambda b: self._add_node())
        header.pack_start(add_btn)

        self.undo_btn = Gtk.Button()
        self.undo_btn.set_icon_name("edit-undo-symbolic")
        self.undo_btn.connect("clicked", lambda b: self._undo())
        header.pack_start(self.undo_btn)

        self.redo_btn = Gtk.Button()
        self.redo_btn.set_icon_name("edit-redo-symbolic")
        self.redo_btn.connect("clicked", lambda b: self._redo())
        header.pack_start(self.redo_btn)

        notes_btn = Gtk.ToggleButton()
        notes_btn.set_icon_name("accessories-text-editor-symbolic")
        notes_btn.set_tooltip_text("Toggle Notes Panel (Ctrl+Shift+B)")
        notes_btn.set_active(True)
        notes_btn.connect("toggled", lambda b: self.notes_revealer.set_reveal_child(b.get_active()))
        self.notes_btn = notes_btn
        header.pack_end(notes_btn)

        reset_btn = Gtk.Button()
        reset_btn.set_icon_name("zoom-fit-best-symbolic")
        reset_btn.set_tooltip_text("Reset view (Ctrl+0)")
        reset_btn.connect("clicked", lambda b: self._reset_view())
        header.pack_end(reset_btn)

        return header

    def _setup_shortcuts(self):
        """Setup keyboard shortcuts."""
        actions = [
            ("add-node", self._add_node, "<Control>n"),
            ("open", self._open, "<Control>o"),
            ("save", self._save, "<Control>s"),
            ("save-as", self._save_as, "<Control><Shift>s"),
            ("undo", self._undo, "<Control>z"),
            ("redo", self._redo, "<Control><Shift>z"),
            ("reset-view", self._reset_view, "<Control>0"),
            ("toggle-notes", self._toggle_notes, "<Control><Shift>b"),
            ("export-png", lambda: self._export("png"), None),
            ("export-pdf", lambda: self._export("pdf"), None),
            ("export-md", lambda: self._export("md"), None),
            ("export-html", lambda: self._export("html"), None),
            ("show-about", self._show_about, None),
            ("quit", lambda: self.close(), "<Control>q"),
        ]

        for name, callback, accel in actions:
            action = Gio.SimpleAction.new(name, None)
            action.connect("activate", lambda a, p, cb=callback: cb())
            self.add_action(action)

            if accel:
                self.get_application().set_accels_for_action(f"win.{name}", [accel])

        self.get_application().set_accels_for_action("win.redo", ["<Control><Shift>z", "<Control>y"])

    # ==================== Editing ====================

    def _add_node(self):
        """Ask for a label and add a child under the selection."""
        parent = self.session.selected

        dialog = Adw.MessageDialog(
            transient_for=self,
            heading="New Node",
            body=f"Label for the new child of \"{parent.label}\":"
        )

        entry = Gtk.Entry()
        entry.set_margin_start(16)
        entry.set_margin_end(16)
        entry.connect("activate", lambda e: dialog.response("add"))
        dialog.set_extra_child(entry)

        dialog.add_response("cancel", "Cancel")
        dialog.add_response("add", "Add")
        dialog.set_default_response("add")
        dialog.connect("response", lambda d, r: self._confirm_add_node(r, parent, entry.get_text()))
        dialog.present()
        entry.grab_focus()

    def _confirm_add_node(self, response: str, parent: Node, label: str):
        # The tree may have been replaced (undo, load) while the dialog was open.
        if response != "add" or not any(n is parent for n in iter_nodes(self.session.tree)):
            return
        self.session.add_child(label, parent)

    def _undo(self):
        """Undo last change."""
        self._history_step(self.session.undo)

    def _redo(self):
        """Redo last undone change."""
        self._history_step(self.session.redo)

    def _history_step(self, step):
        try:
            step()
        except MindPadError as exc:
            self._show_toast(f"Could not restore map: {exc}")

    def _reset_view(self):
        self.session.reset_view()
        self.canvas.refresh()

    def _toggle_notes(self):
        """Toggle notes panel visibility."""
        revealed = self.notes_revealer.get_reveal_child()
        self.notes_revealer.set_reveal_child(not revealed)
        self.notes_btn.set_active(not revealed)

    def _on_node_selected(self, node: Node):
        self.notes_panel.show_notes_for_node(node)
        self.canvas.queue_draw()

    def _update_history_buttons(self):
        history = self.session.history
        self.undo_btn.set_sensitive(history.can_undo)
        self.redo_btn.set_sensitive(history.can_redo)
        self.undo_btn.set_tooltip_text(f"Undo {history.undo_description} (Ctrl+Z)".replace("  ", " "))
        self.redo_btn.set_tooltip_text(f"Redo {history.redo_description} (Ctrl+Shift+Z)".replace("  ", " "))

    # ==================== Files ====================

    def _json_filters(self) -> Gio.ListStore:
        filter_json = Gtk.FileFilter()
        filter_json.set_name("Mind Maps")
        filter_json.add_pattern("*.json")
        filters = Gio.ListStore.new(Gtk.FileFilter)
        filters.append(filter_json)
        return filters

    def _open(self):
        """Open a map file."""
        dialog = Gtk.FileDialog()
        dialog.set_title("Open Mind Map")
        dialog.set_initial_folder(Gio.File.new_for_path(str(get_maps_dir())))
        dialog.set_filters(self._json_filters())
        dialog.open(self, None, self._on_open_response)

    def _on_open_response(self, dialog, result):
        try:
            file = dialog.open_finish(result)
        except GLib.Error:
            return  # User cancelled
        if file and file.get_path():
            self._open_path(file.get_path())

    def _open_path(self, path: str):
        try:
            self.session.load_file(path)
        except MindPadError as exc:
            self._show_toast(f"Could not open map: {exc}")
            return
        self._remember_file(path)
        self.set_title(f"MindPad - {self.session.file_name}")
        self.canvas.refresh()

    def _save(self):
        """Save to the remembered file, or the maps directory."""
        try:
            path = self.session.save()
        except MindPadError as exc:
            self._show_toast(f"Save failed: {exc}")
            return
        self._remember_file(str(path))
        self._show_toast(f"Saved to {path}")

    def _save_as(self):
        dialog = Gtk.FileDialog()
        dialog.set_title("Save Mind Map")
        dialog.set_initial_name(self.session.file_name or self.settings.default_filename)
        dialog.set_initial_folder(Gio.File.new_for_path(str(get_maps_dir())))
        dialog.set_filters(self._json_filters())
        dialog.save(self, None, self._on_save_as_response)

    def _on_save_as_response(self, dialog, result):
        try:
            file = dialog.save_finish(result)
        except GLib.Error:
            return  # User cancelled
        if not file or not file.get_path():
            self._show_toast("Save failed: selected location is not a local file")
            return
        try:
            path = self.session.save(file.get_path())
        except MindPadError as exc:
            self._show_toast(f"Save failed: {exc}")
            return
        self._remember_file(str(path))
        self.set_title(f"MindPad - {self.session.file_name}")
        self._show_toast(f"Saved to {path}")

    def _remember_file(self, path: str):
        self.settings.last_file = path
        try:
            save_settings(self.settings)
        except MindPadError as exc:
            logger.warning("Could not save settings: %s", exc)

    # ==================== Export ====================

    def _export(self, fmt: str):
        """Export the current map."""
        name, mime_type = EXPORT_FORMATS[fmt]
        stem = Path(self.session.file_name).stem if self.session.file_name else "mindmap"

        dialog = Gtk.FileDialog()
        dialog.set_title(f"Export as {fmt.upper()}")
        dialog.set_initial_name(f"{stem}.{fmt}")
        dialog.set_initial_folder(Gio.File.new_for_path(str(get_export_dir())))

        file_filter = Gtk.FileFilter()
        file_filter.set_name(name)
        file_filter.add_mime_type(mime_type)
        filters = Gio.ListStore.new(Gtk.FileFilter)
        filters.append(file_filter)
        dialog.set_filters(filters)

        dialog.save(self, None, lambda d, r: self._on_export_response(d, r, fmt))

    def _on_export_response(self, dialog, result, fmt: str):
        """Handle export dialog response."""
        try:
            file = dialog.save_finish(result)
        except GLib.Error:
            return  # User cancelled
        filepath = file.get_path() if file else None
        if not filepath:
            self._show_toast("Export failed: selected location is not a local file")
            return
        try:
            self.session.export(fmt, filepath)
        except MindPadError as exc:
            self._show_toast(f"Export failed: {exc}")
            return
        self._show_toast(f"Exported to {filepath}")

    def _show_about(self):
        """Show about dialog."""
        about = Adw.AboutWindow(
            transient_for=self,
            application_name="MindPad",
            application_icon="applications-graphics",
            developer_name="MindPad Project",
            version=__version__,
            license_type=Gtk.License.MIT_X11,
            comments="A radial mind-map editor with Markdown notes",
        )
        about.present()

    def _show_toast(self, message: str):
        """Show a toast notification."""
        toast = Adw.Toast(title=message)
        toast.set_timeout(3)
        self.toast_overlay.add_toast(toast)


class MindPadApp(Adw.Application):
    """Main application class."""

    def __init__(self, settings: AppSettings):
        super().__init__(
            application_id=__app_id__,
            flags=Gio.ApplicationFlags.DEFAULT_FLAGS
        )
        self.settings = settings
        self.window: Optional[MindPadWindow] = None

    def do_activate(self):
        """Activate application."""
        if not self.window:
            self.window = MindPadWindow(self, self.settings)

        self.window.present()


def main() -> int:
    """Application entry point."""
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = MindPadApp(settings)
    return app.run(sys.argv)


if __name__ == "__main__":
    sys.exit(main())
