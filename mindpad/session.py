"""Editing session: the active map, its selection, history and view."""

import logging
from pathlib import Path
from typing import Callable, Optional

from mindpad.layout import RadialLayout
from mindpad.notes import html_document, markdown_outline, note_preview_page, render_markdown
from mindpad.serialize import deserialize, serialize
from mindpad.settings import AppSettings
from mindpad.storage import (
    PathLike,
    ensure_json_name,
    get_export_dir,
    get_maps_dir,
    read_text,
    write_text,
)
from mindpad.tree import Node, add_child, bounds, find_node_at, new_tree
from mindpad.undo import UndoManager
from mindpad.view import ViewState

logger = logging.getLogger(__name__)

NOTE_PREVIEW_FILE = "note-preview.html"


class MindMapSession:
    """One open mind map and everything the UI needs to edit it.

    All tree mutations go through this class so that a snapshot is taken
    before each one and the layout is refreshed after it. The view state
    is independent of the tree; animating it never touches nodes.
    """

    def __init__(self, settings: Optional[AppSettings] = None,
                 width: float = 0.0, height: float = 0.0):
        self.settings = settings or AppSettings()
        self.width = width
        self.height = height

        self.tree: Node = new_tree(self.settings.default_root_label)
        self.selected: Node = self.tree
        self.file_name: Optional[str] = None

        self.history = UndoManager(max_undo=self.settings.history_limit)
        self.view = ViewState(
            zoom_smoothness=self.settings.zoom_smoothness,
            pan_smoothness=self.settings.pan_smoothness,
        )
        self.layout_engine = RadialLayout()

        # Callbacks
        self.on_tree_changed: Optional[Callable[[], None]] = None
        self.on_selection_changed: Optional[Callable[[Node], None]] = None

        self.relayout()
        self.view.center_on(self.tree.x, self.tree.y, width, height, animate=False)

    # ==================== Layout ====================

    def relayout(self):
        """Recompute node positions for the current canvas size."""
        self.layout_engine.apply(self.tree, self.width, self.height)

    def resize(self, width: float, height: float):
        """Update the canvas size and lay the map out again."""
        self.width = width
        self.height = height
        self.relayout()

    # ==================== Editing ====================

    def snapshot(self, description: str = ""):
        """Record the current tree so the next change can be undone."""
        self.history.snapshot(self.tree, description)

    def add_child(self, label: str, parent: Optional[Node] = None) -> Optional[Node]:
        """Add a child under ``parent`` (default: the selection) and select it.

        Returns None without touching history when the label is blank.
        """
        parent = parent or self.selected
        if not label or not label.strip():
            return None

        self.snapshot(f"Add '{label[:20]}'")
        child = add_child(parent, label)

        self.relayout()
        self.view.center_on(child.x, child.y, self.width, self.height)
        self._set_selected(child)
        self._notify_tree_changed()
        return child

    def set_note(self, text: str, node: Optional[Node] = None):
        """Replace the note of ``node`` (default: the selection)."""
        (node or self.selected).note = text

    def render_note(self, node: Optional[Node] = None) -> str:
        """HTML for the note of ``node`` (default: the selection)."""
        return render_markdown((node or self.selected).note)

    def write_note_preview(self, node: Optional[Node] = None) -> Path:
        """Write the rendered note of ``node`` (default: the selection) to the preview file."""
        node = node or self.selected
        page = note_preview_page(node.label, self.render_note(node))
        return write_text(get_export_dir() / NOTE_PREVIEW_FILE, page)

    def undo(self) -> bool:
        """Restore the previous snapshot. Returns False if there was none."""
        restored = self.history.undo(self.tree)
        if restored is None:
            return False
        self._install(restored)
        return True

    def redo(self) -> bool:
        """Re-apply the last undone change. Returns False if there was none."""
        restored = self.history.redo(self.tree)
        if restored is None:
            return False
        self._install(restored)
        return True

    def _install(self, tree: Node):
        """Make ``tree`` the active map; the selection falls back to its root."""
        self.tree = tree
        self.relayout()
        self._set_selected(tree)
        self._notify_tree_changed()

    # ==================== Selection & View ====================

    def select(self, node: Node):
        self._set_selected(node)

    def select_at(self, sx: float, sy: float) -> Optional[Node]:
        """Select the node under a canvas point and center on it.

        Returns the node, or None (selection unchanged) on a miss.
        """
        wx, wy = self.view.to_world(sx, sy)
        node = find_node_at(self.tree, wx, wy)
        if node is None:
            return None
        self._set_selected(node)
        self.view.center_on(node.x, node.y, self.width, self.height)
        return node

    def focus_at(self, sx: float, sy: float) -> Optional[Node]:
        """Select the node under a canvas point and zoom in on it."""
        wx, wy = self.view.to_world(sx, sy)
        node = find_node_at(self.tree, wx, wy)
        if node is None:
            return None
        self._set_selected(node)
        self.view.focus(node.x, node.y, self.width, self.height)
        return node

    def reset_view(self):
        """Ease the view so the whole map is visible."""
        self.view.fit(bounds(self.tree), self.width, self.height)

    def _set_selected(self, node: Node):
        self.selected = node
        if self.on_selection_changed:
            self.on_selection_changed(node)

    def _notify_tree_changed(self):
        if self.on_tree_changed:
            self.on_tree_changed()

    # ==================== Files ====================

    def to_json(self) -> str:
        """The current map as indented JSON."""
        return serialize(self.tree, indent=2)

    def load_text(self, text: str, file_name: Optional[str] = None) -> Node:
        """Replace the map with one parsed from JSON text.

        The load itself can be undone. On ParseError nothing changes.
        """
        loaded = deserialize(text)

        self.snapshot(f"Load {file_name}" if file_name else "Load map")
        self.file_name = file_name
        self._install(loaded)
        self.reset_view()
        logger.info("Loaded map %r with %d nodes", file_name, loaded.subtree_weight)
        return loaded

    def load_file(self, path: PathLike) -> Node:
        """Read and load a map file (ReadError or ParseError on failure)."""
        path = Path(path)
        return self.load_text(read_text(path), path.name)

    def load_saved_map(self, name: str) -> Node:
        """Load a map from the maps directory by file name."""
        return self.load_file(get_maps_dir() / ensure_json_name(name))

    def save(self, path: Optional[PathLike] = None) -> Path:
        """Write the map as JSON and return where it went.

        Without a path the map goes to the maps directory under its
        remembered file name, or the configured default name.
        """
        if path is None:
            name = ensure_json_name(self.file_name or self.settings.default_filename)
            target = get_maps_dir() / name
        else:
            target = Path(path)

        written = write_text(target, self.to_json())
        self.file_name = written.name
        return written

    def export(self, fmt: str, path: PathLike) -> Path:
        """Export the map as "md", "html", "png" or "pdf"."""
        title = Path(self.file_name).stem if self.file_name else self.tree.label

        if fmt == "md":
            return write_text(path, markdown_outline(self.tree, title=title))
        if fmt == "html":
            return write_text(path, html_document(self.tree, title=title))
        if fmt not in ("png", "pdf"):
            raise ValueError(f"Unknown export format: {fmt}")

        # cairo is only needed for image formats.
        from mindpad.export import MindMapExporter

        if fmt == "png":
            return MindMapExporter().export_png(self.tree, path)
        return MindMapExporter().export_pdf(self.tree, path, title=title)
