"""Image export (PNG, PDF) for laid-out MindPad maps."""

import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Optional

import cairo

from mindpad.errors import WriteError
from mindpad.storage import PathLike
from mindpad.tree import NODE_RADIUS, Node, bounds, iter_nodes

logger = logging.getLogger(__name__)


class MindMapExporter:
    """Paints a laid-out tree onto cairo surfaces."""

    COLORS = {
        'background': (1.0, 1.0, 1.0),
        'node_fill': (0.667, 0.667, 1.0),         # #aaaaff
        'node_border': (0.0, 0.0, 0.0),
        'selected_border': (1.0, 0.0, 0.0),
        'connection': (0.4, 0.4, 0.4),            # #666666
        'text': (0.0, 0.0, 0.0),
    }

    PAGE_SIZES = {
        "A4": (595, 842),
        "Letter": (612, 792),
    }

    NODE_RADIUS = NODE_RADIUS
    FONT_SIZE = 14
    PADDING = 50

    def export_png(self, root: Node, filepath: PathLike,
                   scale: float = 2.0, transparent: bool = False) -> Path:
        """Export the map to a PNG image."""
        min_x, min_y, max_x, max_y = self._extent(root)
        width = max(1, int((max_x - min_x + self.PADDING * 2) * scale))
        height = max(1, int((max_y - min_y + self.PADDING * 2) * scale))

        try:
            surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
            cr = cairo.Context(surface)

            cr.scale(scale, scale)
            cr.translate(-min_x + self.PADDING, -min_y + self.PADDING)

            if not transparent:
                cr.set_source_rgb(*self.COLORS['background'])
                cr.paint()

            self.paint(cr, root)
            surface.write_to_png(str(filepath))
        except (cairo.Error, OSError, MemoryError) as exc:
            raise WriteError(f"Could not write {filepath}: {exc}") from exc

        logger.info("Exported PNG %s (%dx%d)", filepath, width, height)
        return Path(filepath)

    def export_pdf(self, root: Node, filepath: PathLike,
                   page_size: str = "A4", title: str = "") -> Path:
        """Export the map to a single-page PDF.

        ``page_size`` is "A4", "Letter" or "Auto" (page sized to the map).
        """
        min_x, min_y, max_x, max_y = self._extent(root)
        map_width = max_x - min_x + self.PADDING * 2
        map_height = max_y - min_y + self.PADDING * 2

        if page_size == "Auto":
            width, height = map_width, map_height
            scale = 1.0
        else:
            width, height = self.PAGE_SIZES.get(page_size, self.PAGE_SIZES["A4"])
            # Scale to fit
            scale = min((width - 40) / map_width, (height - 40) / map_height, 1.0)

        try:
            surface = cairo.PDFSurface(str(filepath), width, height)
            cr = cairo.Context(surface)

            surface.set_metadata(cairo.PDF_METADATA_TITLE, title or root.label)
            surface.set_metadata(cairo.PDF_METADATA_CREATE_DATE,
                                 datetime.now().replace(microsecond=0).isoformat())

            cr.set_source_rgb(*self.COLORS['background'])
            cr.paint()

            # Center and scale
            cr.translate(width / 2, height / 2)
            cr.scale(scale, scale)
            cr.translate(-(min_x + max_x) / 2, -(min_y + max_y) / 2)

            self.paint(cr, root)
            surface.finish()
        except (cairo.Error, OSError, MemoryError) as exc:
            raise WriteError(f"Could not write {filepath}: {exc}") from exc

        logger.info("Exported PDF %s (%s)", filepath, page_size)
        return Path(filepath)

    def paint(self, cr, root: Node, selected: Optional[Node] = None,
              line_scale: float = 1.0):
        """Draw connections, then nodes, in map coordinates.

        ``line_scale`` divides line widths and font size so that the
        interactive canvas can keep strokes constant while zoomed.
        """
        self._draw_connections(cr, root, line_scale)
        for node in iter_nodes(root):
            self._draw_node(cr, node, node is selected, line_scale)

    def _extent(self, root: Node):
        min_x, min_y, max_x, max_y = bounds(root)
        r = self.NODE_RADIUS
        return min_x - r, min_y - r, max_x + r, max_y + r

    def _draw_connections(self, cr, root: Node, line_scale: float):
        """Draw straight parent-child lines."""
        cr.set_source_rgb(*self.COLORS['connection'])
        cr.set_line_width(2 / line_scale)
        cr.set_line_cap(cairo.LINE_CAP_ROUND)
        for node in iter_nodes(root):
            for child in node.children:
                cr.move_to(node.x, node.y)
                cr.line_to(child.x, child.y)
        cr.stroke()

    def _draw_node(self, cr, node: Node, is_selected: bool, line_scale: float):
        """Draw a single node."""
        cr.new_path()
        cr.arc(node.x, node.y, self.NODE_RADIUS, 0, 2 * math.pi)

        cr.set_source_rgb(*self.COLORS['node_fill'])
        cr.fill_preserve()

        border = 'selected_border' if is_selected else 'node_border'
        cr.set_source_rgb(*self.COLORS[border])
        cr.set_line_width(2 / line_scale)
        cr.stroke()

        cr.set_source_rgb(*self.COLORS['text'])
        cr.select_font_face("Sans", cairo.FONT_SLANT_NORMAL,
                            cairo.FONT_WEIGHT_BOLD if node.is_root else cairo.FONT_WEIGHT_NORMAL)
        cr.set_font_size(self.FONT_SIZE / line_scale)

        extents = cr.text_extents(node.label)
        cr.move_to(node.x - extents.width / 2 - extents.x_bearing,
                   node.y - extents.height / 2 - extents.y_bearing)
        cr.show_text(node.label)
