"""Canvas widget for rendering a MindPad session."""

import math
from typing import Callable, Optional

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Gdk", "4.0")
from gi.repository import Gtk, Gdk

from mindpad.export import MindMapExporter
from mindpad.session import MindMapSession


class MindMapCanvas(Gtk.DrawingArea):
    """Draws the session's tree and turns pointer input into session calls."""

    GRID_SIZE = 50
    MAJOR_GRID_EVERY = 5

    def __init__(self, session: MindMapSession):
        super().__init__()

        self.session = session
        self.painter = MindMapExporter()
        self.show_grid = session.settings.show_grid

        self._tick_id: Optional[int] = None
        self._drag_last_x = 0.0
        self._drag_last_y = 0.0

        # Callbacks
        self.on_add_requested: Optional[Callable[[], None]] = None

        self.set_draw_func(self._on_draw)
        self.set_focusable(True)
        self.set_can_focus(True)
        self.set_hexpand(True)
        self.set_vexpand(True)

        self._setup_event_controllers()
        self.connect("resize", self._on_resize)

    def _setup_event_controllers(self):
        """Setup mouse and keyboard event controllers."""
        click_ctrl = Gtk.GestureClick()
        click_ctrl.set_button(1)
        click_ctrl.connect("pressed", self._on_click)
        self.add_controller(click_ctrl)

        scroll_ctrl = Gtk.EventControllerScroll()
        scroll_ctrl.set_flags(Gtk.EventControllerScrollFlags.VERTICAL)
        scroll_ctrl.connect("scroll", self._on_scroll)
        self.add_controller(scroll_ctrl)

        motion_ctrl = Gtk.EventControllerMotion()
        motion_ctrl.connect("motion", self._on_motion)
        self.add_controller(motion_ctrl)

        key_ctrl = Gtk.EventControllerKey()
        key_ctrl.connect("key-pressed", self._on_key_pressed)
        self.add_controller(key_ctrl)

        drag_ctrl = Gtk.GestureDrag()
        drag_ctrl.set_button(1)
        drag_ctrl.connect("drag-begin", self._on_drag_begin)
        drag_ctrl.connect("drag-update", self._on_drag_update)
        self.add_controller(drag_ctrl)

        self.last_mouse_x = 0.0
        self.last_mouse_y = 0.0

    # ==================== Drawing ====================

    def _on_draw(self, area, cr, width, height):
        """Main drawing function."""
        view = self.session.view

        cr.set_source_rgb(*self.painter.COLORS['background'])
        cr.paint()

        if self.show_grid:
            self._draw_grid(cr, width, height)

        cr.save()
        cr.translate(view.pan_x, view.pan_y)
        cr.scale(view.zoom, view.zoom)
        self.painter.paint(cr, self.session.tree, selected=self.session.selected,
                           line_scale=view.zoom)
        cr.restore()

        # Zoom indicator (not affected by zoom/pan)
        cr.set_source_rgba(0, 0, 0, 0.5)
        cr.set_font_size(12)
        cr.move_to(10, 22)
        cr.show_text(f"Zoom: {round(view.zoom * 100)}%")

    def _draw_grid(self, cr, width: float, height: float):
        """Draw grid lines across the visible part of the map."""
        view = self.session.view
        left, top = view.to_world(0, 0)
        right, bottom = view.to_world(width, height)

        size = self.GRID_SIZE
        start_x = math.floor(left / size) * size
        start_y = math.floor(top / size) * size
        end_x = math.ceil(right / size) * size
        end_y = math.ceil(bottom / size) * size

        cr.save()
        cr.translate(view.pan_x, view.pan_y)
        cr.scale(view.zoom, view.zoom)

        x = start_x
        while x <= end_x:
            major = round(x / size) % self.MAJOR_GRID_EVERY == 0
            self._grid_line(cr, major, x, start_y, x, end_y)
            x += size

        y = start_y
        while y <= end_y:
            major = round(y / size) % self.MAJOR_GRID_EVERY == 0
            self._grid_line(cr, major, start_x, y, end_x, y)
            y += size

        cr.restore()

    @staticmethod
    def _grid_line(cr, major: bool, x1: float, y1: float, x2: float, y2: float):
        if major:
            cr.set_source_rgba(0.59, 0.59, 0.59, 0.2)
            cr.set_line_width(0.5)
        else:
            cr.set_source_rgba(0.78, 0.78, 0.78, 0.1)
            cr.set_line_width(0.2)
        cr.move_to(x1, y1)
        cr.line_to(x2, y2)
        cr.stroke()

    def refresh(self):
        """Redraw and start easing the view if it has somewhere to go."""
        self.queue_draw()
        if self.session.view.is_animating and self._tick_id is None:
            self._tick_id = self.add_tick_callback(self._on_tick)

    def _on_tick(self, widget, frame_clock) -> bool:
        still_animating = self.session.view.step()
        self.queue_draw()
        if not still_animating:
            self._tick_id = None
        return still_animating

    # ==================== Input ====================

    def _on_resize(self, area, width, height):
        self.session.resize(width, height)
        self.refresh()

    def _on_click(self, gesture, n_press, x, y):
        """Select on single click, focus on double click."""
        self.grab_focus()

        if n_press == 2:
            self.session.focus_at(x, y)
        else:
            self.session.select_at(x, y)
        self.refresh()

    def _on_motion(self, controller, x, y):
        self.last_mouse_x = x
        self.last_mouse_y = y

    def _on_scroll(self, controller, dx, dy):
        """Zoom toward the pointer."""
        if dy == 0:
            return False
        self.session.view.zoom_at(self.last_mouse_x, self.last_mouse_y, 1 if dy < 0 else -1)
        self.refresh()
        return True

    def _on_drag_begin(self, gesture, start_x, start_y):
        self._drag_last_x = 0.0
        self._drag_last_y = 0.0

    def _on_drag_update(self, gesture, offset_x, offset_y):
        """Pan by the pointer movement since the last update."""
        self.session.view.pan_by(offset_x - self._drag_last_x, offset_y - self._drag_last_y)
        self._drag_last_x = offset_x
        self._drag_last_y = offset_y
        self.queue_draw()

    def _on_key_pressed(self, controller, keyval, keycode, state):
        """Handle canvas-local keys."""
        if keyval in (Gdk.KEY_Tab, Gdk.KEY_Insert):
            if self.on_add_requested:
                self.on_add_requested()
            return True
        return False
