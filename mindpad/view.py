"""Zoom and pan state for a MindPad canvas."""

from dataclasses import dataclass
from typing import Tuple

MIN_ZOOM = 0.1
MAX_ZOOM = 5.0
WHEEL_ZOOM_STEP = 0.1
FOCUS_ZOOM_FACTOR = 1.5
FOCUS_MAX_ZOOM = 2.0
ZOOM_EPSILON = 0.001
PAN_EPSILON = 0.5


@dataclass
class ViewState:
    """World-to-screen transform plus the targets it is easing toward.

    ``screen = world * zoom + pan``. Changes that should animate set the
    ``target_*`` fields and rely on :meth:`step` being called once per
    frame; direct manipulation (dragging) moves both at once.
    """
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    target_zoom: float = 1.0
    target_pan_x: float = 0.0
    target_pan_y: float = 0.0
    zoom_smoothness: float = 0.15
    pan_smoothness: float = 0.15

    def to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        """Convert canvas (screen) coordinates to map coordinates."""
        return (sx - self.pan_x) / self.zoom, (sy - self.pan_y) / self.zoom

    def to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        """Convert map coordinates to canvas (screen) coordinates."""
        return wx * self.zoom + self.pan_x, wy * self.zoom + self.pan_y

    @property
    def is_animating(self) -> bool:
        return (abs(self.zoom - self.target_zoom) > ZOOM_EPSILON
                or abs(self.pan_x - self.target_pan_x) > PAN_EPSILON
                or abs(self.pan_y - self.target_pan_y) > PAN_EPSILON)

    def reset(self):
        """Return to 100% zoom with no pan."""
        self.zoom = self.target_zoom = 1.0
        self.pan_x = self.target_pan_x = 0.0
        self.pan_y = self.target_pan_y = 0.0

    def pan_by(self, dx: float, dy: float):
        """Move the view immediately, cancelling any pan animation."""
        self.pan_x += dx
        self.pan_y += dy
        self.target_pan_x = self.pan_x
        self.target_pan_y = self.pan_y

    def zoom_at(self, sx: float, sy: float, direction: int):
        """Zoom in (direction > 0) or out toward the screen point ``(sx, sy)``."""
        wx, wy = self.to_world(sx, sy)
        delta = WHEEL_ZOOM_STEP if direction > 0 else -WHEEL_ZOOM_STEP
        self.target_zoom = max(MIN_ZOOM, min(MAX_ZOOM, self.zoom * (1 + delta)))

        # Keep the point under the cursor fixed once the zoom settles.
        self.target_pan_x = sx - wx * self.target_zoom
        self.target_pan_y = sy - wy * self.target_zoom

    def center_on(self, wx: float, wy: float, width: float, height: float,
                  animate: bool = True):
        """Bring the map point ``(wx, wy)`` to the middle of the canvas."""
        self.target_pan_x = width / 2 - wx * self.target_zoom
        self.target_pan_y = height / 2 - wy * self.target_zoom
        if not animate:
            self.zoom = self.target_zoom
            self.pan_x = self.target_pan_x
            self.pan_y = self.target_pan_y

    def focus(self, wx: float, wy: float, width: float, height: float):
        """Zoom in on a point, as on double-click."""
        self.target_zoom = min(FOCUS_MAX_ZOOM, self.zoom * FOCUS_ZOOM_FACTOR)
        self.center_on(wx, wy, width, height)

    def fit(self, bounds: Tuple[float, float, float, float],
            width: float, height: float, padding: float = 50.0):
        """Ease toward a zoom and pan that shows ``bounds`` in full.

        Never zooms in past 100%.
        """
        min_x, min_y, max_x, max_y = bounds
        min_x -= padding
        min_y -= padding
        max_x += padding
        max_y += padding

        span_x = max_x - min_x
        span_y = max_y - min_y
        zoom = 1.0
        if width > 0 and height > 0:
            zoom = min(width / span_x, height / span_y, 1.0)
        self.target_zoom = max(MIN_ZOOM, zoom)

        self.center_on((min_x + max_x) / 2, (min_y + max_y) / 2, width, height)

    def step(self) -> bool:
        """Advance one animation frame. Returns True while still animating."""
        animating = False

        if abs(self.zoom - self.target_zoom) > ZOOM_EPSILON:
            self.zoom += (self.target_zoom - self.zoom) * self.zoom_smoothness
            animating = True

        if (abs(self.pan_x - self.target_pan_x) > PAN_EPSILON
                or abs(self.pan_y - self.target_pan_y) > PAN_EPSILON):
            self.pan_x += (self.target_pan_x - self.pan_x) * self.pan_smoothness
            self.pan_y += (self.target_pan_y - self.pan_y) * self.pan_smoothness
            animating = True

        return animating
