"""MindPad - a radial mind-map editor with Markdown notes."""

__version__ = "1.0.0"
__app_id__ = "io.github.mindpad.MindPad"
