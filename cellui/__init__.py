"""Boxes, buttons, checkboxes, flex layout, mouse dispatch and an event loop for cell-based terminal interfaces."""

__version__ = "0.1.0"

__all__ = [
    "ansi",
    "application",
    "borders",
    "box",
    "button",
    "checkbox",
    "flex",
    "mouse",
    "terminal",
]