"""A labelled button that triggers an action when selected."""

from __future__ import annotations

from typing import Callable, Optional

from .box import Box, InputHandler, MouseHandler, SetFocus
from .terminal import Align, Color, EventKey, EventMouse, Key, Screen, Style, print_styled, string_width

# Mouse actions are integers in a fixed order.
_MOUSE_LEFT_DOWN = 1
_MOUSE_LEFT_CLICK = 3

_CONTRAST_BACKGROUND = "blue"
_PRIMARY_TEXT = "white"
_INVERSE_TEXT = "blue"
_CONTRAST_SECONDARY_TEXT = "navy"


class Button(Box):
    """A labelled box that runs a callback when selected.

    Enter or a left click selects the button; Tab, Backtab and Escape leave
    it, reporting the key to the exit callback. A disabled button ignores
    all input.
    """

    def __init__(self, label: str) -> None:
        super().__init__()
        self.set_rect(0, 0, string_width(label) + 4, 1)
        self.label = label
        self.disabled = False
        self.style = Style(foreground=_PRIMARY_TEXT, background=_CONTRAST_BACKGROUND)
        self.activated_style = Style(foreground=_INVERSE_TEXT, background=_PRIMARY_TEXT)
        self.disabled_style = Style(
            foreground=_CONTRAST_SECONDARY_TEXT, background=_CONTRAST_BACKGROUND
        )
        self.on_selected: Optional[Callable[[], None]] = None
        self.on_exit: Optional[Callable[[Key], None]] = None

    def set_label_color(self, color: Color) -> Button:
        """Set the label color used when the button is not focused."""
        self.style = self.style.with_foreground(color)
        return self

    def set_label_color_activated(self, color: Color) -> Button:
        """Set the label color used when the button is focused."""
        self.activated_style = self.activated_style.with_foreground(color)
        return self

    def set_background_color_activated(self, color: Color) -> Button:
        """Set the background color used when the button is focused."""
        self.activated_style = self.activated_style.with_background(color)
        return self

    def draw(self, screen: Screen) -> None:
        style = self.disabled_style if self.disabled else self.style
        background = style.background
        saved_border_color: Optional[Color] = None
        highlighted = self.has_focus() and not self.disabled
        if highlighted:
            style = self.activated_style
            background = style.background
            saved_border_color = self.border_color
            self.border_color = background
        try:
            self.background_color = background
            self.draw_for_subclass(screen, self)

            x, y, width, height = self.inner_rect
            if width > 0 and height > 0:
                print_styled(screen, self.label, x, y + height // 2, width, Align.CENTER, style)
        finally:
            if highlighted:
                self.border_color = saved_border_color

    def input_handler(self) -> InputHandler:
        def handle(event: EventKey, set_focus: SetFocus) -> None:
            if self.disabled:
                return
            if event.key == Key.ENTER:
                if self.on_selected is not None:
                    self.on_selected()
            elif event.key in (Key.BACKTAB, Key.TAB, Key.ESCAPE):
                if self.on_exit is not None:
                    self.on_exit(event.key)

        return self.wrap_input_handler(handle)

    def mouse_handler(self) -> MouseHandler:
        def handle(action: int, event: EventMouse, set_focus: SetFocus):
            if self.disabled or not self.in_rect(*event.position()):
                return False, None
            if action == _MOUSE_LEFT_DOWN:
                set_focus(self)
                return True, None
            if action == _MOUSE_LEFT_CLICK:
                if self.on_selected is not None:
                    self.on_selected()
                return True, None
            return False, None

        return self.wrap_mouse_handler(handle)