"""A checkbox for boolean values."""

from __future__ import annotations

from typing import Callable, Optional

from .box import Box, InputHandler, MouseHandler, SetFocus
from .mouse import MouseAction
from .terminal import (
    Align,
    Color,
    EventKey,
    EventMouse,
    Key,
    Screen,
    Style,
    print_styled,
    print_text,
    string_width,
)

_SECONDARY_TEXT = "yellow"
_CONTRAST_BACKGROUND = "blue"
_PRIMARY_TEXT = "white"


class Checkbox(Box):
    """A box that can be checked and unchecked.

    Enter, the space bar or a left click on the checkbox's row toggles it.
    Tab, Backtab and Escape finish the input and are reported to the done
    and finished callbacks. A disabled checkbox ignores all input.

    The finished callback receives None instead of a key when the checkbox
    is left without a key press, for example because it was disabled.
    """

    def __init__(self) -> None:
        super().__init__()
        self.disabled = False
        self._checked = False
        self.label = ""
        self.label_width = 0
        self.label_color: Color = _SECONDARY_TEXT
        self.field_background_color: Color = _CONTRAST_BACKGROUND
        self.field_text_color: Color = _PRIMARY_TEXT
        self.checked_string = "X"
        self.on_changed: Optional[Callable[[bool], None]] = None
        self.on_done: Optional[Callable[[Key], None]] = None
        self.on_finished: Optional[Callable[[Optional[Key]], None]] = None

    @property
    def checked(self) -> bool:
        """Whether the box is checked; changing it notifies on_changed."""
        return self._checked

    @checked.setter
    def checked(self, checked: bool) -> None:
        if self._checked != checked:
            if self.on_changed is not None:
                self.on_changed(checked)
            self._checked = checked

    @property
    def field_width(self) -> int:
        return 1

    @property
    def field_height(self) -> int:
        return 1

    def set_form_attributes(
        self,
        label_width: int,
        label_color: Color,
        bg_color: Color,
        field_text_color: Color,
        field_bg_color: Color,
    ) -> Checkbox:
        """Apply the attributes shared by all items of a form."""
        self.label_width = label_width
        self.label_color = label_color
        self._background_color = bg_color
        self.field_text_color = field_text_color
        self.field_background_color = field_bg_color
        return self

    def set_disabled(self, disabled: bool) -> Checkbox:
        """Enable or disable the checkbox and report that it was left."""
        self.disabled = disabled
        if self.on_finished is not None:
            self.on_finished(None)
        return self

    def _toggle(self) -> None:
        self._checked = not self._checked
        if self.on_changed is not None:
            self.on_changed(self._checked)

    def focus(self, delegate: SetFocus) -> None:
        # A disabled form item offers nothing to do, so it is finished at once.
        if self.on_finished is not None and self.disabled:
            self.on_finished(None)
            return
        super().focus(delegate)

    def draw(self, screen: Screen) -> None:
        self.draw_for_subclass(screen, self)

        x, y, width, height = self.inner_rect
        if height < 1 or width <= 0:
            return

        if self.label_width > 0:
            label_width = min(self.label_width, width)
            print_text(screen, self.label, x, y, label_width, Align.LEFT, self.label_color)
            x += label_width
        else:
            _, drawn = print_text(screen, self.label, x, y, width, Align.LEFT, self.label_color)
            x += drawn

        field_background = self.background_color if self.disabled else self.field_background_color
        style = Style(foreground=self.field_text_color, background=field_background)
        if self.has_focus():
            style = Style(foreground=field_background, background=self.field_text_color)
        box_width = string_width(self.checked_string)
        text = self.checked_string if self._checked else " " * box_width
        print_styled(screen, text, x, y, box_width, Align.LEFT, style)

    def input_handler(self) -> InputHandler:
        def handle(event: EventKey, set_focus: SetFocus) -> None:
            if self.disabled:
                return
            key = event.key
            if key in (Key.RUNE, Key.ENTER):
                if key == Key.RUNE and event.rune != " ":
                    return
                self._toggle()
            elif key in (Key.TAB, Key.BACKTAB, Key.ESCAPE):
                if self.on_done is not None:
                    self.on_done(key)
                if self.on_finished is not None:
                    self.on_finished(key)

        return self.wrap_input_handler(handle)

    def mouse_handler(self) -> MouseHandler:
        def handle(action: int, event: EventMouse, set_focus: SetFocus):
            if self.disabled:
                return False, None
            x, y = event.position()
            _, rect_y, _, _ = self.inner_rect
            if not self.in_rect(x, y):
                return False, None
            consumed = False
            if y == rect_y:
                if action == MouseAction.LEFT_DOWN:
                    set_focus(self)
                    consumed = True
                elif action == MouseAction.LEFT_CLICK:
                    self._toggle()
                    consumed = True
            return consumed, None

        return self.wrap_mouse_handler(handle)