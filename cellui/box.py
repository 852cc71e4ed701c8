"""The base primitive: a rectangle with an optional border and title."""

from __future__ import annotations

import abc
from typing import Callable, Optional

from .borders import BORDERS, HORIZONTAL_ELLIPSIS
from .terminal import (
    Align,
    AttrMask,
    Color,
    EventKey,
    EventMouse,
    Screen,
    Style,
    print_text,
)

Rect = tuple[int, int, int, int]
SetFocus = Callable[["Primitive"], None]
InputHandler = Callable[[EventKey, SetFocus], None]
MouseHandler = Callable[[int, EventMouse, SetFocus], tuple[bool, Optional["Primitive"]]]
InputCapture = Callable[[EventKey], Optional[EventKey]]
MouseCapture = Callable[[int, EventMouse], tuple[int, Optional[EventMouse]]]
DrawFunc = Callable[[Screen, int, int, int, int], Rect]

# Mouse actions are integers in a fixed order; the left button press is 1.
_MOUSE_LEFT_DOWN = 1

_BACKGROUND_COLOR = "black"
_BORDER_COLOR = "white"
_TITLE_COLOR = "white"


class Primitive(abc.ABC):
    """Anything that can be placed on a screen, drawn and given focus."""

    @abc.abstractmethod
    def draw(self, screen: Screen) -> None: ...

    @property
    @abc.abstractmethod
    def rect(self) -> Rect: ...

    @abc.abstractmethod
    def set_rect(self, x: int, y: int, width: int, height: int) -> None: ...

    @abc.abstractmethod
    def input_handler(self) -> Optional[InputHandler]: ...

    @abc.abstractmethod
    def mouse_handler(self) -> Optional[MouseHandler]: ...

    @abc.abstractmethod
    def focus(self, delegate: SetFocus) -> None: ...

    @abc.abstractmethod
    def blur(self) -> None: ...

    @abc.abstractmethod
    def has_focus(self) -> bool: ...


class Box(Primitive):
    """An empty rectangle with an optional border and title.

    Box holds no content of its own; other primitives build on it to get
    positioning, borders, focus handling and event capturing.
    """

    def __init__(self) -> None:
        self._x, self._y, self._width, self._height = 0, 0, 15, 10
        self._inner: Optional[Rect] = None
        self._padding = (0, 0, 0, 0)
        self._background_color: Color = _BACKGROUND_COLOR
        self._has_focus = False

        self.fill_background = True
        self.border = False
        self.border_style = Style(foreground=_BORDER_COLOR, background=_BACKGROUND_COLOR)
        self.title = ""
        self.title_color: Color = _TITLE_COLOR
        self.title_align = Align.CENTER

        self.on_focus: Optional[Callable[[], None]] = None
        self.on_blur: Optional[Callable[[], None]] = None
        self.input_capture: Optional[InputCapture] = None
        self.mouse_capture: Optional[MouseCapture] = None
        self.draw_func: Optional[DrawFunc] = None

    # Geometry.

    @property
    def rect(self) -> Rect:
        """The outer rectangle: x, y, width, height."""
        return self._x, self._y, self._width, self._height

    def set_rect(self, x: int, y: int, width: int, height: int) -> None:
        """Move and resize the box; the inner rectangle is recomputed."""
        self._x, self._y, self._width, self._height = x, y, width, height
        self._inner = None

    @property
    def padding(self) -> tuple[int, int, int, int]:
        """Padding inside the border: top, bottom, left, right."""
        return self._padding

    def set_border_padding(self, top: int, bottom: int, left: int, right: int) -> Box:
        """Set the space kept free between the border and the content."""
        self._padding = (top, bottom, left, right)
        return self

    @property
    def inner_rect(self) -> Rect:
        """The content area without border and padding, never negative in size."""
        if self._inner is not None:
            return self._inner
        x, y, width, height = self.rect
        if self.border:
            x, y, width, height = x + 1, y + 1, width - 2, height - 2
        top, bottom, left, right = self._padding
        return (
            x + left,
            y + top,
            max(width - left - right, 0),
            max(height - top - bottom, 0),
        )

    def in_rect(self, x: int, y: int) -> bool:
        """Return True if the point lies within the outer rectangle."""
        rect_x, rect_y, width, height = self.rect
        return rect_x <= x < rect_x + width and rect_y <= y < rect_y + height

    # Colors.

    @property
    def background_color(self) -> Color:
        return self._background_color

    @background_color.setter
    def background_color(self, color: Color) -> None:
        self._background_color = color
        self.border_style = self.border_style.with_background(color)

    @property
    def border_color(self) -> Color:
        return self.border_style.foreground

    @border_color.setter
    def border_color(self, color: Color) -> None:
        self.border_style = self.border_style.with_foreground(color)

    @property
    def border_attributes(self) -> AttrMask:
        return self.border_style.attributes

    @border_attributes.setter
    def border_attributes(self, attributes: AttrMask) -> None:
        self.border_style = self.border_style.with_attributes(attributes)

    # Event handling.

    def wrap_input_handler(self, input_handler: Optional[InputHandler]) -> InputHandler:
        """Return a key handler that applies the input capture first."""

        def handle(event: EventKey, set_focus: SetFocus) -> None:
            if self.input_capture is not None:
                event = self.input_capture(event)
            if event is not None and input_handler is not None:
                input_handler(event, set_focus)

        return handle

    def input_handler(self) -> InputHandler:
        return self.wrap_input_handler(None)

    def wrap_mouse_handler(self, mouse_handler: Optional[MouseHandler]) -> MouseHandler:
        """Return a mouse handler that applies the mouse capture first."""

        def handle(action, event, set_focus):
            if self.mouse_capture is not None:
                action, event = self.mouse_capture(action, event)
            if event is not None and mouse_handler is not None:
                return mouse_handler(action, event, set_focus)
            return False, None

        return handle

    def mouse_handler(self) -> MouseHandler:
        def handle(action, event, set_focus):
            if action == _MOUSE_LEFT_DOWN and self.in_rect(*event.position()):
                set_focus(self)
                return True, None
            return False, None

        return self.wrap_mouse_handler(handle)

    # Drawing.

    def draw(self, screen: Screen) -> None:
        self.draw_for_subclass(screen, self)

    def draw_for_subclass(self, screen: Screen, primitive: Primitive) -> None:
        """Draw the box, taking the border's focus look from primitive."""
        x, y, width, height = self.rect
        if width <= 0 or height <= 0:
            return

        if self.fill_background:
            background = Style(background=self._background_color)
            for row in range(y, y + height):
                for column in range(x, x + width):
                    screen.set_content(column, row, " ", None, background)

        if self.border and width >= 2 and height >= 2:
            self._draw_border(screen, primitive.has_focus())

        if self.draw_func is not None:
            self._inner = tuple(self.draw_func(screen, x, y, width, height))
        else:
            self._inner = None
            self._inner = self.inner_rect

    def _draw_border(self, screen: Screen, focused: bool) -> None:
        x, y, width, height = self.rect
        chars = BORDERS.pick(focused)
        style = self.border_style
        right, bottom = x + width - 1, y + height - 1
        for column in range(x + 1, right):
            screen.set_content(column, y, chars.horizontal, None, style)
            screen.set_content(column, bottom, chars.horizontal, None, style)
        for row in range(y + 1, bottom):
            screen.set_content(x, row, chars.vertical, None, style)
            screen.set_content(right, row, chars.vertical, None, style)
        screen.set_content(x, y, chars.top_left, None, style)
        screen.set_content(right, y, chars.top_right, None, style)
        screen.set_content(x, bottom, chars.bottom_left, None, style)
        screen.set_content(right, bottom, chars.bottom_right, None, style)

        if self.title and width >= 4:
            printed, _ = print_text(
                screen, self.title, x + 1, y, width - 2, self.title_align, self.title_color
            )
            if 0 < printed < len(self.title):
                x_ellipsis = x + 1 if self.title_align == Align.RIGHT else x + width - 2
                _, _, existing, _ = screen.get_content(x_ellipsis, y)
                print_text(
                    screen,
                    HORIZONTAL_ELLIPSIS,
                    x_ellipsis,
                    y,
                    1,
                    Align.LEFT,
                    existing.foreground,
                )

    # Focus.

    def focus(self, delegate: SetFocus) -> None:
        self._has_focus = True
        if self.on_focus is not None:
            self.on_focus()

    def blur(self) -> None:
        if self.on_blur is not None:
            self.on_blur()
        self._has_focus = False

    def has_focus(self) -> bool:
        return self._has_focus