"""Terminal building blocks: styles, keys, events, screens and text output."""

from __future__ import annotations

import abc
import queue
import threading
from dataclasses import dataclass, replace
from enum import IntEnum, IntFlag
from typing import NamedTuple, Optional, Sequence

from wcwidth import wcwidth

Color = Optional[str]
"""A color name, a "#rrggbb" string, or None for the terminal default."""


class Align(IntEnum):
    """Horizontal text alignment."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2


class AttrMask(IntFlag):
    """Text attributes that can be combined."""

    NONE = 0
    BOLD = 1
    BLINK = 2
    REVERSE = 4
    UNDERLINE = 8
    DIM = 16
    ITALIC = 32
    STRIKETHROUGH = 64


@dataclass(frozen=True)
class Style:
    """An immutable combination of colors and attributes."""

    foreground: Color = None
    background: Color = None
    attributes: AttrMask = AttrMask.NONE

    def with_foreground(self, color: Color) -> Style:
        return replace(self, foreground=color)

    def with_background(self, color: Color) -> Style:
        return replace(self, background=color)

    def with_attributes(self, attributes: AttrMask) -> Style:
        return replace(self, attributes=AttrMask(attributes))

    def decompose(self) -> tuple[Color, Color, AttrMask]:
        """Return foreground, background and attributes."""
        return self.foreground, self.background, self.attributes


class Key(IntEnum):
    """Keys reported by key events."""

    CTRL_C = 3
    BACKSPACE = 8
    TAB = 9
    ENTER = 13
    CTRL_N = 14
    CTRL_P = 16
    ESCAPE = 27
    BACKSPACE2 = 127
    RUNE = 256
    UP = 257
    DOWN = 258
    RIGHT = 259
    LEFT = 260
    PG_UP = 266
    PG_DN = 267
    HOME = 268
    END = 269
    INSERT = 270
    DELETE = 271
    BACKTAB = 278
    F1 = 279


class ModMask(IntFlag):
    """Keyboard modifiers."""

    NONE = 0
    SHIFT = 1
    CTRL = 2
    ALT = 4
    META = 8


class ButtonMask(IntFlag):
    """Mouse buttons and wheel directions."""

    NONE = 0
    PRIMARY = 1
    SECONDARY = 2
    MIDDLE = 4
    WHEEL_UP = 0x100
    WHEEL_DOWN = 0x200
    WHEEL_LEFT = 0x400
    WHEEL_RIGHT = 0x800


@dataclass(eq=False)
class EventKey:
    """A key press. Events compare by identity."""

    key: Key
    rune: str = ""
    modifiers: ModMask = ModMask.NONE


@dataclass(eq=False)
class EventMouse:
    """A mouse state change at a screen position."""

    x: int
    y: int
    buttons: ButtonMask = ButtonMask.NONE
    modifiers: ModMask = ModMask.NONE

    def position(self) -> tuple[int, int]:
        return self.x, self.y


@dataclass(eq=False)
class EventResize:
    """The screen changed its size."""

    width: int
    height: int

    def size(self) -> tuple[int, int]:
        return self.width, self.height


class EventError(Exception):
    """An error reported by the screen through its event queue."""


class Screen(abc.ABC):
    """The drawing surface and event source used by primitives."""

    @abc.abstractmethod
    def init(self) -> None: ...

    @abc.abstractmethod
    def fini(self) -> None: ...

    @abc.abstractmethod
    def size(self) -> tuple[int, int]: ...

    @abc.abstractmethod
    def set_content(
        self, x: int, y: int, char: str, combining: Optional[Sequence[str]], style: Style
    ) -> None: ...

    @abc.abstractmethod
    def get_content(self, x: int, y: int) -> tuple[str, tuple[str, ...], Style, int]: ...

    @abc.abstractmethod
    def clear(self) -> None: ...

    @abc.abstractmethod
    def show(self) -> None: ...

    @abc.abstractmethod
    def sync(self) -> None: ...

    @abc.abstractmethod
    def hide_cursor(self) -> None: ...

    @abc.abstractmethod
    def enable_mouse(self) -> None: ...

    @abc.abstractmethod
    def disable_mouse(self) -> None: ...

    @abc.abstractmethod
    def suspend(self) -> None: ...

    @abc.abstractmethod
    def resume(self) -> None: ...

    @abc.abstractmethod
    def post_event(self, event: object) -> None: ...

    @abc.abstractmethod
    def poll_event(self) -> object: ...


class _Cell(NamedTuple):
    char: str
    combining: tuple[str, ...]
    style: Style


_BLANK = _Cell(" ", (), Style())


def _char_width(char: str) -> int:
    width = wcwidth(char)
    return width if width > 0 else 0


class MemoryScreen(Screen):
    """A screen kept entirely in memory, useful for headless use and tests."""

    def __init__(self, width: int = 80, height: int = 25) -> None:
        self._width = width
        self._height = height
        self._cells: dict[tuple[int, int], _Cell] = {}
        self._events: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self.initialized = False
        self.finalized = False
        self.mouse_enabled = False
        self.suspended = False
        self.cursor_visible = True
        self.show_count = 0
        self.sync_count = 0

    def init(self) -> None:
        pending = []
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                break
            if event is not None:
                pending.append(event)
        for event in pending:
            self._events.put(event)
        with self._lock:
            self._cells.clear()
        self.initialized = True
        self.finalized = False

    def fini(self) -> None:
        self.initialized = False
        self.finalized = True
        self._events.put(None)

    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def set_size(self, width: int, height: int) -> None:
        with self._lock:
            self._width, self._height = width, height
            self._cells = {
                pos: cell
                for pos, cell in self._cells.items()
                if pos[0] < width and pos[1] < height
            }
        if self.initialized:
            self._events.put(EventResize(width, height))

    def set_content(self, x, y, char, combining, style) -> None:
        if 0 <= x < self._width and 0 <= y < self._height:
            with self._lock:
                self._cells[(x, y)] = _Cell(char, tuple(combining or ()), style)

    def get_content(self, x, y) -> tuple[str, tuple[str, ...], Style, int]:
        with self._lock:
            cell = self._cells.get((x, y), _BLANK)
        return cell.char, cell.combining, cell.style, max(_char_width(cell.char), 1)

    def clear(self) -> None:
        with self._lock:
            self._cells.clear()

    def show(self) -> None:
        self.show_count += 1

    def sync(self) -> None:
        self.sync_count += 1

    def hide_cursor(self) -> None:
        self.cursor_visible = False

    def enable_mouse(self) -> None:
        self.mouse_enabled = True

    def disable_mouse(self) -> None:
        self.mouse_enabled = False

    def suspend(self) -> None:
        self.suspended = True

    def resume(self) -> None:
        self.suspended = False

    def post_event(self, event) -> None:
        if event is None:
            raise ValueError("cannot post an empty event")
        self._events.put(event)

    def poll_event(self):
        """Block until an event arrives; return None once finalized."""
        event = self._events.get()
        if event is None:
            self._events.put(None)
        return event

    def row_text(self, y: int) -> str:
        """Return the characters shown in row y, wide characters counted once."""
        if not 0 <= y < self._height:
            raise IndexError(f"row {y} outside screen")
        chars = []
        skip = 0
        for x in range(self._width):
            if skip:
                skip -= 1
                continue
            char, combining, _, width = self.get_content(x, y)
            chars.append(char + "".join(combining))
            skip = width - 1
        return "".join(chars)


class _Cluster(NamedTuple):
    base: str
    combining: tuple[str, ...]
    width: int


def _clusters(text: str) -> list[_Cluster]:
    clusters: list[_Cluster] = []
    for char in text:
        width = _char_width(char)
        if width == 0:
            if clusters:
                last = clusters[-1]
                clusters[-1] = last._replace(combining=last.combining + (char,))
        else:
            clusters.append(_Cluster(char, (), width))
    return clusters


def string_width(text: str) -> int:
    """Return the number of screen cells the text occupies."""
    return sum(_char_width(char) for char in text)


def _print(screen, text, x, y, max_width, align, style, maintain_background):
    if max_width <= 0:
        return 0, 0
    clusters = _clusters(text)
    total = sum(cluster.width for cluster in clusters)
    trim_front = align == Align.RIGHT
    while total > max_width and clusters:
        removed = clusters.pop(0) if trim_front else clusters.pop()
        total -= removed.width
        if align == Align.CENTER:
            trim_front = not trim_front
    if align == Align.RIGHT:
        x += max_width - total
    elif align == Align.CENTER:
        x += (max_width - total) // 2
    printed = 0
    for cluster in clusters:
        cell_style = style
        if maintain_background:
            _, _, existing, _ = screen.get_content(x, y)
            cell_style = style.with_background(existing.background)
        screen.set_content(x, y, cluster.base, cluster.combining, cell_style)
        x += cluster.width
        printed += 1 + len(cluster.combining)
    return printed, total


def print_styled(screen, text, x, y, max_width, align, style) -> tuple[int, int]:
    """Print text within max_width cells; return characters printed and width used."""
    return _print(screen, text, x, y, max_width, align, style, False)


def print_text(screen, text, x, y, max_width, align, color) -> tuple[int, int]:
    """Print text in a color, keeping the background already on screen."""
    return _print(screen, text, x, y, max_width, align, Style(foreground=color), True)