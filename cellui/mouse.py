"""Turning raw mouse events into semantic mouse actions."""

from __future__ import annotations

import time
from enum import IntEnum
from typing import Any, Callable, NamedTuple, Optional

from .terminal import ButtonMask, EventMouse

DOUBLE_CLICK_INTERVAL = 0.5
"""Longest time in seconds between two clicks that still makes a double click."""


class MouseAction(IntEnum):
    """What the mouse is logically doing."""

    MOVE = 0
    LEFT_DOWN = 1
    LEFT_UP = 2
    LEFT_CLICK = 3
    LEFT_DOUBLE_CLICK = 4
    MIDDLE_DOWN = 5
    MIDDLE_UP = 6
    MIDDLE_CLICK = 7
    MIDDLE_DOUBLE_CLICK = 8
    RIGHT_DOWN = 9
    RIGHT_UP = 10
    RIGHT_CLICK = 11
    RIGHT_DOUBLE_CLICK = 12
    SCROLL_UP = 13
    SCROLL_DOWN = 14
    SCROLL_LEFT = 15
    SCROLL_RIGHT = 16


class _ButtonActions(NamedTuple):
    button: ButtonMask
    down: MouseAction
    up: MouseAction
    click: MouseAction
    double_click: MouseAction


_BUTTONS = (
    _ButtonActions(
        ButtonMask.PRIMARY,
        MouseAction.LEFT_DOWN,
        MouseAction.LEFT_UP,
        MouseAction.LEFT_CLICK,
        MouseAction.LEFT_DOUBLE_CLICK,
    ),
    _ButtonActions(
        ButtonMask.MIDDLE,
        MouseAction.MIDDLE_DOWN,
        MouseAction.MIDDLE_UP,
        MouseAction.MIDDLE_CLICK,
        MouseAction.MIDDLE_DOUBLE_CLICK,
    ),
    _ButtonActions(
        ButtonMask.SECONDARY,
        MouseAction.RIGHT_DOWN,
        MouseAction.RIGHT_UP,
        MouseAction.RIGHT_CLICK,
        MouseAction.RIGHT_DOUBLE_CLICK,
    ),
)

_WHEELS = (
    (ButtonMask.WHEEL_UP, MouseAction.SCROLL_UP),
    (ButtonMask.WHEEL_DOWN, MouseAction.SCROLL_DOWN),
    (ButtonMask.WHEEL_LEFT, MouseAction.SCROLL_LEFT),
    (ButtonMask.WHEEL_RIGHT, MouseAction.SCROLL_RIGHT),
)

_DOWN_ACTIONS = frozenset(
    (MouseAction.LEFT_DOWN, MouseAction.MIDDLE_DOWN, MouseAction.RIGHT_DOWN)
)

MouseCapture = Callable[
    [Optional[EventMouse], MouseAction], tuple[Optional[EventMouse], MouseAction]
]


class DispatchResult(NamedTuple):
    """Outcome of dispatching one mouse event."""

    consumed: bool
    mouse_down: bool


class MouseDispatcher:
    """Derive mouse actions from raw events and hand them to primitives.

    The dispatcher remembers the last position, button state and click time
    so it can report moves, presses, releases, clicks, double clicks and
    wheel turns. A primitive whose handler returns a capturing primitive has
    the following actions routed to that primitive instead of the root.
    """

    def __init__(self, double_click_interval: float = DOUBLE_CLICK_INTERVAL) -> None:
        self.double_click_interval = double_click_interval
        self.mouse_capture: Optional[MouseCapture] = None
        self.capturing_primitive: Any = None
        self.last_position = (0, 0)
        self.down_position = (0, 0)
        self.last_buttons = ButtonMask.NONE
        self.last_click: Optional[float] = None

    def dispatch(
        self,
        event: EventMouse,
        root: Any,
        set_focus: Callable[[Any], None],
        now: Optional[float] = None,
    ) -> DispatchResult:
        """Fire the actions the event implies; now is a monotonic time in seconds."""
        if now is None:
            now = time.monotonic()
        consumed = False
        mouse_down = False
        target = None
        current: Optional[EventMouse] = event

        def fire(action: MouseAction) -> None:
            nonlocal consumed, mouse_down, target, current
            if action in _DOWN_ACTIONS:
                mouse_down = True

            if self.mouse_capture is not None:
                current, action = self.mouse_capture(current, action)
                if current is None:
                    consumed = True
                    return

            if self.capturing_primitive is not None:
                primitive = target = self.capturing_primitive
            elif target is not None:
                primitive = target
            else:
                primitive = root

            capture = None
            if primitive is not None:
                handler = primitive.mouse_handler()
                if handler is not None:
                    was_consumed, capture = handler(action, current, set_focus)
                    if was_consumed:
                        consumed = True
            self.capturing_primitive = capture

        position = event.position()
        buttons = ButtonMask(event.buttons)
        click_moved = position != self.down_position
        changes = buttons ^ self.last_buttons

        if position != self.last_position:
            fire(MouseAction.MOVE)
            self.last_position = position

        for actions in _BUTTONS:
            if not changes & actions.button:
                continue
            if buttons & actions.button:
                fire(actions.down)
                continue
            fire(actions.up)
            if click_moved or current is None:
                continue
            if self.last_click is None or self.last_click + self.double_click_interval < now:
                fire(actions.click)
                self.last_click = now
            else:
                fire(actions.double_click)
                self.last_click = None

        for button, action in _WHEELS:
            if buttons & button:
                fire(action)

        self.last_buttons = buttons
        if mouse_down:
            self.down_position = position
        return DispatchResult(consumed, mouse_down)