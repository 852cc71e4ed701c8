"""The application: owns the screen, runs the event loop and draws the root."""

from __future__ import annotations

import queue
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .box import Primitive
from .mouse import MouseCapture, MouseDispatcher
from .terminal import EventError, EventKey, EventMouse, EventResize, Key, Screen

REDRAW_PAUSE = 0.05
"""Shortest time in seconds between two redraws caused by resizing."""

InputCapture = Callable[[EventKey], Optional[EventKey]]
BeforeDraw = Callable[[Screen], bool]
AfterDraw = Callable[[Screen], None]


@dataclass
class _Update:
    func: Callable[[], None]
    done: Optional[threading.Event] = None


class Application:
    """The top node of a user interface.

    It owns a screen, forwards key and mouse events to the root primitive,
    keeps track of the focused primitive and redraws the screen. Ctrl-C stops
    the application unless an input capture replaces or swallows it.

    Updates from other threads must go through queue_update() or
    queue_update_draw() so they run inside the event loop.
    """

    def __init__(self, screen_factory: Optional[Callable[[], Screen]] = None) -> None:
        self._screen_factory = screen_factory
        self._lock = threading.RLock()
        self._screen: Optional[Screen] = None
        self._focus: Optional[Primitive] = None
        self._root: Optional[Primitive] = None
        self._root_fullscreen = False
        self._mouse_enabled = False
        self._queue: queue.Queue = queue.Queue()
        self._replacement: queue.Queue = queue.Queue()
        self._mouse = MouseDispatcher()

        self.input_capture: Optional[InputCapture] = None
        self.before_draw: Optional[BeforeDraw] = None
        self.after_draw: Optional[AfterDraw] = None

    # Properties.

    @property
    def mouse_capture(self) -> Optional[MouseCapture]:
        """A function that may change or swallow mouse events before dispatch."""
        return self._mouse.mouse_capture

    @mouse_capture.setter
    def mouse_capture(self, capture: Optional[MouseCapture]) -> None:
        self._mouse.mouse_capture = capture

    @property
    def root(self) -> Optional[Primitive]:
        return self._root

    @property
    def focus(self) -> Optional[Primitive]:
        """The primitive that currently has the keyboard focus."""
        with self._lock:
            return self._focus

    @property
    def screen(self) -> Optional[Screen]:
        with self._lock:
            return self._screen

    # Screen handling.

    def set_screen(self, screen: Optional[Screen]) -> Application:
        """Use the given screen; while running, the current screen is replaced."""
        if screen is None:
            return self
        with self._lock:
            old = self._screen
            if old is None:
                self._screen = screen
        if old is None:
            screen.init()
            return self
        old.fini()
        self._replacement.put(screen)
        return self

    def enable_mouse(self, enable: bool) -> Application:
        """Turn mouse events on or off."""
        with self._lock:
            if enable != self._mouse_enabled and self._screen is not None:
                if enable:
                    self._screen.enable_mouse()
                else:
                    self._screen.disable_mouse()
            self._mouse_enabled = enable
        return self

    # The event loop.

    def run(self) -> None:
        """Run the event loop until stop() is called.

        Raises RuntimeError if there is no screen and no way to make one, and
        re-raises an EventError reported by the screen.
        """
        with self._lock:
            if self._screen is None:
                if self._screen_factory is None:
                    raise RuntimeError("no screen set and no screen factory given")
                screen = self._screen_factory()
                screen.init()
                if self._mouse_enabled:
                    screen.enable_mouse()
                self._screen = screen

        poller = threading.Thread(target=self._poll_events, daemon=True)
        try:
            self._draw()
            poller.start()
            app_error = self._event_loop()
        except BaseException:
            # Leave the terminal in a usable state before propagating.
            with self._lock:
                screen = self._screen
                self._screen = None
            if screen is not None:
                screen.fini()
                self._replacement.put(None)
            raise

        poller.join()
        with self._lock:
            self._screen = None
        if app_error is not None:
            raise app_error

    def _poll_events(self) -> None:
        while True:
            with self._lock:
                screen = self._screen
            if screen is None:
                self.queue_event(None)
                return

            event = screen.poll_event()
            if event is not None:
                self.queue_event(event)
                continue

            # The screen was finalized; wait for a replacement.
            screen = self._replacement.get()
            if screen is None:
                self.queue_event(None)
                return
            with self._lock:
                self._screen = screen
                mouse = self._mouse_enabled
            screen.init()
            if mouse:
                screen.enable_mouse()
            self._draw()

    def _event_loop(self) -> Optional[EventError]:
        app_error: Optional[EventError] = None
        last_redraw = 0.0
        redraw_timer: Optional[threading.Timer] = None
        try:
            while True:
                item = self._queue.get()
                if isinstance(item, _Update):
                    try:
                        item.func()
                    finally:
                        if item.done is not None:
                            item.done.set()
                    continue

                event = item
                if event is None:
                    break
                if isinstance(event, EventKey):
                    self._handle_key(event)
                elif isinstance(event, EventResize):
                    if time.monotonic() - last_redraw < REDRAW_PAUSE:
                        if redraw_timer is not None:
                            redraw_timer.cancel()
                        redraw_timer = threading.Timer(
                            REDRAW_PAUSE, self._queue.put, args=(event,)
                        )
                        redraw_timer.daemon = True
                        redraw_timer.start()
                    with self._lock:
                        screen = self._screen
                    if screen is None:
                        continue
                    last_redraw = time.monotonic()
                    screen.clear()
                    self._draw()
                elif isinstance(event, EventMouse):
                    with self._lock:
                        root = self._root
                    result = self._mouse.dispatch(event, root, self.set_focus)
                    if result.consumed:
                        self._draw()
                elif isinstance(event, EventError):
                    app_error = event
                    self.stop()
        finally:
            if redraw_timer is not None:
                redraw_timer.cancel()
        return app_error

    def _handle_key(self, event: EventKey) -> None:
        with self._lock:
            root = self._root
            capture = self.input_capture

        redraw = False
        original = event
        if capture is not None:
            event = capture(event)
            if event is None:
                self._draw()
                return
            redraw = True

        if event is original and event.key == Key.CTRL_C:
            self.stop()
            return

        if root is not None and root.has_focus():
            handler = root.input_handler()
            if handler is not None:
                handler(event, self.set_focus)
                redraw = True

        if redraw:
            self._draw()

    def stop(self) -> None:
        """Stop the application, making run() return."""
        with self._lock:
            screen = self._screen
            if screen is None:
                return
            self._screen = None
            screen.fini()
            self._replacement.put(None)

    def suspend(self, func: Callable[[], None]) -> bool:
        """Leave terminal mode, call func, then resume.

        Returns False without calling func if there is no screen or it could
        not be suspended.
        """
        with self._lock:
            screen = self._screen
        if screen is None:
            return False
        try:
            screen.suspend()
        except Exception:
            return False

        func()

        with self._lock:
            if self._screen is not screen:
                screen.fini()
                if self._screen is None:
                    return True
            else:
                screen.resume()
        return True

    # Drawing.

    def draw(self) -> Application:
        """Redraw the screen during the next cycle of the event loop."""
        self.queue_update(self._draw)
        return self

    def force_draw(self) -> Application:
        """Redraw the screen immediately, from the calling thread."""
        return self._draw()

    def _draw(self) -> Application:
        with self._lock:
            screen = self._screen
            root = self._root
            if screen is None or root is None:
                return self

            if self._root_fullscreen:
                width, height = screen.size()
                root.set_rect(0, 0, width, height)

            screen.clear()
            if self.before_draw is not None and self.before_draw(screen):
                screen.show()
                return self

            root.draw(screen)
            if self.after_draw is not None:
                self.after_draw(screen)
            screen.show()
        return self

    def sync(self) -> Application:
        """Resynchronise the whole screen during the next event cycle."""

        def resync() -> None:
            with self._lock:
                screen = self._screen
            if screen is not None:
                screen.sync()

        self._queue.put(_Update(resync))
        return self

    # Root and focus.

    def set_root(self, root: Optional[Primitive], fullscreen: bool) -> Application:
        """Set the root primitive, optionally sized to fill the screen, and focus it."""
        with self._lock:
            self._root = root
            self._root_fullscreen = fullscreen
            if self._screen is not None:
                self._screen.clear()
        self.set_focus(root)
        return self

    def resize_to_full_screen(self, primitive: Primitive) -> Application:
        """Resize the primitive to fill the entire screen."""
        with self._lock:
            screen = self._screen
        if screen is None:
            raise RuntimeError("no screen to take the size from")
        width, height = screen.size()
        primitive.set_rect(0, 0, width, height)
        return self

    def set_focus(self, primitive: Optional[Primitive]) -> Application:
        """Blur the focused primitive and give the focus to another one."""
        with self._lock:
            if self._focus is not None:
                self._focus.blur()
            self._focus = primitive
            if self._screen is not None:
                self._screen.hide_cursor()
        if primitive is not None:
            primitive.focus(self.set_focus)
        return self

    # Queues.

    def queue_update(self, func: Callable[[], None]) -> Application:
        """Run func inside the event loop and wait until it has finished."""
        done = threading.Event()
        self._queue.put(_Update(func, done))
        done.wait()
        return self

    def queue_update_draw(self, func: Callable[[], None]) -> Application:
        """Like queue_update(), followed by an immediate redraw."""

        def update() -> None:
            func()
            self._draw()

        return self.queue_update(update)

    def queue_event(self, event: object) -> Application:
        """Hand an event to the event loop."""
        self._queue.put(event)
        return self