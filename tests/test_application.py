import threading
import time

import pytest

from cellui.application import Application
from cellui.box import Box
from cellui.flex import Flex
from cellui.terminal import ButtonMask, EventError, EventKey, EventMouse, Key, MemoryScreen


def wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


@pytest.fixture
def start():
    started = []

    def run(app):
        result = {}

        def target():
            try:
                app.run()
            except BaseException as error:  # noqa: BLE001
                result["error"] = error

        thread = threading.Thread(target=target, daemon=True)
        thread.start()
        started.append((app, thread))
        return thread, result

    yield run
    for app, thread in started:
        app.stop()
        thread.join(2)


def test_force_draw_resizes_fullscreen_root():
    screen = MemoryScreen(20, 5)
    app = Application().set_screen(screen)
    box = Box()
    app.set_root(box, True).force_draw()
    assert box.rect == (0, 0, 20, 5)
    assert screen.show_count == 1


def test_force_draw_without_screen_leaves_root_alone():
    app = Application()
    box = Box()
    app.set_root(box, True).force_draw()
    assert box.rect == (0, 0, 15, 10)


def test_set_root_gives_focus_and_set_focus_blurs_previous():
    app = Application()
    first, second = Box(), Box()
    app.set_root(first, True)
    assert app.focus is first
    assert first.has_focus()
    app.set_focus(second)
    assert not first.has_focus()
    assert second.has_focus()
    assert app.focus is second


def test_before_draw_returning_true_skips_root():
    screen = MemoryScreen(10, 3)
    app = Application().set_screen(screen)
    box = Box()
    box.border = True
    calls = []
    app.before_draw = lambda s: calls.append(s) or True
    app.after_draw = lambda s: calls.append("after")
    app.set_root(box, True).force_draw()
    assert calls == [screen]
    assert screen.get_content(0, 0)[0] == " "
    assert screen.show_count == 1


def test_after_draw_sees_drawn_root():
    screen = MemoryScreen(10, 3)
    app = Application().set_screen(screen)
    box = Box()
    box.border = True
    seen = []
    app.after_draw = lambda s: seen.append(s.get_content(0, 0)[0])
    app.set_root(box, True)
    app.set_focus(None)
    app.force_draw()
    assert seen == ["\u250c"]


def test_set_screen_none_is_ignored_and_set_screen_inits():
    app = Application()
    assert app.set_screen(None) is app
    assert app.screen is None
    screen = MemoryScreen()
    app.set_screen(screen)
    assert screen.initialized
    assert app.screen is screen


def test_enable_mouse_toggles_screen():
    screen = MemoryScreen()
    app = Application().set_screen(screen)
    app.enable_mouse(True)
    assert screen.mouse_enabled
    app.enable_mouse(False)
    assert not screen.mouse_enabled


def test_run_without_screen_raises():
    with pytest.raises(RuntimeError):
        Application().run()


def test_run_uses_screen_factory_and_stops(start):
    screen = MemoryScreen(12, 4)
    app = Application(screen_factory=lambda: screen)
    app.enable_mouse(True)
    thread, result = start(app)
    assert wait_for(lambda: screen.initialized)
    assert screen.mouse_enabled
    app.stop()
    thread.join(2)
    assert not thread.is_alive()
    assert screen.finalized
    assert result == {}


def test_resize_to_full_screen():
    app = Application()
    box = Box()
    with pytest.raises(RuntimeError):
        app.resize_to_full_screen(box)
    app.set_screen(MemoryScreen(33, 7))
    app.resize_to_full_screen(box)
    assert box.rect == (0, 0, 33, 7)


def test_suspend_without_screen_does_not_call():
    calls = []
    assert Application().suspend(lambda: calls.append(1)) is False
    assert calls == []


def test_suspend_calls_function_and_resumes():
    screen = MemoryScreen()
    app = Application().set_screen(screen)
    during = []
    assert app.suspend(lambda: during.append(screen.suspended)) is True
    assert during == [True]
    assert screen.suspended is False


def test_ctrl_c_stops_application(start):
    screen = MemoryScreen()
    app = Application().set_screen(screen)
    thread, result = start(app)
    screen.post_event(EventKey(Key.CTRL_C))
    thread.join(2)
    assert not thread.is_alive()
    assert screen.finalized
    assert result == {}


def test_input_capture_can_swallow_ctrl_c(start):
    screen = MemoryScreen()
    app = Application().set_screen(screen)
    captured = []
    seen = threading.Event()

    def capture(event):
        captured.append(event.key)
        seen.set()
        return None

    app.input_capture = capture
    thread, _ = start(app)
    screen.post_event(EventKey(Key.CTRL_C))
    assert seen.wait(2)
    app.queue_update(lambda: None)
    assert captured == [Key.CTRL_C]
    assert not screen.finalized
    assert thread.is_alive()


def test_replaced_ctrl_c_is_forwarded_to_root(start):
    screen = MemoryScreen()
    app = Application().set_screen(screen)
    box = Box()
    received = []
    done = threading.Event()

    def box_capture(event):
        received.append(event.key)
        done.set()
        return event

    box.input_capture = box_capture
    app.set_root(box, True)
    app.input_capture = lambda event: EventKey(Key.CTRL_C)
    start(app)
    screen.post_event(EventKey(Key.CTRL_C))
    assert done.wait(2)
    assert received == [Key.CTRL_C]
    assert not screen.finalized


def test_key_forwarded_to_root(start):
    screen = MemoryScreen()
    app = Application().set_screen(screen)
    box = Box()
    received = []
    done = threading.Event()
    box.input_capture = lambda event: received.append(event) or done.set() or event
    app.set_root(box, True)
    start(app)
    key = EventKey(Key.ENTER)
    screen.post_event(key)
    assert done.wait(2)
    assert received == [key]


def test_queue_update_runs_in_loop_thread(start):
    app = Application().set_screen(MemoryScreen())
    thread, _ = start(app)
    ran_in = []
    app.queue_update(lambda: ran_in.append(threading.current_thread()))
    assert ran_in == [thread]


def test_queue_update_draw_and_draw_show_screen(start):
    screen = MemoryScreen(8, 2)
    app = Application().set_screen(screen)
    app.set_root(Box(), True)
    start(app)
    app.queue_update(lambda: None)
    before = screen.show_count
    app.queue_update_draw(lambda: None)
    assert screen.show_count == before + 1
    app.draw()
    assert screen.show_count == before + 2


def test_sync_reaches_screen(start):
    screen = MemoryScreen()
    app = Application().set_screen(screen)
    start(app)
    app.sync()
    app.queue_update(lambda: None)
    assert screen.sync_count == 1


def test_event_error_is_raised_by_run(start):
    screen = MemoryScreen()
    app = Application().set_screen(screen)
    thread, result = start(app)
    screen.post_event(EventError("boom"))
    thread.join(2)
    assert not thread.is_alive()
    assert isinstance(result["error"], EventError)
    assert str(result["error"]) == "boom"
    assert screen.finalized


def test_mouse_press_focuses_clicked_box(start):
    screen = MemoryScreen(20, 4)
    app = Application().set_screen(screen).enable_mouse(True)
    left, right = Box(), Box()
    focused = threading.Event()
    right.on_focus = focused.set
    flex = Flex().add_item(left, 0, 1).add_item(right, 0, 1)
    app.set_root(flex, True)
    start(app)
    app.queue_update(lambda: None)
    screen.post_event(EventMouse(15, 1, ButtonMask.PRIMARY))
    assert focused.wait(2)
    assert app.focus is right


def test_screen_replacement_while_running(start):
    old = MemoryScreen(10, 3)
    app = Application().set_screen(old)
    box = Box()
    app.set_root(box, True)
    start(app)
    app.queue_update(lambda: None)
    new = MemoryScreen(30, 4)
    app.set_screen(new)
    assert wait_for(lambda: new.initialized)
    app.queue_update_draw(lambda: None)
    assert old.finalized
    assert app.screen is new
    assert box.rect == (0, 0, 30, 4)


def test_resize_event_redraws_root(start):
    screen = MemoryScreen(10, 3)
    app = Application().set_screen(screen)
    box = Box()
    app.set_root(box, True)
    resized = threading.Event()
    app.after_draw = lambda s: resized.set() if s.size() == (25, 6) else None
    start(app)
    app.queue_update(lambda: None)
    screen.set_size(25, 6)
    assert resized.wait(2)
    assert box.rect == (0, 0, 25, 6)