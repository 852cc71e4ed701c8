import pytest

from cellui.borders import BORDERS, HORIZONTAL_ELLIPSIS
from cellui.box import Box, Primitive
from cellui.terminal import (
    Align,
    AttrMask,
    EventKey,
    EventMouse,
    Key,
    MemoryScreen,
    Style,
)

LEFT_DOWN = 1
MOVE = 0


def _bordered(x, y, width, height, title=""):
    box = Box()
    box.set_rect(x, y, width, height)
    box.border = True
    box.title = title
    return box


def test_primitive_is_abstract():
    with pytest.raises(TypeError):
        Primitive()


def test_default_rect():
    assert Box().rect == (0, 0, 15, 10)


def test_set_rect_round_trip():
    box = Box()
    box.set_rect(3, 4, 20, 7)
    assert box.rect == (3, 4, 20, 7)


def test_inner_rect_without_border_equals_rect():
    box = Box()
    box.set_rect(2, 3, 10, 6)
    assert box.inner_rect == box.rect


def test_inner_rect_with_border_and_padding():
    box = Box()
    box.set_rect(2, 3, 10, 6)
    box.border = True
    box.set_border_padding(1, 0, 2, 1)
    assert box.inner_rect == (2 + 1 + 2, 3 + 1 + 1, 10 - 2 - 2 - 1, 6 - 2 - 1)
    assert box.padding == (1, 0, 2, 1)


def test_inner_rect_clamps_to_zero():
    box = Box()
    box.set_rect(0, 0, 4, 4)
    box.border = True
    box.set_border_padding(5, 5, 5, 5)
    _, _, width, height = box.inner_rect
    assert (width, height) == (0, 0)


def test_in_rect_edges():
    box = Box()
    box.set_rect(1, 1, 3, 2)
    assert box.in_rect(1, 1)
    assert box.in_rect(3, 2)
    assert not box.in_rect(4, 1)
    assert not box.in_rect(1, 3)
    assert not box.in_rect(0, 1)


def test_draw_border_unfocused():
    screen = MemoryScreen(6, 3)
    box = _bordered(0, 0, 6, 3)
    box.draw(screen)
    assert screen.row_text(0) == BORDERS.top_left + BORDERS.horizontal * 4 + BORDERS.top_right
    assert screen.row_text(1)[0] == BORDERS.vertical
    assert screen.row_text(2)[-1] == BORDERS.bottom_right
    assert screen.get_content(0, 0)[2] == box.border_style


def test_draw_border_focused():
    screen = MemoryScreen(6, 3)
    box = _bordered(0, 0, 6, 3)
    box.focus(lambda p: None)
    box.draw(screen)
    assert screen.get_content(0, 0)[0] == BORDERS.top_left_focus
    assert screen.get_content(1, 2)[0] == BORDERS.horizontal_focus


def test_draw_fills_background():
    screen = MemoryScreen(5, 5)
    screen.set_content(2, 2, "x", None, Style())
    box = Box()
    box.set_rect(0, 0, 5, 5)
    box.background_color = "blue"
    box.draw(screen)
    char, _, style, _ = screen.get_content(2, 2)
    assert char == " "
    assert style.background == "blue"


def test_draw_without_fill_keeps_content():
    screen = MemoryScreen(5, 5)
    screen.set_content(2, 2, "x", None, Style())
    box = Box()
    box.set_rect(0, 0, 5, 5)
    box.fill_background = False
    box.draw(screen)
    assert screen.get_content(2, 2)[0] == "x"


def test_zero_size_draws_nothing():
    screen = MemoryScreen(5, 5)
    box = Box()
    box.set_rect(0, 0, 0, 5)
    box.border = True
    box.draw(screen)
    assert screen.get_content(0, 0)[2] == Style()


def test_title_is_printed():
    screen = MemoryScreen(12, 3)
    box = _bordered(0, 0, 12, 3, "Hi")
    box.draw(screen)
    row = screen.row_text(0)
    assert "Hi" in row
    assert HORIZONTAL_ELLIPSIS not in row


def test_long_title_gets_ellipsis():
    screen = MemoryScreen(6, 3)
    box = _bordered(0, 0, 6, 3, "Hello world")
    box.draw(screen)
    assert screen.get_content(6 - 2, 0)[0] == HORIZONTAL_ELLIPSIS


def test_long_right_aligned_title_ellipsis_on_left():
    screen = MemoryScreen(6, 3)
    box = _bordered(0, 0, 6, 3, "Hello world")
    box.title_align = Align.RIGHT
    box.draw(screen)
    assert screen.get_content(1, 0)[0] == HORIZONTAL_ELLIPSIS


def test_draw_func_sets_inner_rect_until_moved():
    screen = MemoryScreen(10, 10)
    calls = []

    def custom(scr, x, y, width, height):
        calls.append((x, y, width, height))
        return (x + 1, y + 1, 2, 2)

    box = Box()
    box.set_rect(1, 1, 6, 6)
    box.draw_func = custom
    box.draw(screen)
    assert calls == [(1, 1, 6, 6)]
    assert box.inner_rect == (2, 2, 2, 2)
    box.set_rect(1, 1, 6, 6)
    assert box.inner_rect == box.rect


def test_input_capture_can_block():
    box = Box()
    seen = []
    box.input_capture = lambda event: seen.append(event) or None
    handler = box.wrap_input_handler(lambda event, set_focus: seen.append("handled"))
    event = EventKey(Key.ENTER)
    handler(event, lambda p: None)
    assert seen == [event]


def test_input_capture_can_replace_event():
    box = Box()
    replacement = EventKey(Key.TAB)
    box.input_capture = lambda event: replacement
    received = []
    handler = box.wrap_input_handler(lambda event, set_focus: received.append(event))
    handler(EventKey(Key.ENTER), lambda p: None)
    assert received == [replacement]


def test_default_mouse_handler_focuses_on_left_down():
    box = Box()
    box.set_rect(0, 0, 5, 5)
    focused = []
    consumed, capture = box.mouse_handler()(LEFT_DOWN, EventMouse(2, 2), focused.append)
    assert consumed is True
    assert capture is None
    assert focused == [box]


def test_default_mouse_handler_ignores_outside_and_other_actions():
    box = Box()
    box.set_rect(0, 0, 5, 5)
    focused = []
    handler = box.mouse_handler()
    assert handler(LEFT_DOWN, EventMouse(7, 2), focused.append) == (False, None)
    assert handler(MOVE, EventMouse(2, 2), focused.append) == (False, None)
    assert focused == []


def test_mouse_capture_can_block():
    box = Box()
    box.set_rect(0, 0, 5, 5)
    box.mouse_capture = lambda action, event: (action, None)
    focused = []
    assert box.mouse_handler()(LEFT_DOWN, EventMouse(1, 1), focused.append) == (False, None)
    assert focused == []


def test_focus_and_blur_callbacks():
    box = Box()
    log = []
    box.on_focus = lambda: log.append("focus")
    box.on_blur = lambda: log.append("blur")
    box.focus(lambda p: None)
    assert box.has_focus()
    box.blur()
    assert not box.has_focus()
    assert log == ["focus", "blur"]


def test_background_color_updates_border_style():
    box = Box()
    box.background_color = "navy"
    assert box.background_color == "navy"
    assert box.border_style.background == "navy"


def test_border_color_and_attributes():
    box = Box()
    box.border_color = "red"
    box.border_attributes = AttrMask.BOLD | AttrMask.UNDERLINE
    assert box.border_color == "red"
    assert box.border_attributes == AttrMask.BOLD | AttrMask.UNDERLINE
    assert box.border_style.decompose()[0] == "red"


def test_set_border_padding_returns_box():
    box = Box()
    assert box.set_border_padding(1, 1, 1, 1) is box