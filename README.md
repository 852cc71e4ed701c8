# cellui

Building blocks for user interfaces drawn on a grid of character cells:
bordered boxes with titles, buttons, checkboxes, a flexbox-style layout
container, a mouse dispatcher that turns raw mouse state into clicks and
double clicks, and an application object that runs the event loop, routes
keys and mouse actions to the focused widgets and redraws the screen.

## Installation

```
pip install cellui
```

To run the test suite:

```
pip install "cellui[test]"
pytest
```

## Modules

- `cellui.terminal` – the cell model and drawing surface.
  - `Style` (immutable; `with_foreground`, `with_background`,
    `with_attributes`, `decompose`), `AttrMask`, `Align`. Colors are color
    names, `"#rrggbb"` strings or `None` for the terminal default.
  - Events: `EventKey` (with `Key` and `ModMask`), `EventMouse` (with
    `ButtonMask` and `position()`), `EventResize`, and `EventError`, an
    exception a screen can report through its event queue.
  - `Screen`, the abstract interface primitives draw on, and `MemoryScreen`,
    an implementation kept entirely in memory. `MemoryScreen` adds
    `set_size`, `post_event` and `row_text` for driving and inspecting it.
  - `string_width(text)` counts screen cells (wide characters count two).
    `print_styled(screen, text, x, y, max_width, align, style)` and
    `print_text(screen, text, x, y, max_width, align, color)` print text
    aligned within `max_width` cells, trimming it when it does not fit, and
    return the number of characters printed and the width used.
    `print_text` keeps the background already on screen.
- `cellui.ansi` – `AnsiWriter(target)`, a writer that turns ANSI color and
  attribute codes (SGR, including 256-color and 24-bit forms) into style
  tags of the form `[fg:bg:flags]`, turns `ESC[nE` into newlines and drops
  all other escape sequences; `translate_ansi(text)` does the same for a
  single string.
- `cellui.borders` – `BorderSet`, the frame characters for normal and
  focused primitives plus joint characters; `BorderSet.pick(focused)`
  returns the six frame characters. `BORDERS` is the set used when drawing
  and may be changed.
- `cellui.box` – `Primitive`, the abstract widget interface, and `Box`, the
  base of every widget: `rect`/`set_rect`, `inner_rect`,
  `set_border_padding`, `border`, `border_style`, `border_color`,
  `background_color`, `title`, `title_color`, `title_align`, the
  `on_focus`/`on_blur` callbacks, `input_capture`, `mouse_capture` and
  `draw_func`. A title too long for the border ends in an ellipsis.
- `cellui.button` – `Button(label)`: Enter or a left click calls
  `on_selected`; Tab, Backtab and Escape call `on_exit` with the key.
  Separate `style`, `activated_style` and `disabled_style`.
- `cellui.checkbox` – `Checkbox`: Enter, the space bar or a left click on
  its row toggles `checked` and calls `on_changed`; Tab, Backtab and Escape
  call `on_done` and `on_finished`.
- `cellui.flex` – `Flex`, which places its items side by side
  (`FLEX_COLUMN`, the default) or stacked (`FLEX_ROW`), each with a fixed
  size or a proportional share of the remaining space. `add_item`,
  `remove_item`, `resize_item`, `clear`, `items`, `item_count`,
  `full_screen`.
- `cellui.mouse` – `MouseAction` and `MouseDispatcher`, which derives
  moves, presses, releases, clicks, double clicks (within
  `DOUBLE_CLICK_INTERVAL`, half a second) and wheel actions from successive
  `EventMouse` states and hands them to a root primitive, or to the
  primitive that captured the mouse.
- `cellui.application` – `Application`, the event loop: `set_screen`,
  `set_root`, `set_focus`, `focus`, `enable_mouse`, `run`, `stop`,
  `suspend`, `draw`, `force_draw`, `sync`, `queue_update`,
  `queue_update_draw`, `queue_event`, plus the `input_capture`,
  `mouse_capture`, `before_draw` and `after_draw` hooks. Ctrl-C stops the
  application unless an input capture swallows or replaces it.

## Example

The application needs a screen: pass one to `set_screen`, or give
`Application` a `screen_factory`. Here a `MemoryScreen` is fed a key press
that selects the focused button, which stops the loop:

```python
from cellui.application import Application
from cellui.box import Box
from cellui.button import Button
from cellui.flex import Flex
from cellui.terminal import EventKey, Key, MemoryScreen

screen = MemoryScreen(40, 5)
app = Application()
app.set_screen(screen)

left = Box()
left.border = True
left.title = "Left"

quit_button = Button("Quit")
quit_button.on_selected = app.stop

layout = Flex()
layout.add_item(left, 0, 1, False)
layout.add_item(quit_button, 12, 1, True)

app.set_root(layout, True)   # focuses the button, as its item has focus=True
screen.post_event(EventKey(Key.ENTER))
app.run()                    # returns once the button has stopped the app
```

## Translating ANSI output

```python
from cellui.ansi import translate_ansi

translate_ansi("\x1b[31mred\x1b[0m plain")
# "[maroon:]red[-:-:-] plain"
```

## Drawing without a terminal

```python
from cellui.box import Box
from cellui.terminal import MemoryScreen

screen = MemoryScreen()
screen.init()
screen.set_size(10, 3)

box = Box()
box.set_rect(0, 0, 10, 3)
box.border = True
box.draw(screen)

print(screen.row_text(0))  # "┌────────┐"
```

## What the package does not do

- It has no screen that drives a real terminal. `MemoryScreen` is the only
  `Screen` provided; to show anything on a terminal, implement the `Screen`
  interface yourself and pass it to `Application.set_screen` or as the
  `screen_factory`.
- Style tags are not interpreted when drawing. `print_text`,
  `print_styled` and `string_width` treat `"[red]"` as ordinary text, so
  tags produced by `translate_ansi` are printed literally.
- There are no text views, input fields, lists, tables, forms or other
  widgets beyond `Box`, `Button`, `Checkbox` and `Flex`.