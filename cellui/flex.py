"""A flexbox layout that arranges primitives in a row or a column."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .box import Box, InputHandler, MouseHandler, Primitive, SetFocus
from .terminal import EventKey, EventMouse, Screen

FLEX_ROW = 0
"""One item per row: items are stacked vertically."""
FLEX_COLUMN = 1
"""One item per column: items are placed side by side."""
FLEX_ROW_CSS = 1
"""As in CSS: items distributed along a row."""
FLEX_COLUMN_CSS = 0
"""As in CSS: items distributed within a column."""


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


@dataclass(eq=False)
class FlexItem:
    """Layout options for one item of a Flex."""

    item: Optional[Primitive]
    fixed_size: int = 0
    proportion: int = 1
    focus: bool = False


class Flex(Box):
    """Arrange primitives horizontally or vertically.

    Each item either has a fixed size or receives a share of the remaining
    space in proportion to its weight. A Flex does not clear its own
    background, so empty items leave whatever is on screen unchanged.
    """

    def __init__(self, direction: int = FLEX_COLUMN) -> None:
        super().__init__()
        self.fill_background = False
        self.direction = direction
        self.full_screen = False
        self._items: list[FlexItem] = []

    @property
    def items(self) -> tuple[FlexItem, ...]:
        """The layout items in order."""
        return tuple(self._items)

    @property
    def item_count(self) -> int:
        return len(self._items)

    def add_item(
        self,
        item: Optional[Primitive],
        fixed_size: int = 0,
        proportion: int = 1,
        focus: bool = False,
    ) -> Flex:
        """Append an item; a None item takes up space but draws nothing.

        A fixed_size of 0 makes the item flexible, sized by its proportion.
        If focus is set, the item receives focus when the Flex does.
        """
        self._items.append(FlexItem(item, fixed_size, proportion, focus))
        return self

    def remove_item(self, primitive: Primitive) -> Flex:
        """Remove every item holding the primitive, keeping the others' order."""
        self._items = [entry for entry in self._items if entry.item is not primitive]
        return self

    def clear(self) -> Flex:
        """Remove all items."""
        self._items = []
        return self

    def resize_item(self, primitive: Primitive, fixed_size: int, proportion: int) -> Flex:
        """Change the size of every item holding the primitive."""
        for entry in self._items:
            if entry.item is primitive:
                entry.fixed_size = fixed_size
                entry.proportion = proportion
        return self

    def draw(self, screen: Screen) -> None:
        self.draw_for_subclass(screen, self)

        if self.full_screen:
            width, height = screen.size()
            self.set_rect(0, 0, width, height)

        x, y, width, height = self.inner_rect
        distribute = height if self.direction == FLEX_ROW else width
        proportion_sum = 0
        for entry in self._items:
            if entry.fixed_size > 0:
                distribute -= entry.fixed_size
            else:
                proportion_sum += entry.proportion

        position = y if self.direction == FLEX_ROW else x
        focused: list[Primitive] = []
        for entry in self._items:
            size = entry.fixed_size
            if size <= 0:
                if proportion_sum > 0:
                    size = _trunc_div(distribute * entry.proportion, proportion_sum)
                    distribute -= size
                    proportion_sum -= entry.proportion
                else:
                    size = 0
            primitive = entry.item
            if primitive is not None:
                if self.direction == FLEX_COLUMN:
                    primitive.set_rect(position, y, size, height)
                else:
                    primitive.set_rect(x, position, width, size)
            position += size

            if primitive is not None:
                if primitive.has_focus():
                    focused.append(primitive)
                else:
                    primitive.draw(screen)

        # Focused items are drawn last so they appear on top.
        for primitive in reversed(focused):
            primitive.draw(screen)

    def focus(self, delegate: SetFocus) -> None:
        for entry in self._items:
            if entry.item is not None and entry.focus:
                delegate(entry.item)
                return
        super().focus(delegate)

    def has_focus(self) -> bool:
        if any(entry.item is not None and entry.item.has_focus() for entry in self._items):
            return True
        return super().has_focus()

    def mouse_handler(self) -> MouseHandler:
        def handle(action: int, event: EventMouse, set_focus: SetFocus):
            if not self.in_rect(*event.position()):
                return False, None
            consumed, capture = False, None
            for entry in self._items:
                if entry.item is None:
                    continue
                handler = entry.item.mouse_handler()
                if handler is None:
                    continue
                consumed, capture = handler(action, event, set_focus)
                if consumed:
                    break
            return consumed, capture

        return self.wrap_mouse_handler(handle)

    def input_handler(self) -> InputHandler:
        def handle(event: EventKey, set_focus: SetFocus) -> None:
            for entry in self._items:
                if entry.item is not None and entry.item.has_focus():
                    handler = entry.item.input_handler()
                    if handler is not None:
                        handler(event, set_focus)
                        return

        return self.wrap_input_handler(handle)