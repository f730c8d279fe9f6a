"""Stateful view over a regenerated item list.

A ``Screen`` owns the current rows, the cursor, the scroll offset, and the
set of collapsed section ids. Rows are rebuilt wholesale by the generator on
every refresh; cursor and collapse state survive through stable row ids.
"""

from __future__ import annotations

from collections.abc import Callable

from ..items import (
    Item,
    TargetData,
    find_id_index,
    hidden_flags,
    navigable_indices,
    subtree_end,
)

PREVIOUS = -1
NEXT = 1


class Screen:
    """Rows plus selection, scroll, and collapse state for one dashboard view."""

    def __init__(self, refresh_items: Callable[[], list[Item]], size: int = 24, title: str = "") -> None:
        self.refresh_items = refresh_items
        self.title = title
        self.size = max(1, size)
        self.items: list[Item] = []
        self.cursor: int | None = None
        self.scroll = 0
        self.collapsed: set[str] = set()
        self._hidden: list[bool] = []

    @classmethod
    def create(cls, refresh_items: Callable[[], list[Item]], size: int = 24, title: str = "") -> Screen:
        """Build a screen and load its first rows; generator errors propagate."""
        screen = cls(refresh_items, size=size, title=title)
        screen.refresh()
        return screen

    def refresh(self) -> None:
        """Regenerate rows, keeping the selected row by id when it still exists.

        If the generator raises, rows, cursor, and scroll are left untouched
        and the exception propagates.
        """
        items = list(self.refresh_items())
        previous = self.selected_item()
        previous_id = previous.id if previous is not None else None

        self.items = items
        self._hidden = hidden_flags(items, self.collapsed)
        cursor = find_id_index(items, self._hidden, previous_id) if previous_id is not None else None
        if cursor is None:
            nav = navigable_indices(items, self._hidden)
            cursor = nav[0] if nav else None
        self.cursor = cursor
        self._scroll_to_cursor()

    def resize(self, size: int) -> None:
        self.size = max(1, size)
        self._scroll_to_cursor()

    def selected_item(self) -> Item | None:
        if self.cursor is None or not 0 <= self.cursor < len(self.items):
            return None
        return self.items[self.cursor]

    def is_hidden(self, index: int) -> bool:
        return self._hidden[index]

    def visible_rows(self) -> list[tuple[int, Item]]:
        """Return ``(index, item)`` for rows not hidden by a collapsed section."""
        return [(idx, item) for idx, item in enumerate(self.items) if not self._hidden[idx]]

    def move_selection(self, direction: int, amount: int = 1) -> bool:
        """Move the cursor ``amount`` selectable rows toward ``direction``.

        Hidden and unselectable rows are skipped; movement clamps at both ends.
        Returns whether the cursor changed.
        """
        nav = navigable_indices(self.items, self._hidden)
        if not nav:
            changed = self.cursor is not None
            self.cursor = None
            return changed
        if self.cursor in nav:
            position = nav.index(self.cursor)
        else:
            position = 0
        step = 1 if direction > 0 else -1
        target = max(0, min(len(nav) - 1, position + step * max(0, amount)))
        changed = nav[target] != self.cursor
        self.cursor = nav[target]
        self._scroll_to_cursor()
        return changed

    def select_previous(self) -> bool:
        return self.move_selection(PREVIOUS)

    def select_next(self) -> bool:
        return self.move_selection(NEXT)

    def half_page(self) -> int:
        return max(1, self.size // 2)

    def scroll_half_page_up(self) -> bool:
        return self.move_selection(PREVIOUS, self.half_page())

    def scroll_half_page_down(self) -> bool:
        return self.move_selection(NEXT, self.half_page())

    def toggle_section(self) -> bool:
        """Collapse or expand the selected section header.

        Returns ``False`` when the selected row is not a section header.
        """
        item = self.selected_item()
        if item is None or not item.section or item.id is None:
            return False
        if item.id in self.collapsed:
            self.collapsed.discard(item.id)
        else:
            self.collapsed.add(item.id)
        self._hidden = hidden_flags(self.items, self.collapsed)
        self._scroll_to_cursor()
        return True

    def is_collapsed(self, index: int) -> bool:
        item = self.items[index]
        return item.section and item.id is not None and item.id in self.collapsed

    def resolve_target(self) -> TargetData | None:
        """Return the selected row's target payload, if it carries one."""
        item = self.selected_item()
        if item is None:
            return None
        return item.target

    def is_selected_area(self, index: int) -> bool:
        """Whether ``index`` lies within the selected row's nested rows."""
        if self.cursor is None:
            return False
        return self.cursor <= index < subtree_end(self.items, self.cursor)

    def _scroll_to_cursor(self) -> None:
        # ``scroll`` counts visible rows; ``size`` counts drawn lines.
        visible = [idx for idx, hidden in enumerate(self._hidden) if not hidden]
        heights = [self.items[idx].display.count("\n") + 1 for idx in visible]
        max_scroll = len(visible)
        used = 0
        while max_scroll > 0 and used + heights[max_scroll - 1] <= self.size:
            max_scroll -= 1
            used += heights[max_scroll]
        if self.cursor is not None and self.cursor in visible:
            position = visible.index(self.cursor)
            if position < self.scroll:
                self.scroll = position
            span = sum(heights[self.scroll:position + 1])
            while self.scroll < position and span > self.size:
                span -= heights[self.scroll]
                self.scroll += 1
        self.scroll = max(0, min(self.scroll, max_scroll))
