"""
Scrollable, selectable list widget.

``ListPager`` keeps an ordered list of items and header lines, tracks one
selected item, shows the page of items that holds the selection, and redraws
after every change.  Key presses are published as ``keypress`` events before
the built-in bindings run, which is how applications add their own keys:

    pager = ListPager()
    pager.add_item("g", "Google")
    pager.add_item("y", "Yahoo")

    @pager.on("keypress")
    def vim_keys(event):
        if event.key.name == "j":
            pager.down()
        elif event.key.name == "k":
            pager.up()
        elif event.key.name == "q":
            pager.stop()

    pager.run()
"""

from __future__ import annotations

from collections.abc import Hashable
from enum import Enum

from list_pager.canvas import Canvas, TerminalCanvas
from list_pager.config import PagerConfig
from list_pager.errors import EmptyStateError, NotFoundError
from list_pager.events import (
    EMPTY,
    KEYPRESS,
    REMOVE,
    RESET,
    SELECT,
    EmptyEvent,
    EventBus,
    EventHandler,
    KeypressEvent,
    RemoveEvent,
    ResetEvent,
    SelectEvent,
)
from list_pager.keybindings import DOWN, EXIT, UP, KeybindingsManager
from list_pager.keys import Key
from list_pager.logging import get_logger
from list_pager.pagination import page_count, page_window
from list_pager.store import Header, HeaderStore, Item, ItemStore
from list_pager.terminal import TerminalInput

logger = get_logger("pager")


class PagerState(Enum):
    """Lifecycle of the input dispatcher."""

    STOPPED = "stopped"
    RUNNING = "running"


class ListPager:
    """
    Paginated single-selection list.

    Parameters
    ----------
    config:
        Display options and keybinding overrides.  Defaults to
        :class:`PagerConfig()`.
    canvas:
        Drawing surface.  Defaults to a :class:`TerminalCanvas` sized from
        *config*.
    input:
        Key event source.  Defaults to a :class:`TerminalInput` on stdin.
    events:
        Event bus to publish on.  A private one is created when omitted.
    """

    def __init__(
        self,
        config: PagerConfig | None = None,
        canvas: Canvas | None = None,
        input: TerminalInput | None = None,
        events: EventBus | None = None,
    ) -> None:
        self.config = config or PagerConfig()
        self.canvas: Canvas = canvas or TerminalCanvas(self.config.width, self.config.height)
        self.input = input or TerminalInput()
        self.events = events or EventBus()
        self.keybindings = KeybindingsManager(self.config.keybindings)

        self._items = ItemStore()
        self._headers = HeaderStore()
        self._selected: Hashable | None = None
        self._state = PagerState.STOPPED

        # Bound once so subscribe and unsubscribe use the same reference
        self._key_handler = self.handle_key

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> PagerState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is PagerState.RUNNING

    @property
    def selected(self) -> Hashable | None:
        """Id of the selected item, or ``None``."""
        return self._selected

    @property
    def selected_item(self) -> Item | None:
        if self._selected is None:
            return None
        return self._items.get(self._selected)

    @property
    def selected_index(self) -> int | None:
        if self._selected is None:
            return None
        return self._items.index_of(self._selected)

    @property
    def items(self) -> list[Item]:
        """All items in insertion order."""
        return list(self._items)

    @property
    def headers(self) -> list[Header]:
        return list(self._headers)

    def __len__(self) -> int:
        return len(self._items)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on(self, event: str, handler: EventHandler | None = None, priority: int = 0):
        """Subscribe to a pager event.  See :meth:`EventBus.on`."""
        return self.events.on(event, handler, priority=priority)

    def off(self, event: str, handler: EventHandler) -> None:
        self.events.off(event, handler)

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def add_item(self, id: Hashable, label: str) -> Item:
        """
        Append an item.

        The first item added while nothing is selected becomes the
        selection.  Raises :class:`DuplicateIdError` if *id* is taken.
        """
        item = self._items.add(id, label)
        logger.debug("Added item %r", id)
        if self._selected is None:
            self.select_item(id)
        elif self.running:
            self.draw()
        return item

    def item_at(self, index: int) -> Item | None:
        """Item at *index* in insertion order, or ``None``."""
        return self._items.at(index)

    def get_item(self, id: Hashable) -> Item | None:
        return self._items.get(id)

    def update_item(self, id: Hashable, label: str) -> None:
        """Change an item's label.  Raises :class:`NotFoundError`."""
        self._items.update(id, label)
        self.draw()

    def remove_item(self, id: Hashable | None = None) -> None:
        """
        Remove an item, the selected one by default.

        If the removed item was selected, the item before it becomes the
        selection; when there is none the selection is cleared.  Emits
        ``remove``, then ``empty`` if no items remain, or ``select`` for the
        new selection.

        Raises
        ------
        EmptyStateError
            *id* was omitted and nothing is selected.
        NotFoundError
            *id* is not in the list.
        """
        if id is None:
            if self._selected is None:
                raise EmptyStateError("no item selected to remove")
            id = self._selected

        was_selected = id == self._selected
        index = self._items.remove(id)
        previous = self._items.at(index - 1) if index > 0 else None

        emptied = not self._items
        if emptied:
            self._selected = None
        elif was_selected:
            self._selected = previous.id if previous is not None else None
        logger.debug("Removed item %r, selection now %r", id, self._selected)

        self.events.emit(REMOVE, RemoveEvent(id=id))
        # remove listeners may have changed the list
        if emptied and not self._items:
            self.events.emit(EMPTY, EmptyEvent())
        elif (
            was_selected
            and previous is not None
            and previous.id in self._items
            and self._selected == previous.id
        ):
            self.events.emit(SELECT, SelectEvent(id=previous.id))
        self.draw()

    def reset(self) -> None:
        """Remove every item and clear the selection.  Headers are kept."""
        self._items.clear()
        self._selected = None
        logger.debug("Reset")
        self.events.emit(RESET, ResetEvent())
        self.draw()

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def add_header(self, id: Hashable, label: str) -> Header:
        """Append a header line.  Raises :class:`DuplicateIdError`."""
        header = self._headers.add(id, label)
        self.draw()
        return header

    def update_header(self, id: Hashable, label: str) -> None:
        """Change a header's text.  Raises :class:`NotFoundError`."""
        self._headers.update(id, label)
        self.draw()

    def get_header(self, id: Hashable) -> Header | None:
        return self._headers.get(id)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_item(self, id: Hashable) -> None:
        """
        Make *id* the selection, emit ``select`` and redraw.

        Raises :class:`NotFoundError` if *id* is not in the list.
        """
        if id not in self._items:
            raise NotFoundError("item", id)
        self._selected = id
        self.events.emit(SELECT, SelectEvent(id=id))
        self.draw()

    def up(self) -> None:
        """Select the previous item.  No-op on the first item."""
        self._step(-1)

    def down(self) -> None:
        """Select the next item.  No-op on the last item."""
        self._step(1)

    def _step(self, offset: int) -> None:
        index = self.selected_index
        if index is None:
            return
        target = self._items.at(index + offset)
        if target is not None:
            self.select_item(target.id)

    # ------------------------------------------------------------------
    # Pagination and rendering
    # ------------------------------------------------------------------

    def window(self) -> tuple[int, int]:
        """Bounds ``(start, end)`` of the page holding the selection."""
        return page_window(self.selected_index, self.config.length, len(self._items))

    def visible_items(self) -> list[Item]:
        start, end = self.window()
        return self._items.slice(start, end)

    def page_info(self) -> tuple[int, int]:
        """``(page, pages)`` with a one-based page number, ``(0, 0)`` when empty."""
        index = self.selected_index
        if index is None:
            return 0, 0
        return index // self.config.length + 1, page_count(self.config.length, len(self._items))

    def render_lines(self) -> list[str]:
        """The text lines a redraw writes: headers first, then the page."""
        marker = self.config.marker
        padding = " " * len(marker)
        lines = [header.label for header in self._headers]
        for item in self.visible_items():
            prefix = marker if item.id == self._selected else padding
            lines.append(prefix + item.label)
        return lines

    def draw(self) -> None:
        """Repaint headers and the current page."""
        self.canvas.clear()
        self.canvas.save()
        self.canvas.translate(self.config.x, self.config.y)
        for line, text in enumerate(self.render_lines()):
            self.canvas.fill_text(text, 0, line)
        self.canvas.restore()

    # ------------------------------------------------------------------
    # Lifecycle and input
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Attach to the input stream, draw and enter raw mode."""
        if self.running:
            return
        self._state = PagerState.RUNNING
        self.input.on(self._key_handler)
        self.draw()
        self.canvas.hide_cursor()
        self.input.set_raw_mode(True)
        self.input.resume()
        logger.debug("Started with %d items", len(self._items))

    def stop(self) -> None:
        """Restore the terminal and detach from the input stream."""
        if not self.running:
            return
        self._state = PagerState.STOPPED
        self.canvas.reset()
        self.canvas.show_cursor()
        self.input.set_raw_mode(False)
        self.input.pause()
        self.input.off(self._key_handler)
        logger.debug("Stopped")

    def run(self) -> None:
        """Start and block, dispatching keys until :meth:`stop` is called."""
        self.start()
        try:
            self.input.run()
        finally:
            self.stop()

    def handle_key(self, key: Key) -> bool:
        """
        Dispatch one key event.

        Publishes ``keypress`` with the selection as it was before the key,
        then applies the built-in binding, unless a listener stopped the
        pager.  Returns ``True`` when a built-in binding handled the key.
        """
        if not self.running:
            return False

        self.events.emit(KEYPRESS, KeypressEvent(key=key, previous=self._selected))
        if not self.running:
            return False

        action = self.keybindings.find_action(key)
        if action == UP:
            self.up()
        elif action == DOWN:
            self.down()
        elif action == EXIT:
            self.stop()
        else:
            return False
        return True
