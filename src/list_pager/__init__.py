"""
list-pager - a scrollable, selectable list for text-mode terminals.

Keeps an ordered list of labeled items plus header lines, tracks a single
selection, shows the page that holds it and redraws on every change.  Key
presses are published as events so applications can add their own bindings.

Example:
    from list_pager import ListPager

    pager = ListPager()
    pager.add_item("g", "Google")
    pager.add_item("y", "Yahoo")
    pager.on("keypress", lambda e: e.key.name == "q" and pager.stop())
    pager.run()
"""

from list_pager.canvas import Canvas, TerminalCanvas
from list_pager.config import PagerConfig
from list_pager.errors import (
    DuplicateIdError,
    EmptyStateError,
    ListPagerError,
    NotFoundError,
)
from list_pager.events import (
    EMPTY,
    KEYPRESS,
    REMOVE,
    RESET,
    SELECT,
    EmptyEvent,
    EventBus,
    KeypressEvent,
    RemoveEvent,
    ResetEvent,
    SelectEvent,
)
from list_pager.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from list_pager.keys import Key, iter_keys, parse_key
from list_pager.logging import get_logger, setup_logging
from list_pager.pagination import page_count, page_window
from list_pager.pager import ListPager, PagerState
from list_pager.store import Header, HeaderStore, Item, ItemStore
from list_pager.terminal import TerminalInput

__version__ = "0.2.0"

__all__ = [
    # Widget
    "ListPager",
    "PagerState",
    "PagerConfig",
    # Data
    "Item",
    "Header",
    "ItemStore",
    "HeaderStore",
    "page_window",
    "page_count",
    # Events
    "EventBus",
    "SELECT",
    "REMOVE",
    "EMPTY",
    "RESET",
    "KEYPRESS",
    "SelectEvent",
    "RemoveEvent",
    "EmptyEvent",
    "ResetEvent",
    "KeypressEvent",
    # Terminal
    "Canvas",
    "TerminalCanvas",
    "TerminalInput",
    "Key",
    "parse_key",
    "iter_keys",
    "KeybindingsManager",
    "DEFAULT_KEYBINDINGS",
    # Errors
    "ListPagerError",
    "NotFoundError",
    "DuplicateIdError",
    "EmptyStateError",
    # Logging
    "setup_logging",
    "get_logger",
]
