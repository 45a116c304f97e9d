"""Shared pytest fixtures for list-pager tests."""

from __future__ import annotations

import io
import logging

import pytest

from list_pager.config import PagerConfig
from list_pager.events import EventBus
from list_pager.pager import ListPager
from list_pager.terminal import TerminalInput


class RecordingCanvas:
    """Canvas that records every call as a tuple."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def clear(self) -> None:
        self.calls.append(("clear",))

    def save(self) -> None:
        self.calls.append(("save",))

    def restore(self) -> None:
        self.calls.append(("restore",))

    def translate(self, dx: int, dy: int) -> None:
        self.calls.append(("translate", dx, dy))

    def fill_text(self, text: str, x: int, line: int) -> None:
        self.calls.append(("fill_text", text, x, line))

    def hide_cursor(self) -> None:
        self.calls.append(("hide_cursor",))

    def show_cursor(self) -> None:
        self.calls.append(("show_cursor",))

    def reset(self) -> None:
        self.calls.append(("reset",))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def last_frame(self) -> list[str]:
        """Texts written by the most recent redraw."""
        start = max(i for i, c in enumerate(self.calls) if c[0] == "clear")
        return [c[1] for c in self.calls[start:] if c[0] == "fill_text"]

    def draw_count(self) -> int:
        return self.names().count("clear")


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def terminal_input() -> TerminalInput:
    """Input stream backed by an empty in-memory buffer (not a TTY)."""
    return TerminalInput(io.BytesIO())


@pytest.fixture
def config() -> PagerConfig:
    return PagerConfig(x=0, y=0, marker="> ")


@pytest.fixture
def pager(config: PagerConfig, canvas: RecordingCanvas, terminal_input: TerminalInput) -> ListPager:
    return ListPager(config=config, canvas=canvas, input=terminal_input, events=EventBus())


@pytest.fixture
def sites(pager: ListPager) -> ListPager:
    """Pager holding the four sample sites."""
    pager.add_item("g", "Google")
    pager.add_item("y", "Yahoo")
    pager.add_item("c", "Cloudup")
    pager.add_item("h", "Github")
    return pager


@pytest.fixture
def recorder(pager: ListPager) -> list[tuple]:
    """Every event the pager emits, as ``(name, payload)``."""
    received: list[tuple] = []
    for name in ("select", "remove", "empty", "reset", "keypress"):
        pager.on(name, lambda data, name=name: received.append((name, data)))
    return received


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo handler and level changes made by ``setup_logging`` in a test."""
    logger = logging.getLogger("list_pager")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
