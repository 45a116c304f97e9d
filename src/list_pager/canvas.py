"""
Drawing surfaces the pager renders onto.

``Canvas`` is the contract the pager writes display instructions to.
``TerminalCanvas`` implements it with ANSI escape sequences on a text stream:
coordinates are zero-based columns and rows, shifted by the current
translation, and anything outside the ``width`` x ``height`` surface is
clipped.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO, runtime_checkable

from list_pager.ansi import (
    RESET,
    clear_screen,
    clear_to_end,
    cursor_position,
    hide_cursor,
    show_cursor,
)


@runtime_checkable
class Canvas(Protocol):
    """A 2D text surface with a save/restore translation stack."""

    def clear(self) -> None: ...

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def translate(self, dx: int, dy: int) -> None: ...

    def fill_text(self, text: str, x: int, line: int) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def reset(self) -> None: ...


class TerminalCanvas:
    """
    ANSI terminal implementation of :class:`Canvas`.

    Parameters
    ----------
    width, height:
        Size of the drawable surface in columns and rows.
    output:
        Writable text stream, defaults to ``sys.stdout``.
    """

    def __init__(self, width: int = 100, height: int = 200, output: TextIO | None = None) -> None:
        self.width = width
        self.height = height
        self._output: TextIO = output or sys.stdout
        self._origin: tuple[int, int] = (0, 0)
        self._stack: list[tuple[int, int]] = []

    @property
    def origin(self) -> tuple[int, int]:
        """Current translation as ``(x, y)``."""
        return self._origin

    # ------------------------------------------------------------------
    # Transform stack
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Push the current translation."""
        self._stack.append(self._origin)

    def restore(self) -> None:
        """Pop the last saved translation.  No-op on an empty stack."""
        if self._stack:
            self._origin = self._stack.pop()

    def translate(self, dx: int, dy: int) -> None:
        x, y = self._origin
        self._origin = (x + dx, y + dy)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Clear the screen."""
        self._write(clear_screen())

    def fill_text(self, text: str, x: int, line: int) -> None:
        """Write *text* starting at column *x* of row *line*."""
        col = self._origin[0] + x
        row = self._origin[1] + line
        if row < 0 or row >= self.height or col >= self.width:
            return
        if col < 0:
            text = text[-col:]
            col = 0
        text = text[: self.width - col]
        self._write(cursor_position(row + 1, col + 1) + text + clear_to_end())

    # ------------------------------------------------------------------
    # Terminal state
    # ------------------------------------------------------------------

    def hide_cursor(self) -> None:
        self._write(hide_cursor())

    def show_cursor(self) -> None:
        self._write(show_cursor())

    def reset(self) -> None:
        """Clear the screen, drop attributes and the transform stack."""
        self._origin = (0, 0)
        self._stack.clear()
        self._write(RESET + clear_screen())

    def _write(self, data: str) -> None:
        """Write data to the output stream and flush."""
        self._output.write(data)
        self._output.flush()
