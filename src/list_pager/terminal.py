"""
Terminal input stream.

``TerminalInput`` owns one input stream: it switches the terminal in and out
of raw mode, reads bytes while resumed, decodes them into :class:`Key`
events and hands each event to the registered handlers.  A pager receives its
``TerminalInput`` at construction, so two pagers never share a raw-mode
terminal by accident.
"""

from __future__ import annotations

import io
import os
import sys
from collections.abc import Callable
from typing import BinaryIO

from list_pager.keys import Key, iter_keys
from list_pager.logging import get_logger

_IS_WINDOWS = os.name == "nt"

if not _IS_WINDOWS:
    import select
    import termios
    import tty

logger = get_logger("terminal")

KeyHandler = Callable[[Key], object]

# Poll interval while waiting for input, so pause() is noticed promptly
_POLL_SECONDS = 0.1
_READ_SIZE = 1024


class TerminalInput:
    """
    A pausable source of decoded key events.

    Parameters
    ----------
    stream:
        Binary input stream, defaults to ``sys.stdin.buffer``.  Raw mode is
        only touched when the stream is a TTY.
    """

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self._stream: BinaryIO = stream or sys.stdin.buffer
        self._handlers: list[KeyHandler] = []
        self._paused = True
        self._saved_attrs: list | None = None

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def on(self, handler: KeyHandler) -> None:
        """Register *handler* for every decoded key."""
        self._handlers.append(handler)

    def off(self, handler: KeyHandler) -> None:
        """
        Remove *handler*.

        Bound methods compare equal when they wrap the same function and
        instance, so the reference passed to :meth:`on` can be recreated.
        """
        self._handlers = [h for h in self._handlers if h != handler]

    @property
    def handlers(self) -> list[KeyHandler]:
        return list(self._handlers)

    # ------------------------------------------------------------------
    # Flow control
    # ------------------------------------------------------------------

    @property
    def paused(self) -> bool:
        return self._paused

    def resume(self) -> None:
        self._paused = False

    def pause(self) -> None:
        self._paused = True

    def isatty(self) -> bool:
        try:
            return self._stream.isatty()
        except (AttributeError, ValueError):
            return False

    def set_raw_mode(self, enabled: bool) -> None:
        """
        Enter or leave raw mode.

        Entering saves the current terminal attributes; leaving restores them.
        A no-op when the stream is not a TTY.
        """
        if _IS_WINDOWS or not self.isatty():
            return
        fd = self._stream.fileno()
        if enabled:
            if self._saved_attrs is None:
                self._saved_attrs = termios.tcgetattr(fd)
            tty.setraw(fd)
            logger.debug("Raw mode enabled on fd %d", fd)
        elif self._saved_attrs is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
            logger.debug("Raw mode disabled on fd %d", fd)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def feed(self, data: bytes) -> list[Key]:
        """
        Decode *data* and deliver each key to the handlers in order.

        Keys that arrive after a handler paused the stream are dropped.
        """
        delivered: list[Key] = []
        for key in iter_keys(data):
            if self._paused:
                break
            delivered.append(key)
            for handler in list(self._handlers):
                handler(key)
        return delivered

    def run(self) -> None:
        """
        Read and dispatch input until the stream is paused or reaches EOF.
        """
        while not self._paused:
            data = self._read()
            if data is None:
                continue
            if not data:
                logger.debug("Input stream closed")
                self.pause()
                break
            self.feed(data)

    def _read(self) -> bytes | None:
        """Return the next chunk, ``b""`` on EOF, or ``None`` on poll timeout."""
        try:
            fd = self._stream.fileno()
        except (AttributeError, io.UnsupportedOperation):
            return self._stream.read(_READ_SIZE)

        if not _IS_WINDOWS:
            ready, _, _ = select.select([fd], [], [], _POLL_SECONDS)
            if not ready:
                return None
        return os.read(fd, _READ_SIZE)
