"""
ANSI escape sequence primitives used by :class:`~list_pager.canvas.TerminalCanvas`.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

ESC = "\033"
CSI = f"{ESC}["
RESET = f"{CSI}0m"


# ---------------------------------------------------------------------------
# Cursor movement
# ---------------------------------------------------------------------------


def cursor_position(row: int, col: int) -> str:
    """Move cursor to absolute *row*, *col* (1-based)."""
    return f"{CSI}{row};{col}H"


# ---------------------------------------------------------------------------
# Screen / line clearing
# ---------------------------------------------------------------------------


def clear_screen() -> str:
    """Clear the entire screen and move cursor to top-left."""
    return f"{CSI}2J{CSI}H"


def clear_to_end() -> str:
    """Clear from cursor to end of line."""
    return f"{CSI}0K"


# ---------------------------------------------------------------------------
# Cursor visibility
# ---------------------------------------------------------------------------


def hide_cursor() -> str:
    """Hide the terminal cursor."""
    return f"{CSI}?25l"


def show_cursor() -> str:
    """Show the terminal cursor."""
    return f"{CSI}?25h"
