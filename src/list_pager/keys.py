"""
Key decoding for terminal input.

Translates raw bytes read from a terminal into structured ``Key`` events.
Modifier combinations keep the base key as ``name`` and carry the modifier as
a flag, so Ctrl+C arrives as ``Key(name="c", ctrl=True)``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Key:
    """
    Decoded representation of a single key press.

    Attributes
    ----------
    name:
        Symbolic name for special keys (e.g. ``'enter'``, ``'up'``), or the
        lower-case character for printable and Ctrl+letter keys.
    char:
        The literal character, if printable.  Empty string otherwise.
    ctrl:
        ``True`` when Ctrl was held.
    alt:
        ``True`` when Alt (Meta/Option) was held.
    shift:
        ``True`` when Shift was held (only detectable for certain keys).
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def descriptor(self) -> str:
        """
        Canonical descriptor such as ``"ctrl+c"`` or ``"shift+tab"``.

        Modifiers are sorted alphabetically and the base key comes last.
        """
        mods = [m for m, on in (("alt", self.alt), ("ctrl", self.ctrl), ("shift", self.shift)) if on]
        return "+".join(mods + [self.name])


# ---------------------------------------------------------------------------
# Common key constants
# ---------------------------------------------------------------------------

KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_DELETE = Key(name="delete")
KEY_SPACE = Key(name="space", char=" ")

KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")

KEY_HOME = Key(name="home")
KEY_END = Key(name="end")
KEY_PAGE_UP = Key(name="pageup")
KEY_PAGE_DOWN = Key(name="pagedown")

KEY_UNKNOWN = Key(name="unknown")


# ---------------------------------------------------------------------------
# Escape sequence lookup tables
# ---------------------------------------------------------------------------

# CSI <letter> and SS3 <letter>
_FINAL_LETTER: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
}

# CSI <number> ~
_CSI_TILDE: dict[int, Key] = {
    1: KEY_HOME,
    3: KEY_DELETE,
    4: KEY_END,
    5: KEY_PAGE_UP,
    6: KEY_PAGE_DOWN,
    7: KEY_HOME,
    8: KEY_END,
}


def _with_modifier(base: Key, code: int) -> Key:
    """
    Apply an xterm modifier code (``1 + shift + 2*alt + 4*ctrl``) to *base*.
    """
    code -= 1
    return Key(
        name=base.name,
        char=base.char,
        shift=bool(code & 1),
        alt=bool(code & 2),
        ctrl=bool(code & 4),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_key(data: bytes) -> Key:
    """
    Decode one key sequence into a ``Key``.

    Handles printable UTF-8 characters, Ctrl+letter (bytes 0x01-0x1a),
    Alt+character (ESC prefix), CSI and SS3 sequences with optional xterm
    modifier suffixes.  Anything else decodes to ``Key(name="unknown")``.
    """
    if not data:
        return KEY_UNKNOWN

    if data[0] == 0x1B:
        if len(data) == 1:
            return KEY_ESCAPE
        second = data[1:2]
        if second == b"[":
            return _parse_csi(data[2:])
        if second == b"O" and len(data) == 3:
            return _FINAL_LETTER.get(chr(data[2]), KEY_UNKNOWN)
        inner = parse_key(data[1:])
        if inner is KEY_UNKNOWN or inner is KEY_ESCAPE:
            return KEY_UNKNOWN
        return Key(name=inner.name, char=inner.char, ctrl=inner.ctrl, alt=True, shift=inner.shift)

    byte = data[0]

    if byte in (0x0D, 0x0A):
        return KEY_ENTER
    if byte == 0x09:
        return KEY_TAB
    if byte in (0x7F, 0x08):
        return KEY_BACKSPACE
    if byte == 0x00:
        return Key(name="space", char=" ", ctrl=True)
    if 1 <= byte <= 26:
        return Key(name=chr(byte + 96), ctrl=True)
    if byte < 0x20:
        return KEY_UNKNOWN

    try:
        ch = data.decode("utf-8")
    except UnicodeDecodeError:
        return KEY_UNKNOWN

    if len(ch) != 1 or not ch.isprintable():
        return KEY_UNKNOWN
    if ch == " ":
        return KEY_SPACE
    if ch.isupper():
        return Key(name=ch.lower(), char=ch, shift=True)
    return Key(name=ch, char=ch)


def _parse_csi(payload: bytes) -> Key:
    """Decode the bytes after ``ESC [``."""
    try:
        text = payload.decode("ascii")
    except UnicodeDecodeError:
        return KEY_UNKNOWN
    if not text:
        return KEY_UNKNOWN

    final = text[-1]
    params = text[:-1].split(";") if len(text) > 1 else []

    if final == "~":
        base = _CSI_TILDE.get(_safe_int(params[0]) if params else None)
        if base is None:
            return KEY_UNKNOWN
        if len(params) == 2 and _safe_int(params[1]) is not None:
            return _with_modifier(base, _safe_int(params[1]))
        return base

    if final == "Z":
        return Key(name="tab", char="\t", shift=True)

    base = _FINAL_LETTER.get(final)
    if base is None:
        return KEY_UNKNOWN
    if len(params) == 2 and _safe_int(params[1]) is not None:
        return _with_modifier(base, _safe_int(params[1]))
    return base


def _safe_int(s: str) -> int | None:
    """Return ``int(s)`` or ``None`` if *s* is not a valid integer."""
    try:
        return int(s)
    except (ValueError, TypeError):
        return None


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def iter_keys(data: bytes) -> Iterator[Key]:
    """
    Split a read buffer into individual key sequences and decode each one.

    A single ``read()`` from a terminal may hold several keys when input
    arrives faster than it is consumed (e.g. held-down arrow keys).

    >>> [k.name for k in iter_keys(b"j\\x1b[Bk")]
    ['j', 'down', 'k']
    """
    i = 0
    n = len(data)
    while i < n:
        byte = data[i]
        if byte == 0x1B and i + 1 < n:
            nxt = data[i + 1]
            if nxt == 0x5B:  # CSI: parameters then a final byte in 0x40-0x7e
                j = i + 2
                while j < n and not 0x40 <= data[j] <= 0x7E:
                    j += 1
                end = min(j + 1, n)
            elif nxt == 0x4F:  # SS3: one more byte
                end = min(i + 3, n)
            elif nxt == 0x1B:  # double escape: first one stands alone
                end = i + 1
            else:
                end = i + 1 + _utf8_length(nxt)
        else:
            end = i + _utf8_length(byte)
        yield parse_key(data[i:min(end, n)])
        i = min(end, n)
