"""
Exception types raised by the list pager.

All errors are local to the call that raised them; nothing is retried and no
notification carries an error.
"""

from __future__ import annotations

from collections.abc import Hashable


class ListPagerError(Exception):
    """Base class for all list pager errors."""


class NotFoundError(ListPagerError, KeyError):
    """An operation referenced an id that is absent from the relevant store."""

    def __init__(self, kind: str, id: Hashable) -> None:
        self.kind = kind
        self.id = id
        super().__init__(f"{kind} not found: {id!r}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]


class DuplicateIdError(ListPagerError, ValueError):
    """An add operation used an id that already exists in the store."""

    def __init__(self, kind: str, id: Hashable) -> None:
        self.kind = kind
        self.id = id
        super().__init__(f"duplicate {kind} id: {id!r}")


class EmptyStateError(ListPagerError):
    """An operation needed a selection but the list has none."""
