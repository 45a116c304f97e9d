"""
Ordered, id-keyed stores for list items and header lines.

Both stores keep insertion order (which drives navigation and rendering) and
give constant-time lookup by id.  Header ids live in their own namespace, so
an item and a header may share an id.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass, replace

from list_pager.errors import DuplicateIdError, NotFoundError


@dataclass(frozen=True)
class Item:
    """
    A navigable, selectable entry in the list.

    Attributes
    ----------
    id:
        Caller-supplied identifier, unique within the item store.
    label:
        Display text.  Changed only through :meth:`ListPager.update_item`,
        which swaps in a new ``Item``.
    """

    id: Hashable
    label: str


@dataclass(frozen=True)
class Header:
    """A static line rendered above the items.  Never selectable."""

    id: Hashable
    label: str


class _LabeledStore:
    """Insertion-ordered mapping of id -> entry with a positional view."""

    kind = "entry"
    entry_type: type = Item

    def __init__(self) -> None:
        self._entries: dict[Hashable, Item | Header] = {}
        # positional caches, rebuilt lazily after add/remove
        self._order: list[Hashable] | None = None
        self._positions: dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator:
        return iter(list(self._entries.values()))

    def __contains__(self, id: object) -> bool:
        return id in self._entries

    # ------------------------------------------------------------------
    # Positional access
    # ------------------------------------------------------------------

    def _ordered(self) -> list[Hashable]:
        if self._order is None:
            self._order = list(self._entries)
            self._positions = {id: i for i, id in enumerate(self._order)}
        return self._order

    @property
    def ids(self) -> list[Hashable]:
        """Ids in insertion order."""
        return list(self._ordered())

    def at(self, index: int):
        """Return the entry at *index*, or ``None`` when out of range."""
        if index < 0 or index >= len(self._entries):
            return None
        return self._entries[self._ordered()[index]]

    def index_of(self, id: Hashable) -> int | None:
        """Position of *id* in insertion order, or ``None`` if absent."""
        if id not in self._entries:
            return None
        self._ordered()
        return self._positions[id]

    def slice(self, start: int, end: int) -> list:
        """Entries in positions ``[start, end)``."""
        return [self._entries[i] for i in self._ordered()[start:end]]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def get(self, id: Hashable):
        """Return the entry with *id*, or ``None``."""
        return self._entries.get(id)

    def add(self, id: Hashable, label: str):
        """Append a new entry.  Raises :class:`DuplicateIdError` on collision."""
        if id in self._entries:
            raise DuplicateIdError(self.kind, id)
        entry = self.entry_type(id=id, label=label)
        self._entries[id] = entry
        self._order = None
        return entry

    def update(self, id: Hashable, label: str):
        """Replace the entry for *id* with a relabelled copy, keeping its position."""
        entry = self._entries.get(id)
        if entry is None:
            raise NotFoundError(self.kind, id)
        entry = replace(entry, label=label)
        self._entries[id] = entry
        return entry

    def remove(self, id: Hashable) -> int:
        """Remove *id* and return the position it occupied."""
        index = self.index_of(id)
        if index is None:
            raise NotFoundError(self.kind, id)
        del self._entries[id]
        self._order = None
        return index

    def clear(self) -> None:
        self._entries.clear()
        self._order = None


class ItemStore(_LabeledStore):
    """Ordered collection of :class:`Item` keyed by id."""

    kind = "item"
    entry_type = Item


class HeaderStore(_LabeledStore):
    """Ordered collection of :class:`Header` lines keyed by id."""

    kind = "header"
    entry_type = Header
