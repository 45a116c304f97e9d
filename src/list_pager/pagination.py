"""
Page window computation.

The visible window is aligned to page-length boundaries: moving the selection
across a boundary jumps to a whole new page instead of scrolling by one row.
"""

from __future__ import annotations


def page_window(index: int | None, page_length: int, total: int) -> tuple[int, int]:
    """
    Return the ``(start, end)`` slice bounds of the page holding *index*.

    Parameters
    ----------
    index:
        Position of the selected item, or ``None`` when nothing is selected.
    page_length:
        Number of rows per page.  Must be at least 1.
    total:
        Number of items in the list.

    Returns
    -------
    tuple[int, int]
        ``start = (index // page_length) * page_length`` and
        ``end = min(start + page_length, total)``.  ``(0, 0)`` when *index*
        is ``None`` or outside the list.

    >>> page_window(10, 10, 11)
    (10, 11)
    >>> page_window(3, 10, 11)
    (0, 10)
    """
    if page_length < 1:
        raise ValueError(f"page_length must be >= 1, got {page_length}")
    if index is None or index < 0 or index >= total:
        return 0, 0
    start = (index // page_length) * page_length
    return start, min(start + page_length, total)


def page_count(page_length: int, total: int) -> int:
    """Number of pages needed to show *total* items."""
    if page_length < 1:
        raise ValueError(f"page_length must be >= 1, got {page_length}")
    return -(-total // page_length)
