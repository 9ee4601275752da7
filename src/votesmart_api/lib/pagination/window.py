"""Positional window arithmetic shared by every list operation.

``limit`` is an exclusive upper position bound clamped to the table size,
not a page size: ``window_range(10, from_index=3, limit=5)`` covers
positions 3 and 4 only.
"""


def window_range(total: int, from_index: int | None = None, limit: int | None = None) -> range:
    """Return the positions selected by a ``from_index``/``limit`` pair.

    Args:
        total: Number of rows in the table.
        from_index: First position to include. Defaults to 0.
        limit: Exclusive upper position bound. Defaults to ``total`` and is
            clamped to it.

    Returns:
        ``range(from_index, min(total, limit))``. Empty when the start lies
        at or beyond the end.
    """
    start = 0 if from_index is None else from_index
    end = total if limit is None else min(total, limit)
    return range(start, end)
