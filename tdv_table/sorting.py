"""Single-column, toggle-cycling sort state."""

from __future__ import annotations

from tdv_table.models import OnSortParam, SortOrder

_NEXT_ORDER = {
    SortOrder.NONE: SortOrder.ASC,
    SortOrder.ASC: SortOrder.DESC,
    SortOrder.DESC: SortOrder.NONE,
}


def next_sort_order(current: SortOrder) -> SortOrder:
    """Return the order following ``current`` in unsorted > asc > desc > unsorted."""
    return _NEXT_ORDER[current]


class SortState:
    """Tracks the one active sorted column.

    Clicking a different column discards the previous column's order and
    starts the new one at ascending.
    """

    def __init__(self) -> None:
        self._key = ""
        self._order = SortOrder.NONE

    @property
    def current(self) -> OnSortParam:
        if self._order is SortOrder.NONE:
            return OnSortParam()
        return OnSortParam(key=self._key, order=self._order)

    def order_for(self, key: str) -> SortOrder:
        if key != self._key:
            return SortOrder.NONE
        return self._order

    def toggle(self, key: str) -> OnSortParam:
        """Advance the cycle for ``key`` and return the descriptor to emit.

        The unsorted descriptor keeps the column key so callers can tell
        which column was cleared.
        """
        current = self.order_for(key)
        self._key = key
        self._order = next_sort_order(current)
        return OnSortParam(key=key, order=self._order)

    def reset(self) -> OnSortParam:
        self._key = ""
        self._order = SortOrder.NONE
        return OnSortParam()
