"""Row selection bookkeeping and the derived select-all checkbox state."""

from __future__ import annotations

from collections.abc import Hashable, Iterable

from tdv_table.models import CheckState

RowId = Hashable


def derive_check_state(visible_ids: Iterable[RowId], is_selected) -> CheckState:
    """Compute the select-all checkbox from the rows currently on screen.

    Checked iff every visible row is selected, indeterminate iff some but not
    all are. An empty page is neither.
    """
    total = 0
    selected = 0
    for row_id in visible_ids:
        total += 1
        if is_selected(row_id):
            selected += 1
    if total == 0 or selected == 0:
        return CheckState()
    if selected == total:
        return CheckState(checked=True)
    return CheckState(indeterminate=True)


class SelectionSet:
    """Set of checked row identifiers."""

    def __init__(self, ids: Iterable[RowId] = ()) -> None:
        self._ids: set[RowId] = set(ids)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self):
        return iter(self._ids)

    @property
    def ids(self) -> frozenset[RowId]:
        return frozenset(self._ids)

    def set(self, row_id: RowId, checked: bool) -> None:
        if checked:
            self._ids.add(row_id)
        else:
            self._ids.discard(row_id)

    def toggle(self, row_id: RowId) -> bool:
        """Flip membership of ``row_id`` and return the new checked value."""
        checked = row_id not in self._ids
        self.set(row_id, checked)
        return checked

    def set_page(self, page_ids: Iterable[RowId], checked: bool) -> None:
        """Select or deselect exactly the given page.

        Selecting replaces the set with the page, so out-of-page leftovers are
        dropped; deselecting only removes the page rows.
        """
        ids = set(page_ids)
        if checked:
            self._ids = ids
        else:
            self._ids -= ids

    def clear(self) -> None:
        self._ids.clear()

    def check_state(self, visible_ids: Iterable[RowId]) -> CheckState:
        return derive_check_state(visible_ids, self.__contains__)
