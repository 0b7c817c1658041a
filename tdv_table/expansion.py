"""Per-row expansion state, owned either by the table or by its caller."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import Callable, Protocol

RowId = Hashable
ExpandedMap = Mapping[RowId, bool]
ExpandedChange = Callable[[dict[RowId, bool]], None]


class ExpansionStrategy(Protocol):
    controlled: bool

    def is_expanded(self, row_id: RowId) -> bool: ...

    def toggle(self, row_id: RowId) -> bool: ...

    def snapshot(self) -> dict[RowId, bool]: ...


class UncontrolledExpansion:
    """The table keeps a private expansion map."""

    controlled = False

    def __init__(self) -> None:
        self._expanded: dict[RowId, bool] = {}

    def is_expanded(self, row_id: RowId) -> bool:
        return self._expanded.get(row_id, False)

    def toggle(self, row_id: RowId) -> bool:
        value = not self.is_expanded(row_id)
        self._expanded[row_id] = value
        return value

    def snapshot(self) -> dict[RowId, bool]:
        return dict(self._expanded)


class ControlledExpansion:
    """The caller owns the map; toggles are proposed through ``on_change``.

    The table never mutates the caller's mapping. It reads whatever mapping
    ``set_expanded`` last received.
    """

    controlled = True

    def __init__(self, expanded: ExpandedMap, on_change: ExpandedChange) -> None:
        self._expanded = expanded
        self._on_change = on_change

    def set_expanded(self, expanded: ExpandedMap) -> None:
        self._expanded = expanded

    def is_expanded(self, row_id: RowId) -> bool:
        return bool(self._expanded.get(row_id, False))

    def toggle(self, row_id: RowId) -> bool:
        proposed = dict(self._expanded)
        value = not self.is_expanded(row_id)
        proposed[row_id] = value
        self._on_change(proposed)
        return value

    def snapshot(self) -> dict[RowId, bool]:
        return dict(self._expanded)


def make_expansion(
    expanded: ExpandedMap | None = None,
    on_expanded_change: ExpandedChange | None = None,
) -> ExpansionStrategy:
    """Pick controlled expansion only when both the map and setter are given."""
    if expanded is not None and on_expanded_change is not None:
        return ControlledExpansion(expanded, on_expanded_change)
    return UncontrolledExpansion()
