"""Listing screen logic: the caller that owns query state for a table view.

The table view only emits page, size, sort and checkbox requests. This
service answers them against an in-memory dataset by filtering, sorting and
slicing, and keeps the persistent selection across pages.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Hashable, Sequence

from rapidfuzz import fuzz, process, utils

from tdv_app.config import TableViewConfig
from tdv_table.api import (
    Column,
    OnSortParam,
    PagingData,
    SortOrder,
    TableState,
    TabularDataView,
    cell_value,
    resolve_path,
)

logger = logging.getLogger(__name__)

Row = dict[str, Any]


@dataclass(frozen=True)
class ListingPage:
    rows: list[Row]
    total: int
    paging: PagingData


def _is_missing(value: Any) -> bool:
    if isinstance(value, float) and math.isnan(value):
        return True
    return value is None or (isinstance(value, str) and not value.strip())


def sort_key(value: Any) -> tuple[int, Any]:
    """Rank values so numbers, dates and text each compare among themselves."""
    if isinstance(value, bool):
        return (0, float(value))
    if isinstance(value, (int, float)):
        return (0, float(value))
    if isinstance(value, datetime):
        return (1, value.timestamp())
    if isinstance(value, date):
        return (1, datetime(value.year, value.month, value.day).timestamp())
    text = str(value).strip()
    try:
        number = float(text)
    except ValueError:
        pass
    else:
        # "NaN" and "Infinity" are names here, not numbers.
        if math.isfinite(number):
            return (0, number)
    if len(text) >= 10 and text[4:5] == "-":
        try:
            return (1, datetime.fromisoformat(text).timestamp())
        except ValueError:
            pass
    return (2, text.casefold())


def sort_rows(
    rows: Sequence[Row],
    sort: OnSortParam,
    value_of: Callable[[Row], Any],
) -> list[Row]:
    """Sort rows by one key; missing values stay last in both directions."""
    if not sort.is_sorted:
        return list(rows)
    present = [row for row in rows if not _is_missing(value_of(row))]
    missing = [row for row in rows if _is_missing(value_of(row))]
    present.sort(
        key=lambda row: sort_key(value_of(row)),
        reverse=sort.order is SortOrder.DESC,
    )
    return present + missing


class ListingService:
    """Owns the dataset, the TableState and the persistent selection."""

    def __init__(
        self,
        rows: Sequence[Row],
        config: TableViewConfig | None = None,
        columns: Sequence[Column] | None = None,
    ) -> None:
        self.config = config or TableViewConfig()
        self._rows: list[Row] = list(rows)
        self._positions = {id(row): idx for idx, row in enumerate(self._rows)}
        self.columns: list[Column] = list(
            columns if columns is not None else self.config.build_columns(self._rows[0] if self._rows else None)
        )
        default_sort = self.config.default_sort
        self.state = TableState(
            page_index=1,
            page_size=self.config.default_page_size,
            sort=OnSortParam(key=default_sort.key, order=default_sort.order),
            query="",
        )
        self._selected: dict[Hashable, Row] = {}

    # -- data ----------------------------------------------------------

    @property
    def rows(self) -> list[Row]:
        return self._rows

    def set_rows(self, rows: Sequence[Row]) -> None:
        """Replace the dataset, dropping selections whose rows are gone."""
        self._rows = list(rows)
        self._positions = {id(row): idx for idx, row in enumerate(self._rows)}
        known = {self.row_id(row) for row in self._rows}
        self._selected = {key: row for key, row in self._selected.items() if key in known}

    def row_id(self, row: Row) -> Hashable:
        """Identify a row by its id field, or by its position in the dataset."""
        value = resolve_path(row, self.config.row_id_field)
        if value is None:
            return self._positions.get(id(row))
        return value

    def _search_fields(self) -> list[str]:
        if self.config.search_fields:
            return list(self.config.search_fields)
        return [col.id for col in self.columns]

    def _search_blob(self, row: Row) -> str:
        values = (resolve_path(row, field) for field in self._search_fields())
        return " ".join(str(value) for value in values if value is not None)

    def _filter(self, rows: list[Row]) -> list[Row]:
        query = self.state.query.strip()
        if not query:
            return rows
        if self.config.fuzzy_search:
            matches = process.extract(
                query,
                [self._search_blob(row) for row in rows],
                scorer=fuzz.WRatio,
                processor=utils.default_process,
                limit=None,
                score_cutoff=self.config.fuzzy_score_cutoff,
            )
            # matches is list of (match_string, score, index)
            return [rows[match[2]] for match in matches]
        needle = query.casefold()
        return [row for row in rows if needle in self._search_blob(row).casefold()]

    def _sort_value(self, key: str) -> Callable[[Row], Any]:
        column = next((col for col in self.columns if col.id == key), None)
        if column is not None:
            return lambda row: cell_value(column, row)
        return lambda row: resolve_path(row, key)

    def filtered(self) -> list[Row]:
        """All rows matching the query, in sort order (not paginated)."""
        rows = self._filter(list(self._rows))
        sort = self.state.sort
        return sort_rows(rows, sort, self._sort_value(sort.key))

    def page(self) -> ListingPage:
        rows = self.filtered()
        start = (self.state.page_index - 1) * self.state.page_size
        end = self.state.page_index * self.state.page_size
        paging = PagingData(
            total=len(rows),
            page_index=self.state.page_index,
            page_size=self.state.page_size,
        )
        return ListingPage(rows=rows[start:end], total=len(rows), paging=paging)

    # -- handlers ------------------------------------------------------

    def set_table_state(self, **changes: Any) -> None:
        self.state = self.state.merged(**changes)
        logger.debug("Table state now %s", self.state)

    def handle_pagination_change(self, page: int) -> None:
        self.set_table_state(page_index=page)

    def handle_select_change(self, page_size: int) -> None:
        self.set_table_state(page_size=int(page_size), page_index=1)
        self._selected.clear()

    def handle_sort(self, sort: OnSortParam) -> None:
        self.set_table_state(sort=sort, page_index=1)

    def handle_search_change(self, query: str) -> None:
        self.set_table_state(query=query, page_index=1)

    def handle_row_select(self, checked: bool, row: Row) -> None:
        key = self.row_id(row)
        if checked:
            self._selected[key] = row
        else:
            self._selected.pop(key, None)

    def handle_all_row_select(self, checked: bool, rows: Sequence[Row]) -> None:
        """Add the given rows to the selection, or remove exactly them."""
        if checked:
            for row in rows:
                self._selected.setdefault(self.row_id(row), row)
            return
        for row in rows:
            self._selected.pop(self.row_id(row), None)

    def is_selected(self, row: Row) -> bool:
        return self.row_id(row) in self._selected

    @property
    def selected_rows(self) -> list[Row]:
        return list(self._selected.values())

    def clear_selection(self) -> None:
        self._selected.clear()

    # -- view wiring ---------------------------------------------------

    def _can_expand(self, row: Row) -> bool:
        field = self.config.expand_field
        return bool(field) and not _is_missing(resolve_path(row, field))

    def _sub_component(self, row: Row) -> Any:
        return resolve_path(row, self.config.expand_field or "")

    def build_view(self) -> TabularDataView[Row]:
        """Create a table view configured for this listing and bound to it."""
        expandable = bool(self.config.expand_field)
        view: TabularDataView[Row] = TabularDataView(
            self.columns,
            page_sizes=self.config.page_sizes,
            selectable=self.config.selectable,
            get_row_id=self.row_id,
            get_row_can_expand=self._can_expand if expandable else None,
            render_row_sub_component=self._sub_component if expandable else None,
        )
        self.bind(view)
        self.refresh(view)
        return view

    def bind(self, view: TabularDataView[Row]) -> None:
        """Route the view's callbacks into this service and re-render after each."""

        def _then_refresh(handler: Callable[..., None]) -> Callable[..., None]:
            def _wrapped(*args: Any) -> None:
                handler(*args)
                self.refresh(view)

            return _wrapped

        view.checkbox_checked = self.is_selected
        view.on_pagination_change = _then_refresh(self.handle_pagination_change)
        view.on_select_change = _then_refresh(self.handle_select_change)
        view.on_sort = _then_refresh(self.handle_sort)
        view.on_check_box_change = self.handle_row_select
        view.on_indeterminate_check_box_change = self.handle_all_row_select

    def search(self, view: TabularDataView[Row], query: str) -> None:
        self.handle_search_change(query)
        self.refresh(view)

    def refresh(self, view: TabularDataView[Row], *, loading: bool = False) -> ListingPage:
        page = self.page()
        view.update(
            page.rows,
            loading=loading,
            no_data=page.total == 0,
            paging_data=page.paging,
        )
        return page
