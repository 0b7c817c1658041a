"""Headless tabular data view.

The view presents one caller-supplied page of rows. It never sorts, filters or
slices data: sorting and pagination are emitted as requests through callbacks
and the caller answers with a new page through :meth:`TabularDataView.update`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Hashable, Sequence, TypeVar

from tdv_table.columns import (
    SELECT_COLUMN_ID,
    SELECT_COLUMN_WIDTH,
    render_cell,
    render_header,
    resolve_path,
)
from tdv_table.expansion import ExpandedChange, ExpandedMap, make_expansion
from tdv_table.models import (
    PAGE_SIZES,
    CheckState,
    Column,
    OnSortParam,
    PagingData,
)
from tdv_table.pagination import (
    find_option,
    page_count,
    page_size_options,
    pager_items,
)
from tdv_table.render import (
    EMPTY_MESSAGE,
    BodyKind,
    FooterRender,
    HeaderCell,
    RowRender,
    TableRender,
)
from tdv_table.selection import SelectionSet, derive_check_state
from tdv_table.sorting import SortState

logger = logging.getLogger(__name__)

T = TypeVar("T")

RowIdGetter = Callable[[Any], Hashable]


def default_row_id(row: Any) -> Hashable:
    return resolve_path(row, "id")


class TabularDataView(Generic[T]):
    """Paginated, sortable, selectable and expandable view over a page of rows.

    Interaction methods mirror user gestures (header click, pager click,
    checkbox click, expand click). Every interaction is ignored while the
    caller reports ``loading``.
    """

    def __init__(
        self,
        columns: Sequence[Column[T]],
        *,
        page_sizes: Sequence[int] = PAGE_SIZES,
        selectable: bool = False,
        checkbox_checked: Callable[[T], bool] | None = None,
        get_row_id: RowIdGetter = default_row_id,
        get_row_can_expand: Callable[[T], bool] | None = None,
        render_row_sub_component: Callable[[T], Any] | None = None,
        expanded: ExpandedMap | None = None,
        on_expanded_change: ExpandedChange | None = None,
        on_pagination_change: Callable[[int], None] | None = None,
        on_select_change: Callable[[int], None] | None = None,
        on_sort: Callable[[OnSortParam], None] | None = None,
        on_check_box_change: Callable[[bool, T], None] | None = None,
        on_indeterminate_check_box_change: Callable[[bool, list[T]], None] | None = None,
        empty_message: str = EMPTY_MESSAGE,
        pager_window: int = 1,
    ) -> None:
        self.columns: list[Column[T]] = list(columns)
        self.page_sizes = tuple(page_sizes)
        self.selectable = selectable
        self.checkbox_checked = checkbox_checked
        self.get_row_id = get_row_id
        self.get_row_can_expand = get_row_can_expand
        self.render_row_sub_component = render_row_sub_component
        self.empty_message = empty_message
        self.pager_window = pager_window

        self.on_pagination_change = on_pagination_change
        self.on_select_change = on_select_change
        self.on_sort = on_sort
        self.on_check_box_change = on_check_box_change
        self.on_indeterminate_check_box_change = on_indeterminate_check_box_change

        self._expansion = make_expansion(expanded, on_expanded_change)
        self._sort = SortState()
        self._selection = SelectionSet()

        self._data: list[T] = []
        self._loading = False
        self._no_data = False
        self._paging = PagingData()

    # -- props ---------------------------------------------------------

    @property
    def data(self) -> list[T]:
        return self._data

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def paging_data(self) -> PagingData:
        return self._paging

    @property
    def sort(self) -> OnSortParam:
        return self._sort.current

    @property
    def selection(self) -> SelectionSet:
        return self._selection

    @property
    def expansion_controlled(self) -> bool:
        return self._expansion.controlled

    @property
    def expanded(self) -> dict[Hashable, bool]:
        return self._expansion.snapshot()

    def update(
        self,
        data: Sequence[T] | None = None,
        *,
        loading: bool = False,
        no_data: bool = False,
        paging_data: PagingData | None = None,
        expanded: ExpandedMap | None = None,
    ) -> None:
        """Receive a new set of props from the caller."""
        self._data = list(data or [])
        self._loading = loading
        self._no_data = no_data
        if paging_data is not None:
            self._paging = paging_data
        if expanded is not None:
            set_expanded = getattr(self._expansion, "set_expanded", None)
            if set_expanded is None:
                logger.debug("Ignoring expanded map for uncontrolled table")
            else:
                set_expanded(expanded)

    # -- identity / derived state --------------------------------------

    def row_id(self, row: T, index: int | None = None) -> Hashable:
        row_id = self.get_row_id(row)
        if row_id is None:
            if index is None:
                index = self._data.index(row)
            return index
        return row_id

    def _row_ids(self) -> list[Hashable]:
        return [self.row_id(row, idx) for idx, row in enumerate(self._data)]

    def is_checked(self, row: T, index: int | None = None) -> bool:
        if self.checkbox_checked is not None:
            return bool(self.checkbox_checked(row))
        return self.row_id(row, index) in self._selection

    def header_checkbox(self) -> CheckState:
        """Derive the select-all checkbox from the rendered rows."""
        row_ids = self._row_ids()
        checked = {
            row_id
            for idx, (row, row_id) in enumerate(zip(self._data, row_ids))
            if self.is_checked(row, idx)
        }
        return derive_check_state(row_ids, checked.__contains__)

    def can_expand(self, row: T) -> bool:
        if self.get_row_can_expand is None:
            return False
        return bool(self.get_row_can_expand(row))

    def is_expanded(self, row: T, index: int | None = None) -> bool:
        return self._expansion.is_expanded(self.row_id(row, index))

    # -- interactions --------------------------------------------------

    def _blocked(self, action: str) -> bool:
        if self._loading:
            logger.debug("Ignoring %s while loading", action)
            return True
        return False

    def _column(self, column_id: str) -> Column[T] | None:
        return next((col for col in self.columns if col.id == column_id), None)

    def click_header(self, column_id: str) -> OnSortParam | None:
        """Advance the sort cycle of a sortable column and emit it."""
        if self._blocked("header click"):
            return None
        column = self._column(column_id)
        if column is None or not column.sortable:
            logger.debug("Column %r is not sortable", column_id)
            return None
        sort = self._sort.toggle(column_id)
        logger.debug("Emitting sort %s", sort.to_dict())
        if self.on_sort is not None:
            self.on_sort(sort)
        return sort

    def reset_sorting(self) -> None:
        sort = self._sort.reset()
        if self.on_sort is not None:
            self.on_sort(sort)

    def reset_selected(self) -> None:
        self._selection.clear()

    def change_page(self, page: int) -> None:
        if self._blocked("page change"):
            return
        count = page_count(self._paging.total, self._paging.page_size)
        if page < 1 or (count and page > count):
            logger.debug("Page %s outside 1..%s", page, count)
            return
        self._selection.clear()
        logger.debug("Emitting page change to %s", page)
        if self.on_pagination_change is not None:
            self.on_pagination_change(page)

    def next_page(self) -> None:
        self.change_page(self._paging.page_index + 1)

    def previous_page(self) -> None:
        self.change_page(self._paging.page_index - 1)

    def change_page_size(self, page_size: int | None) -> None:
        """Emit the new size, then a reset to page 1, and drop the selection."""
        if self._blocked("page size change") or not page_size:
            return
        size = int(page_size)
        logger.debug("Emitting page size %s", size)
        if self.on_select_change is not None:
            self.on_select_change(size)
        if self.on_pagination_change is not None:
            self.on_pagination_change(1)
        self._selection.clear()

    def toggle_row(self, row: T, checked: bool | None = None) -> bool | None:
        """Flip one row checkbox and report it to the caller."""
        if self._blocked("row checkbox") or not self.selectable:
            return None
        if checked is None:
            checked = not self.is_checked(row)
        self._selection.set(self.row_id(row), checked)
        if self.on_check_box_change is not None:
            self.on_check_box_change(checked, row)
        return checked

    def toggle_all(self, checked: bool | None = None) -> bool | None:
        """Select or clear exactly the rows on the current page."""
        if self._blocked("select all") or not self.selectable:
            return None
        if not self._data:
            logger.debug("Ignoring select all on an empty page")
            return None
        if checked is None:
            checked = not self.header_checkbox().checked
        self._selection.set_page(self._row_ids(), checked)
        if self.on_indeterminate_check_box_change is not None:
            self.on_indeterminate_check_box_change(checked, list(self._data))
        return checked

    def toggle_expanded(self, row: T) -> bool | None:
        if self._blocked("expand") or not self.can_expand(row):
            return None
        return self._expansion.toggle(self.row_id(row))

    # -- rendering -----------------------------------------------------

    def _header_cells(self) -> list[HeaderCell]:
        cells: list[HeaderCell] = []
        if self.selectable:
            cells.append(
                HeaderCell(
                    id=SELECT_COLUMN_ID,
                    label="",
                    width=SELECT_COLUMN_WIDTH,
                    is_select=True,
                    check_state=self.header_checkbox(),
                )
            )
        for column in self.columns:
            cells.append(
                HeaderCell(
                    id=column.id,
                    label=render_header(column),
                    sortable=column.sortable,
                    sort_order=self._sort.order_for(column.id),
                    width=column.width,
                )
            )
        return cells

    def _render_rows(self) -> list[RowRender]:
        rows: list[RowRender] = []
        for idx, row in enumerate(self._data):
            row_id = self.row_id(row, idx)
            can_expand = self.can_expand(row)
            expanded = can_expand and self._expansion.is_expanded(row_id)
            sub_content = None
            if expanded and self.render_row_sub_component is not None:
                sub_content = self.render_row_sub_component(row)
            rows.append(
                RowRender(
                    row_id=row_id,
                    row=row,
                    cells=tuple(render_cell(col, row) for col in self.columns),
                    checked=self.is_checked(row, idx) if self.selectable else None,
                    can_expand=can_expand,
                    expanded=expanded,
                    sub_content=sub_content,
                )
            )
        return rows

    def _footer(self) -> FooterRender | None:
        paging = self._paging
        if paging.total <= 0:
            return None
        count = page_count(paging.total, paging.page_size)
        options = tuple(page_size_options(self.page_sizes))
        return FooterRender(
            total=paging.total,
            page_index=paging.page_index,
            page_size=paging.page_size,
            page_count=count,
            pager=tuple(pager_items(paging.page_index, count, window=self.pager_window)),
            page_size_options=options,
            selected_option=find_option(options, paging.page_size),
        )

    def render(self) -> TableRender:
        header = tuple(self._header_cells())
        footer = self._footer()
        if self._loading and not self._data:
            return TableRender(
                header=header,
                body=BodyKind.SKELETON,
                skeleton_rows=self._paging.page_size,
                footer=footer,
            )
        if not self._loading and (self._no_data or not self._data):
            return TableRender(
                header=header,
                body=BodyKind.EMPTY,
                empty_message=self.empty_message,
                footer=footer,
            )
        return TableRender(
            header=header,
            body=BodyKind.ROWS,
            rows=tuple(self._render_rows()),
            overlay=self._loading,
            footer=footer,
        )
