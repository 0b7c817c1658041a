"""Public API surface for tdv_table."""

from tdv_table.columns import (
    SELECT_COLUMN_ID,
    cell_value,
    column_from_key,
    render_cell,
    render_header,
    resolve_path,
)
from tdv_table.expansion import (
    ControlledExpansion,
    ExpansionStrategy,
    UncontrolledExpansion,
    make_expansion,
)
from tdv_table.models import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZES,
    CheckState,
    Column,
    OnSortParam,
    PagingData,
    SortOrder,
    TableState,
)
from tdv_table.pagination import PageSizeOption, page_count, page_size_options, pager_items
from tdv_table.render import BodyKind, FooterRender, HeaderCell, RowRender, TableRender
from tdv_table.selection import SelectionSet, derive_check_state
from tdv_table.sorting import SortState, next_sort_order
from tdv_table.view import TabularDataView, default_row_id

__all__ = [
    "BodyKind",
    "CheckState",
    "Column",
    "ControlledExpansion",
    "DEFAULT_PAGE_SIZE",
    "ExpansionStrategy",
    "FooterRender",
    "HeaderCell",
    "OnSortParam",
    "PAGE_SIZES",
    "PageSizeOption",
    "PagingData",
    "RowRender",
    "SELECT_COLUMN_ID",
    "SelectionSet",
    "SortOrder",
    "SortState",
    "TableRender",
    "TableState",
    "TabularDataView",
    "UncontrolledExpansion",
    "cell_value",
    "column_from_key",
    "default_row_id",
    "derive_check_state",
    "make_expansion",
    "next_sort_order",
    "page_count",
    "page_size_options",
    "pager_items",
    "render_cell",
    "render_header",
    "resolve_path",
]
