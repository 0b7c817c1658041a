"""Headless table view: sorting, paging, selection and expansion state."""

from tdv_table.api import (
    BodyKind,
    CheckState,
    Column,
    OnSortParam,
    PagingData,
    SortOrder,
    TableRender,
    TableState,
    TabularDataView,
)

__all__ = [
    "BodyKind",
    "CheckState",
    "Column",
    "OnSortParam",
    "PagingData",
    "SortOrder",
    "TableRender",
    "TableState",
    "TabularDataView",
]
