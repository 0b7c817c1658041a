"""Immutable snapshot of what a table should draw."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable

from tdv_table.models import CheckState, SortOrder
from tdv_table.pagination import PageSizeOption

EMPTY_MESSAGE = "No data found!"


class BodyKind(str, Enum):
    SKELETON = "skeleton"
    EMPTY = "empty"
    ROWS = "rows"


@dataclass(frozen=True)
class HeaderCell:
    id: str
    label: str
    sortable: bool = False
    sort_order: SortOrder = SortOrder.NONE
    width: int | None = None
    is_select: bool = False
    check_state: CheckState | None = None


@dataclass(frozen=True)
class RowRender:
    row_id: Hashable
    row: Any
    cells: tuple[str, ...]
    checked: bool | None = None
    can_expand: bool = False
    expanded: bool = False
    sub_content: Any = None

    @property
    def has_sub_row(self) -> bool:
        return self.expanded and self.sub_content is not None


@dataclass(frozen=True)
class FooterRender:
    total: int
    page_index: int
    page_size: int
    page_count: int
    pager: tuple[int | None, ...]
    page_size_options: tuple[PageSizeOption, ...]
    selected_option: PageSizeOption | None


@dataclass(frozen=True)
class TableRender:
    header: tuple[HeaderCell, ...]
    body: BodyKind
    rows: tuple[RowRender, ...] = ()
    skeleton_rows: int = 0
    overlay: bool = False
    empty_message: str = EMPTY_MESSAGE
    footer: FooterRender | None = None

    @property
    def column_count(self) -> int:
        return len(self.header)

    @property
    def sub_row_count(self) -> int:
        return sum(1 for row in self.rows if row.has_sub_row)
