"""Value objects shared by the table view and its callers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
PAGE_SIZES: tuple[int, ...] = (10, 25, 50, 100)


class SortOrder(str, Enum):
    """Direction of a single-column sort. NONE means unsorted."""

    ASC = "asc"
    DESC = "desc"
    NONE = ""


@dataclass(frozen=True)
class OnSortParam:
    """Sort descriptor emitted to the caller on header clicks."""

    key: str = ""
    order: SortOrder = SortOrder.NONE

    @property
    def is_sorted(self) -> bool:
        return bool(self.key) and self.order is not SortOrder.NONE

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "order": self.order.value}


@dataclass(frozen=True)
class PagingData:
    total: int = 0
    page_index: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ValueError(f"total must be >= 0, got {self.total}")
        if self.page_index < 1:
            raise ValueError(f"page_index is 1-based, got {self.page_index}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")


@dataclass(frozen=True)
class TableState:
    """Query state owned by the listing screen, never by the table."""

    page_index: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort: OnSortParam = field(default_factory=OnSortParam)
    query: str = ""

    def merged(self, **changes: Any) -> "TableState":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


Accessor = str | Callable[[Any], Any]
HeaderRenderer = str | Callable[["Column[Any]"], str]
CellRenderer = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class Column(Generic[T]):
    """Describes how one field of a row is labelled, read and drawn.

    ``accessor`` is either a key (dotted paths walk nested mappings or
    attributes) or a callable receiving the row. ``cell`` optionally turns the
    accessed value into the displayed one and receives ``(value, row)``.
    """

    id: str
    header: HeaderRenderer = ""
    accessor: Accessor | None = None
    cell: CellRenderer | None = None
    sortable: bool = False
    width: int | None = None


@dataclass(frozen=True)
class CheckState:
    """Tri-state checkbox value derived from the current selection."""

    checked: bool = False
    indeterminate: bool = False
