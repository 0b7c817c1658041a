"""Table view configuration (columns, paging defaults, search)."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from tdv_table.api import DEFAULT_PAGE_SIZE, PAGE_SIZES, Column, SortOrder, column_from_key


class ColumnConfig(BaseModel):
    """Configuration for one displayed column."""

    key: str = Field(description="Row key or dotted path read by the column")
    header: Optional[str] = Field(default=None, description="Header label; derived from key when omitted")
    sortable: bool = Field(default=True, description="Whether header clicks sort by this column")
    width: Optional[int] = Field(default=None, gt=0, description="Fixed column width")

    def to_column(self) -> Column:
        return column_from_key(
            self.key, header=self.header, sortable=self.sortable, width=self.width
        )


class SortConfig(BaseModel):
    """Initial sort applied by the listing."""

    key: str = Field(default="", description="Column key to sort by")
    order: SortOrder = Field(default=SortOrder.NONE, description="asc, desc or empty for unsorted")


class TableViewConfig(BaseModel):
    """Top-level configuration for a listing table."""

    title: str = Field(default="Records", description="Title shown above the table")
    page_sizes: List[int] = Field(
        default_factory=lambda: list(PAGE_SIZES),
        description="Page sizes offered by the page-size selector",
    )
    default_page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0, description="Initial page size")
    default_sort: SortConfig = Field(default_factory=SortConfig, description="Initial sort")
    row_id_field: str = Field(default="id", description="Row key used as the row identifier")
    selectable: bool = Field(default=True, description="Render a selection checkbox column")
    search_fields: List[str] = Field(
        default_factory=list,
        description="Keys matched by the search query; all columns when empty",
    )
    fuzzy_search: bool = Field(default=False, description="Use fuzzy matching for the search query")
    fuzzy_score_cutoff: int = Field(default=60, ge=0, le=100, description="Minimum fuzzy score kept")
    expand_field: Optional[str] = Field(
        default=None,
        description="Row key shown in the expanded sub-row; rows without it cannot expand",
    )
    columns: List[ColumnConfig] = Field(
        default_factory=list,
        description="Displayed columns; inferred from the first row when empty",
    )

    @model_validator(mode="after")
    def validate_page_sizes(self) -> "TableViewConfig":
        if not self.page_sizes or any(size <= 0 for size in self.page_sizes):
            raise ValueError("TableViewConfig: 'page_sizes' must be positive integers")
        if self.default_page_size not in self.page_sizes:
            raise ValueError(
                f"TableViewConfig: default_page_size {self.default_page_size} "
                f"is not one of {self.page_sizes}"
            )
        return self

    def build_columns(self, sample_row: dict | None = None) -> list[Column]:
        """Return configured columns, or one column per key of ``sample_row``."""
        if self.columns:
            return [col.to_column() for col in self.columns]
        if not sample_row:
            return []
        return [column_from_key(str(key)) for key in sample_row.keys()]
