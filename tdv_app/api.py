"""Stable application API surface."""

from tdv_app.config import ColumnConfig, SortConfig, TableViewConfig
from tdv_app.services import (
    ConfigService,
    ListingPage,
    ListingService,
    export_rows_csv,
    load_rows,
)

__all__ = [
    "ColumnConfig",
    "ConfigService",
    "ListingPage",
    "ListingService",
    "SortConfig",
    "TableViewConfig",
    "export_rows_csv",
    "load_rows",
]
