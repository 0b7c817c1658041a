"""Caller-side services feeding table views."""

from tdv_app.services.config_service import ConfigService
from tdv_app.services.csv_export import export_rows_csv
from tdv_app.services.data_source import load_rows
from tdv_app.services.listing import ListingPage, ListingService

__all__ = [
    "ConfigService",
    "ListingPage",
    "ListingService",
    "export_rows_csv",
    "load_rows",
]
