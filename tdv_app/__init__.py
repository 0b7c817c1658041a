"""Listing services that own query state for table views."""

from tdv_app.api import ListingService, TableViewConfig

__all__ = ["ListingService", "TableViewConfig"]
