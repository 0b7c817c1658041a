"""Reusable widgets for the GUI."""

from tdv_gui.widgets.data_table import DataTableWidget

__all__ = ["DataTableWidget"]
