"""ViewModels for the GUI."""

from tdv_gui.viewmodels.table_vm import DataTableViewModel

__all__ = ["DataTableViewModel"]
