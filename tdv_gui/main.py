"""Console entrypoint for the GUI (tdv-gui)."""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> int:
    """Launch a window showing the data file given on the command line."""
    from tdv_common.api import configure_logging

    configure_logging()

    from PySide6.QtWidgets import QApplication, QMainWindow, QMessageBox

    from tdv_gui.viewmodels import DataTableViewModel
    from tdv_gui.widgets import DataTableWidget

    args = sys.argv[1:]
    if not args:
        print("usage: tdv-gui DATA_FILE [CONFIG_FILE]", file=sys.stderr)
        return 2

    app = QApplication(sys.argv)
    app.setApplicationName("Tabular Data View")

    vm = DataTableViewModel()
    vm.error_occurred.connect(lambda msg: QMessageBox.critical(None, "Error", msg))
    config_path = Path(args[1]) if len(args) > 1 else None
    if not vm.load(Path(args[0]), config_path):
        return 1

    window = QMainWindow()
    window.setWindowTitle(vm.title)
    window.setCentralWidget(DataTableWidget(vm))
    window.resize(900, 600)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
