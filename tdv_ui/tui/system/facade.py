from rich.console import Console

from tdv_ui.tui.system.components.presenter import RichPresenter
from tdv_ui.tui.system.components.table import RichTablePresenter
from tdv_ui.tui.system.protocols import UI, Presenter, TablePresenter


class TUI(UI):
    def __init__(self, console: Console | None = None):
        self._console = console or Console()
        self.tables: TablePresenter = RichTablePresenter(self._console)
        self.present: Presenter = RichPresenter(self._console)

    @property
    def console(self) -> Console:
        return self._console
