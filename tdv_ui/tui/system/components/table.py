from rich.console import Console

from tdv_table.api import TableRender
from tdv_ui.tui.system.components.table_layout import build_footer, build_rich_table
from tdv_ui.tui.system.protocols import TablePresenter


class RichTablePresenter(TablePresenter):
    def __init__(self, console: Console):
        self._console = console

    def show(self, table: TableRender, *, title: str = "") -> None:
        self._console.print(build_rich_table(table, console=self._console, title=title))
        if table.footer is not None:
            self._console.print(build_footer(table.footer))
