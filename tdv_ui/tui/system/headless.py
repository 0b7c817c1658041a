from dataclasses import dataclass, field

from tdv_table.api import TableRender
from tdv_ui.tui.system.components.presenter_base import PresenterBase, PresenterSink
from tdv_ui.tui.system.protocols import UI, TablePresenter


@dataclass
class RecordedTable:
    render: TableRender
    title: str = ""


@dataclass
class HeadlessUI(UI):
    recorded_tables: list[RecordedTable] = field(default_factory=list)
    recorded_messages: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.tables = _HeadlessTablePresenter(self)
        self.present = _HeadlessPresenter(self)


class _HeadlessTablePresenter(TablePresenter):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def show(self, table: TableRender, *, title: str = "") -> None:
        self._ui.recorded_tables.append(RecordedTable(table, title))


class _HeadlessPresenterSink(PresenterSink):
    def __init__(self, ui: HeadlessUI) -> None:
        self._ui = ui

    def emit(self, level: str, message: str) -> None:
        self._ui.recorded_messages.append(f"{level.upper()}: {message}")


class _HeadlessPresenter(PresenterBase):
    def __init__(self, ui: HeadlessUI) -> None:
        super().__init__(_HeadlessPresenterSink(ui))
