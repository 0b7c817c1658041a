from typing import Protocol

from tdv_table.api import TableRender


class TablePresenter(Protocol):
    def show(self, table: TableRender, *, title: str = "") -> None: ...


class Presenter(Protocol):
    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...


class UI(Protocol):
    tables: TablePresenter
    present: Presenter
