"""ViewModel bridging a listing-backed table view to Qt signals."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from PySide6.QtCore import QObject, Signal

from tdv_app.api import ConfigService, ListingService, load_rows
from tdv_common.errors import TDVError
from tdv_table.api import TableRender, TabularDataView


class DataTableViewModel(QObject):
    """ViewModel for the data table widget.

    Owns the listing and its bound view. Every gesture goes through the view;
    once the listing has answered, the new snapshot is emitted.
    """

    # Signals
    render_changed = Signal(object)  # TableRender
    selection_changed = Signal(list)  # selected rows, across pages
    error_occurred = Signal(str)  # error message

    def __init__(
        self,
        listing: ListingService | None = None,
        config_service: ConfigService | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._config_service = config_service or ConfigService()
        self._listing: ListingService | None = None
        self._view: TabularDataView[Any] | None = None
        if listing is not None:
            self.set_listing(listing)

    @property
    def listing(self) -> ListingService | None:
        return self._listing

    @property
    def view(self) -> TabularDataView[Any] | None:
        return self._view

    @property
    def title(self) -> str:
        return self._listing.config.title if self._listing else ""

    @property
    def selected_rows(self) -> list[Any]:
        return self._listing.selected_rows if self._listing else []

    def load(self, data_path: Path, config_path: Path | None = None) -> bool:
        """Load a data file (and optional config). Returns True on success."""
        try:
            config = self._config_service.load_config(config_path)
            rows = load_rows(data_path)
        except TDVError as exc:
            self.error_occurred.emit(str(exc))
            return False
        self.set_listing(ListingService(rows, config))
        return True

    def set_listing(self, listing: ListingService) -> None:
        self._listing = listing
        view = listing.build_view()
        self._wrap(view, "on_pagination_change")
        self._wrap(view, "on_select_change")
        self._wrap(view, "on_sort")
        self._wrap(view, "on_check_box_change", selection=True)
        self._wrap(view, "on_indeterminate_check_box_change", selection=True)
        self._view = view
        self._emit_render()
        self.selection_changed.emit(self.selected_rows)

    def _wrap(self, view: TabularDataView[Any], name: str, *, selection: bool = False) -> None:
        handler: Callable[..., None] | None = getattr(view, name)

        def _wrapped(*args: Any) -> None:
            if handler is not None:
                handler(*args)
            self._emit_render()
            if selection:
                self.selection_changed.emit(self.selected_rows)

        setattr(view, name, _wrapped)

    def _emit_render(self) -> None:
        if self._view is not None:
            self.render_changed.emit(self._view.render())

    def current_render(self) -> TableRender | None:
        return self._view.render() if self._view is not None else None

    def _row(self, index: int) -> Any | None:
        if self._view is None or not 0 <= index < len(self._view.data):
            return None
        return self._view.data[index]

    # -- gestures ------------------------------------------------------

    def click_header(self, column_id: str) -> None:
        if self._view is not None:
            self._view.click_header(column_id)

    def change_page(self, page: int) -> None:
        if self._view is not None:
            self._view.change_page(page)

    def next_page(self) -> None:
        if self._view is not None:
            self._view.next_page()

    def previous_page(self) -> None:
        if self._view is not None:
            self._view.previous_page()

    def change_page_size(self, page_size: int) -> None:
        if self._view is not None:
            self._view.change_page_size(page_size)

    def toggle_row(self, index: int, checked: bool | None = None) -> None:
        row = self._row(index)
        if row is not None and self._view is not None:
            self._view.toggle_row(row, checked)

    def toggle_all(self) -> None:
        if self._view is not None:
            self._view.toggle_all()

    def toggle_expanded(self, index: int) -> None:
        row = self._row(index)
        if row is None or self._view is None:
            return
        if self._view.toggle_expanded(row) is not None:
            self._emit_render()

    def search(self, query: str) -> None:
        if self._listing is None or self._view is None:
            return
        self._listing.search(self._view, query)
        self._emit_render()
