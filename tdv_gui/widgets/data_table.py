"""Data table widget with pager footer."""

from __future__ import annotations

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from tdv_gui.viewmodels.table_vm import DataTableViewModel
from tdv_table.api import BodyKind, HeaderCell, TableRender

SORT_ARROWS = {"asc": " ▲", "desc": " ▼", "": ""}
SKELETON_TEXT = "░░░░░░"


def header_text(cell: HeaderCell) -> str:
    if cell.is_select:
        return ""
    return cell.label + SORT_ARROWS.get(cell.sort_order.value, "")


class DataTableWidget(QWidget):
    """Draws TableRender snapshots and forwards gestures to the viewmodel."""

    def __init__(self, viewmodel: DataTableViewModel, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._vm = viewmodel
        self._render: TableRender | None = None
        # Table row -> index into the page data; None for sub rows and placeholders.
        self._row_map: list[int | None] = []
        self._drawing = False
        self._setup_ui()
        self._connect_signals()
        current = self._vm.current_render()
        if current is not None:
            self._on_render_changed(current)

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search...")
        layout.addWidget(self.search_edit)

        self.table = QTableWidget()
        self.table.verticalHeader().setVisible(False)
        self.table.setAlternatingRowColors(True)
        self.table.setShowGrid(False)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.horizontalHeader().setStretchLastSection(True)
        layout.addWidget(self.table, stretch=1)

        footer = QHBoxLayout()
        self.total_label = QLabel()
        footer.addWidget(self.total_label)
        footer.addStretch()
        self.prev_btn = QPushButton("‹")
        self.page_label = QLabel()
        self.next_btn = QPushButton("›")
        self.size_combo = QComboBox()
        footer.addWidget(self.prev_btn)
        footer.addWidget(self.page_label)
        footer.addWidget(self.next_btn)
        footer.addWidget(self.size_combo)
        self.footer_widget = QWidget()
        self.footer_widget.setLayout(footer)
        layout.addWidget(self.footer_widget)

    def _connect_signals(self) -> None:
        self._vm.render_changed.connect(self._on_render_changed)
        self.search_edit.textChanged.connect(self._vm.search)
        self.table.horizontalHeader().sectionClicked.connect(self._on_header_clicked)
        self.table.itemChanged.connect(self._on_item_changed)
        self.table.cellDoubleClicked.connect(self._on_cell_double_clicked)
        self.prev_btn.clicked.connect(self._vm.previous_page)
        self.next_btn.clicked.connect(self._vm.next_page)
        self.size_combo.activated.connect(self._on_size_activated)

    @property
    def selectable(self) -> bool:
        return bool(self._render and self._render.header and self._render.header[0].is_select)

    def data_index(self, table_row: int) -> int | None:
        if 0 <= table_row < len(self._row_map):
            return self._row_map[table_row]
        return None

    # -- drawing -------------------------------------------------------

    def _on_render_changed(self, render: TableRender) -> None:
        self._render = render
        self._drawing = True
        try:
            self._draw_header(render)
            self._draw_body(render)
            self._draw_footer(render)
        finally:
            self._drawing = False

    def _draw_header(self, render: TableRender) -> None:
        self.table.setColumnCount(len(render.header))
        self.table.setHorizontalHeaderLabels([header_text(cell) for cell in render.header])
        header = self.table.horizontalHeader()
        for idx, cell in enumerate(render.header):
            if cell.width:
                header.setSectionResizeMode(idx, QHeaderView.ResizeMode.Fixed)
                self.table.setColumnWidth(idx, cell.width)
            else:
                header.setSectionResizeMode(idx, QHeaderView.ResizeMode.ResizeToContents)
        if self.selectable:
            item = QTableWidgetItem()
            state = render.header[0].check_state
            if state is not None and state.indeterminate:
                item.setText("–")
            elif state is not None and state.checked:
                item.setText("✓")
            self.table.setHorizontalHeaderItem(0, item)

    def _draw_body(self, render: TableRender) -> None:
        self.table.clearSpans()
        self._row_map = []
        width = max(1, render.column_count)

        if render.body is BodyKind.SKELETON:
            self.table.setRowCount(render.skeleton_rows)
            for r in range(render.skeleton_rows):
                self._row_map.append(None)
                for c in range(width):
                    self.table.setItem(r, c, QTableWidgetItem(SKELETON_TEXT))
            return

        if render.body is BodyKind.EMPTY:
            self.table.setRowCount(1)
            self._row_map.append(None)
            item = QTableWidgetItem(render.empty_message)
            item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
            self.table.setItem(0, 0, item)
            if width > 1:
                self.table.setSpan(0, 0, 1, width)
            return

        self.table.setRowCount(len(render.rows) + render.sub_row_count)
        offset = 1 if self.selectable else 0
        r = 0
        for idx, row in enumerate(render.rows):
            self._row_map.append(idx)
            if self.selectable:
                check = QTableWidgetItem()
                check.setFlags(Qt.ItemFlag.ItemIsUserCheckable | Qt.ItemFlag.ItemIsEnabled)
                check.setCheckState(
                    Qt.CheckState.Checked if row.checked else Qt.CheckState.Unchecked
                )
                self.table.setItem(r, 0, check)
            for c, text in enumerate(row.cells):
                if c == 0 and row.can_expand:
                    text = ("▾ " if row.expanded else "▸ ") + text
                item = QTableWidgetItem(text)
                if render.overlay:
                    item.setForeground(Qt.GlobalColor.gray)
                self.table.setItem(r, c + offset, item)
            r += 1
            if row.has_sub_row:
                self._row_map.append(None)
                self.table.setItem(r, 0, QTableWidgetItem(str(row.sub_content)))
                if width > 1:
                    self.table.setSpan(r, 0, 1, width)
                r += 1

    def _draw_footer(self, render: TableRender) -> None:
        footer = render.footer
        self.footer_widget.setVisible(footer is not None)
        if footer is None:
            return
        self.total_label.setText(f"Total {footer.total}")
        self.page_label.setText(f"{footer.page_index} / {footer.page_count}")
        self.prev_btn.setEnabled(not render.overlay and footer.page_index > 1)
        self.next_btn.setEnabled(not render.overlay and footer.page_index < footer.page_count)

        self.size_combo.blockSignals(True)
        self.size_combo.clear()
        for option in footer.page_size_options:
            self.size_combo.addItem(option.label, option.value)
        if footer.selected_option is not None:
            self.size_combo.setCurrentIndex(self.size_combo.findData(footer.selected_option.value))
        self.size_combo.blockSignals(False)

    # -- gestures ------------------------------------------------------

    def _on_header_clicked(self, section: int) -> None:
        if self._render is None or not 0 <= section < len(self._render.header):
            return
        cell = self._render.header[section]
        if cell.is_select:
            self._vm.toggle_all()
        else:
            self._vm.click_header(cell.id)

    def _on_item_changed(self, item: QTableWidgetItem) -> None:
        if self._drawing or not self.selectable or item.column() != 0:
            return
        index = self.data_index(item.row())
        if index is None:
            return
        checked = item.checkState() == Qt.CheckState.Checked
        # Redraw replaces the item, so let its change notification finish first.
        QTimer.singleShot(0, lambda: self._vm.toggle_row(index, checked))

    def _on_cell_double_clicked(self, row: int, _column: int) -> None:
        index = self.data_index(row)
        if index is not None:
            self._vm.toggle_expanded(index)

    def _on_size_activated(self, combo_index: int) -> None:
        value = self.size_combo.itemData(combo_index)
        if value is not None:
            self._vm.change_page_size(int(value))
