"""Tests for the UI facades."""

from __future__ import annotations

import pytest
from rich.console import Console

from tdv_table.api import Column, PagingData, TabularDataView
from tdv_ui.tui import TUI, HeadlessUI

pytestmark = pytest.mark.unit_ui


def _render():
    view = TabularDataView([Column(id="name", header="Name")])
    view.update([{"id": 1, "name": "Ada"}], paging_data=PagingData(total=1))
    return view.render()


def test_headless_ui_records_tables_and_messages() -> None:
    ui = HeadlessUI()
    render = _render()
    ui.tables.show(render, title="People")
    ui.present.info("hello")
    ui.present.error("boom")

    assert ui.recorded_tables[0].render is render
    assert ui.recorded_tables[0].title == "People"
    assert ui.recorded_messages == ["INFO: hello", "ERROR: boom"]


def test_tui_prints_table_footer_and_messages() -> None:
    console = Console(width=80, record=True, color_system=None)
    ui = TUI(console)
    ui.tables.show(_render(), title="People")
    ui.present.success("done")
    text = console.export_text()
    assert "Ada" in text
    assert "Total 1" in text
    assert "✔ done" in text
    assert ui.console is console
