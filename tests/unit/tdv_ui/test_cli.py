"""CLI unit tests for show/export/browse."""

from __future__ import annotations

import csv
import importlib
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tdv_app.api import ConfigService
from tdv_table.api import BodyKind
from tdv_ui.cli import app, ctx_store
from tdv_ui.tui import HeadlessUI

pytestmark = [pytest.mark.unit_ui]


@pytest.fixture
def ui(monkeypatch: pytest.MonkeyPatch) -> HeadlessUI:
    headless = HeadlessUI()
    monkeypatch.setattr(ctx_store, "_ui", headless)
    # Avoid reading TDV_* variables from the developer environment.
    monkeypatch.setattr(ctx_store, "_config_service", ConfigService(environ={}))
    cli_main = importlib.import_module("tdv_ui.cli.main")
    monkeypatch.setattr(cli_main, "configure_logging", lambda **_kwargs: None)
    return headless


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    rows = [
        {"id": i, "name": f"user {i:02d}", "team": "red" if i % 2 else "blue", "notes": f"note {i}"}
        for i in range(1, 26)
    ]
    path = tmp_path / "rows.json"
    path.write_text(json.dumps({"data": rows}))
    return path


def test_show_first_page(ui: HeadlessUI, data_file: Path) -> None:
    result = CliRunner().invoke(app, ["--headless", "show", str(data_file)])
    assert result.exit_code == 0, result.output
    recorded = ui.recorded_tables[-1]
    assert recorded.title == "Records"
    render = recorded.render
    assert render.body is BodyKind.ROWS
    assert len(render.rows) == 10
    assert render.footer.page_count == 3
    assert render.footer.selected_option.label == "10 / page"


def test_show_sorted_filtered_page(ui: HeadlessUI, data_file: Path) -> None:
    result = CliRunner().invoke(
        app,
        [
            "--headless",
            "show",
            str(data_file),
            "--query",
            "blue",
            "--sort",
            "name",
            "--order",
            "desc",
            "--page-size",
            "25",
        ],
    )
    assert result.exit_code == 0, result.output
    render = ui.recorded_tables[-1].render
    assert [row.row_id for row in render.rows][:3] == [24, 22, 20]
    assert render.footer.total == 12
    assert render.footer.page_size == 25


def test_show_select_and_expand(ui: HeadlessUI, data_file: Path, tmp_path: Path) -> None:
    config = tmp_path / "table.yaml"
    config.write_text("title: Users\nexpand_field: notes\n")
    result = CliRunner().invoke(
        app,
        [
            "--headless",
            "show",
            str(data_file),
            "--config",
            str(config),
            "--select",
            "2",
            "--select",
            "3",
            "--expand",
            "4",
        ],
    )
    assert result.exit_code == 0, result.output
    recorded = ui.recorded_tables[-1]
    assert recorded.title == "Users"
    render = recorded.render
    assert [row.row_id for row in render.rows if row.checked] == [2, 3]
    assert render.header[0].check_state.indeterminate is True
    assert render.sub_row_count == 1
    assert ui.recorded_messages[-1] == "INFO: 2 row(s) selected"


def test_show_missing_file_reports_error(ui: HeadlessUI, tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["--headless", "show", str(tmp_path / "nope.json")])
    assert result.exit_code == 1
    assert ui.recorded_messages[-1].startswith("ERROR: Cannot read")


def test_show_rejects_bad_order(ui: HeadlessUI, data_file: Path) -> None:
    result = CliRunner().invoke(
        app, ["--headless", "show", str(data_file), "--sort", "name", "--order", "up"]
    )
    assert result.exit_code != 0


def test_export_writes_all_matching_rows(ui: HeadlessUI, data_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "out" / "red.csv"
    result = CliRunner().invoke(
        app,
        ["--headless", "export", str(data_file), "--out", str(out), "--query", "red"],
    )
    assert result.exit_code == 0, result.output
    with out.open(encoding="utf-8-sig", newline="") as handle:
        records = list(csv.reader(handle))
    assert records[0] == ["Id", "Name", "Team", "Notes"]
    assert len(records) == 14
    assert ui.recorded_messages[-1] == f"SUCCESS: Exported 13 row(s) to {out}"


def test_export_nothing_matching_fails(ui: HeadlessUI, data_file: Path, tmp_path: Path) -> None:
    result = CliRunner().invoke(
        app,
        ["--headless", "export", str(data_file), "--out", str(tmp_path / "x.csv"), "-q", "zzz"],
    )
    assert result.exit_code == 1
    assert ui.recorded_messages[-1] == "ERROR: Nothing to export"


def test_browse_requires_terminal(ui: HeadlessUI, data_file: Path) -> None:
    result = CliRunner().invoke(app, ["--headless", "browse", str(data_file)])
    assert result.exit_code == 1
    assert "interactive terminal" in ui.recorded_messages[-1]


def test_show_undecodable_file_reports_error(ui: HeadlessUI, tmp_path: Path) -> None:
    path = tmp_path / "rows.csv"
    path.write_bytes(b"id,name\n1,\xff\xfe\n")
    result = CliRunner().invoke(app, ["--headless", "show", str(path)])
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert ui.recorded_messages[-1].startswith("ERROR: Malformed data file")


def test_show_page_past_the_end_shows_last_page(ui: HeadlessUI, data_file: Path) -> None:
    result = CliRunner().invoke(app, ["--headless", "show", str(data_file), "--page", "9"])
    assert result.exit_code == 0, result.output
    footer = ui.recorded_tables[-1].render.footer
    assert footer.page_index == 3
    assert [row.row_id for row in ui.recorded_tables[-1].render.rows] == [21, 22, 23, 24, 25]
    assert ui.recorded_messages[-1] == "WARNING: Page 9 is past the last page; showing page 3"


def test_failure_logs_error_context(
    ui: HeadlessUI, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    missing = tmp_path / "nope.json"
    with caplog.at_level("DEBUG", logger="tdv_ui.cli.commands.table"):
        result = CliRunner().invoke(app, ["--headless", "show", str(missing)])
    assert result.exit_code == 1
    assert "DataSourceError" in caplog.text
    assert str(missing) in caplog.text
