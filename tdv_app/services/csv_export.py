"""CSV export of listing rows."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, Iterable, Sequence

from tdv_common.errors import ExportError
from tdv_table.api import Column, render_cell, render_header

logger = logging.getLogger(__name__)


def export_rows_csv(
    rows: Iterable[Any],
    columns: Sequence[Column],
    output_path: Path,
) -> int:
    """Write rows as CSV using the column headers and cell renderers.

    Returns the number of data rows written.
    """
    materialized = list(rows)
    if not materialized:
        raise ExportError("Nothing to export", context={"path": output_path})
    if not columns:
        raise ExportError("No columns to export", context={"path": output_path})

    headers = [render_header(col) for col in columns]
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        # BOM keeps spreadsheet tools from guessing a legacy encoding.
        with output_path.open("w", newline="", encoding="utf-8-sig") as handle:
            writer = csv.writer(handle)
            writer.writerow(headers)
            for row in materialized:
                writer.writerow([render_cell(col, row) for col in columns])
    except OSError as exc:
        raise ExportError(
            f"Cannot write {output_path}", context={"path": output_path}, cause=exc
        ) from exc
    logger.info("Exported %d rows to %s", len(materialized), output_path)
    return len(materialized)
