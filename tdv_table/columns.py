"""Column accessors and header/cell resolution."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tdv_table.models import Column

SELECT_COLUMN_ID = "select"
SELECT_COLUMN_WIDTH = 48


def resolve_path(row: Any, path: str) -> Any:
    """Walk a dotted key path through mappings and attributes.

    Missing segments resolve to None instead of raising.
    """
    value: Any = row
    for segment in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(segment)
        else:
            value = getattr(value, segment, None)
    return value


def cell_value(column: Column[Any], row: Any) -> Any:
    """Return the raw value a column derives from a row."""
    accessor = column.accessor if column.accessor is not None else column.id
    if callable(accessor):
        return accessor(row)
    return resolve_path(row, accessor)


def render_cell(column: Column[Any], row: Any) -> str:
    """Return the display text for a cell; missing values render empty."""
    value = cell_value(column, row)
    if column.cell is not None:
        value = column.cell(value, row)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def render_header(column: Column[Any]) -> str:
    header = column.header
    if callable(header):
        return str(header(column))
    return header or column.id


def column_from_key(
    key: str,
    *,
    header: str | None = None,
    sortable: bool = True,
    width: int | None = None,
) -> Column[Any]:
    """Build a key-accessed column with a title-cased default header."""
    label = header if header is not None else key.split(".")[-1].replace("_", " ").title()
    return Column(id=key, header=label, accessor=key, sortable=sortable, width=width)
