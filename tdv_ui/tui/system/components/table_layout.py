from __future__ import annotations

import shutil
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from tdv_table.api import BodyKind, FooterRender, HeaderCell, TableRender
from tdv_ui.tui.core import theme

_Line = tuple[list[Any], str | None]


def _console_width(console: Console) -> int | None:
    try:
        width = int(getattr(console.size, "width"))
        if width > 0:
            return width
    except (AttributeError, TypeError, ValueError):
        pass
    width = int(shutil.get_terminal_size(fallback=(100, 24)).columns)
    return width if width > 0 else None


def header_label(cell: HeaderCell) -> str:
    if cell.is_select:
        return theme.checkbox(cell.check_state)
    if cell.sortable:
        return f"{cell.label} {theme.sort_indicator(cell.sort_order)}"
    return cell.label


def _plain(value: Any) -> Any:
    # Cell text and checkbox glyphs such as "[x]" must not be read as markup.
    if isinstance(value, str):
        return Text(value)
    return value


def _sub_content(content: Any) -> Any:
    if hasattr(content, "__rich_console__"):
        return content
    return f"↳ {content}"


def body_lines(render: TableRender, *, cursor_row: int | None = None) -> list[_Line]:
    """Flatten the render snapshot into table lines and their row styles."""
    width = render.column_count
    if width == 0:
        return []

    if render.body is BodyKind.SKELETON:
        cell = theme.SKELETON_CHAR * 6
        return [([cell] * width, theme.SKELETON_STYLE) for _ in range(render.skeleton_rows)]

    if render.body is BodyKind.EMPTY:
        message = f"{theme.EMPTY_ICON} {render.empty_message}"
        return [([message] + [""] * (width - 1), theme.EMPTY_STYLE)]

    selectable = bool(render.header) and render.header[0].is_select
    has_expander = any(row.can_expand for row in render.rows)
    lines: list[_Line] = []
    for idx, row in enumerate(render.rows):
        cells: list[Any] = list(row.cells)
        if has_expander and cells:
            if row.can_expand:
                glyph = theme.EXPANDER_OPEN if row.expanded else theme.EXPANDER_CLOSED
            else:
                glyph = " "
            cells[0] = f"{glyph} {cells[0]}"
        if selectable:
            cells.insert(0, theme.checkbox(row.checked))
        style = theme.OVERLAY_ROW_STYLE if render.overlay else None
        if cursor_row is not None and idx == cursor_row:
            style = theme.CURSOR_ROW_STYLE
        lines.append((cells, style))
        if row.has_sub_row:
            # Rich has no column spans; the sub content sits in the first cell.
            sub: list[Any] = [_sub_content(row.sub_content)] + [""] * (width - 1)
            lines.append((sub, theme.SUB_ROW_STYLE))
    return lines


def build_rich_table(
    render: TableRender,
    *,
    console: Console,
    title: str = "",
    cursor_row: int | None = None,
    cursor_column: str | None = None,
    show_lines: bool = False,
    border_style: str = theme.RICH_BORDER_STYLE,
    header_style: str = theme.RICH_ACCENT_BOLD,
    title_style: str = theme.RICH_ACCENT_BOLD,
    box_style: box.Box = box.ROUNDED,
) -> Table:
    """
    Build a Rich Table from a render snapshot that fits the current terminal width.

    Columns are rendered as single-line and truncated with ellipsis when needed.
    """
    term_width = _console_width(console)
    max_table_width = max(40, (term_width - 2) if term_width else 100)
    min_col_width = 3

    # Caller text is never parsed as markup; only the overlay suffix is.
    title_text = Text(title)
    if render.overlay:
        title_text.append_text(Text.from_markup(theme.OVERLAY_TITLE_SUFFIX))
    title_text.no_wrap = True
    title_text.overflow = "ellipsis"
    title_max = max(10, max_table_width - 6)
    if len(title_text) > title_max:
        title_text.truncate(title_max, overflow="ellipsis")

    rich_table = Table(
        title=title_text if title_text.plain else None,
        show_lines=show_lines,
        expand=False,
        box=box_style,
        border_style=border_style,
        header_style=header_style,
        title_style=title_style,
    )

    labels = [header_label(cell) for cell in render.header]
    lines = body_lines(render, cursor_row=cursor_row)

    def _cell_width(value: Any) -> int:
        if not isinstance(value, str):
            return 0
        return max((len(line) for line in value.splitlines()), default=0)

    column_count = max(1, len(labels))
    # Rough overhead for borders + separators + padding.
    overhead = 4 + (column_count - 1) * 3

    desired: list[int] = []
    for idx, cell in enumerate(render.header):
        if cell.width:
            # Widths are given in pixels; assume roughly 8px per character.
            desired.append(max(min_col_width, cell.width // 8))
            continue
        max_len = _cell_width(labels[idx])
        for cells, _ in lines:
            if idx < len(cells):
                max_len = max(max_len, _cell_width(cells[idx]))
        desired.append(max(min_col_width, min(max_len, max_table_width)))

    # Shrink widest columns until the approximate total fits.
    while desired and sum(desired) + overhead > max_table_width:
        widest = max(range(len(desired)), key=lambda i: desired[i])
        if desired[widest] <= min_col_width:
            break
        desired[widest] -= 1

    for idx, cell in enumerate(render.header):
        label = Text(labels[idx])
        if cursor_column is not None and cell.id == cursor_column:
            label.stylize("underline")
        rich_table.add_column(
            label,
            overflow="ellipsis",
            no_wrap=True,
            min_width=min_col_width,
            max_width=desired[idx] if idx < len(desired) else None,
        )
    for cells, style in lines:
        rich_table.add_row(*(_plain(cell) for cell in cells), style=style)
    return rich_table


def build_footer(footer: FooterRender) -> Text:
    """Render the pager and page-size selector as one line."""
    text = Text()
    text.append("‹ ", style="dim" if footer.page_index <= 1 else "")
    for item in footer.pager:
        if item is None:
            text.append("… ")
            continue
        style = theme.CURRENT_PAGE_STYLE if item == footer.page_index else ""
        text.append(f"{item}", style=style)
        text.append(" ")
    text.append("›", style="dim" if footer.page_index >= footer.page_count else "")
    text.append(f"   Total {footer.total}   ")
    label = footer.selected_option.label if footer.selected_option else f"{footer.page_size} / page"
    text.append(f"[{label}]", style=theme.RICH_ACCENT_BOLD)
    return text
