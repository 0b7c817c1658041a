from __future__ import annotations

from typing import Mapping

from rich.markup import escape

from tdv_table.api import CheckState, SortOrder

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT

SKELETON_CHAR = "░"
SKELETON_STYLE = "dim"
OVERLAY_ROW_STYLE = "dim"
OVERLAY_TITLE_SUFFIX = " [dim](refreshing…)[/dim]"
EMPTY_ICON = "∅"
EMPTY_STYLE = "bold"
SUB_ROW_STYLE = "italic"
CURSOR_ROW_STYLE = "reverse"
CURRENT_PAGE_STYLE = "bold reverse"

SORT_INDICATORS: dict[SortOrder, str] = {
    SortOrder.ASC: "▲",
    SortOrder.DESC: "▼",
    SortOrder.NONE: "⇅",
}

EXPANDER_OPEN = "▾"
EXPANDER_CLOSED = "▸"

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}


def checkbox(state: CheckState | bool | None) -> str:
    if isinstance(state, CheckState):
        if state.checked:
            return "[x]"
        return "[-]" if state.indeterminate else "[ ]"
    return "[x]" if state else "[ ]"


def sort_indicator(order: SortOrder) -> str:
    return SORT_INDICATORS[order]


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=escape(message))


def prompt_toolkit_browser_style() -> Mapping[str, str]:
    return {
        "header": "bold",
        "search": "bg:#eeeeee fg:#000000",
        "separator": "fg:#0000aa",
        "hint": "fg:#888888 italic",
    }
