"""Stable UI API surface."""

from __future__ import annotations

from tdv_ui.cli import app, ctx_store, main
from tdv_ui.tui.screens.browser_screen import BrowserState, TableBrowser
from tdv_ui.tui.system.components.table_layout import build_footer, build_rich_table
from tdv_ui.tui.system.facade import TUI
from tdv_ui.tui.system.headless import HeadlessUI

__all__ = [
    "app",
    "main",
    "ctx_store",
    "BrowserState",
    "HeadlessUI",
    "TUI",
    "TableBrowser",
    "build_footer",
    "build_rich_table",
]
