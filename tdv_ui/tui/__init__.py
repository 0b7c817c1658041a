"""
UI adapter package providing Rich-based and headless renderers.
"""

from tdv_ui.tui.system.protocols import UI, TablePresenter, Presenter
from tdv_ui.tui.system.facade import TUI
from tdv_ui.tui.system.headless import HeadlessUI

__all__ = [
    "UI",
    "TUI",
    "HeadlessUI",
    "TablePresenter",
    "Presenter",
]
