from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tdv_app.api import ConfigService
from tdv_common.api import configure_logging
from tdv_ui.tui.system.facade import TUI
from tdv_ui.tui.system.protocols import UI

__all__ = ["UIContext", "configure_logging"]


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily."""

    headless: bool = False
    debug: bool = False

    _ui: Optional[UI] = None
    _config_service: Optional[ConfigService] = None

    @property
    def ui(self) -> UI:
        if self._ui is None:
            if self.headless:
                from tdv_ui.tui.system.headless import HeadlessUI

                self._ui = HeadlessUI()
            else:
                self._ui = TUI()
        return self._ui

    @ui.setter
    def ui(self, value: UI):
        self._ui = value

    @property
    def config_service(self) -> ConfigService:
        if self._config_service is None:
            self._config_service = ConfigService()
        return self._config_service

    @config_service.setter
    def config_service(self, value: ConfigService):
        self._config_service = value
