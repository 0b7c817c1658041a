"""Public API surface for tdv_common."""

from tdv_common.errors import (
    ConfigurationError,
    DataSourceError,
    ExportError,
    TDVError,
)
from tdv_common.logging import configure_logging

__all__ = [
    "configure_logging",
    "ConfigurationError",
    "DataSourceError",
    "ExportError",
    "TDVError",
]
