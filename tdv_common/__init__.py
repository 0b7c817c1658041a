"""Shared helpers for tabular-data-view."""

from tdv_common.api import TDVError, configure_logging

__all__ = ["configure_logging", "TDVError"]
