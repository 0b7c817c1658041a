"""Tests for shared error helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from tdv_common.errors import (
    ConfigurationError,
    DataSourceError,
    ExportError,
    TDVError,
)

pytestmark = pytest.mark.unit_common


def test_to_dict_normalizes_context() -> None:
    err = DataSourceError(
        "boom",
        context={
            "path": Path("/tmp/rows.json"),
            "count": 3,
            "nested": {"value": Path("nested")},
            "items": [Path("a"), "b"],
        },
    )
    payload = err.to_dict()
    assert payload["type"] == "DataSourceError"
    assert payload["message"] == "boom"
    assert payload["context"]["path"].endswith("rows.json")
    assert payload["context"]["count"] == 3
    assert payload["context"]["nested"]["value"] == "nested"
    assert payload["context"]["items"] == ["a", "b"]


def test_cause_is_chained() -> None:
    cause = ValueError("bad")
    err = ExportError("failed", context={"path": "out.csv"}, cause=cause)
    assert isinstance(err, ExportError)
    assert isinstance(err, TDVError)
    assert err.__cause__ is cause
    assert err.context == {"path": "out.csv"}


def test_subclasses_share_base() -> None:
    for cls in (ConfigurationError, DataSourceError, ExportError):
        with pytest.raises(TDVError):
            raise cls("x")
