"""Read row collections from JSON, YAML or CSV files."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from tdv_common.errors import DataSourceError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml", ".csv")


def _unwrap(payload: Any, path: Path) -> list[dict[str, Any]]:
    # API dumps commonly wrap the list as {"data": [...]}.
    if isinstance(payload, Mapping) and "data" in payload:
        payload = payload["data"]
    if not isinstance(payload, list):
        raise DataSourceError(
            f"{path} must contain a list of records", context={"path": path}
        )
    rows: list[dict[str, Any]] = []
    for idx, item in enumerate(payload):
        if not isinstance(item, Mapping):
            raise DataSourceError(
                f"Record {idx} in {path} is not a mapping",
                context={"path": path, "index": idx},
            )
        rows.append(dict(item))
    return rows


def _read_csv(path: Path) -> list[dict[str, Any]]:
    with path.open(newline="", encoding="utf-8-sig") as handle:
        return [dict(row) for row in csv.DictReader(handle)]


def load_rows(path: Path) -> list[dict[str, Any]]:
    """Load a list of records from ``path``, dispatching on the suffix."""
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise DataSourceError(
            f"Unsupported data file type '{suffix}'",
            context={"path": path, "supported": list(SUPPORTED_SUFFIXES)},
        )
    try:
        if suffix == ".csv":
            rows = _read_csv(path)
        else:
            text = path.read_text(encoding="utf-8")
            payload = json.loads(text) if suffix == ".json" else yaml.safe_load(text)
            rows = _unwrap(payload, path)
    except OSError as exc:
        raise DataSourceError(
            f"Cannot read {path}", context={"path": path}, cause=exc
        ) from exc
    except (json.JSONDecodeError, yaml.YAMLError, csv.Error, UnicodeDecodeError) as exc:
        raise DataSourceError(
            f"Malformed data file {path}: {exc}", context={"path": path}, cause=exc
        ) from exc
    logger.debug("Loaded %d rows from %s", len(rows), path)
    return rows
