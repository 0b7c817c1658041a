"""Load and resolve table view configuration."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from tdv_app.config import TableViewConfig
from tdv_common.config.env import parse_bool_env, parse_int_env, parse_int_list_env
from tdv_common.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_CONFIG_PATH = "TDV_CONFIG"


def _read_mapping(path: Path) -> Mapping[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigurationError(
            f"Config file {path} is not valid UTF-8", context={"path": path}, cause=exc
        ) from exc
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot read config file {path}", context={"path": path}, cause=exc
        ) from exc
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(
            f"Malformed config file {path}: {exc}", context={"path": path}, cause=exc
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping", context={"path": path}
        )
    return data


def apply_env_overrides(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Overlay TDV_* environment variables on raw config data."""
    page_sizes = parse_int_list_env(environ.get("TDV_PAGE_SIZES"))
    if page_sizes:
        data["page_sizes"] = page_sizes
    page_size = parse_int_env(environ.get("TDV_PAGE_SIZE"))
    if page_size is not None:
        data["default_page_size"] = page_size
    fuzzy = parse_bool_env(environ.get("TDV_FUZZY_SEARCH"))
    if fuzzy is not None:
        data["fuzzy_search"] = fuzzy
    return data


class ConfigService:
    """Resolve a TableViewConfig from a file, the environment and defaults."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def resolve_path(self, config_path: Path | None) -> Path | None:
        if config_path is not None:
            return config_path
        env_path = self._environ.get(ENV_CONFIG_PATH)
        return Path(env_path) if env_path else None

    def load_config(self, config_path: Path | None = None) -> TableViewConfig:
        path = self.resolve_path(config_path)
        data: dict[str, Any] = {}
        if path is not None:
            logger.debug("Loading table config from %s", path)
            data = dict(_read_mapping(path))
        data = apply_env_overrides(data, self._environ)
        try:
            return TableViewConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid table configuration: {exc}",
                context={"path": path},
                cause=exc,
            ) from exc
