"""Shared logging configuration using structlog.

Apart from the debug switch, everything is read from the environment:
``TDV_LOG_LEVEL``, ``TDV_LOG_JSON`` (render JSON lines) and ``TDV_LOG_FILE``
(also write to this file).
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

from tdv_common.config.env import parse_bool_env

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def _resolve_level(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return logging.WARNING
    if isinstance(value, int):
        return value
    if value.strip().isdigit():
        return int(value)
    return logging.getLevelNamesMapping().get(value.strip().upper(), logging.INFO)


def _handlers(formatter: logging.Formatter) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file = os.environ.get("TDV_LOG_FILE")
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure_logging(*, debug: bool = False, force: bool = False) -> None:
    """Route stdlib and structlog records through one structlog formatter.

    An already configured root logger is left alone unless ``force`` is set.
    """
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        return

    renderer: structlog.types.Processor
    if parse_bool_env(os.environ.get("TDV_LOG_JSON")):
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()
    formatter = structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_PRE_CHAIN)

    root_logger.handlers.clear()
    root_logger.setLevel(_resolve_level(os.environ.get("TDV_LOG_LEVEL"), debug))
    for handler in _handlers(formatter):
        root_logger.addHandler(handler)
