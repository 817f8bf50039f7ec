"""Logging setup driven by ObservabilityConfig.

Modules log through ``logging.getLogger(__name__)`` and pass context
with ``extra={...}``. Plain text output drops that context; the JSON
formatter keeps every extra key as a top-level field.
"""

from __future__ import annotations

import logging
from typing import Optional

from pythonjsonlogger import jsonlogger

from .config import ObservabilityConfig, get_config

ROOT_LOGGER = "journey_planner"


def _parse_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling this again replaces the handler, so reconfiguring in tests
    or after a settings change does not duplicate output.

    Args:
        config: Observability settings (defaults to the global config).

    Returns:
        The configured package logger.
    """
    config = config or get_config().observability
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(_parse_level(config.level))
    logger.propagate = False

    for handler in list(logger.handlers):
        if getattr(handler, "_journey_planner", False):
            logger.removeHandler(handler)

    formatter: logging.Formatter
    if config.structured:
        formatter = jsonlogger.JsonFormatter(config.format)
    else:
        formatter = logging.Formatter(config.format)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler._journey_planner = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
