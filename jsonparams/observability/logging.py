from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from jsonparams.config import Settings

PARAMS_LOGGER = "params_parser"

_CONFIGURED = False


def _level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _renderer(log_format: str) -> Any:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def configure_logging(settings: Settings, force: bool = False) -> logging.Handler | None:
    """Route structlog and stdlib records through one handler on stdout.

    Parse failures go to the `params_parser` logger, whose level comes from
    PARAMS_LOG_LEVEL and falls back to LOG_LEVEL. Only the first call takes
    effect unless `force` is set.
    """

    global _CONFIGURED
    if _CONFIGURED and not force:
        return None

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=_renderer(settings.log_format), foreign_pre_chain=pre_chain)
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(_level(settings.log_level))

    logging.getLogger(PARAMS_LOGGER).setLevel(_level(settings.params_log_level or settings.log_level))

    # uvicorn installs its own handlers; keep its output in the same format.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.propagate = False
        logger.setLevel(_level(settings.log_level))

    _CONFIGURED = True
    return handler
