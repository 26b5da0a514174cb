"""
Logger configuration for the codeseg project.

This module bridges structlog into the standard logging module so library
consumers decide where chunking diagnostics end up. Nothing is configured on
import; call :func:`configure_logging` from an entry point.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import structlog
from structlog.stdlib import BoundLogger, ProcessorFormatter
from structlog.typing import Processor

from .settings import settings

_PRE_CHAIN: tuple[Processor, ...] = (
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.TimeStamper(fmt="iso"),
)


def _configure_structlog(min_level: int) -> None:
    structlog.configure(
        processors=_PRE_CHAIN + (ProcessorFormatter.wrap_for_formatter,),
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: Union[int, str, None] = None,
    enable_console: bool = True,
) -> None:
    """
    Configure global logging.

    Parameters
    ----------
    level:
        Base logging level for the root logger, as a number or a level name.
        Defaults to the configured ``log_level``.
    enable_console:
        When False, suppress log emission to stdout/stderr.
    """
    min_level = _resolve_level(settings.log_level if level is None else level)
    _configure_structlog(min_level)

    if enable_console:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(
            ProcessorFormatter(
                processor=structlog.dev.ConsoleRenderer(colors=False),
                foreign_pre_chain=_PRE_CHAIN,
            )
        )
    else:
        handler = logging.NullHandler()

    logging.basicConfig(level=min_level, handlers=[handler], force=True)


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Retrieve a structlog logger with the provided name."""
    return structlog.get_logger(name)
