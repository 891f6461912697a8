"""structlog setup for llm_jobs."""

import logging

import structlog

from .config import get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure structlog with level filtering and a console renderer.

    Library code only calls ``structlog.get_logger``. Applications call this
    once at startup to get level filtering and console output.

    Args:
        level: Log level name. Defaults to ``LOG_LEVEL`` from settings.
    """
    level_name = (level or get_settings().LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )
