import logging

import structlog

from app.config import settings


def configure_logging(level: str | None = None, json_output: bool | None = None):
    """Configure structlog once at startup.

    Level and renderer come from settings unless overridden (tests pass them
    explicitly).
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    use_json = settings.LOG_JSON if json_output is None else json_output

    renderer = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )
