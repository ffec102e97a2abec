import logging

import structlog

from mojangid.config import settings


def configure_logging(level: str | None = None) -> None:
    """Install the JSON processor chain, dropping events below ``level``.

    Falls back to ``settings.log_level``. Applications call this once at
    startup; importing mojangid never touches structlog's global config.
    """
    level_name = (level or settings.log_level).upper()
    numeric = logging.getLevelName(level_name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level_name}")

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(),
    )
