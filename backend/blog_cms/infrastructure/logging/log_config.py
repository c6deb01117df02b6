"""Centralized logging configuration.

Each settings field ``log_level_<category>`` drives the level of a group of
loggers, so SQL echo or access logs can be turned down without silencing
the article services (and vice versa).

Usage:
    from blog_cms.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from blog_cms.config import Settings, get_settings

# Settings field → logger names it controls
_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_app": ("blog_cms",),
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_http": ("httpx", "httpcore"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
}

_FORMATS = {
    "plain": "%(levelname)-8s %(name)s — %(message)s",
    "timestamped": "%(asctime)s %(levelname)-8s %(name)s — %(message)s",
}


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO


def _stderr_handler(settings: Settings) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    fmt = _FORMATS.get(settings.log_format, _FORMATS["timestamped"])
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply the configured levels; returns the level chosen per category."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    # uvicorn installs its own handler; bare test or script runs do not
    if not root.handlers:
        root.addHandler(_stderr_handler(settings))

    applied: dict[str, int] = {}
    for field_name, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, field_name, "INFO"))
        applied[field_name] = level
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level,
        ", ".join(f"{k.removeprefix('log_level_')}={logging.getLevelName(v)}" for k, v in applied.items()),
    )
    return applied
