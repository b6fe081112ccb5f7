"""Logging setup for the notice board service.

The root level comes from ``LOG_LEVEL``. Uvicorn's loggers and the snapshot
store each get their own level (``LOG_LEVEL_UVICORN``, ``LOG_LEVEL_STORAGE``),
so per-request access lines or per-write snapshot messages can be silenced
while the rest of the service keeps logging.
"""

import logging
import sys

from noticeboard.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Settings field -> logger names it controls.
_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_storage": [
        "noticeboard.infrastructure.storage",
    ],
}


def setup_logging() -> None:
    """Apply the configured levels. Runs once from the app lifespan."""
    settings = get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # Under uvicorn a handler already exists; a bare import does not get one.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Log levels: root=%s, uvicorn=%s, storage=%s",
        settings.log_level,
        settings.log_level_uvicorn,
        settings.log_level_storage,
    )


def _parse_level(raw: str) -> int:
    """Level name to ``logging`` constant. Unknown names fall back to INFO."""
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else logging.INFO
