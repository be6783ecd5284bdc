# employee-directory-api/app/core/logging_config.py
import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging() -> None:
    """Configure the root logger. Only the first call installs a handler."""
    global _configured
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True
