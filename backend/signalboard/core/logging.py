"""
Logging configuration for the application.

Everything under the ``signalboard`` namespace logs through the root
handler; HTTP client chatter is kept at WARNING so per-request lines from
the signal source stay readable.
"""

import logging
import sys
from typing import Optional

from signalboard.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

QUIET_LOGGERS = {
    "uvicorn": logging.INFO,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


def setup_logging(level: Optional[str] = None) -> None:
    """Configure application logging. `level` overrides LOG_LEVEL."""
    level_name = (level or settings.LOG_LEVEL).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    if settings.DEBUG:
        logging.getLogger("signalboard").setLevel(logging.DEBUG)
