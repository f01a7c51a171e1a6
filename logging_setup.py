"""
Logging bootstrap for the Koinos utilities.

One stderr handler on the root logger. Library modules only call
logging.getLogger(__name__); tools call configure_logging() early at
startup.
"""

import logging
import os
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_ENV = "KOINOS_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"


class KoinosStreamHandler(logging.StreamHandler):
    """Marker subclass so repeated configuration can find its own handler."""


def resolve_level(level: Optional[str]) -> int:
    """Map a level name to its number; unknown names fall back to WARNING.

    With no name, $KOINOS_LOG_LEVEL is read at call time.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LEVEL).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging; repeated calls only update the level.

    level: a logging level name such as "DEBUG"; defaults to
    $KOINOS_LOG_LEVEL or WARNING.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    # Only one handler of ours
    if any(isinstance(h, KoinosStreamHandler) for h in root.handlers):
        return

    handler = KoinosStreamHandler()
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
    root.addHandler(handler)
