import logging
import os
import sys
from typing import IO, Optional

LOG_LEVEL_ENV = "TRMAP_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, stream: Optional[IO[str]] = None) -> logging.Handler:
    """Send log records to stderr (or ``stream``) through one root handler.

    stdout is left for command output such as ``trmap export``, which must
    stay machine readable. TRMAP_LOG_LEVEL overrides ``level`` when set.
    Returns the installed handler.
    """
    level_name = os.getenv(LOG_LEVEL_ENV)
    if level_name:
        level = getattr(logging, level_name.upper(), level)

    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(level)
    # Replace handlers from earlier calls so repeated CLI runs don't duplicate output
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    return handler
