from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

ALLOWED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def initial_level(environ: Mapping[str, str] | None = None) -> tuple[str, str | None]:
    """Return the level named by PLEDGE_LOG_LEVEL, INFO when unset.

    The second item is the raw value when it names no known level.
    """
    environ = os.environ if environ is None else environ
    raw = environ.get("PLEDGE_LOG_LEVEL")
    if raw is None or raw.strip() == "":
        return "INFO", None

    level = raw.strip().upper()
    if level not in ALLOWED_LOG_LEVELS:
        return "INFO", raw
    return level, None


logger = logging.getLogger(__package__)
if not logger.handlers:
    formatter = logging.Formatter(
        "[%(asctime)s] [%(name)s::%(threadName)s] [%(levelname)s]: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    level, invalid = initial_level()
    logger.setLevel(level)
    if invalid is not None:
        logger.warning("PLEDGE_LOG_LEVEL must be one of %s, got %r, using INFO", ALLOWED_LOG_LEVELS, invalid)
