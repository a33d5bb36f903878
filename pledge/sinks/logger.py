from __future__ import annotations

import logging
from typing import Any

from pledge.logging import logger as default_logger


class LoggerSink:
    def __init__(self, logger: logging.Logger | None = None, level: int = logging.WARNING) -> None:
        self._logger = logger or default_logger
        self._level = level

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def warn(self, *values: Any) -> None:
        # formatting is left to logging, which reports errors through Handler.handleError
        self._logger.log(self._level, " ".join(["%s"] * len(values)), *values)
