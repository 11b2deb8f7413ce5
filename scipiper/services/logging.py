"""
Diagnostic logging for scipiper.

Build progress meant for the user goes through the presenter. This logger
records what the sync layer did (imports, exports, cache transfers) for
later inspection, on stderr and/or in a rotating log file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ClassVar

from ..core.interfaces.logger import ILogger
from ..core.models.config import LoggingConfig


class ScipiperLogger(ILogger):
    """
    ILogger backed by a stdlib logger named ``scipiper``.

    Both handlers share one level, so ``set_level`` moves them together.
    """

    DEFAULT_LOG_FILE = Path.home() / ".scipiper" / "scipiper.log"
    MAX_FILE_SIZE = 5 * 1024 * 1024
    BACKUP_COUNT = 2
    FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

    LEVELS: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "scipiper",
        level: str = "warning",
        console_enabled: bool = False,
        file_enabled: bool = False,
        log_file: Path | None = None,
    ) -> None:
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()
        self._logger.propagate = False
        self._handlers: list[logging.Handler] = []

        if console_enabled:
            self._add_handler(logging.StreamHandler(sys.stderr))
        if file_enabled:
            path = log_file or self.DEFAULT_LOG_FILE
            path.parent.mkdir(parents=True, exist_ok=True)
            self._add_handler(
                RotatingFileHandler(path, maxBytes=self.MAX_FILE_SIZE, backupCount=self.BACKUP_COUNT)
            )
        self.set_level(level)

    @classmethod
    def from_config(cls, config: LoggingConfig, log_file: Path | None = None) -> "ScipiperLogger":
        return cls(
            level=config.level,
            console_enabled=config.console,
            file_enabled=config.file,
            log_file=log_file,
        )

    def _add_handler(self, handler: logging.Handler) -> None:
        handler.setFormatter(logging.Formatter(self.FORMAT, datefmt="%H:%M:%S"))
        self._logger.addHandler(handler)
        self._handlers.append(handler)

    @property
    def handlers(self) -> list[logging.Handler]:
        return list(self._handlers)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        """Set the threshold of every handler; unknown names mean warning."""
        threshold = self.LEVELS.get(level.lower(), logging.WARNING)
        for handler in self._handlers:
            handler.setLevel(threshold)


class NullLogger(ILogger):
    """Discards everything. The default when nothing was bootstrapped."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass
