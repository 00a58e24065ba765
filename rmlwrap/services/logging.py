"""
Logger implementation for rmlwrap diagnostics.

Workspace lifecycle, the rendered engine command and engine exit codes are
logged here. Nothing is emitted unless the settings enable a handler.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ClassVar

from ..core.interfaces.logger import ILogger


class RMLWrapLogger(ILogger):
    """Stdlib-backed logger writing to stderr and/or a rotating file."""

    DEFAULT_LOG_FILE_PATH = Path.home() / ".rmlwrap" / "rmlwrap.log"
    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 3

    LEVEL_MAP: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "rmlwrap",
        level: str = "warning",
        console_enabled: bool = False,
        file_enabled: bool = False,
        file_path: Path | None = None,
    ) -> None:
        """
        Args:
            name: Logger name
            level: One of debug, info, warning, error
            console_enabled: Enable stderr output
            file_enabled: Enable rotating file output
            file_path: Log file location (defaults to ~/.rmlwrap/rmlwrap.log)
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)  # Let handlers filter
        self._logger.handlers.clear()
        self._logger.propagate = False
        self._handlers: list[logging.Handler] = []

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        log_level = self.LEVEL_MAP.get(level.lower(), logging.WARNING)

        if console_enabled:
            self._add_handler(logging.StreamHandler(sys.stderr), formatter, log_level)

        if file_enabled:
            path = file_path or self.DEFAULT_LOG_FILE_PATH
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                path,
                maxBytes=self.MAX_FILE_SIZE,
                backupCount=self.BACKUP_COUNT,
                encoding="utf-8",
            )
            self._add_handler(handler, formatter, log_level)

    def _add_handler(self, handler: logging.Handler, formatter: logging.Formatter, level: int) -> None:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        self._logger.addHandler(handler)
        self._handlers.append(handler)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def close(self) -> None:
        """Detach and close all handlers."""
        for handler in self._handlers:
            self._logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()


class NullLogger(ILogger):
    """No-op logger used when nothing was bootstrapped."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass
