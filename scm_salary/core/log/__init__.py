"""Logging for downloader runs: rich console output plus one log file per day.

Records pass through a queue so the per-occupation loop never blocks on file
or terminal I/O. Both sinks prefix records with the bound ``log_context``.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import SimpleQueue
from threading import RLock

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from .context import ContextFilter, log_context
from .progress import progress_manager
from .timing import timeit

__all__ = [
    "init_logging",
    "get_logger",
    "shutdown_logging",
    "log_context",
    "progress_manager",
    "timeit",
]

DEFAULT_APP_NAME = "scm_salary"
_FILE_FORMAT = "[%(asctime)s] %(levelname)s: %(name)s | %(context)s%(message)s"
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class _LogSetup:
    app_name: str
    level: int
    log_dir: Path


_lock = RLock()
_active: _LogSetup | None = None
_listener: QueueListener | None = None
_context_filter = ContextFilter()


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


class DailyFileHandler(logging.FileHandler):
    """Append to ``<dir>/YYYY_MM_DD.log``, switching files at midnight."""

    def __init__(self, directory: Path, *, encoding: str = "utf-8") -> None:
        self.directory = directory
        self.directory.mkdir(parents=True, exist_ok=True)
        self._day: date = datetime.now().date()
        super().__init__(self._path_for(self._day), mode="a", encoding=encoding)

    def _path_for(self, day: date) -> Path:
        return self.directory / f"{day:%Y_%m_%d}.log"

    def emit(self, record: logging.LogRecord) -> None:
        day = datetime.fromtimestamp(record.created).date()
        if day != self._day:
            self._day = day
            if self.stream:
                self.stream.close()
                self.stream = None  # reopened by FileHandler.emit
            self.baseFilename = os.fspath(self._path_for(day))
        super().emit(record)


def _console_handler(console: Console, level: int) -> logging.Handler:
    handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        show_path=False,
        markup=False,
        log_time_format=_TIME_FORMAT,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(context)s%(message)s"))
    handler.addFilter(_context_filter)
    return handler


def _file_handler(directory: Path, level: int) -> logging.Handler:
    handler = DailyFileHandler(directory)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_TIME_FORMAT))
    handler.addFilter(_context_filter)
    return handler


def init_logging(
    *,
    app_name: str = DEFAULT_APP_NAME,
    level: str | int | None = None,
    log_dir: str | Path | None = None,
) -> None:
    """Route all logging to the console and the daily file for this process.

    ``level`` and ``log_dir`` fall back to ``LOG_LEVEL`` and ``LOG_DIR``.
    Calling again with the same arguments is a no-op.
    """

    global _active, _listener

    setup = _LogSetup(
        app_name=app_name,
        level=_parse_level(level if level is not None else os.getenv("LOG_LEVEL", "INFO")),
        log_dir=Path(log_dir or os.getenv("LOG_DIR", "logs")),
    )

    with _lock:
        if _active == setup:
            return
        _teardown_locked()

        install_rich_traceback(show_locals=False)
        console = Console(stderr=True)
        progress_manager.use_console(console)
        handlers = [
            _console_handler(console, setup.level),
            _file_handler(setup.log_dir, setup.level),
        ]

        log_queue: SimpleQueue = SimpleQueue()
        queue_handler = QueueHandler(log_queue)
        queue_handler.setLevel(setup.level)
        # Resolve the context on the calling thread before the record is queued.
        queue_handler.addFilter(_context_filter)

        root = logging.getLogger()
        root.setLevel(logging.NOTSET)
        root.addHandler(queue_handler)
        _listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
        _listener.start()

        for noisy in ("httpx", "httpcore"):
            logging.getLogger(noisy).setLevel(max(setup.level, logging.WARNING))

        _active = setup


def _teardown_locked() -> None:
    global _active, _listener
    if _listener is not None:
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
    _listener = None
    _active = None
    progress_manager.reset_console()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, QueueHandler):
            root.removeHandler(handler)
            handler.close()


def shutdown_logging() -> None:
    """Drain the queue and close log files; safe to call when never initialised."""

    with _lock:
        _teardown_locked()


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a named logger; handlers are attached by ``init_logging``."""

    return logging.getLogger(name or (_active.app_name if _active else DEFAULT_APP_NAME))
