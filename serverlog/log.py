"""The Logger handle: owns the dispatch queue and the two background tasks."""

from __future__ import annotations

import queue
import threading
from pathlib import Path
from typing import Any, List, Optional, TextIO, Union

from colorama import just_fix_windows_console

from .config import LoggerConfig
from .core.categories import Category
from .core.formatter import apply_template, join_values
from .core.item import LogItem
from .errors import ConfigurationError
from .runtime.overseer import RotationOverseer
from .runtime.rotation import Rotation, logfile_path
from .runtime.writer import ExitHook, Writer, terminate
from .utils.clock import Clock, SystemClock
from .utils.logging import logger

PathLike = Union[str, Path]


class Logger:
    """Fan-in from any number of producer threads to one writer thread.

    Producers block when the queue is full; nothing is ever dropped while the
    logger is alive. After :meth:`kill` logging calls are ignored.
    """

    def __init__(
        self,
        config: LoggerConfig,
        *,
        clock: Optional[Clock] = None,
        stream: Optional[TextIO] = None,
        on_exit: ExitHook = terminate,
    ):
        self.config = config
        self.clock = clock or SystemClock()
        self._items: "queue.Queue[LogItem]" = queue.Queue(maxsize=config.queue_capacity)
        self._rotations: "queue.Queue[Rotation]" = queue.Queue(maxsize=2)
        self._stop = threading.Event()
        self._killed = False
        self._threads: List[threading.Thread] = []
        self.writer = Writer(
            config,
            self._items,
            self._rotations,
            self._stop,
            initial_path=self._initial_path(),
            stream=stream,
            on_exit=on_exit,
        )
        self.overseer: Optional[RotationOverseer] = None
        if config.rotates:
            self.overseer = RotationOverseer(config, self._rotations, self._stop, warn=self.warning, clock=self.clock)

    def _initial_path(self) -> Optional[Path]:
        if self.config.mode == "file":
            return self.config.file_path
        if self.config.log_directory is None:
            return None
        return logfile_path(self.config.log_directory, self.clock.now().date(), self.config.marker)

    @property
    def active_path(self) -> Optional[Path]:
        return self.writer.active_path

    @property
    def killed(self) -> bool:
        return self._killed

    def start(self) -> "Logger":
        if self._threads:
            return self
        if self.config.console_enabled:
            just_fix_windows_console()
        self._spawn("serverlog-writer", self.writer.run)
        if self.overseer is not None:
            self._spawn("serverlog-overseer", self.overseer.run)
        return self

    def _spawn(self, name: str, target) -> None:
        thread = threading.Thread(target=target, name=name, daemon=True)
        thread.start()
        self._threads.append(thread)

    def log(self, category: Category, *values: Any) -> None:
        """Enqueue one item, blocking while the queue is full."""

        if self._killed or self._stop.is_set():
            return
        item = LogItem.create(category, join_values(values), self.clock.now())
        while not self._stop.is_set():
            try:
                self._items.put(item, timeout=self.config.poll_interval)
                return
            except queue.Full:
                continue

    def logf(self, category: Category, template: str, *args: Any) -> None:
        self.log(category, apply_template(template, args))

    def startup(self, *values: Any) -> None:
        """Log the startup message, e.g. ``startup("Server listening on port:", 8080)``."""
        self.log(Category.STARTUP, *values)

    def startupf(self, template: str, *args: Any) -> None:
        self.logf(Category.STARTUP, template, *args)

    def fatal(self, *values: Any) -> None:
        """Log a server-killing circumstance; the process exits with status 1 once it is written."""
        self.log(Category.FATAL, *values)

    def fatalf(self, template: str, *args: Any) -> None:
        self.logf(Category.FATAL, template, *args)

    def general(self, *values: Any) -> None:
        self.log(Category.GENERAL, *values)

    def generalf(self, template: str, *args: Any) -> None:
        self.logf(Category.GENERAL, template, *args)

    def warning(self, *values: Any) -> None:
        self.log(Category.WARNING, *values)

    def warningf(self, template: str, *args: Any) -> None:
        self.logf(Category.WARNING, template, *args)

    def flush(self) -> None:
        """Block until every item enqueued so far has been handled by the writer.

        Returns early once the writer has stopped (kill, fatal item or I/O failure).
        """

        if not self._threads:
            return
        done = self._items.all_tasks_done
        with done:
            while self._items.unfinished_tasks and not self._stop.is_set():
                done.wait(self.config.poll_interval)

    def kill(self) -> None:
        """Stop both background tasks. Items still queued are not drained."""

        self._killed = True
        self.writer.console_enabled = False
        self.writer.file_enabled = False
        self._stop.set()

    def join(self, timeout: Optional[float] = None) -> None:
        for thread in self._threads:
            thread.join(timeout)


def start_logger(
    config: LoggerConfig,
    *,
    clock: Optional[Clock] = None,
    stream: Optional[TextIO] = None,
    on_exit: ExitHook = terminate,
) -> Logger:
    """Validate ``config`` and start a logger. An invalid config ends the process."""

    try:
        config.validate()
    except ConfigurationError as err:
        logger.critical("serverlog cannot start: {}", err)
        raise SystemExit(1) from err
    return Logger(config, clock=clock, stream=stream, on_exit=on_exit).start()


def init(
    console_enabled: bool,
    file_enabled: bool,
    max_retained_days: int = -1,
    log_directory: Optional[PathLike] = None,
    **kwargs: Any,
) -> Logger:
    """Start a logger writing daily files under ``log_directory``.

    ``max_retained_days <= 0`` keeps every logfile. Extra keyword arguments are
    ``LoggerConfig`` fields (``queue_capacity``, ``marker``...) or the
    ``clock``/``stream``/``on_exit`` hooks of :class:`Logger`.
    """

    hooks = {k: kwargs.pop(k) for k in ("clock", "stream", "on_exit") if k in kwargs}
    config = LoggerConfig(
        console_enabled=console_enabled,
        file_enabled=file_enabled,
        log_directory=Path(log_directory) if log_directory is not None else None,
        max_retained_days=max_retained_days,
        **kwargs,
    )
    return start_logger(config, **hooks)


def init_file(console_enabled: bool, file_enabled: bool, file_path: PathLike, **kwargs: Any) -> Logger:
    """Start a logger appending to one fixed file, with no rotation."""

    hooks = {k: kwargs.pop(k) for k in ("clock", "stream", "on_exit") if k in kwargs}
    config = LoggerConfig(
        console_enabled=console_enabled,
        file_enabled=file_enabled,
        file_path=Path(file_path),
        **kwargs,
    )
    return start_logger(config, **hooks)


__all__ = ["Logger", "start_logger", "init", "init_file"]
