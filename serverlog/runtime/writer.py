"""The single consumer: the only code that touches the console stream or the logfile."""

from __future__ import annotations

import os
import queue
import sys
import threading
from collections import deque
from pathlib import Path
from typing import Callable, Deque, Optional, TextIO

from ..config import LoggerConfig
from ..core.formatter import render_line
from ..core.item import LogItem
from ..utils.fileio import append_line
from ..utils.logging import logger
from .rotation import Rotation

ExitHook = Callable[[int], None]


def terminate(status: int) -> None:
    """Flush the standard streams and end the process with ``status``."""

    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(status)


class Writer:
    """Drains the dispatch queue in arrival order and writes each item to the enabled sinks.

    A fatal item, or a failure to open/write the logfile, ends the loop with
    a call to ``on_exit(1)`` after the sinks have been written. The hook
    defaults to :func:`terminate`; tests pass their own.
    """

    def __init__(
        self,
        config: LoggerConfig,
        items: "queue.Queue[LogItem]",
        rotations: "queue.Queue[Rotation]",
        stop: threading.Event,
        initial_path: Optional[Path],
        stream: Optional[TextIO] = None,
        on_exit: ExitHook = terminate,
    ):
        self.config = config
        self.console_enabled = config.console_enabled
        self.file_enabled = config.file_enabled
        self.active_path = initial_path
        self._items = items
        self._rotations = rotations
        self._stop = stop
        self._stream = stream
        self._on_exit = on_exit
        self._pending: Deque[Rotation] = deque()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def run(self) -> None:
        logger.debug("serverlog writer started (active logfile: {})", self.active_path)
        while not self._stop.is_set():
            self._collect_rotations()
            try:
                item = self._items.get(timeout=self.config.poll_interval)
            except queue.Empty:
                # nothing queued: every pending rotation is now in effect
                self._apply_rotations()
                continue
            try:
                status = self.handle(item)
            finally:
                self._items.task_done()
            if status is not None:
                # the loop is over even when on_exit does not end the process
                self._stop.set()
                self._on_exit(status)
                return
        logger.debug("serverlog writer stopped")

    def handle(self, item: LogItem) -> Optional[int]:
        """Write one item. Returns an exit status when the process must end."""

        self._collect_rotations()
        self._apply_rotations(item)

        if self.console_enabled:
            stream = self.stream
            stream.write(render_line(item, colored=True) + "\n")
            stream.flush()

        if self.file_enabled and self.active_path is not None:
            try:
                append_line(self.active_path, render_line(item))
            except OSError:
                logger.opt(exception=True).critical("serverlog could not write to {}", self.active_path)
                return 1

        if item.category.is_fatal:
            return 1
        return None

    def _collect_rotations(self) -> None:
        while True:
            try:
                self._pending.append(self._rotations.get_nowait())
            except queue.Empty:
                return

    def _apply_rotations(self, item: Optional[LogItem] = None) -> None:
        # items created before a boundary still belong to the previous day's file
        while self._pending and (item is None or item.created_at >= self._pending[0].boundary):
            rotation = self._pending.popleft()
            self.active_path = rotation.path
            logger.info("serverlog switched to logfile {}", rotation.path)


__all__ = ["Writer", "terminate", "ExitHook"]
