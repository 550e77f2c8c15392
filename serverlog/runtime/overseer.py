"""Daily logfile rotation and retention."""

from __future__ import annotations

import queue
import threading
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Optional

from ..config import LoggerConfig
from ..utils.clock import Clock
from ..utils.fileio import list_names, touch
from ..utils.logging import logger
from .rotation import Rotation, logfile_path, next_midnight, select_expired


class OverseerState(Enum):
    WAITING = "waiting"
    ROTATING = "rotating"
    STOPPED = "stopped"


class RotationOverseer:
    """Switches the writer to a new day's logfile at every local midnight.

    Failures here are never fatal: they are reported through ``warn`` (the
    logger's own Warning category) and the overseer keeps going.
    """

    def __init__(
        self,
        config: LoggerConfig,
        rotations: "queue.Queue[Rotation]",
        stop: threading.Event,
        warn: Callable[..., Any],
        clock: Clock,
    ):
        if config.log_directory is None:
            raise ValueError("rotation needs a log directory")
        self.config = config
        self.directory: Path = config.log_directory
        self.clock = clock
        self.state = OverseerState.WAITING
        self.last_boundary: Optional[datetime] = None
        self._rotations = rotations
        self._stop = stop
        self._warn = warn

    def run(self) -> None:
        logger.debug("serverlog overseer watching {}", self.directory)
        while not self._stop.is_set():
            boundary = self.next_boundary()
            self.state = OverseerState.WAITING
            if self.clock.sleep_until(boundary, self._stop):
                break
            self.state = OverseerState.ROTATING
            self.rotate(boundary)
        self.state = OverseerState.STOPPED
        logger.debug("serverlog overseer stopped")

    def next_boundary(self) -> datetime:
        boundary = next_midnight(self.clock.now())
        # never fire twice for the same midnight
        if self.last_boundary is not None and boundary <= self.last_boundary:
            boundary = next_midnight(self.last_boundary)
        return boundary

    def rotate(self, boundary: datetime) -> Optional[Path]:
        """Create the logfile for the day starting at ``boundary``, hand it to the writer, prune."""

        self.last_boundary = boundary
        path = logfile_path(self.directory, boundary.date(), self.config.marker)
        try:
            touch(path)
        except OSError as err:
            self._warn("Serverlog failed to create new logfile:", path, ":", err)
            return None

        self._notify(Rotation(path=path, boundary=boundary))
        if self.config.retention_enabled:
            self.prune()
        return path

    def prune(self) -> List[Path]:
        """Delete the oldest matching logfiles beyond ``max_retained_days``."""

        try:
            names = list_names(self.directory)
        except OSError as err:
            self._warn("Serverlog failed to read from log directory:", err)
            return []

        removed = []
        for name in select_expired(names, self.config.marker, self.config.max_retained_days):
            target = self.directory / name
            try:
                target.unlink()
            except OSError as err:
                self._warn("Serverlog failed to delete logfile:", target, ":", err)
                continue
            removed.append(target)
        if removed:
            logger.info("serverlog removed {} expired logfile(s)", len(removed))
        return removed

    def _notify(self, rotation: Rotation) -> None:
        while not self._stop.is_set():
            try:
                self._rotations.put(rotation, timeout=self.config.poll_interval)
                return
            except queue.Full:
                continue


__all__ = ["RotationOverseer", "OverseerState"]
