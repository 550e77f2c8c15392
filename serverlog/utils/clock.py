"""Wall-clock access, kept behind a small interface so it can be simulated."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        ...

    def sleep_until(self, deadline: datetime, stop: threading.Event) -> bool:
        """Block until ``deadline`` or until ``stop`` is set.

        Returns ``True`` when woken by ``stop``.
        """
        ...


class SystemClock:
    """Local wall clock. Waits are re-checked so clock adjustments do not fire early."""

    def now(self) -> datetime:
        return datetime.now()

    def sleep_until(self, deadline: datetime, stop: threading.Event) -> bool:
        while True:
            # naive local datetimes: timestamp() applies the local UTC offset, DST included
            remaining = deadline.timestamp() - self.now().timestamp()
            if remaining <= 0:
                return stop.is_set()
            if stop.wait(remaining):
                return True


__all__ = ["Clock", "SystemClock"]
