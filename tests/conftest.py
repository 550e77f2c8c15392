from __future__ import annotations

import re
import sys
import threading
import time
from datetime import datetime
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

LINE_RE = re.compile(r"^(?P<ts>\d{2}:\d{2}:\d{2}|\d{4}/\w+/\d{2} \d{2}:\d{2}:\d{2}) (?P<prefix>[A-Z]+:) +(?P<content>.*)$")
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


class FakeClock:
    """Manually advanced clock; ``sleep_until`` wakes when time passes the deadline."""

    def __init__(self, start: datetime):
        self._now = start
        self._cond = threading.Condition()

    def now(self) -> datetime:
        with self._cond:
            return self._now

    def advance_to(self, moment: datetime) -> None:
        with self._cond:
            self._now = moment
            self._cond.notify_all()

    def sleep_until(self, deadline: datetime, stop: threading.Event) -> bool:
        with self._cond:
            while self._now < deadline:
                if stop.is_set():
                    return True
                self._cond.wait(0.01)
        return stop.is_set()


def parse_line(line: str):
    match = LINE_RE.match(line.rstrip("\n"))
    assert match is not None, line
    return match.group("ts"), match.group("prefix"), match.group("content")


def wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 31, 23, 59, 0))
