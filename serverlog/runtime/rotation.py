"""Day-boundary arithmetic, logfile naming and retention selection."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Iterable, List

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class Rotation:
    """Notification from the overseer: items created at or after ``boundary`` go to ``path``."""

    path: Path
    boundary: datetime


def next_midnight(now: datetime) -> datetime:
    """The next local midnight after ``now``.

    Uses calendar days rather than a fixed 24h offset, so month/year ends and
    DST changes land on the right instant.
    """

    tomorrow = now.date() + timedelta(days=1)
    return datetime.combine(tomorrow, time.min, tzinfo=now.tzinfo)


def logfile_name(day: date, marker: str) -> str:
    return f"{day.strftime(DATE_FORMAT)}-{marker}.log"


def logfile_path(directory: Path, day: date, marker: str) -> Path:
    return directory / logfile_name(day, marker)


def logfile_pattern(marker: str) -> "re.Pattern[str]":
    return re.compile(r"^\d{4}-\d{2}-\d{2}-" + re.escape(marker) + r"\.log$")


def matching_logfiles(names: Iterable[str], marker: str) -> List[str]:
    """Names produced by :func:`logfile_name` for ``marker``, oldest first."""

    pattern = logfile_pattern(marker)
    matches = []
    for name in names:
        if pattern.match(name):
            matches.append(name)
    # zero-padded dates sort chronologically
    matches.sort()
    return matches


def select_expired(names: Iterable[str], marker: str, keep: int) -> List[str]:
    """The oldest matching names to delete so that at most ``keep`` remain.

    ``keep <= 0`` means unlimited retention.
    """

    if keep <= 0:
        return []
    matches = matching_logfiles(names, marker)
    excess = len(matches) - keep
    return matches[:excess] if excess > 0 else []


__all__ = [
    "DATE_FORMAT",
    "Rotation",
    "next_midnight",
    "logfile_name",
    "logfile_path",
    "logfile_pattern",
    "matching_logfiles",
    "select_expired",
]
