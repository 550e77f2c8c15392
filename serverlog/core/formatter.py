"""Pure formatting helpers: content joining, timestamps and line rendering."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Tuple

from .categories import TimestampMode
from .item import LogItem


def stringify(value: Any) -> str:
    return str(value)


def join_values(values: Iterable[Any]) -> str:
    """Join loggable values with single spaces using their ``str()`` form."""

    return " ".join(stringify(value) for value in values)


def apply_template(template: str, args: Tuple[Any, ...]) -> str:
    """printf-style substitution, e.g. ``apply_template("port %d", (8080,))``."""

    return template % args


def format_timestamp(moment: datetime, mode: TimestampMode) -> str:
    """``HH:MM:SS`` for :attr:`TimestampMode.SHORT`, ``YYYY/Month/DD HH:MM:SS`` for LONG."""

    return moment.strftime(mode.value)


def render_line(item: LogItem, colored: bool = False) -> str:
    """Render ``timestamp + " " + prefix + " " + content`` without the trailing newline.

    Only console output may pass ``colored=True``; file lines stay plain text.
    """

    label = item.category.colorize(item.category.label) if colored else item.category.label
    return f"{format_timestamp(item.created_at, item.timestamp_mode)} {label} {item.content}"


__all__ = ["stringify", "join_values", "apply_template", "format_timestamp", "render_line"]
