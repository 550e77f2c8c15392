"""The four fixed log categories and their console colours."""

from __future__ import annotations

from enum import Enum

from colorama import Fore, Style


class TimestampMode(Enum):
    SHORT = "%H:%M:%S"
    LONG = "%Y/%B/%d %H:%M:%S"


class Category(Enum):
    """A log level: prefix label, console colour and timestamp style in one place."""

    STARTUP = ("STARTUP:", Fore.GREEN, TimestampMode.LONG)
    FATAL = ("FATAL:  ", Fore.RED, TimestampMode.SHORT)
    GENERAL = ("GENERAL:", Fore.BLUE, TimestampMode.SHORT)
    WARNING = ("WARNING:", Fore.YELLOW, TimestampMode.SHORT)

    def __init__(self, label: str, colour: str, timestamp_mode: TimestampMode):
        self.label = label
        self.colour = colour
        self.timestamp_mode = timestamp_mode

    @property
    def is_fatal(self) -> bool:
        return self is Category.FATAL

    def colorize(self, text: str) -> str:
        """Wrap ``text`` in this category's bold ANSI colour. Console use only."""
        return f"{self.colour}{Style.BRIGHT}{text}{Style.RESET_ALL}"


__all__ = ["Category", "TimestampMode"]
