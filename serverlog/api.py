"""Module-level logging functions backed by a process-default :class:`Logger`."""

from __future__ import annotations

import threading
from typing import Any, Optional

from .log import Logger
from .log import init as _init
from .log import init_file as _init_file

_default: Optional[Logger] = None
_lock = threading.Lock()


def _install(new: Logger) -> Logger:
    global _default
    with _lock:
        previous, _default = _default, new
    if previous is not None:
        previous.kill()
    return new


def init(*args: Any, **kwargs: Any) -> Logger:
    """Start the default logger in directory mode. See :func:`serverlog.log.init`."""
    return _install(_init(*args, **kwargs))


def init_file(*args: Any, **kwargs: Any) -> Logger:
    """Start the default logger in single-file mode. See :func:`serverlog.log.init_file`."""
    return _install(_init_file(*args, **kwargs))


def current() -> Logger:
    if _default is None:
        raise RuntimeError("serverlog.init() must be called before logging")
    return _default


def startup(*values: Any) -> None:
    current().startup(*values)


def startupf(template: str, *args: Any) -> None:
    current().startupf(template, *args)


def fatal(*values: Any) -> None:
    current().fatal(*values)


def fatalf(template: str, *args: Any) -> None:
    current().fatalf(template, *args)


def general(*values: Any) -> None:
    current().general(*values)


def generalf(template: str, *args: Any) -> None:
    current().generalf(template, *args)


def warning(*values: Any) -> None:
    current().warning(*values)


def warningf(template: str, *args: Any) -> None:
    current().warningf(template, *args)


def kill() -> None:
    """Stop the default logger, if one was started."""

    global _default
    with _lock:
        previous, _default = _default, None
    if previous is not None:
        previous.kill()


__all__ = [
    "init",
    "init_file",
    "current",
    "startup",
    "startupf",
    "fatal",
    "fatalf",
    "general",
    "generalf",
    "warning",
    "warningf",
    "kill",
]
