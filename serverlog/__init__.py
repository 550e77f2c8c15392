"""Top-level package for serverlog, a single-writer logger for server processes."""

from importlib.metadata import version

from .api import (
    fatal,
    fatalf,
    general,
    generalf,
    init,
    init_file,
    kill,
    startup,
    startupf,
    warning,
    warningf,
)
from .config import LoggerConfig
from .core.categories import Category
from .log import Logger

__all__ = [
    "__version__",
    "Category",
    "Logger",
    "LoggerConfig",
    "init",
    "init_file",
    "kill",
    "startup",
    "startupf",
    "fatal",
    "fatalf",
    "general",
    "generalf",
    "warning",
    "warningf",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return version("serverlog")
        except Exception:  # pragma: no cover - fallback when pkg metadata missing
            return "0.1.0"
    raise AttributeError(name)
