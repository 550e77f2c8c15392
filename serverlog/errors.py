"""Exception types raised by serverlog."""

from __future__ import annotations


class ServerlogError(Exception):
    """Base class for serverlog errors."""


class ConfigurationError(ServerlogError):
    """The logger configuration cannot be used (bad directory, permissions, numbers)."""


__all__ = ["ServerlogError", "ConfigurationError"]
