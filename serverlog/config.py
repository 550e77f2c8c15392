"""Process-wide logger configuration, built once at startup."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from omegaconf import DictConfig, OmegaConf

from .errors import ConfigurationError
from .utils.fileio import is_read_writable

DEFAULT_QUEUE_CAPACITY = 1024
DEFAULT_MARKER = "serverlog"


@dataclass(frozen=True)
class LoggerConfig:
    """Settings shared by the writer and the rotation overseer.

    Exactly one file target is used: ``log_directory`` for daily files with
    rotation, or ``file_path`` for one fixed file.
    """

    console_enabled: bool = True
    file_enabled: bool = False
    log_directory: Optional[Path] = None
    max_retained_days: int = -1
    file_path: Optional[Path] = None
    queue_capacity: int = DEFAULT_QUEUE_CAPACITY
    marker: str = DEFAULT_MARKER
    poll_interval: float = 0.1

    def __post_init__(self):
        # accept plain strings from callers and YAML
        if self.log_directory is not None:
            object.__setattr__(self, "log_directory", Path(self.log_directory))
        if self.file_path is not None:
            object.__setattr__(self, "file_path", Path(self.file_path))

    @property
    def mode(self) -> str:
        return "file" if self.file_path is not None else "directory"

    @property
    def rotates(self) -> bool:
        """Daily rotation only runs when logging to files in a directory."""
        return self.file_enabled and self.mode == "directory"

    @property
    def retention_enabled(self) -> bool:
        return self.max_retained_days > 0

    def validate(self) -> None:
        """Check the numbers and, when file logging is on, the target directory.

        Raises:
            ConfigurationError: on the first problem found.
        """

        if self.queue_capacity <= 0:
            raise ConfigurationError(f"queue_capacity must be positive, got {self.queue_capacity}")
        if self.poll_interval <= 0:
            raise ConfigurationError(f"poll_interval must be positive, got {self.poll_interval}")
        if not self.marker or "/" in self.marker or "\\" in self.marker:
            raise ConfigurationError(f"invalid logfile marker {self.marker!r}")
        if not self.file_enabled:
            return

        if self.mode == "file":
            directory = self.file_path.parent
        elif self.log_directory is None:
            raise ConfigurationError("file logging is enabled but no log directory was given")
        else:
            directory = self.log_directory

        if not directory.exists():
            raise ConfigurationError(f"the log directory {directory} does not exist")
        if not directory.is_dir():
            raise ConfigurationError(f"the log path {directory} is not a directory")
        if not is_read_writable(directory):
            raise ConfigurationError(f"read and write permissions are needed on {directory}")

    @classmethod
    def from_config(cls, cfg: Union[DictConfig, Mapping[str, Any]]) -> "LoggerConfig":
        """Build from a Hydra/OmegaConf node or a plain mapping, ignoring unknown keys."""

        if isinstance(cfg, DictConfig):
            data = OmegaConf.to_container(cfg, resolve=True)
        elif isinstance(cfg, Mapping):
            data = dict(cfg)
        else:
            raise ConfigurationError(f"logger settings must be a mapping, got {type(cfg).__name__}")

        allowed = {f.name for f in dataclasses.fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in allowed and v is not None}
        return cls(**kwargs)


__all__ = ["LoggerConfig", "DEFAULT_QUEUE_CAPACITY", "DEFAULT_MARKER"]
