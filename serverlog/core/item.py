"""Immutable description of one log event."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .categories import Category, TimestampMode


@dataclass(frozen=True)
class LogItem:
    category: Category
    timestamp_mode: TimestampMode
    content: str
    created_at: datetime

    @classmethod
    def create(cls, category: Category, content: str, created_at: datetime) -> "LogItem":
        return cls(
            category=category,
            timestamp_mode=category.timestamp_mode,
            content=content,
            created_at=created_at,
        )


__all__ = ["LogItem"]
