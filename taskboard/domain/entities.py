"""
Domain entities for the Taskboard system.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class TaskRecord:
    """
    A Task as read back from a storage engine.

    This is the contract every storage adapter produces and the mapper
    consumes. Public fields are fixed; anything engine-specific the adapter
    read (raw ObjectId, update timestamps, ...) goes into ``internal``.
    """

    id: str
    title: str
    completed: bool
    created_at: datetime
    internal: Mapping[str, Any] = field(default_factory=dict, compare=False)


# Fields a client may change after creation
UPDATABLE_FIELDS = frozenset({"title", "completed"})
