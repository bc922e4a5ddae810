"""
Repository Ports.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List

from taskboard.domain.entities import TaskRecord


class TaskOrder(str, Enum):
    """Ordering of find_all results by creation time."""

    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"


class TaskRepositoryPort(ABC):
    """
    Abstract interface for Task storage.

    Implementations raise RecordNotFound when an id matches nothing,
    InvalidRecordId when an id cannot exist in the engine, and
    StorageUnavailable for any other engine failure.
    """

    @abstractmethod
    async def find_all(self, order: TaskOrder = TaskOrder.NEWEST_FIRST) -> List[TaskRecord]:
        """Return every task in the given order."""
        pass

    @abstractmethod
    async def create(self, fields: Dict[str, Any]) -> TaskRecord:
        """Persist a new task; the engine assigns id and created_at."""
        pass

    @abstractmethod
    async def update(self, task_id: str, fields: Dict[str, Any]) -> TaskRecord:
        """Apply fields to an existing task and return it."""
        pass

    @abstractmethod
    async def delete(self, task_id: str) -> None:
        """Remove a task."""
        pass
