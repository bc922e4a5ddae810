"""
Task Service.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from taskboard.core.errors import RecordNotFound
from taskboard.core.logger import logger
from taskboard.domain.dto import TaskDTO
from taskboard.domain.entities import UPDATABLE_FIELDS
from taskboard.mappers.task_mapper import to_dto, to_dtos
from taskboard.ports.repository import TaskOrder, TaskRepositoryPort


class ITaskService(ABC):
    """Interface for Task Service."""

    @abstractmethod
    async def list_all(self) -> List[TaskDTO]:
        pass

    @abstractmethod
    async def create(self, title: str) -> TaskDTO:
        pass

    @abstractmethod
    async def update(self, task_id: str, fields: Dict[str, Any]) -> Optional[TaskDTO]:
        pass

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        pass


class TaskService(ITaskService):
    """
    Application service for managing Tasks.

    Absence of a record is an ordinary outcome here: update() returns None
    and delete() returns False. Every other storage error propagates.
    """

    def __init__(self, repository: TaskRepositoryPort):
        self.repository = repository

    async def list_all(self) -> List[TaskDTO]:
        records = await self.repository.find_all(order=TaskOrder.NEWEST_FIRST)
        logger.debug(f"Listed {len(records)} tasks")
        return to_dtos(records)

    async def create(self, title: str) -> TaskDTO:
        logger.info(f"Creating task: title={title!r}")
        record = await self.repository.create({"title": title, "completed": False})
        logger.info(f"Task created: id={record.id}")
        return to_dto(record)

    async def update(self, task_id: str, fields: Dict[str, Any]) -> Optional[TaskDTO]:
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        logger.info(f"Updating task: id={task_id}, fields={sorted(changes)}")

        try:
            record = await self.repository.update(task_id, changes)
        except RecordNotFound:
            logger.warning(f"Task not found for update: id={task_id}")
            return None

        return to_dto(record)

    async def delete(self, task_id: str) -> bool:
        logger.info(f"Deleting task: id={task_id}")

        try:
            await self.repository.delete(task_id)
        except RecordNotFound:
            logger.warning(f"Task not found for delete: id={task_id}")
            return False

        return True
