"""
SQL Task Repository Adapter.
"""

import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from taskboard.core.database import SQLDatabase
from taskboard.core.errors import InvalidRecordId, RecordNotFound, StorageUnavailable
from taskboard.core.logger import logger
from taskboard.domain.entities import TaskRecord, ensure_utc, utc_now
from taskboard.ports.repository import TaskOrder, TaskRepositoryPort
from taskboard.repositories.models import TaskRow


class SQLTaskRepository(TaskRepositoryPort):
    """SQLAlchemy implementation of TaskRepositoryPort."""

    def __init__(self, database: SQLDatabase, clock: Callable[[], datetime] = utc_now):
        self.database = database
        self.clock = clock

    def _to_record(self, row: TaskRow) -> TaskRecord:
        """Convert ORM row to the storage-agnostic record."""
        return TaskRecord(
            id=row.id,
            title=row.title,
            completed=row.completed,
            created_at=ensure_utc(row.created_at),
            internal={"updated_at": ensure_utc(row.updated_at)},
        )

    @staticmethod
    def _check_id(task_id: str) -> str:
        try:
            return str(uuid.UUID(str(task_id)))
        except ValueError:
            raise InvalidRecordId(task_id)

    async def find_all(self, order: TaskOrder = TaskOrder.NEWEST_FIRST) -> List[TaskRecord]:
        if order is TaskOrder.NEWEST_FIRST:
            ordering = (TaskRow.created_at.desc(), TaskRow.id.desc())
        else:
            ordering = (TaskRow.created_at.asc(), TaskRow.id.asc())

        try:
            async with self.database.session() as session:
                result = await session.execute(select(TaskRow).order_by(*ordering))
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list tasks: {e}")
            raise StorageUnavailable("find_all", e) from e

        logger.debug(f"Fetched {len(rows)} tasks from SQL store")
        return [self._to_record(row) for row in rows]

    async def create(self, fields: Dict[str, Any]) -> TaskRecord:
        now = self.clock()
        row = TaskRow(
            id=str(uuid.uuid4()),
            title=fields["title"],
            completed=bool(fields.get("completed", False)),
            created_at=now,
            updated_at=now,
        )

        try:
            async with self.database.session() as session:
                async with session.begin():
                    session.add(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create task: {e}")
            raise StorageUnavailable("create", e) from e

        logger.debug(f"Inserted task row: id={row.id}")
        return self._to_record(row)

    async def update(self, task_id: str, fields: Dict[str, Any]) -> TaskRecord:
        task_id = self._check_id(task_id)

        try:
            async with self.database.session() as session:
                async with session.begin():
                    row = await session.get(TaskRow, task_id)
                    if row is None:
                        raise RecordNotFound(task_id)
                    for name, value in fields.items():
                        setattr(row, name, value)
                    row.updated_at = self.clock()
        except SQLAlchemyError as e:
            logger.error(f"Failed to update task {task_id}: {e}")
            raise StorageUnavailable("update", e) from e

        logger.debug(f"Updated task row: id={task_id}, fields={sorted(fields)}")
        return self._to_record(row)

    async def delete(self, task_id: str) -> None:
        task_id = self._check_id(task_id)

        try:
            async with self.database.session() as session:
                async with session.begin():
                    row = await session.get(TaskRow, task_id)
                    if row is None:
                        raise RecordNotFound(task_id)
                    await session.delete(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete task {task_id}: {e}")
            raise StorageUnavailable("delete", e) from e

        logger.debug(f"Deleted task row: id={task_id}")
