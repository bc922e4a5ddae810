"""
Task mapper: storage record -> client DTO.
"""

from typing import Iterable, List

from taskboard.domain.dto import TaskDTO
from taskboard.domain.entities import TaskRecord


def to_dto(record: TaskRecord) -> TaskDTO:
    """Build the public DTO; anything in record.internal is dropped."""
    return TaskDTO(
        id=record.id,
        title=record.title,
        completed=record.completed,
        created_at=record.created_at,
    )


def to_dtos(records: Iterable[TaskRecord]) -> List[TaskDTO]:
    return [to_dto(record) for record in records]
