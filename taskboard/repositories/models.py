"""
Storage models for both backends.

TaskRow is the SQLAlchemy table mapping for the relational store.
TaskDocument is the Pydantic shape of a MongoDB task document.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from taskboard.core.logger import logger
from taskboard.domain.entities import utc_now

TASKS_TABLE = "tasks"


class Base(DeclarativeBase):
    """Declarative base for relational models."""


class TaskRow(Base):
    """Relational task row."""

    __tablename__ = TASKS_TABLE

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"TaskRow(id={self.id!r}, title={self.title!r}, completed={self.completed})"


class TaskDocument(BaseModel):
    """Model for a task (MongoDB document)."""

    id: Optional[str] = Field(None, description="MongoDB _id as string")
    title: str = Field(..., description="Task title")
    completed: bool = Field(default=False, description="Completion flag")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")
    updated_at: datetime = Field(default_factory=utc_now, description="Last update time")

    model_config = ConfigDict(extra="ignore")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for MongoDB.
        Excludes 'id' (it is stored as '_id' in MongoDB).
        """
        return self.model_dump(exclude={"id"})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaskDocument":
        """
        Create from MongoDB document.
        Converts MongoDB _id (ObjectId) to string 'id' field.

        Raises:
            pydantic.ValidationError: If the stored document is malformed
        """
        payload = dict(data)
        if "_id" in payload:
            payload["id"] = str(payload.pop("_id"))
        try:
            return cls(**payload)
        except Exception as e:
            logger.error(f"Failed to parse task document {payload.get('id')}: {e}")
            raise
