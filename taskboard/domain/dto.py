"""
Client-facing data-transfer objects.
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class TaskDTO(BaseModel):
    """Task as returned to API clients."""

    id: str = Field(..., description="Task identifier")
    title: str = Field(..., description="Task title")
    completed: bool = Field(..., description="Completion flag")
    created_at: datetime = Field(
        ..., alias="createdAt", description="Creation time (UTC)"
    )

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "id": "0f8fad5b-d9cb-469f-a165-70867728950e",
                    "title": "Buy milk",
                    "completed": False,
                    "createdAt": "2025-10-30T10:30:00Z",
                }
            ]
        },
    )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dictionary using the public field names."""
        return self.model_dump(mode="json", by_alias=True)
