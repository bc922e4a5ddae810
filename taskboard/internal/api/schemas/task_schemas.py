"""
Pydantic schemas for Task Management API.
"""

from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StringConstraints

TaskTitle = Annotated[
    str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)
]


class TaskCreateRequest(BaseModel):
    """Request model for task creation."""

    title: TaskTitle = Field(..., description="Task title")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"examples": [{"title": "Buy milk"}]},
    )


class TaskUpdateRequest(BaseModel):
    """Request model for task update. Every field is optional."""

    # Defaults are not validated, so an explicit null is rejected while an
    # absent field stays unset.
    title: TaskTitle = Field(default=None, description="New title")
    completed: StrictBool = Field(default=None, description="New completion flag")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "examples": [{"completed": True}, {"title": "Buy oat milk"}]
        },
    )


class FieldErrorSchema(BaseModel):
    """One violated validation rule."""

    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Body of a 400 response."""

    errors: List[FieldErrorSchema]

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [{"errors": [{"field": "title", "message": "Title is required"}]}]
        }
    )


class ErrorResponse(BaseModel):
    """Body of a non-validation error response."""

    error: str

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"error": "Task not found"}]}
    )
