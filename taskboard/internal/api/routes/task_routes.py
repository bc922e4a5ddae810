"""
Task API Routes.
Each route delegates to TaskController; mutating routes are gated by the
validation middleware.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from taskboard.domain.dto import TaskDTO
from taskboard.internal.api.controllers.task_controller import TaskController
from taskboard.internal.api.dependencies.task_dependencies import get_task_controller
from taskboard.internal.api.middleware.validation import validate_body
from taskboard.internal.api.schemas.task_schemas import (
    ErrorResponse,
    TaskCreateRequest,
    TaskUpdateRequest,
    ValidationErrorResponse,
)
from taskboard.internal.api.validators.task_validators import (
    create_task_validator,
    update_task_validator,
)

router = APIRouter(prefix="/tasks", tags=["Tasks"])


def _json_body(model) -> Dict[str, Any]:
    """OpenAPI requestBody for a body read by the validation middleware."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


@router.get(
    "",
    response_model=List[TaskDTO],
    summary="List Tasks",
    description="List every task, newest first",
)
async def list_tasks(controller: TaskController = Depends(get_task_controller)):
    return await controller.list()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TaskDTO,
    summary="Create Task",
    description="Create a task from a title; completed defaults to false",
    openapi_extra=_json_body(TaskCreateRequest),
    responses={400: {"model": ValidationErrorResponse, "description": "Invalid payload"}},
)
async def create_task(
    payload: Dict[str, Any] = Depends(validate_body(create_task_validator)),
    controller: TaskController = Depends(get_task_controller),
):
    return await controller.create(payload)


@router.put(
    "/{task_id}",
    response_model=TaskDTO,
    summary="Update Task",
    description="Replace the provided fields of a task",
    openapi_extra=_json_body(TaskUpdateRequest),
    responses={
        400: {"model": ValidationErrorResponse, "description": "Invalid payload or id"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def update_task(
    task_id: str,
    payload: Dict[str, Any] = Depends(validate_body(update_task_validator)),
    controller: TaskController = Depends(get_task_controller),
):
    return await controller.update(task_id, payload)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Task",
    description="Delete a task by id",
    responses={
        400: {"model": ValidationErrorResponse, "description": "Invalid id"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def delete_task(
    task_id: str, controller: TaskController = Depends(get_task_controller)
):
    return await controller.delete(task_id)


def create_task_routes() -> APIRouter:
    return router
