"""
Task Controller.
Maps Task Service outcomes to HTTP responses. Errors are not formatted here;
they propagate to the centralized exception handlers.
"""

import time
from typing import Any, Dict

from fastapi import Response, status
from fastapi.responses import JSONResponse

from taskboard.core.logger import logger
from taskboard.internal.api.utils import error_response
from taskboard.services.task_service import ITaskService

TASK_NOT_FOUND = "Task not found"


class TaskController:
    """HTTP adapter around ITaskService."""

    def __init__(self, service: ITaskService):
        self.service = service

    async def list(self) -> JSONResponse:
        start_time = time.time()
        tasks = await self.service.list_all()

        elapsed_time = time.time() - start_time
        logger.info(f"API: Tasks listed: count={len(tasks)}, time={elapsed_time:.3f}s")
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=[task.to_dict() for task in tasks],
        )

    async def create(self, payload: Dict[str, Any]) -> JSONResponse:
        start_time = time.time()
        task = await self.service.create(payload["title"])

        elapsed_time = time.time() - start_time
        logger.info(f"API: Task created: id={task.id}, time={elapsed_time:.3f}s")
        return JSONResponse(status_code=status.HTTP_201_CREATED, content=task.to_dict())

    async def update(self, task_id: str, payload: Dict[str, Any]) -> JSONResponse:
        task = await self.service.update(task_id, payload)

        if task is None:
            logger.warning(f"API: Task not found: id={task_id}")
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=error_response(TASK_NOT_FOUND),
            )

        logger.info(f"API: Task updated: id={task_id}")
        return JSONResponse(status_code=status.HTTP_200_OK, content=task.to_dict())

    async def delete(self, task_id: str) -> Response:
        deleted = await self.service.delete(task_id)

        if not deleted:
            logger.warning(f"API: Task not found: id={task_id}")
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=error_response(TASK_NOT_FOUND),
            )

        logger.info(f"API: Task deleted: id={task_id}")
        return Response(status_code=status.HTTP_204_NO_CONTENT)
