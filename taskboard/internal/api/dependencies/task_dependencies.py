"""
Task Dependencies.
"""

from fastapi import Depends, Request

from taskboard.core.container import Container
from taskboard.internal.api.controllers.task_controller import TaskController
from taskboard.services.task_service import ITaskService


def get_container(request: Request) -> Container:
    """Container built at application startup."""
    return request.app.state.container


def get_task_service(container: Container = Depends(get_container)) -> ITaskService:
    """Get Task Service instance."""
    return container.resolve(ITaskService)


def get_task_controller(service: ITaskService = Depends(get_task_service)) -> TaskController:
    """Get Task Controller instance."""
    return TaskController(service)
