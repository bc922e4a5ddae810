"""
Application services.
"""

from .task_service import ITaskService, TaskService

__all__ = ["ITaskService", "TaskService"]
