"""
Dependency Injection Container.
"""

from typing import Any, Callable, Dict, Type, TypeVar

from taskboard.adapters.mongo.task_repository import MongoTaskRepository
from taskboard.adapters.sql.task_repository import SQLTaskRepository
from taskboard.core.database import DatabaseManager, MongoDB, SQLDatabase
from taskboard.ports.repository import TaskRepositoryPort
from taskboard.services.task_service import ITaskService, TaskService

T = TypeVar("T")


class Container:
    """
    Simple Dependency Injection Container.

    Instances are returned as registered; factories are called on every
    resolve() with the container itself.
    """

    def __init__(self) -> None:
        self._instances: Dict[Type, Any] = {}
        self._factories: Dict[Type, Callable[["Container"], Any]] = {}

    def register(self, interface: Type[T], instance: T) -> None:
        """Register a singleton instance for an interface."""
        self._instances[interface] = instance

    def register_factory(self, interface: Type[T], factory: Callable[["Container"], T]) -> None:
        """Register a factory for an interface."""
        self._factories[interface] = factory

    def resolve(self, interface: Type[T]) -> T:
        """Resolve an interface to its implementation."""
        if interface in self._instances:
            return self._instances[interface]
        if interface in self._factories:
            return self._factories[interface](self)
        raise KeyError(f"No provider registered for {interface.__name__}")

    def clear(self) -> None:
        """Clear all registrations (useful for testing)."""
        self._instances.clear()
        self._factories.clear()


def build_repository(database: DatabaseManager) -> TaskRepositoryPort:
    """Pick the repository adapter matching the database manager."""
    if isinstance(database, SQLDatabase):
        return SQLTaskRepository(database)
    if isinstance(database, MongoDB):
        return MongoTaskRepository(database)
    raise TypeError(f"No task repository for {type(database).__name__}")


def bootstrap_container(repository: TaskRepositoryPort) -> Container:
    """Wire the task service around an explicitly provided repository."""
    container = Container()
    container.register(TaskRepositoryPort, repository)
    container.register_factory(
        ITaskService, lambda c: TaskService(c.resolve(TaskRepositoryPort))
    )
    return container
