"""
Storage models shared by the repository adapters.
"""

from .models import Base, TaskDocument, TaskRow

__all__ = [
    "Base",
    "TaskRow",
    "TaskDocument",
]
