"""Ports - interfaces/protocols for external dependencies."""

from .task_repo import TaskRepository
from .school_repo import SchoolRepository

__all__ = [
    "TaskRepository",
    "SchoolRepository",
]
