"""
Services - business operations over the repositories.
"""

from taskmanager.services.tasks import TaskService
from taskmanager.services.users import UserService

__all__ = [
    "TaskService",
    "UserService",
]
