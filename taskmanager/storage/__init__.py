"""
Storage abstractions.

Integration Points:
- MetadataStorage → PostgreSQL / SQLite in production, in-memory locally
- UserRepository / TaskRepository → named lookups used by auth and services
"""

from taskmanager.storage.base import (
    MetadataStorage,
    StorageProvider,
    Collections,
)
from taskmanager.storage.local import InMemoryMetadataStorage, create_local_storage
from taskmanager.storage.repositories import TaskRepository, UserRepository

__all__ = [
    "MetadataStorage",
    "StorageProvider",
    "Collections",
    "InMemoryMetadataStorage",
    "create_local_storage",
    "TaskRepository",
    "UserRepository",
]
