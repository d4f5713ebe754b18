"""
Storage abstraction layer.

All persistence goes through these interfaces. This allows swapping
implementations (in-memory → SQLite/PostgreSQL) without changing the
auth core or the task services.

Repositories (storage/repositories.py) sit on top of MetadataStorage and
expose the named lookups the rest of the application uses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any

from pydantic import BaseModel


# =============================================================================
# Storage Interfaces
# =============================================================================


class MetadataStorage(ABC):
    """
    Storage for structured documents (users, tasks).
    
    Production Implementation: PostgreSQL or SQLite
    Local Implementation: in-memory
    """
    
    @abstractmethod
    async def save(self, collection: str, id: str, data: dict[str, Any]) -> None:
        """Save (insert or replace) a document in a collection."""
        pass
    
    @abstractmethod
    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        """Get a document by ID."""
        pass
    
    @abstractmethod
    async def delete(self, collection: str, id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
        pass
    
    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """Query documents with optional equality filters and ordering."""
        pass
    
    @abstractmethod
    async def count(self, collection: str, filters: dict[str, Any] | None = None) -> int:
        """Count documents matching the filters."""
        pass
    
    @abstractmethod
    async def update(self, collection: str, id: str, updates: dict[str, Any]) -> bool:
        """Partial update of a document."""
        pass
    
    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """
        Open a transaction.
        
        Reads and writes inside the block are isolated from other
        transactions, and either all writes commit or, if the block
        raises, none do.
        """
        pass


# =============================================================================
# Storage Provider (built once by the application factory)
# =============================================================================


class StorageProvider(BaseModel):
    """
    Container for storage backends.
    
    Initialize once at app startup with appropriate implementations.
    Services receive repositories built from it and never know the
    underlying implementation.
    """
    
    model_config = {"arbitrary_types_allowed": True}
    
    metadata: MetadataStorage


# =============================================================================
# Collection Names (for MetadataStorage)
# =============================================================================


class Collections:
    """Standard collection/table names."""
    
    USERS = "users"
    TASKS = "tasks"
