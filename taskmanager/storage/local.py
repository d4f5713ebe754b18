"""
Local storage implementations for development and tests.

These work without any external services.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator

from taskmanager.storage.base import MetadataStorage, StorageProvider


# =============================================================================
# In-Memory Metadata Storage
# =============================================================================


class InMemoryMetadataStorage(MetadataStorage):
    """
    In-memory document storage.
    
    Transactions are serialized with a single asyncio.Lock. Inside a
    transaction each write first records the prior state of the document
    it touches; if the block raises, those entries are replayed in reverse.
    Writes made by other tasks while a transaction is open are not recorded.
    """
    
    def __init__(self):
        self._data: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = asyncio.Lock()
        self._undo: list[tuple[str, str, dict[str, Any] | None]] | None = None
        self._undo_owner: asyncio.Task | None = None
    
    def _remember(self, collection: str, id: str) -> None:
        if self._undo is None or asyncio.current_task() is not self._undo_owner:
            return
        doc = self._data.get(collection, {}).get(id)
        self._undo.append((collection, id, dict(doc) if doc is not None else None))
    
    def _rollback(self, undo: list[tuple[str, str, dict[str, Any] | None]]) -> None:
        for collection, id, previous in reversed(undo):
            docs = self._data.setdefault(collection, {})
            if previous is None:
                docs.pop(id, None)
            else:
                docs[id] = previous
    
    async def save(self, collection: str, id: str, data: dict[str, Any]) -> None:
        self._remember(collection, id)
        if collection not in self._data:
            self._data[collection] = {}
        self._data[collection][id] = {
            **data,
            "_id": id,
            "_updated_at": datetime.now(timezone.utc).isoformat(),
        }
    
    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        doc = self._data.get(collection, {}).get(id)
        return dict(doc) if doc is not None else None
    
    async def delete(self, collection: str, id: str) -> bool:
        if collection in self._data and id in self._data[collection]:
            self._remember(collection, id)
            del self._data[collection][id]
            return True
        return False
    
    def _matching(self, collection: str, filters: dict[str, Any] | None) -> list[dict[str, Any]]:
        docs = list(self._data.get(collection, {}).values())
        if not filters:
            return docs
        return [
            doc for doc in docs
            if all(doc.get(key) == value for key, value in filters.items())
        ]
    
    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        results = self._matching(collection, filters)
        
        if order_by:
            # _id as tie-breaker keeps ordering stable across reads
            results.sort(key=lambda d: (d.get(order_by), d["_id"]), reverse=descending)
        
        end = None if limit is None else offset + limit
        return [dict(doc) for doc in results[offset:end]]
    
    async def count(self, collection: str, filters: dict[str, Any] | None = None) -> int:
        return len(self._matching(collection, filters))
    
    async def update(self, collection: str, id: str, updates: dict[str, Any]) -> bool:
        if collection in self._data and id in self._data[collection]:
            self._remember(collection, id)
            self._data[collection][id].update(updates)
            self._data[collection][id]["_updated_at"] = datetime.now(timezone.utc).isoformat()
            return True
        return False
    
    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self._lock:
            undo: list[tuple[str, str, dict[str, Any] | None]] = []
            self._undo, self._undo_owner = undo, asyncio.current_task()
            try:
                yield
            except BaseException:
                self._rollback(undo)
                raise
            finally:
                self._undo, self._undo_owner = None, None


# =============================================================================
# Factory
# =============================================================================


def create_local_storage() -> StorageProvider:
    """Create a StorageProvider with local implementations."""
    return StorageProvider(metadata=InMemoryMetadataStorage())
