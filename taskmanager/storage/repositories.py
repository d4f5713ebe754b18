"""
Repositories - named lookups over MetadataStorage.

Everything outside the storage package talks to these, never to a raw
collection.
"""

from __future__ import annotations

from taskmanager.core.models import Task, User
from taskmanager.storage.base import Collections, MetadataStorage


class UserRepository:
    """Credential store: users keyed by identifier."""
    
    def __init__(self, metadata: MetadataStorage):
        self.metadata = metadata
    
    def transaction(self):
        return self.metadata.transaction()
    
    async def find_by_identifier(self, identifier: str) -> User | None:
        doc = await self.metadata.get(Collections.USERS, identifier)
        return User.model_validate(doc) if doc else None
    
    async def find_by_email(self, email: str) -> User | None:
        docs = await self.metadata.query(
            Collections.USERS, {"email": email.lower()}, limit=1
        )
        return User.model_validate(docs[0]) if docs else None
    
    async def exists_by_identifier(self, identifier: str) -> bool:
        return await self.metadata.get(Collections.USERS, identifier) is not None
    
    async def exists_by_email(self, email: str) -> bool:
        return await self.metadata.count(Collections.USERS, {"email": email.lower()}) > 0
    
    async def save(self, user: User) -> User:
        await self.metadata.save(Collections.USERS, user.identifier, user.model_dump())
        return user
    
    async def find_all(self) -> list[User]:
        docs = await self.metadata.query(Collections.USERS, order_by="created_at")
        return [User.model_validate(d) for d in docs]
    
    async def count(self) -> int:
        return await self.metadata.count(Collections.USERS)


class TaskRepository:
    """Task store: tasks keyed by id, each with an owner identifier."""
    
    def __init__(self, metadata: MetadataStorage):
        self.metadata = metadata
    
    def transaction(self):
        return self.metadata.transaction()
    
    async def find_by_id(self, task_id: str) -> Task | None:
        doc = await self.metadata.get(Collections.TASKS, task_id)
        return Task.model_validate(doc) if doc else None
    
    async def find_by_owner(self, owner: str) -> list[Task]:
        docs = await self.metadata.query(
            Collections.TASKS, {"owner": owner}, order_by="created_at"
        )
        return [Task.model_validate(d) for d in docs]
    
    async def find_all_newest_first(self) -> list[Task]:
        docs = await self.metadata.query(
            Collections.TASKS, order_by="created_at", descending=True
        )
        return [Task.model_validate(d) for d in docs]
    
    async def save(self, task: Task) -> Task:
        await self.metadata.save(Collections.TASKS, task.id, task.model_dump())
        return task
    
    async def delete(self, task_id: str) -> bool:
        return await self.metadata.delete(Collections.TASKS, task_id)
    
    async def count(self) -> int:
        return await self.metadata.count(Collections.TASKS)
    
    async def count_by_completed(self, completed: bool) -> int:
        return await self.metadata.count(Collections.TASKS, {"completed": completed})
