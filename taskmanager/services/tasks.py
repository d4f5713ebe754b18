"""
Task service - ownership-checked task operations.

Every method takes the caller's AuthContext explicitly. Per-task
operations are allowed only for the owner; admin listings bypass
ownership and are gated solely on the ADMIN role.
"""

from __future__ import annotations

import logging
from typing import Any

from taskmanager.auth.context import AuthContext
from taskmanager.auth.guard import require_admin, require_owner
from taskmanager.core.errors import NotFoundError
from taskmanager.core.models import (
    OwnerInfo,
    Stats,
    Task,
    TaskWithOwner,
    UserTasks,
)
from taskmanager.core.validation import (
    ensure_valid,
    normalize_task_changes,
    validate_task_create,
    validate_task_update,
)
from taskmanager.storage.repositories import TaskRepository, UserRepository

logger = logging.getLogger(__name__)


class TaskService:
    """Owner-scoped CRUD plus the admin read views."""
    
    def __init__(self, tasks: TaskRepository, users: UserRepository):
        self.tasks = tasks
        self.users = users
    
    # =========================================================================
    # Owner operations
    # =========================================================================
    
    async def create(
        self,
        ctx: AuthContext,
        title: str,
        description: str | None = None,
    ) -> Task:
        """Create a task owned by the caller. There is no way to pick another owner."""
        ensure_valid(validate_task_create(title, description))
        
        task = Task(title=title, description=description, owner=ctx.identifier)
        await self.tasks.save(task)
        
        logger.info("Task created - ID: %s, user: %s", task.id, ctx.identifier)
        return task
    
    async def get(self, ctx: AuthContext, task_id: str) -> Task:
        task = await self._find(task_id, "read")
        require_owner(ctx, task, "read")
        return task
    
    async def update(self, ctx: AuthContext, task_id: str, changes: dict[str, Any]) -> Task:
        """
        Apply a partial update.
        
        Only fields present (and non-null) in `changes` are written. The
        ownership check and the write happen inside one transaction.
        """
        changes = normalize_task_changes(changes)
        ensure_valid(validate_task_update(changes))
        
        async with self.tasks.transaction():
            task = await self._find(task_id, "update")
            require_owner(ctx, task, "update")
            task.apply(changes)
            await self.tasks.save(task)
        
        logger.info("Task updated - ID: %s, user: %s, fields: %s",
                    task_id, ctx.identifier, sorted(changes))
        return task
    
    async def delete(self, ctx: AuthContext, task_id: str) -> None:
        async with self.tasks.transaction():
            task = await self._find(task_id, "delete")
            require_owner(ctx, task, "delete")
            await self.tasks.delete(task_id)
        
        logger.info("Task deleted - ID: %s, user: %s", task_id, ctx.identifier)
    
    async def list_mine(self, ctx: AuthContext) -> list[Task]:
        tasks = await self.tasks.find_by_owner(ctx.identifier)
        logger.info("Retrieved %d tasks for user: %s", len(tasks), ctx.identifier)
        return tasks
    
    async def _find(self, task_id: str, action: str) -> Task:
        task = await self.tasks.find_by_id(task_id)
        if task is None:
            logger.warning("Task not found during %s: %s", action, task_id)
            raise NotFoundError(f"Task not found with id: {task_id}")
        return task
    
    # =========================================================================
    # Admin views
    # =========================================================================
    
    async def list_all(self, ctx: AuthContext) -> list[TaskWithOwner]:
        """
        Every task, newest first, with its owner embedded.
        
        An owner that cannot be loaded marks that row only; the listing
        itself still succeeds.
        """
        require_admin(ctx, "list all tasks")
        
        tasks = await self.tasks.find_all_newest_first()
        owners: dict[str, OwnerInfo] = {}
        result = []
        for task in tasks:
            if task.owner not in owners:
                owners[task.owner] = await self._resolve_owner(task)
            result.append(TaskWithOwner.build(task, owners[task.owner]))
        
        logger.info("Admin %s retrieved all tasks with user info, count: %d",
                    ctx.identifier, len(result))
        return result
    
    async def _resolve_owner(self, task: Task) -> OwnerInfo:
        try:
            user = await self.users.find_by_identifier(task.owner)
        except Exception as e:
            logger.warning("Error loading user for task %s: %s", task.id, e)
            return OwnerInfo.unresolvable(task.owner)
        
        if user is None:
            logger.warning("Owner %s of task %s not found", task.owner, task.id)
            return OwnerInfo.unresolvable(task.owner, "User not found")
        return OwnerInfo(identifier=user.identifier, email=user.email)
    
    async def list_by_user(self, ctx: AuthContext, identifier: str) -> UserTasks:
        require_admin(ctx, "list user tasks")
        
        user = await self.users.find_by_identifier(identifier)
        if user is None:
            raise NotFoundError(f"User not found: {identifier}")
        
        tasks = await self.tasks.find_by_owner(identifier)
        logger.info("Admin %s retrieved tasks for user: %s, count: %d",
                    ctx.identifier, identifier, len(tasks))
        return UserTasks(user=user.summary(), tasks=tasks, task_count=len(tasks))
    
    async def stats(self, ctx: AuthContext) -> Stats:
        require_admin(ctx, "view stats")
        
        total_tasks = await self.tasks.count()
        completed = await self.tasks.count_by_completed(True)
        stats = Stats(
            total_users=await self.users.count(),
            total_tasks=total_tasks,
            completed_tasks=completed,
            pending_tasks=total_tasks - completed,
        )
        logger.info("Admin %s accessed system statistics", ctx.identifier)
        return stats
