"""
Core data models: users and tasks.

The stored shapes (`User`, `Task`) and the public shapes returned to
callers (`UserSummary`, `TaskWithOwner`) are kept separate so the
password hash can never leak through a response model.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from taskmanager.core.utils import generate_id, utc_now


# =============================================================================
# Enums
# =============================================================================


class Role(str, Enum):
    """Platform-wide role, fixed at account creation."""
    
    USER = "USER"
    ADMIN = "ADMIN"


# =============================================================================
# User
# =============================================================================


class User(BaseModel):
    """A user as persisted in the credential store."""
    
    identifier: str  # unique username, immutable
    email: str
    password_hash: str
    role: Role = Role.USER
    created_at: datetime = Field(default_factory=utc_now)
    
    def summary(self) -> UserSummary:
        return UserSummary(
            identifier=self.identifier,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
        )


class UserSummary(BaseModel):
    """User data returned to clients (no secret material)."""
    
    identifier: str
    email: str
    role: Role
    created_at: datetime


# =============================================================================
# Task
# =============================================================================


TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000

# Fields a task owner may change after creation.
MUTABLE_TASK_FIELDS = ("title", "description", "completed")


class Task(BaseModel):
    """
    A task, owned by exactly one user.
    
    `owner` is set at creation and never reassigned.
    """
    
    id: str = Field(default_factory=lambda: generate_id("task"))
    title: str
    description: str | None = None
    completed: bool = False
    owner: str  # User.identifier
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    
    def apply(self, changes: dict[str, Any]) -> None:
        """Apply a partial update and refresh updated_at."""
        for key, value in changes.items():
            if key in MUTABLE_TASK_FIELDS:
                setattr(self, key, value)
        self.updated_at = utc_now()


class OwnerInfo(BaseModel):
    """
    Owner embedded in admin task listings.
    
    When the owner cannot be loaded the entry still carries the raw
    identifier, with `resolved=False` and an `error` marker.
    """
    
    identifier: str
    email: str | None = None
    resolved: bool = True
    error: str | None = None
    
    @classmethod
    def unresolvable(cls, identifier: str, error: str = "Unable to load user data") -> OwnerInfo:
        return cls(identifier=identifier, resolved=False, error=error)


class TaskWithOwner(BaseModel):
    """Admin view of a task with its owner resolved."""
    
    id: str
    title: str
    description: str | None
    completed: bool
    created_at: datetime
    updated_at: datetime
    owner: OwnerInfo
    
    @classmethod
    def build(cls, task: Task, owner: OwnerInfo) -> TaskWithOwner:
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            completed=task.completed,
            created_at=task.created_at,
            updated_at=task.updated_at,
            owner=owner,
        )


class UserTasks(BaseModel):
    """One user's tasks, as returned to admins."""
    
    user: UserSummary
    tasks: list[Task]
    task_count: int


class Stats(BaseModel):
    """Aggregate counts for the admin dashboard."""
    
    total_users: int
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
