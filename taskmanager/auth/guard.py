"""
Authorization guard.

Two rules, nothing else:
- admin surfaces: caller's role must be ADMIN
- per-task operations: caller must be the task's owner
"""

from __future__ import annotations

import logging

from taskmanager.auth.context import AuthContext
from taskmanager.core.errors import ForbiddenError
from taskmanager.core.models import Role, Task

logger = logging.getLogger(__name__)


def is_admin(role: Role | str) -> bool:
    """True iff the role is ADMIN."""
    try:
        return Role(role) == Role.ADMIN
    except ValueError:
        return False


def require_admin(ctx: AuthContext, action: str) -> None:
    """Raise ForbiddenError unless the caller is an admin."""
    if not is_admin(ctx.role):
        logger.warning("Non-admin user %s attempted admin action: %s", ctx.identifier, action)
        raise ForbiddenError("Access denied. Admin role required.")


def is_owner(ctx: AuthContext, task: Task) -> bool:
    return task.owner == ctx.identifier


def require_owner(ctx: AuthContext, task: Task, action: str) -> None:
    """Raise ForbiddenError unless the caller owns the task."""
    if not is_owner(ctx, task):
        logger.warning(
            "Unauthorized %s attempt - task: %s, user: %s", action, task.id, ctx.identifier
        )
        raise ForbiddenError(f"You are not authorized to {action} this task")
