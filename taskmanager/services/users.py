"""
User service - account lookups.
"""

from __future__ import annotations

import logging

from taskmanager.auth.context import AuthContext
from taskmanager.auth.guard import require_admin
from taskmanager.core.errors import NotFoundError
from taskmanager.core.models import UserSummary
from taskmanager.storage.repositories import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    
    def __init__(self, users: UserRepository):
        self.users = users
    
    async def me(self, ctx: AuthContext) -> UserSummary:
        """The caller's own account."""
        user = await self.users.find_by_identifier(ctx.identifier)
        if user is None:
            raise NotFoundError("User not found")
        return user.summary()
    
    async def list_users(self, ctx: AuthContext) -> list[UserSummary]:
        require_admin(ctx, "list users")
        users = await self.users.find_all()
        logger.info("Admin %s retrieved all users, count: %d", ctx.identifier, len(users))
        return [u.summary() for u in users]
    
    async def get_user(self, ctx: AuthContext, identifier: str) -> UserSummary:
        require_admin(ctx, "get user")
        user = await self.users.find_by_identifier(identifier)
        if user is None:
            raise NotFoundError(f"User not found: {identifier}")
        return user.summary()
