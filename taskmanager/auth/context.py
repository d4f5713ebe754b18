"""
Auth context - who is making this request.

Built from a validated token and passed explicitly into every
authorization-sensitive service call. Nothing reads it from ambient state.
"""

from __future__ import annotations

from dataclasses import dataclass

from taskmanager.auth.jwt import TokenPayload
from taskmanager.core.models import Role


@dataclass(frozen=True)
class AuthContext:
    """
    Authenticated caller.
    
    Usage in routes:
        async def my_route(ctx: AuthContext = Depends(require_auth)):
            tasks = await services.tasks.list_mine(ctx)
    """
    
    identifier: str
    role: Role = Role.USER
    
    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
    
    @classmethod
    def from_token(cls, payload: TokenPayload) -> AuthContext:
        return cls(identifier=payload.identifier, role=payload.role)
