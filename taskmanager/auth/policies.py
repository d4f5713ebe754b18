"""
Policies - the route-level entry into authorization.

Route handlers declare `ctx: AuthContext = Depends(require_auth)`. The
dependency validates the bearer token before the handler body runs, so
a missing, malformed, or expired token never reaches business logic.
Role and ownership rules are applied by the services (auth/guard.py),
which receive the context explicitly.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskmanager.auth.context import AuthContext
from taskmanager.core.errors import UnauthenticatedError


# Optional bearer: we raise our own error instead of FastAPI's 403
optional_bearer = HTTPBearer(auto_error=False)


async def require_auth(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
) -> AuthContext:
    """
    Resolve the caller from the Authorization header.
    
    Raises:
        UnauthenticatedError: no bearer token
        TokenExpiredError / TokenInvalidError: token rejected by the issuer
    """
    if not credentials or not credentials.credentials:
        raise UnauthenticatedError()
    
    issuer = request.app.state.services.issuer
    payload = issuer.validate(credentials.credentials)
    return AuthContext.from_token(payload)
