"""
Authentication and authorization core.

- passwords.PasswordHasher  - salted one-way hashing, constant-time verify
- jwt.TokenIssuer           - signed, time-bound session tokens
- identity.IdentityVerifier - registration and login
- guard                     - admin and ownership rules
- policies.require_auth     - FastAPI dependency resolving the caller

The HTTP routes live in auth/routes.py and are mounted by api/app.py.
"""

from taskmanager.auth.context import AuthContext
from taskmanager.auth.guard import is_admin, is_owner, require_admin, require_owner
from taskmanager.auth.identity import IdentityVerifier, LoginResult
from taskmanager.auth.jwt import TokenIssuer, TokenPayload
from taskmanager.auth.passwords import PasswordHasher

__all__ = [
    "AuthContext",
    "is_admin",
    "is_owner",
    "require_admin",
    "require_owner",
    "IdentityVerifier",
    "LoginResult",
    "TokenIssuer",
    "TokenPayload",
    "PasswordHasher",
]
