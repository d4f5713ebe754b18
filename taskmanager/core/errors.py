"""
Error taxonomy.

Every failure the service surfaces to a caller is one of these. The HTTP
layer maps them to status codes in one place (api/errors.py); services and
auth components only ever raise them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class TaskManagerError(Exception):
    """Base exception for all expected failures."""

    code: str = "error"
    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "error": self.code, "message": self.message}


class ConfigurationError(TaskManagerError):
    """Settings are unusable (e.g. default JWT secret in production)."""
    code = "configuration_error"
    status_code = 500
    default_message = "Invalid configuration"


# =============================================================================
# Input
# =============================================================================


class ValidationError(TaskManagerError):
    """Malformed input, with field-level detail."""

    code = "validation_error"
    status_code = 422
    default_message = "Validation failed"

    def __init__(self, errors: list[FieldError], message: str | None = None):
        self.errors = list(errors)
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["errors"] = [e.to_dict() for e in self.errors]
        return body


# =============================================================================
# Registration / login
# =============================================================================


class DuplicateIdentifierError(TaskManagerError):
    code = "duplicate_identifier"
    default_message = "Username is already taken"


class DuplicateEmailError(TaskManagerError):
    code = "duplicate_email"
    default_message = "Email is already registered"


class InvalidCredentialsError(TaskManagerError):
    """
    Raised for an unknown identifier and for a wrong secret alike.

    The message is fixed so both causes produce byte-identical responses.
    """

    code = "invalid_credentials"
    status_code = 401
    default_message = "Invalid username or password"

    def __init__(self):
        super().__init__(None)


# =============================================================================
# Tokens
# =============================================================================


class TokenError(TaskManagerError):
    """Base exception for token errors."""
    code = "token_error"
    status_code = 401
    default_message = "Invalid token"


class TokenExpiredError(TokenError):
    """Token has expired."""
    code = "token_expired"
    default_message = "Token has expired"


class TokenInvalidError(TokenError):
    """Token is invalid or malformed."""
    code = "token_invalid"


class UnauthenticatedError(TaskManagerError):
    """No usable bearer token on a protected route."""
    code = "unauthenticated"
    status_code = 401
    default_message = "Authentication required"


# =============================================================================
# Access
# =============================================================================


class NotFoundError(TaskManagerError):
    code = "not_found"
    status_code = 404
    default_message = "Resource not found"


class ForbiddenError(TaskManagerError):
    code = "forbidden"
    status_code = 403
    default_message = "Access denied"
