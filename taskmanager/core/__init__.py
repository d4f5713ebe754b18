"""
Core domain: models, errors, validation.
"""

from taskmanager.core.models import (
    Role,
    User,
    UserSummary,
    Task,
    TaskWithOwner,
    OwnerInfo,
    UserTasks,
    Stats,
)
from taskmanager.core.errors import (
    FieldError,
    TaskManagerError,
    ValidationError,
    DuplicateIdentifierError,
    DuplicateEmailError,
    InvalidCredentialsError,
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    UnauthenticatedError,
    NotFoundError,
    ForbiddenError,
)
from taskmanager.core.utils import generate_id, utc_now

__all__ = [
    # Models
    "Role",
    "User",
    "UserSummary",
    "Task",
    "TaskWithOwner",
    "OwnerInfo",
    "UserTasks",
    "Stats",
    # Errors
    "FieldError",
    "TaskManagerError",
    "ValidationError",
    "DuplicateIdentifierError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "UnauthenticatedError",
    "NotFoundError",
    "ForbiddenError",
    # Utils
    "generate_id",
    "utc_now",
]
