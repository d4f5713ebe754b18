"""
Boundary validation.

Each validator returns a list of FieldError; an empty list means the
input is acceptable. `ensure_valid` turns a non-empty list into a single
ValidationError so callers see every problem at once.
"""

from __future__ import annotations

from typing import Any

from email_validator import EmailNotValidError, validate_email

from taskmanager.core.errors import FieldError, ValidationError
from taskmanager.core.models import (
    DESCRIPTION_MAX_LENGTH,
    MUTABLE_TASK_FIELDS,
    TITLE_MAX_LENGTH,
)


IDENTIFIER_MIN_LENGTH = 3
IDENTIFIER_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
SECRET_MIN_LENGTH = 6
SECRET_MAX_LENGTH = 120


def ensure_valid(errors: list[FieldError]) -> None:
    """Raise ValidationError if any field errors were collected."""
    if errors:
        raise ValidationError(errors)


def _is_encodable(value: str) -> bool:
    """Lone surrogates survive JSON decoding but cannot be stored or echoed back."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _check_text(errors: list[FieldError], field: str, value: str, label: str) -> bool:
    if _is_encodable(value):
        return True
    errors.append(FieldError(field, f"{label} contains invalid characters"))
    return False


def _check_length(
    errors: list[FieldError],
    field: str,
    value: str,
    min_length: int,
    max_length: int,
    label: str,
) -> None:
    if not (min_length <= len(value) <= max_length):
        errors.append(FieldError(
            field,
            f"{label} must be between {min_length} and {max_length} characters",
        ))


# =============================================================================
# Accounts
# =============================================================================


def validate_registration(identifier: Any, email: Any, secret: Any) -> list[FieldError]:
    errors: list[FieldError] = []
    
    if not isinstance(identifier, str) or not identifier.strip():
        errors.append(FieldError("username", "Username is required"))
    elif _check_text(errors, "username", identifier, "Username"):
        _check_length(
            errors, "username", identifier,
            IDENTIFIER_MIN_LENGTH, IDENTIFIER_MAX_LENGTH, "Username",
        )
    
    if not isinstance(email, str) or not email.strip():
        errors.append(FieldError("email", "Email is required"))
    elif len(email) > EMAIL_MAX_LENGTH:
        errors.append(FieldError("email", f"Email cannot exceed {EMAIL_MAX_LENGTH} characters"))
    elif _check_text(errors, "email", email, "Email"):
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            errors.append(FieldError("email", f"Email is invalid: {e}"))
    
    if not isinstance(secret, str) or not secret:
        errors.append(FieldError("password", "Password is required"))
    elif _check_text(errors, "password", secret, "Password"):
        _check_length(
            errors, "password", secret,
            SECRET_MIN_LENGTH, SECRET_MAX_LENGTH, "Password",
        )
    
    return errors


def validate_login(identifier: Any, secret: Any) -> list[FieldError]:
    errors: list[FieldError] = []
    if not isinstance(identifier, str) or not identifier.strip():
        errors.append(FieldError("username", "Username is required"))
    else:
        _check_text(errors, "username", identifier, "Username")
    if not isinstance(secret, str) or not secret:
        errors.append(FieldError("password", "Password is required"))
    else:
        _check_text(errors, "password", secret, "Password")
    return errors


# =============================================================================
# Tasks
# =============================================================================


def _validate_title(errors: list[FieldError], title: Any) -> None:
    if not isinstance(title, str) or not title.strip():
        errors.append(FieldError("title", "Title is required"))
    elif len(title) > TITLE_MAX_LENGTH:
        errors.append(FieldError(
            "title", f"Title must be between 1 and {TITLE_MAX_LENGTH} characters",
        ))
    else:
        _check_text(errors, "title", title, "Title")


def _validate_description(errors: list[FieldError], description: Any) -> None:
    if description is None:
        return
    if not isinstance(description, str):
        errors.append(FieldError("description", "Description must be a string"))
    elif len(description) > DESCRIPTION_MAX_LENGTH:
        errors.append(FieldError(
            "description",
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters",
        ))
    else:
        _check_text(errors, "description", description, "Description")


def validate_task_create(title: Any, description: Any = None) -> list[FieldError]:
    errors: list[FieldError] = []
    _validate_title(errors, title)
    _validate_description(errors, description)
    return errors


def normalize_task_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """
    Keep only mutable fields that carry a value.
    
    An explicit null is treated the same as an absent field; an empty
    string is a real value and is kept.
    """
    return {
        key: value
        for key, value in changes.items()
        if key in MUTABLE_TASK_FIELDS and value is not None
    }


def validate_task_update(changes: dict[str, Any]) -> list[FieldError]:
    """Validate the fields present in a (normalized) partial update."""
    errors: list[FieldError] = []
    if "title" in changes:
        _validate_title(errors, changes["title"])
    if "description" in changes:
        _validate_description(errors, changes["description"])
    if "completed" in changes and not isinstance(changes["completed"], bool):
        errors.append(FieldError("completed", "Completed must be true or false"))
    return errors
