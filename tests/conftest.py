# tests/conftest.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskmanager.api.app import create_app
from taskmanager.auth.context import AuthContext
from taskmanager.auth.identity import IdentityVerifier
from taskmanager.auth.jwt import TokenIssuer
from taskmanager.auth.passwords import PasswordHasher
from taskmanager.config import Settings
from taskmanager.core.models import Role
from taskmanager.services import TaskService, UserService
from taskmanager.storage import TaskRepository, UserRepository, create_local_storage


TEST_SECRET = "test-jwt-secret-that-is-long-enough-for-hs256"


# =============================================================================
# Core components
# =============================================================================


@pytest.fixture()
def storage():
    """Fresh in-memory storage per test."""
    return create_local_storage()


@pytest.fixture()
def users(storage) -> UserRepository:
    return UserRepository(storage.metadata)


@pytest.fixture()
def tasks(storage) -> TaskRepository:
    return TaskRepository(storage.metadata)


@pytest.fixture()
def hasher() -> PasswordHasher:
    # Low work factor keeps the suite fast; the algorithm is the same.
    return PasswordHasher(iterations=1_000)


@pytest.fixture()
def issuer() -> TokenIssuer:
    return TokenIssuer(secret_key=TEST_SECRET)


@pytest.fixture()
def verifier(users, hasher, issuer) -> IdentityVerifier:
    return IdentityVerifier(users, hasher, issuer)


@pytest.fixture()
def task_service(tasks, users) -> TaskService:
    return TaskService(tasks, users)


@pytest.fixture()
def user_service(users) -> UserService:
    return UserService(users)


@pytest.fixture()
def alice() -> AuthContext:
    return AuthContext(identifier="alice", role=Role.USER)


@pytest.fixture()
def bob() -> AuthContext:
    return AuthContext(identifier="bob", role=Role.USER)


@pytest.fixture()
def admin() -> AuthContext:
    return AuthContext(identifier="admin", role=Role.ADMIN)


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture()
def settings() -> Settings:
    """
    Explicit settings; `_env_file=None` keeps a developer's .env out of tests.
    """
    return Settings(
        _env_file=None,
        environment="test",
        jwt_secret_key=TEST_SECRET,
        password_hash_iterations=1_000,
        admin_identifier="admin",
        admin_email="admin@x.com",
        admin_password="admin-secret",
        sentry_dsn="",
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    """Client with the lifespan run (bootstrap admin seeded)."""
    with TestClient(app) as c:
        yield c


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
