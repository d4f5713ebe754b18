"""
Application wiring.

Every collaborator is constructed here, in dependency order, and handed
to the next by constructor argument. Routes reach the result through
`get_services`.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from taskmanager.auth.identity import IdentityVerifier
from taskmanager.auth.jwt import TokenIssuer
from taskmanager.auth.passwords import PasswordHasher
from taskmanager.config import Settings
from taskmanager.services import TaskService, UserService
from taskmanager.storage import StorageProvider, TaskRepository, UserRepository


@dataclass
class AppServices:
    """Everything the routes need, built once per application."""
    
    storage: StorageProvider
    users: UserRepository
    tasks: TaskRepository
    hasher: PasswordHasher
    issuer: TokenIssuer
    identity: IdentityVerifier
    task_service: TaskService
    user_service: UserService


def build_services(settings: Settings, storage: StorageProvider) -> AppServices:
    users = UserRepository(storage.metadata)
    tasks = TaskRepository(storage.metadata)
    hasher = PasswordHasher(iterations=settings.password_hash_iterations)
    issuer = TokenIssuer(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_token_expire_minutes,
    )
    return AppServices(
        storage=storage,
        users=users,
        tasks=tasks,
        hasher=hasher,
        issuer=issuer,
        identity=IdentityVerifier(users, hasher, issuer),
        task_service=TaskService(tasks, users),
        user_service=UserService(users),
    )


def get_services(request: Request) -> AppServices:
    return request.app.state.services
