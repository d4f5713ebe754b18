"""
Admin routes - read access across all users.

Each service call checks the ADMIN role before touching storage.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from taskmanager.api.deps import AppServices, get_services
from taskmanager.auth.context import AuthContext
from taskmanager.auth.policies import require_auth
from taskmanager.core.models import Stats, TaskWithOwner, UserSummary, UserTasks

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=list[UserSummary])
async def list_users(
    ctx: AuthContext = Depends(require_auth),
    services: AppServices = Depends(get_services),
):
    return await services.user_service.list_users(ctx)


@router.get("/users/{identifier}", response_model=UserSummary)
async def get_user(
    identifier: str,
    ctx: AuthContext = Depends(require_auth),
    services: AppServices = Depends(get_services),
):
    return await services.user_service.get_user(ctx, identifier)


@router.get("/users/{identifier}/tasks", response_model=UserTasks)
async def list_user_tasks(
    identifier: str,
    ctx: AuthContext = Depends(require_auth),
    services: AppServices = Depends(get_services),
):
    return await services.task_service.list_by_user(ctx, identifier)


@router.get("/tasks", response_model=list[TaskWithOwner])
async def list_all_tasks(
    ctx: AuthContext = Depends(require_auth),
    services: AppServices = Depends(get_services),
):
    """All tasks, newest first, each with its owner embedded."""
    return await services.task_service.list_all(ctx)


@router.get("/stats", response_model=Stats)
async def get_stats(
    ctx: AuthContext = Depends(require_auth),
    services: AppServices = Depends(get_services),
):
    return await services.task_service.stats(ctx)
