"""
Task routes - the caller's own tasks.

Ownership is enforced in TaskService; these handlers only translate
HTTP into service calls.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, StrictBool, StrictStr

from taskmanager.api.deps import AppServices, get_services
from taskmanager.auth.context import AuthContext
from taskmanager.auth.policies import require_auth
from taskmanager.core.models import Task

router = APIRouter(prefix="/tasks", tags=["tasks"])


class CreateTaskRequest(BaseModel):
    title: StrictStr | None = None
    description: StrictStr | None = None


class UpdateTaskRequest(BaseModel):
    """Partial update: fields left out of the body are not touched."""
    title: StrictStr | None = None
    description: StrictStr | None = None
    completed: StrictBool | None = None


@router.get("", response_model=list[Task])
async def list_my_tasks(
    ctx: AuthContext = Depends(require_auth),
    services: AppServices = Depends(get_services),
):
    return await services.task_service.list_mine(ctx)


@router.post("", response_model=Task, status_code=201)
async def create_task(
    data: CreateTaskRequest,
    ctx: AuthContext = Depends(require_auth),
    services: AppServices = Depends(get_services),
):
    """Create a task owned by the caller."""
    return await services.task_service.create(ctx, data.title, data.description)


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: str,
    ctx: AuthContext = Depends(require_auth),
    services: AppServices = Depends(get_services),
):
    return await services.task_service.get(ctx, task_id)


@router.put("/{task_id}", response_model=Task)
@router.patch("/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    data: UpdateTaskRequest,
    ctx: AuthContext = Depends(require_auth),
    services: AppServices = Depends(get_services),
):
    return await services.task_service.update(
        ctx, task_id, data.model_dump(exclude_unset=True)
    )


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    ctx: AuthContext = Depends(require_auth),
    services: AppServices = Depends(get_services),
):
    await services.task_service.delete(ctx, task_id)
    return Response(status_code=204)
