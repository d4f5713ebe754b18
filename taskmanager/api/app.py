"""
FastAPI application for the task manager.

`create_app()` is the only place collaborators are constructed; run it
with `uvicorn --factory taskmanager.api.app:create_app` or via
`python -m taskmanager`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskmanager.api.admin import router as admin_router
from taskmanager.api.deps import build_services
from taskmanager.api.errors import register_exception_handlers
from taskmanager.api.tasks import router as tasks_router
from taskmanager.auth.routes import router as auth_router
from taskmanager.config import Settings, get_settings
from taskmanager.integrations.sentry import init_sentry
from taskmanager.storage import StorageProvider, create_local_storage

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    storage: StorageProvider | None = None,
) -> FastAPI:
    """Build the application and all of its collaborators."""
    settings = settings or get_settings()
    settings.check()
    
    services = build_services(settings, storage or create_local_storage())
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_sentry(settings):
            logger.info("Sentry error tracking enabled")
        
        if settings.bootstrap_admin_enabled:
            await services.identity.ensure_admin(
                settings.admin_identifier,
                settings.admin_email,
                settings.admin_password,
            )
        
        logger.info("Task manager API starting in %s mode", settings.environment)
        yield
        logger.info("Task manager API shutting down")
    
    app = FastAPI(
        title="Task Manager API",
        description="User-scoped task tracking with an admin view across all users",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    register_exception_handlers(app)
    
    app.include_router(auth_router, prefix="/api")
    app.include_router(tasks_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")
    
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "taskmanager-api"}
    
    return app
