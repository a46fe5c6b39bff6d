"""
FastAPI application entry point.

Configures middleware, routes, static uploads and exception handlers.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from backoffice.core.config import Settings, settings
from backoffice.core.database import Database
from backoffice.core.logging_config import configure_logging
from backoffice.core.uploads import UploadResolver
from backoffice.routers import (
    auth,
    employees,
    managers,
    organizations,
    profile,
    projects,
    requests,
    services,
    tasks,
)
from backoffice.services.auth_service import ensure_admin

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    message = str(first.get("msg", "Invalid request")).removeprefix("Value error, ")
    field = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if first.get("type") == "value_error" or not field:
        return message
    if first.get("type") == "missing":
        return f"{'.'.join(field)} is required"
    return f"{'.'.join(field)}: {message}"


def create_app(config: Settings = settings) -> FastAPI:
    """Build the application for the given settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        configure_logging(config.LOG_LEVEL)
        logger.info("Starting backoffice API in %s mode", config.ENVIRONMENT)

        Path(config.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)

        database = Database(config.DATABASE_URL, echo=config.DEBUG)
        if config.AUTO_CREATE_TABLES:
            await database.create_all()

        async with database.session_factory() as session:
            await ensure_admin(session, config.ADMIN_EMAIL, config.ADMIN_PASSWORD)
            await session.commit()

        app.state.database = database
        app.state.upload_resolver = UploadResolver.from_settings(config)
        logger.info("Upload strategies: %s", ", ".join(app.state.upload_resolver.strategy_names))

        yield

        await database.dispose()
        logger.info("Shutting down backoffice API")

    app = FastAPI(
        title="Backoffice API",
        description="Company back-office and public marketing content",
        version="1.0.0",
        docs_url="/api/docs" if config.DEBUG else None,
        redoc_url="/api/redoc" if config.DEBUG else None,
        openapi_url="/api/openapi.json" if config.DEBUG else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": {"code": "VALIDATION_ERROR", "message": _validation_message(exc)}},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        detail = {"code": "INTERNAL_SERVER_ERROR", "message": "Server error"}
        if config.ENVIRONMENT != "production":
            detail.update(message=str(exc) or "Server error", type=type(exc).__name__)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": detail},
        )

    @app.get("/api/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        return {"status": "OK", "message": "Server is running"}

    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(organizations.router, prefix="/api/organizations", tags=["Organizations"])
    app.include_router(organizations.departments_router, prefix="/api/departments", tags=["Departments"])
    app.include_router(managers.router, prefix="/api/managers", tags=["Managers"])
    app.include_router(employees.router, prefix="/api/employees", tags=["Employees"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])
    app.include_router(services.router, prefix="/api/services", tags=["Services"])
    app.include_router(projects.router, prefix="/api/projects", tags=["Projects"])
    app.include_router(requests.router, prefix="/api/requests", tags=["Requests"])
    app.include_router(profile.router, prefix="/api/profile", tags=["Profile"])

    app.mount(
        "/uploads",
        StaticFiles(directory=Path(config.UPLOAD_DIR), check_dir=False),
        name="uploads",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backoffice.main:app", host="0.0.0.0", port=settings.PORT)
