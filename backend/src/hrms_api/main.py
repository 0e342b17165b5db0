"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from hrms_api import __version__
from hrms_api.config import get_settings
from hrms_api.middleware.error_handler import register_exception_handlers
from hrms_api.routers import (
    bank_details,
    departments,
    employees,
    employment_history,
    organizations,
)

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Responses carry personal and salary data
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"
        if not get_settings().debug:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    from hrms_api.database import engine

    logger.info(f"Starting {app.title} {app.version}")
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_settings()

    app = FastAPI(
        title=config.app_name,
        version=__version__,
        description="Human Resource Management System API",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    # Sanitized error handlers, domain errors map to 404/400
    register_exception_handlers(app)

    app.add_middleware(SecurityHeadersMiddleware)

    app.include_router(organizations.router, prefix="/api/v1/organizations", tags=["Organizations"])
    app.include_router(employees.router, prefix="/api/v1/employees", tags=["Employees"])
    app.include_router(departments.router, prefix="/api/v1/departments", tags=["Departments"])
    app.include_router(
        bank_details.router,
        prefix="/api/v1/employees/{employee_id}/bank-accounts",
        tags=["Bank Accounts"],
    )
    app.include_router(
        employment_history.router,
        prefix="/api/v1/employees/{employee_id}/employment-history",
        tags=["Employment History"],
    )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
