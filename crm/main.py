"""FastAPI main application module."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from crm.config.database import close_redis, init_models, init_redis
from crm.config.settings import settings
from crm.middleware.audit import AuditMiddleware
from crm.middleware.auth_middleware import AuthMiddleware
from crm.middleware.exception_handler import register_exception_handlers
from crm.middleware.logging_middleware import PerformanceMiddleware, RequestLoggingMiddleware
from crm.middleware.rate_limit import RateLimitMiddleware
from crm.routers import (
    activities,
    audit,
    auth,
    contacts,
    deals,
    emails,
    reports,
    roles,
    tasks,
    teams,
    users,
    workflows,
)
from crm.schemas.common import ErrorResponse

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
)

# Register exception handlers
register_exception_handlers(app)

# Security middleware
if settings.ENVIRONMENT == "production":
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=["*"])

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=settings.ALLOWED_METHODS,
    allow_headers=settings.ALLOWED_HEADERS,
)

# Request/Response logging middleware
app.add_middleware(
    RequestLoggingMiddleware,
    log_headers=settings.ENVIRONMENT == "development",
)

# Performance monitoring middleware
app.add_middleware(PerformanceMiddleware, slow_request_threshold=2.0)

# Audit sits inside the rate limiter so throttled requests are not recorded
app.add_middleware(AuditMiddleware)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(AuthMiddleware)


# Event handlers
@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    await init_models()
    await init_redis()


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    await close_redis()


# Health check endpoint
@app.get("/health", tags=["Health"])
@app.get(f"{settings.API_PREFIX}/health", tags=["Health"], include_in_schema=False)
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.API_VERSION,
        "environment": settings.ENVIRONMENT,
    }


# Include routers
ROUTERS = [
    (auth.router, "auth", "Authentication"),
    (users.router, "users", "Users"),
    (roles.router, "roles", "Roles"),
    (teams.router, "teams", "Teams"),
    (contacts.router, "contacts", "Contacts"),
    (deals.router, "deals", "Deals"),
    (tasks.router, "tasks", "Tasks"),
    (activities.router, "activities", "Activities"),
    (workflows.router, "workflows", "Workflows"),
    (emails.router, "emails", "Emails"),
    (audit.router, "audit", "Audit"),
    (reports.router, "reports", "Reports"),
]

ERROR_RESPONSES = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}

for router, path, tag in ROUTERS:
    app.include_router(
        router,
        prefix=f"{settings.API_PREFIX}/{path}",
        tags=[tag],
        responses=ERROR_RESPONSES,
    )


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs_url": f"{settings.API_PREFIX}/docs",
    }
