"""
FastAPI application for User Service.

Wires together the layers:
- Domain: User entity
- Repositories: in-memory and SQLAlchemy persistence
- Services: UserService facade
- Routers: HTTP endpoints
"""

import time
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .database import init_db
from .logging_config import setup_logging
from .metrics import metrics_endpoint, track_request_metrics
from .routers import health_router, users_router

setup_logging(settings.LOG_LEVEL, settings.JSON_LOGS, settings.SERVICE_NAME)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting User Service", backend=settings.REPOSITORY_BACKEND)

    if not settings.uses_memory_backend:
        try:
            init_db()
        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise

    logger.info("User Service started")

    yield

    logger.info("User Service shutdown complete")


app = FastAPI(
    title="User Service",
    description="User record access for QNT9-SRS",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Bind a request ID to the log context and echo it back."""
    request_id = request.headers.get("X-Request-ID") or f"req-{uuid.uuid4().hex[:12]}"
    request.state.request_id = request_id
    structlog.contextvars.bind_contextvars(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()
    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def track_metrics(request: Request, call_next):
    """Track Prometheus metrics."""
    start_time = time.time()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
    finally:
        # Unhandled exceptions are recorded as 500 before propagating
        route = request.scope.get("route")
        endpoint = route.path if route is not None else request.url.path
        track_request_metrics(request.method, endpoint, status_code, time.time() - start_time)
    return response


app.include_router(users_router.router)
app.include_router(health_router.router)
app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], include_in_schema=False)


@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": "QNT9 User Service",
        "version": settings.SERVICE_VERSION,
        "status": "operational",
        "docs": "/api/docs",
        "health": "/api/v1/health",
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "request_id": (
                getattr(request.state, "request_id", None)
                or request.headers.get("X-Request-ID")
            ),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
