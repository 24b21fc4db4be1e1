"""
FastAPI Application
==================

Main FastAPI application exposing the quality range detail queries.
"""

from contextlib import asynccontextmanager
import uuid
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog
import uvicorn

from quality_range.api.dependencies import ServiceClients
from quality_range.api.routes.health import router as health_router
from quality_range.api.routes.ranges import router as ranges_router
from quality_range.config.logging import get_logger
from quality_range.config.settings import get_settings
from quality_range.core.clients import ServiceClientError
from quality_range.core.hash_ids import HashIdDecodeError
from quality_range.models.schemas import ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting FastAPI application")
    app.state.clients = ServiceClients.from_settings()
    logger.info("Service clients initialized")

    try:
        yield
    finally:
        logger.info("Shutting down FastAPI application")
        try:
            await app.state.clients.close()
            logger.info("Service clients closed")
        except Exception as e:
            logger.error("Error closing service clients", error=str(e))


# Create FastAPI app
settings = get_settings()
app = FastAPI(
    title=settings.app_name,
    description="Control-point element coverage of pipelines and templates for quality rules",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_hosts,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(ranges_router)


# Request ID middleware
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


def _error_response(
    request: Request, status_code: int, error: str, error_code: str, details=None
) -> JSONResponse:
    error_response = ErrorResponse(
        error=error,
        error_code=error_code,
        details=details,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=status_code, content=error_response.model_dump(mode="json"))


# Exception handlers
@app.exception_handler(HTTPException)
async def custom_http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom HTTP exception handler with structured error response."""
    logger.error(
        "HTTP exception",
        status_code=exc.status_code,
        detail=exc.detail,
        request_id=getattr(request.state, "request_id", None),
    )
    response = _error_response(request, exc.status_code, str(exc.detail), str(exc.status_code))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(HashIdDecodeError)
async def hash_id_exception_handler(request: Request, exc: HashIdDecodeError) -> JSONResponse:
    """Undecodable indicator IDs are client errors."""
    logger.warning("Invalid hashed id", hash_id=exc.hash_id)
    return _error_response(request, 400, str(exc), "INVALID_ID", {"id": exc.hash_id})


@app.exception_handler(ServiceClientError)
async def service_client_exception_handler(
    request: Request, exc: ServiceClientError
) -> JSONResponse:
    """Upstream service failures surface as bad gateway."""
    logger.error(
        "Upstream service error",
        service=exc.service,
        status_code=exc.status_code,
        envelope_status=exc.envelope_status,
        error_message=exc.message,
        request_id=getattr(request.state, "request_id", None),
    )
    return _error_response(
        request,
        502,
        f"Upstream service '{exc.service}' failed",
        "UPSTREAM_ERROR",
        (
            {
                "message": exc.message,
                "status_code": exc.status_code,
                "envelope_status": exc.envelope_status,
            }
            if settings.debug
            else None
        ),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """General exception handler for unexpected errors."""
    logger.error(
        "Unhandled exception",
        exception=str(exc),
        request_id=getattr(request.state, "request_id", None),
        exc_info=True,
    )
    return _error_response(
        request,
        500,
        "Internal server error",
        "INTERNAL_ERROR",
        {"exception": str(exc)} if settings.debug else None,
    )


def main() -> None:
    """Run the API server."""
    uvicorn.run(
        "quality_range.api.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
