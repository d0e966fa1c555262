"""
Location Lineage REST API - Entry Point

Provides: location catalog listing and creation, ancestor chain lookup,
a demo counter WebSocket, health and Prometheus metrics.

Run:
    uvicorn lineage.api.main:app --host 127.0.0.1 --port 3000
"""

import time
import uuid

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from lineage import __version__
from lineage.config import settings
from lineage.errors import (
    LocationConflictError,
    LocationNotFoundError,
    LocationServiceError,
    LocationValidationError,
    StorageUnavailableError,
)
from lineage.observability import (
    clear_trace_id,
    get_logger,
    record_api_request,
    set_trace_id,
    setup_logging,
)

# Initialize structured logging on module load
setup_logging(service_name="api", level=settings.LOG_LEVEL, json_format=settings.LOG_FORMAT == "json")
logger = get_logger(__name__)

from lineage.database import engine, init_models  # noqa: E402
from .routers import counter_router, locations_router  # noqa: E402

API_DESCRIPTION = """
REST API for a catalog of hierarchical locations (city, region, country...).

## Key Features

- **Catalog**: list and create locations with a population and optional parent
- **Lineage**: resolve the ordered ancestor chain of any location
- **Counter**: demo WebSocket pushing a live counter
"""

OPENAPI_TAGS = [
    {"name": "locations", "description": "Location catalog and ancestor chains"},
    {"name": "counter", "description": "Demo live counter over WebSocket"},
    {"name": "health", "description": "System health checks"},
]

# Domain error -> HTTP status
ERROR_STATUS = {
    LocationNotFoundError: status.HTTP_404_NOT_FOUND,
    LocationConflictError: status.HTTP_409_CONFLICT,
    LocationValidationError: status.HTTP_400_BAD_REQUEST,
    StorageUnavailableError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Metrics label for requests that match no route
UNMATCHED_ENDPOINT = "unmatched"


app = FastAPI(
    title="Location Lineage API",
    description=API_DESCRIPTION,
    version=__version__,
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(LocationServiceError)
async def location_error_handler(request: Request, exc: LocationServiceError):
    """Translate domain errors into JSON error responses."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_class, code in ERROR_STATUS.items():
        if isinstance(exc, error_class):
            status_code = code
            break

    if status_code >= 500:
        # Internal details stay in the logs
        logger.error(f"Request failed: {exc}", extra={"path": request.url.path})
        detail = "Internal server error"
    else:
        detail = str(exc)
    return JSONResponse(status_code=status_code, content={"detail": detail})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400), like missing fields."""
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": errors})


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """Track request metrics for Prometheus."""
    if request.url.path in ["/metrics", "/health"]:
        return await call_next(request)

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    # Route template keeps label cardinality bounded; unknown paths share one label
    route = request.scope.get("route")
    endpoint = getattr(route, "path", UNMATCHED_ENDPOINT)
    record_api_request(request.method, endpoint, response.status_code, duration)
    return response


@app.middleware("http")
async def request_tracing_middleware(request: Request, call_next):
    """Add trace_id to all requests for logging correlation."""
    trace_id = request.headers.get("X-Trace-ID", str(uuid.uuid4())[:16])
    set_trace_id(trace_id)
    try:
        response = await call_next(request)
        response.headers["X-Trace-ID"] = trace_id
        return response
    finally:
        clear_trace_id()


# Register routers
app.include_router(locations_router)
app.include_router(counter_router)


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info(f"Starting Location Lineage API v{__version__}")
    logger.info(
        "Ancestor resolution configured",
        extra={
            "strategy": settings.ANCESTOR_STRATEGY,
            "max_depth": settings.ANCESTOR_MAX_DEPTH,
            "timeout": settings.DB_QUERY_TIMEOUT,
        },
    )
    if settings.DB_AUTO_CREATE:
        await init_models(engine)


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down Location Lineage API")
    await engine.dispose()


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint for Docker."""
    return {"status": "healthy", "service": settings.SERVICE_NAME, "version": __version__}


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Location Lineage API",
        "version": __version__,
        "documentation": "/docs",
        "health": "/health",
        "metrics": "/metrics",
    }


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    logger.info(f"Listening on {settings.API_HOST}:{settings.API_PORT}")
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT, log_config=None)
