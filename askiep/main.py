"""FastAPI application entry point."""
import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from askiep.core.config import settings
from askiep.core.errors import AppError
from askiep.core.structured_logging import build_log_context, configure_logging
from askiep.db.session import engine

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

if settings.SENTRY_DSN and settings.ENV != "dev":
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,  # IEP content is PHI
    )
    logger.info("Sentry initialized for error tracking")

# ============================================================================
# Rate Limiting
# ============================================================================

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from askiep.core.rate_limit import limiter

# ============================================================================
# FastAPI App
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DB_AUTO_CREATE:
        from askiep.db.base import Base
        import askiep.db.models  # noqa: F401

        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured")
    yield


app = FastAPI(
    title="AskIEP API",
    description="IEP records, compliance tracking and AI advocacy assistance",
    version=settings.VERSION,
    docs_url="/docs" if settings.is_dev else None,
    redoc_url="/redoc" if settings.is_dev else None,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Owner-Key", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Assign a request id and log one line per request (no bodies)."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    started = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    route = request.scope.get("route")
    logger.info(
        "%s %s -> %s",
        request.method,
        request.url.path,
        response.status_code,
        extra=build_log_context(
            request_id=request_id,
            owner_key=request.headers.get("X-Owner-Key"),
            route=getattr(route, "path", None),
            method=request.method,
            status_code=response.status_code,
            duration_ms=(time.perf_counter() - started) * 1000,
        ),
    )
    return response


# ============================================================================
# Error Handlers
# ============================================================================

def _error_response(status_code: int, error: str, details=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "details": details})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.warning("%s: %s", type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    first = details[0]["message"] if details else "Validation failed"
    return _error_response(400, first.removeprefix("Value error, "), details)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error")
    return _error_response(
        503,
        "Database unavailable",
        type(exc).__name__ if settings.is_dev else None,
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error")
    return _error_response(
        500, "Internal server error", str(exc) if settings.is_dev else None
    )


# ============================================================================
# Routers
# ============================================================================

from askiep.routers import (
    ai,
    behavior,
    comms,
    compliance,
    dashboard,
    documents,
    letters,
    profile,
    progress,
)

for module in (profile, documents, compliance, progress, comms, behavior, letters, ai, dashboard):
    app.include_router(module.router, prefix=settings.API_PREFIX)


# ============================================================================
# Health Check
# ============================================================================

@app.get(f"{settings.API_PREFIX}/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Health check failed: %s", type(exc).__name__)
        return JSONResponse(
            status_code=503, content={"status": "error", "message": "Database unreachable"}
        )
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}

