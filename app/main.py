# app/main.py - Application assembly: tracing, middleware, handlers, routes
from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from contextlib import asynccontextmanager
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import time

# Core imports
from app.core.config import settings
from app.db.database import get_db, init_db, engine

# Import tracing
from app.core import tracing

# Import API routes
from app.api.v1 import api_router

# Import middleware
from app.middleware.security import SecurityHeadersMiddleware
from app.middleware.cors import setup_cors_middleware
from app.middleware.rate_limiting import limiter, rate_limit_exceeded_handler

# Import exception handlers
from app.exceptions.handlers import (
    http_exception_handler,
    validation_exception_handler,
    global_exception_handler,
    starlette_http_exception_handler
)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create tables on startup; expired tokens and stale upload slots are
    purged by scripts/cleanup_tokens.py
    """
    tracing.info("CareRelay API startup initiated")

    try:
        await init_db()
        tracing.info("Database initialized successfully")
    except Exception as e:
        tracing.error(f"Database initialization failed: {e}")
        raise

    tracing.info(f"Environment: {settings.ENVIRONMENT}")
    tracing.info(f"Log Level: {settings.LOG_LEVEL}")
    tracing.info(f"OpenTelemetry: {'Enabled' if settings.ENABLE_OTEL_EXPORTER else 'Disabled'}")
    tracing.info(f"Rate Limiting: {'Enabled' if settings.RATE_LIMIT_ENABLED else 'Disabled'}")
    tracing.info(f"Storage directory: {settings.STORAGE_DIR}")

    yield

    await engine.dispose()
    tracing.info("CareRelay API shutdown complete")


app = FastAPI(
    title="CareRelay API",
    description="Hospital ward service requests: raise, claim, progress and review tasks",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT == "development" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT == "development" else None,
    openapi_url="/openapi.json" if settings.ENVIRONMENT == "development" else None
)

# =============================================================================
# TRACING SETUP
# =============================================================================

tracing_enabled = tracing.setup_tracing(app, engine)

# =============================================================================
# MIDDLEWARE SETUP (last added runs first)
# =============================================================================

app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.ENVIRONMENT == "production")
setup_cors_middleware(app)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(StarletteHTTPException, starlette_http_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# =============================================================================
# PROMETHEUS METRICS
# =============================================================================

instrumentator = Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    should_group_untemplated=False,
    should_instrument_requests_inprogress=True,
    inprogress_labels=True
)
instrumentator.instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

# =============================================================================
# API ROUTES
# =============================================================================

app.include_router(api_router, prefix="/api/v1")


# =============================================================================
# SYSTEM ENDPOINTS
# =============================================================================

@app.get("/health", tags=["System"])
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check with database connectivity test"""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        tracing.error(f"Health check failed: {e}",
                      endpoint="/health",
                      error_type=type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy - database connection failed"
        )

    return {
        "status": "healthy",
        "service": "CareRelay API",
        "version": VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": time.time(),
        "trace_id": tracing.get_current_trace_id(),
        "checks": {
            "database": "connected",
            "tracing": "enabled" if settings.ENABLE_OTEL_EXPORTER else "local",
            "rate_limiting": "enabled" if settings.RATE_LIMIT_ENABLED else "disabled"
        }
    }


@app.get("/", tags=["System"])
async def api_information():
    """API information endpoint"""
    return {
        "message": "CareRelay API",
        "version": VERSION,
        "environment": settings.ENVIRONMENT,
        "status": "operational",
        "trace_id": tracing.get_current_trace_id(),
        "endpoints": {
            "health": "/health",
            "metrics": "/metrics",
            "authentication": "/api/v1/auth",
            "profiles": "/api/v1/profiles",
            "tasks": "/api/v1/tasks",
            "analytics": "/api/v1/analytics",
            "logos": "/api/v1/logos",
            "documentation": "/docs" if settings.ENVIRONMENT == "development" else "Contact administrator"
        },
        "timestamp": time.time()
    }
