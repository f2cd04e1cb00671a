from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from loguru import logger

# Local dev servers for the ward and supervisor front ends
DEV_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"]


def setup_cors_middleware(app: FastAPI) -> None:
    """
    Configure CORS; development additionally trusts the local front-end dev servers
    """
    allowed_origins = list(settings.cors_origins_list)
    if settings.ENVIRONMENT == "development":
        allowed_origins += [origin for origin in DEV_ORIGINS if origin not in allowed_origins]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Accept-Language",
            "Content-Language",
            # Raw logo uploads send image/* bodies
            "Content-Type",
            "Authorization",
            "X-Requested-With",
            "X-Trace-ID"
        ],
        expose_headers=["X-Trace-ID"],
        max_age=600,
    )

    logger.info(f"CORS configured for {len(allowed_origins)} origins")
