import json
import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.auth.views import router as auth_router
from api.assets.views import router as assets_router
from api.borrows.views import router as borrows_router
from api.catalogs.views import router as catalogs_router
from api.dashboard.views import router as dashboard_router
from api.reports.views import router as reports_router
from config import settings
from core.logging_config import configure_logging
from db import init_db
from core.store import StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)

APOLOGY = "Something went wrong. Please try again later."


def get_cors_origins() -> list[str]:
    """Get CORS origins from environment variable or use defaults."""
    cors_env = os.environ.get("CORS_ORIGINS", "")

    # Try to parse as JSON array
    if cors_env:
        try:
            origins = json.loads(cors_env)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            # If not valid JSON, treat as comma-separated
            return [o.strip() for o in cors_env.split(",") if o.strip()]

    # Default origins for the web client in development
    return [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Equipment lending API starting")
    if settings.CREATE_TABLES_ON_STARTUP:
        await init_db()
    yield


app = FastAPI(
    title="Equipment Lending API",
    description="Track loans of shared medical equipment: assets, borrow/return, reports",
    version="1.0.0",
    lifespan=lifespan,
)

# Get CORS origins from environment or use defaults
cors_origins = get_cors_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreWriteError)
async def store_write_error_handler(request: Request, exc: StoreWriteError):
    logger.error("Write rejected on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": f"Save failed: {exc}"},
    )


@app.exception_handler(StoreReadError)
async def store_read_error_handler(request: Request, exc: StoreReadError):
    logger.error("Read failed on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": APOLOGY},
    )


# Authentication endpoints
app.include_router(auth_router, prefix="/api/v1")

# Business endpoints
app.include_router(catalogs_router, prefix="/api/v1")
app.include_router(assets_router, prefix="/api/v1")
app.include_router(borrows_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
