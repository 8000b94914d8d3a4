"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tokenstore.api.errors import register_exception_handlers
from tokenstore.api.routes import router
from tokenstore.api.schemas import HealthResponse
from tokenstore.config import settings
from tokenstore.logging_config import configure_logging

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# CORS configuration
# ---------------------------------------------------------------------------

_DEFAULT_ORIGINS = {
    "http://localhost:3000",
    "http://127.0.0.1:3000",
}


def _get_allowed_origins() -> set[str]:
    origins = set(_DEFAULT_ORIGINS)
    if settings.allowed_origins:
        origins.update(o.strip() for o in settings.allowed_origins.split(",") if o.strip())
    return origins


_ALLOWED_ORIGINS = _get_allowed_origins()


# ---------------------------------------------------------------------------
# App lifecycle
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and report the active backend on startup."""
    configure_logging(settings.log_level, settings.log_json)
    logger.info(
        "app.startup",
        preference_backend=settings.preference_backend,
        identity_header=settings.identity_header,
        allowed_origins=sorted(_ALLOWED_ORIGINS),
    )
    yield
    logger.info("app.shutdown")


app = FastAPI(
    title="Token Store",
    description="Per-user OAuth token preference lookup",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_ALLOWED_ORIGINS),
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(router)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse()


def run() -> None:
    """Serve the app with uvicorn (``tokenstore`` console script)."""
    import uvicorn

    uvicorn.run("tokenstore.main:app", host="0.0.0.0", port=8000)
