"""
beacon.api.main — FastAPI application entry point
====================================================

Run with::

    uvicorn beacon.api.main:app --reload --port 8000

or ``python -m beacon.api`` to use the host/port from ``config.yaml``.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from beacon import __version__  # noqa: E402
from beacon.api.deps import get_config, get_engine  # noqa: E402
from beacon.api.routes.messages import router as messages_router  # noqa: E402
from beacon.api.routes.notifications import router as notifications_router  # noqa: E402
from beacon.api.routes.referrals import router as referrals_router  # noqa: E402
from beacon.api.routes.settings import router as settings_router  # noqa: E402
from beacon.api.routes.users import router as users_router  # noqa: E402
from beacon.database.engine import init_db  # noqa: E402

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env.

    Priority:
      1) CORS_ALLOW_ORIGINS (comma-separated)
      2) FRONTEND_URL (single origin)
    """
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    if raw:
        return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]

    frontend_url = os.getenv("FRONTEND_URL", "").strip()
    if frontend_url:
        return [frontend_url.rstrip("/")]

    return []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle — warm the DB engine and ensure tables."""
    cfg = get_config()
    engine = get_engine()
    init_db(engine)
    logger.info("%s API started — engine ready (%s)", cfg.app_name, engine.url.database)
    yield
    logger.info("%s API shutting down", cfg.app_name)


app = FastAPI(
    title="Beacon API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(messages_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")
app.include_router(settings_router, prefix="/api")
app.include_router(referrals_router, prefix="/api")


@app.get("/api/health")
def health():
    return {"status": "ok"}
