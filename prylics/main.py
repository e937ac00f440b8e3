"""Application entry point for the Prylics API."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .database import init_db
from .routers import (
    ai_router,
    auth_router,
    circles_router,
    follows_router,
    messages_router,
    posts_router,
    projects_router,
    realtime_router,
    users_router,
)
from .services import (
    MalformedCollectionError,
    StorageWriteError,
    get_entity_store,
    seed_initial_data,
)

logger = logging.getLogger(__name__)

settings = get_settings()
APP_NAME = settings.app_name
API_VERSION = settings.api_version

app = FastAPI(title=APP_NAME, version=API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(posts_router)
app.include_router(circles_router)
app.include_router(projects_router)
app.include_router(messages_router)
app.include_router(follows_router)
app.include_router(ai_router)
app.include_router(realtime_router)


@app.exception_handler(MalformedCollectionError)
async def _malformed_collection_handler(request: Request, exc: MalformedCollectionError) -> JSONResponse:
    logger.error("Rejected request over malformed collection | key=%s path=%s", exc.key, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})


@app.exception_handler(StorageWriteError)
async def _storage_write_handler(request: Request, exc: StorageWriteError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})


@app.on_event("startup")
async def _startup() -> None:
    """Ensure the storage table exists and demo content is present before serving."""

    try:
        init_db()
    except Exception:  # pragma: no cover - best effort logging
        logger.exception("Database initialisation failed")
        raise

    if settings.seed_demo_data:
        seed_initial_data(get_entity_store())
    else:
        logger.info("Demo data seeding disabled")


@app.get("/api", tags=["system"])
def api_info() -> dict[str, str]:
    return {"service": APP_NAME, "version": API_VERSION}


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
