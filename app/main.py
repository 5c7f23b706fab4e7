"""FastAPI application entrypoint."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.access.exceptions import (
    DENIED_MESSAGE,
    Denied,
    DuplicateSingleton,
    MissingTenant,
    Unauthenticated,
    UnknownTenant,
)
from app.api.middleware import ViewingTenantMiddleware
from app.api.v1 import v1_router
from app.core.config import get_settings
from app.core.database import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Startup: ensure tables exist (use Alembic in production)
    await init_db()
    yield


app = FastAPI(
    title="Tenant CMS",
    version="0.1.0",
    description="Multi-tenant content management API with tenant isolation",
    lifespan=lifespan,
)

# ── Middleware ───────────────────────────────────────────────
_settings = get_settings()
app.add_middleware(ViewingTenantMiddleware, cookie_name=_settings.viewing_tenant_cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _settings.allowed_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Access errors ────────────────────────────────────────────

@app.exception_handler(Unauthenticated)
async def unauthenticated_handler(_request: Request, exc: Unauthenticated) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": exc.detail},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(Denied)
async def denied_handler(request: Request, exc: Denied) -> JSONResponse:
    logger.info("Denied %s %s: %s", request.method, request.url.path, exc.reason)
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": DENIED_MESSAGE},
    )


@app.exception_handler(DuplicateSingleton)
async def duplicate_singleton_handler(
    _request: Request, exc: DuplicateSingleton
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": {
                "message": str(exc),
                "collection": exc.collection,
                "tenant_id": str(exc.tenant_id),
                "existing_id": str(exc.existing_id) if exc.existing_id else None,
            }
        },
    )


@app.exception_handler(MissingTenant)
@app.exception_handler(UnknownTenant)
async def tenant_assignment_handler(
    _request: Request, exc: MissingTenant | UnknownTenant
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)},
    )


# ── API routes ───────────────────────────────────────────────
app.include_router(v1_router)


@app.get("/health", tags=["system"])
async def health_check() -> dict:
    return {"status": "ok"}
