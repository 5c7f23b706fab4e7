"""Viewing-tenant override: lets a super-admin act as one tenant.

The selection lives only in an httpOnly cookie that
``ViewingTenantMiddleware`` forwards as ``x-viewing-tenant``. Losing the
cookie reverts the super-admin to unscoped access.
"""

import logging

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel, ConfigDict, Field

from app.api.deps import SuperAdmin
from app.core.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/set-viewing-tenant", tags=["viewing-tenant"])

CLEAR_VALUES = frozenset({"", "all"})


# ── Schemas ──────────────────────────────────────────────────

class ViewingTenantRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tenant_id: str | None = Field(default=None, alias="tenantId", max_length=64)


class ViewingTenantResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    viewing_tenant: str | None = Field(alias="viewingTenant")


# ── Routes ───────────────────────────────────────────────────

@router.post("", response_model=ViewingTenantResponse)
async def set_viewing_tenant(
    body: ViewingTenantRequest,
    caller: SuperAdmin,
    response: Response,
) -> ViewingTenantResponse:
    """Set the override cookie, or clear it for ``"all"``, ``""`` or null."""
    settings = get_settings()
    tenant_id = (body.tenant_id or "").strip()

    if tenant_id in CLEAR_VALUES:
        response.delete_cookie(settings.viewing_tenant_cookie, path="/")
        logger.info("Super-admin %s cleared the viewing tenant", caller.id)
        return ViewingTenantResponse(viewing_tenant=None)

    response.set_cookie(
        settings.viewing_tenant_cookie,
        tenant_id,
        max_age=settings.viewing_tenant_max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )
    logger.info("Super-admin %s is now viewing tenant %s", caller.id, tenant_id)
    return ViewingTenantResponse(viewing_tenant=tenant_id)


@router.get("", response_model=ViewingTenantResponse)
async def get_viewing_tenant(request: Request) -> ViewingTenantResponse:
    """Current override as stored in the cookie; no side effects."""
    value = request.cookies.get(get_settings().viewing_tenant_cookie) or None
    return ViewingTenantResponse(viewing_tenant=value)
