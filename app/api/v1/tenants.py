"""Tenant management, site-tenant resolution and external provisioning."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from pydantic import BaseModel, EmailStr, Field
from sqlmodel import select

from app.access import Operation, apply_verdict, resolve_site_tenant
from app.access.policies import tenants_decide
from app.access.verdict import ensure_not_denied
from app.api.deps import CurrentCaller, Session, SuperAdmin
from app.core import cache
from app.core.config import get_settings
from app.core.security import keys_match
from app.models.base import utcnow
from app.models.tenant import (
    DOMAIN_PATTERN,
    Tenant,
    TenantCreate,
    TenantPublic,
    TenantRead,
    TenantStatus,
    TenantUpdate,
)
from app.models.user import User
from app.services.provisioning import (
    SITE_TENANT_CACHE,
    TenantConflict,
    create_tenant,
    delete_tenant,
    ensure_tenant_unique,
    provision_tenant,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tenants", tags=["tenants"])


# ── Provisioning schemas ──────────────────────────────────────

class ProvisionRequest(BaseModel):
    """Everything needed to stand up a new customer site in one call."""
    company_name: str = Field(max_length=255)
    domain: str = Field(max_length=63, pattern=DOMAIN_PATTERN)
    admin_email: EmailStr
    admin_password: str = Field(min_length=8, max_length=128)
    phone: str | None = Field(default=None, max_length=50)


class ProvisionResponse(BaseModel):
    tenant: TenantRead
    admin_user_id: uuid.UUID
    theme_settings_id: uuid.UUID
    site_settings_id: uuid.UUID


async def require_provisioning_key(
    x_provisioning_key: Annotated[str | None, Header()] = None,
) -> None:
    expected = get_settings().provisioning_key
    if not expected:
        # Provisioning is switched off entirely
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    if x_provisioning_key is None or not keys_match(x_provisioning_key, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid provisioning key",
        )


def _conflict(exc: TenantConflict) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


# ── Routes ────────────────────────────────────────────────────

@router.post(
    "/provision",
    response_model=ProvisionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Provision a tenant with its first admin (external systems)",
    dependencies=[Depends(require_provisioning_key)],
)
async def provision(body: ProvisionRequest, session: Session) -> ProvisionResponse:
    existing = await session.execute(select(User.id).where(User.email == body.admin_email))
    if existing.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        )
    try:
        tenant, admin, theme, site = await provision_tenant(
            session,
            company_name=body.company_name,
            domain=body.domain,
            admin_email=body.admin_email,
            admin_password=body.admin_password,
            phone=body.phone,
        )
    except TenantConflict as exc:
        raise _conflict(exc) from exc

    return ProvisionResponse(
        tenant=TenantRead.model_validate(tenant),
        admin_user_id=admin.id,
        theme_settings_id=theme.id,
        site_settings_id=site.id,
    )


@router.get("/current", response_model=TenantPublic, summary="Resolve the requesting site's tenant")
async def get_site_tenant(request: Request, session: Session) -> TenantPublic:
    """Tenant for the ``x-tenant-id`` header or the host subdomain. Public."""
    domain = resolve_site_tenant(request.headers)
    if domain is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")

    key = (SITE_TENANT_CACHE, domain)
    cached = cache.get(key, ttl=get_settings().site_tenant_cache_ttl)
    if cached is not None:
        return cached

    stmt = select(Tenant).where(Tenant.domain == domain, Tenant.status == TenantStatus.ACTIVE)
    tenant = (await session.execute(stmt)).scalar_one_or_none()
    if tenant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")

    public = TenantPublic.model_validate(tenant)
    cache.put(key, public)
    return public


@router.get("", response_model=list[TenantRead])
async def list_tenants(caller: CurrentCaller, session: Session) -> list[TenantRead]:
    verdict = ensure_not_denied(tenants_decide(Operation.READ, caller))
    stmt = apply_verdict(select(Tenant), Tenant.id, verdict).order_by(
        Tenant.name.asc()  # type: ignore[attr-defined]
    )
    result = await session.execute(stmt)
    return [TenantRead.model_validate(t) for t in result.scalars().all()]


@router.get("/{tenant_id}", response_model=TenantRead)
async def get_tenant(tenant_id: uuid.UUID, caller: CurrentCaller, session: Session) -> TenantRead:
    tenant = await _get_or_404(tenant_id, caller, Operation.READ, session)
    return TenantRead.model_validate(tenant)


@router.post("", response_model=TenantRead, status_code=status.HTTP_201_CREATED)
async def create_tenant_route(
    body: TenantCreate,
    caller: SuperAdmin,
    session: Session,
) -> TenantRead:
    try:
        tenant = await create_tenant(session, body.model_dump())
    except TenantConflict as exc:
        raise _conflict(exc) from exc
    logger.info("Super-admin %s created tenant %s", caller.id, tenant.id)
    return TenantRead.model_validate(tenant)


@router.patch("/{tenant_id}", response_model=TenantRead)
async def update_tenant(
    tenant_id: uuid.UUID,
    body: TenantUpdate,
    caller: SuperAdmin,
    session: Session,
) -> TenantRead:
    tenant = await _get_or_404(tenant_id, caller, Operation.UPDATE, session)
    update_data = body.model_dump(exclude_unset=True)
    try:
        await ensure_tenant_unique(
            session, update_data.get("name"), update_data.get("domain"), exclude_id=tenant.id
        )
    except TenantConflict as exc:
        raise _conflict(exc) from exc

    for field, value in update_data.items():
        setattr(tenant, field, value)
    tenant.updated_at = utcnow()
    session.add(tenant)
    await session.commit()
    await session.refresh(tenant)

    cache.invalidate_where(SITE_TENANT_CACHE)
    return TenantRead.model_validate(tenant)


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_tenant(tenant_id: uuid.UUID, caller: SuperAdmin, session: Session) -> None:
    tenant = await _get_or_404(tenant_id, caller, Operation.DELETE, session)
    await delete_tenant(session, tenant)


# ── Internal helper ───────────────────────────────────────────

async def _get_or_404(tenant_id: uuid.UUID, caller, operation: Operation, session) -> Tenant:
    verdict = ensure_not_denied(tenants_decide(operation, caller))
    stmt = apply_verdict(select(Tenant).where(Tenant.id == tenant_id), Tenant.id, verdict)
    tenant = (await session.execute(stmt)).scalar_one_or_none()
    if tenant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")
    return tenant
