"""Tenant lifecycle: creation with default configuration, and removal.

A new tenant always gets default theme settings and site settings so its
site renders before an admin has configured anything.
"""

import logging
import uuid

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core import cache
from app.core.security import hash_password
from app.models import (
    ApiToken,
    BlogPost,
    Footer,
    Homepage,
    Media,
    Navigation,
    Page,
    SiteSettings,
    Tenant,
    ThemeSettings,
    User,
    UserRole,
)

logger = logging.getLogger(__name__)

SITE_TENANT_CACHE = "site-tenant"

TENANT_OWNED = (
    BlogPost,
    Footer,
    Homepage,
    Media,
    Navigation,
    Page,
    SiteSettings,
    ThemeSettings,
)


class TenantConflict(Exception):
    """A tenant with the same name or domain already exists."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"A tenant with {field} '{value}' already exists")


async def ensure_tenant_unique(
    session: AsyncSession,
    name: str | None,
    domain: str | None,
    exclude_id: uuid.UUID | None = None,
) -> None:
    for field, value in (("name", name), ("domain", domain)):
        if value is None:
            continue
        stmt = select(Tenant.id).where(getattr(Tenant, field) == value)
        if exclude_id is not None:
            stmt = stmt.where(Tenant.id != exclude_id)
        if (await session.execute(stmt)).first() is not None:
            raise TenantConflict(field, value)


def add_default_settings(session: AsyncSession, tenant: Tenant) -> tuple[ThemeSettings, SiteSettings]:
    """Stage the two default configuration records for ``tenant``."""
    theme = ThemeSettings(tenant_id=tenant.id)
    site = SiteSettings(
        tenant_id=tenant.id,
        default_title=tenant.name,
        default_description=f"Welcome to {tenant.name}",
        company_name=tenant.name,
        contact_email=tenant.contact_email,
    )
    session.add(theme)
    session.add(site)
    return theme, site


async def create_tenant(session: AsyncSession, data: dict) -> Tenant:
    """Create a tenant and its default configuration in one transaction."""
    await ensure_tenant_unique(session, data.get("name"), data.get("domain"))

    tenant = Tenant(**data)
    session.add(tenant)
    await session.flush()  # populate tenant.id
    add_default_settings(session, tenant)
    await session.commit()
    await session.refresh(tenant)

    logger.info("Created tenant %s (%s)", tenant.id, tenant.domain)
    return tenant


async def provision_tenant(
    session: AsyncSession,
    *,
    company_name: str,
    domain: str,
    admin_email: str,
    admin_password: str,
    phone: str | None = None,
) -> tuple[Tenant, User, ThemeSettings, SiteSettings]:
    """Create tenant, its first admin and default settings in one go."""
    await ensure_tenant_unique(session, company_name, domain)

    tenant = Tenant(
        name=company_name,
        domain=domain,
        contact_email=admin_email,
        contact_name=company_name,
        max_storage_mb=5120,
    )
    session.add(tenant)
    await session.flush()

    admin = User(
        tenant_id=tenant.id,
        email=admin_email,
        password_hash=hash_password(admin_password),
        role=UserRole.ADMIN,
    )
    session.add(admin)
    theme, site = add_default_settings(session, tenant)
    site.phone = phone
    await session.commit()
    for obj in (tenant, admin, theme, site):
        await session.refresh(obj)

    logger.info("Provisioned tenant %s (%s) with admin %s", tenant.id, domain, admin.id)
    return tenant, admin, theme, site


async def delete_tenant(session: AsyncSession, tenant: Tenant) -> None:
    """Delete a tenant together with everything it owns."""
    tenant_id = tenant.id
    user_ids = select(User.id).where(User.tenant_id == tenant_id)
    await session.execute(delete(ApiToken).where(ApiToken.user_id.in_(user_ids)))  # type: ignore[attr-defined]
    await session.execute(delete(User).where(User.tenant_id == tenant_id))
    for model in TENANT_OWNED:
        await session.execute(delete(model).where(model.tenant_id == tenant_id))
    await session.delete(tenant)
    await session.commit()

    cache.invalidate_where(SITE_TENANT_CACHE)
    logger.info("Deleted tenant %s", tenant_id)
