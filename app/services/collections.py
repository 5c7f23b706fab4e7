"""Tenant-scoped collections. Every query passes through an access verdict.

Flow for each operation:
  1. Decide a verdict from the collection's policy
  2. AND the verdict into the SELECT (reads, updates, deletes)
  3. On create: stamp the tenant, check it is writable, check singletons
  4. Run the collection's before-change hook, then persist
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from app.access import (
    AccessPolicy,
    Caller,
    Denied,
    DuplicateSingleton,
    MissingTenant,
    Operation,
    ScopeToTenant,
    Unauthenticated,
    UnknownTenant,
    Verdict,
    apply_verdict,
    assign_tenant,
    navigation_name,
)
from app.access import policies
from app.access.verdict import Deny, ensure_not_denied
from app.models import (
    BlogPost,
    BlogPostCreate,
    BlogPostRead,
    BlogPostUpdate,
    Footer,
    FooterCreate,
    FooterRead,
    FooterUpdate,
    Homepage,
    HomepageCreate,
    HomepageRead,
    HomepageUpdate,
    Media,
    MediaCreate,
    MediaRead,
    MediaUpdate,
    Navigation,
    NavigationCreate,
    NavigationRead,
    NavigationUpdate,
    Page,
    PageCreate,
    PageRead,
    PageUpdate,
    SiteSettings,
    SiteSettingsCreate,
    SiteSettingsRead,
    SiteSettingsUpdate,
    Tenant,
    ThemeSettings,
    ThemeSettingsCreate,
    ThemeSettingsRead,
    ThemeSettingsUpdate,
)
from app.models.base import null_violations, utcnow

logger = logging.getLogger(__name__)

# (caller, operation, data, owning tenant) -> data
BeforeChange = Callable[[Caller | None, Operation, dict[str, Any], Tenant], dict[str, Any]]


@dataclass(frozen=True)
class Collection:
    """A tenant-scoped resource type and the policy guarding it."""

    slug: str
    label: str
    model: type[SQLModel]
    create_schema: type[SQLModel]
    update_schema: type[SQLModel]
    read_schema: type[SQLModel]
    policy: AccessPolicy
    singleton: bool = False
    before_change: BeforeChange | None = None


# ── Before-change hooks ───────────────────────────────────────

def _name_navigation(
    caller: Caller | None, operation: Operation, data: dict[str, Any], tenant: Tenant
) -> dict[str, Any]:
    return {**data, "name": navigation_name(tenant.name)}


def _stamp_author(
    caller: Caller | None, operation: Operation, data: dict[str, Any], tenant: Tenant
) -> dict[str, Any]:
    if operation is Operation.CREATE and caller is not None:
        return {**data, "author_id": caller.id}
    return data


# ── Registry ──────────────────────────────────────────────────

PAGES = Collection(
    slug="pages",
    label="page",
    model=Page,
    create_schema=PageCreate,
    update_schema=PageUpdate,
    read_schema=PageRead,
    policy=policies.ADMIN_MANAGED,
)

BLOG = Collection(
    slug="blog",
    label="blog post",
    model=BlogPost,
    create_schema=BlogPostCreate,
    update_schema=BlogPostUpdate,
    read_schema=BlogPostRead,
    policy=policies.EDITORIAL,
    before_change=_stamp_author,
)

MEDIA = Collection(
    slug="media",
    label="media",
    model=Media,
    create_schema=MediaCreate,
    update_schema=MediaUpdate,
    read_schema=MediaRead,
    policy=policies.PUBLIC_READ_TENANT_WRITE,
)

HOMEPAGE = Collection(
    slug="homepage",
    label="homepage",
    model=Homepage,
    create_schema=HomepageCreate,
    update_schema=HomepageUpdate,
    read_schema=HomepageRead,
    policy=policies.ADMIN_MANAGED_SINGLETON,
    singleton=True,
)

NAVIGATION = Collection(
    slug="navigation",
    label="navigation",
    model=Navigation,
    create_schema=NavigationCreate,
    update_schema=NavigationUpdate,
    read_schema=NavigationRead,
    policy=policies.ADMIN_MANAGED_SINGLETON,
    singleton=True,
    before_change=_name_navigation,
)

FOOTER = Collection(
    slug="footer",
    label="footer",
    model=Footer,
    create_schema=FooterCreate,
    update_schema=FooterUpdate,
    read_schema=FooterRead,
    policy=policies.ADMIN_MANAGED_SINGLETON,
    singleton=True,
)

SITE_SETTINGS = Collection(
    slug="site-settings",
    label="site settings",
    model=SiteSettings,
    create_schema=SiteSettingsCreate,
    update_schema=SiteSettingsUpdate,
    read_schema=SiteSettingsRead,
    policy=policies.ADMIN_MANAGED_SINGLETON,
    singleton=True,
)

THEME_SETTINGS = Collection(
    slug="theme-settings",
    label="theme settings",
    model=ThemeSettings,
    create_schema=ThemeSettingsCreate,
    update_schema=ThemeSettingsUpdate,
    read_schema=ThemeSettingsRead,
    policy=policies.ADMIN_MANAGED_SINGLETON,
    singleton=True,
)

COLLECTIONS: tuple[Collection, ...] = (
    PAGES,
    BLOG,
    MEDIA,
    HOMEPAGE,
    NAVIGATION,
    FOOTER,
    SITE_SETTINGS,
    THEME_SETTINGS,
)


# ── Operations ────────────────────────────────────────────────

def _decide(
    collection: Collection,
    operation: Operation,
    caller: Caller | None,
    viewing_tenant: str | None,
) -> Verdict:
    verdict = collection.policy.decide(operation, caller, viewing_tenant)
    if isinstance(verdict, Deny) and caller is None:
        raise Unauthenticated()
    return ensure_not_denied(verdict)


def check_tenant_writable(
    caller: Caller | None, verdict: Verdict, tenant_id: uuid.UUID
) -> None:
    """Refuse writes that would place a record outside the caller's reach."""
    if isinstance(verdict, ScopeToTenant) and not verdict.admits(tenant_id):
        raise Denied("tenant outside viewing scope")
    if caller is None or not caller.is_global_privileged:
        if caller is None or caller.tenant_id != tenant_id:
            raise Denied("cross-tenant write")


async def _load_tenant(session: AsyncSession, tenant_id: uuid.UUID) -> Tenant:
    tenant = await session.get(Tenant, tenant_id)
    if tenant is None:
        raise UnknownTenant(tenant_id)
    return tenant


async def _ensure_no_singleton(
    session: AsyncSession, collection: Collection, tenant_id: uuid.UUID
) -> None:
    # Fast rejection only; the unique index on tenant_id is authoritative.
    model = collection.model
    stmt = select(model.id).where(model.tenant_id == tenant_id).limit(1)
    existing = (await session.execute(stmt)).scalar_one_or_none()
    if existing is not None:
        raise DuplicateSingleton(collection.label, tenant_id, existing)


async def _commit(
    session: AsyncSession,
    collection: Collection,
    tenant_id: uuid.UUID,
    claims_tenant: bool = False,
) -> None:
    """Persist; ``claims_tenant`` marks writes that can hit the one-per-tenant index."""
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if collection.singleton and claims_tenant:
            logger.warning(
                "Concurrent %s write for tenant %s lost the race", collection.slug, tenant_id
            )
            raise DuplicateSingleton(collection.label, tenant_id) from exc
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A {collection.label} with these unique values already exists",
        ) from exc


async def _get_scoped(
    session: AsyncSession,
    collection: Collection,
    record_id: uuid.UUID,
    verdict: Verdict,
) -> Any:
    model = collection.model
    stmt = apply_verdict(select(model).where(model.id == record_id), model.tenant_id, verdict)
    record = (await session.execute(stmt)).scalar_one_or_none()
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{collection.label.capitalize()} not found",
        )
    return record


async def list_records(
    session: AsyncSession,
    collection: Collection,
    caller: Caller | None,
    viewing_tenant: str | None,
    tenant_id: uuid.UUID | None = None,
) -> list[Any]:
    """Visible records, newest first; ``tenant_id`` can only narrow further."""
    verdict = _decide(collection, Operation.READ, caller, viewing_tenant)
    model = collection.model
    stmt = apply_verdict(select(model), model.tenant_id, verdict)
    if tenant_id is not None:
        stmt = stmt.where(model.tenant_id == tenant_id)
    stmt = stmt.order_by(model.created_at.desc())  # type: ignore[attr-defined]
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_record(
    session: AsyncSession,
    collection: Collection,
    record_id: uuid.UUID,
    caller: Caller | None,
    viewing_tenant: str | None,
) -> Any:
    verdict = _decide(collection, Operation.READ, caller, viewing_tenant)
    return await _get_scoped(session, collection, record_id, verdict)


async def create_record(
    session: AsyncSession,
    collection: Collection,
    data: dict[str, Any],
    caller: Caller | None,
    viewing_tenant: str | None,
) -> Any:
    verdict = _decide(collection, Operation.CREATE, caller, viewing_tenant)

    data = assign_tenant(caller, Operation.CREATE, data)
    tenant_id = data.get("tenant_id")
    if tenant_id is None:
        raise MissingTenant()
    check_tenant_writable(caller, verdict, tenant_id)
    tenant = await _load_tenant(session, tenant_id)

    if collection.singleton:
        await _ensure_no_singleton(session, collection, tenant_id)
    if collection.before_change is not None:
        data = collection.before_change(caller, Operation.CREATE, data, tenant)

    record = collection.model(**data)
    session.add(record)
    await _commit(session, collection, tenant_id, claims_tenant=True)
    await session.refresh(record)
    logger.info("Created %s %s for tenant %s", collection.slug, record.id, tenant_id)
    return record


async def update_record(
    session: AsyncSession,
    collection: Collection,
    record_id: uuid.UUID,
    changes: dict[str, Any],
    caller: Caller | None,
    viewing_tenant: str | None,
) -> Any:
    verdict = _decide(collection, Operation.UPDATE, caller, viewing_tenant)
    record = await _get_scoped(session, collection, record_id, verdict)

    nulls = null_violations(collection.model, changes)
    if nulls:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Fields cannot be null: {', '.join(nulls)}",
        )

    new_tenant_id = changes.pop("tenant_id", None)
    moved = new_tenant_id is not None and new_tenant_id != record.tenant_id
    if moved:
        # Moving a record between tenants is a super-admin action
        if caller is None or not caller.is_global_privileged:
            raise Denied("tenant is immutable for non-privileged callers")
        check_tenant_writable(caller, verdict, new_tenant_id)
        tenant = await _load_tenant(session, new_tenant_id)
        if collection.singleton:
            await _ensure_no_singleton(session, collection, new_tenant_id)
        changes["tenant_id"] = new_tenant_id
    else:
        tenant = await _load_tenant(session, record.tenant_id)

    if collection.before_change is not None:
        changes = collection.before_change(caller, Operation.UPDATE, changes, tenant)

    for field, value in changes.items():
        setattr(record, field, value)
    record.updated_at = utcnow()
    session.add(record)
    await _commit(session, collection, tenant.id, claims_tenant=moved)
    await session.refresh(record)
    return record


async def delete_record(
    session: AsyncSession,
    collection: Collection,
    record_id: uuid.UUID,
    caller: Caller | None,
    viewing_tenant: str | None,
) -> None:
    verdict = _decide(collection, Operation.DELETE, caller, viewing_tenant)
    record = await _get_scoped(session, collection, record_id, verdict)
    await session.delete(record)
    await session.commit()
    logger.info("Deleted %s %s from tenant %s", collection.slug, record_id, record.tenant_id)
