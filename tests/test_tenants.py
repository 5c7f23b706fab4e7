"""Tests for tenant management, site-tenant resolution and provisioning."""

import uuid

import pytest
from httpx import AsyncClient
from sqlmodel import select

from app.core.config import get_settings
from app.models.site_settings import SiteSettings
from app.models.tenant import Tenant, TenantStatus
from app.models.theme_settings import ThemeSettings
from app.models.user import User, UserRole

PROVISION_HEADERS = {"X-Provisioning-Key": "test-provisioning-key"}


@pytest.fixture
async def root(make_user):
    return await make_user("root@platform.com", is_super_admin=True)


# ── CRUD ─────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_super_admin_creates_tenant_with_default_settings(
    client: AsyncClient, session, root, headers_for
):
    resp = await client.post(
        "/v1/tenants",
        json={"name": "Acme Corp", "domain": "acme", "contact_email": "hello@acme.com"},
        headers=headers_for(root),
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    tenant_id = uuid.UUID(data["id"])
    assert data["domain"] == "acme"
    assert data["status"] == "active"

    theme = (await session.execute(
        select(ThemeSettings).where(ThemeSettings.tenant_id == tenant_id)
    )).scalars().all()
    site = (await session.execute(
        select(SiteSettings).where(SiteSettings.tenant_id == tenant_id)
    )).scalars().all()
    assert len(theme) == 1
    assert len(site) == 1
    assert site[0].company_name == "Acme Corp"


@pytest.mark.asyncio
async def test_duplicate_domain_rejected(client: AsyncClient, root, headers_for):
    payload = {"name": "First", "domain": "unique-domain"}
    resp = await client.post("/v1/tenants", json=payload, headers=headers_for(root))
    assert resp.status_code == 201

    resp = await client.post(
        "/v1/tenants", json={"name": "Second", "domain": "unique-domain"}, headers=headers_for(root)
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_invalid_domain_rejected(client: AsyncClient, root, headers_for):
    resp = await client.post(
        "/v1/tenants", json={"name": "Bad", "domain": "Not_A_Domain"}, headers=headers_for(root)
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_tenant_admin_cannot_create_tenants(
    client: AsyncClient, make_tenant, make_user, headers_for
):
    tenant = await make_tenant("acme")
    admin = await make_user("admin@acme.com", tenant=tenant, role=UserRole.ADMIN)

    resp = await client.post(
        "/v1/tenants", json={"name": "Rogue", "domain": "rogue"}, headers=headers_for(admin)
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_members_only_see_their_own_tenant(
    client: AsyncClient, make_tenant, make_user, headers_for
):
    acme = await make_tenant("acme")
    globex = await make_tenant("globex")
    user = await make_user("user@acme.com", tenant=acme)

    resp = await client.get("/v1/tenants", headers=headers_for(user))
    assert resp.status_code == 200
    assert [t["domain"] for t in resp.json()] == ["acme"]

    resp = await client.get(f"/v1/tenants/{globex.id}", headers=headers_for(user))
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_super_admin_lists_all_tenants(client: AsyncClient, make_tenant, root, headers_for):
    await make_tenant("acme")
    await make_tenant("globex")

    resp = await client.get("/v1/tenants", headers=headers_for(root))
    assert {t["domain"] for t in resp.json()} == {"acme", "globex"}


@pytest.mark.asyncio
async def test_update_tenant(client: AsyncClient, make_tenant, root, headers_for):
    tenant = await make_tenant("acme")

    resp = await client.patch(
        f"/v1/tenants/{tenant.id}",
        json={"status": "suspended", "max_users": 25},
        headers=headers_for(root),
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "suspended"
    assert resp.json()["max_users"] == 25


@pytest.mark.asyncio
async def test_delete_tenant_removes_owned_data(
    client: AsyncClient, session, make_user, root, headers_for
):
    resp = await client.post(
        "/v1/tenants", json={"name": "Doomed", "domain": "doomed"}, headers=headers_for(root)
    )
    tenant_id = uuid.UUID(resp.json()["id"])
    tenant = await session.get(Tenant, tenant_id)
    await make_user("user@doomed.com", tenant=tenant)

    resp = await client.delete(f"/v1/tenants/{tenant_id}", headers=headers_for(root))
    assert resp.status_code == 204

    resp = await client.get(f"/v1/tenants/{tenant_id}", headers=headers_for(root))
    assert resp.status_code == 404
    leftovers = (await session.execute(
        select(SiteSettings).where(SiteSettings.tenant_id == tenant_id)
    )).scalars().all()
    assert leftovers == []


# ── Site tenant ──────────────────────────────────────────────

@pytest.mark.asyncio
async def test_current_tenant_from_header(client: AsyncClient, make_tenant):
    await make_tenant("acme", name="Acme Corp")

    resp = await client.get("/v1/tenants/current", headers={"x-tenant-id": "acme"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Acme Corp"
    assert "max_users" not in resp.json()


@pytest.mark.asyncio
async def test_current_tenant_from_subdomain(client: AsyncClient, make_tenant):
    await make_tenant("acme")

    resp = await client.get("/v1/tenants/current", headers={"host": "acme.example.com"})
    assert resp.status_code == 200
    assert resp.json()["domain"] == "acme"


@pytest.mark.asyncio
async def test_current_tenant_unknown_or_inactive(client: AsyncClient, make_tenant):
    await make_tenant("sleepy", status=TenantStatus.INACTIVE)

    resp = await client.get("/v1/tenants/current", headers={"x-tenant-id": "sleepy"})
    assert resp.status_code == 404
    resp = await client.get("/v1/tenants/current", headers={"x-tenant-id": "nobody"})
    assert resp.status_code == 404
    resp = await client.get("/v1/tenants/current")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_current_tenant_cache_is_invalidated_on_update(
    client: AsyncClient, make_tenant, root, headers_for
):
    tenant = await make_tenant("acme", name="Acme Corp")
    resp = await client.get("/v1/tenants/current", headers={"x-tenant-id": "acme"})
    assert resp.json()["name"] == "Acme Corp"

    await client.patch(
        f"/v1/tenants/{tenant.id}", json={"name": "Acme Inc"}, headers=headers_for(root)
    )
    resp = await client.get("/v1/tenants/current", headers={"x-tenant-id": "acme"})
    assert resp.json()["name"] == "Acme Inc"


# ── Provisioning ─────────────────────────────────────────────

@pytest.mark.asyncio
async def test_provision_tenant(client: AsyncClient, session):
    resp = await client.post(
        "/v1/tenants/provision",
        json={
            "company_name": "Initech",
            "domain": "initech",
            "admin_email": "boss@initech.com",
            "admin_password": "tpsreport1",
            "phone": "+1 555 0100",
        },
        headers=PROVISION_HEADERS,
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["tenant"]["domain"] == "initech"
    assert data["tenant"]["max_storage_mb"] == 5120

    admin = await session.get(User, uuid.UUID(data["admin_user_id"]))
    assert admin.role == UserRole.ADMIN
    assert str(admin.tenant_id) == data["tenant"]["id"]
    site = await session.get(SiteSettings, uuid.UUID(data["site_settings_id"]))
    assert site.phone == "+1 555 0100"

    # The new admin can log in straight away
    resp = await client.post(
        "/v1/auth/login", json={"email": "boss@initech.com", "password": "tpsreport1"}
    )
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_provision_requires_key(client: AsyncClient):
    payload = {
        "company_name": "Initech",
        "domain": "initech",
        "admin_email": "boss@initech.com",
        "admin_password": "tpsreport1",
    }
    resp = await client.post("/v1/tenants/provision", json=payload)
    assert resp.status_code == 401
    resp = await client.post(
        "/v1/tenants/provision", json=payload, headers={"X-Provisioning-Key": "wrong"}
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_provision_disabled_without_key(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(get_settings(), "provisioning_key", "")
    resp = await client.post(
        "/v1/tenants/provision",
        json={
            "company_name": "Initech",
            "domain": "initech",
            "admin_email": "boss@initech.com",
            "admin_password": "tpsreport1",
        },
        headers=PROVISION_HEADERS,
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_provision_conflicts(client: AsyncClient, make_tenant, make_user):
    await make_tenant("initech")
    await make_user("taken@globex.com", tenant=await make_tenant("globex"))

    resp = await client.post(
        "/v1/tenants/provision",
        json={
            "company_name": "Initech 2",
            "domain": "initech",
            "admin_email": "boss@initech.com",
            "admin_password": "tpsreport1",
        },
        headers=PROVISION_HEADERS,
    )
    assert resp.status_code == 409

    resp = await client.post(
        "/v1/tenants/provision",
        json={
            "company_name": "Fresh",
            "domain": "fresh",
            "admin_email": "taken@globex.com",
            "admin_password": "tpsreport1",
        },
        headers=PROVISION_HEADERS,
    )
    assert resp.status_code == 409
