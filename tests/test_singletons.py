"""One-per-tenant collections: duplicate detection, access and derived names."""

import pytest
from httpx import AsyncClient

from app.models.homepage import Homepage
from app.services import collections as collections_service
from app.models.user import UserRole


@pytest.fixture
async def admin(make_tenant, make_user):
    tenant = await make_tenant("acme", name="Acme Corp")
    user = await make_user("admin@acme.com", tenant=tenant, role=UserRole.ADMIN)
    return tenant, user


@pytest.mark.asyncio
async def test_second_homepage_is_a_duplicate_not_a_denial(
    client: AsyncClient, session, admin, headers_for
):
    tenant, user = admin
    existing = Homepage(tenant_id=tenant.id, title="Home", headline="Welcome")
    session.add(existing)
    await session.commit()
    await session.refresh(existing)

    resp = await client.post(
        "/v1/homepage",
        json={"title": "Home 2", "headline": "Again"},
        headers=headers_for(user),
    )
    assert resp.status_code == 409
    detail = resp.json()["detail"]
    assert detail["collection"] == "homepage"
    assert detail["tenant_id"] == str(tenant.id)
    assert detail["existing_id"] == str(existing.id)
    assert "edit the existing record" in detail["message"]


@pytest.mark.asyncio
async def test_super_admin_gets_duplicate_too(
    client: AsyncClient, admin, make_user, headers_for
):
    tenant, user = admin
    root = await make_user("root@platform.com", is_super_admin=True)

    resp = await client.post(
        "/v1/footer", json={"copyright_text": "(c) Acme"}, headers=headers_for(user)
    )
    assert resp.status_code == 201

    resp = await client.post(
        "/v1/footer",
        json={"tenant_id": str(tenant.id), "columns": 2},
        headers=headers_for(root),
    )
    assert resp.status_code == 409
    assert resp.json()["detail"]["collection"] == "footer"


@pytest.mark.asyncio
async def test_singletons_are_per_tenant(client: AsyncClient, admin, make_tenant, make_user, headers_for):
    _, user = admin
    other_tenant = await make_tenant("globex")
    other_admin = await make_user("admin@globex.com", tenant=other_tenant, role=UserRole.ADMIN)

    for who in (user, other_admin):
        resp = await client.post(
            "/v1/homepage", json={"title": "Home", "headline": "Hi"}, headers=headers_for(who)
        )
        assert resp.status_code == 201


@pytest.mark.asyncio
async def test_plain_user_is_denied_before_duplicate_check(
    client: AsyncClient, session, admin, make_user, headers_for
):
    tenant, _ = admin
    session.add(Homepage(tenant_id=tenant.id, title="Home", headline="Welcome"))
    await session.commit()
    member = await make_user("user@acme.com", tenant=tenant, role=UserRole.USER)

    resp = await client.post(
        "/v1/homepage", json={"title": "Home 2", "headline": "Again"}, headers=headers_for(member)
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_navigation_name_is_derived_from_tenant(client: AsyncClient, admin, headers_for):
    _, user = admin

    resp = await client.post(
        "/v1/navigation",
        json={"menu_style": "dropdown", "name": "Ignored"},
        headers=headers_for(user),
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["name"] == "Navigation - Acme Corp"
    assert body["menu_style"] == "dropdown"

    resp = await client.patch(
        f"/v1/navigation/{body['id']}", json={"sticky_header": False}, headers=headers_for(user)
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Navigation - Acme Corp"


@pytest.mark.asyncio
async def test_only_super_admin_deletes_singletons(
    client: AsyncClient, admin, make_user, headers_for
):
    _, user = admin
    resp = await client.post("/v1/theme-settings", json={}, headers=headers_for(user))
    assert resp.status_code == 201
    theme_id = resp.json()["id"]

    resp = await client.delete(f"/v1/theme-settings/{theme_id}", headers=headers_for(user))
    assert resp.status_code == 403

    root = await make_user("root@platform.com", is_super_admin=True)
    resp = await client.delete(f"/v1/theme-settings/{theme_id}", headers=headers_for(root))
    assert resp.status_code == 204


@pytest.mark.asyncio
async def test_admin_updates_site_settings(client: AsyncClient, admin, headers_for):
    _, user = admin
    resp = await client.post(
        "/v1/site-settings", json={"company_name": "Acme"}, headers=headers_for(user)
    )
    settings_id = resp.json()["id"]

    resp = await client.patch(
        f"/v1/site-settings/{settings_id}",
        json={"enable_blog": True, "maintenance_mode": True},
        headers=headers_for(user),
    )
    assert resp.status_code == 200
    assert resp.json()["enable_blog"] is True
    assert resp.json()["maintenance_mode"] is True


@pytest.mark.asyncio
async def test_unique_index_catches_duplicate_past_precheck(
    client: AsyncClient, session, admin, headers_for, monkeypatch
):
    tenant, user = admin
    session.add(Homepage(tenant_id=tenant.id, title="Home", headline="Welcome"))
    await session.commit()

    async def _no_precheck(*_args):
        return None

    monkeypatch.setattr(collections_service, "_ensure_no_singleton", _no_precheck)

    resp = await client.post(
        "/v1/homepage", json={"title": "Home 2", "headline": "Again"}, headers=headers_for(user)
    )
    assert resp.status_code == 409
    detail = resp.json()["detail"]
    assert detail["collection"] == "homepage"
    assert detail["tenant_id"] == str(tenant.id)
    assert detail["existing_id"] is None


@pytest.mark.asyncio
async def test_null_required_field_is_rejected_not_a_duplicate(
    client: AsyncClient, admin, headers_for
):
    _, user = admin
    resp = await client.post(
        "/v1/homepage", json={"title": "Home", "headline": "Hi"}, headers=headers_for(user)
    )
    homepage_id = resp.json()["id"]

    resp = await client.patch(
        f"/v1/homepage/{homepage_id}", json={"title": None}, headers=headers_for(user)
    )
    assert resp.status_code == 422
    assert "title" in resp.json()["detail"]

    resp = await client.get(f"/v1/homepage/{homepage_id}", headers=headers_for(user))
    assert resp.json()["title"] == "Home"
