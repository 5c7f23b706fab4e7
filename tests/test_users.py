"""Tests for users CRUD endpoints."""

import pytest
from httpx import AsyncClient

from app.models.user import UserRole


@pytest.fixture
async def acme(make_tenant, make_user):
    tenant = await make_tenant("acme")
    admin = await make_user("admin@acme.com", tenant=tenant, role=UserRole.ADMIN)
    return tenant, admin


@pytest.fixture
async def root(make_user):
    return await make_user("root@platform.com", is_super_admin=True)


@pytest.mark.asyncio
async def test_list_users_is_tenant_scoped(
    client: AsyncClient, acme, make_tenant, make_user, headers_for
):
    tenant, admin = acme
    await make_user("outsider@globex.com", tenant=await make_tenant("globex"))

    resp = await client.get("/v1/users", headers=headers_for(admin))
    assert resp.status_code == 200
    emails = {u["email"] for u in resp.json()}
    assert emails == {"admin@acme.com"}


@pytest.mark.asyncio
async def test_super_admin_lists_everyone(client: AsyncClient, acme, root, headers_for):
    resp = await client.get("/v1/users", headers=headers_for(root))
    assert {u["email"] for u in resp.json()} == {"admin@acme.com", "root@platform.com"}


@pytest.mark.asyncio
async def test_super_admin_creates_user(client: AsyncClient, acme, root, headers_for):
    tenant, _ = acme

    resp = await client.post("/v1/users", json={
        "email": "editor@acme.com",
        "password": "editorpass1",
        "tenant_id": str(tenant.id),
        "first_name": "Eddie",
        "role": "editor",
    }, headers=headers_for(root))
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["email"] == "editor@acme.com"
    assert data["role"] == "editor"
    assert data["tenant_id"] == str(tenant.id)
    assert data["is_active"] is True
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_tenant_admin_cannot_create_users(client: AsyncClient, acme, headers_for):
    tenant, admin = acme

    resp = await client.post("/v1/users", json={
        "email": "sneaky@acme.com",
        "password": "password123",
        "tenant_id": str(tenant.id),
    }, headers=headers_for(admin))
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_create_user_requires_tenant(client: AsyncClient, root, headers_for):
    resp = await client.post("/v1/users", json={
        "email": "floating@acme.com",
        "password": "password123",
    }, headers=headers_for(root))
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_duplicate_email_rejected(client: AsyncClient, acme, root, headers_for):
    tenant, _ = acme
    user_data = {
        "email": "dup@acme.com",
        "password": "password123",
        "tenant_id": str(tenant.id),
    }
    resp = await client.post("/v1/users", json=user_data, headers=headers_for(root))
    assert resp.status_code == 201

    resp = await client.post("/v1/users", json=user_data, headers=headers_for(root))
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_user_updates_own_profile(client: AsyncClient, acme, make_user, headers_for):
    tenant, _ = acme
    user = await make_user("user@acme.com", tenant=tenant)

    resp = await client.patch(
        f"/v1/users/{user.id}",
        json={"first_name": "Ursula", "password": "newpassword1"},
        headers=headers_for(user),
    )
    assert resp.status_code == 200
    assert resp.json()["first_name"] == "Ursula"

    resp = await client.post(
        "/v1/auth/login", json={"email": "user@acme.com", "password": "newpassword1"}
    )
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_user_cannot_escalate_privileges(
    client: AsyncClient, acme, make_user, headers_for
):
    tenant, _ = acme
    user = await make_user("user@acme.com", tenant=tenant)

    for change in ({"role": "admin"}, {"is_super_admin": True}, {"is_active": False}):
        resp = await client.patch(f"/v1/users/{user.id}", json=change, headers=headers_for(user))
        assert resp.status_code == 403, change


@pytest.mark.asyncio
async def test_member_cannot_edit_colleague(client: AsyncClient, acme, make_user, headers_for):
    tenant, admin = acme
    user = await make_user("user@acme.com", tenant=tenant)

    resp = await client.patch(
        f"/v1/users/{admin.id}", json={"first_name": "Mallory"}, headers=headers_for(user)
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_super_admin_changes_role(client: AsyncClient, acme, make_user, root, headers_for):
    tenant, _ = acme
    user = await make_user("user@acme.com", tenant=tenant)

    resp = await client.patch(
        f"/v1/users/{user.id}", json={"role": "editor"}, headers=headers_for(root)
    )
    assert resp.status_code == 200
    assert resp.json()["role"] == "editor"


@pytest.mark.asyncio
async def test_deactivate_user(client: AsyncClient, acme, make_user, root, headers_for):
    tenant, _ = acme
    victim = await make_user("victim@acme.com", tenant=tenant)

    resp = await client.delete(f"/v1/users/{victim.id}", headers=headers_for(root))
    assert resp.status_code == 204

    resp = await client.get(f"/v1/users/{victim.id}", headers=headers_for(root))
    assert resp.json()["is_active"] is False

    # Deactivated users can no longer authenticate
    resp = await client.get("/v1/auth/me", headers=headers_for(victim))
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_cannot_deactivate_self(client: AsyncClient, root, headers_for):
    resp = await client.delete(f"/v1/users/{root.id}", headers=headers_for(root))
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_null_password_on_own_profile_is_rejected(
    client: AsyncClient, acme, make_user, headers_for
):
    tenant, _ = acme
    user = await make_user("user@acme.com", tenant=tenant)

    resp = await client.patch(
        f"/v1/users/{user.id}", json={"password": None}, headers=headers_for(user)
    )
    assert resp.status_code == 422
    assert "password" in resp.json()["detail"]

    resp = await client.patch(
        f"/v1/users/{user.id}", json={"first_name": None}, headers=headers_for(user)
    )
    assert resp.status_code == 422

    # The old password still works
    resp = await client.post(
        "/v1/auth/login", json={"email": "user@acme.com", "password": "testpass123"}
    )
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_super_admin_cannot_null_role(
    client: AsyncClient, acme, make_user, root, headers_for
):
    tenant, _ = acme
    user = await make_user("user@acme.com", tenant=tenant)

    resp = await client.patch(
        f"/v1/users/{user.id}", json={"role": None, "is_active": None}, headers=headers_for(root)
    )
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Fields cannot be null: is_active, role"
