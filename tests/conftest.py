"""Shared test fixtures — async SQLite in-memory DB + test client."""

import os
from collections.abc import AsyncGenerator

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("PROVISIONING_KEY", "test-provisioning-key")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

# Import all models so metadata is populated
import app.models  # noqa: E402, F401
from app.core import cache  # noqa: E402
from app.core.database import get_session  # noqa: E402
from app.core.security import create_jwt, hash_password  # noqa: E402
from app.main import app  # noqa: E402
from app.models.tenant import Tenant  # noqa: E402
from app.models.user import User, UserRole  # noqa: E402

DEFAULT_PASSWORD = "testpass123"


@pytest.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def test_session_factory(engine):
    """Session factory bound to the test SQLite engine."""
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with test_session_factory() as sess:
        yield sess
        await sess.rollback()


@pytest.fixture
async def client(session) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async test client with DB session override."""

    async def _override_session():
        yield session

    app.dependency_overrides[get_session] = _override_session
    cache.clear()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    cache.clear()


# ── Seeding helpers ──────────────────────────────────────────

@pytest.fixture
def make_tenant(session):
    """Insert a tenant directly: ``await make_tenant("acme")``."""

    async def _make(domain: str, name: str | None = None, **fields) -> Tenant:
        tenant = Tenant(name=name or f"{domain.title()} Co", domain=domain, **fields)
        session.add(tenant)
        await session.commit()
        await session.refresh(tenant)
        return tenant

    return _make


@pytest.fixture
def make_user(session):
    """Insert a user directly; ``tenant=None`` is only sensible for super-admins."""

    async def _make(
        email: str,
        tenant: Tenant | None = None,
        role: UserRole = UserRole.USER,
        is_super_admin: bool = False,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        user = User(
            tenant_id=tenant.id if tenant else None,
            email=email,
            password_hash=hash_password(password),
            role=role,
            is_super_admin=is_super_admin,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _make


def auth_headers(user: User) -> dict[str, str]:
    token = create_jwt(
        subject=str(user.id),
        tenant_id=str(user.tenant_id) if user.tenant_id else None,
        role=user.role,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers
