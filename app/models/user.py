"""User model — belongs to a tenant unless it is a super-admin."""

import uuid
from datetime import datetime
from enum import StrEnum

from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, new_uuid


class UserRole(StrEnum):
    ADMIN = "admin"
    EDITOR = "editor"
    USER = "user"


class User(TimestampMixin, SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    # NULL only for super-admins
    tenant_id: uuid.UUID | None = Field(default=None, foreign_key="tenants.id", index=True)
    email: str = Field(max_length=320, unique=True, nullable=False, index=True)
    password_hash: str = Field(nullable=False)
    first_name: str = Field(default="", max_length=255)
    last_name: str = Field(default="", max_length=255)
    role: UserRole = Field(default=UserRole.USER)
    is_super_admin: bool = Field(default=False)
    is_active: bool = Field(default=True)


# ── Pydantic schemas ─────────────────────────────────────────

class UserCreate(SQLModel):
    email: str = Field(max_length=320)
    password: str = Field(min_length=8, max_length=128)
    tenant_id: uuid.UUID | None = None
    first_name: str = Field(default="", max_length=255)
    last_name: str = Field(default="", max_length=255)
    role: UserRole = UserRole.USER
    is_super_admin: bool = False


class UserUpdate(SQLModel):
    password: str | None = Field(default=None, min_length=8, max_length=128)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    # Only super-admins may change the fields below
    tenant_id: uuid.UUID | None = None
    role: UserRole | None = None
    is_super_admin: bool | None = None
    is_active: bool | None = None


PROFILE_FIELDS = frozenset({"password", "first_name", "last_name"})


class UserRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID | None
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_super_admin: bool
    is_active: bool
    created_at: datetime
