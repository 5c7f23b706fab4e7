"""Tenant model — top-level isolation boundary."""

import re
import uuid
from datetime import datetime
from enum import StrEnum

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, new_uuid

DOMAIN_PATTERN = r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$"


class TenantStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class TenantTheme(StrEnum):
    DEFAULT = "default"
    DARK = "dark"
    LIGHT = "light"


class Tenant(TimestampMixin, SQLModel, table=True):
    __tablename__ = "tenants"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    name: str = Field(max_length=255, unique=True, nullable=False, index=True)
    # Subdomain, e.g. "tenant1" for tenant1.example.com
    domain: str = Field(max_length=63, unique=True, nullable=False, index=True)
    status: TenantStatus = Field(default=TenantStatus.ACTIVE)

    # Limits and presentation
    theme: TenantTheme = Field(default=TenantTheme.DEFAULT)
    max_users: int = Field(default=10, ge=1)
    max_storage_mb: int = Field(default=1024, ge=1)

    # Contact metadata
    contact_email: str | None = Field(default=None, max_length=320)
    contact_name: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None)

    @property
    def is_active(self) -> bool:
        return self.status == TenantStatus.ACTIVE


# ── Pydantic schemas ─────────────────────────────────────────

def _check_domain(value: str | None) -> str | None:
    if value is not None and not re.fullmatch(DOMAIN_PATTERN, value):
        raise ValueError("Domain must be lowercase alphanumeric with hyphens only")
    return value


class TenantCreate(SQLModel):
    name: str = Field(max_length=255)
    domain: str = Field(max_length=63)
    status: TenantStatus = TenantStatus.ACTIVE
    theme: TenantTheme = TenantTheme.DEFAULT
    max_users: int = Field(default=10, ge=1)
    max_storage_mb: int = Field(default=1024, ge=1)
    contact_email: str | None = Field(default=None, max_length=320)
    contact_name: str | None = Field(default=None, max_length=255)
    address: str | None = None

    @field_validator("domain")
    @classmethod
    def check_domain(cls, value: str | None) -> str | None:
        return _check_domain(value)


class TenantUpdate(SQLModel):
    name: str | None = Field(default=None, max_length=255)
    domain: str | None = Field(default=None, max_length=63)
    status: TenantStatus | None = None
    theme: TenantTheme | None = None
    max_users: int | None = Field(default=None, ge=1)
    max_storage_mb: int | None = Field(default=None, ge=1)
    contact_email: str | None = Field(default=None, max_length=320)
    contact_name: str | None = Field(default=None, max_length=255)
    address: str | None = None

    @field_validator("domain")
    @classmethod
    def check_domain(cls, value: str | None) -> str | None:
        return _check_domain(value)


class TenantRead(SQLModel):
    id: uuid.UUID
    name: str
    domain: str
    status: TenantStatus
    theme: TenantTheme
    max_users: int
    max_storage_mb: int
    contact_email: str | None
    contact_name: str | None
    address: str | None
    created_at: datetime


class TenantPublic(SQLModel):
    """Site identity exposed to unauthenticated callers."""
    id: uuid.UUID
    name: str
    domain: str
    theme: TenantTheme
