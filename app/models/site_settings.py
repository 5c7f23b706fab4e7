"""Site settings model — per-tenant feature flags, SEO defaults and contact data."""

import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, new_uuid, tenant_fk


class SiteSettings(TimestampMixin, SQLModel, table=True):
    __tablename__ = "site_settings"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = tenant_fk(unique=True)

    # Features
    enable_blog: bool = Field(default=False)
    enable_contact_form: bool = Field(default=True)
    enable_newsletter: bool = Field(default=False)
    enable_search: bool = Field(default=True)

    # SEO defaults
    default_title: str = Field(default="", max_length=255)
    default_description: str = Field(default="", max_length=500)

    # Contact
    company_name: str = Field(default="", max_length=255)
    contact_email: str | None = Field(default=None, max_length=320)
    phone: str | None = Field(default=None, max_length=50)

    maintenance_mode: bool = Field(default=False)


# ── Pydantic schemas ─────────────────────────────────────────

class SiteSettingsCreate(SQLModel):
    tenant_id: uuid.UUID | None = None
    enable_blog: bool = False
    enable_contact_form: bool = True
    enable_newsletter: bool = False
    enable_search: bool = True
    default_title: str = Field(default="", max_length=255)
    default_description: str = Field(default="", max_length=500)
    company_name: str = Field(default="", max_length=255)
    contact_email: str | None = Field(default=None, max_length=320)
    phone: str | None = Field(default=None, max_length=50)
    maintenance_mode: bool = False


class SiteSettingsUpdate(SQLModel):
    tenant_id: uuid.UUID | None = None
    enable_blog: bool | None = None
    enable_contact_form: bool | None = None
    enable_newsletter: bool | None = None
    enable_search: bool | None = None
    default_title: str | None = Field(default=None, max_length=255)
    default_description: str | None = Field(default=None, max_length=500)
    company_name: str | None = Field(default=None, max_length=255)
    contact_email: str | None = Field(default=None, max_length=320)
    phone: str | None = Field(default=None, max_length=50)
    maintenance_mode: bool | None = None


class SiteSettingsRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    enable_blog: bool
    enable_contact_form: bool
    enable_newsletter: bool
    enable_search: bool
    default_title: str
    default_description: str
    company_name: str
    contact_email: str | None
    phone: str | None
    maintenance_mode: bool
    updated_at: datetime
