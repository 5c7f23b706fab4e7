"""Page model — free-form site pages, many per tenant."""

import uuid
from datetime import datetime
from enum import StrEnum

from pydantic import field_validator
from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, check_slug, new_uuid, tenant_fk


class PublishStatus(StrEnum):
    DRAFT = "draft"
    PUBLISHED = "published"


class Page(TimestampMixin, SQLModel, table=True):
    __tablename__ = "pages"
    __table_args__ = (UniqueConstraint("tenant_id", "slug", name="uq_pages_tenant_slug"),)

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = tenant_fk()
    title: str = Field(max_length=255, nullable=False)
    slug: str = Field(max_length=255, nullable=False, index=True)
    body: str = Field(default="")
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = Field(default=None, max_length=500)
    status: PublishStatus = Field(default=PublishStatus.DRAFT)


# ── Pydantic schemas ─────────────────────────────────────────

class PageCreate(SQLModel):
    tenant_id: uuid.UUID | None = None
    title: str = Field(max_length=255)
    slug: str = Field(max_length=255)
    body: str = ""
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = Field(default=None, max_length=500)
    status: PublishStatus = PublishStatus.DRAFT

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: str) -> str:
        return check_slug(value)


class PageUpdate(SQLModel):
    tenant_id: uuid.UUID | None = None
    title: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    body: str | None = None
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = Field(default=None, max_length=500)
    status: PublishStatus | None = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: str | None) -> str | None:
        return check_slug(value)


class PageRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    title: str
    slug: str
    body: str
    meta_title: str | None
    meta_description: str | None
    status: PublishStatus
    created_at: datetime
    updated_at: datetime
