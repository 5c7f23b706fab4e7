"""Homepage model — exactly one per tenant."""

import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, new_uuid, tenant_fk
from app.models.page import PublishStatus


class Homepage(TimestampMixin, SQLModel, table=True):
    __tablename__ = "homepages"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = tenant_fk(unique=True)
    title: str = Field(max_length=255, nullable=False)
    headline: str = Field(max_length=255, nullable=False)
    subheadline: str = Field(default="", max_length=500)
    cta_text: str | None = Field(default=None, max_length=100)
    cta_url: str | None = Field(default=None, max_length=2048)
    status: PublishStatus = Field(default=PublishStatus.DRAFT)


# ── Pydantic schemas ─────────────────────────────────────────

class HomepageCreate(SQLModel):
    tenant_id: uuid.UUID | None = None
    title: str = Field(max_length=255)
    headline: str = Field(max_length=255)
    subheadline: str = Field(default="", max_length=500)
    cta_text: str | None = Field(default=None, max_length=100)
    cta_url: str | None = Field(default=None, max_length=2048)
    status: PublishStatus = PublishStatus.DRAFT


class HomepageUpdate(SQLModel):
    tenant_id: uuid.UUID | None = None
    title: str | None = Field(default=None, max_length=255)
    headline: str | None = Field(default=None, max_length=255)
    subheadline: str | None = Field(default=None, max_length=500)
    cta_text: str | None = Field(default=None, max_length=100)
    cta_url: str | None = Field(default=None, max_length=2048)
    status: PublishStatus | None = None


class HomepageRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    title: str
    headline: str
    subheadline: str
    cta_text: str | None
    cta_url: str | None
    status: PublishStatus
    created_at: datetime
    updated_at: datetime
