"""Media model — metadata for uploaded assets, publicly readable."""

import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, new_uuid, tenant_fk


class Media(TimestampMixin, SQLModel, table=True):
    __tablename__ = "media"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = tenant_fk()
    alt: str = Field(max_length=500, nullable=False)
    filename: str = Field(max_length=255, nullable=False)
    mime_type: str = Field(default="application/octet-stream", max_length=100)
    # Location in external storage; uploads themselves live elsewhere
    url: str = Field(max_length=2048, nullable=False)
    size_bytes: int = Field(default=0, ge=0)


# ── Pydantic schemas ─────────────────────────────────────────

class MediaCreate(SQLModel):
    tenant_id: uuid.UUID | None = None
    alt: str = Field(max_length=500)
    filename: str = Field(max_length=255)
    mime_type: str = Field(default="application/octet-stream", max_length=100)
    url: str = Field(max_length=2048)
    size_bytes: int = Field(default=0, ge=0)


class MediaUpdate(SQLModel):
    tenant_id: uuid.UUID | None = None
    alt: str | None = Field(default=None, max_length=500)
    filename: str | None = Field(default=None, max_length=255)
    mime_type: str | None = Field(default=None, max_length=100)
    url: str | None = Field(default=None, max_length=2048)


class MediaRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    alt: str
    filename: str
    mime_type: str
    url: str
    size_bytes: int
    created_at: datetime
