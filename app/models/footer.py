"""Footer model — one per tenant."""

import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, new_uuid, tenant_fk


class Footer(TimestampMixin, SQLModel, table=True):
    __tablename__ = "footers"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = tenant_fk(unique=True)
    columns: int = Field(default=4, ge=1, le=4)
    show_social_media: bool = Field(default=True)
    show_newsletter: bool = Field(default=False)
    copyright_text: str = Field(default="", max_length=255)


# ── Pydantic schemas ─────────────────────────────────────────

class FooterCreate(SQLModel):
    tenant_id: uuid.UUID | None = None
    columns: int = Field(default=4, ge=1, le=4)
    show_social_media: bool = True
    show_newsletter: bool = False
    copyright_text: str = Field(default="", max_length=255)


class FooterUpdate(SQLModel):
    tenant_id: uuid.UUID | None = None
    columns: int | None = Field(default=None, ge=1, le=4)
    show_social_media: bool | None = None
    show_newsletter: bool | None = None
    copyright_text: str | None = Field(default=None, max_length=255)


class FooterRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    columns: int
    show_social_media: bool
    show_newsletter: bool
    copyright_text: str
    updated_at: datetime
