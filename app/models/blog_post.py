"""Blog post model — optional news section per tenant."""

import uuid
from datetime import datetime

from pydantic import field_validator
from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, check_slug, new_uuid, tenant_fk
from app.models.page import PublishStatus


class BlogPost(TimestampMixin, SQLModel, table=True):
    __tablename__ = "blog_posts"
    __table_args__ = (UniqueConstraint("tenant_id", "slug", name="uq_blog_posts_tenant_slug"),)

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = tenant_fk()
    # Stamped from the creating caller
    author_id: uuid.UUID | None = Field(default=None, foreign_key="users.id")
    title: str = Field(max_length=255, nullable=False)
    slug: str = Field(max_length=255, nullable=False, index=True)
    excerpt: str = Field(default="", max_length=500)
    body: str = Field(default="")
    published_at: datetime | None = Field(default=None)
    status: PublishStatus = Field(default=PublishStatus.DRAFT)


# ── Pydantic schemas ─────────────────────────────────────────

class BlogPostCreate(SQLModel):
    tenant_id: uuid.UUID | None = None
    title: str = Field(max_length=255)
    slug: str = Field(max_length=255)
    excerpt: str = Field(default="", max_length=500)
    body: str = ""
    published_at: datetime | None = None
    status: PublishStatus = PublishStatus.DRAFT

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: str) -> str:
        return check_slug(value)


class BlogPostUpdate(SQLModel):
    tenant_id: uuid.UUID | None = None
    title: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    excerpt: str | None = Field(default=None, max_length=500)
    body: str | None = None
    published_at: datetime | None = None
    status: PublishStatus | None = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: str | None) -> str | None:
        return check_slug(value)


class BlogPostRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    author_id: uuid.UUID | None
    title: str
    slug: str
    excerpt: str
    body: str
    published_at: datetime | None
    status: PublishStatus
    created_at: datetime
    updated_at: datetime
