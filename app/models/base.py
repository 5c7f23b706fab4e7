"""Shared base fields for all models."""

import re
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


def check_slug(value: str | None) -> str | None:
    if value is not None and not re.fullmatch(SLUG_PATTERN, value):
        raise ValueError("Slug must be lowercase words separated by hyphens")
    return value


def null_violations(model: type[SQLModel], data: dict[str, Any]) -> list[str]:
    """Keys explicitly set to None whose column on ``model`` is NOT NULL."""
    columns = model.__table__.columns  # type: ignore[attr-defined]
    return sorted(
        key for key, value in data.items()
        if value is None and key in columns and not columns[key].nullable
    )


def tenant_fk(*, unique: bool = False) -> Any:
    """Required ``tenant_id`` column; ``unique`` makes the table one-per-tenant."""
    return Field(foreign_key="tenants.id", nullable=False, index=True, unique=unique)


class TimestampMixin(SQLModel):
    """Created / updated timestamps injected into every table."""

    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
