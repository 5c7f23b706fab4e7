"""Navigation model — the main menu, one per tenant.

``name`` is derived from the owning tenant and never accepted from input.
"""

import uuid
from datetime import datetime
from enum import StrEnum

from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, new_uuid, tenant_fk


class LogoPosition(StrEnum):
    LEFT = "left"
    CENTER = "center"


class MenuStyle(StrEnum):
    HORIZONTAL = "horizontal"
    DROPDOWN = "dropdown"
    MEGA = "mega"


class Navigation(TimestampMixin, SQLModel, table=True):
    __tablename__ = "navigations"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = tenant_fk(unique=True)
    name: str = Field(default="", max_length=255)
    logo_position: LogoPosition = Field(default=LogoPosition.LEFT)
    menu_style: MenuStyle = Field(default=MenuStyle.HORIZONTAL)
    sticky_header: bool = Field(default=True)
    cta_text: str | None = Field(default=None, max_length=100)
    cta_url: str | None = Field(default=None, max_length=2048)


# ── Pydantic schemas ─────────────────────────────────────────

class NavigationCreate(SQLModel):
    tenant_id: uuid.UUID | None = None
    logo_position: LogoPosition = LogoPosition.LEFT
    menu_style: MenuStyle = MenuStyle.HORIZONTAL
    sticky_header: bool = True
    cta_text: str | None = Field(default=None, max_length=100)
    cta_url: str | None = Field(default=None, max_length=2048)


class NavigationUpdate(SQLModel):
    tenant_id: uuid.UUID | None = None
    logo_position: LogoPosition | None = None
    menu_style: MenuStyle | None = None
    sticky_header: bool | None = None
    cta_text: str | None = Field(default=None, max_length=100)
    cta_url: str | None = Field(default=None, max_length=2048)


class NavigationRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    logo_position: LogoPosition
    menu_style: MenuStyle
    sticky_header: bool
    cta_text: str | None
    cta_url: str | None
    updated_at: datetime
