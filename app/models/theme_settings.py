"""Theme settings model — per-tenant colours, fonts and styling."""

import uuid
from datetime import datetime
from enum import StrEnum

from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, new_uuid, tenant_fk


class Template(StrEnum):
    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"


class ButtonStyle(StrEnum):
    ROUNDED = "rounded"
    SQUARE = "square"
    PILL = "pill"


class ThemeSettings(TimestampMixin, SQLModel, table=True):
    __tablename__ = "theme_settings"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = tenant_fk(unique=True)
    template: Template = Field(default=Template.MODERN)
    primary_color: str = Field(default="#1E40AF", max_length=7)
    secondary_color: str = Field(default="#64748B", max_length=7)
    accent_color: str = Field(default="#F59E0B", max_length=7)
    background_color: str = Field(default="#FFFFFF", max_length=7)
    heading_font: str = Field(default="Montserrat", max_length=100)
    body_font: str = Field(default="Open Sans", max_length=100)
    border_radius: int = Field(default=8, ge=0, le=32)
    button_style: ButtonStyle = Field(default=ButtonStyle.ROUNDED)


# ── Pydantic schemas ─────────────────────────────────────────

class ThemeSettingsCreate(SQLModel):
    tenant_id: uuid.UUID | None = None
    template: Template = Template.MODERN
    primary_color: str = Field(default="#1E40AF", max_length=7)
    secondary_color: str = Field(default="#64748B", max_length=7)
    accent_color: str = Field(default="#F59E0B", max_length=7)
    background_color: str = Field(default="#FFFFFF", max_length=7)
    heading_font: str = Field(default="Montserrat", max_length=100)
    body_font: str = Field(default="Open Sans", max_length=100)
    border_radius: int = Field(default=8, ge=0, le=32)
    button_style: ButtonStyle = ButtonStyle.ROUNDED


class ThemeSettingsUpdate(SQLModel):
    tenant_id: uuid.UUID | None = None
    template: Template | None = None
    primary_color: str | None = Field(default=None, max_length=7)
    secondary_color: str | None = Field(default=None, max_length=7)
    accent_color: str | None = Field(default=None, max_length=7)
    background_color: str | None = Field(default=None, max_length=7)
    heading_font: str | None = Field(default=None, max_length=100)
    body_font: str | None = Field(default=None, max_length=100)
    border_radius: int | None = Field(default=None, ge=0, le=32)
    button_style: ButtonStyle | None = None


class ThemeSettingsRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    template: Template
    primary_color: str
    secondary_color: str
    accent_color: str
    background_color: str
    heading_font: str
    body_font: str
    border_radius: int
    button_style: ButtonStyle
    updated_at: datetime
