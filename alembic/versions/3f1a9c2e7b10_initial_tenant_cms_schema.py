"""initial tenant cms schema

Revision ID: 3f1a9c2e7b10
Revises: 
Create Date: 2026-10-19 09:12:44.201377

"""
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b10'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

PUBLISH_STATUS = sa.Enum("DRAFT", "PUBLISHED", name="publishstatus")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def _tenant_column() -> sa.Column:
    return sa.Column("tenant_id", sa.Uuid(), sa.ForeignKey("tenants.id"), nullable=False)


def _tenant_index(table: str, unique: bool = False) -> None:
    op.create_index(f"ix_{table}_tenant_id", table, ["tenant_id"], unique=unique)


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("domain", sa.String(63), nullable=False),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "INACTIVE", "SUSPENDED", name="tenantstatus"),
            nullable=False,
        ),
        sa.Column("theme", sa.Enum("DEFAULT", "DARK", "LIGHT", name="tenanttheme"), nullable=False),
        sa.Column("max_users", sa.Integer(), nullable=False),
        sa.Column("max_storage_mb", sa.Integer(), nullable=False),
        sa.Column("contact_email", sa.String(320), nullable=True),
        sa.Column("contact_name", sa.String(255), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_tenants_name", "tenants", ["name"], unique=True)
    op.create_index("ix_tenants_domain", "tenants", ["domain"], unique=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("tenant_id", sa.Uuid(), sa.ForeignKey("tenants.id"), nullable=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("role", sa.Enum("ADMIN", "EDITOR", "USER", name="userrole"), nullable=False),
        sa.Column("is_super_admin", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_tenant_id", "users", ["tenant_id"])

    op.create_table(
        "api_tokens",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("token_hash", sa.String(), nullable=False),
        sa.Column("token_prefix", sa.String(12), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        sa.Column("last_used_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_api_tokens_user_id", "api_tokens", ["user_id"])
    op.create_index("ix_api_tokens_token_hash", "api_tokens", ["token_hash"], unique=True)

    op.create_table(
        "pages",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_column(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("body", sa.String(), nullable=False),
        sa.Column("meta_title", sa.String(255), nullable=True),
        sa.Column("meta_description", sa.String(500), nullable=True),
        sa.Column("status", PUBLISH_STATUS, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("tenant_id", "slug", name="uq_pages_tenant_slug"),
    )
    _tenant_index("pages")
    op.create_index("ix_pages_slug", "pages", ["slug"])

    op.create_table(
        "blog_posts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_column(),
        sa.Column("author_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("excerpt", sa.String(500), nullable=False),
        sa.Column("body", sa.String(), nullable=False),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        sa.Column("status", PUBLISH_STATUS, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("tenant_id", "slug", name="uq_blog_posts_tenant_slug"),
    )
    _tenant_index("blog_posts")
    op.create_index("ix_blog_posts_slug", "blog_posts", ["slug"])

    op.create_table(
        "media",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_column(),
        sa.Column("alt", sa.String(500), nullable=False),
        sa.Column("filename", sa.String(255), nullable=False),
        sa.Column("mime_type", sa.String(100), nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
        sa.Column("size_bytes", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    _tenant_index("media")

    # One row per tenant: the unique index is what enforces it
    op.create_table(
        "homepages",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_column(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("headline", sa.String(255), nullable=False),
        sa.Column("subheadline", sa.String(500), nullable=False),
        sa.Column("cta_text", sa.String(100), nullable=True),
        sa.Column("cta_url", sa.String(2048), nullable=True),
        sa.Column("status", PUBLISH_STATUS, nullable=False),
        *_timestamps(),
    )
    _tenant_index("homepages", unique=True)

    op.create_table(
        "navigations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("logo_position", sa.Enum("LEFT", "CENTER", name="logoposition"), nullable=False),
        sa.Column(
            "menu_style",
            sa.Enum("HORIZONTAL", "DROPDOWN", "MEGA", name="menustyle"),
            nullable=False,
        ),
        sa.Column("sticky_header", sa.Boolean(), nullable=False),
        sa.Column("cta_text", sa.String(100), nullable=True),
        sa.Column("cta_url", sa.String(2048), nullable=True),
        *_timestamps(),
    )
    _tenant_index("navigations", unique=True)

    op.create_table(
        "footers",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_column(),
        sa.Column("columns", sa.Integer(), nullable=False),
        sa.Column("show_social_media", sa.Boolean(), nullable=False),
        sa.Column("show_newsletter", sa.Boolean(), nullable=False),
        sa.Column("copyright_text", sa.String(255), nullable=False),
        *_timestamps(),
    )
    _tenant_index("footers", unique=True)

    op.create_table(
        "site_settings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_column(),
        sa.Column("enable_blog", sa.Boolean(), nullable=False),
        sa.Column("enable_contact_form", sa.Boolean(), nullable=False),
        sa.Column("enable_newsletter", sa.Boolean(), nullable=False),
        sa.Column("enable_search", sa.Boolean(), nullable=False),
        sa.Column("default_title", sa.String(255), nullable=False),
        sa.Column("default_description", sa.String(500), nullable=False),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("contact_email", sa.String(320), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("maintenance_mode", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    _tenant_index("site_settings", unique=True)

    op.create_table(
        "theme_settings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_column(),
        sa.Column(
            "template",
            sa.Enum("MODERN", "CLASSIC", "MINIMAL", name="template"),
            nullable=False,
        ),
        sa.Column("primary_color", sa.String(7), nullable=False),
        sa.Column("secondary_color", sa.String(7), nullable=False),
        sa.Column("accent_color", sa.String(7), nullable=False),
        sa.Column("background_color", sa.String(7), nullable=False),
        sa.Column("heading_font", sa.String(100), nullable=False),
        sa.Column("body_font", sa.String(100), nullable=False),
        sa.Column("border_radius", sa.Integer(), nullable=False),
        sa.Column(
            "button_style",
            sa.Enum("ROUNDED", "SQUARE", "PILL", name="buttonstyle"),
            nullable=False,
        ),
        *_timestamps(),
    )
    _tenant_index("theme_settings", unique=True)


def downgrade() -> None:
    for table in (
        "theme_settings",
        "site_settings",
        "footers",
        "navigations",
        "homepages",
        "media",
        "blog_posts",
        "pages",
        "api_tokens",
        "users",
        "tenants",
    ):
        op.drop_table(table)
    for enum_name in (
        "buttonstyle",
        "template",
        "menustyle",
        "logoposition",
        "publishstatus",
        "userrole",
        "tenanttheme",
        "tenantstatus",
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
