"""Import all models so SQLModel.metadata picks them up."""

from app.models.api_token import ApiToken, ApiTokenCreate, ApiTokenCreated, ApiTokenRead
from app.models.blog_post import BlogPost, BlogPostCreate, BlogPostRead, BlogPostUpdate
from app.models.footer import Footer, FooterCreate, FooterRead, FooterUpdate
from app.models.homepage import Homepage, HomepageCreate, HomepageRead, HomepageUpdate
from app.models.media import Media, MediaCreate, MediaRead, MediaUpdate
from app.models.navigation import Navigation, NavigationCreate, NavigationRead, NavigationUpdate
from app.models.page import Page, PageCreate, PageRead, PageUpdate, PublishStatus
from app.models.site_settings import (
    SiteSettings,
    SiteSettingsCreate,
    SiteSettingsRead,
    SiteSettingsUpdate,
)
from app.models.tenant import (
    Tenant,
    TenantCreate,
    TenantPublic,
    TenantRead,
    TenantStatus,
    TenantUpdate,
)
from app.models.theme_settings import (
    ThemeSettings,
    ThemeSettingsCreate,
    ThemeSettingsRead,
    ThemeSettingsUpdate,
)
from app.models.user import User, UserCreate, UserRead, UserRole, UserUpdate

__all__ = [
    "ApiToken",
    "ApiTokenCreate",
    "ApiTokenCreated",
    "ApiTokenRead",
    "BlogPost",
    "BlogPostCreate",
    "BlogPostRead",
    "BlogPostUpdate",
    "Footer",
    "FooterCreate",
    "FooterRead",
    "FooterUpdate",
    "Homepage",
    "HomepageCreate",
    "HomepageRead",
    "HomepageUpdate",
    "Media",
    "MediaCreate",
    "MediaRead",
    "MediaUpdate",
    "Navigation",
    "NavigationCreate",
    "NavigationRead",
    "NavigationUpdate",
    "Page",
    "PageCreate",
    "PageRead",
    "PageUpdate",
    "PublishStatus",
    "SiteSettings",
    "SiteSettingsCreate",
    "SiteSettingsRead",
    "SiteSettingsUpdate",
    "Tenant",
    "TenantCreate",
    "TenantPublic",
    "TenantRead",
    "TenantStatus",
    "TenantUpdate",
    "ThemeSettings",
    "ThemeSettingsCreate",
    "ThemeSettingsRead",
    "ThemeSettingsUpdate",
    "User",
    "UserCreate",
    "UserRead",
    "UserRole",
    "UserUpdate",
]
