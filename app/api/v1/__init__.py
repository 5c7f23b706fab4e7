"""V1 API router aggregation."""

from fastapi import APIRouter

from app.api.v1.api_tokens import router as api_tokens_router
from app.api.v1.auth import router as auth_router
from app.api.v1.collections import collection_routers
from app.api.v1.tenants import router as tenants_router
from app.api.v1.users import router as users_router
from app.api.v1.viewing_tenant import router as viewing_tenant_router

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(tenants_router)
v1_router.include_router(auth_router)
v1_router.include_router(api_tokens_router)
v1_router.include_router(users_router)
v1_router.include_router(viewing_tenant_router)
for _collection_router in collection_routers:
    v1_router.include_router(_collection_router)
