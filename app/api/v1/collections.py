"""CRUD routers for tenant-scoped collections.

Every collection gets the same five routes; what differs is its access
policy, which the service layer applies.
"""

import uuid

from fastapi import APIRouter, status

from app.api.deps import OptionalCaller, Session, ViewingTenant
from app.services.collections import (
    COLLECTIONS,
    Collection,
    create_record,
    delete_record,
    get_record,
    list_records,
    update_record,
)


def build_router(collection: Collection) -> APIRouter:
    router = APIRouter(prefix=f"/{collection.slug}", tags=[collection.slug])
    Create = collection.create_schema
    Update = collection.update_schema
    Read = collection.read_schema
    name = collection.slug.replace("-", "_")

    @router.get("", response_model=list[Read], name=f"list_{name}")
    async def list_items(
        caller: OptionalCaller,
        viewing_tenant: ViewingTenant,
        session: Session,
        tenant_id: uuid.UUID | None = None,
    ) -> list:
        records = await list_records(session, collection, caller, viewing_tenant, tenant_id)
        return [Read.model_validate(r) for r in records]

    @router.get("/{item_id}", response_model=Read, name=f"get_{name}")
    async def get_item(
        item_id: uuid.UUID,
        caller: OptionalCaller,
        viewing_tenant: ViewingTenant,
        session: Session,
    ):
        record = await get_record(session, collection, item_id, caller, viewing_tenant)
        return Read.model_validate(record)

    @router.post(
        "",
        response_model=Read,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{name}",
    )
    async def create_item(
        body: Create,  # type: ignore[valid-type]
        caller: OptionalCaller,
        viewing_tenant: ViewingTenant,
        session: Session,
    ):
        data = body.model_dump(exclude_unset=True)
        record = await create_record(session, collection, data, caller, viewing_tenant)
        return Read.model_validate(record)

    @router.patch("/{item_id}", response_model=Read, name=f"update_{name}")
    async def update_item(
        item_id: uuid.UUID,
        body: Update,  # type: ignore[valid-type]
        caller: OptionalCaller,
        viewing_tenant: ViewingTenant,
        session: Session,
    ):
        changes = body.model_dump(exclude_unset=True)
        record = await update_record(
            session, collection, item_id, changes, caller, viewing_tenant
        )
        return Read.model_validate(record)

    @router.delete(
        "/{item_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        name=f"delete_{name}",
    )
    async def delete_item(
        item_id: uuid.UUID,
        caller: OptionalCaller,
        viewing_tenant: ViewingTenant,
        session: Session,
    ) -> None:
        await delete_record(session, collection, item_id, caller, viewing_tenant)

    return router


collection_routers = [build_router(c) for c in COLLECTIONS]
