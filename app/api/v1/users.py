"""Users CRUD. Super-admins manage accounts; members edit their own profile."""

import logging
import uuid

from fastapi import APIRouter, HTTPException, status
from sqlmodel import select

from app.access import Caller, Denied, Operation, ScopeToTenant, UnknownTenant, apply_verdict
from app.access.policies import USERS
from app.access.verdict import Verdict, ensure_not_denied
from app.api.deps import CurrentCaller, Session, SuperAdmin, ViewingTenant
from app.core.security import hash_password
from app.models.base import null_violations, utcnow
from app.models.tenant import Tenant
from app.models.user import PROFILE_FIELDS, User, UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    caller: SuperAdmin,
    viewing_tenant: ViewingTenant,
    session: Session,
) -> UserRead:
    verdict = _verdict(Operation.CREATE, caller, viewing_tenant)

    if body.tenant_id is None and not body.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Tenant is required for non super-admin users",
        )
    if isinstance(verdict, ScopeToTenant) and not verdict.admits(body.tenant_id):
        raise Denied("user outside viewing scope")
    if body.tenant_id is not None and await session.get(Tenant, body.tenant_id) is None:
        raise UnknownTenant(body.tenant_id)

    existing = await session.execute(select(User).where(User.email == body.email))
    if existing.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        )

    user = User(
        tenant_id=body.tenant_id,
        email=body.email,
        password_hash=hash_password(body.password),
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
        is_super_admin=body.is_super_admin,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    logger.info("Super-admin %s created user %s", caller.id, user.id)
    return UserRead.model_validate(user)


@router.get("", response_model=list[UserRead])
async def list_users(
    caller: CurrentCaller,
    viewing_tenant: ViewingTenant,
    session: Session,
) -> list[UserRead]:
    verdict = _verdict(Operation.READ, caller, viewing_tenant)
    stmt = apply_verdict(select(User), User.tenant_id, verdict).order_by(
        User.email.asc()  # type: ignore[attr-defined]
    )
    result = await session.execute(stmt)
    return [UserRead.model_validate(u) for u in result.scalars().all()]


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: uuid.UUID,
    caller: CurrentCaller,
    viewing_tenant: ViewingTenant,
    session: Session,
) -> UserRead:
    verdict = _verdict(Operation.READ, caller, viewing_tenant)
    user = await _get_or_404(user_id, verdict, session)
    return UserRead.model_validate(user)


@router.patch("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: uuid.UUID,
    body: UserUpdate,
    caller: CurrentCaller,
    viewing_tenant: ViewingTenant,
    session: Session,
) -> UserRead:
    verdict = _verdict(Operation.UPDATE, caller, viewing_tenant)
    user = await _get_or_404(user_id, verdict, session)
    update_data = body.model_dump(exclude_unset=True)

    if not caller.is_global_privileged:
        # Members may only touch their own profile
        if user.id != caller.id:
            raise Denied("users may only update themselves")
        if not set(update_data) <= PROFILE_FIELDS:
            raise Denied("privileged user fields")
    elif update_data.get("tenant_id") is not None:
        if isinstance(verdict, ScopeToTenant) and not verdict.admits(update_data["tenant_id"]):
            raise Denied("user outside viewing scope")
        if await session.get(Tenant, update_data["tenant_id"]) is None:
            raise UnknownTenant(update_data["tenant_id"])

    nulls = null_violations(User, update_data)
    if "password" in update_data and update_data["password"] is None:
        nulls.insert(0, "password")
    if nulls:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Fields cannot be null: {', '.join(nulls)}",
        )

    if "password" in update_data:
        user.password_hash = hash_password(update_data.pop("password"))
    for field, value in update_data.items():
        setattr(user, field, value)

    user.updated_at = utcnow()
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return UserRead.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_user(
    user_id: uuid.UUID,
    caller: SuperAdmin,
    viewing_tenant: ViewingTenant,
    session: Session,
) -> None:
    verdict = _verdict(Operation.DELETE, caller, viewing_tenant)
    user = await _get_or_404(user_id, verdict, session)
    if user.id == caller.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot deactivate your own account",
        )
    user.is_active = False
    user.updated_at = utcnow()
    session.add(user)
    await session.commit()


# ── Internal helpers ──────────────────────────────────────────

def _verdict(operation: Operation, caller: Caller, viewing_tenant: str | None) -> Verdict:
    return ensure_not_denied(USERS.decide(operation, caller, viewing_tenant))


async def _get_or_404(user_id: uuid.UUID, verdict: Verdict, session) -> User:
    stmt = apply_verdict(select(User).where(User.id == user_id), User.tenant_id, verdict)
    result = await session.execute(stmt)
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
