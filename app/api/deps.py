"""FastAPI dependencies for caller and viewing-tenant resolution."""

import uuid
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.access import Caller, Denied, Unauthenticated, resolve_viewing_tenant
from app.core.database import get_session
from app.core.security import decode_jwt, hash_api_token
from app.models.api_token import ApiToken
from app.models.base import utcnow
from app.models.user import User

# Anonymous requests are allowed through; each route decides what they may see
bearer_scheme = HTTPBearer(auto_error=False)


async def _load_active_user(user_id: uuid.UUID, session: AsyncSession) -> User:
    user = await session.get(User, user_id)
    if user is None or not user.is_active:
        raise Unauthenticated("Account is disabled")
    return user


async def _resolve_api_token(raw_token: str, session: AsyncSession) -> Caller:
    """Look up an API token by its SHA-256 hash."""
    token_hash = hash_api_token(raw_token)
    stmt = select(ApiToken).where(
        ApiToken.token_hash == token_hash,
        ApiToken.is_active.is_(True),  # type: ignore[union-attr]
    )
    result = await session.execute(stmt)
    api_token = result.scalar_one_or_none()

    if api_token is None:
        raise Unauthenticated("Invalid or revoked API token")
    if api_token.expires_at and api_token.expires_at < utcnow():
        raise Unauthenticated("API token has expired")

    user = await _load_active_user(api_token.user_id, session)

    api_token.last_used_at = utcnow()
    session.add(api_token)
    await session.commit()

    return Caller.from_user(user, token_id=api_token.id)


async def _resolve_jwt(token: str, session: AsyncSession) -> Caller:
    """Decode a JWT, then reload the user so privileges are current."""
    try:
        payload = decode_jwt(token)
    except JWTError as exc:
        raise Unauthenticated("Invalid or expired JWT") from exc

    try:
        user_id = uuid.UUID(payload["sub"])
    except (KeyError, ValueError) as exc:
        raise Unauthenticated("Malformed JWT payload") from exc

    user = await _load_active_user(user_id, session)
    return Caller.from_user(user)


async def get_optional_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Caller | None:
    """Resolve a bearer token to a Caller, or None when no token was sent.

    Supports two token types:
    - API tokens (opaque, ~43 chars from token_urlsafe(32))
    - JWTs (contain dots: header.payload.signature)

    A token that is present but invalid is rejected, never downgraded to
    anonymous access.
    """
    if credentials is None:
        return None
    raw = credentials.credentials
    if "." in raw:
        return await _resolve_jwt(raw, session)
    return await _resolve_api_token(raw, session)


async def get_caller(
    caller: Annotated[Caller | None, Depends(get_optional_caller)],
) -> Caller:
    if caller is None:
        raise Unauthenticated()
    return caller


async def require_super_admin(
    caller: Annotated[Caller, Depends(get_caller)],
) -> Caller:
    if not caller.is_global_privileged:
        raise Denied("super-admin required")
    return caller


def get_viewing_tenant(request: Request) -> str | None:
    """Override signal for this request; only super-admins' decisions read it."""
    return resolve_viewing_tenant(request.headers)


# Typed shorthand for use in route signatures
OptionalCaller = Annotated[Caller | None, Depends(get_optional_caller)]
CurrentCaller = Annotated[Caller, Depends(get_caller)]
SuperAdmin = Annotated[Caller, Depends(require_super_admin)]
ViewingTenant = Annotated[str | None, Depends(get_viewing_tenant)]
Session = Annotated[AsyncSession, Depends(get_session)]
