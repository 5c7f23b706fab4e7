"""The authenticated principal every access decision is made for."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.models.user import UserRole

if TYPE_CHECKING:
    from app.models.user import User


@dataclass(frozen=True)
class Caller:
    """Resolved identity carried through a request.

    Always built from the persisted user row, so ``is_global_privileged``
    reflects the database on every request rather than a token claim.
    """

    id: uuid.UUID
    tenant_id: uuid.UUID | None
    role: UserRole
    is_global_privileged: bool = False
    token_id: uuid.UUID | None = None

    @classmethod
    def from_user(cls, user: User, token_id: uuid.UUID | None = None) -> Caller:
        return cls(
            id=user.id,
            tenant_id=user.tenant_id,
            role=UserRole(user.role),
            is_global_privileged=user.is_super_admin,
            token_id=token_id,
        )

    @property
    def home_tenant(self) -> str | None:
        """Home tenant id as it appears in verdicts, or None."""
        return str(self.tenant_id) if self.tenant_id is not None else None

    def has_role(self, roles: frozenset[UserRole]) -> bool:
        return self.role in roles
