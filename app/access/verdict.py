"""Access verdicts and their translation into query filters.

A verdict is one of ``Allow``, ``Deny`` or ``ScopeToTenant``. Scopes are
advisory filters ANDed into the downstream query; they never check that
the tenant exists, so an unknown tenant simply matches nothing.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy import false
from sqlalchemy.sql import Select

from app.access.exceptions import Denied

S = TypeVar("S", bound=Select)


@dataclass(frozen=True)
class Allow:
    def as_filter(self) -> bool:
        return True


@dataclass(frozen=True)
class Deny:
    reason: str = "denied"

    def as_filter(self) -> bool:
        return False


@dataclass(frozen=True)
class ScopeToTenant:
    tenant_id: str

    def as_filter(self, field: str = "tenant") -> dict[str, dict[str, str]]:
        return {field: {"equals": self.tenant_id}}

    def tenant_uuid(self) -> uuid.UUID | None:
        """The scope as a UUID, or None when it cannot name any tenant."""
        try:
            return uuid.UUID(self.tenant_id)
        except ValueError:
            return None

    def admits(self, tenant_id: uuid.UUID | str | None) -> bool:
        """True when a record owned by ``tenant_id`` falls inside the scope."""
        scoped = self.tenant_uuid()
        if scoped is None or tenant_id is None:
            return False
        try:
            return scoped == uuid.UUID(str(tenant_id))
        except ValueError:
            return False


Verdict = Allow | Deny | ScopeToTenant

ALLOW = Allow()


def apply_verdict(stmt: S, column: Any, verdict: Verdict) -> S:
    """AND a verdict into ``stmt``.

    ``Deny`` raises instead of returning an empty query: callers without
    access get an authorization error, not an empty list.
    """
    if isinstance(verdict, Deny):
        raise Denied(verdict.reason)
    if isinstance(verdict, Allow):
        return stmt
    scoped = verdict.tenant_uuid()
    if scoped is None:
        return stmt.where(false())
    return stmt.where(column == scoped)


def ensure_not_denied(verdict: Verdict) -> Verdict:
    if isinstance(verdict, Deny):
        raise Denied(verdict.reason)
    return verdict
