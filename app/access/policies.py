"""Access rules and per-collection policies.

Every rule has the signature ``rule(operation, caller, viewing_tenant)``
and returns a verdict. Rules are evaluated in a fixed order:

1. no caller: ``Deny`` (only ``public`` answers ``Allow``);
2. global-privileged caller: ``ScopeToTenant(viewing_tenant)`` when an
   override is set, otherwise ``Allow``;
3. everyone else: scoped to their home tenant, or ``Deny`` without one.
   ``create`` is a yes/no gate and never returns a scope for them.

``viewing_tenant`` is only ever read in step 2.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from app.access.caller import Caller
from app.access.verdict import ALLOW, Deny, ScopeToTenant, Verdict
from app.models.user import UserRole

logger = logging.getLogger(__name__)


class Operation(StrEnum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


Rule = Callable[[Operation, Caller | None, str | None], Verdict]


def _global_scope(viewing_tenant: str | None) -> Verdict:
    if viewing_tenant:
        return ScopeToTenant(viewing_tenant)
    return ALLOW


def _home_scope(operation: Operation, caller: Caller) -> Verdict:
    home = caller.home_tenant
    if home is None:
        return Deny("caller has no home tenant")
    if operation is Operation.CREATE:
        return ALLOW
    return ScopeToTenant(home)


# ── Rules ─────────────────────────────────────────────────────

def tenant_access(
    operation: Operation, caller: Caller | None, viewing_tenant: str | None
) -> Verdict:
    """Any member of the tenant."""
    if caller is None:
        return Deny("unauthenticated")
    if caller.is_global_privileged:
        return _global_scope(viewing_tenant)
    return _home_scope(operation, caller)


def role_access(*roles: UserRole) -> Rule:
    """Members of the tenant holding one of ``roles``."""
    allowed = frozenset(roles)

    def rule(
        operation: Operation, caller: Caller | None, viewing_tenant: str | None
    ) -> Verdict:
        if caller is None:
            return Deny("unauthenticated")
        if caller.is_global_privileged:
            return _global_scope(viewing_tenant)
        if not caller.has_role(allowed):
            return Deny(f"role {caller.role} not in {sorted(allowed)}")
        return _home_scope(operation, caller)

    return rule


tenant_admin_only = role_access(UserRole.ADMIN)


def super_admin_only(
    operation: Operation, caller: Caller | None, viewing_tenant: str | None
) -> Verdict:
    if caller is None:
        return Deny("unauthenticated")
    if caller.is_global_privileged:
        return _global_scope(viewing_tenant)
    return Deny("super-admin required")


def public(
    operation: Operation, caller: Caller | None, viewing_tenant: str | None
) -> Verdict:
    """Anyone, including anonymous callers. A super-admin's override still scopes."""
    if caller is not None and caller.is_global_privileged:
        return _global_scope(viewing_tenant)
    return ALLOW


# ── Policies ──────────────────────────────────────────────────

@dataclass(frozen=True)
class AccessPolicy:
    """One rule per operation for a collection."""

    read: Rule
    create: Rule
    update: Rule
    delete: Rule

    def rule_for(self, operation: Operation) -> Rule:
        return getattr(self, operation.value)

    def decide(
        self,
        operation: Operation,
        caller: Caller | None,
        viewing_tenant: str | None = None,
    ) -> Verdict:
        verdict = self.rule_for(operation)(operation, caller, viewing_tenant)
        if isinstance(verdict, Deny):
            logger.info(
                "Denied %s for caller %s (api token %s): %s",
                operation,
                caller.id if caller else None,
                caller.token_id if caller else None,
                verdict.reason,
            )
        return verdict


FULL_TENANT_ISOLATION = AccessPolicy(
    read=tenant_access,
    create=tenant_access,
    update=tenant_access,
    delete=tenant_access,
)

PUBLIC_READ_TENANT_WRITE = AccessPolicy(
    read=public,
    create=tenant_access,
    update=tenant_access,
    delete=tenant_access,
)

ADMIN_MANAGED = AccessPolicy(
    read=tenant_access,
    create=tenant_admin_only,
    update=tenant_admin_only,
    delete=tenant_admin_only,
)

# One-per-tenant configuration: only super-admins may remove it
ADMIN_MANAGED_SINGLETON = AccessPolicy(
    read=tenant_access,
    create=tenant_admin_only,
    update=tenant_admin_only,
    delete=super_admin_only,
)

EDITORIAL = AccessPolicy(
    read=tenant_access,
    create=role_access(UserRole.ADMIN, UserRole.EDITOR),
    update=role_access(UserRole.ADMIN, UserRole.EDITOR),
    delete=tenant_admin_only,
)


def decide(
    operation: Operation,
    caller: Caller | None,
    viewing_tenant: str | None = None,
    policy: AccessPolicy = FULL_TENANT_ISOLATION,
) -> Verdict:
    """Decide ``operation`` for ``caller`` under ``policy``."""
    return policy.decide(operation, caller, viewing_tenant)


# ── System collections ────────────────────────────────────────

def tenants_decide(
    operation: Operation, caller: Caller | None
) -> Verdict:
    """Access to tenant rows themselves.

    Super-admins see and manage every tenant; members only read their own
    tenant row. The viewing-tenant override does not apply here.
    """
    if caller is None:
        return Deny("unauthenticated")
    if caller.is_global_privileged:
        return ALLOW
    if operation is Operation.READ and caller.home_tenant is not None:
        return ScopeToTenant(caller.home_tenant)
    return Deny("tenant management requires super-admin")


USERS = AccessPolicy(
    read=tenant_access,
    create=super_admin_only,
    update=tenant_access,
    delete=super_admin_only,
)
