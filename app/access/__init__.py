"""Tenant-isolation access control.

``decide`` turns (operation, caller, viewing tenant) into a verdict;
``apply_verdict`` ANDs it into a SQL statement; ``assign_tenant`` stamps
new records before they are persisted.
"""

from app.access.assignment import assign_tenant, navigation_name
from app.access.caller import Caller
from app.access.context import (
    extract_tenant_from_host,
    resolve_site_tenant,
    resolve_viewing_tenant,
)
from app.access.exceptions import (
    Denied,
    DuplicateSingleton,
    MissingTenant,
    Unauthenticated,
    UnknownTenant,
)
from app.access.policies import AccessPolicy, Operation, decide
from app.access.verdict import ALLOW, Allow, Deny, ScopeToTenant, Verdict, apply_verdict

__all__ = [
    "ALLOW",
    "AccessPolicy",
    "Allow",
    "Caller",
    "Deny",
    "Denied",
    "DuplicateSingleton",
    "MissingTenant",
    "Operation",
    "ScopeToTenant",
    "Unauthenticated",
    "UnknownTenant",
    "Verdict",
    "apply_verdict",
    "assign_tenant",
    "decide",
    "extract_tenant_from_host",
    "navigation_name",
    "resolve_site_tenant",
    "resolve_viewing_tenant",
]
