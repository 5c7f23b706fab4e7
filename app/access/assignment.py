"""Creation-time tenant stamping and tenant-derived naming."""

from typing import Any

from app.access.caller import Caller
from app.access.policies import Operation


def assign_tenant(
    caller: Caller | None, operation: Operation, data: dict[str, Any]
) -> dict[str, Any]:
    """Stamp a new record with the creator's home tenant.

    An explicit ``tenant_id`` is kept as-is; this is how a super-admin
    places a record in any tenant. Super-admins who give none, and callers
    without a home tenant, are left unset for validation to reject.
    Applying this twice gives the same result as applying it once.
    """
    if operation is not Operation.CREATE or data.get("tenant_id") is not None:
        return data
    if caller is None or caller.is_global_privileged or caller.tenant_id is None:
        return data
    return {**data, "tenant_id": caller.tenant_id}


def navigation_name(tenant_name: str) -> str:
    return f"Navigation - {tenant_name}"
