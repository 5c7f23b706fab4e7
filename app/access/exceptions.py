"""Authorization and tenancy errors raised by the access layer.

The HTTP translation lives in ``app.main``; these carry no status codes.
"""

import uuid

DENIED_MESSAGE = "You are not allowed to perform this action"


class AccessError(Exception):
    """Base class for access-layer failures."""


class Unauthenticated(AccessError):
    """No caller was present where one is required."""

    def __init__(self, detail: str = "Not authenticated") -> None:
        self.detail = detail
        super().__init__(detail)


class Denied(AccessError):
    """An access decision evaluated to Deny.

    ``reason`` is for server-side logs only; clients always receive
    ``DENIED_MESSAGE`` so the failing check is not revealed.
    """

    def __init__(self, reason: str = "denied") -> None:
        self.reason = reason
        super().__init__(DENIED_MESSAGE)


class DuplicateSingleton(AccessError):
    """An authorized create conflicts with a one-per-tenant collection."""

    def __init__(
        self,
        collection: str,
        tenant_id: uuid.UUID,
        existing_id: uuid.UUID | None = None,
    ) -> None:
        self.collection = collection
        self.tenant_id = tenant_id
        self.existing_id = existing_id
        super().__init__(
            f"A {collection} record already exists for this tenant. "
            "Please edit the existing record instead."
        )


class MissingTenant(AccessError):
    """A tenant-scoped record reached persistence without a tenant."""

    def __init__(self) -> None:
        super().__init__("Tenant is required")


class UnknownTenant(AccessError):
    """An explicit tenant assignment names no existing tenant."""

    def __init__(self, tenant_id: uuid.UUID) -> None:
        self.tenant_id = tenant_id
        super().__init__(f"Tenant {tenant_id} does not exist")
