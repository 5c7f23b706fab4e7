"""Request-context extraction: viewing-tenant override and site tenant.

Pure functions over a header mapping; nothing here touches the database
or checks that a tenant exists.
"""

import ipaddress
from collections.abc import Mapping

VIEWING_TENANT_HEADER = "x-viewing-tenant"
SITE_TENANT_HEADER = "x-tenant-id"


def _header(headers: Mapping[str, str], name: str) -> str | None:
    # Starlette's Headers are case-insensitive already; plain dicts are not
    value = headers.get(name)
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == name:
                value = candidate
                break
    if value is None or not value.strip():
        return None
    return value


def resolve_viewing_tenant(headers: Mapping[str, str]) -> str | None:
    """Return the override header verbatim, or None when absent or blank."""
    return _header(headers, VIEWING_TENANT_HEADER)


def extract_tenant_from_host(host: str) -> str | None:
    """First label of ``host``: ``tenant1.example.com:8000`` -> ``tenant1``.

    Localhost, IP literals and single-label hosts carry no tenant.
    """
    hostname = host.split(":")[0].strip().lower()
    if not hostname or hostname == "localhost":
        return None
    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        pass
    else:
        return None

    labels = hostname.split(".")
    if len(labels) < 2 or not labels[0]:
        return None
    return labels[0]


def resolve_site_tenant(headers: Mapping[str, str]) -> str | None:
    """Domain of the site a request originates from.

    An explicit ``x-tenant-id`` header (API clients, upstream routers) wins
    over the ``host`` subdomain.
    """
    explicit = _header(headers, SITE_TENANT_HEADER)
    if explicit is not None:
        return explicit.strip()
    host = _header(headers, "host")
    if host is None:
        return None
    return extract_tenant_from_host(host)
