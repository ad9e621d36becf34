"""
Выдача и проверка доступа к платному файлу (внутренняя библиотека).
Выдача (GrantIssuer) и проверка (AccessGate) разделены; общее состояние — GrantStore.
"""
from storefront.grants.gate import AccessGate, Unauthorized
from storefront.grants.issuer import (
    BUYER_IDENTITY,
    DEFAULT_RESOURCE_SET,
    DEMO_IDENTITY,
    GRANT_TTL,
    GrantIssuer,
)
from storefront.grants.models import Grant, ProtectedResource
from storefront.grants.resource import DEMO_PDF
from storefront.grants.store import GrantStore

__all__ = [
    "AccessGate",
    "BUYER_IDENTITY",
    "DEFAULT_RESOURCE_SET",
    "DEMO_IDENTITY",
    "DEMO_PDF",
    "GRANT_TTL",
    "Grant",
    "GrantIssuer",
    "GrantStore",
    "ProtectedResource",
    "Unauthorized",
]
