"""
AccessGate: authorize(token, resource_index) -> ProtectedResource.
Отказ — Unauthorized: токена нет в store или grant истёк.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from storefront.grants.issuer import utcnow
from storefront.grants.models import ProtectedResource
from storefront.grants.resource import get_resource
from storefront.grants.store import GrantStore

logger = logging.getLogger(__name__)


class Unauthorized(Exception):
    """Токен неизвестен, истёк или не покрывает запрошенный файл."""


class AccessGate:
    def __init__(
        self,
        store: GrantStore,
        clock: Callable[[], datetime] = utcnow,
        *,
        enforce_resource_set: bool = False,
    ) -> None:
        self.store = store
        self.clock = clock
        # По умолчанию resource_set только информативный: любой индекс отдаёт тот же файл.
        self.enforce_resource_set = enforce_resource_set

    def authorize(self, token: str | None, resource_index: int = 0) -> ProtectedResource:
        if not token:
            raise Unauthorized("missing token")

        grant = self.store.get(token)
        if grant is None:
            raise Unauthorized("unknown token")
        if not grant.is_valid(self.clock()):
            raise Unauthorized("token expired")
        if self.enforce_resource_set and resource_index not in grant.resource_set:
            raise Unauthorized(f"resource {resource_index} not granted")

        return get_resource(resource_index)
