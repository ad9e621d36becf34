"""
GrantIssuer: issue(identity, resource_set) -> token.
Все три сценария покупки (demo, verify-session, webhook) сходятся сюда.
"""
from __future__ import annotations

import logging
import secrets
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone

from storefront.grants.models import Grant
from storefront.grants.store import GrantStore
from storefront.utils.metrics import grants_issued_total

logger = logging.getLogger(__name__)

GRANT_TTL = timedelta(hours=24)
TOKEN_BYTES = 32  # 64 hex-символа
DEFAULT_RESOURCE_SET = frozenset({0, 1, 2, 3})

DEMO_IDENTITY = "demo@example.com"
BUYER_IDENTITY = "buyer"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GrantIssuer:
    def __init__(
        self,
        store: GrantStore,
        clock: Callable[[], datetime] = utcnow,
        *,
        purge_expired_on_issue: bool = False,
    ) -> None:
        self.store = store
        self.clock = clock
        self.purge_expired_on_issue = purge_expired_on_issue

    def issue(
        self,
        identity: str | None = None,
        resource_set: Iterable[int] | None = None,
        *,
        fallback_identity: str = BUYER_IDENTITY,
        source: str = "unknown",
    ) -> str:
        """
        Создаёт grant на GRANT_TTL и кладёт его в store.
        Токен — secrets.token_hex (CSPRNG); ошибка источника случайности не перехватывается.
        """
        identity = (identity or "").strip() or fallback_identity
        resources = frozenset(resource_set) if resource_set is not None else DEFAULT_RESOURCE_SET
        now = self.clock()

        if self.purge_expired_on_issue:
            self.store.purge_expired(now)

        token = secrets.token_hex(TOKEN_BYTES)
        grant = Grant(
            token=token,
            identity=identity,
            resource_set=resources,
            expires_at=now + GRANT_TTL,
        )
        self.store.put(token, grant)

        grants_issued_total.labels(source=source).inc()
        logger.info("grant_issued", extra={"identity": identity, "source": source})
        return token
