"""
GrantStore — in-memory хранилище token -> Grant на время жизни процесса.

Один lock на весь словарь: все операции — вставка/чтение одного ключа.
Истечение не проверяется здесь, это делает AccessGate.
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime

from storefront.grants.models import Grant

logger = logging.getLogger(__name__)


class GrantStore:
    def __init__(self) -> None:
        self._grants: dict[str, Grant] = {}
        self._lock = threading.Lock()

    def put(self, token: str, grant: Grant) -> None:
        """Безусловная вставка (last write wins)."""
        with self._lock:
            self._grants[token] = grant

    def get(self, token: str) -> Grant | None:
        with self._lock:
            return self._grants.get(token)

    def purge_expired(self, now: datetime) -> int:
        """Удалить истёкшие grants. Возвращает количество удалённых."""
        with self._lock:
            expired = [t for t, g in self._grants.items() if not g.is_valid(now)]
            for token in expired:
                del self._grants[token]
        if expired:
            logger.info("grants_purged", extra={"count": len(expired)})
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._grants)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._grants
