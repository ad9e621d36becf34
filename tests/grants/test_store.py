"""
Unit-тесты GrantStore: вставка, чтение, очистка истёкших, конкурентная запись.
"""
import threading
import unittest
from datetime import datetime, timedelta, timezone

from storefront.grants.models import Grant
from storefront.grants.store import GrantStore

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def _grant(token: str, expires_at: datetime = NOW + timedelta(hours=1)) -> Grant:
    return Grant(
        token=token,
        identity="a@b.com",
        resource_set=frozenset({0, 1, 2, 3}),
        expires_at=expires_at,
    )


class TestGrantStore(unittest.TestCase):
    def test_get_unknown_returns_none(self):
        store = GrantStore()
        self.assertIsNone(store.get("missing"))

    def test_put_then_get(self):
        store = GrantStore()
        grant = _grant("t1")
        store.put("t1", grant)
        self.assertEqual(store.get("t1"), grant)
        self.assertIn("t1", store)
        self.assertEqual(len(store), 1)

    def test_put_last_write_wins(self):
        store = GrantStore()
        store.put("t1", _grant("t1"))
        replacement = _grant("t1", expires_at=NOW + timedelta(hours=5))
        store.put("t1", replacement)
        self.assertEqual(store.get("t1").expires_at, replacement.expires_at)
        self.assertEqual(len(store), 1)

    def test_get_does_not_check_expiry(self):
        """Истёкший grant остаётся в store; проверка — забота AccessGate."""
        store = GrantStore()
        expired = _grant("old", expires_at=NOW - timedelta(seconds=1))
        store.put("old", expired)
        self.assertEqual(store.get("old"), expired)

    def test_purge_expired_removes_only_expired(self):
        store = GrantStore()
        store.put("old", _grant("old", expires_at=NOW - timedelta(minutes=1)))
        store.put("edge", _grant("edge", expires_at=NOW))
        store.put("fresh", _grant("fresh", expires_at=NOW + timedelta(minutes=1)))

        removed = store.purge_expired(NOW)

        self.assertEqual(removed, 2)
        self.assertIsNone(store.get("old"))
        self.assertIsNone(store.get("edge"))
        self.assertIsNotNone(store.get("fresh"))

    def test_concurrent_puts_are_all_kept(self):
        store = GrantStore()

        def writer(prefix: str) -> None:
            for i in range(500):
                token = f"{prefix}-{i}"
                store.put(token, _grant(token))

        threads = [threading.Thread(target=writer, args=(f"w{n}",)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(store), 8 * 500)


class TestGrantModel(unittest.TestCase):
    def test_grant_is_frozen(self):
        grant = _grant("t1")
        with self.assertRaises(Exception):
            grant.identity = "other"

    def test_is_valid_boundary(self):
        grant = _grant("t1", expires_at=NOW)
        self.assertTrue(grant.is_valid(NOW - timedelta(microseconds=1)))
        self.assertFalse(grant.is_valid(NOW))
