"""Tests for database retry, write-lock and timestamp helpers."""
import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.utils.db_utils import retry_on_lock
from app.utils.dates import utcnow
from app.utils.locks import KeyedLock


def _locked_error():
    return OperationalError("COMMIT", {}, Exception("database is locked"))


class TestRetryOnLock:

    def test_retries_transient_errors(self):
        calls = []

        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise _locked_error()
            return "ok"

        assert asyncio.run(retry_on_lock(flaky, base_delay=0)) == "ok"
        assert len(calls) == 3

    def test_gives_up_after_max_retries(self):
        async def always_locked():
            raise _locked_error()

        with pytest.raises(OperationalError):
            asyncio.run(retry_on_lock(always_locked, max_retries=2, base_delay=0))

    def test_other_errors_are_not_retried(self):
        calls = []

        async def broken():
            calls.append(1)
            raise OperationalError("SELECT", {}, Exception("no such table: alerts"))

        with pytest.raises(OperationalError):
            asyncio.run(retry_on_lock(broken, base_delay=0))
        assert len(calls) == 1


class TestKeyedLock:

    def test_same_key_is_serialized(self):
        locks = KeyedLock()
        events = []

        async def writer(name):
            async with locks.hold("categories"):
                events.append(f"{name}-start")
                await asyncio.sleep(0.01)
                events.append(f"{name}-end")

        async def main():
            await asyncio.gather(writer("a"), writer("b"))

        asyncio.run(main())
        assert events == ["a-start", "a-end", "b-start", "b-end"]

    def test_different_keys_do_not_block(self):
        locks = KeyedLock()
        events = []

        async def writer(key):
            async with locks.hold(key):
                events.append(f"{key}-start")
                await asyncio.sleep(0.01)
                events.append(f"{key}-end")

        async def main():
            await asyncio.gather(writer("monitor:a"), writer("monitor:b"))

        asyncio.run(main())
        assert events[:2] == ["monitor:a-start", "monitor:b-start"]

    def test_lock_is_dropped_once_released(self):
        locks = KeyedLock()
        sizes = []

        async def main():
            async with locks.hold("monitor:a"):
                sizes.append(len(locks))
            sizes.append(len(locks))

        asyncio.run(main())
        assert sizes == [1, 0]

    def test_lock_survives_while_others_wait(self):
        locks = KeyedLock()
        sizes = []

        async def writer():
            async with locks.hold("categories"):
                await asyncio.sleep(0.01)
                sizes.append(len(locks))

        async def main():
            await asyncio.gather(writer(), writer(), writer())

        asyncio.run(main())
        assert sizes == [1, 1, 1]
        assert len(locks) == 0

    def test_released_on_error(self):
        locks = KeyedLock()

        async def main():
            with pytest.raises(RuntimeError):
                async with locks.hold("monitor:a"):
                    raise RuntimeError("write failed")

        asyncio.run(main())
        assert len(locks) == 0


class TestUtcNow:

    def test_is_naive_utc(self):
        now = utcnow()
        assert now.tzinfo is None
        assert abs(now - datetime.now(timezone.utc).replace(tzinfo=None)) < timedelta(seconds=5)
