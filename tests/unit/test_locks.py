"""Unit tests for per-user locks"""
import asyncio
import gc

import pytest

from neuroquest.services.locks import UserLocks


def test_same_user_same_lock():
    """Test a user maps to one lock while it is referenced"""
    locks = UserLocks()
    lock = locks.get("user-1")

    assert locks.get("user-1") is lock
    assert locks.get("user-2") is not lock


@pytest.mark.asyncio
async def test_hold_serializes_one_user():
    """Test holders of the same user run one at a time"""
    locks = UserLocks()
    events = []

    async def worker(name):
        async with locks.hold("user-1"):
            events.append(f"{name}-start")
            await asyncio.sleep(0)
            events.append(f"{name}-end")

    await asyncio.gather(worker("a"), worker("b"))

    assert events == ["a-start", "a-end", "b-start", "b-end"]


@pytest.mark.asyncio
async def test_released_locks_are_evicted():
    """Test the registry does not grow with every user ever seen"""
    locks = UserLocks()

    for i in range(100):
        async with locks.hold(f"user-{i}"):
            assert len(locks) >= 1

    gc.collect()
    assert len(locks) == 0
