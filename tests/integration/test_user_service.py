"""Integration tests for profile creation and the service container"""
import asyncio

import pytest

from neuroquest.db.store import InMemoryGameStore
from neuroquest.models.attributes import Attributes
from neuroquest.models.progression import ProgressionState
from neuroquest.services import create_container
from neuroquest.services.user_service import UserService


@pytest.mark.asyncio
async def test_create_profile_defaults():
    """Test a new profile starts at level 1 with default attributes"""
    service = UserService(InMemoryGameStore())

    profile = await service.create_profile("new-user")

    assert profile["existing"] is False
    assert profile["progression"] == {"level": 1, "experience": 0, "currency": 100}
    assert profile["attributes"] == {"vitality": 50, "energy": 60, "focus": 40, "mood": 55}


@pytest.mark.asyncio
async def test_create_profile_is_idempotent(game_store, test_user_id, quest_factory):
    """Test creating an existing profile returns it unchanged"""
    await game_store.add_quest(quest_factory(xp_reward=40))
    container = create_container(store=game_store)
    await container.quest_service.complete_quest(test_user_id, "quest-1")

    profile = await container.user_service.create_profile(test_user_id)

    assert profile["existing"] is True
    assert profile["progression"]["experience"] == 40
    assert (await game_store.load_snapshot(test_user_id)).version == 2


def test_container_shares_locks():
    """Test services built by the container share one lock registry"""
    container = create_container()

    assert isinstance(container.store, InMemoryGameStore)
    assert container.quest_service.locks is container.locks
    assert container.drift_service.locks is container.locks
    assert container.store_service.locks is container.locks
    assert container.quest_service is container.quest_service


class SlowGameStore(InMemoryGameStore):
    """Store that yields to the event loop between the existence check and the answer"""

    async def user_exists(self, user_id: str) -> bool:
        exists = await super().user_exists(user_id)
        await asyncio.sleep(0)
        return exists


class StaleExistenceGameStore(InMemoryGameStore):
    """Store whose existence check never sees users created elsewhere"""

    async def user_exists(self, user_id: str) -> bool:
        return False


@pytest.mark.asyncio
async def test_concurrent_create_profile_creates_once():
    """Test racing onboardings of one user yield a single profile"""
    service = UserService(SlowGameStore())

    results = await asyncio.gather(
        service.create_profile("u"),
        service.create_profile("u"),
        return_exceptions=True,
    )

    assert not any(isinstance(r, Exception) for r in results)
    assert sorted(r["existing"] for r in results) == [False, True]
    assert (await service.store.load_snapshot("u")).version == 1


@pytest.mark.asyncio
async def test_create_profile_conflict_returns_existing():
    """Test a profile created outside the lock is returned, not an error"""
    store = StaleExistenceGameStore()
    await store.create_user("u", ProgressionState(currency=7), Attributes())
    service = UserService(store)

    profile = await service.create_profile("u")

    assert profile["existing"] is True
    assert profile["progression"]["currency"] == 7


def test_container_user_service_shares_locks():
    """Test profile creation uses the container's lock registry"""
    container = create_container()

    assert container.user_service.locks is container.locks
