"""Global test fixtures and utilities for neuroquest tests"""
import pytest
from datetime import datetime, timezone

from neuroquest.db.store import InMemoryGameStore
from neuroquest.models.attributes import Attributes
from neuroquest.models.progression import ProgressionState
from neuroquest.models.quest import Quest
from neuroquest.models.store import StoreItem


class ScriptedRandom:
    """Random source that replays fixed values, then repeats the last one"""

    def __init__(self, *values: float):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        index = min(self.calls, len(self.values) - 1)
        self.calls += 1
        return self.values[index]


# ============================================================================
# Random Source Fixtures
# ============================================================================

@pytest.fixture
def no_bonus_rng():
    """Random source whose bonus draw always fails"""
    return ScriptedRandom(0.99)


@pytest.fixture
def bonus_rng():
    """Random source triggering the bonus with the maximum amount (24)"""
    return ScriptedRandom(0.1, 0.999)


# ============================================================================
# User & State Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "user-123"


@pytest.fixture
def fixed_now():
    """Deterministic completion timestamp"""
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def default_attributes():
    """Starting attribute profile"""
    return Attributes(vitality=50, energy=60, focus=40, mood=55)


@pytest.fixture
def starting_progression():
    """Progression right after onboarding"""
    return ProgressionState(level=1, experience=0, currency=100)


@pytest.fixture
def quest_factory(test_user_id):
    """Factory for creating quests"""
    def _create(quest_id="quest-1", **kwargs):
        kwargs.setdefault("user_id", test_user_id)
        kwargs.setdefault("title", "Morning walk")
        return Quest(id=quest_id, **kwargs)

    return _create


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
async def game_store(test_user_id):
    """In-memory store with one onboarded user"""
    store = InMemoryGameStore()
    await store.create_user(
        test_user_id,
        ProgressionState(level=1, experience=0, currency=100),
        Attributes(vitality=50, energy=60, focus=40, mood=55),
    )
    await store.add_item(StoreItem(id="potion", name="Focus Potion", price=40))
    return store


@pytest.fixture
def scripted_rng():
    """Factory for random sources replaying fixed values"""
    return ScriptedRandom
