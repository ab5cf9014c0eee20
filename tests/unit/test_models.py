"""Unit tests for Pydantic models"""
import pytest
from pydantic import ValidationError

from neuroquest.exceptions import ValidationError as NeuroQuestValidationError
from neuroquest.models import (
    AttributeName,
    Attributes,
    HealthReading,
    ProgressionState,
    Quest,
    RecurringType,
    RewardOutcome,
    StoreItem,
)


def test_progression_defaults():
    """Test ProgressionState starts at level 1 with 100 currency"""
    state = ProgressionState()

    assert state.level == 1
    assert state.experience == 0
    assert state.currency == 100


@pytest.mark.parametrize("field,value", [("level", 0), ("experience", -1), ("currency", -5)])
def test_progression_bounds(field, value):
    """Test ProgressionState rejects out-of-range values"""
    with pytest.raises(ValidationError):
        ProgressionState(**{field: value})


def test_progression_is_immutable():
    """Test state records cannot be mutated in place"""
    state = ProgressionState()
    with pytest.raises(ValidationError):
        state.level = 5


def test_attributes_get():
    """Test attribute lookup by enum or name"""
    attributes = Attributes(focus=77)

    assert attributes.get(AttributeName.FOCUS) == 77
    assert attributes.get("focus") == 77


def test_quest_creation():
    """Test creating a recurring Quest"""
    quest = Quest(
        id="q-1",
        user_id="user-1",
        title="Meditate",
        xp_reward=30,
        currency_reward=10,
        attribute_rewards={"mood": 4},
        recurring=True,
        recurring_type="daily",
    )

    assert quest.recurring_type == RecurringType.DAILY
    assert quest.completed is False
    assert quest.completed_at is None


def test_health_reading_validation():
    """Test HealthReading rejects impossible values"""
    with pytest.raises(ValidationError):
        HealthReading(steps=-1, heart_rate=70, sleep_hours=8, focus_minutes=10)
    with pytest.raises(ValidationError):
        HealthReading(steps=10, heart_rate=70, sleep_hours=25, focus_minutes=10)


def test_reward_outcome_totals():
    """Test RewardOutcome convenience properties"""
    outcome = RewardOutcome(
        xp_granted=20,
        currency_granted=15,
        bonus_currency=7,
        new_level=2,
        new_experience=10,
        new_currency=122,
        attributes=Attributes(),
    )

    assert outcome.bonus_triggered is True
    assert outcome.total_currency == 22


def test_store_item_price_non_negative():
    """Test StoreItem prices cannot be negative"""
    with pytest.raises(ValidationError):
        StoreItem(id="x", name="Broken", price=-1)


@pytest.mark.parametrize("rewards", [
    {"xp_reward": True},
    {"xp_reward": "20"},
    {"currency_reward": 15.0},
    {"attribute_rewards": {"focus": True}},
    {"attribute_rewards": {"focus": "3"}},
])
def test_quest_rewards_are_not_coerced(rewards):
    """Test booleans, strings and floats are rejected as reward values"""
    with pytest.raises(ValidationError):
        Quest(id="q-1", user_id="user-1", **rewards)


def test_quest_from_dict():
    """Test building a quest from raw definition data"""
    quest = Quest.from_dict({
        "id": "q-1",
        "user_id": "user-1",
        "xp_reward": 20,
        "attribute_rewards": {"focus": 3},
    })

    assert quest.xp_reward == 20
    assert quest.attribute_rewards == {"focus": 3}


@pytest.mark.parametrize("rewards,field", [
    ({"xp_reward": True}, "xp_reward"),
    ({"currency_reward": "15"}, "currency_reward"),
    ({"attribute_rewards": {"focus": True}}, "attribute_rewards.focus"),
])
def test_quest_from_dict_rejects_malformed_rewards(rewards, field):
    """Test malformed definitions raise the package ValidationError"""
    with pytest.raises(NeuroQuestValidationError) as exc_info:
        Quest.from_dict({"id": "q-1", "user_id": "user-1", **rewards})

    assert exc_info.value.field == field
