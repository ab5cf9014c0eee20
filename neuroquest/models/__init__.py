"""Pydantic models for the progression engine"""
from neuroquest.models.attributes import AttributeName, Attributes
from neuroquest.models.progression import ProgressionState, RewardOutcome
from neuroquest.models.quest import Quest, RecurringType
from neuroquest.models.health import HealthReading
from neuroquest.models.store import StoreItem

__all__ = [
    "AttributeName",
    "Attributes",
    "ProgressionState",
    "RewardOutcome",
    "Quest",
    "RecurringType",
    "HealthReading",
    "StoreItem",
]
