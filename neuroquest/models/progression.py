"""Progression and reward outcome models"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from neuroquest.models.attributes import Attributes


class ProgressionState(BaseModel):
    """Level, in-level experience and currency of a user"""
    model_config = ConfigDict(frozen=True)

    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    currency: int = Field(default=100, ge=0)


class RewardOutcome(BaseModel):
    """
    Transient summary of one quest completion.

    Never stored as its own entity. Callers persist the state it describes
    and hand it to the presentation layer.
    """
    quest_id: Optional[str] = None
    xp_granted: int
    currency_granted: int
    attribute_deltas: dict[str, int] = Field(default_factory=dict)
    bonus_currency: int = 0
    leveled_up: bool = False
    levels_gained: int = 0
    new_level: int
    new_experience: int
    new_currency: int
    attributes: Attributes
    wasted_attribute_points: dict[str, int] = Field(default_factory=dict)

    @property
    def bonus_triggered(self) -> bool:
        return self.bonus_currency > 0

    @property
    def total_currency(self) -> int:
        return self.currency_granted + self.bonus_currency
