"""Quest models"""
from enum import Enum
from typing import Any, Mapping, Optional
from datetime import datetime
from pydantic import BaseModel, Field, StrictInt
from pydantic import ValidationError as PydanticValidationError

from neuroquest.exceptions import ValidationError


class RecurringType(str, Enum):
    """How often a recurring quest is re-armed"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Quest(BaseModel):
    """
    A user task whose completion triggers the reward resolver.

    Reward fields are strict integers: booleans, strings and floats are
    rejected instead of coerced. Range checks (non-negative XP and currency,
    known attribute keys) are left to the reward resolver, which raises
    ValidationError at completion time.
    """
    id: str
    user_id: str
    title: str = ""
    description: str = ""
    xp_reward: StrictInt = 0
    currency_reward: StrictInt = 0
    attribute_rewards: dict[str, StrictInt] = Field(default_factory=dict)
    recurring: bool = False
    recurring_type: Optional[RecurringType] = None
    completed: bool = False
    completed_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Quest":
        """
        Build a quest from raw definition data

        Raises:
            ValidationError: if any field is missing or has the wrong type
        """
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise ValidationError(
                message=error["msg"],
                field=field,
                value=error.get("input"),
                cause=e,
            ) from e
