"""Attribute models"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

ATTRIBUTE_MIN = 1
ATTRIBUTE_MAX = 100


class AttributeName(str, Enum):
    """The four bounded well-being stats"""
    VITALITY = "vitality"  # physical health
    ENERGY = "energy"  # sleep and nutrition
    FOCUS = "focus"  # productivity
    MOOD = "mood"  # emotional state


class Attributes(BaseModel):
    """A user's attribute record, every value within [1, 100]"""
    model_config = ConfigDict(frozen=True)

    vitality: int = Field(default=50, ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)
    energy: int = Field(default=60, ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)
    focus: int = Field(default=40, ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)
    mood: int = Field(default=55, ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)

    def get(self, attr: AttributeName) -> int:
        return getattr(self, AttributeName(attr).value)
