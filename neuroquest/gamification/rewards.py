"""
Reward Resolver

Computes the deltas a quest completion grants: base XP and currency taken
verbatim from the quest, flat attribute deltas, and a variable-ratio bonus.

Variable-ratio bonus:
- Every resolution draws independently from the injected random source
- With probability BONUS_PROBABILITY (0.30) an extra currency amount is
  granted, uniform over the integers [BONUS_MIN, BONUS_MAX] ([5, 24])
- The draw never depends on quest identity or content
"""

from typing import Dict, NamedTuple, Optional, Protocol
import math
import random
import logging

from neuroquest.config import BONUS_MAX, BONUS_MIN, BONUS_PROBABILITY
from neuroquest.exceptions import ValidationError
from neuroquest.gamification.attributes import parse_attribute_name
from neuroquest.models.quest import Quest

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with a random() method returning a float in [0, 1)"""

    def random(self) -> float: ...


default_rng = random.Random()


class ResolvedReward(NamedTuple):
    xp: int
    currency: int
    attribute_deltas: Dict[str, int]
    bonus_currency: int


def roll_bonus(
    rng: Optional[RandomSource] = None,
    probability: float = BONUS_PROBABILITY,
    minimum: int = BONUS_MIN,
    maximum: int = BONUS_MAX,
) -> int:
    """
    Draw the variable-ratio bonus

    Returns:
        0 when the draw fails, otherwise an integer in [minimum, maximum]
    """
    rng = rng or default_rng

    if rng.random() >= probability:
        return 0

    span = maximum - minimum + 1
    return math.floor(rng.random() * span) + minimum


def validate_quest_rewards(quest: Quest) -> Dict[str, int]:
    """
    Check the reward declaration of a quest

    Returns:
        Attribute deltas keyed by canonical attribute name

    Raises:
        ValidationError: on negative or non-integer rewards, or unknown
            attribute keys
    """
    for field in ("xp_reward", "currency_reward"):
        value = getattr(quest, field)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(
                message=f"{field} must be an integer",
                field=field,
                value=value,
            )
        if value < 0:
            raise ValidationError(
                message=f"{field} must be non-negative",
                field=field,
                value=value,
            )

    deltas = {}
    for key, delta in quest.attribute_rewards.items():
        name = parse_attribute_name(key)
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError(
                message=f"Attribute reward for '{key}' must be an integer",
                field="attribute_rewards",
                value=delta,
            )
        deltas[name.value] = deltas.get(name.value, 0) + delta

    return deltas


def resolve_rewards(
    quest: Quest,
    rng: Optional[RandomSource] = None,
    bonus_probability: float = BONUS_PROBABILITY,
    bonus_min: int = BONUS_MIN,
    bonus_max: int = BONUS_MAX,
) -> ResolvedReward:
    """
    Compute the rewards granted for completing a quest

    Does not read or mutate any persisted state. Clamping of attribute
    deltas happens when they are applied to a user's attributes.

    Args:
        quest: Quest whose reward declaration is resolved
        rng: Random source for the bonus draw (module default if omitted)

    Returns:
        ResolvedReward(xp, currency, attribute_deltas, bonus_currency)

    Raises:
        ValidationError: if the quest's reward declaration is malformed
    """
    attribute_deltas = validate_quest_rewards(quest)
    bonus = roll_bonus(rng, bonus_probability, bonus_min, bonus_max)

    if bonus:
        logger.debug(f"Bonus reward triggered for quest {quest.id}: +{bonus} currency")

    return ResolvedReward(
        xp=quest.xp_reward,
        currency=quest.currency_reward,
        attribute_deltas=attribute_deltas,
        bonus_currency=bonus,
    )
