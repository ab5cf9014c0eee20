"""
Quest Completion Transaction (pure part)

Validates that a quest can be completed by a user, then chains the reward
resolver, the level ladder and the attribute clamps into a single result.
Inputs are never mutated; the caller persists the returned state as one
unit or not at all.
"""

from datetime import datetime, timezone
from typing import NamedTuple, Optional
import logging

from neuroquest.config import BONUS_MAX, BONUS_MIN, BONUS_PROBABILITY, LEVEL_UP_ATTRIBUTE_BONUS
from neuroquest.exceptions import AlreadyCompletedError, OwnershipError
from neuroquest.gamification.attributes import apply_deltas, apply_level_up_bonus, wasted_points
from neuroquest.gamification.rewards import RandomSource, resolve_rewards
from neuroquest.gamification.xp_system import apply_xp
from neuroquest.models.attributes import Attributes
from neuroquest.models.progression import ProgressionState, RewardOutcome
from neuroquest.models.quest import Quest

logger = logging.getLogger(__name__)


class QuestCompletion(NamedTuple):
    outcome: RewardOutcome
    progression: ProgressionState
    attributes: Attributes
    quest: Quest


def ensure_completable(user_id: str, quest: Quest) -> None:
    """
    Raise if `user_id` may not complete `quest`

    Raises:
        AlreadyCompletedError: quest is already in its terminal state
        OwnershipError: quest belongs to another user
    """
    if quest.user_id != user_id:
        raise OwnershipError(
            message=f"Quest {quest.id} does not belong to user {user_id}",
            quest_id=quest.id,
            user_id=user_id,
            operation="complete_quest",
        )

    if quest.completed:
        raise AlreadyCompletedError(
            message=f"Quest {quest.id} was already completed",
            quest_id=quest.id,
            user_id=user_id,
            operation="complete_quest",
        )


def complete_quest(
    user_id: str,
    quest: Quest,
    progression: ProgressionState,
    attributes: Attributes,
    rng: Optional[RandomSource] = None,
    now: Optional[datetime] = None,
    level_up_attribute_bonus: int = LEVEL_UP_ATTRIBUTE_BONUS,
    bonus_probability: float = BONUS_PROBABILITY,
    bonus_min: int = BONUS_MIN,
    bonus_max: int = BONUS_MAX,
) -> QuestCompletion:
    """
    Compute the full effect of `user_id` completing `quest`

    Steps:
    1. Reject already-completed or foreign quests
    2. Resolve rewards (XP, currency, attribute deltas, bonus)
    3. Fold XP into level/experience
    4. Apply clamped attribute deltas (plus the optional level-up bonus)
    5. Mark the quest completed at `now`

    Returns:
        QuestCompletion(outcome, progression, attributes, quest) describing
        the state to persist
    """
    ensure_completable(user_id, quest)

    reward = resolve_rewards(
        quest,
        rng,
        bonus_probability=bonus_probability,
        bonus_min=bonus_min,
        bonus_max=bonus_max,
    )
    level_result = apply_xp(progression, reward.xp)

    new_attributes = apply_deltas(attributes, reward.attribute_deltas)
    new_attributes = apply_level_up_bonus(
        new_attributes, level_result.levels_gained, level_up_attribute_bonus
    )

    new_currency = progression.currency + reward.currency + reward.bonus_currency
    new_progression = ProgressionState(
        level=level_result.level,
        experience=level_result.experience,
        currency=new_currency,
    )

    completed_quest = quest.model_copy(update={
        "completed": True,
        "completed_at": now or datetime.now(timezone.utc),
    })

    outcome = RewardOutcome(
        quest_id=quest.id,
        xp_granted=reward.xp,
        currency_granted=reward.currency,
        attribute_deltas=reward.attribute_deltas,
        bonus_currency=reward.bonus_currency,
        leveled_up=level_result.leveled_up,
        levels_gained=level_result.levels_gained,
        new_level=level_result.level,
        new_experience=level_result.experience,
        new_currency=new_currency,
        attributes=new_attributes,
        wasted_attribute_points=wasted_points(attributes, reward.attribute_deltas),
    )

    return QuestCompletion(
        outcome=outcome,
        progression=new_progression,
        attributes=new_attributes,
        quest=completed_quest,
    )
