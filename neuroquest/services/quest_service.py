"""
QuestService - Quest Completion Orchestration

Runs the quest completion transaction against a persistence collaborator.
Business rules live in neuroquest.gamification; this service owns the
read-compute-commit cycle and its concurrency discipline.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from neuroquest.config import LEVEL_UP_ATTRIBUTE_BONUS, MAX_COMMIT_RETRIES, RETRY_BASE_DELAY
from neuroquest.db.store import GameStore
from neuroquest.exceptions import PersistenceConflictError
from neuroquest.gamification.quest_completion import complete_quest
from neuroquest.gamification.rewards import RandomSource
from neuroquest.gamification.xp_system import calculate_level_progress
from neuroquest.models.progression import RewardOutcome
from neuroquest.models.quest import Quest
from neuroquest.monitoring import record_conflict, record_reward, track_quest_completion
from neuroquest.resilience.retry import retry_with_backoff
from neuroquest.services.locks import UserLocks

logger = logging.getLogger(__name__)


class QuestService:
    """
    Service for quest completion.

    Responsibilities:
    - Load the authoritative snapshot (progression, attributes, quest)
    - Run the pure completion transaction
    - Commit every state change in one conditional write
    - Recompute from fresh state when the write conflicts
    """

    def __init__(
        self,
        store: GameStore,
        locks: Optional[UserLocks] = None,
        rng: Optional[RandomSource] = None,
        clock: Optional[Callable[[], datetime]] = None,
        level_up_attribute_bonus: int = LEVEL_UP_ATTRIBUTE_BONUS,
        max_retries: int = MAX_COMMIT_RETRIES,
        retry_base_delay: float = RETRY_BASE_DELAY,
    ):
        """
        Initialize QuestService.

        Args:
            store: Persistence collaborator
            locks: Per-user locks shared with other services writing the same users
            rng: Random source for the bonus reward draw
            clock: Returns the completion timestamp (UTC now if omitted)
        """
        self.store = store
        self.locks = locks or UserLocks()
        self.rng = rng
        self.clock = clock
        self.level_up_attribute_bonus = level_up_attribute_bonus
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        logger.debug("QuestService initialized")

    async def complete_quest(self, user_id: str, quest_id: str) -> RewardOutcome:
        """
        Complete a quest for a user and persist the rewards.

        Args:
            user_id: User completing the quest
            quest_id: Quest being completed

        Returns:
            RewardOutcome for the presentation layer

        Raises:
            AlreadyCompletedError: quest was completed before
            OwnershipError: quest belongs to another user
            ValidationError: quest reward declaration is malformed
            PersistenceConflictError: conflicts persisted past all retries
            RecordNotFoundError: unknown user or quest
        """
        with track_quest_completion():
            async with self.locks.hold(user_id):
                outcome = await retry_with_backoff(
                    self._attempt_completion,
                    user_id,
                    quest_id,
                    max_retries=self.max_retries,
                    base_delay=self.retry_base_delay,
                )

        record_reward(outcome.bonus_currency, outcome.levels_gained)

        logger.info(
            f"Quest {quest_id} completed by user {user_id}: "
            f"xp={outcome.xp_granted}, currency={outcome.currency_granted}, "
            f"bonus={outcome.bonus_currency}, level={outcome.new_level}"
        )

        if outcome.leveled_up:
            logger.info(f"User {user_id} reached level {outcome.new_level}!")

        return outcome

    async def _attempt_completion(self, user_id: str, quest_id: str) -> RewardOutcome:
        """One read-compute-commit cycle; re-reads state on every call"""
        snapshot = await self.store.load_snapshot(user_id)
        quest = await self.store.load_quest(quest_id)

        completion = complete_quest(
            user_id,
            quest,
            snapshot.progression,
            snapshot.attributes,
            rng=self.rng,
            now=self.clock() if self.clock else None,
            level_up_attribute_bonus=self.level_up_attribute_bonus,
        )

        try:
            await self.store.commit(
                user_id,
                expected_version=snapshot.version,
                progression=completion.progression,
                attributes=completion.attributes,
                quests=[completion.quest],
            )
        except PersistenceConflictError:
            record_conflict("complete_quest")
            logger.warning(
                f"Conflict committing quest {quest_id} for user {user_id}; "
                f"discarding computed outcome"
            )
            raise

        return completion.outcome

    async def get_progress(self, user_id: str) -> Dict[str, Any]:
        """
        Current progression of a user, for display.

        Returns:
            {
                'user_id': str,
                'current_level': int,
                'xp_in_current_level': int,
                'xp_for_next_level': int,
                'xp_to_next_level': int,
                'total_xp': int,
                'progress_percent': int,
                'currency': int,
                'attributes': dict
            }
        """
        snapshot = await self.store.load_snapshot(user_id)
        progress = calculate_level_progress(
            snapshot.progression.level, snapshot.progression.experience
        )

        return {
            "user_id": user_id,
            **progress,
            "currency": snapshot.progression.currency,
            "attributes": snapshot.attributes.model_dump(),
        }

    async def list_quests(self, user_id: str, completed: Optional[bool] = None) -> List[Quest]:
        """Quests of a user, optionally only active or only completed ones"""
        return await self.store.list_quests(user_id, completed=completed)
