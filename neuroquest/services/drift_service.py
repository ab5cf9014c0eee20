"""
DriftService - Passive Attribute Drift Scheduler

Applies periodic, quest-independent attribute drift from health readings.
Each tick only writes attributes; progression (XP, level, currency) is never
touched. Ticks share per-user locks with quest completion so neither
overwrites the other's changes.
"""

import asyncio
import logging
from typing import Callable, Iterable, Optional

from neuroquest.config import DRIFT_INTERVAL_SECONDS, MAX_COMMIT_RETRIES, RETRY_BASE_DELAY
from neuroquest.db.store import GameStore
from neuroquest.exceptions import PersistenceConflictError
from neuroquest.gamification.drift import DriftResult, compute_drift, sample_health_reading
from neuroquest.gamification.rewards import RandomSource
from neuroquest.models.health import HealthReading
from neuroquest.monitoring import record_conflict, record_drift_tick
from neuroquest.resilience.retry import retry_with_backoff
from neuroquest.services.locks import UserLocks

logger = logging.getLogger(__name__)


class DriftService:
    """Service applying passive drift ticks"""

    def __init__(
        self,
        store: GameStore,
        locks: Optional[UserLocks] = None,
        rng: Optional[RandomSource] = None,
        reading_source: Optional[Callable[[str], HealthReading]] = None,
        max_retries: int = MAX_COMMIT_RETRIES,
        retry_base_delay: float = RETRY_BASE_DELAY,
    ):
        """
        Initialize DriftService.

        Args:
            store: Persistence collaborator
            locks: Per-user locks shared with QuestService
            rng: Random source for synthetic readings
            reading_source: Returns the health reading for a user; synthetic
                readings are sampled when omitted
        """
        self.store = store
        self.locks = locks or UserLocks()
        self.rng = rng
        self.reading_source = reading_source
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def _reading_for(self, user_id: str) -> HealthReading:
        if self.reading_source:
            return self.reading_source(user_id)
        return sample_health_reading(self.rng)

    async def apply_tick(self, user_id: str, reading: Optional[HealthReading] = None) -> DriftResult:
        """
        Apply one drift tick to a user's attributes.

        Args:
            user_id: User whose attributes drift
            reading: Health reading for this tick (sampled if omitted)

        Returns:
            DriftResult with the stored attributes and the requested deltas
        """
        reading = reading or self._reading_for(user_id)

        async with self.locks.hold(user_id):
            result = await retry_with_backoff(
                self._attempt_tick,
                user_id,
                reading,
                max_retries=self.max_retries,
                base_delay=self.retry_base_delay,
            )

        logger.debug(f"Drift tick for user {user_id}: {result.deltas}")
        return result

    async def _attempt_tick(self, user_id: str, reading: HealthReading) -> DriftResult:
        snapshot = await self.store.load_snapshot(user_id)
        result = compute_drift(snapshot.attributes, reading)

        try:
            await self.store.save_attributes(
                user_id, result.attributes, expected_version=snapshot.version
            )
        except PersistenceConflictError:
            record_conflict("drift_tick")
            raise

        return result

    async def run(
        self,
        user_ids: Callable[[], Iterable[str]],
        interval: float = DRIFT_INTERVAL_SECONDS,
        stop_event: Optional[asyncio.Event] = None,
    ) -> None:
        """
        Apply a drift tick to every user once per `interval` seconds.

        Runs until `stop_event` is set. A failing user is logged and skipped;
        the loop keeps going for everyone else.

        Args:
            user_ids: Returns the users to tick on each round
            interval: Seconds between rounds
            stop_event: Set to stop the loop
        """
        stop_event = stop_event or asyncio.Event()
        logger.info(f"Passive drift loop started (interval={interval}s)")

        while not stop_event.is_set():
            for user_id in list(user_ids()):
                try:
                    await self.apply_tick(user_id)
                    record_drift_tick(success=True)
                except Exception as e:
                    record_drift_tick(success=False)
                    logger.error(f"Drift tick failed for user {user_id}: {e}", exc_info=True)

            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass

        logger.info("Passive drift loop stopped")
