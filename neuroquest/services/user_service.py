"""
UserService - Profile Lifecycle

Creates the progression and attribute records a user starts with when
onboarding completes.
"""

import logging
from typing import Any, Dict, Optional

from neuroquest.db.store import GameStore
from neuroquest.exceptions import PersistenceConflictError
from neuroquest.models.attributes import Attributes
from neuroquest.models.progression import ProgressionState
from neuroquest.services.locks import UserLocks

logger = logging.getLogger(__name__)

STARTING_PROGRESSION = ProgressionState(level=1, experience=0, currency=100)
DEFAULT_ATTRIBUTES = Attributes(vitality=50, energy=60, focus=40, mood=55)


class UserService:
    """Service for user profile creation"""

    def __init__(self, store: GameStore, locks: Optional[UserLocks] = None):
        self.store = store
        self.locks = locks or UserLocks()

    async def create_profile(self, user_id: str) -> Dict[str, Any]:
        """
        Create a user's starting profile.

        Safe to call more than once, including concurrently; an existing
        profile is returned unchanged.

        Returns:
            {
                'user_id': str,
                'existing': bool,
                'progression': dict,
                'attributes': dict
            }
        """
        async with self.locks.hold(user_id):
            existing = await self.store.user_exists(user_id)

            if existing:
                logger.info(f"User {user_id} already has a profile")
                snapshot = await self.store.load_snapshot(user_id)
            else:
                try:
                    snapshot = await self.store.create_user(
                        user_id, STARTING_PROGRESSION, DEFAULT_ATTRIBUTES
                    )
                    logger.info(f"Created new profile for user {user_id}")
                except PersistenceConflictError:
                    # Created by a writer outside this process
                    logger.info(f"User {user_id} was created concurrently")
                    existing = True
                    snapshot = await self.store.load_snapshot(user_id)

        return {
            "user_id": user_id,
            "existing": existing,
            "progression": snapshot.progression.model_dump(),
            "attributes": snapshot.attributes.model_dump(),
        }
