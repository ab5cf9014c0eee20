"""
Service Container - Dependency Injection Container

Simple DI container for managing service instances and their dependencies.
Uses lazy loading to only instantiate services when first accessed. All
services share one set of per-user locks so that quest completion, drift
and purchases for the same user are serialized.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from neuroquest.db.store import GameStore
from neuroquest.gamification.rewards import RandomSource
from neuroquest.services.locks import UserLocks

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    Infrastructure dependencies (store, rng) are injected.
    """

    # Infrastructure dependencies (injected)
    store: GameStore
    rng: Optional[RandomSource] = None
    locks: UserLocks = field(default_factory=UserLocks)

    # Services (lazy-loaded via properties)
    _user_service: Optional[object] = field(default=None, init=False, repr=False)
    _quest_service: Optional[object] = field(default=None, init=False, repr=False)
    _drift_service: Optional[object] = field(default=None, init=False, repr=False)
    _store_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def user_service(self):
        """Get UserService instance (lazy-loaded)"""
        if self._user_service is None:
            from neuroquest.services.user_service import UserService
            self._user_service = UserService(self.store, locks=self.locks)
            logger.debug("UserService instantiated")
        return self._user_service

    @property
    def quest_service(self):
        """Get QuestService instance (lazy-loaded)"""
        if self._quest_service is None:
            from neuroquest.services.quest_service import QuestService
            self._quest_service = QuestService(self.store, locks=self.locks, rng=self.rng)
            logger.debug("QuestService instantiated")
        return self._quest_service

    @property
    def drift_service(self):
        """Get DriftService instance (lazy-loaded)"""
        if self._drift_service is None:
            from neuroquest.services.drift_service import DriftService
            self._drift_service = DriftService(self.store, locks=self.locks, rng=self.rng)
            logger.debug("DriftService instantiated")
        return self._drift_service

    @property
    def store_service(self):
        """Get StoreService instance (lazy-loaded)"""
        if self._store_service is None:
            from neuroquest.services.store_service import StoreService
            self._store_service = StoreService(self.store, locks=self.locks)
            logger.debug("StoreService instantiated")
        return self._store_service


def create_container(store: Optional[GameStore] = None, rng: Optional[RandomSource] = None) -> ServiceContainer:
    """Build a container, defaulting to the in-memory store"""
    if store is None:
        from neuroquest.db.store import InMemoryGameStore
        store = InMemoryGameStore()
    return ServiceContainer(store=store, rng=rng)
