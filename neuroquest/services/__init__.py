"""
Service Layer Package

Services wrap the pure rules in neuroquest.gamification with persistence,
per-user serialization and conflict retries.

- UserService: starting profile creation
- QuestService: quest completion transaction, progress queries
- DriftService: passive attribute drift ticks and the periodic loop
- StoreService: currency spending
"""

from neuroquest.services.container import ServiceContainer, create_container
from neuroquest.services.drift_service import DriftService
from neuroquest.services.quest_service import QuestService
from neuroquest.services.store_service import StoreService
from neuroquest.services.user_service import UserService

__all__ = [
    "ServiceContainer",
    "create_container",
    "DriftService",
    "QuestService",
    "StoreService",
    "UserService",
]
