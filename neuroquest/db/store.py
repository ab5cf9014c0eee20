"""
Persistence collaborator for the progression engine

`GameStore` is the contract services depend on. `InMemoryGameStore` keeps
everything in process memory and versions every user record, so that
writers can use optimistic concurrency: read a snapshot with its version,
compute, then commit only if the version is unchanged.
"""

from typing import Dict, List, NamedTuple, Optional, Protocol, Sequence
import logging

from neuroquest.exceptions import PersistenceConflictError, RecordNotFoundError
from neuroquest.models.attributes import Attributes
from neuroquest.models.progression import ProgressionState
from neuroquest.models.quest import Quest
from neuroquest.models.store import StoreItem

logger = logging.getLogger(__name__)


class UserSnapshot(NamedTuple):
    version: int
    progression: ProgressionState
    attributes: Attributes


class GameStore(Protocol):
    """Storage operations the engine services rely on"""

    async def load_progression_state(self, user_id: str) -> ProgressionState: ...

    async def load_attributes(self, user_id: str) -> Attributes: ...

    async def load_quest(self, quest_id: str) -> Quest: ...

    async def load_snapshot(self, user_id: str) -> UserSnapshot: ...

    async def save_progression_state(
        self, user_id: str, state: ProgressionState, expected_version: Optional[int] = None
    ) -> int: ...

    async def save_attributes(
        self, user_id: str, attributes: Attributes, expected_version: Optional[int] = None
    ) -> int: ...

    async def save_quest(self, quest: Quest) -> None: ...

    async def commit(
        self,
        user_id: str,
        expected_version: int,
        progression: Optional[ProgressionState] = None,
        attributes: Optional[Attributes] = None,
        quests: Sequence[Quest] = (),
    ) -> int: ...

    async def user_exists(self, user_id: str) -> bool: ...

    async def create_user(
        self, user_id: str, progression: ProgressionState, attributes: Attributes
    ) -> UserSnapshot: ...

    async def list_quests(self, user_id: str, completed: Optional[bool] = None) -> List[Quest]: ...

    async def load_item(self, item_id: str) -> StoreItem: ...


class InMemoryGameStore:
    """In-memory, versioned implementation of GameStore"""

    def __init__(self):
        self._progression: Dict[str, ProgressionState] = {}
        self._attributes: Dict[str, Attributes] = {}
        self._versions: Dict[str, int] = {}
        self._quests: Dict[str, Quest] = {}
        self._items: Dict[str, StoreItem] = {}

    # ==========================================
    # Users
    # ==========================================

    async def user_exists(self, user_id: str) -> bool:
        return user_id in self._versions

    async def create_user(
        self,
        user_id: str,
        progression: ProgressionState,
        attributes: Attributes
    ) -> UserSnapshot:
        """Insert a new user record at version 1"""
        if user_id in self._versions:
            raise PersistenceConflictError(
                message=f"User {user_id} already exists",
                user_id=user_id,
                operation="create_user",
                actual_version=self._versions[user_id],
            )

        self._progression[user_id] = progression
        self._attributes[user_id] = attributes
        self._versions[user_id] = 1
        logger.debug(f"Created user record {user_id}")
        return UserSnapshot(1, progression, attributes)

    async def load_snapshot(self, user_id: str) -> UserSnapshot:
        """Progression and attributes read together with their version"""
        self._require_user(user_id)
        return UserSnapshot(
            version=self._versions[user_id],
            progression=self._progression[user_id],
            attributes=self._attributes[user_id],
        )

    async def load_progression_state(self, user_id: str) -> ProgressionState:
        self._require_user(user_id)
        return self._progression[user_id]

    async def load_attributes(self, user_id: str) -> Attributes:
        self._require_user(user_id)
        return self._attributes[user_id]

    async def save_progression_state(
        self,
        user_id: str,
        state: ProgressionState,
        expected_version: Optional[int] = None
    ) -> int:
        return await self._write(user_id, expected_version, progression=state)

    async def save_attributes(
        self,
        user_id: str,
        attributes: Attributes,
        expected_version: Optional[int] = None
    ) -> int:
        return await self._write(user_id, expected_version, attributes=attributes)

    async def commit(
        self,
        user_id: str,
        expected_version: int,
        progression: Optional[ProgressionState] = None,
        attributes: Optional[Attributes] = None,
        quests: Sequence[Quest] = (),
    ) -> int:
        """
        Write progression, attributes and quests as one unit

        Nothing is written unless the user's version still equals
        `expected_version`.

        Returns:
            The new version

        Raises:
            PersistenceConflictError: version changed since it was read
            RecordNotFoundError: unknown user or quest
        """
        for quest in quests:
            self._require_quest(quest.id)
        return await self._write(user_id, expected_version, progression, attributes, quests)

    # ==========================================
    # Quests
    # ==========================================

    async def add_quest(self, quest: Quest) -> None:
        """Add a quest to the catalog"""
        self._quests[quest.id] = quest
        logger.debug(f"Added quest {quest.id} for user {quest.user_id}")

    async def load_quest(self, quest_id: str) -> Quest:
        self._require_quest(quest_id)
        return self._quests[quest_id]

    async def save_quest(self, quest: Quest) -> None:
        self._require_quest(quest.id)
        self._quests[quest.id] = quest

    async def list_quests(self, user_id: str, completed: Optional[bool] = None) -> List[Quest]:
        """All quests of a user, optionally filtered by completion"""
        return [
            quest for quest in self._quests.values()
            if quest.user_id == user_id
            and (completed is None or quest.completed == completed)
        ]

    # ==========================================
    # Store items
    # ==========================================

    async def add_item(self, item: StoreItem) -> None:
        self._items[item.id] = item

    async def load_item(self, item_id: str) -> StoreItem:
        if item_id not in self._items:
            raise RecordNotFoundError(
                message=f"Store item {item_id} not found",
                record_type="StoreItem",
                record_id=item_id,
            )
        return self._items[item_id]

    # ==========================================
    # Internals
    # ==========================================

    def _require_user(self, user_id: str) -> None:
        if user_id not in self._versions:
            raise RecordNotFoundError(
                message=f"User {user_id} not found",
                record_type="User",
                record_id=user_id,
                user_id=user_id,
            )

    def _require_quest(self, quest_id: str) -> None:
        if quest_id not in self._quests:
            raise RecordNotFoundError(
                message=f"Quest {quest_id} not found",
                record_type="Quest",
                record_id=quest_id,
            )

    async def _write(
        self,
        user_id: str,
        expected_version: Optional[int],
        progression: Optional[ProgressionState] = None,
        attributes: Optional[Attributes] = None,
        quests: Sequence[Quest] = (),
    ) -> int:
        self._require_user(user_id)
        current = self._versions[user_id]

        if expected_version is not None and expected_version != current:
            raise PersistenceConflictError(
                message=f"User {user_id} changed since version {expected_version}",
                user_id=user_id,
                operation="commit",
                expected_version=expected_version,
                actual_version=current,
            )

        if progression is not None:
            self._progression[user_id] = progression
        if attributes is not None:
            self._attributes[user_id] = attributes
        for quest in quests:
            self._quests[quest.id] = quest

        self._versions[user_id] = current + 1
        return current + 1
