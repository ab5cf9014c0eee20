"""
StoreService - Currency Spending

Buys store items with currency. A purchase only lowers currency; XP, level
and attributes are left as they are.
"""

import logging
from typing import Any, Dict, Optional

from neuroquest.config import MAX_COMMIT_RETRIES, RETRY_BASE_DELAY
from neuroquest.db.store import GameStore
from neuroquest.exceptions import InsufficientFundsError, PersistenceConflictError
from neuroquest.monitoring import record_conflict, record_purchase
from neuroquest.resilience.retry import retry_with_backoff
from neuroquest.services.locks import UserLocks

logger = logging.getLogger(__name__)


class StoreService:
    """Service for store purchases"""

    def __init__(
        self,
        store: GameStore,
        locks: Optional[UserLocks] = None,
        max_retries: int = MAX_COMMIT_RETRIES,
        retry_base_delay: float = RETRY_BASE_DELAY,
    ):
        self.store = store
        self.locks = locks or UserLocks()
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    async def purchase_item(self, user_id: str, item_id: str) -> Dict[str, Any]:
        """
        Deduct an item's price from a user's currency.

        Returns:
            {
                'item_id': str,
                'price': int,
                'new_currency': int
            }

        Raises:
            InsufficientFundsError: balance is lower than the price
            RecordNotFoundError: unknown user or item
        """
        item = await self.store.load_item(item_id)

        try:
            async with self.locks.hold(user_id):
                new_currency = await retry_with_backoff(
                    self._attempt_purchase,
                    user_id,
                    item.price,
                    max_retries=self.max_retries,
                    base_delay=self.retry_base_delay,
                )
        except InsufficientFundsError:
            record_purchase("insufficient_funds")
            raise

        record_purchase("success")
        logger.info(f"User {user_id} bought {item.id} for {item.price}; balance {new_currency}")

        return {
            "item_id": item.id,
            "price": item.price,
            "new_currency": new_currency,
        }

    async def _attempt_purchase(self, user_id: str, price: int) -> int:
        snapshot = await self.store.load_snapshot(user_id)
        balance = snapshot.progression.currency

        if balance < price:
            raise InsufficientFundsError(
                message=f"User {user_id} has {balance}, needs {price}",
                price=price,
                balance=balance,
                user_id=user_id,
                operation="purchase_item",
            )

        new_state = snapshot.progression.model_copy(update={"currency": balance - price})
        try:
            await self.store.save_progression_state(
                user_id, new_state, expected_version=snapshot.version
            )
        except PersistenceConflictError:
            record_conflict("purchase_item")
            raise

        return new_state.currency
