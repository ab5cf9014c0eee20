"""
Standardized exception hierarchy for neuroquest
Provides rich context, consistent logging, and user-friendly error messages
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class NeuroQuestError(Exception):
    """
    Base exception for all neuroquest errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise NeuroQuestError(
            message="Failed to commit quest completion",
            user_id="user-1",
            operation="complete_quest",
            context={"quest_id": "q-42"}
        )
    """

    is_retryable: bool = False
    log_level: int = logging.ERROR

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.log(self.log_level, f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.log(self.log_level, f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for API responses"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "retryable": self.is_retryable,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (Malformed Input)
# ==========================================

class ValidationError(NeuroQuestError):
    """
    Raised when quest or progression input is malformed

    Examples:
    - Negative XP reward
    - Unknown attribute key in attribute rewards
    - Negative XP grant passed to the level ladder

    Example:
        raise ValidationError(
            message="XP reward must be non-negative",
            field="xp_reward",
            value=-5
        )
    """

    log_level = logging.WARNING

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context={"field": field, "value": value},
            **kwargs
        )


# ==========================================
# Quest Completion Errors
# ==========================================

class QuestError(NeuroQuestError):
    """Base class for quest completion errors"""
    pass


class AlreadyCompletedError(QuestError):
    """Quest completion was re-invoked on a quest that is already completed"""

    log_level = logging.INFO

    def __init__(self, message: str = "Quest is already completed", quest_id: Optional[str] = None, **kwargs):
        self.quest_id = quest_id
        super().__init__(
            message=message,
            user_message="You already completed this quest.",
            context={"quest_id": quest_id},
            **kwargs
        )


class OwnershipError(QuestError):
    """Quest does not belong to the user attempting to complete it"""

    def __init__(self, message: str = "Quest belongs to another user", quest_id: Optional[str] = None, **kwargs):
        self.quest_id = quest_id
        super().__init__(
            message=message,
            user_message="You don't have permission to complete this quest.",
            context={"quest_id": quest_id},
            **kwargs
        )


class InsufficientFundsError(NeuroQuestError):
    """User balance does not cover the price of a store item"""

    log_level = logging.INFO

    def __init__(
        self,
        message: str = "Insufficient currency",
        price: Optional[int] = None,
        balance: Optional[int] = None,
        **kwargs
    ):
        self.price = price
        self.balance = balance
        super().__init__(
            message=message,
            user_message="You don't have enough currency for this item.",
            context={"price": price, "balance": balance},
            **kwargs
        )


# ==========================================
# Persistence Errors
# ==========================================

class PersistenceError(NeuroQuestError):
    """
    Base class for persistence-related errors
    """
    pass


class PersistenceConflictError(PersistenceError):
    """Conditional write failed because the record changed since it was read"""

    is_retryable = True
    log_level = logging.WARNING

    def __init__(
        self,
        message: str = "Concurrent modification detected",
        expected_version: Optional[int] = None,
        actual_version: Optional[int] = None,
        **kwargs
    ):
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            message=message,
            user_message="Your progress changed while we were saving. Please try again.",
            context={"expected_version": expected_version, "actual_version": actual_version},
            **kwargs
        )


class RecordNotFoundError(PersistenceError):
    """Requested record does not exist"""

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(
            message=message,
            user_message=f"{record_type or 'Record'} not found.",
            context={"record_type": record_type, "record_id": record_id},
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(NeuroQuestError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The system is not properly configured. Please contact support.",
            context={"config_key": config_key},
            **kwargs
        )
