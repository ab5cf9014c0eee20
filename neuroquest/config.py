"""Configuration management"""
import os
from dotenv import load_dotenv

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Variable-ratio bonus reward
BONUS_PROBABILITY: float = float(os.getenv("BONUS_PROBABILITY", "0.30"))
BONUS_MIN: int = int(os.getenv("BONUS_MIN", "5"))
BONUS_MAX: int = int(os.getenv("BONUS_MAX", "24"))

# Flat bonus added to every attribute per level gained (0 disables it)
LEVEL_UP_ATTRIBUTE_BONUS: int = int(os.getenv("LEVEL_UP_ATTRIBUTE_BONUS", "0"))

# Passive attribute drift
DRIFT_INTERVAL_SECONDS: float = float(os.getenv("DRIFT_INTERVAL_SECONDS", "5"))

# Optimistic concurrency
MAX_COMMIT_RETRIES: int = int(os.getenv("MAX_COMMIT_RETRIES", "3"))
RETRY_BASE_DELAY: float = float(os.getenv("RETRY_BASE_DELAY", "0.05"))

# Monitoring
ENABLE_PROMETHEUS: bool = os.getenv("ENABLE_PROMETHEUS", "true").lower() == "true"


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    if not 0.0 <= BONUS_PROBABILITY <= 1.0:
        raise ValueError("BONUS_PROBABILITY must be between 0 and 1")
    if BONUS_MIN < 0 or BONUS_MIN > BONUS_MAX:
        raise ValueError("BONUS_MIN must be non-negative and not greater than BONUS_MAX")
    if LEVEL_UP_ATTRIBUTE_BONUS < 0:
        raise ValueError("LEVEL_UP_ATTRIBUTE_BONUS must be non-negative")
    if DRIFT_INTERVAL_SECONDS <= 0:
        raise ValueError("DRIFT_INTERVAL_SECONDS must be positive")
    if MAX_COMMIT_RETRIES < 0:
        raise ValueError("MAX_COMMIT_RETRIES must be non-negative")
