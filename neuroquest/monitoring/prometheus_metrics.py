"""Prometheus metrics definitions and helpers"""
import logging
import time
from contextlib import contextmanager
from prometheus_client import Counter, Histogram

from neuroquest.config import ENABLE_PROMETHEUS

logger = logging.getLogger(__name__)


class PrometheusMetrics:
    """Container for all Prometheus metrics"""

    def __init__(self, enabled: bool = ENABLE_PROMETHEUS):
        if not enabled:
            logger.info("Prometheus metrics disabled")
            self._enabled = False
            return

        # Quest Completion Metrics
        self.quests_completed_total = Counter(
            'neuroquest_quests_completed_total',
            'Total quests completed',
            ['result']
        )

        self.quest_completion_duration_seconds = Histogram(
            'neuroquest_quest_completion_duration_seconds',
            'Quest completion transaction latency',
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0]
        )

        self.bonus_rewards_total = Counter(
            'neuroquest_bonus_rewards_total',
            'Variable-ratio bonus rewards granted'
        )

        self.bonus_currency_total = Counter(
            'neuroquest_bonus_currency_total',
            'Currency granted through bonus rewards'
        )

        self.level_ups_total = Counter(
            'neuroquest_level_ups_total',
            'Total levels gained'
        )

        # Persistence Metrics
        self.persistence_conflicts_total = Counter(
            'neuroquest_persistence_conflicts_total',
            'Optimistic write conflicts',
            ['operation']
        )

        # Drift & Store Metrics
        self.drift_ticks_total = Counter(
            'neuroquest_drift_ticks_total',
            'Passive drift ticks applied',
            ['status']
        )

        self.purchases_total = Counter(
            'neuroquest_purchases_total',
            'Store purchase attempts',
            ['result']
        )

        self._enabled = True
        logger.info("Prometheus metrics initialized")

    @property
    def enabled(self) -> bool:
        """Check if metrics are enabled"""
        return self._enabled


# Global metrics instance
metrics = PrometheusMetrics()


@contextmanager
def track_quest_completion():
    """Track quest completion latency and result"""
    if not metrics.enabled:
        yield
        return

    start_time = time.time()
    result = "error"  # Default to error

    try:
        yield
        result = "success"
    except Exception as e:
        result = type(e).__name__
        raise
    finally:
        duration = time.time() - start_time
        metrics.quest_completion_duration_seconds.observe(duration)
        metrics.quests_completed_total.labels(result=result).inc()


def record_reward(bonus_currency: int, levels_gained: int):
    """Record bonus and level-up counts of a committed completion"""
    if not metrics.enabled:
        return

    if bonus_currency > 0:
        metrics.bonus_rewards_total.inc()
        metrics.bonus_currency_total.inc(bonus_currency)
    if levels_gained > 0:
        metrics.level_ups_total.inc(levels_gained)


def record_conflict(operation: str):
    """Record an optimistic write conflict"""
    if not metrics.enabled:
        return

    metrics.persistence_conflicts_total.labels(operation=operation).inc()


def record_drift_tick(success: bool):
    """Record a passive drift tick"""
    if not metrics.enabled:
        return

    metrics.drift_ticks_total.labels(status="success" if success else "error").inc()


def record_purchase(result: str):
    """Record a store purchase attempt"""
    if not metrics.enabled:
        return

    metrics.purchases_total.labels(result=result).inc()
