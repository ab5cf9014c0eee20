"""Monitoring infrastructure for neuroquest"""
from neuroquest.monitoring.prometheus_metrics import (
    metrics,
    track_quest_completion,
    record_reward,
    record_conflict,
    record_drift_tick,
    record_purchase,
)

__all__ = [
    "metrics",
    "track_quest_completion",
    "record_reward",
    "record_conflict",
    "record_drift_tick",
    "record_purchase",
]
