"""
Passive Attribute Drift

Periodic, quest-independent attribute adjustment driven by health signals.
Only the four attributes move; XP, level and currency are never touched.

Drift rules (per tick):
- vitality: +2 if steps > 500 else -1, plus -1 if heart rate > 80 else +1
- energy: +3 if sleep > 7 hours else -2
- focus: +5 if focus minutes > 60 else -1
- mood: +2 if the mean of the three updated attributes exceeds the
  previous mood, else -1
"""

from typing import Dict, NamedTuple, Optional
import logging

from neuroquest.gamification.attributes import apply_delta
from neuroquest.gamification.rewards import RandomSource, default_rng
from neuroquest.models.attributes import AttributeName, Attributes
from neuroquest.models.health import HealthReading

logger = logging.getLogger(__name__)

STEPS_THRESHOLD = 500
HEART_RATE_THRESHOLD = 80
SLEEP_HOURS_THRESHOLD = 7
FOCUS_MINUTES_THRESHOLD = 60


class DriftResult(NamedTuple):
    attributes: Attributes
    deltas: Dict[str, int]


def compute_drift(attributes: Attributes, reading: HealthReading) -> DriftResult:
    """
    Apply one drift tick to an attribute record

    Args:
        attributes: Current attributes
        reading: Health signal for this tick

    Returns:
        DriftResult with the clamped attributes and the requested deltas
    """
    vitality_delta = 2 if reading.steps > STEPS_THRESHOLD else -1
    vitality_delta += -1 if reading.heart_rate > HEART_RATE_THRESHOLD else 1
    energy_delta = 3 if reading.sleep_hours > SLEEP_HOURS_THRESHOLD else -2
    focus_delta = 5 if reading.focus_minutes > FOCUS_MINUTES_THRESHOLD else -1

    updated = apply_delta(attributes, AttributeName.VITALITY, vitality_delta)
    updated = apply_delta(updated, AttributeName.ENERGY, energy_delta)
    updated = apply_delta(updated, AttributeName.FOCUS, focus_delta)

    average = (updated.vitality + updated.energy + updated.focus) / 3
    mood_delta = 2 if average > attributes.mood else -1
    updated = apply_delta(updated, AttributeName.MOOD, mood_delta)

    deltas = {
        AttributeName.VITALITY.value: vitality_delta,
        AttributeName.ENERGY.value: energy_delta,
        AttributeName.FOCUS.value: focus_delta,
        AttributeName.MOOD.value: mood_delta,
    }

    return DriftResult(attributes=updated, deltas=deltas)


def sample_health_reading(rng: Optional[RandomSource] = None) -> HealthReading:
    """
    Generate a synthetic health reading

    Ranges: steps 0-1000, heart rate 60-100 bpm, sleep 5.0-9.0 hours,
    focus 0-120 minutes.
    """
    rng = rng or default_rng

    return HealthReading(
        steps=int(rng.random() * 1001),
        heart_rate=60 + int(rng.random() * 41),
        sleep_hours=round(5.0 + rng.random() * 4.0, 1),
        focus_minutes=int(rng.random() * 121),
    )
