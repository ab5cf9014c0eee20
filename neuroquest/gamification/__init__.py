"""
Progression and reward engine for NeuroQuest

This module implements the pure game rules:
- Attribute clamping (vitality, energy, focus, mood)
- XP and leveling with carry-over
- Quest reward resolution with a variable-ratio bonus
- Quest completion transaction
- Passive attribute drift from health signals

Everything here is synchronous and storage-agnostic; services in
neuroquest.services handle persistence and concurrency.
"""

from neuroquest.gamification.attributes import apply_delta, apply_deltas, clamp
from neuroquest.gamification.xp_system import apply_xp, calculate_level_progress, xp_for_level
from neuroquest.gamification.rewards import resolve_rewards, roll_bonus
from neuroquest.gamification.quest_completion import complete_quest
from neuroquest.gamification.drift import compute_drift, sample_health_reading

__all__ = [
    "clamp",
    "apply_delta",
    "apply_deltas",
    "xp_for_level",
    "apply_xp",
    "calculate_level_progress",
    "resolve_rewards",
    "roll_bonus",
    "complete_quest",
    "compute_drift",
    "sample_health_reading",
]
