"""
XP and Leveling System

Folds granted XP into level increments with carry-over.

Leveling Curve:
- Reaching level N+1 from level N costs N * 100 XP, measured from zero
  at level N (100 XP for 1 -> 2, 200 XP for 2 -> 3, ...)
- Experience is stored per level and is always strictly below the cost
  of the next level; any overflow is folded into level-ups immediately
"""

from typing import Dict, NamedTuple
import logging

from neuroquest.exceptions import ValidationError
from neuroquest.models.progression import ProgressionState

logger = logging.getLogger(__name__)

XP_PER_LEVEL_STEP = 100


class LevelResult(NamedTuple):
    level: int
    experience: int
    leveled_up: bool
    levels_gained: int


def xp_for_level(level: int) -> int:
    """XP needed to advance from `level` to `level + 1`"""
    if level < 1:
        raise ValidationError(
            message="Level must be at least 1",
            field="level",
            value=level,
        )
    return level * XP_PER_LEVEL_STEP


def total_xp_for_level(level: int) -> int:
    """
    Cumulative XP earned from level 1 to reach the start of `level`

    Example:
        total_xp_for_level(1) == 0
        total_xp_for_level(3) == 300  # 100 + 200
    """
    if level < 1:
        raise ValidationError(
            message="Level must be at least 1",
            field="level",
            value=level,
        )
    return XP_PER_LEVEL_STEP * (level - 1) * level // 2


def apply_xp(state: ProgressionState, xp_gained: int) -> LevelResult:
    """
    Add XP to a progression state and fold the overflow into levels

    Args:
        state: Current progression (level and in-level experience)
        xp_gained: Non-negative amount of XP to add

    Returns:
        LevelResult with the new level, the carried-over experience,
        whether a level-up happened, and how many levels were gained

    Raises:
        ValidationError: if xp_gained is negative
    """
    if xp_gained < 0:
        raise ValidationError(
            message="XP gained must be non-negative",
            field="xp_gained",
            value=xp_gained,
        )

    level = state.level
    experience = state.experience + xp_gained
    threshold = xp_for_level(level)

    # A single grant may cross several levels
    while experience >= threshold:
        experience -= threshold
        level += 1
        threshold = xp_for_level(level)

    levels_gained = level - state.level
    if levels_gained:
        logger.info(f"Level up: {state.level} -> {level} ({xp_gained} XP granted)")

    return LevelResult(
        level=level,
        experience=experience,
        leveled_up=levels_gained > 0,
        levels_gained=levels_gained,
    )


def calculate_level_progress(level: int, experience: int) -> Dict[str, int]:
    """
    Progress within the current level, for display

    Returns:
        {
            'current_level': int,
            'xp_in_current_level': int,
            'xp_for_next_level': int,
            'xp_to_next_level': int,
            'total_xp': int,
            'progress_percent': int (0-99)
        }
    """
    needed = xp_for_level(level)

    return {
        "current_level": level,
        "xp_in_current_level": experience,
        "xp_for_next_level": needed,
        "xp_to_next_level": needed - experience,
        "total_xp": total_xp_for_level(level) + experience,
        "progress_percent": experience * 100 // needed,
    }
