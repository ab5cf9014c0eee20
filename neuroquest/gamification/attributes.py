"""
Attribute Model

Clamping rules for the four bounded attributes (vitality, energy, focus,
mood). Every computed value is restricted to [1, 100]; rewards that would
push an attribute past a bound are lost, not banked.
"""

from typing import Dict, Mapping, Union
import logging

from neuroquest.exceptions import ValidationError
from neuroquest.models.attributes import (
    ATTRIBUTE_MAX,
    ATTRIBUTE_MIN,
    AttributeName,
    Attributes,
)

logger = logging.getLogger(__name__)

AttributeKey = Union[AttributeName, str]


def clamp(value: int) -> int:
    """Restrict any integer to [1, 100]"""
    return max(ATTRIBUTE_MIN, min(ATTRIBUTE_MAX, int(value)))


def parse_attribute_name(attr: AttributeKey) -> AttributeName:
    """Resolve an attribute key, raising ValidationError for unknown names"""
    try:
        return AttributeName(attr)
    except ValueError:
        raise ValidationError(
            message=f"Unknown attribute '{attr}'",
            field="attribute",
            value=attr,
        )


def apply_delta(attributes: Attributes, attr: AttributeKey, delta: int) -> Attributes:
    """
    Return a new Attributes record with `attr` shifted by `delta` and clamped.

    Out-of-range results are silently clamped, never rejected.
    """
    name = parse_attribute_name(attr)
    new_value = clamp(attributes.get(name) + delta)
    return attributes.model_copy(update={name.value: new_value})


def apply_deltas(attributes: Attributes, deltas: Mapping[AttributeKey, int]) -> Attributes:
    """Apply several deltas, each clamped independently"""
    result = attributes
    for attr, delta in deltas.items():
        result = apply_delta(result, attr, delta)
    return result


def wasted_points(attributes: Attributes, deltas: Mapping[AttributeKey, int]) -> Dict[str, int]:
    """
    How much of each requested delta was lost to clamping.

    Only attributes that actually lost points are included. The value is
    the absolute number of points that did not land.
    """
    wasted = {}
    for attr, delta in deltas.items():
        name = parse_attribute_name(attr)
        before = attributes.get(name)
        landed = clamp(before + delta) - before
        lost = abs(delta - landed)
        if lost:
            wasted[name.value] = lost
    return wasted


def apply_level_up_bonus(attributes: Attributes, levels_gained: int, bonus_per_level: int) -> Attributes:
    """Add a flat bonus to all four attributes for every level gained"""
    if levels_gained <= 0 or bonus_per_level <= 0:
        return attributes

    bonus = levels_gained * bonus_per_level
    logger.debug(f"Applying level-up attribute bonus of +{bonus} to all attributes")
    return apply_deltas(attributes, {name: bonus for name in AttributeName})
