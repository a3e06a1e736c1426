"""
Where to draw a stick.

Pure geometry for renderers: the center of the outline ring and of the
knob, in input space. Nothing here draws.

    Fixed     outline at the zone center
    Floating  outline at the zone center when idle, at the touch-down point while dragged
    Dynamic   hidden when idle, at the sliding drag reference while dragged

The knob sits at the outline center offset by the value (flipped back to
y down) times the knob travel.
"""

from typing import Optional

from models import Vector2D
from touchstick.behavior import StickBehavior
from touchstick.stick import Stick


def knob_travel(stick: Stick) -> float:
    """Distance from outline center to knob at full deflection.

    Half the zone width, or the stick radius when the zone has not been
    laid out (unbounded or empty).
    """
    zone = stick.interactable_zone
    if zone.is_bounded() and not zone.is_degenerate():
        return zone.half_size.x
    return stick.radius


def outline_center(stick: Stick) -> Optional[Vector2D]:
    """Center of the outline ring, or None when the stick is hidden."""
    if stick.behavior == StickBehavior.FIXED:
        return stick.interactable_zone.center
    if stick.behavior == StickBehavior.FLOATING:
        if not stick.is_dragging:
            return stick.interactable_zone.center
        return stick.drag_start_position
    if not stick.is_dragging:
        return None
    return stick.drag_start_position


def knob_center(stick: Stick) -> Optional[Vector2D]:
    """Center of the knob, or None when the stick is hidden."""
    center = outline_center(stick)
    if center is None:
        return None
    return center + stick.value.flip_y() * knob_travel(stick)
