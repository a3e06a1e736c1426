"""
Stick positioning behaviors.

The behavior decides where the zero-reference of a stick sits while it
is being dragged.
"""

from enum import Enum
from typing import Union


class StickBehavior(str, Enum):
    """How a stick is positioned on screen.

    Attributes:
        FIXED: Center never moves; drag is measured from the zone center
        FLOATING: Center snaps to the touch-down point until release
        DYNAMIC: Center chases the pointer once it leaves the radius
    """
    FIXED = "fixed"
    FLOATING = "floating"
    DYNAMIC = "dynamic"

    @classmethod
    def parse(cls, value: Union[str, 'StickBehavior']) -> 'StickBehavior':
        """Accept an enum member or its name/value in any case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        valid = ', '.join(member.value for member in cls)
        raise ValueError(f"Unknown stick behavior {value!r}, expected one of: {valid}")
