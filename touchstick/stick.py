"""
Stick state.

A Stick is the authoritative per-joystick record: identity, behavior,
which pointer owns it, and the computed value. The engine drives the
transitions; applications may read `value` directly instead of (or as
well as) consuming events.

Invariants:
- Idle (no owner) means every position field and the value are zero.
- |value| <= 1.
- An owner is only replaced after a release.
"""

from dataclasses import dataclass, field
from typing import Generic, Hashable, Optional, TypeVar

from models import Rect, Vector2D, ZERO
from touchstick import config
from touchstick.behavior import StickBehavior
from touchstick.definitions import StickConfig

S = TypeVar('S', bound=Hashable)


@dataclass
class Stick(Generic[S]):
    """One logical virtual joystick.

    Attributes:
        id: Identifier supplied by the application
        behavior: Positioning behavior
        radius: Activation distance in input-space units
        dead_zone: Minimum axis magnitude before Drag events fire
        interactable_zone: Where a drag may start (input space, refreshed by layout)
        drag_owner: Pointer currently driving the stick, None when idle
        anchor_position: Latest pointer position while a Dynamic stick is dragged
        drag_start_position: Zero reference for the drag offset
        drag_current_position: Latest raw pointer position
        value: Output in [-1, 1] per axis, y up, length at most 1
    """
    id: S
    behavior: StickBehavior = field(default_factory=lambda: StickBehavior.parse(config.DEFAULT_BEHAVIOR))
    radius: float = field(default_factory=lambda: config.DEFAULT_RADIUS)
    dead_zone: float = field(default_factory=lambda: config.DEFAULT_DEAD_ZONE)
    interactable_zone: Rect = field(default_factory=Rect.unbounded)
    drag_owner: Optional[int] = None
    anchor_position: Vector2D = ZERO
    drag_start_position: Vector2D = ZERO
    drag_current_position: Vector2D = ZERO
    value: Vector2D = ZERO

    def __post_init__(self):
        """Validate configuration."""
        self.behavior = StickBehavior.parse(self.behavior)
        if not self.radius > 0:
            raise ValueError(f'Stick radius must be positive, got {self.radius}')
        if not 0.0 <= self.dead_zone <= 1.0:
            raise ValueError(f'Stick dead_zone must be in range [0, 1], got {self.dead_zone}')

    @classmethod
    def from_config(cls, stick_config: StickConfig) -> 'Stick':
        """Create an idle stick from its configuration."""
        return cls(
            id=stick_config.id,
            behavior=stick_config.behavior,
            radius=stick_config.radius,
            dead_zone=stick_config.dead_zone,
        )

    def to_config(self) -> StickConfig:
        """Public settings of this stick (drag state is not included)."""
        return StickConfig(
            id=self.id,
            behavior=self.behavior,
            radius=self.radius,
            dead_zone=self.dead_zone,
        )

    @property
    def is_dragging(self) -> bool:
        return self.drag_owner is not None

    @property
    def in_dead_zone(self) -> bool:
        """True while both axes are below the dead zone."""
        return abs(self.value.x) < self.dead_zone and abs(self.value.y) < self.dead_zone

    def claim(self, pointer_id: int, position: Vector2D) -> bool:
        """Try to start a drag.

        Succeeds only when the stick is idle and the zone contains the
        position. A second pointer never steals or queues for a held stick.
        """
        if self.drag_owner is not None or not self.interactable_zone.contains(position):
            return False
        self.drag_owner = pointer_id
        self.drag_start_position = position
        self.drag_current_position = position
        self.value = ZERO
        return True

    def drag_to(self, position: Vector2D) -> bool:
        """Move the owning pointer and recompute the value.

        The position is not clipped to the zone; the clamp below bounds
        the value instead. Returns False when the zone has no extent, in
        which case only the current position is recorded.
        """
        self.drag_current_position = position
        half = self.interactable_zone.half_size
        if not (half.x > 0.0 and half.y > 0.0):
            return False

        if self.behavior == StickBehavior.DYNAMIC:
            self.anchor_position = position
            to_pointer = self.drag_current_position - self.drag_start_position
            distance = to_pointer.length()
            # half width is the clamp radius; the reference slides by the excess
            if distance > half.x:
                self.drag_start_position = self.drag_start_position + to_pointer.normalize() * (distance - half.x)

        d = (self.drag_current_position - self.drag_start_position) / half
        # input space is y down, output is y up
        self.value = d.flip_y() / max(d.length(), 1.0)
        return True

    def reset(self) -> None:
        """Return to the fully zeroed idle state."""
        self.drag_owner = None
        self.anchor_position = ZERO
        self.drag_start_position = ZERO
        self.drag_current_position = ZERO
        self.value = ZERO
