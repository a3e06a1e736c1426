"""
Touchstick Event Types

Defines the public events emitted by the stick engine:
- StickEventType: Press, Drag or Release
- StickEvent: one notification carrying the stick id and its value

These events are a convenience layer. The authoritative state is the
Stick itself, which applications may poll instead.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from models import Vector2D, ZERO


class StickEventType(str, Enum):
    """What a stick experienced during a tick.

    Attributes:
        PRESS: A pointer claimed the stick
        DRAG: The stick is held outside its dead zone
        RELEASE: The owning pointer let go
    """
    PRESS = "press"
    DRAG = "drag"
    RELEASE = "release"


class StickEvent(BaseModel):
    """
    Notification emitted whenever a stick is interacted with.

    The value is in output space (y up) with magnitude at most 1.
    Press and Release always carry the zero vector.
    """
    id: Any = Field(..., description="Identifier of the stick that sent this event")
    kind: StickEventType = Field(..., description="What happened to the stick")
    value: Vector2D = Field(default=ZERO, description="Stick value, maximum length 1")

    model_config = ConfigDict(frozen=True)  # Events are immutable once created

    def __str__(self) -> str:
        return f"StickEvent({self.id!r}, {self.kind.value}, x={self.value.x:.3f}, y={self.value.y:.3f})"
