"""
Drag Event - one step of a pointer's drag gesture.

Every input source (touch, mouse) is reduced to this common format
before the stick engine sees it. Uses a frozen dataclass since a batch
of these is built every tick.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from models import Vector2D


class DragEventType(str, Enum):
    """Phase of a pointer drag.

    Attributes:
        START: Pointer went down
        MOVE: Pointer moved while down
        END: Pointer lifted or was canceled
    """
    START = "start"
    MOVE = "move"
    END = "end"


@dataclass(frozen=True)
class DragEvent:
    """Immutable pointer drag event in input space (y down).

    Attributes:
        kind: Drag phase
        pointer_id: Pointer identity (0 is the mouse)
        position: Pointer position; None only for END events
    """
    kind: DragEventType
    pointer_id: int
    position: Optional[Vector2D] = None

    def __post_init__(self):
        """Validate pointer id and position."""
        if self.pointer_id < 0:
            raise ValueError(f'Pointer id must be non-negative, got {self.pointer_id}')
        if self.kind != DragEventType.END and self.position is None:
            raise ValueError(f'{self.kind.value} events require a position')

    @classmethod
    def start(cls, pointer_id: int, position: Vector2D) -> 'DragEvent':
        return cls(DragEventType.START, pointer_id, position)

    @classmethod
    def move(cls, pointer_id: int, position: Vector2D) -> 'DragEvent':
        return cls(DragEventType.MOVE, pointer_id, position)

    @classmethod
    def end(cls, pointer_id: int) -> 'DragEvent':
        return cls(DragEventType.END, pointer_id)

    def __str__(self) -> str:
        """String representation for debugging."""
        if self.position is None:
            return f"DragEvent({self.kind.value}, pointer={self.pointer_id})"
        return (f"DragEvent({self.kind.value}, pointer={self.pointer_id}, "
                f"pos=({self.position.x:.1f}, {self.position.y:.1f}))")
