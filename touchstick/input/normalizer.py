"""
Input event normalization.

Converts platform-neutral raw records into the unified DragEvent stream:

- Touch: Started -> Start, Moved -> Move, Ended/Canceled -> End,
  one-to-one and in order.
- Mouse: pointer id 0. A left press becomes Start, a left release
  becomes End, and while the button is held every tick ends with a Move
  at the current cursor, unless the cursor is unknown (outside the
  window), in which case the drag just stalls.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from models import Vector2D
from touchstick.config import MOUSE_POINTER_ID
from touchstick.input.drag_event import DragEvent


class TouchPhase(str, Enum):
    """Lifecycle phase of a touch contact."""
    STARTED = "started"
    MOVED = "moved"
    ENDED = "ended"
    CANCELED = "canceled"


@dataclass(frozen=True)
class TouchRecord:
    """Raw touch report from the platform."""
    pointer_id: int
    phase: TouchPhase
    position: Optional[Vector2D] = None  # not reported for ended/canceled contacts


class MouseButtonState(str, Enum):
    """Left mouse button transition."""
    PRESSED = "pressed"
    RELEASED = "released"


@dataclass(frozen=True)
class MouseButtonRecord:
    """Raw left-button transition, with the cursor position if reported."""
    state: MouseButtonState
    position: Optional[Vector2D] = None


def drag_event_from_touch(record: TouchRecord) -> DragEvent:
    """Map a single touch record to its drag event."""
    if record.phase == TouchPhase.STARTED:
        return DragEvent.start(record.pointer_id, record.position)
    if record.phase == TouchPhase.MOVED:
        return DragEvent.move(record.pointer_id, record.position)
    return DragEvent.end(record.pointer_id)


def drag_events_from_touches(records: Iterable[TouchRecord]) -> List[DragEvent]:
    """Map a tick's touch records to drag events, preserving order."""
    return [drag_event_from_touch(record) for record in records]


def drag_events_from_mouse(
    records: Iterable[MouseButtonRecord],
    left_held: bool,
    cursor: Optional[Vector2D],
) -> List[DragEvent]:
    """Map a tick's left-button transitions to drag events.

    Args:
        records: Left-button transitions this tick, in order
        left_held: Whether the button is down at the end of the tick
        cursor: Current cursor position, None when outside the window

    Returns:
        Start/End per transition, then a Move if the button is held
        and the cursor is known
    """
    events: List[DragEvent] = []
    for record in records:
        if record.state == MouseButtonState.RELEASED:
            events.append(DragEvent.end(MOUSE_POINTER_ID))
        else:
            position = record.position if record.position is not None else cursor
            # a press with nowhere to anchor it cannot start a drag
            if position is not None:
                events.append(DragEvent.start(MOUSE_POINTER_ID, position))

    if left_held and cursor is not None:
        events.append(DragEvent.move(MOUSE_POINTER_ID, cursor))
    return events
