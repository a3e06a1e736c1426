"""
Touch drag source.

Converts pygame finger events into drag events, one pointer per finger.
"""

from typing import List, Set, Tuple

import pygame

from models import Vector2D
from touchstick.config import TOUCH_POINTER_OFFSET
from touchstick.input.drag_event import DragEvent
from touchstick.input.normalizer import TouchPhase, TouchRecord, drag_events_from_touches
from touchstick.input.sources.base import InputSource
from touchstick.logging import get_logger

log = get_logger('input')

_PHASES = {
    pygame.FINGERDOWN: TouchPhase.STARTED,
    pygame.FINGERMOTION: TouchPhase.MOVED,
    pygame.FINGERUP: TouchPhase.ENDED,
}


class TouchDragSource(InputSource):
    """Multi-touch drag source using pygame finger events.

    pygame reports finger positions normalized to [0, 1]; they are scaled
    by the window size into input-space pixels. The window size follows
    VIDEORESIZE / WINDOWSIZECHANGED events.

    Pointer ids are finger_id + TOUCH_POINTER_OFFSET so that no finger
    shares the mouse's id 0. Losing window focus cancels every finger
    that is still down.

    Args:
        window_size: (width, height) of the window in pixels
    """

    def __init__(self, window_size: Tuple[int, int]):
        self._window_size = (float(window_size[0]), float(window_size[1]))
        self._records: List[TouchRecord] = []
        self._event_queue: List[DragEvent] = []
        self._active: Set[int] = set()

    @property
    def window_size(self) -> Tuple[float, float]:
        return self._window_size

    @property
    def active_pointers(self) -> Set[int]:
        """Pointer ids of fingers currently down."""
        return set(self._active)

    def resize(self, width: float, height: float) -> None:
        self._window_size = (float(width), float(height))

    def pointer_id_for(self, finger_id: int) -> int:
        return int(finger_id) + TOUCH_POINTER_OFFSET

    def handle_event(self, event: pygame.event.Event) -> bool:
        phase = _PHASES.get(event.type)
        if phase is not None:
            pointer_id = self.pointer_id_for(event.finger_id)
            width, height = self._window_size
            position = Vector2D(x=float(event.x) * width, y=float(event.y) * height)
            if phase == TouchPhase.STARTED:
                self._active.add(pointer_id)
            elif phase == TouchPhase.ENDED:
                self._active.discard(pointer_id)
            self._records.append(TouchRecord(pointer_id=pointer_id, phase=phase, position=position))
            return True

        if event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)
            return True
        if event.type == pygame.WINDOWSIZECHANGED:
            self.resize(event.x, event.y)
            return True
        if event.type == pygame.WINDOWFOCUSLOST:
            self.cancel_all()
            return True

        return False

    def cancel_all(self) -> None:
        """Cancel every finger that is still down."""
        for pointer_id in sorted(self._active):
            log.debug("touch %d canceled", pointer_id)
            self._records.append(TouchRecord(pointer_id=pointer_id, phase=TouchPhase.CANCELED))
        self._active.clear()

    def update(self, dt: float) -> None:
        self._event_queue.extend(drag_events_from_touches(self._records))
        self._records.clear()

    def poll_events(self) -> List[DragEvent]:
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def clear(self) -> None:
        """Discard pending drag events and unprocessed finger records."""
        self._records.clear()
        self._event_queue.clear()
