"""
Mouse drag source.

Turns the left mouse button into a single pointer (id 0): press starts a
drag, release ends it, and every tick the button is held produces a move
to the current cursor.
"""

from typing import List, Optional

import pygame

from models import Vector2D
from touchstick.input.drag_event import DragEvent
from touchstick.input.normalizer import MouseButtonRecord, MouseButtonState, drag_events_from_mouse
from touchstick.input.sources.base import InputSource
from touchstick.logging import get_logger

LEFT_BUTTON = 1

log = get_logger('input')


def _event_position(event: pygame.event.Event) -> Optional[Vector2D]:
    pos = getattr(event, 'pos', None)
    if pos is None:
        return None
    return Vector2D(x=float(pos[0]), y=float(pos[1]))


class MouseDragSource(InputSource):
    """Mouse-based drag source using pygame events.

    The cursor position is tracked from motion and button events. When
    the cursor leaves the window it becomes unknown, so a held drag
    stalls (no moves) without ending.

    Mouse events that pygame synthesizes from touches are ignored; the
    touch source already reports those contacts.

    Examples:
        >>> source = MouseDragSource()
        >>> source.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(40, 500)))
        True
        >>> source.update(0.016)
        >>> [e.kind.value for e in source.poll_events()]
        ['start', 'move']
    """

    def __init__(self):
        self._records: List[MouseButtonRecord] = []
        self._event_queue: List[DragEvent] = []
        self._left_held = False
        self._cursor: Optional[Vector2D] = None

    @property
    def left_held(self) -> bool:
        return self._left_held

    @property
    def cursor(self) -> Optional[Vector2D]:
        """Last known cursor position, None while outside the window."""
        return self._cursor

    def handle_event(self, event: pygame.event.Event) -> bool:
        if getattr(event, 'touch', False):
            return False

        if event.type == pygame.MOUSEMOTION:
            self._cursor = _event_position(event)
            return True

        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            if getattr(event, 'button', None) != LEFT_BUTTON:
                return False
            position = _event_position(event)
            if position is not None:
                self._cursor = position
            pressed = event.type == pygame.MOUSEBUTTONDOWN
            # repeated transitions in the same state are dropped
            if pressed != self._left_held:
                self._left_held = pressed
                state = MouseButtonState.PRESSED if pressed else MouseButtonState.RELEASED
                self._records.append(MouseButtonRecord(state=state, position=position))
            return True

        if event.type == pygame.WINDOWLEAVE:
            self._cursor = None
            return True

        return False

    def update(self, dt: float) -> None:
        """Convert this tick's button transitions and held state to drag events."""
        events = drag_events_from_mouse(self._records, self._left_held, self._cursor)
        self._records.clear()
        if self._left_held and self._cursor is None:
            log.trace("mouse drag stalled: cursor outside window")
        self._event_queue.extend(events)

    def poll_events(self) -> List[DragEvent]:
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def clear(self) -> None:
        """Discard pending drag events and unprocessed button transitions."""
        self._records.clear()
        self._event_queue.clear()
