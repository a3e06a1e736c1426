"""
Abstract base class for drag input sources.

This module defines the InputSource interface that all sources implement,
so the stick engine works with touch, mouse, or anything else that can
be reduced to pointer drags.
"""

from abc import ABC, abstractmethod
from typing import List

import pygame

from touchstick.input.drag_event import DragEvent


class InputSource(ABC):
    """Abstract base class for drag input sources.

    The game loop hands every pygame event to handle_event(), calls
    update() once per tick, then collects the tick's drag events with
    poll_events().

    Subclasses must implement:
        - handle_event(event): Consume a pygame event if relevant
        - update(dt): Finish the tick (emit per-tick events)
        - poll_events(): Return drag events since last poll

    Examples:
        >>> class ReplaySource(InputSource):
        ...     def __init__(self, events):
        ...         self._events = list(events)
        ...     def handle_event(self, event):
        ...         return False
        ...     def update(self, dt):
        ...         pass
        ...     def poll_events(self):
        ...         events, self._events = self._events, []
        ...         return events
    """

    @abstractmethod
    def handle_event(self, event: pygame.event.Event) -> bool:
        """Consume a pygame event.

        Returns:
            True if the event was relevant to this source
        """
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Finish the current tick.

        Args:
            dt: Delta time in seconds since last update
        """
        pass

    @abstractmethod
    def poll_events(self) -> List[DragEvent]:
        """Get drag events since last poll and clear the internal queue."""
        pass

    def clear(self) -> None:
        """Discard pending drag events."""
        self.poll_events()
