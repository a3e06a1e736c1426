"""
Input manager for the stick engine.

This module provides the InputManager class that fans pygame events out
to every active drag source and merges their drag events into one
per-tick batch for the engine.
"""

from typing import Iterable, List

import pygame

from touchstick.input.drag_event import DragEvent
from touchstick.input.sources.base import InputSource


class InputManager:
    """Manages the active drag sources and provides unified event access.

    Unlike a single-device setup, touch and mouse are live at the same
    time, so every event is offered to every source. Within a tick, the
    batch holds each source's events in order, sources in registration
    order.

    Examples:
        >>> from touchstick.input.sources import MouseDragSource, TouchDragSource
        >>> manager = InputManager([MouseDragSource(), TouchDragSource((1280, 720))])
        >>> for event in pygame.event.get():
        ...     manager.handle_event(event)
        >>> manager.update(0.016)
        >>> drag_events = manager.get_events()
    """

    def __init__(self, sources: Iterable[InputSource] = ()):
        self._sources: List[InputSource] = []
        for source in sources:
            self.add_source(source)

    def add_source(self, source: InputSource) -> None:
        """Add a drag source.

        Raises:
            TypeError: If source is not an instance of InputSource
        """
        if not isinstance(source, InputSource):
            raise TypeError(
                f"source must be an instance of InputSource, got {type(source).__name__}"
            )
        self._sources.append(source)

    def remove_source(self, source: InputSource) -> None:
        """Remove a drag source, discarding its pending events."""
        self._sources.remove(source)
        source.clear()

    @property
    def sources(self) -> List[InputSource]:
        return list(self._sources)

    def has_source(self) -> bool:
        return bool(self._sources)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Offer a pygame event to every source.

        Returns:
            True if any source consumed it
        """
        handled = False
        for source in self._sources:
            handled = source.handle_event(event) or handled
        return handled

    def handle_events(self, events: Iterable[pygame.event.Event]) -> None:
        for event in events:
            self.handle_event(event)

    def update(self, dt: float) -> None:
        """Finish the tick on every source."""
        for source in self._sources:
            source.update(dt)

    def get_events(self) -> List[DragEvent]:
        """Collect this tick's drag events from all sources."""
        events: List[DragEvent] = []
        for source in self._sources:
            events.extend(source.poll_events())
        return events

    def clear_events(self) -> None:
        """Discard pending drag events from all sources.

        Useful when transitioning between screens to avoid stale drags.
        """
        for source in self._sources:
            source.clear()
