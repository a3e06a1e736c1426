"""
Per-tick wiring of the stick pipeline.

    pygame events -> InputManager -> TouchStickEngine -> StickEvents
                                                      -> GamepadAxisBridge

Usage:
    system = TouchStickSystem.with_default_sources(window_size=(1280, 720))
    system.engine.create_stick('move', behavior='fixed')

    while running:
        for event in pygame.event.get():
            system.handle_event(event)
        for stick_event in system.tick(dt, zones={'move': move_rect}):
            ...
"""

from typing import Generic, Hashable, Iterable, List, Mapping, Optional, Tuple, TypeVar, Union

import pygame

from models import Rect
from touchstick.definitions import StickConfig
from touchstick.engine import TouchStickEngine, ZoneUpdate
from touchstick.events import StickEvent
from touchstick.gamepad import GamepadAxisBridge
from touchstick.input.input_manager import InputManager
from touchstick.input.sources import MouseDragSource, TouchDragSource
from touchstick.logging import get_logger
from touchstick.stick import Stick

S = TypeVar('S', bound=Hashable)

log = get_logger('system')


class TouchStickSystem(Generic[S]):
    """Runs normalize -> arbitrate -> emit -> bridge once per tick.

    Args:
        engine: Stick engine (a new empty one if omitted)
        input_manager: Drag sources (none if omitted)
        bridge: Optional gamepad bridge reading the engine's sticks
    """

    def __init__(
        self,
        engine: Optional[TouchStickEngine[S]] = None,
        input_manager: Optional[InputManager] = None,
        bridge: Optional[GamepadAxisBridge] = None,
    ):
        self.engine: TouchStickEngine[S] = engine if engine is not None else TouchStickEngine()
        self.input_manager = input_manager if input_manager is not None else InputManager()
        self.bridge = bridge
        self.frame = 0

    @classmethod
    def with_default_sources(cls, window_size: Tuple[int, int], **kwargs) -> 'TouchStickSystem[S]':
        """System with mouse and touch sources attached."""
        manager = InputManager([MouseDragSource(), TouchDragSource(window_size)])
        return cls(input_manager=manager, **kwargs)

    def attach_gamepad_bridge(self, post=None) -> GamepadAxisBridge:
        """Create a gamepad bridge over this system's engine."""
        self.bridge = GamepadAxisBridge(self.engine, post=post)
        return self.bridge

    def add_sticks(self, configs: Iterable[StickConfig]) -> List[Stick[S]]:
        """Register sticks from definitions, mapping gamepad axes where given.

        Gamepad mappings need a bridge; one is attached on first use.
        """
        added = []
        for stick_config in configs:
            added.append(self.engine.add_from_config(stick_config))
            if stick_config.gamepad is not None:
                if self.bridge is None:
                    self.attach_gamepad_bridge()
                self.bridge.map_stick(stick_config.id, stick_config.gamepad)
        return added

    def handle_event(self, event: pygame.event.Event) -> bool:
        return self.input_manager.handle_event(event)

    def handle_events(self, events: Iterable[pygame.event.Event]) -> None:
        self.input_manager.handle_events(events)

    def tick(
        self,
        dt: float,
        zones: Union[Mapping[S, Rect], Iterable[ZoneUpdate[S]], None] = None,
    ) -> List[StickEvent]:
        """Run one tick.

        Args:
            dt: Delta time in seconds since last tick
            zones: This tick's interactable zones from layout, either a
                mapping of stick id to Rect or ZoneUpdate messages

        Returns:
            Stick events produced this tick, plus any left queued by
            direct engine.update() calls since the last drain
        """
        if zones is not None:
            if isinstance(zones, Mapping):
                for stick_id, zone in zones.items():
                    self.engine.set_zone(stick_id, zone)
            else:
                self.engine.apply_zone_updates(zones)

        self.input_manager.update(dt)
        drag_events = self.input_manager.get_events()
        if drag_events:
            log.trace("frame %d: %d drag events", self.frame, len(drag_events))

        self.engine.update(drag_events)
        stick_events = self.engine.drain_events()

        if self.bridge is not None:
            self.bridge.update()

        self.frame += 1
        return stick_events
