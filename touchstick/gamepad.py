"""
Gamepad axis bridge.

Makes mapped touch sticks look like one regular game controller to code
that reads pygame joystick events. Every tick each mapped stick sends
two JOYAXISMOTION events, and the synthetic device announces itself with
JOYDEVICEADDED when the first mapped stick appears and JOYDEVICEREMOVED
when the last one goes away.

Usage:
    bridge = GamepadAxisBridge(engine, post=pygame.event.post)
    bridge.map_stick('left', GamepadMapping.LEFT_STICK)
    ...
    bridge.update()  # once per tick, after engine.update()
"""

from enum import IntEnum
from typing import Callable, ClassVar, Dict, Hashable, List, Optional, TYPE_CHECKING, Union

import pygame
from pydantic import BaseModel, ConfigDict

from touchstick import config
from touchstick.logging import emit_record, ensure_sink, get_logger

if TYPE_CHECKING:
    from touchstick.engine import TouchStickEngine

log = get_logger('gamepad')


class GamepadAxis(IntEnum):
    """Axis channels in SDL game controller order."""
    LEFT_X = 0
    LEFT_Y = 1
    RIGHT_X = 2
    RIGHT_Y = 3


class GamepadMapping(BaseModel):
    """Pair of axis channels that receive a stick's x and y values."""
    x_axis: GamepadAxis
    y_axis: GamepadAxis

    LEFT_STICK: ClassVar['GamepadMapping']
    RIGHT_STICK: ClassVar['GamepadMapping']

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_name(cls, name: str) -> 'GamepadMapping':
        """Look up a preset by name ('left_stick' or 'right_stick')."""
        presets = {
            'left_stick': cls.LEFT_STICK,
            'right_stick': cls.RIGHT_STICK,
        }
        key = name.strip().lower().replace('-', '_').replace(' ', '_')
        if key not in presets:
            raise ValueError(f"Unknown gamepad mapping {name!r}, expected one of: {', '.join(presets)}")
        return presets[key]


GamepadMapping.LEFT_STICK = GamepadMapping(x_axis=GamepadAxis.LEFT_X, y_axis=GamepadAxis.LEFT_Y)
GamepadMapping.RIGHT_STICK = GamepadMapping(x_axis=GamepadAxis.RIGHT_X, y_axis=GamepadAxis.RIGHT_Y)


class GamepadAxisBridge:
    """Republishes stick values as a synthetic pygame joystick.

    The bridge only reads stick state; it never changes it. Connection
    notifications are edge-triggered on the presence of at least one
    mapped stick that is still registered with the engine.

    Args:
        engine: Engine that owns the sticks
        post: Optional callable receiving every notification
            (pygame.event.post in a running game)
        device_id: Instance id reported for the synthetic device
        name: Device name reported on connect
    """

    def __init__(
        self,
        engine: 'TouchStickEngine',
        post: Optional[Callable[[pygame.event.Event], None]] = None,
        device_id: int = config.TOUCH_GAMEPAD_ID,
        name: str = config.TOUCH_GAMEPAD_NAME,
    ):
        self._engine = engine
        self._post = post
        self.device_id = device_id
        self.name = name
        self._mappings: Dict[Hashable, GamepadMapping] = {}
        self._connected = False

    @property
    def connected(self) -> bool:
        """Whether the synthetic device is currently announced as connected."""
        return self._connected

    def map_stick(self, stick_id: Hashable, mapping: Union[GamepadMapping, str]) -> None:
        """Route a stick's value to a pair of axis channels."""
        if isinstance(mapping, str):
            mapping = GamepadMapping.from_name(mapping)
        self._mappings[stick_id] = mapping

    def unmap_stick(self, stick_id: Hashable) -> None:
        """Stop routing a stick. Unknown ids are ignored."""
        self._mappings.pop(stick_id, None)

    def mapping_for(self, stick_id: Hashable) -> Optional[GamepadMapping]:
        return self._mappings.get(stick_id)

    def update(self) -> List[pygame.event.Event]:
        """Emit this tick's connection and axis notifications."""
        notifications: List[pygame.event.Event] = []

        mapped = [
            (self._engine.get(stick_id), mapping)
            for stick_id, mapping in self._mappings.items()
            if stick_id in self._engine
        ]

        present = bool(mapped)
        if present != self._connected:
            self._connected = present
            notifications.append(self._connection_event(present))

        for stick, mapping in mapped:
            value = stick.value
            log.trace("axis %s: x=%.3f y=%.3f", stick.id, value.x, value.y)
            notifications.append(self._axis_event(mapping.x_axis, value.x))
            notifications.append(self._axis_event(mapping.y_axis, value.y))

        if self._post is not None:
            for event in notifications:
                self._post(event)
        return notifications

    def _connection_event(self, connected: bool) -> pygame.event.Event:
        log.info("synthetic gamepad %s (id=%d)", 'connected' if connected else 'disconnected', self.device_id)
        ensure_sink('gamepad')
        emit_record('gamepad', {'type': 'connection', 'connected': connected, 'device_id': self.device_id})
        if connected:
            return pygame.event.Event(
                pygame.JOYDEVICEADDED,
                device_index=self.device_id,
                instance_id=self.device_id,
                name=self.name,
            )
        return pygame.event.Event(pygame.JOYDEVICEREMOVED, instance_id=self.device_id)

    def _axis_event(self, axis: GamepadAxis, value: float) -> pygame.event.Event:
        return pygame.event.Event(
            pygame.JOYAXISMOTION,
            instance_id=self.device_id,
            joy=self.device_id,
            axis=int(axis),
            value=value,
        )
