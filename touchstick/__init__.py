"""
Touchstick - virtual analog sticks for touch and mouse.

Turns pointer drags over on-screen zones into normalized 2D stick values,
a Press/Drag/Release event stream, and optionally a synthetic gamepad.

Usage:
    from touchstick import TouchStickEngine, DragEvent
    from models import Rect, Vector2D

    engine = TouchStickEngine()
    engine.create_stick('move', behavior='fixed', dead_zone=0.1)
    engine.set_zone('move', Rect.from_xywh(20, 500, 150, 150))
    events = engine.update([DragEvent.start(1, Vector2D(x=95, y=575))])
"""

from touchstick.behavior import StickBehavior
from touchstick.definitions import StickConfig, load_stick_configs
from touchstick.engine import TouchStickEngine, ZoneUpdate
from touchstick.events import StickEvent, StickEventType
from touchstick.gamepad import GamepadAxis, GamepadAxisBridge, GamepadMapping
from touchstick.input import DragEvent, DragEventType, InputManager
from touchstick.placement import knob_center, outline_center
from touchstick.stick import Stick
from touchstick.system import TouchStickSystem

__all__ = [
    'DragEvent',
    'DragEventType',
    'GamepadAxis',
    'GamepadAxisBridge',
    'GamepadMapping',
    'InputManager',
    'Stick',
    'StickBehavior',
    'StickConfig',
    'StickEvent',
    'StickEventType',
    'TouchStickEngine',
    'TouchStickSystem',
    'ZoneUpdate',
    'knob_center',
    'load_stick_configs',
    'outline_center',
]
