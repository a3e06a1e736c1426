"""
Input abstraction layer for the stick engine.

Reduces touch and mouse input to one stream of pointer drag events.
"""

from touchstick.input.drag_event import DragEvent, DragEventType
from touchstick.input.input_manager import InputManager
from touchstick.input.normalizer import (
    MouseButtonRecord,
    MouseButtonState,
    TouchPhase,
    TouchRecord,
    drag_events_from_mouse,
    drag_events_from_touches,
)

__all__ = [
    'DragEvent',
    'DragEventType',
    'InputManager',
    'MouseButtonRecord',
    'MouseButtonState',
    'TouchPhase',
    'TouchRecord',
    'drag_events_from_mouse',
    'drag_events_from_touches',
]
