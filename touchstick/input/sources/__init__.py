"""
Drag input source implementations.
"""

from touchstick.input.sources.base import InputSource
from touchstick.input.sources.mouse import MouseDragSource
from touchstick.input.sources.touch import TouchDragSource

__all__ = ['InputSource', 'MouseDragSource', 'TouchDragSource']
