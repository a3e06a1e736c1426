"""
Shared models library for the virtual stick system.

This package provides the Pydantic primitives used across the system:
- Point2D / Vector2D: positions, offsets and stick values
- Rect: axis-aligned interactable zones

Usage:
    >>> from models import Vector2D, Rect
    >>> zone = Rect.from_xywh(20.0, 400.0, 150.0, 150.0)
"""

from .primitives import (
    Point2D,
    Vector2D,  # Alias for Point2D
    ZERO,
    Rect,
)

__all__ = [
    'Point2D',
    'Vector2D',
    'ZERO',
    'Rect',
]
