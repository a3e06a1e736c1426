"""
Shared primitive data types for the virtual stick system.

This module provides the basic geometric types used throughout the
codebase: 2D vectors for positions, offsets and stick values, and
axis-aligned rectangles for interactable zones.

Coordinate conventions:
- Input space: origin top-left, y increasing downward (pygame convention)
- Output space: y increasing upward (stick values)
"""

import math
import sys
from typing import Any, Tuple, Union

from pydantic import BaseModel, ConfigDict, computed_field, model_validator


class Point2D(BaseModel):
    """Immutable 2D point/vector for positions, offsets, and stick values.

    This is the unified type used throughout the system for any 2D coordinate,
    whether it's a pointer position, a drag offset, or a normalized value.

    Attributes:
        x: X coordinate (horizontal)
        y: Y coordinate (vertical)

    Examples:
        >>> pos = Point2D(x=100.0, y=200.0)
        >>> (pos - Point2D(x=40.0, y=200.0)).length()
        60.0
        >>> Point2D(x=3.0, y=-4.0).flip_y()
        Point2D(x=3.00, y=4.00)
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)  # Immutable

    def __add__(self, other: 'Point2D') -> 'Point2D':
        return Point2D(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: 'Point2D') -> 'Point2D':
        return Point2D(x=self.x - other.x, y=self.y - other.y)

    def __mul__(self, scalar: float) -> 'Point2D':
        return Point2D(x=self.x * scalar, y=self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, other: Union[float, 'Point2D']) -> 'Point2D':
        """Divide by a scalar, or component-wise by another vector."""
        if isinstance(other, Point2D):
            return Point2D(x=self.x / other.x, y=self.y / other.y)
        return Point2D(x=self.x / other, y=self.y / other)

    def __neg__(self) -> 'Point2D':
        return Point2D(x=-self.x, y=-self.y)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def normalize(self) -> 'Point2D':
        """Return the unit vector in the same direction.

        The zero vector has no direction and is returned unchanged.
        """
        length = self.length()
        if length == 0.0:
            return self
        return Point2D(x=self.x / length, y=self.y / length)

    def flip_y(self) -> 'Point2D':
        """Mirror across the x axis (converts between input and output space)."""
        return Point2D(x=self.x, y=-self.y)

    def is_zero(self) -> bool:
        """True when both components are exactly zero."""
        return self.x == 0.0 and self.y == 0.0

    def as_tuple(self) -> Tuple[float, float]:
        """Return as an (x, y) tuple for pygame compatibility."""
        return (self.x, self.y)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"

    __repr__ = __str__


# Vectors and points share one type
Vector2D = Point2D

ZERO = Vector2D(x=0.0, y=0.0)


class Rect(BaseModel):
    """Immutable axis-aligned rectangle defined by its min and max corners.

    Used for the interactable zone of a stick. Lives in input space, so
    `min` is the top-left corner and `max` the bottom-right one.

    A zero-extent rectangle is allowed: layout may not have run yet. Use
    `is_degenerate()` before dividing by the half size.

    Attributes:
        min: Top-left corner
        max: Bottom-right corner

    Examples:
        >>> zone = Rect.from_center_size(Vector2D(x=0, y=0), Vector2D(x=150, y=150))
        >>> zone.half_size
        Point2D(x=75.00, y=75.00)
        >>> zone.contains(Vector2D(x=75.0, y=-10.0))
        True
    """
    min: Point2D
    max: Point2D

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def validate_corners(self) -> 'Rect':
        """Validate that max is not left of or above min."""
        if self.max.x < self.min.x or self.max.y < self.min.y:
            raise ValueError(
                f'Rect max corner must not be less than min corner, got min={self.min} max={self.max}'
            )
        return self

    @classmethod
    def from_center_size(cls, center: Point2D, size: Point2D) -> 'Rect':
        """Create a rectangle centered on `center` with total extent `size`."""
        half = size / 2.0
        return cls(min=center - half, max=center + half)

    @classmethod
    def from_xywh(cls, x: float, y: float, width: float, height: float) -> 'Rect':
        """Create from a top-left corner and dimensions."""
        return cls(
            min=Point2D(x=x, y=y),
            max=Point2D(x=x + width, y=y + height),
        )

    @classmethod
    def from_pygame(cls, rect: Any) -> 'Rect':
        """Create from a pygame.Rect (or anything with x/y/width/height)."""
        return cls.from_xywh(float(rect.x), float(rect.y), float(rect.width), float(rect.height))

    @classmethod
    def unbounded(cls) -> 'Rect':
        """Rectangle covering every finite point, centered on the origin.

        Used as the zone of a stick that has not been laid out yet.
        """
        limit = sys.float_info.max
        return cls(min=Point2D(x=-limit, y=-limit), max=Point2D(x=limit, y=limit))

    @computed_field
    @property
    def width(self) -> float:
        """Horizontal extent."""
        return self.max.x - self.min.x

    @computed_field
    @property
    def height(self) -> float:
        """Vertical extent."""
        return self.max.y - self.min.y

    @property
    def size(self) -> Point2D:
        """Extent as a vector (width, height)."""
        return Point2D(x=self.width, y=self.height)

    @property
    def half_size(self) -> Point2D:
        """Half of the extent on each axis."""
        return Point2D(x=self.width / 2.0, y=self.height / 2.0)

    @property
    def center(self) -> Point2D:
        """Center point of the rectangle."""
        return Point2D(
            x=self.min.x / 2.0 + self.max.x / 2.0,
            y=self.min.y / 2.0 + self.max.y / 2.0,
        )

    def contains(self, point: Point2D) -> bool:
        """Check if a point is inside the rectangle (edges included).

        Examples:
            >>> rect = Rect.from_xywh(0.0, 0.0, 100.0, 100.0)
            >>> rect.contains(Point2D(x=100.0, y=50.0))
            True
            >>> rect.contains(Point2D(x=150.0, y=50.0))
            False
        """
        return (self.min.x <= point.x <= self.max.x and
                self.min.y <= point.y <= self.max.y)

    def is_degenerate(self) -> bool:
        """True when either half extent is not strictly positive."""
        half = self.half_size
        return not (half.x > 0.0 and half.y > 0.0)

    def is_bounded(self) -> bool:
        """True when the extent is finite on both axes."""
        return math.isfinite(self.width) and math.isfinite(self.height)

    def __str__(self) -> str:
        """String representation for debugging."""
        return (f"Rect(x={self.min.x:.2f}, y={self.min.y:.2f}, "
                f"w={self.width:.2f}, h={self.height:.2f})")
