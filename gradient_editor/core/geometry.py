"""
Geometry Component
This module projects pointer positions onto the gradient axis.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    """2D coordinate in the host's local coordinate space."""
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple."""
        return (self.x, self.y)


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class LineSegment:
    """Gradient axis between two independently owned endpoints."""
    start: Point
    end: Point

    @property
    def dx(self) -> float:
        return self.end.x - self.start.x

    @property
    def dy(self) -> float:
        return self.end.y - self.start.y

    @property
    def length_squared(self) -> float:
        return self.dx * self.dx + self.dy * self.dy

    @property
    def is_degenerate(self) -> bool:
        """True when start and end coincide."""
        return self.length_squared == 0

    def point_at(self, t: float) -> Point:
        """Get point at parameter t (0=start, 1=end)."""
        return Point(self.start.x + self.dx * t, self.start.y + self.dy * t)

    def with_start(self, start: Point) -> 'LineSegment':
        return LineSegment(start, self.end)

    def with_end(self, end: Point) -> 'LineSegment':
        return LineSegment(self.start, end)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]; NaN maps to lower."""
    if math.isnan(value):
        return lower
    return max(lower, min(upper, value))


@dataclass(frozen=True)
class SegmentProjection:
    """
    Segment geometry frozen at one instant.

    A stop drag captures one of these when it begins so that every
    subsequent move projects against the axis as it was at that moment.
    """
    start: Point
    dx: float
    dy: float
    denom: float

    @classmethod
    def from_segment(cls, segment: LineSegment) -> 'SegmentProjection':
        length_sq = segment.length_squared
        if length_sq == 0:
            # zero-length axis: any denominator gives a clamped, finite t
            logger.debug("Degenerate segment at %s, using unit denominator", segment.start)
            length_sq = 1.0
        return cls(segment.start, segment.dx, segment.dy, length_sq)

    def parameter(self, point: Point) -> float:
        """Normalized position of the point's projection, clamped to [0, 1]."""
        rel_x = point.x - self.start.x
        rel_y = point.y - self.start.y
        t = (rel_x * self.dx + rel_y * self.dy) / self.denom
        return clamp(t, 0.0, 1.0)

    def offset(self, point: Point) -> float:
        """Projection expressed as a stop offset percentage."""
        return self.parameter(point) * 100


def project(segment: LineSegment, point: Point) -> float:
    """
    Project a point onto a segment.

    Args:
        segment: Gradient axis
        point: Point in the same coordinate space as the segment

    Returns:
        Projection parameter t in [0, 1]
    """
    return SegmentProjection.from_segment(segment).parameter(point)


def offset_for(segment: LineSegment, point: Point) -> float:
    """Offset percentage in [0, 100] for a point projected onto the segment."""
    return project(segment, point) * 100
