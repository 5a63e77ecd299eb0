"""
Core Components Package for the Gradient Editor
This package provides the geometry, color stop store and drag interaction engine.
"""

from .geometry import (
    Point,
    LineSegment,
    SegmentProjection,
    project,
    offset_for,
    clamp,
)
from .color_stops import (
    RGBA,
    WHITE,
    ColorStop,
    ColorStopCollection,
    ColorStopStore,
    DEFAULT_STOPS,
    build_collection,
    new_stop_id,
)
from .drag_controller import (
    DragController,
    DragContext,
    DragState,
    DragTarget,
    TargetKind,
    PointerDown,
    PointerMove,
    PointerUp,
    PointerEventSource,
)
from .hit_testing import (
    HitRadii,
    HitRegion,
    build_hit_regions,
    hit_test,
)

__all__ = [
    # Geometry
    'Point',
    'LineSegment',
    'SegmentProjection',
    'project',
    'offset_for',
    'clamp',

    # Color Stops
    'RGBA',
    'WHITE',
    'ColorStop',
    'ColorStopCollection',
    'ColorStopStore',
    'DEFAULT_STOPS',
    'build_collection',
    'new_stop_id',

    # Drag Interaction
    'DragController',
    'DragContext',
    'DragState',
    'DragTarget',
    'TargetKind',
    'PointerDown',
    'PointerMove',
    'PointerUp',
    'PointerEventSource',

    # Hit Testing
    'HitRadii',
    'HitRegion',
    'build_hit_regions',
    'hit_test',
]
