"""
Hit Testing Component
This module classifies pointer-down positions into drag targets.

Regions are produced in paint order, so later regions sit on top. While a
drag is in progress the regions of inactive stops are disabled, which keeps
a gesture from switching to another stop midway.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .color_stops import ColorStopCollection
from .drag_controller import DragController, DragTarget
from .geometry import LineSegment, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HitRadii:
    """Circular hit radii, in host coordinates."""
    handle: float = 8.0
    stop: float = 8.0
    active_stop: float = 9.0


@dataclass(frozen=True)
class HitRegion:
    """A circular pointer-down region for one drag target."""
    target: DragTarget
    center: Point
    radius: float
    enabled: bool = True

    def contains(self, point: Point) -> bool:
        return self.center.distance_to(point) <= self.radius


def build_hit_regions(segment: LineSegment,
                      colors: ColorStopCollection,
                      controller: DragController,
                      radii: HitRadii = HitRadii()) -> List[HitRegion]:
    """
    Build hit regions in paint order.

    Args:
        segment: Current gradient axis
        colors: Current color stops
        controller: Supplies the active target and the gating rule
        radii: Region sizes

    Returns:
        Regions for the start handle, end handle and every stop, with the
        active stop raised to the top
    """
    regions = [
        HitRegion(DragTarget.start_handle(), segment.start, radii.handle,
                  controller.is_hit_testable(DragTarget.start_handle())),
        HitRegion(DragTarget.end_handle(), segment.end, radii.handle,
                  controller.is_hit_testable(DragTarget.end_handle())),
    ]

    active = None
    for stop in colors:
        target = DragTarget.stop(stop.id)
        is_active = controller.target == target
        region = HitRegion(
            target,
            segment.point_at(stop.offset / 100),
            radii.active_stop if is_active else radii.stop,
            controller.is_hit_testable(target),
        )
        if is_active:
            active = region
        else:
            regions.append(region)

    if active is not None:
        regions.append(active)
    return regions


def hit_test(regions: Sequence[HitRegion], point: Point) -> Optional[DragTarget]:
    """Return the topmost enabled region's target under the point."""
    for region in reversed(regions):
        if region.enabled and region.contains(point):
            return region.target
    return None
