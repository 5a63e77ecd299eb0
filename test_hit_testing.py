#!/usr/bin/env python3
"""
Tests for pointer-down classification
"""

from unittest.mock import Mock

from gradient_editor.core.color_stops import RGBA, ColorStop, ColorStopCollection, ColorStopStore
from gradient_editor.core.drag_controller import DragContext, DragController, DragTarget
from gradient_editor.core.geometry import ORIGIN, LineSegment, Point
from gradient_editor.core.hit_testing import HitRadii, HitRegion, build_hit_regions, hit_test

SEGMENT = LineSegment(Point(0, 0), Point(200, 0))


def make_setup(*stops):
    colors = ColorStopCollection(stops or [
        ColorStop('a', RGBA(0, 0, 0, 1.0), 25),
        ColorStop('b', RGBA(255, 255, 255, 1.0), 75),
    ])
    store = ColorStopStore(colors)
    controller = DragController(
        DragContext(
            get_segment=lambda: SEGMENT,
            propose_start=Mock(),
            propose_end=Mock(),
            container_origin=lambda: ORIGIN,
        ),
        store,
    )
    return controller, store


def test_regions_follow_paint_order():
    controller, store = make_setup(
        ColorStop('late', RGBA(0, 0, 0, 1.0), 90),
        ColorStop('early', RGBA(0, 0, 0, 1.0), 10),
    )

    regions = build_hit_regions(SEGMENT, store.colors, controller)

    assert [region.target for region in regions] == [
        DragTarget.start_handle(),
        DragTarget.end_handle(),
        DragTarget.stop('early'),
        DragTarget.stop('late'),
    ]
    assert regions[2].center == Point(20, 0)
    assert all(region.enabled for region in regions)


def test_hit_test_prefers_topmost_region():
    controller, store = make_setup(ColorStop('first', RGBA(0, 0, 0, 1.0), 0))

    regions = build_hit_regions(SEGMENT, store.colors, controller)

    # the stop at offset 0 is painted above the start handle
    assert hit_test(regions, Point(1, 1)) == DragTarget.stop('first')
    assert hit_test(regions, Point(199, 0)) == DragTarget.end_handle()
    assert hit_test(regions, Point(100, 40)) is None


def test_active_stop_is_raised_and_enlarged():
    controller, store = make_setup()
    controller.pointer_down(DragTarget.stop('a'), Point(50, 0))

    regions = build_hit_regions(SEGMENT, store.colors, controller, HitRadii(handle=6, stop=8, active_stop=12))

    assert regions[-1].target == DragTarget.stop('a')
    assert regions[-1].radius == 12
    assert regions[0].radius == 6
    assert regions[2].radius == 8


def test_inactive_stops_cannot_be_hit_during_a_drag():
    controller, store = make_setup()
    controller.pointer_down(DragTarget.stop('a'), Point(50, 0))

    regions = build_hit_regions(SEGMENT, store.colors, controller)
    enabled = {region.target: region.enabled for region in regions}

    assert enabled[DragTarget.stop('a')]
    assert not enabled[DragTarget.stop('b')]
    assert enabled[DragTarget.start_handle()]
    assert enabled[DragTarget.end_handle()]
    assert hit_test(regions, Point(150, 0)) is None
    assert hit_test(regions, Point(50, 0)) == DragTarget.stop('a')


def test_stops_cannot_be_hit_during_a_handle_drag():
    controller, store = make_setup()
    controller.pointer_down(DragTarget.end_handle(), Point(200, 0))

    regions = build_hit_regions(SEGMENT, store.colors, controller)

    assert hit_test(regions, Point(50, 0)) is None
    assert hit_test(regions, Point(0, 0)) == DragTarget.start_handle()


def test_region_contains_boundary():
    region = HitRegion(DragTarget.start_handle(), Point(0, 0), 8)

    assert region.contains(Point(8, 0))
    assert not region.contains(Point(8, 1))
