#!/usr/bin/env python3
"""
Tests for the matplotlib gradient view, driven by synthetic mouse events
"""

import pytest
from matplotlib.backend_bases import CloseEvent, MouseEvent

from gradient_editor.config import EditorSettings
from gradient_editor.core.color_stops import RGBA, WHITE, ColorStop, ColorStopCollection, ColorStopStore
from gradient_editor.core.drag_controller import DragState, DragTarget
from gradient_editor.core.geometry import Point
from gradient_editor.host.gradient_view import GradientView
from gradient_editor.utils.error_handling import ErrorHandlingSystem

LEFT, RIGHT = 1, 3


def fire(view, name, data_point, button=LEFT):
    """Dispatch a mouse event at a position given in canvas coordinates."""
    x, y = view.ax.transData.transform(data_point)
    event = MouseEvent(name, view.canvas, x, y, button=button)
    view.canvas.callbacks.process(name, event)
    return event


@pytest.fixture
def errors():
    return ErrorHandlingSystem({'log_errors': False})


@pytest.fixture
def store(errors):
    return ColorStopStore(ColorStopCollection([
        ColorStop('a', RGBA(0, 0, 0, 1.0), 25),
        ColorStop('b', WHITE, 75),
    ]), error_handler=errors)


@pytest.fixture
def view(store, errors):
    settings = EditorSettings(start=(100, 100), end=(500, 300))
    view = GradientView(store, settings, error_handler=errors)
    yield view
    view.close()


def test_initial_artists(view):
    assert view.segment.start == Point(100, 100)
    assert view.segment.end == Point(500, 300)
    assert set(view.stop_artists) == {'a', 'b'}
    assert view.stop_artists['a'].center == pytest.approx((200, 150))
    assert view.handle_artists['end'].center == pytest.approx((500, 300))
    assert view.image_artist.get_array().shape[:2] == (600, 600)


def test_end_handle_drag(view, errors):
    fire(view, 'button_press_event', (503, 298))
    assert view.controller.state == DragState.DRAGGING_END
    assert view.pointer_source.connected

    fire(view, 'motion_notify_event', (403, 198))
    assert view.segment.end.x == pytest.approx(400)
    assert view.segment.end.y == pytest.approx(200)
    assert view.handle_artists['end'].center == pytest.approx((400, 200))

    fire(view, 'button_release_event', (403, 198))
    assert view.controller.state == DragState.IDLE
    assert not view.pointer_source.connected
    assert not errors.get_error_history()


def test_endpoints_may_leave_the_canvas(view):
    fire(view, 'button_press_event', (100, 100))
    fire(view, 'motion_notify_event', (-50, 700))

    assert view.segment.start.x == pytest.approx(-50)
    assert view.segment.start.y == pytest.approx(700)


def test_stop_drag_updates_store(view, store):
    fire(view, 'button_press_event', (200, 150))
    assert view.controller.target == DragTarget.stop('a')
    assert view.stop_artists['a'].get_radius() == view.radii.active_stop

    fire(view, 'motion_notify_event', (300, 200))
    assert store.colors.find('a').offset == pytest.approx(50)
    assert view.stop_artists['a'].center == pytest.approx((300, 200))

    fire(view, 'button_release_event', (300, 200))
    assert view.controller.state == DragState.IDLE
    assert view.stop_artists['a'].get_radius() == view.radii.stop


def test_release_outside_axes_ends_drag(view):
    fire(view, 'button_press_event', (200, 150))

    event = MouseEvent('button_release_event', view.canvas, -40, -40, button=LEFT)
    view.canvas.callbacks.process('button_release_event', event)

    assert view.controller.state == DragState.IDLE
    assert not view.pointer_source.connected


def test_press_on_empty_area_does_nothing(view):
    fire(view, 'button_press_event', (550, 50))

    assert view.controller.state == DragState.IDLE
    assert not view.pointer_source.connected


def test_right_click_removes_stop(view, store):
    fire(view, 'button_press_event', (400, 250), button=RIGHT)

    assert store.colors.ids() == ['a']
    assert set(view.stop_artists) == {'a'}
    assert view.controller.state == DragState.IDLE


def test_add_button_inserts_stop(view, store):
    view._on_add_clicked(None)

    assert len(store.colors) == 3
    assert store.colors.ordered()[1].offset == 50
    assert len(view.stop_artists) == 3


def test_close_releases_everything(view, store, errors):
    fire(view, 'button_press_event', (200, 150))

    view.close()

    assert view.controller.state == DragState.IDLE
    assert not view.pointer_source.connected
    assert view._container_origin() is None
    assert view._on_colors_changed not in store.callbacks['colors_changed']

    store.add_color(WHITE)
    assert not errors.get_error_history()


def test_figure_close_event_tears_down(view):
    fire(view, 'button_press_event', (503, 298))

    view.canvas.callbacks.process('close_event', CloseEvent('close_event', view.canvas))

    assert view.controller.state == DragState.IDLE
    assert not view.pointer_source.connected
