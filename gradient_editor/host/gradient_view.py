"""
Gradient View Component
This module hosts the drag controller on a matplotlib figure.

The view owns the canonical gradient endpoints, paints the gradient, the
axis line, both handles and every color stop, and translates matplotlib
mouse events into pointer events for the controller.
"""

import logging
from typing import Any, Callable, Dict, Optional

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import to_rgb
from matplotlib.figure import Figure
from matplotlib.patches import Circle
from matplotlib.widgets import Button

from ..config import EditorSettings, get_view_config
from ..core.color_stops import WHITE, ColorStopCollection, ColorStopStore
from ..core.drag_controller import (
    DragContext,
    DragController,
    DragTarget,
    PointerDown,
    PointerEventSource,
    PointerMove,
    PointerUp,
)
from ..core.geometry import ORIGIN, LineSegment, Point
from ..core.hit_testing import build_hit_regions, hit_test
from ..utils.error_handling import ErrorCategory, ErrorHandlingSystem
from .renderer import checkerboard, composite_over, render_linear_gradient

logger = logging.getLogger(__name__)

LEFT_BUTTON = 1


class MatplotlibPointerSource(PointerEventSource):
    """Attaches pointer listeners to a matplotlib canvas."""

    EVENT_NAMES = {
        PointerEventSource.MOVE: 'motion_notify_event',
        PointerEventSource.UP: 'button_release_event',
    }

    def __init__(self, canvas, to_client: Callable[[Any], Point]):
        """
        Args:
            canvas: Matplotlib FigureCanvas
            to_client: Converts a matplotlib MouseEvent to a client position
        """
        self.canvas = canvas
        self.to_client = to_client
        self.connected: Dict[int, str] = {}

    def connect(self, kind: str, handler: Callable[[Any], None]) -> int:
        event_name = self.EVENT_NAMES[kind]
        event_type = PointerMove if kind == PointerEventSource.MOVE else PointerUp

        def on_event(event):
            handler(event_type(self.to_client(event)))

        cid = self.canvas.mpl_connect(event_name, on_event)
        self.connected[cid] = event_name
        return cid

    def disconnect(self, token: int) -> None:
        self.canvas.mpl_disconnect(token)
        self.connected.pop(token, None)


class GradientView:
    """
    Matplotlib host for the gradient editor.
    """

    def __init__(self,
                 store: ColorStopStore,
                 settings: Optional[EditorSettings] = None,
                 axes=None,
                 config: Optional[Dict[str, Any]] = None,
                 error_handler: Optional[ErrorHandlingSystem] = None):
        """
        Initialize the gradient view.

        Args:
            store: Color stop store shared with the controller
            settings: Editor settings (canvas size, endpoints, radii)
            axes: Matplotlib axes to draw into; a headless figure is created if omitted
            config: View configuration overrides
            error_handler: Receives event handling failures
        """
        self.store = store
        self.settings = settings or EditorSettings()
        self.config = get_view_config(self.settings.view_preset, **(config or {}))
        self.error_handler = error_handler or store.error_handler

        if axes is None:
            figure = Figure(figsize=(6, 6))
            FigureCanvasAgg(figure)
            axes = figure.add_subplot(111)
        self.ax = axes
        self.figure = axes.figure
        self.canvas = self.figure.canvas

        self.width = self.settings.canvas_width
        self.height = self.settings.canvas_height
        self.radii = self.settings.hit_radii()
        self._segment = self.settings.initial_segment()
        self._closed = False

        self.pointer_source = MatplotlibPointerSource(self.canvas, self.to_client)
        self.controller = DragController(
            DragContext(
                get_segment=lambda: self._segment,
                propose_start=self.set_start,
                propose_end=self.set_end,
                container_origin=self._container_origin,
                pointer_source=self.pointer_source,
            ),
            store,
            self.error_handler,
        )
        self.controller.add_callback('state_changed', lambda *_: self.redraw())

        image_config = self.config['image']
        light, dark = (to_rgb(color) for color in image_config['checker_colors'])
        self._background = checkerboard(
            self.width, self.height, size=image_config['checker_size'], light=light, dark=dark,
        ) if image_config['show_checkers'] else None

        self._setup_axes()
        self._create_artists()
        self._create_controls()

        self._cids = [
            self.canvas.mpl_connect('button_press_event', self._on_press),
            self.canvas.mpl_connect('close_event', self._on_close),
        ]
        self.store.add_callback('colors_changed', self._on_colors_changed)

        self.redraw()
        logger.info(f"GradientView initialized ({self.width}x{self.height})")

    # Geometry owned by the host

    @property
    def segment(self) -> LineSegment:
        return self._segment

    def set_start(self, point: Point):
        """Accept a proposed start endpoint; endpoints are never bounds-clamped."""
        self._segment = self._segment.with_start(point)
        self.redraw()

    def set_end(self, point: Point):
        self._segment = self._segment.with_end(point)
        self.redraw()

    def to_client(self, event) -> Point:
        """Convert a matplotlib event's display position into canvas coordinates."""
        x, y = self.ax.transData.inverted().transform((event.x, event.y))
        return Point(float(x), float(y))

    def _container_origin(self) -> Optional[Point]:
        if self._closed or self.ax.figure is None:
            return None
        return ORIGIN

    # Drawing

    def _setup_axes(self):
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.set_aspect('equal')
        self.ax.set_axis_off()
        self.figure.set_facecolor(self.config['colors']['background'])

    def _create_artists(self):
        colors = self.config['colors']
        line_config = self.config['line']
        handle_config = self.config['handles']

        self.image_artist = self.ax.imshow(
            self._render_image(),
            extent=(0, self.width, self.height, 0),
            interpolation=self.config['image']['interpolation'],
            zorder=0,
        )

        self.line_artist, = self.ax.plot(
            [], [],
            color=colors['line'],
            linewidth=line_config['linewidth'],
            alpha=line_config['alpha'],
            linestyle=line_config['linestyle'],
            zorder=line_config['z_order'],
        )

        self.handle_artists: Dict[str, Circle] = {}
        for name in ('start', 'end'):
            circle = Circle((0, 0), self.radii.handle,
                            facecolor=colors['handle'], edgecolor=colors['handle_edge'],
                            linewidth=handle_config['edge_width'],
                            zorder=handle_config['z_order'])
            self.ax.add_patch(circle)
            self.handle_artists[name] = circle

        self.stop_artists: Dict[str, Circle] = {}

    def _create_controls(self):
        controls = self.config['controls']
        self.button_ax = self.figure.add_axes(controls['add_button_rect'])
        self.add_button = Button(self.button_ax, controls['add_button_label'])
        self.add_button.on_clicked(self._on_add_clicked)

    def _render_image(self):
        image = render_linear_gradient(self.width, self.height, self._segment, self.store.colors)
        if self._background is None:
            return image
        return composite_over(image, self._background)

    def redraw(self):
        """Synchronize every artist with the current endpoints and stops."""
        if self._closed:
            return
        try:
            self.image_artist.set_data(self._render_image())

            start, end = self._segment.start, self._segment.end
            self.line_artist.set_data([start.x, end.x], [start.y, end.y])
            self.handle_artists['start'].center = start.to_tuple()
            self.handle_artists['end'].center = end.to_tuple()

            self._sync_stop_artists(self.store.colors)
            self.canvas.draw_idle()
        except Exception as e:
            self.error_handler.handle_error(
                e, component='GradientView', operation='redraw',
                category=ErrorCategory.RENDERING)

    def _sync_stop_artists(self, colors: ColorStopCollection):
        stop_config = self.config['stops']
        active = self.controller.target

        for stop_id in list(self.stop_artists):
            if stop_id not in colors:
                self.stop_artists.pop(stop_id).remove()

        for index, stop in enumerate(colors):
            circle = self.stop_artists.get(stop.id)
            if circle is None:
                circle = Circle((0, 0), self.radii.stop,
                                edgecolor=self.config['colors']['stop_edge'],
                                linewidth=stop_config['edge_width'])
                self.ax.add_patch(circle)
                self.stop_artists[stop.id] = circle

            is_active = active == DragTarget.stop(stop.id)
            circle.center = self._segment.point_at(stop.offset / 100).to_tuple()
            circle.set_facecolor(stop.rgba.to_mpl())
            circle.set_radius(self.radii.active_stop if is_active else self.radii.stop)
            # later stops paint above earlier ones; the dragged stop above all
            circle.set_zorder(stop_config['active_z_order'] if is_active
                              else stop_config['z_order'] + index * 1e-3)

    # Event handlers

    def _on_press(self, event):
        try:
            if event.inaxes is not self.ax:
                return
            point = self.to_client(event)
            regions = build_hit_regions(self._segment, self.store.colors, self.controller, self.radii)
            target = hit_test(regions, point)
            if target is None:
                return

            if event.button == self.config['controls']['remove_button']:
                if target.is_stop and not self.controller.is_dragging:
                    self.store.remove_color(target.stop_id)
                return

            if event.button == LEFT_BUTTON:
                self.controller.handle_event(PointerDown(target, point))
        except Exception as e:
            self.error_handler.handle_error(
                e, component='GradientView', operation='button_press',
                category=ErrorCategory.INTERACTION)

    def _on_add_clicked(self, _event):
        self.store.add_color(WHITE, 0)

    def _on_colors_changed(self, _colors: ColorStopCollection):
        self.redraw()

    def _on_close(self, _event):
        self.close()

    def close(self):
        """Tear down: release drag listeners and detach from the store."""
        if self._closed:
            return
        self.controller.close()
        self._closed = True
        for cid in self._cids:
            self.canvas.mpl_disconnect(cid)
        self._cids = []
        self.store.remove_callback('colors_changed', self._on_colors_changed)
        logger.info("GradientView closed")
