"""
Gradient Renderer
Rasterizes a linear gradient into an RGBA numpy array for display.
"""

import logging

import numpy as np

from ..core.color_stops import ColorStopCollection
from ..core.geometry import LineSegment, SegmentProjection

logger = logging.getLogger(__name__)


def projection_grid(width: int, height: int, segment: LineSegment) -> np.ndarray:
    """
    Projection parameter t of every pixel center onto the segment.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        segment: Gradient axis in pixel coordinates (y grows downwards)

    Returns:
        Array of shape (height, width) with values in [0, 1]
    """
    projection = SegmentProjection.from_segment(segment)
    xs = np.arange(width, dtype=float) + 0.5
    ys = np.arange(height, dtype=float) + 0.5
    grid_x, grid_y = np.meshgrid(xs, ys)
    t = ((grid_x - projection.start.x) * projection.dx
         + (grid_y - projection.start.y) * projection.dy) / projection.denom
    return np.clip(t, 0.0, 1.0)


def render_linear_gradient(width: int, height: int,
                           segment: LineSegment,
                           colors: ColorStopCollection) -> np.ndarray:
    """
    Render the gradient as float RGBA in [0, 1], shape (height, width, 4).

    Pixels before the first stop take its color and pixels past the last
    stop take the last color. An empty collection or a zero-length axis
    renders transparent.
    """
    image = np.zeros((height, width, 4), dtype=float)
    stops = colors.ordered()
    if not stops or segment.is_degenerate:
        return image

    t = projection_grid(width, height, segment)
    positions = np.array([stop.offset / 100.0 for stop in stops])
    channels = np.array([stop.rgba.to_mpl() for stop in stops])

    for channel in range(4):
        image[..., channel] = np.interp(t, positions, channels[:, channel])

    return image


def checkerboard(width: int, height: int, size: int = 20,
                 light=(0.8, 0.8, 0.8), dark=(0.6, 0.6, 0.6)) -> np.ndarray:
    """Opaque RGB checker pattern shown behind translucent gradients."""
    ys, xs = np.mgrid[0:height, 0:width]
    mask = ((xs // size) + (ys // size)) % 2 == 0
    image = np.empty((height, width, 3), dtype=float)
    image[mask] = light
    image[~mask] = dark
    return image


def composite_over(foreground: np.ndarray, background: np.ndarray) -> np.ndarray:
    """Alpha-composite an RGBA image over an opaque RGB background."""
    alpha = foreground[..., 3:4]
    return foreground[..., :3] * alpha + background * (1.0 - alpha)
