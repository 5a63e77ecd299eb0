"""
Host Package for the Gradient Editor
This package renders the gradient and routes matplotlib mouse events to the core.
"""

from .gradient_view import GradientView, MatplotlibPointerSource
from .renderer import render_linear_gradient, projection_grid, checkerboard, composite_over

__all__ = [
    'GradientView',
    'MatplotlibPointerSource',
    'render_linear_gradient',
    'projection_grid',
    'checkerboard',
    'composite_over',
]
