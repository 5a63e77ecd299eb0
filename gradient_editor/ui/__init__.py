"""
UI Components Package for the Gradient Editor
This package provides the tkinter controls shown beside the gradient view.
"""

from .stop_list import StopEditActions, StopListPanel

__all__ = [
    'StopEditActions',
    'StopListPanel',
]
