"""
Configuration Package for the Gradient Editor
This package provides runtime settings and view styling presets.
"""

from .settings import (
    EditorSettings,
    InitialStop,
    load_settings,
)

from .view_config import (
    get_view_config,
    VIEW_PRESETS,
    COLOR_PALETTES,
)

__all__ = [
    # Runtime Settings
    'EditorSettings',
    'InitialStop',
    'load_settings',

    # View Configuration
    'get_view_config',
    'VIEW_PRESETS',
    'COLOR_PALETTES',
]
