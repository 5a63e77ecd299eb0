"""
View Configuration Module
This module contains the styling constants used by the gradient view.
"""

from typing import Any, Dict

# Color Palettes
COLOR_PALETTES = {
    'default': {
        'handle': '#ffffff',
        'handle_edge': '#ffffff',
        'line': '#ffffff',
        'stop_edge': '#ffffff',
        'background': '#1e1e1e',
    },
    'light': {
        'handle': '#ffffff',
        'handle_edge': '#333333',
        'line': '#333333',
        'stop_edge': '#333333',
        'background': '#f5f5f5',
    },
}

# Axis Line Configuration
LINE_CONFIG = {
    'linewidth': 2.0,
    'alpha': 0.8,
    'linestyle': '-',
    'z_order': 3,
}

# Handle Configuration
HANDLE_CONFIG = {
    'edge_width': 2.0,
    'z_order': 4,
}

# Color Stop Configuration
STOP_CONFIG = {
    'edge_width': 2.0,
    'z_order': 5,
    'active_z_order': 10,
}

# Gradient Image Configuration
IMAGE_CONFIG = {
    'interpolation': 'nearest',
    'show_checkers': True,
    'checker_size': 20,
    'checker_colors': ('#cccccc', '#999999'),
}

# Control Widgets Configuration
CONTROLS_CONFIG = {
    'add_button_label': 'Add Color',
    'add_button_rect': (0.78, 0.01, 0.2, 0.05),  # figure fraction: left, bottom, width, height
    'remove_button': 3,  # matplotlib MouseButton.RIGHT
}

# Stop List Panel Configuration
STOP_LIST_CONFIG = {
    'title': 'Color Stops',
    'padding': 8,
    'swatch_width': 3,
    'spinbox_width': 6,
    'offset_increment': 1.0,
    'remove_label': 'Remove',
    'picker_title': 'Stop Color',
}

VIEW_PRESETS = {
    'default': {
        'colors': COLOR_PALETTES['default'],
        'line': LINE_CONFIG,
        'handles': HANDLE_CONFIG,
        'stops': STOP_CONFIG,
        'image': IMAGE_CONFIG,
        'controls': CONTROLS_CONFIG,
        'stop_list': STOP_LIST_CONFIG,
    },
    'light': {
        'colors': COLOR_PALETTES['light'],
        'line': {**LINE_CONFIG, 'alpha': 1.0},
        'handles': HANDLE_CONFIG,
        'stops': STOP_CONFIG,
        'image': IMAGE_CONFIG,
        'controls': CONTROLS_CONFIG,
        'stop_list': STOP_LIST_CONFIG,
    },
}


def get_view_config(preset: str = 'default', **overrides) -> Dict[str, Any]:
    """
    Get view configuration with preset and overrides.

    Args:
        preset: Name of the preset configuration
        **overrides: Configuration overrides; dict values are merged into
            the matching section

    Returns:
        Complete view configuration dictionary
    """
    if preset not in VIEW_PRESETS:
        preset = 'default'

    config = {key: (dict(value) if isinstance(value, dict) else value)
              for key, value in VIEW_PRESETS[preset].items()}

    for key, value in overrides.items():
        if key in config and isinstance(config[key], dict) and isinstance(value, dict):
            config[key].update(value)
        else:
            config[key] = value

    return config
