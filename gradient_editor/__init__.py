"""
Gradient Editor Package
Interactive editing of a linear gradient: drag the two axis endpoints and
the color stops that sit on the segment between them.

## Package Structure

### Core Components (core/)
- geometry.py: Projection of pointer positions onto the gradient axis
- color_stops.py: Color stop collection, store and mutation contract
- drag_controller.py: Pointer drag state machine
- hit_testing.py: Pointer-down classification and gating

### Host (host/)
- renderer.py: numpy rasterization of the gradient
- gradient_view.py: matplotlib view wiring mouse events to the core

### UI (ui/)
- stop_list.py: Sidebar editing each stop's color, offset and removal

### Configuration (config/)
- settings.py: Runtime settings (GRADIENT_EDITOR_* environment variables)
- view_config.py: View styling presets

### Utilities (utils/)
- error_handling.py: Fail-soft error reporting

## Usage

```python
from gradient_editor import ColorStopStore, GradientView, load_settings

settings = load_settings()
store = ColorStopStore(settings.initial_colors())
view = GradientView(store, settings)
view.controller.add_callback('state_changed', print)
```
"""

from .core import (
    Point,
    LineSegment,
    project,
    offset_for,
    RGBA,
    ColorStop,
    ColorStopCollection,
    ColorStopStore,
    DragController,
    DragContext,
    DragState,
    DragTarget,
    PointerDown,
    PointerMove,
    PointerUp,
    PointerEventSource,
    build_hit_regions,
    hit_test,
)
from .config import EditorSettings, load_settings, get_view_config
from .host import GradientView, render_linear_gradient
from .utils import ErrorHandlingSystem, ErrorCategory, ErrorSeverity

__version__ = "1.0.0"

__all__ = [
    # Core Components
    'Point',
    'LineSegment',
    'project',
    'offset_for',
    'RGBA',
    'ColorStop',
    'ColorStopCollection',
    'ColorStopStore',
    'DragController',
    'DragContext',
    'DragState',
    'DragTarget',
    'PointerDown',
    'PointerMove',
    'PointerUp',
    'PointerEventSource',
    'build_hit_regions',
    'hit_test',

    # Host
    'GradientView',
    'render_linear_gradient',

    # Configuration
    'EditorSettings',
    'load_settings',
    'get_view_config',

    # Utilities
    'ErrorHandlingSystem',
    'ErrorCategory',
    'ErrorSeverity',
]
