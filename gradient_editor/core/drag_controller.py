"""
Drag Controller Component
This module owns the pointer drag state machine for the gradient axis.

Exactly one DragTarget is active at a time: the start handle, the end handle,
or a single color stop. Handle drags keep the grab offset measured at
pointer-down; stop drags project the absolute pointer position onto the axis
as it was when the drag began, so the stop jumps under the cursor.
"""

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .color_stops import ColorStopStore
from .geometry import ORIGIN, LineSegment, Point, SegmentProjection
from ..utils.error_handling import ErrorCategory, ErrorHandlingSystem

logger = logging.getLogger(__name__)


class TargetKind(Enum):
    """Kinds of draggable entities."""
    NONE = "none"
    START_HANDLE = "start"
    END_HANDLE = "end"
    STOP = "stop"


class DragState(Enum):
    """Interaction states; IDLE between gestures."""
    IDLE = "idle"
    DRAGGING_START = "dragging_start"
    DRAGGING_END = "dragging_end"
    DRAGGING_STOP = "dragging_stop"


_STATE_BY_KIND = {
    TargetKind.NONE: DragState.IDLE,
    TargetKind.START_HANDLE: DragState.DRAGGING_START,
    TargetKind.END_HANDLE: DragState.DRAGGING_END,
    TargetKind.STOP: DragState.DRAGGING_STOP,
}


@dataclass(frozen=True)
class DragTarget:
    """Tagged union: None | StartHandle | EndHandle | Stop(id)."""
    kind: TargetKind = TargetKind.NONE
    stop_id: Optional[str] = None

    def __post_init__(self):
        if (self.kind == TargetKind.STOP) != (self.stop_id is not None):
            raise ValueError(f"stop_id must be given exactly for STOP targets, got {self}")

    @classmethod
    def none(cls) -> 'DragTarget':
        return cls()

    @classmethod
    def start_handle(cls) -> 'DragTarget':
        return cls(TargetKind.START_HANDLE)

    @classmethod
    def end_handle(cls) -> 'DragTarget':
        return cls(TargetKind.END_HANDLE)

    @classmethod
    def stop(cls, stop_id: str) -> 'DragTarget':
        return cls(TargetKind.STOP, stop_id)

    @property
    def is_none(self) -> bool:
        return self.kind == TargetKind.NONE

    @property
    def is_handle(self) -> bool:
        return self.kind in (TargetKind.START_HANDLE, TargetKind.END_HANDLE)

    @property
    def is_stop(self) -> bool:
        return self.kind == TargetKind.STOP


NO_TARGET = DragTarget.none()


@dataclass(frozen=True)
class PointerDown:
    """Pointer pressed over a classified hit region."""
    target: DragTarget
    client_position: Point


@dataclass(frozen=True)
class PointerMove:
    client_position: Point


@dataclass(frozen=True)
class PointerUp:
    client_position: Optional[Point] = None


class PointerEventSource:
    """
    Device-level listener registry.

    Hosts subclass this to attach global pointer-move and pointer-up
    handlers, typically by wrapping a GUI toolkit's connect/disconnect pair.
    """

    MOVE = 'move'
    UP = 'up'

    def connect(self, kind: str, handler: Callable[[Any], None]) -> Any:
        """Attach handler for 'move' or 'up' events; returns a disconnect token."""
        raise NotImplementedError

    def disconnect(self, token: Any) -> None:
        raise NotImplementedError


@dataclass
class DragContext:
    """Collaborators the controller reads from and proposes to."""
    get_segment: Callable[[], LineSegment]
    propose_start: Callable[[Point], None]
    propose_end: Callable[[Point], None]
    container_origin: Callable[[], Optional[Point]]
    pointer_source: Optional[PointerEventSource] = None


class DragController:
    """
    Pointer drag state machine.

    Consumes pointer events, proposes new endpoints to the host and writes
    stop offsets through the ColorStopStore. No exception escapes the
    pointer handlers; events without a resolvable container origin are
    dropped.
    """

    def __init__(self,
                 context: DragContext,
                 store: ColorStopStore,
                 error_handler: Optional[ErrorHandlingSystem] = None):
        """
        Initialize the drag controller.

        Args:
            context: Host collaborators (segment, endpoint proposals, origin)
            store: Color stop store shared with the renderer
            error_handler: Receives callback failures
        """
        self.context = context
        self.store = store
        self.error_handler = error_handler or store.error_handler

        self._target: DragTarget = NO_TARGET
        self._drag_offset: Point = ORIGIN
        self._projection: Optional[SegmentProjection] = None
        self._listeners: Optional[ExitStack] = None

        self.callbacks: Dict[str, List[Callable]] = {
            'state_changed': [],
            'endpoint_proposed': [],
        }

    @property
    def target(self) -> DragTarget:
        return self._target

    @property
    def state(self) -> DragState:
        return _STATE_BY_KIND[self._target.kind]

    @property
    def drag_offset(self) -> Point:
        return self._drag_offset

    @property
    def is_dragging(self) -> bool:
        return not self._target.is_none

    @property
    def listeners_attached(self) -> bool:
        return self._listeners is not None

    def is_hit_testable(self, target: DragTarget) -> bool:
        """
        Whether a region may accept a new pointer-down.

        Handles always accept; a stop accepts only while nothing is being
        dragged or while it is itself the active target.
        """
        if target.is_stop:
            return self._target.is_none or self._target == target
        return not target.is_none

    # Event handling

    def handle_event(self, event) -> None:
        """Dispatch a PointerDown, PointerMove or PointerUp."""
        if isinstance(event, PointerDown):
            self.pointer_down(event.target, event.client_position)
        elif isinstance(event, PointerMove):
            self.pointer_move(event.client_position)
        elif isinstance(event, PointerUp):
            self.pointer_up()
        else:
            logger.warning(f"Unknown pointer event: {event!r}")

    def pointer_down(self, target: DragTarget, client_position: Point) -> None:
        """Handle pointer-down on a classified hit region."""
        if target.is_none:
            return
        if target.is_stop:
            self._press_stop(target)
        else:
            self._press_handle(target, client_position)

    def _press_handle(self, target: DragTarget, client_position: Point) -> None:
        origin = self._resolve_origin()
        if origin is None:
            logger.debug(f"Dropped pointer-down on {target.kind.value}: container origin unavailable")
            return

        segment = self.context.get_segment()
        anchor = segment.start if target.kind == TargetKind.START_HANDLE else segment.end
        local = client_position - origin
        self._begin_drag(target, drag_offset=local - anchor, projection=None)

    def _press_stop(self, target: DragTarget) -> None:
        if self._target == target:
            return
        if self._resolve_origin() is None:
            logger.debug(f"Dropped pointer-down on stop {target.stop_id}: container origin unavailable")
            return
        if not self.is_hit_testable(target):
            logger.debug(f"Ignored pointer-down on gated stop {target.stop_id}")
            return
        projection = SegmentProjection.from_segment(self.context.get_segment())
        self._begin_drag(target, drag_offset=ORIGIN, projection=projection)

    def pointer_move(self, client_position: Point) -> None:
        """Route a pointer-move to the active drag target."""
        if self._target.is_none:
            return
        origin = self._resolve_origin()
        if origin is None:
            return

        local = client_position - origin
        kind = self._target.kind
        if kind == TargetKind.STOP:
            offset = self._projection.offset(local)
            self.store.update_offset(self._target.stop_id, offset)
        else:
            proposed = local - self._drag_offset
            propose = (self.context.propose_start if kind == TargetKind.START_HANDLE
                       else self.context.propose_end)
            try:
                propose(proposed)
            except Exception as e:
                self.error_handler.handle_error(
                    e, component='DragController', operation='propose_endpoint',
                    category=ErrorCategory.INTERACTION)
                return
            self._trigger_callbacks('endpoint_proposed', self._target, proposed)

    def pointer_up(self, *_args) -> None:
        """End the gesture, wherever the pointer was released."""
        if self._target.is_none:
            self._release_listeners()
            return
        self._end_drag()

    def close(self) -> None:
        """Tear down: release listeners and return to IDLE."""
        if self.is_dragging:
            self._end_drag()
        else:
            self._release_listeners()

    # Internals

    def _begin_drag(self, target: DragTarget, drag_offset: Point,
                    projection: Optional[SegmentProjection]) -> None:
        # retargeting releases the previous gesture's listeners first
        self._release_listeners()
        self._target = target
        self._drag_offset = drag_offset
        self._projection = projection
        try:
            self._acquire_listeners()
        except Exception as e:
            self.error_handler.handle_error(
                e, component='DragController', operation='acquire_listeners',
                category=ErrorCategory.INTERACTION)
            self._reset()
            return
        logger.debug(f"Drag started: {target.kind.value} {target.stop_id or ''}".rstrip())
        self._trigger_callbacks('state_changed', self.state, target)

    def _end_drag(self) -> None:
        previous = self._target
        self._release_listeners()
        self._reset()
        logger.debug(f"Drag ended: {previous.kind.value}")
        self._trigger_callbacks('state_changed', self.state, self._target)

    def _reset(self) -> None:
        self._target = NO_TARGET
        self._drag_offset = ORIGIN
        self._projection = None

    def _acquire_listeners(self) -> None:
        source = self.context.pointer_source
        if source is None:
            return
        with ExitStack() as stack:
            for kind, handler in ((PointerEventSource.MOVE, self._on_source_move),
                                  (PointerEventSource.UP, self.pointer_up)):
                token = source.connect(kind, handler)
                stack.callback(source.disconnect, token)
            # keep the registrations only once every connect succeeded
            self._listeners = stack.pop_all()

    def _release_listeners(self) -> None:
        listeners, self._listeners = self._listeners, None
        if listeners is None:
            return
        try:
            listeners.close()
        except Exception as e:
            self.error_handler.handle_error(
                e, component='DragController', operation='release_listeners',
                category=ErrorCategory.INTERACTION)

    def _on_source_move(self, event) -> None:
        position = event.client_position if isinstance(event, PointerMove) else event
        if position is None:
            return
        self.pointer_move(position)

    def _resolve_origin(self) -> Optional[Point]:
        try:
            return self.context.container_origin()
        except Exception as e:
            self.error_handler.handle_error(
                e, component='DragController', operation='container_origin',
                category=ErrorCategory.GEOMETRY)
            return None

    def add_callback(self, event_type: str, callback: Callable):
        """
        Add a callback for a specific event type.

        Args:
            event_type: 'state_changed' or 'endpoint_proposed'
            callback: Callback function to call
        """
        if event_type in self.callbacks:
            self.callbacks[event_type].append(callback)
        else:
            logger.warning(f"Unknown event type: {event_type}")

    def remove_callback(self, event_type: str, callback: Callable):
        if event_type in self.callbacks and callback in self.callbacks[event_type]:
            self.callbacks[event_type].remove(callback)

    def _trigger_callbacks(self, event_type: str, *args):
        for callback in list(self.callbacks.get(event_type, [])):
            try:
                callback(*args)
            except Exception as e:
                self.error_handler.handle_error(
                    e, component='DragController', operation=event_type,
                    category=ErrorCategory.INTERACTION)

    def get_interaction_state(self) -> Dict[str, Any]:
        """
        Get current interaction state.

        Returns:
            Dictionary containing interaction state information
        """
        return {
            'state': self.state.value,
            'target': self._target.kind.value,
            'stop_id': self._target.stop_id,
            'drag_offset': self._drag_offset.to_tuple(),
            'listeners_attached': self.listeners_attached,
        }
