"""
Color Stop Store Component
This module owns the collection of gradient color stops and its mutation contract.

Every write swaps in a new immutable ColorStopCollection, so readers such as
the renderer always observe either the previous or the next collection and
never a partially updated stop.
"""

import logging
import math
import threading
import uuid
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .geometry import clamp
from ..utils.error_handling import ErrorCategory, ErrorHandlingSystem

logger = logging.getLogger(__name__)

MIN_OFFSET = 0.0
MAX_OFFSET = 100.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class RGBA:
    """Color channels: r, g, b integers in 0-255 and alpha in 0-1."""
    r: int
    g: int
    b: int
    a: float = 1.0

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> 'RGBA':
        if len(values) != 4:
            raise ValueError(f"RGBA needs 4 channels, got {len(values)}")
        r, g, b, a = values
        return cls(int(r), int(g), int(b), float(a))

    def to_tuple(self) -> Tuple[int, int, int, float]:
        return (self.r, self.g, self.b, self.a)

    def to_css(self) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a})"

    def to_hex(self) -> str:
        """Opaque #rrggbb form, as Tk color options expect."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_mpl(self) -> Tuple[float, float, float, float]:
        """Normalized (r, g, b, a) tuple accepted by matplotlib."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a)

    def blend(self, other: 'RGBA') -> 'RGBA':
        """Component-wise mean; color channels rounded, alpha kept exact."""
        return RGBA(
            _round_half_up((self.r + other.r) / 2),
            _round_half_up((self.g + other.g) / 2),
            _round_half_up((self.b + other.b) / 2),
            (self.a + other.a) / 2,
        )


WHITE = RGBA(255, 255, 255, 1.0)


@dataclass(frozen=True)
class ColorStop:
    """A control point binding an axis offset to a color."""
    id: str
    rgba: RGBA
    offset: float


def new_stop_id() -> str:
    """Collision-resistant stop identifier."""
    return uuid.uuid4().hex


def clamp_offset(offset: float) -> float:
    return clamp(float(offset), MIN_OFFSET, MAX_OFFSET)


class ColorStopCollection:
    """
    Immutable set of color stops.

    Stops are kept in storage order; iteration yields render order, which is
    ascending offset by a stable sort recomputed on every read. Two
    collections compare equal when their render orders hold equal stops.
    """

    __slots__ = ('_stops',)

    def __init__(self, stops: Iterable[ColorStop] = ()):
        stops = tuple(stops)
        if any(stop is None for stop in stops):
            raise ValueError("ColorStopCollection cannot hold empty entries")
        ids = [stop.id for stop in stops]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate color stop ids: {ids}")
        self._stops: Tuple[ColorStop, ...] = stops

    def ordered(self) -> List[ColorStop]:
        return sorted(self._stops, key=lambda stop: stop.offset)

    def stored(self) -> Tuple[ColorStop, ...]:
        return self._stops

    def find(self, stop_id: str) -> Optional[ColorStop]:
        for stop in self._stops:
            if stop.id == stop_id:
                return stop
        return None

    def ids(self) -> List[str]:
        return [stop.id for stop in self.ordered()]

    def __iter__(self) -> Iterator[ColorStop]:
        return iter(self.ordered())

    def __len__(self) -> int:
        return len(self._stops)

    def __contains__(self, stop_id: object) -> bool:
        return any(stop.id == stop_id for stop in self._stops)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorStopCollection):
            return NotImplemented
        return self.ordered() == other.ordered()

    def __hash__(self) -> int:
        return hash(tuple(self.ordered()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{stop.id[:8]}@{stop.offset:g}" for stop in self.ordered())
        return f"ColorStopCollection([{inner}])"


def add_color(colors: ColorStopCollection,
              rgba: RGBA,
              offset_hint: float = 0.0,
              id_factory: Callable[[], str] = new_stop_id) -> Tuple[ColorStopCollection, ColorStop]:
    """
    Insert a new stop derived from the existing ones.

    Args:
        colors: Current collection
        rgba: Color used when the collection is empty
        offset_hint: Accepted for interface compatibility; the offset is
            always derived from the existing stops
        id_factory: Source of fresh stop ids

    Returns:
        Tuple of (new collection sorted by offset, inserted stop)
    """
    ordered = colors.ordered()

    if not ordered:
        offset, color = 0.0, rgba
    elif len(ordered) == 1:
        # a single stop is duplicated at the start of the axis
        offset, color = 0.0, ordered[0].rgba
    else:
        lower, upper = ordered[-2], ordered[-1]
        offset = (lower.offset + upper.offset) / 2
        color = lower.rgba.blend(upper.rgba)

    stop_id = id_factory()
    while stop_id in colors:
        stop_id = id_factory()

    stop = ColorStop(stop_id, color, clamp_offset(offset))
    updated = ColorStopCollection(sorted(colors.stored() + (stop,), key=lambda s: s.offset))
    return updated, stop


def update_color(colors: ColorStopCollection, stop_id: str, rgba: RGBA) -> ColorStopCollection:
    """Replace the color of the matching stop; unknown ids leave content unchanged."""
    return ColorStopCollection(
        replace(stop, rgba=rgba) if stop.id == stop_id else stop
        for stop in colors.stored()
    )


def update_offset(colors: ColorStopCollection, stop_id: str, new_offset: float) -> ColorStopCollection:
    """Move the matching stop to the clamped offset; unknown ids leave content unchanged."""
    offset = clamp_offset(new_offset)
    return ColorStopCollection(
        replace(stop, offset=offset) if stop.id == stop_id else stop
        for stop in colors.stored()
    )


def remove_color(colors: ColorStopCollection, stop_id: str) -> ColorStopCollection:
    """Drop the matching stop; unknown ids leave content unchanged."""
    return ColorStopCollection(stop for stop in colors.stored() if stop.id != stop_id)


DEFAULT_STOPS: Tuple[Tuple[Tuple[int, int, int, float], float], ...] = (
    ((24, 0, 239, 1.0), 0.0),
    ((74, 82, 188, 1.0), 50.0),
    ((150, 150, 252, 1.0), 100.0),
)


def build_collection(stops: Iterable[Tuple[Sequence[float], float]] = DEFAULT_STOPS,
                     id_factory: Callable[[], str] = new_stop_id) -> ColorStopCollection:
    """Create a collection from (rgba, offset) pairs, assigning fresh ids."""
    return ColorStopCollection(
        ColorStop(id_factory(), RGBA.from_sequence(rgba), clamp_offset(offset))
        for rgba, offset in stops
    )


class ColorStopStore:
    """
    Session-wide owner of the current ColorStopCollection.

    Constructed once by the application and passed explicitly to the drag
    controller and the view. Every operation returns the new collection and
    notifies 'colors_changed' subscribers.
    """

    def __init__(self,
                 colors: Optional[ColorStopCollection] = None,
                 error_handler: Optional[ErrorHandlingSystem] = None,
                 id_factory: Callable[[], str] = new_stop_id):
        """
        Initialize the store.

        Args:
            colors: Initial collection (defaults to the three stock stops)
            error_handler: Receives subscriber failures
            id_factory: Source of fresh stop ids
        """
        self._id_factory = id_factory
        self._colors = colors if colors is not None else build_collection(id_factory=id_factory)
        self._lock = threading.RLock()
        self.error_handler = error_handler or ErrorHandlingSystem()

        self.callbacks: Dict[str, List[Callable]] = {
            'colors_changed': [],
        }

        logger.info(f"ColorStopStore initialized with {len(self._colors)} stops")

    @property
    def colors(self) -> ColorStopCollection:
        return self._colors

    def add_color(self, rgba: RGBA, offset_hint: float = 0.0) -> ColorStopCollection:
        with self._lock:
            colors, stop = add_color(self._colors, rgba, offset_hint, self._id_factory)
            logger.info(f"Added color stop {stop.id} at {stop.offset:g}% {stop.rgba.to_css()}")
            return self._commit(colors)

    def update_color(self, stop_id: str, rgba: RGBA) -> ColorStopCollection:
        with self._lock:
            if stop_id not in self._colors:
                logger.debug(f"update_color ignored unknown stop {stop_id}")
            return self._commit(update_color(self._colors, stop_id, rgba))

    def update_offset(self, stop_id: str, new_offset: float) -> ColorStopCollection:
        with self._lock:
            if stop_id not in self._colors:
                logger.debug(f"update_offset ignored unknown stop {stop_id}")
            return self._commit(update_offset(self._colors, stop_id, new_offset))

    def remove_color(self, stop_id: str) -> ColorStopCollection:
        with self._lock:
            if stop_id in self._colors:
                logger.info(f"Removed color stop {stop_id}")
            else:
                logger.debug(f"remove_color ignored unknown stop {stop_id}")
            return self._commit(remove_color(self._colors, stop_id))

    def _commit(self, colors: ColorStopCollection) -> ColorStopCollection:
        self._colors = colors
        self._trigger_callbacks('colors_changed', colors)
        return colors

    def add_callback(self, event_type: str, callback: Callable):
        """
        Add a callback for a specific event type.

        Args:
            event_type: Type of event ('colors_changed')
            callback: Callback function to call with the new collection
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
                    e, component='ColorStopStore', operation=event_type,
                    category=ErrorCategory.STORE)
