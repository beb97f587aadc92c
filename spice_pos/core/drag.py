"""Gesture recognizer that turns pointer and touch input into menu-item drops.

Both input systems feed the same vocabulary (press, move, release, cancel,
plus the hold-timer and auto-scroll callbacks) into :func:`transition`,
which is pure: it returns the next gesture state and the effects the host
must carry out (timers, ghost proxy, highlight, drop).

    IDLE -> ARMED (touch only) -> DRAGGING -> DROPPED | CANCELLED -> IDLE
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple

from . import effects as fx
from .effects import Effect

HOLD_MS = 400
JITTER_PX = 10
EDGE_BAND_PX = 60
AUTOSCROLL_STEP_PX = 12
AUTOSCROLL_INTERVAL_MS = 30

POINTER = "pointer"
TOUCH = "touch"


class DragState(Enum):
    IDLE = "idle"
    ARMED = "armed"
    DRAGGING = "dragging"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class Press:
    item_id: int
    x: float
    y: float
    source: str = POINTER


@dataclass(frozen=True, slots=True)
class Move:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Release:
    x: Optional[float] = None
    y: Optional[float] = None


@dataclass(frozen=True, slots=True)
class Cancel:
    pass


@dataclass(frozen=True, slots=True)
class HoldElapsed:
    pass


@dataclass(frozen=True, slots=True)
class AutoscrollTick:
    pass


@dataclass(frozen=True, slots=True)
class Retarget:
    """Hit-test again at the current position, after the host scrolled."""


@dataclass(frozen=True, slots=True)
class Gesture:
    state: DragState
    source: str
    item_id: int
    origin: Tuple[float, float]
    position: Tuple[float, float]
    target: Optional[int] = None
    scroll: int = 0


IDLE = Gesture(DragState.IDLE, "", -1, (0.0, 0.0), (0.0, 0.0))


def _no_target(_x: float, _y: float) -> Optional[int]:
    return None


def _no_edge(_x: float, _y: float) -> int:
    return 0


@dataclass(frozen=True)
class DragEnvironment:
    """Geometry queries the gesture needs from the host.

    ``hit_test`` maps a point to the table under it (or ``None``);
    ``edge_direction`` returns -1/0/+1 when the point sits in the top band,
    nowhere special, or the bottom band of the scrolling viewport.
    """

    hit_test: Callable[[float, float], Optional[int]] = _no_target
    edge_direction: Callable[[float, float], int] = _no_edge
    hold_ms: int = HOLD_MS
    jitter_px: float = JITTER_PX
    scroll_step_px: int = AUTOSCROLL_STEP_PX


def edge_direction_for(y: float, top: float, bottom: float, band: float = EDGE_BAND_PX) -> int:
    """Scroll direction for a pointer at *y* inside a viewport spanning top..bottom."""
    if bottom <= top or y < top or y > bottom:
        return 0
    if y < top + band:
        return -1
    if y > bottom - band:
        return 1
    return 0


def _track(gesture: Gesture, x: float, y: float, env: DragEnvironment) -> Tuple[Gesture, List[Effect]]:
    out: List[Effect] = []
    target = env.hit_test(x, y)
    if target != gesture.target:
        out.append(Effect(fx.DRAG_OVER, target))
    direction = env.edge_direction(x, y)
    if direction != gesture.scroll:
        if direction:
            out.append(Effect(fx.START_AUTOSCROLL, direction))
        else:
            out.append(Effect(fx.STOP_AUTOSCROLL))
    return replace(gesture, position=(x, y), target=target, scroll=direction), out


def _begin_drag(gesture: Gesture, env: DragEnvironment) -> Tuple[Gesture, List[Effect]]:
    x, y = gesture.position
    dragging = replace(gesture, state=DragState.DRAGGING)
    out = [
        Effect(fx.DRAG_START, gesture.item_id),
        Effect(fx.SHOW_GHOST, (gesture.item_id, x, y)),
    ]
    dragging, tracked = _track(dragging, x, y, env)
    return dragging, out + tracked


def _cleanup(gesture: Gesture) -> List[Effect]:
    out = [Effect(fx.HIDE_GHOST), Effect(fx.STOP_AUTOSCROLL)]
    if gesture.target is not None:
        out.append(Effect(fx.DRAG_OVER, None))
    return out


def outcome_of(out: List[Effect]) -> Optional[DragState]:
    """DROPPED or CANCELLED if *out* ends a drag, else ``None``."""
    for effect in out:
        if effect.kind == fx.DROP:
            return DragState.DROPPED
        if effect.kind == fx.DRAG_CANCEL:
            return DragState.CANCELLED
    return None


def transition(gesture: Gesture, event, env: DragEnvironment) -> Tuple[Gesture, List[Effect]]:
    """Apply *event* to *gesture*; return the new gesture and requested effects."""
    state = gesture.state

    if state is DragState.IDLE:
        if isinstance(event, Press):
            start = Gesture(
                state=DragState.ARMED,
                source=event.source,
                item_id=event.item_id,
                origin=(event.x, event.y),
                position=(event.x, event.y),
            )
            if event.source == TOUCH:
                return start, [Effect(fx.START_HOLD_TIMER, env.hold_ms)]
            return _begin_drag(start, env)
        return gesture, []

    if state is DragState.ARMED:
        if isinstance(event, Move):
            ox, oy = gesture.origin
            if math.hypot(event.x - ox, event.y - oy) > env.jitter_px:
                # the finger is scrolling the list, not picking up the item
                return IDLE, [Effect(fx.CANCEL_HOLD_TIMER)]
            return replace(gesture, position=(event.x, event.y)), []
        if isinstance(event, HoldElapsed):
            return _begin_drag(gesture, env)
        if isinstance(event, (Release, Cancel)):
            return IDLE, [Effect(fx.CANCEL_HOLD_TIMER)]
        return gesture, []

    if state is DragState.DRAGGING:
        if isinstance(event, Move):
            moved, out = _track(gesture, event.x, event.y, env)
            return moved, [Effect(fx.MOVE_GHOST, (event.x, event.y))] + out
        if isinstance(event, AutoscrollTick):
            if not gesture.scroll:
                return gesture, []
            return gesture, [Effect(fx.SCROLL_BY, gesture.scroll * env.scroll_step_px)]
        if isinstance(event, Retarget):
            x, y = gesture.position
            return _track(gesture, x, y, env)
        if isinstance(event, Release):
            final = gesture
            if event.x is not None and event.y is not None:
                final = replace(gesture, position=(event.x, event.y), target=env.hit_test(event.x, event.y))
            # cleanup uses the pre-release target: that is what is highlighted.
            # It goes first so a failing drop handler cannot leave the ghost behind.
            if final.target is not None:
                return IDLE, _cleanup(gesture) + [Effect(fx.DROP, (final.item_id, final.target))]
            return IDLE, _cleanup(gesture) + [Effect(fx.DRAG_CANCEL)]
        if isinstance(event, Cancel):
            return IDLE, _cleanup(gesture) + [Effect(fx.DRAG_CANCEL)]
        return gesture, []

    # DROPPED / CANCELLED only exist for the duration of one transition
    return IDLE, []


class DragController:
    """Owns the current gesture and forwards effects to *sink*."""

    __slots__ = ("env", "sink", "_gesture", "last_outcome")

    def __init__(self, env: DragEnvironment | None = None, sink: Callable[[Effect], None] | None = None):
        self.env = env or DragEnvironment()
        self.sink = sink
        self._gesture = IDLE
        self.last_outcome: Optional[DragState] = None

    @property
    def state(self) -> DragState:
        return self._gesture.state

    @property
    def gesture(self) -> Gesture:
        return self._gesture

    @property
    def active(self) -> bool:
        return self._gesture.state is not DragState.IDLE

    @property
    def candidate_target(self) -> Optional[int]:
        return self._gesture.target

    def handle(self, event) -> List[Effect]:
        before = self._gesture
        after, out = transition(before, event, self.env)
        if before.state is not DragState.IDLE and after.state is DragState.IDLE:
            self.last_outcome = outcome_of(out)
        self._gesture = after
        if self.sink is not None:
            for effect in out:
                self.sink(effect)
        return out

    def press(self, item_id: int, x: float, y: float, source: str = POINTER) -> List[Effect]:
        return self.handle(Press(item_id, x, y, source))

    def move(self, x: float, y: float) -> List[Effect]:
        return self.handle(Move(x, y))

    def release(self, x: float | None = None, y: float | None = None) -> List[Effect]:
        return self.handle(Release(x, y))

    def cancel(self) -> List[Effect]:
        return self.handle(Cancel())

    def hold_elapsed(self) -> List[Effect]:
        return self.handle(HoldElapsed())

    def autoscroll_tick(self) -> List[Effect]:
        out = self.handle(AutoscrollTick())
        if out:
            # the sink has scrolled the viewport by now; look again under the pointer
            out += self.handle(Retarget())
        return out


class PointerAdapter:
    """Mouse input: a press only becomes a drag once it travels *start_distance*."""

    __slots__ = ("controller", "start_distance", "_pending")

    def __init__(self, controller: DragController, start_distance: float = 4):
        self.controller = controller
        self.start_distance = start_distance
        self._pending: Optional[Tuple[int, float, float]] = None

    def mouse_press(self, item_id: int, x: float, y: float) -> List[Effect]:
        if self.controller.active:
            return []
        self._pending = (item_id, x, y)
        return []

    def mouse_move(self, x: float, y: float) -> List[Effect]:
        if self._pending is not None:
            item_id, ox, oy = self._pending
            if math.hypot(x - ox, y - oy) < self.start_distance:
                return []
            self._pending = None
            out = self.controller.press(item_id, ox, oy, POINTER)
            return out + self.controller.move(x, y)
        if self.controller.active and self.controller.gesture.source == POINTER:
            return self.controller.move(x, y)
        return []

    def mouse_release(self, x: float, y: float) -> List[Effect]:
        self._pending = None
        if self.controller.active and self.controller.gesture.source == POINTER:
            return self.controller.release(x, y)
        return []

    def escape(self) -> List[Effect]:
        self._pending = None
        if self.controller.active:
            return self.controller.cancel()
        return []


class TouchAdapter:
    """Touch input: press arms the hold timer, the rest maps one to one."""

    __slots__ = ("controller",)

    def __init__(self, controller: DragController):
        self.controller = controller

    def _owns_gesture(self) -> bool:
        return self.controller.active and self.controller.gesture.source == TOUCH

    def touch_begin(self, item_id: int, x: float, y: float) -> List[Effect]:
        return self.controller.press(item_id, x, y, TOUCH)

    def touch_update(self, x: float, y: float) -> List[Effect]:
        if not self._owns_gesture():
            return []
        return self.controller.move(x, y)

    def touch_end(self, x: float, y: float) -> List[Effect]:
        if not self._owns_gesture():
            return []
        return self.controller.release(x, y)

    def touch_cancel(self) -> List[Effect]:
        if not self._owns_gesture():
            return []
        return self.controller.cancel()
