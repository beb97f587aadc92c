"""Side effects requested by state transitions, executed by the host shell."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# order store
SAVE = "save"
RENDER = "render"
NOTIFY = "notify"
AUDIT = "audit"

# drag gestures
START_HOLD_TIMER = "start_hold_timer"
CANCEL_HOLD_TIMER = "cancel_hold_timer"
DRAG_START = "drag_start"
DRAG_OVER = "drag_over"
DROP = "drop"
DRAG_CANCEL = "drag_cancel"
SHOW_GHOST = "show_ghost"
MOVE_GHOST = "move_ghost"
HIDE_GHOST = "hide_ghost"
START_AUTOSCROLL = "start_autoscroll"
STOP_AUTOSCROLL = "stop_autoscroll"
SCROLL_BY = "scroll_by"


@dataclass(frozen=True, slots=True)
class Effect:
    kind: str
    payload: Any = None


def kinds(effects) -> list[str]:
    return [effect.kind for effect in effects]


def notify(message: str, severity: str = "info") -> Effect:
    return Effect(NOTIFY, (message, severity))
