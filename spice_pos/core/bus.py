from collections import defaultdict
from types import MethodType
from typing import Callable, DefaultDict, List, Union
import weakref

_Listener = Union[Callable[..., None], weakref.WeakMethod]


class EventBus:
    """Pub/sub for "state changed" signals; bound methods are held weakly."""

    __slots__ = ("_subs",)

    def __init__(self) -> None:
        self._subs: DefaultDict[str, List[_Listener]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callable[..., None]) -> None:
        listeners = self._subs[event_name]
        if isinstance(callback, MethodType):
            listeners.append(weakref.WeakMethod(callback))
        else:
            listeners.append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[..., None]) -> None:
        listeners = self._subs.get(event_name)
        if not listeners:
            return
        kept: List[_Listener] = []
        for cb in listeners:
            target = cb() if isinstance(cb, weakref.WeakMethod) else cb
            if target is None or target == callback:
                continue
            kept.append(cb)
        self._subs[event_name] = kept

    def emit(self, event_name: str, *args, **kwargs) -> None:
        listeners = self._subs.get(event_name)
        if not listeners:
            return

        alive: List[_Listener] = []
        # a listener may subscribe while we iterate
        snapshot = list(listeners)
        for cb in snapshot:
            if isinstance(cb, weakref.WeakMethod):
                fn = cb()
                if fn is None:
                    continue
                fn(*args, **kwargs)
            else:
                cb(*args, **kwargs)
            alive.append(cb)
        self._subs[event_name] = alive + listeners[len(snapshot):]

    def clear(self) -> None:
        self._subs.clear()


bus = EventBus()
