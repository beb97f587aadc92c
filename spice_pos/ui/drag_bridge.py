"""Qt side of drag-and-drop: raw mouse/touch events in, drag effects out."""

from PyQt6.QtCore import QEvent, QObject, QPoint, Qt, QTimer
from PyQt6.QtWidgets import QLabel, QWidget

from ..core import effects as fx
from ..core.drag import (
    AUTOSCROLL_INTERVAL_MS,
    DragController,
    DragEnvironment,
    PointerAdapter,
    TouchAdapter,
)

_GHOST_OFFSET = QPoint(24, 24)


def _global_point(x: float, y: float) -> QPoint:
    return QPoint(int(round(x)), int(round(y)))


class DragBridge(QObject):
    """Event filter for menu cards.

    Mouse and touch events are translated by the two adapters into the
    controller vocabulary; the effects coming back are carried out here
    with Qt timers, a floating ghost label and the table map highlight.
    """

    def __init__(self, host: QWidget, menu_grid, table_map, on_drop, catalog):
        super().__init__(host)
        self.host = host
        self.menu_grid = menu_grid
        self.table_map = table_map
        self.on_drop = on_drop
        self.catalog = catalog

        env = DragEnvironment(
            hit_test=lambda x, y: table_map.table_at(_global_point(x, y)),
            edge_direction=lambda x, y: table_map.edge_direction(_global_point(x, y)),
        )
        self.controller = DragController(env, sink=self._apply)
        self.pointer = PointerAdapter(self.controller)
        self.touch = TouchAdapter(self.controller)
        self._touch_scroll_y: float | None = None

        self.hold_timer = QTimer(self)
        self.hold_timer.setSingleShot(True)
        self.hold_timer.timeout.connect(self.controller.hold_elapsed)

        self.scroll_timer = QTimer(self)
        self.scroll_timer.setInterval(AUTOSCROLL_INTERVAL_MS)
        self.scroll_timer.timeout.connect(self.controller.autoscroll_tick)

        self.ghost = QLabel(host)
        self.ghost.setObjectName("dragGhost")
        self.ghost.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.ghost.hide()

    def attach(self, card: QWidget) -> None:
        card.installEventFilter(self)

    # ----- input -----
    def eventFilter(self, obj, event):
        kind = event.type()
        item_id = getattr(obj, "item_id", None)
        if item_id is None:
            return False

        if kind == QEvent.Type.MouseButtonPress and event.button() == Qt.MouseButton.LeftButton:
            pos = event.globalPosition()
            self.pointer.mouse_press(item_id, pos.x(), pos.y())
            return False
        if kind == QEvent.Type.MouseMove and event.buttons() & Qt.MouseButton.LeftButton:
            pos = event.globalPosition()
            self.pointer.mouse_move(pos.x(), pos.y())
            return self.controller.active
        if kind == QEvent.Type.MouseButtonRelease and event.button() == Qt.MouseButton.LeftButton:
            pos = event.globalPosition()
            self.pointer.mouse_release(pos.x(), pos.y())
            return False

        if kind in (QEvent.Type.TouchBegin, QEvent.Type.TouchUpdate, QEvent.Type.TouchEnd):
            points = event.points()
            if not points:
                return False
            pos = points[0].globalPosition()
            if kind == QEvent.Type.TouchBegin:
                self._touch_scroll_y = None
                self.touch.touch_begin(item_id, pos.x(), pos.y())
            elif kind == QEvent.Type.TouchUpdate:
                if self.controller.active:
                    self.touch.touch_update(pos.x(), pos.y())
                    if not self.controller.active:
                        # jitter cancelled the hold: the finger scrolls the menu
                        self._touch_scroll_y = pos.y()
                elif self._touch_scroll_y is not None:
                    self.menu_grid.scroll_by(self._touch_scroll_y - pos.y())
                    self._touch_scroll_y = pos.y()
            else:
                self._touch_scroll_y = None
                self.touch.touch_end(pos.x(), pos.y())
            event.accept()
            return True
        if kind == QEvent.Type.TouchCancel:
            self._touch_scroll_y = None
            self.touch.touch_cancel()
            event.accept()
            return True
        return False

    def cancel(self) -> None:
        """Abort whatever gesture is running (Esc, window deactivation)."""
        self.pointer.escape()

    # ----- effects -----
    def _apply(self, effect) -> None:
        kind = effect.kind
        if kind == fx.START_HOLD_TIMER:
            self.hold_timer.start(int(effect.payload))
        elif kind == fx.CANCEL_HOLD_TIMER:
            self.hold_timer.stop()
        elif kind == fx.SHOW_GHOST:
            item_id, x, y = effect.payload
            item = self.catalog.find_by_id(item_id)
            self.ghost.setText(f"{item.icon} {item.name}" if item else "")
            self.ghost.adjustSize()
            self._move_ghost(x, y)
            self.ghost.show()
            self.ghost.raise_()
        elif kind == fx.MOVE_GHOST:
            x, y = effect.payload
            self._move_ghost(x, y)
        elif kind == fx.HIDE_GHOST:
            self.ghost.hide()
        elif kind == fx.DRAG_OVER:
            self.table_map.highlight(effect.payload)
        elif kind == fx.START_AUTOSCROLL:
            if not self.scroll_timer.isActive():
                self.scroll_timer.start()
        elif kind == fx.STOP_AUTOSCROLL:
            self.scroll_timer.stop()
        elif kind == fx.SCROLL_BY:
            self.table_map.scroll_by(effect.payload)
        elif kind == fx.DROP:
            item_id, table_id = effect.payload
            self.on_drop(item_id, table_id)

    def _move_ghost(self, x: float, y: float) -> None:
        local = self.host.mapFromGlobal(_global_point(x, y))
        self.ghost.move(local + _GHOST_OFFSET)
