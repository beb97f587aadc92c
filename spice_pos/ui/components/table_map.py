# spice_pos/ui/components/table_map.py
from PyQt6.QtWidgets import (
    QWidget, QLabel, QGridLayout, QFrame, QScrollArea,
    QSizePolicy, QVBoxLayout, QHBoxLayout
)
from PyQt6.QtCore import Qt, QSize, QPoint

from ...core.drag import edge_direction_for
from ...core.money import fmt_amount
from ...services.billing import subtotal
from ..common.theme import tile_stylesheet


class TableTile(QFrame):
    def __init__(self, table, on_select):
        super().__init__()
        self.setObjectName("tile")
        self.table_id = table.id
        self._busy = False
        self._target = False
        self._on_select = on_select
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.setMinimumHeight(120)

        v = QVBoxLayout(self)
        v.setContentsMargins(10, 10, 10, 10)
        v.setSpacing(6)

        top = QHBoxLayout()
        self.seats = QLabel(f"👥 {table.capacity}")
        self.badge = QLabel("")
        self.badge.setObjectName("badge")
        self.badge.hide()
        top.addWidget(self.seats)
        top.addStretch(1)
        top.addWidget(self.badge)
        v.addLayout(top)

        self.name = QLabel(table.name)
        self.name.setAlignment(Qt.AlignmentFlag.AlignCenter)
        v.addWidget(self.name, 1)

        self.total = QLabel("")
        self.total.setAlignment(Qt.AlignmentFlag.AlignCenter)
        v.addWidget(self.total)
        self._apply_style()

    def mouseReleaseEvent(self, e):
        if e.button() == Qt.MouseButton.LeftButton and self.rect().contains(e.position().toPoint()):
            self._on_select(self.table_id)
        super().mouseReleaseEvent(e)

    def set_order(self, count: int, total_text: str):
        self._busy = count > 0
        if self._busy:
            self.badge.setText(f"{count} item{'s' if count != 1 else ''}")
            self.badge.show()
            self.total.setText(total_text)
        else:
            self.badge.hide()
            self.total.setText("")
        self._apply_style()

    def set_target(self, on: bool):
        if on == self._target:
            return
        self._target = on
        self._apply_style()

    def _apply_style(self):
        if self._target:
            state = "target"
        elif self._busy:
            state = "busy"
        else:
            state = "free"
        self.setStyleSheet(tile_stylesheet(state))


class TableMap(QWidget):
    MIN_TILE = QSize(150, 120)

    def __init__(self, currency: str, on_select):
        super().__init__()
        self.tiles: dict[int, TableTile] = {}
        self._order: list[int] = []
        self._currency = currency
        self._on_select = on_select
        self._highlighted: int | None = None
        self._last_cols = -1  # cache to avoid redundant relayouts

        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        outer.addWidget(self.scroll, 1)
        self.container = QWidget()
        self.scroll.setWidget(self.container)
        self.grid = QGridLayout(self.container)
        self.grid.setContentsMargins(12, 12, 12, 12)
        self.grid.setHorizontalSpacing(14)
        self.grid.setVerticalSpacing(14)
        self.grid.setAlignment(Qt.AlignmentFlag.AlignTop)

        self.empty_label = QLabel("No tables match your search.")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.hide()
        outer.addWidget(self.empty_label)

    def set_tables(self, tables, orders):
        """Show *tables* (already filtered) with badges from the *orders* snapshot."""
        wanted = [t.id for t in tables]
        for table in tables:
            if table.id not in self.tiles:
                self.tiles[table.id] = TableTile(table, self._on_select)
        for table_id, tile in self.tiles.items():
            lines = orders.get(table_id, ())
            count = sum(line.quantity for line in lines)
            tile.set_order(count, fmt_amount(subtotal(lines), self._currency) if lines else "")
            tile.setVisible(table_id in wanted)
        self.empty_label.setVisible(not wanted)
        if wanted != self._order:
            self._order = wanted
            self._relayout(force=True)

    def highlight(self, table_id: int | None):
        if table_id == self._highlighted:
            return
        if self._highlighted is not None and self._highlighted in self.tiles:
            self.tiles[self._highlighted].set_target(False)
        self._highlighted = table_id
        if table_id is not None and table_id in self.tiles:
            self.tiles[table_id].set_target(True)

    def table_at(self, global_pos: QPoint) -> int | None:
        viewport = self.scroll.viewport()
        local = viewport.mapFromGlobal(global_pos)
        if not viewport.rect().contains(local):
            return None
        for table_id in self._order:
            tile = self.tiles[table_id]
            if not tile.isVisible():
                continue
            if tile.rect().contains(tile.mapFromGlobal(global_pos)):
                return table_id
        return None

    def edge_direction(self, global_pos: QPoint) -> int:
        viewport = self.scroll.viewport()
        top_left = viewport.mapToGlobal(QPoint(0, 0))
        if not (top_left.x() <= global_pos.x() <= top_left.x() + viewport.width()):
            return 0
        return edge_direction_for(global_pos.y(), top_left.y(), top_left.y() + viewport.height())

    def scroll_by(self, dy: int):
        bar = self.scroll.verticalScrollBar()
        bar.setValue(bar.value() + int(dy))

    def resizeEvent(self, e):
        super().resizeEvent(e)
        self._relayout()

    def _relayout(self, force: bool = False):
        width = max(self.width(), 1)
        cols = max(
            2,
            min(max(len(self._order), 1),
                width // (self.MIN_TILE.width() + self.grid.horizontalSpacing()))
        )
        if not force and cols == self._last_cols:
            return
        self._last_cols = cols

        # remove positions (but keep widgets alive)
        while self.grid.count():
            self.grid.takeAt(0)

        for i, table_id in enumerate(self._order):
            r, c = divmod(i, cols)
            self.grid.addWidget(self.tiles[table_id], r, c)
