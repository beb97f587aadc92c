# spice_pos/ui/components/menu_grid.py
from PyQt6.QtWidgets import (
    QWidget, QFrame, QLabel, QGridLayout, QVBoxLayout, QScrollArea, QSizePolicy
)
from PyQt6.QtCore import Qt

from ...core.money import fmt_amount


class MenuCard(QFrame):
    """One draggable menu item. The drag bridge filters its input events."""

    def __init__(self, item, currency: str, on_activate):
        super().__init__()
        self.setObjectName("menuCard")
        self.item_id = item.id
        self.item = item
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setCursor(Qt.CursorShape.OpenHandCursor)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.setMinimumHeight(118)
        self._on_activate = on_activate

        v = QVBoxLayout(self)
        v.setContentsMargins(10, 8, 10, 8)
        v.setSpacing(2)
        icon = QLabel(item.icon)
        icon.setObjectName("icon")
        icon.setAlignment(Qt.AlignmentFlag.AlignCenter)
        name = QLabel(item.name)
        name.setWordWrap(True)
        name.setAlignment(Qt.AlignmentFlag.AlignCenter)
        price = QLabel(fmt_amount(item.price, currency))
        price.setObjectName("price")
        price.setAlignment(Qt.AlignmentFlag.AlignCenter)
        for label in (icon, name, price):
            # children must not eat the presses the bridge listens for
            label.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
            v.addWidget(label)
        self.setToolTip(f"Drag {item.name} onto a table")

    def mouseDoubleClickEvent(self, e):
        self._on_activate(self.item_id)
        super().mouseDoubleClickEvent(e)


class MenuGrid(QWidget):
    COLUMNS = 3

    def __init__(self, currency: str, on_activate, on_card_created=None):
        super().__init__()
        self._currency = currency
        self._on_activate = on_activate
        self._on_card_created = on_card_created
        self.cards: dict[int, MenuCard] = {}

        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        outer.addWidget(self.scroll, 1)

        self.container = QWidget()
        self.scroll.setWidget(self.container)
        self.grid = QGridLayout(self.container)
        self.grid.setContentsMargins(6, 6, 6, 6)
        self.grid.setHorizontalSpacing(10)
        self.grid.setVerticalSpacing(10)
        self.grid.setAlignment(Qt.AlignmentFlag.AlignTop)

        self.empty_label = QLabel("No dishes match your search.")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.hide()
        outer.addWidget(self.empty_label)

    def set_items(self, items):
        while self.grid.count():
            entry = self.grid.takeAt(0)
            widget = entry.widget()
            if widget is not None:
                widget.setParent(None)
                widget.deleteLater()
        self.cards.clear()

        for i, item in enumerate(items):
            card = MenuCard(item, self._currency, self._on_activate)
            self.cards[item.id] = card
            if self._on_card_created is not None:
                self._on_card_created(card)
            r, c = divmod(i, self.COLUMNS)
            self.grid.addWidget(card, r, c)
        self.empty_label.setVisible(not items)

    def scroll_by(self, dy: int):
        bar = self.scroll.verticalScrollBar()
        bar.setValue(bar.value() + int(dy))
