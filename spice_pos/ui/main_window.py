# spice_pos/ui/main_window.py
from datetime import datetime

from PyQt6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QLabel,
    QToolBar,
    QHBoxLayout,
    QPushButton,
    QFrame,
    QLineEdit,
    QComboBox,
)
from PyQt6.QtCore import QEvent, Qt, QTimer
from PyQt6.QtGui import QShortcut, QKeySequence

from ..core.catalog import ALL_CATEGORIES
from ..services.pos import NOTIFY, ORDERS_CHANGED, SESSION_CHANGED
from ..services.printer import BillPrinter
from .common.theme import build_main_window_stylesheet
from .components.menu_grid import MenuGrid
from .components.table_map import TableMap
from .drag_bridge import DragBridge
from .order_dialog import OrderDialog

TOAST_MS = 3000


class MainWindow(QMainWindow):
    def __init__(self, shell, config):
        super().__init__()
        self.shell = shell
        self.currency = str(config.get("currency") or "")
        self.bill_printer = BillPrinter()
        self._order_dialog = None
        self.resize(1440, 900)
        self.setWindowTitle(f"{config.get('restaurant_name') or 'Spice POS'} — Spice POS")
        self.setStyleSheet(build_main_window_stylesheet())

        self._status = self.statusBar()
        self._status.setSizeGripEnabled(False)
        self._clock = QLabel()
        self._clock.setObjectName("clock")
        self._status.addPermanentWidget(self._clock)
        self._clock_timer = QTimer(self)
        self._clock_timer.timeout.connect(self._tick_clock)
        self._clock_timer.start(1000)
        self._tick_clock()

        bar = QToolBar("Main")
        bar.setMovable(False)
        self.addToolBar(bar)
        title = QLabel(str(config.get("restaurant_name") or "Spice POS"))
        title.setObjectName("appTitle")
        bar.addWidget(title)

        container = QWidget()
        container.setObjectName("MainContainer")
        container_layout = QVBoxLayout(container)
        container_layout.setContentsMargins(16, 16, 16, 16)
        container_layout.setSpacing(12)

        self.banner = QFrame()
        self.banner.setObjectName("ToastBanner")
        banner_layout = QHBoxLayout(self.banner)
        banner_layout.setContentsMargins(18, 10, 12, 10)
        self.banner_label = QLabel()
        self.banner_label.setWordWrap(True)
        self.banner_close = QPushButton("✕")
        self.banner_close.setFixedWidth(36)
        self.banner_close.setFlat(True)
        self.banner_close.clicked.connect(self._hide_banner)
        banner_layout.addWidget(self.banner_label, 1)
        banner_layout.addWidget(self.banner_close, 0, alignment=Qt.AlignmentFlag.AlignTop)
        self.banner.setVisible(False)
        container_layout.addWidget(self.banner, 0)

        self.banner_timer = QTimer(self)
        self.banner_timer.setSingleShot(True)
        self.banner_timer.timeout.connect(self._hide_banner)

        panels = QHBoxLayout()
        panels.setSpacing(16)

        # Menu panel
        menu_panel = QWidget(); menu_panel.setObjectName("MenuPanel")
        mv = QVBoxLayout(menu_panel)
        mv.addWidget(QLabel("Menu — drag a dish onto a table"))
        filters = QHBoxLayout()
        self.category_box = QComboBox()
        self.category_box.addItem("All dishes", ALL_CATEGORIES)
        for category in shell.catalog.categories():
            self.category_box.addItem(category.title(), category)
        self.menu_search = QLineEdit()
        self.menu_search.setPlaceholderText("Search dishes…")
        self.menu_search.setClearButtonEnabled(True)
        filters.addWidget(self.category_box, 0)
        filters.addWidget(self.menu_search, 1)
        mv.addLayout(filters)
        self.menu_grid = MenuGrid(self.currency, self._on_card_activated, on_card_created=self._attach_card)
        mv.addWidget(self.menu_grid, 1)

        # Tables panel
        tables_panel = QWidget(); tables_panel.setObjectName("TablesPanel")
        tv = QVBoxLayout(tables_panel)
        tv.addWidget(QLabel("Tables"))
        self.table_search = QLineEdit()
        self.table_search.setPlaceholderText("Search tables or dishes ordered…")
        self.table_search.setClearButtonEnabled(True)
        tv.addWidget(self.table_search)
        self.table_map = TableMap(self.currency, self._on_table_select)
        tv.addWidget(self.table_map, 1)

        panels.addWidget(menu_panel, 3)
        panels.addWidget(tables_panel, 2)
        container_layout.addLayout(panels, 1)
        self.setCentralWidget(container)

        self.drag = DragBridge(self, self.menu_grid, self.table_map, shell.drop, shell.catalog)

        self.category_box.currentIndexChanged.connect(lambda _: self._render_menu())
        self.menu_search.textChanged.connect(lambda _: self._render_menu())
        self.table_search.textChanged.connect(lambda _: self._render_tables())

        QShortcut(QKeySequence("Esc"), self, activated=self.drag.cancel)
        QShortcut(QKeySequence("Ctrl+F"), self, activated=self.menu_search.setFocus)

        shell.bus.subscribe(ORDERS_CHANGED, self._on_orders_changed)
        shell.bus.subscribe(NOTIFY, self._on_notify)
        shell.bus.subscribe(SESSION_CHANGED, self._on_session_changed)

        self._render_menu()
        self._render_tables()

    # ----- rendering -----
    def _render_menu(self):
        category = self.category_box.currentData()
        items = self.shell.catalog.filter(category=category, term=self.menu_search.text())
        self.menu_grid.set_items(items)

    def _render_tables(self):
        orders = self.shell.store.snapshot()
        tables = self.shell.registry.search(self.table_search.text(), orders)
        self.table_map.set_tables(tables, orders)

    def _attach_card(self, card):
        self.drag.attach(card)

    # ----- intents -----
    def _on_card_activated(self, item_id):
        current = self.shell.store.current_table_id
        if current is None:
            self._show_banner("Drag the dish onto a table, or open a table first.", "info")
            return
        self.shell.drop(item_id, current)

    def _on_table_select(self, table_id):
        if self.drag.controller.active:
            return
        table = self.shell.registry.find_by_id(table_id)
        if table is None:
            return
        if self._order_dialog is not None:
            self._order_dialog.reject()
        self.shell.open_session(table.id)
        dialog = OrderDialog(self.shell, table, self.currency, self.bill_printer, self)
        self._order_dialog = dialog
        dialog.finished.connect(lambda _result, d=dialog: self._on_dialog_finished(d))
        dialog.show()

    def _on_dialog_finished(self, dialog):
        if self._order_dialog is dialog:
            self._order_dialog = None
        dialog.deleteLater()

    # ----- bus handlers -----
    def _on_orders_changed(self, _table_id):
        self._render_tables()

    def _on_session_changed(self, table_id):
        dialog = self._order_dialog
        if dialog is not None and dialog.is_open and dialog.table.id != table_id:
            dialog.close_session_view()

    def _on_notify(self, message, severity="info"):
        self._show_banner(message, severity)

    def _hide_banner(self):
        self.banner_timer.stop()
        self.banner.setVisible(False)

    def _show_banner(self, text: str, kind: str = "info", duration: int = TOAST_MS):
        self.banner.setProperty("kind", kind)
        self.banner_label.setText(text)
        self.banner.setVisible(True)
        # restart rather than stack: the newest toast owns the full window
        self.banner_timer.stop()
        if duration and duration > 0:
            self.banner_timer.start(duration)
        self.banner.style().unpolish(self.banner)
        self.banner.style().polish(self.banner)

    def _tick_clock(self):
        self._clock.setText(datetime.now().strftime("🕒 %a %d %b %Y  %H:%M:%S"))

    def changeEvent(self, event):
        drag = getattr(self, "drag", None)
        if drag is not None and event.type() == QEvent.Type.WindowStateChange and self.isMinimized():
            drag.cancel()
        super().changeEvent(event)

    def closeEvent(self, event):
        self.drag.cancel()
        if self._clock_timer.isActive():
            self._clock_timer.stop()
        super().closeEvent(event)
