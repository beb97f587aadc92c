# spice_pos/ui/order_dialog.py
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QListWidget,
    QListWidgetItem, QWidget, QMessageBox
)
from PyQt6.QtCore import Qt, QTimer

from ..core.money import fmt_amount
from ..services.billing import TAX_RATE, grand_total, line_total, subtotal, tax
from ..services.pos import ORDERS_CHANGED
from .bill_dialog import BillDialog


class _LineRow(QWidget):
    def __init__(self, line, currency, on_delta, on_remove):
        super().__init__()
        row = QHBoxLayout(self)
        row.setContentsMargins(4, 2, 4, 2)
        name = QLabel(f"{line.name}\n{fmt_amount(line.price, currency)} each")
        row.addWidget(name, 1)
        minus = QPushButton("−")
        minus.setFixedWidth(40)
        minus.clicked.connect(lambda: on_delta(line.item_id, -1))
        qty = QLabel(str(line.quantity))
        qty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        qty.setFixedWidth(36)
        plus = QPushButton("+")
        plus.setFixedWidth(40)
        plus.clicked.connect(lambda: on_delta(line.item_id, 1))
        total = QLabel(fmt_amount(line_total(line), currency))
        total.setFixedWidth(110)
        total.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        remove = QPushButton("✕")
        remove.setFixedWidth(40)
        remove.setToolTip("Remove this dish")
        remove.clicked.connect(lambda: on_remove(line.item_id))
        for w in (minus, qty, plus, total, remove):
            row.addWidget(w)


class OrderDialog(QDialog):
    """Order detail for one table; lives while the session is open."""

    def __init__(self, shell, table, currency: str, bill_printer, parent=None):
        super().__init__(parent)
        self.shell = shell
        self.table = table
        self.currency = currency
        self.bill_printer = bill_printer
        self._closed = False
        self.setWindowTitle(f"Order — {table.name}")
        self.setModal(False)
        self.setMinimumSize(620, 560)

        v = QVBoxLayout(self)
        self.title = QLabel(f"{table.name} · seats {table.capacity}")
        self.title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        v.addWidget(self.title)

        self.list = QListWidget()
        self.list.setObjectName("OrderItems")
        v.addWidget(self.list, 1)
        self.empty = QLabel("No items yet. Drag dishes onto the table to start an order.")
        self.empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty.setWordWrap(True)
        v.addWidget(self.empty)

        self.sub = QLabel()
        self.tax = QLabel()
        self.total = QLabel()
        for w in (self.sub, self.tax, self.total):
            w.setAlignment(Qt.AlignmentFlag.AlignRight)
            v.addWidget(w)

        btns = QHBoxLayout()
        self.clear_btn = QPushButton("Clear Order")
        self.bill_btn = QPushButton("Generate Bill")
        self.end_btn = QPushButton("End Session")
        self.close_btn = QPushButton("Close")
        for b in (self.clear_btn, self.bill_btn, self.end_btn, self.close_btn):
            btns.addWidget(b)
        v.addLayout(btns)

        self.clear_btn.clicked.connect(self._clear)
        self.bill_btn.clicked.connect(self._bill)
        self.end_btn.clicked.connect(self._end)
        self.close_btn.clicked.connect(self.reject)

        shell.bus.subscribe(ORDERS_CHANGED, self._on_orders_changed)
        self.refresh()

    def refresh(self):
        lines = self.shell.store.lines(self.table.id)
        self.list.clear()
        for line in lines:
            row = _LineRow(line, self.currency, self._change, self._remove)
            item = QListWidgetItem()
            item.setSizeHint(row.sizeHint())
            self.list.addItem(item)
            self.list.setItemWidget(item, row)
        self.list.setVisible(bool(lines))
        self.empty.setVisible(not lines)

        sub = subtotal(lines)
        tax_amount = tax(sub)
        self.sub.setText(f"Subtotal: {fmt_amount(sub, self.currency)}")
        self.tax.setText(f"Tax ({(TAX_RATE * 100).normalize()}%): {fmt_amount(tax_amount, self.currency)}")
        self.total.setText(f"Grand total: {fmt_amount(grand_total(sub, tax_amount), self.currency)}")
        self.clear_btn.setEnabled(bool(lines))

    def _on_orders_changed(self, table_id):
        if table_id is None or table_id == self.table.id:
            # rows own the buttons that triggered this; rebuild after the click returns
            QTimer.singleShot(0, self._refresh_if_open)

    def _refresh_if_open(self):
        if not self._closed:
            self.refresh()

    def _change(self, item_id, delta):
        self.shell.change_quantity(self.table.id, item_id, delta)

    def _remove(self, item_id):
        self.shell.remove_line(self.table.id, item_id)

    def _clear(self):
        if not self.shell.store.has_orders(self.table.id):
            return
        answer = QMessageBox.question(self, "Clear Order", f"Remove every dish from {self.table.name}?")
        if answer == QMessageBox.StandardButton.Yes:
            self.shell.clear_order(self.table.id)
            self.shell.notify(f"Order cleared for {self.table.name}.", "info")
            self.close_session_view()

    def _bill(self):
        bill = self.shell.generate_bill(self.table.id)
        if bill is None:
            return
        BillDialog(bill, self.bill_printer, self).exec()

    def _end(self):
        if self.shell.end_session(self.table.id):
            self.close_session_view()

    @property
    def is_open(self) -> bool:
        return not self._closed

    def close_session_view(self):
        """Close once; the main window may already have done it on session change."""
        if not self._closed:
            self.accept()

    def done(self, result):
        self._closed = True
        self.shell.bus.unsubscribe(ORDERS_CHANGED, self._on_orders_changed)
        if self.shell.store.current_table_id == self.table.id:
            self.shell.close_session()
        super().done(result)
