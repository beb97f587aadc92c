# spice_pos/ui/bill_dialog.py
from PyQt6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QPlainTextEdit, QPushButton, QMessageBox
from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices, QFontDatabase


class BillDialog(QDialog):
    def __init__(self, bill, bill_printer, parent=None):
        super().__init__(parent)
        self.bill = bill
        self.bill_printer = bill_printer
        self.lines = bill_printer.bill_lines(bill)
        self.setWindowTitle(f"Bill #{bill.number} — {bill.table_name}")
        self.setMinimumSize(420, 520)

        v = QVBoxLayout(self)
        self.preview = QPlainTextEdit()
        self.preview.setReadOnly(True)
        self.preview.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))
        self.preview.setPlainText("\n".join(self.lines))
        v.addWidget(self.preview, 1)

        row = QHBoxLayout()
        self.print_btn = QPushButton("🖨 Print")
        self.close_btn = QPushButton("Close")
        row.addWidget(self.print_btn)
        row.addWidget(self.close_btn)
        v.addLayout(row)

        self.print_btn.clicked.connect(self._print)
        self.close_btn.clicked.connect(self.accept)

    def _print(self):
        try:
            pdf_path = self.bill_printer.render(self.bill, self.lines)
        except OSError as exc:
            QMessageBox.critical(self, "Print failed", f"Could not write the bill:\n{exc}")
            return
        QDesktopServices.openUrl(QUrl.fromLocalFile(str(pdf_path)))
