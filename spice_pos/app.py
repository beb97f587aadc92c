"""Application bootstrap wiring for the Spice POS desktop client."""

import sys
import traceback

from PyQt6.QtWidgets import QApplication, QMessageBox

from .core.catalog import default_catalog, default_registry
from .core.config_store import load_config
from .core.db import close_engine, init_db
from .core.paths import ensure_storage_dirs
from .services.persistence import OrderPersistence
from .services.pos import PosShell
from .ui.main_window import MainWindow


def _qt_excepthook(exctype, value, tb):
    # Show the exception instead of killing the app silently
    msg = "".join(traceback.format_exception(exctype, value, tb))
    box = QMessageBox()
    box.setWindowTitle("Unexpected Error")
    box.setText("Something went wrong.\nThe register keeps running.")
    box.setDetailedText(msg)
    box.setIcon(QMessageBox.Icon.Critical)
    box.exec()


def build_shell() -> PosShell:
    ensure_storage_dirs()
    init_db()
    shell = PosShell(default_catalog(), default_registry(), OrderPersistence())
    shell.start()
    return shell


def main():
    app = QApplication(sys.argv)
    app.setApplicationName("Spice POS")
    sys.excepthook = _qt_excepthook
    app.aboutToQuit.connect(close_engine)

    config = load_config()
    shell = build_shell()

    mw = MainWindow(shell, config)
    mw.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
