"""Stylesheets for the main window and table tiles."""

from __future__ import annotations

_BG = "#1A120D"
_SURFACE = "#2A1B12"
_TEXT = "#F8EFE4"
_MUTED_TEXT = "#D9C7B5"
_ACCENT = "#E0913A"
_MENU_CARD = "#33211A"
_MENU_CARD_HOVER = "#45301F"
_TABLE_FREE = "#3A7D44"
_TABLE_BUSY = "#E0913A"
_TABLE_TARGET = "#4FC3F7"


def build_main_window_stylesheet() -> str:
    return "\n".join(
        [
            f"QMainWindow {{ background-color: {_BG}; }}",
            "QWidget#MainContainer { background-color: transparent; }",
            f"QWidget#MenuPanel, QWidget#TablesPanel {{ background-color: {_SURFACE}; border-radius: 22px; }}",
            f"QStatusBar {{ background-color: rgba(26, 18, 13, 0.9); color: {_MUTED_TEXT}; border-top: 1px solid rgba(255,255,255,0.1); }}",
            f"QStatusBar QLabel#clock {{ color: {_TEXT}; font-weight: 700; padding: 0 12px; }}",
            f"QToolBar {{ background-color: #000000; spacing: 16px; padding: 10px 18px; border: none; }}",
            "QToolBar QLabel#appTitle { color: #FFFFFF; font-weight: 700; font-size: 20px; letter-spacing: 1px; }",
            f"QMainWindow QPushButton {{ background-color: {_ACCENT}; color: #1B0F08; border-radius: 14px; padding: 10px 18px; font-weight: 700; }}",
            "QMainWindow QPushButton:disabled { background-color: rgba(110, 96, 80, 0.6); color: rgba(27, 15, 8, 0.35); }",
            f"QMainWindow QLabel {{ color: {_TEXT}; font-size: 12pt; font-weight: 600; }}",
            "QMainWindow QLineEdit, QMainWindow QComboBox { background-color: rgba(255,255,255,0.92); border-radius: 10px; padding: 8px 12px; }",
            "QScrollArea { border: none; background: transparent; }",
            "QScrollArea > QWidget > QWidget { background: transparent; }",
            f"QFrame#menuCard {{ background-color: {_MENU_CARD}; border: 1px solid rgba(255,255,255,0.12); border-radius: 16px; }}",
            f"QFrame#menuCard:hover {{ background-color: {_MENU_CARD_HOVER}; }}",
            "QFrame#menuCard QLabel#icon { font-size: 26pt; }",
            f"QFrame#menuCard QLabel#price {{ color: {_ACCENT}; }}",
            "QLabel#dragGhost { background-color: rgba(224, 145, 58, 0.92); color: #1B0F08; border-radius: 14px; padding: 8px 14px; font-weight: 700; }",
            "QFrame#ToastBanner { border-radius: 18px; padding: 12px 18px; border: 1px solid rgba(255,255,255,0.18); background-color: rgba(255,255,255,0.90); color: #1B0F08; }",
            f"QFrame#ToastBanner[kind=\"success\"] {{ background-color: rgba(72, 160, 132, 0.92); color: {_TEXT}; }}",
            "QFrame#ToastBanner[kind=\"warn\"] { background-color: rgba(214, 161, 80, 0.94); color: #2B130B; }",
            "QFrame#ToastBanner[kind=\"error\"] { background-color: rgba(178, 70, 70, 0.94); color: #1B0F08; }",
            "QFrame#ToastBanner QLabel { font-size: 12pt; font-weight: 600; color: #1B0F08; }",
            "QFrame#ToastBanner QPushButton { background-color: transparent; color: #1B0F08; border: none; padding: 4px 8px; }",
        ]
    )


def tile_stylesheet(state: str) -> str:
    border = {
        "free": _TABLE_FREE,
        "busy": _TABLE_BUSY,
        "target": _TABLE_TARGET,
    }.get(state, _TABLE_FREE)
    width = 4 if state == "target" else 2
    return (
        f"QFrame#tile {{ background-color: #3b2a20; border: {width}px solid {border}; border-radius: 14px; }}"
        f" QFrame#tile QLabel {{ color: {_TEXT}; }}"
        " QFrame#tile QLabel#badge { background:#111; color:#fff; border-radius:10px; padding:2px 8px; }"
    )
