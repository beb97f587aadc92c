"""Centralised storage paths for Spice POS."""
from __future__ import annotations

import os
from pathlib import Path

__all__ = [
    "BASE_DIR",
    "DATA_DIR",
    "CONFIG_DIR",
    "PRINTS_DIR",
    "DB_PATH",
    "ORDERS_FILE",
    "SETTINGS_FILE",
    "ensure_storage_dirs",
]


def _detect_base_dir() -> Path:
    env_override = os.getenv("SPICE_POS_DATA_ROOT")
    if env_override:
        return Path(env_override).expanduser().resolve()

    if os.name == "nt":
        app_data = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / "SpicePOS"

    return Path.home() / ".spice_pos"


BASE_DIR = _detect_base_dir()
DATA_DIR = BASE_DIR / "data"
CONFIG_DIR = BASE_DIR / "config"
PRINTS_DIR = DATA_DIR / "bills"

DB_PATH = DATA_DIR / "audit.db"
ORDERS_FILE = DATA_DIR / "orders.json"
SETTINGS_FILE = CONFIG_DIR / "settings.json"


def ensure_storage_dirs() -> None:
    """Create the directory tree required for persistent storage."""
    for path in (DATA_DIR, CONFIG_DIR, PRINTS_DIR):
        path.mkdir(parents=True, exist_ok=True)
