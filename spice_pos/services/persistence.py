"""JSON storage of open orders, written atomically after every change."""
from __future__ import annotations

import json
import logging
import os
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Mapping

from ..core.money import to_decimal, to_json_number
from ..core.paths import ORDERS_FILE
from .orders import OrderLine, OrderMap

log = logging.getLogger(__name__)


def encode_orders(order_map: Mapping) -> Dict[str, List[Dict[str, Any]]]:
    return {
        str(table_id): [
            {
                "id": line.item_id,
                "name": line.name,
                "price": to_json_number(Decimal(line.price)),
                "quantity": line.quantity,
                "category": line.category,
            }
            for line in lines
        ]
        for table_id, lines in order_map.items()
        if lines
    }


def _decode_line(rec: Any) -> OrderLine:
    if not isinstance(rec, dict):
        raise ValueError("order line is not an object")
    quantity = rec["quantity"]
    item_id = rec["id"]
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValueError(f"bad quantity {quantity!r}")
    if isinstance(item_id, bool) or not isinstance(item_id, int):
        raise ValueError(f"bad item id {item_id!r}")
    price = rec["price"]
    if isinstance(price, bool) or not isinstance(price, (int, float, str)):
        raise ValueError(f"bad price {price!r}")
    amount = to_decimal(price)
    if not amount.is_finite():
        raise ValueError(f"bad price {price!r}")
    return OrderLine(
        item_id=item_id,
        name=str(rec["name"]),
        price=amount,
        quantity=quantity,
        category=str(rec.get("category", "")),
    )


def decode_orders(payload: Any) -> OrderMap:
    """Parse a stored payload, raising ``ValueError``/``KeyError`` on malformed data."""
    if not isinstance(payload, dict):
        raise ValueError("stored orders are not an object")
    out: OrderMap = {}
    for raw_key, records in payload.items():
        key = int(raw_key)
        if not isinstance(records, list):
            raise ValueError(f"table {raw_key} orders are not a list")
        lines = [_decode_line(rec) for rec in records]
        if lines:
            out[key] = lines
    return out


class OrderPersistence:
    """Load/save the order map as ``{"<table id>": [line, ...]}``."""

    __slots__ = ("path",)

    def __init__(self, path: Path | str = ORDERS_FILE):
        self.path = Path(path)

    def load(self) -> OrderMap:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
            return decode_orders(payload)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            log.warning("discarding unreadable orders in %s: %s", self.path, exc)
            return {}

    def save(self, order_map: Mapping) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(encode_orders(order_map), fh, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)
