"""Read-only menu catalog and table registry."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from .money import to_decimal

ALL_CATEGORIES = "all"


@dataclass(frozen=True, slots=True)
class MenuItem:
    id: int
    name: str
    category: str
    price: Decimal
    icon: str = ""


@dataclass(frozen=True, slots=True)
class Table:
    id: int
    name: str
    capacity: int


def _build_index(entities: Iterable, kind: str) -> dict:
    index: dict = {}
    for entity in entities:
        if entity.id in index:
            raise ValueError(f"duplicate {kind} id {entity.id}")
        index[entity.id] = entity
    return index


class MenuCatalog:
    """Immutable list of purchasable items, in display order."""

    __slots__ = ("_items", "_by_id")

    def __init__(self, items: Iterable[MenuItem]):
        self._items: tuple[MenuItem, ...] = tuple(items)
        self._by_id = _build_index(self._items, "menu item")
        for item in self._items:
            if item.price < 0:
                raise ValueError(f"negative price for menu item {item.id}")

    @classmethod
    def from_records(cls, records: Iterable[Mapping]) -> "MenuCatalog":
        return cls(
            MenuItem(
                id=int(rec["id"]),
                name=str(rec["name"]),
                category=str(rec["category"]),
                price=to_decimal(rec["price"]),
                icon=str(rec.get("icon", "")),
            )
            for rec in records
        )

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> tuple[MenuItem, ...]:
        return self._items

    def find_by_id(self, item_id) -> Optional[MenuItem]:
        try:
            return self._by_id.get(int(item_id))
        except (TypeError, ValueError):
            return None

    def categories(self) -> list[str]:
        seen: list[str] = []
        for item in self._items:
            if item.category not in seen:
                seen.append(item.category)
        return seen

    def filter(self, category: str | None = None, term: str = "") -> list[MenuItem]:
        """Items in *category* (``None``/``"all"`` for every category) whose name contains *term*."""
        needle = (term or "").strip().casefold()
        wanted = None if category in (None, "", ALL_CATEGORIES) else category
        return [
            item
            for item in self._items
            if (wanted is None or item.category == wanted)
            and (not needle or needle in item.name.casefold())
        ]


class TableRegistry:
    """Immutable list of tables, in floor order."""

    __slots__ = ("_tables", "_by_id")

    def __init__(self, tables: Iterable[Table]):
        self._tables: tuple[Table, ...] = tuple(tables)
        self._by_id = _build_index(self._tables, "table")

    @classmethod
    def from_records(cls, records: Iterable[Mapping]) -> "TableRegistry":
        return cls(
            Table(id=int(rec["id"]), name=str(rec["name"]), capacity=int(rec["capacity"]))
            for rec in records
        )

    def __iter__(self):
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    @property
    def tables(self) -> tuple[Table, ...]:
        return self._tables

    def find_by_id(self, table_id) -> Optional[Table]:
        try:
            return self._by_id.get(int(table_id))
        except (TypeError, ValueError):
            return None

    def search(self, term: str = "", orders: Mapping[int, Sequence] | None = None) -> list[Table]:
        """Tables whose name or number matches *term*, or whose order has a matching item."""
        needle = (term or "").strip().casefold()
        if not needle:
            return list(self._tables)
        orders = orders or {}
        found: list[Table] = []
        for table in self._tables:
            if needle in table.name.casefold() or needle == str(table.id):
                found.append(table)
                continue
            lines = orders.get(table.id) or ()
            if any(needle in str(getattr(line, "name", "")).casefold() for line in lines):
                found.append(table)
        return found


def default_catalog() -> MenuCatalog:
    from .menu_data import MENU

    return MenuCatalog.from_records(MENU)


def default_registry() -> TableRegistry:
    from .menu_data import TABLES

    return TableRegistry.from_records(TABLES)
