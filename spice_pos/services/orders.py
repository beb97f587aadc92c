"""Per-table order state, the session pointer, and the effects each change requests."""

from dataclasses import dataclass, replace
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ..core import effects as fx
from ..core.catalog import MenuCatalog, MenuItem, TableRegistry
from ..core.effects import Effect


class OrderInvariantError(Exception):
    __slots__ = ()
    pass


@dataclass(frozen=True, slots=True)
class OrderLine:
    item_id: int
    name: str
    price: Decimal
    quantity: int = 1
    category: str = ""

    @classmethod
    def snapshot_of(cls, item: MenuItem) -> "OrderLine":
        return cls(item_id=item.id, name=item.name, price=item.price, quantity=1, category=item.category)


OrderMap = Dict[int, List[OrderLine]]
OrderSnapshot = Mapping[int, Tuple[OrderLine, ...]]


def _table_key(table_id) -> Optional[int]:
    if isinstance(table_id, bool):
        return None
    try:
        return int(table_id)
    except (TypeError, ValueError):
        return None


class OrderStore:
    """Owns the table -> order lines mapping and the open-table session.

    Every mutator returns the effects the host must run: one ``save`` with
    the new snapshot, one ``audit`` entry, one ``render``. Mutators that
    change nothing return an empty list.
    """

    __slots__ = ("catalog", "registry", "_orders", "current_table_id")

    def __init__(self, catalog: MenuCatalog, registry: TableRegistry | None = None):
        self.catalog = catalog
        self.registry = registry
        self._orders: OrderMap = {}
        self.current_table_id: Optional[int] = None

    # ----- reads -----
    def snapshot(self) -> OrderSnapshot:
        return MappingProxyType({tid: tuple(lines) for tid, lines in self._orders.items()})

    def lines(self, table_id) -> Tuple[OrderLine, ...]:
        key = _table_key(table_id)
        return tuple(self._orders.get(key, ()))

    def has_orders(self, table_id) -> bool:
        return _table_key(table_id) in self._orders

    def item_count(self, table_id) -> int:
        return sum(line.quantity for line in self.lines(table_id))

    def _known_table(self, key: Optional[int]) -> bool:
        if key is None:
            return False
        if self.registry is None:
            return True
        return self.registry.find_by_id(key) is not None

    def _find_line(self, key: int, item_id) -> Tuple[Optional[List[OrderLine]], int]:
        lines = self._orders.get(key)
        if not lines:
            return None, -1
        try:
            wanted = int(item_id)
        except (TypeError, ValueError):
            return lines, -1
        for idx, line in enumerate(lines):
            if line.item_id == wanted:
                return lines, idx
        return lines, -1

    def check_invariant(self) -> None:
        for key, lines in self._orders.items():
            if not lines:
                raise OrderInvariantError(f"table {key} is present with an empty order")
            for line in lines:
                if line.quantity < 1:
                    raise OrderInvariantError(
                        f"table {key} line {line.item_id} has quantity {line.quantity}"
                    )

    def _commit(self, action: str, key: int, item_id=None, old=None, new=None) -> List[Effect]:
        self.check_invariant()
        audit = {
            "action": action,
            "table_id": key,
            "item_id": item_id,
            "old_value": old,
            "new_value": new,
        }
        return [Effect(fx.SAVE, self.snapshot()), Effect(fx.AUDIT, audit), Effect(fx.RENDER, key)]

    # ----- writes -----
    def load(self, order_map: Mapping) -> List[Effect]:
        """Replace all orders with *order_map* (startup only); empty tables are dropped."""
        self._orders = {}
        for raw_key, lines in (order_map or {}).items():
            key = _table_key(raw_key)
            if key is None or not lines:
                continue
            self._orders[key] = [line for line in lines if line.quantity >= 1]
            if not self._orders[key]:
                del self._orders[key]
        self.check_invariant()
        return [Effect(fx.RENDER, None)]

    def add_item(self, table_id, item_id) -> List[Effect]:
        key = _table_key(table_id)
        item = self.catalog.find_by_id(item_id)
        if item is None or not self._known_table(key):
            return []
        lines = self._orders.setdefault(key, [])
        _, idx = self._find_line(key, item.id)
        if idx < 0:
            lines.append(OrderLine.snapshot_of(item))
            return self._commit("add_item", key, item.id, 0, 1)
        line = lines[idx]
        lines[idx] = replace(line, quantity=line.quantity + 1)
        return self._commit("add_item", key, item.id, line.quantity, line.quantity + 1)

    def change_quantity(self, table_id, item_id, delta: int) -> List[Effect]:
        key = _table_key(table_id)
        if key is None:
            return []
        lines, idx = self._find_line(key, item_id)
        if idx < 0:
            return []
        line = lines[idx]
        new_qty = line.quantity + int(delta)
        if new_qty <= 0:
            return self.remove_line(key, line.item_id)
        if new_qty == line.quantity:
            return []
        lines[idx] = replace(line, quantity=new_qty)
        return self._commit("change_quantity", key, line.item_id, line.quantity, new_qty)

    def remove_line(self, table_id, item_id) -> List[Effect]:
        key = _table_key(table_id)
        if key is None:
            return []
        lines, idx = self._find_line(key, item_id)
        if idx < 0:
            return []
        removed = lines.pop(idx)
        if not lines:
            del self._orders[key]
        return self._commit("remove_line", key, removed.item_id, removed.quantity, 0)

    def clear_order(self, table_id) -> List[Effect]:
        key = _table_key(table_id)
        lines = self._orders.pop(key, None)
        if not lines:
            return []
        count = sum(line.quantity for line in lines)
        return self._commit("clear_order", key, None, count, 0)

    def open_session(self, table_id) -> List[Effect]:
        key = _table_key(table_id)
        if not self._known_table(key):
            return []
        self.current_table_id = key
        return [Effect(fx.RENDER, key)]

    def close_session(self) -> List[Effect]:
        if self.current_table_id is None:
            return []
        key = self.current_table_id
        self.current_table_id = None
        return [Effect(fx.RENDER, key)]
