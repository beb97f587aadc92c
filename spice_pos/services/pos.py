"""Host shell: runs order effects and the bill / end-of-session flows.

The shell is the only place that touches collaborators. Each user action
goes through :meth:`PosShell.run`, which performs ``save`` before
``render``. A failed save or audit write is logged and the render still
happens, so the screen always matches the in-memory orders.
"""

import logging
from typing import Callable, Iterable, List, Optional

from ..core import effects as fx
from ..core.bus import EventBus, bus as default_bus
from ..core.catalog import MenuCatalog, TableRegistry
from ..core.config_store import next_bill_number
from ..core.db import log_action
from ..core.effects import Effect, notify
from .billing import Bill, compute_bill
from .orders import OrderStore
from .persistence import OrderPersistence

ORDERS_CHANGED = "orders_changed"
SESSION_CHANGED = "session_changed"
NOTIFY = "notify"

log = logging.getLogger(__name__)


def _single_render(effects: List[Effect]) -> List[Effect]:
    """Collapse a batch to one trailing render request."""
    renders = [e for e in effects if e.kind == fx.RENDER]
    if len(renders) <= 1:
        return effects
    kept = [e for e in effects if e.kind != fx.RENDER]
    return kept + [renders[0]]


class PosShell:
    __slots__ = ("catalog", "registry", "store", "persistence", "bus", "audit", "bill_numbers")

    def __init__(
        self,
        catalog: MenuCatalog,
        registry: TableRegistry,
        persistence: Optional[OrderPersistence] = None,
        *,
        event_bus: Optional[EventBus] = None,
        audit: Optional[Callable[..., None]] = log_action,
        bill_numbers: Callable[[], int] = next_bill_number,
    ):
        self.catalog = catalog
        self.registry = registry
        self.store = OrderStore(catalog, registry)
        self.persistence = persistence
        self.bus = event_bus if event_bus is not None else default_bus
        self.audit = audit
        self.bill_numbers = bill_numbers

    # ----- effect runner -----
    def run(self, effects: Iterable[Effect]) -> List[Effect]:
        effects = list(effects)
        save_failed = False
        for effect in effects:
            kind = effect.kind
            if kind == fx.SAVE:
                if self.persistence is not None:
                    try:
                        self.persistence.save(effect.payload)
                    except OSError:
                        log.exception("could not save orders")
                        save_failed = True
            elif kind == fx.AUDIT:
                if self.audit is not None:
                    try:
                        self.audit(**effect.payload)
                    except Exception:
                        # the audit trail never blocks the register
                        log.exception("could not write audit entry %s", effect.payload.get("action"))
            elif kind == fx.RENDER:
                self.bus.emit(ORDERS_CHANGED, effect.payload)
            elif kind == fx.NOTIFY:
                message, severity = effect.payload
                self.bus.emit(NOTIFY, message, severity)
        if save_failed:
            self.bus.emit(NOTIFY, "Orders could not be saved to disk.", "error")
        return effects

    def start(self) -> None:
        """Load saved orders once and ask for the first render."""
        loaded = self.persistence.load() if self.persistence is not None else {}
        self.run(self.store.load(loaded))

    # ----- order actions -----
    def add_item(self, table_id, item_id) -> List[Effect]:
        return self.run(self.store.add_item(table_id, item_id))

    def change_quantity(self, table_id, item_id, delta: int) -> List[Effect]:
        return self.run(self.store.change_quantity(table_id, item_id, delta))

    def remove_line(self, table_id, item_id) -> List[Effect]:
        return self.run(self.store.remove_line(table_id, item_id))

    def clear_order(self, table_id) -> List[Effect]:
        """Empty the order; clearing the open table also closes its session."""
        effects = self.store.clear_order(table_id)
        closing = bool(effects) and self.store.current_table_id == effects[-1].payload
        if closing:
            effects += self.store.close_session()
        effects = self.run(_single_render(effects))
        if closing:
            self.bus.emit(SESSION_CHANGED, None)
        return effects

    def drop(self, item_id, table_id) -> List[Effect]:
        """A drag gesture delivered *item_id* onto *table_id*."""
        effects = self.store.add_item(table_id, item_id)
        if effects:
            item = self.catalog.find_by_id(item_id)
            table = self.registry.find_by_id(table_id)
            effects.append(notify(f"{item.name} added to {table.name}", "success"))
        return self.run(effects)

    # ----- session -----
    def open_session(self, table_id) -> List[Effect]:
        effects = self.run(self.store.open_session(table_id))
        if effects:
            self.bus.emit(SESSION_CHANGED, self.store.current_table_id)
        return effects

    def close_session(self) -> List[Effect]:
        effects = self.run(self.store.close_session())
        if effects:
            self.bus.emit(SESSION_CHANGED, None)
        return effects

    def notify(self, message: str, severity: str = "info") -> None:
        self.run([notify(message, severity)])

    def generate_bill(self, table_id) -> Optional[Bill]:
        lines = self.store.lines(table_id)
        table = self.registry.find_by_id(table_id)
        if table is None:
            return None
        if not lines:
            self.notify("No items in this order to bill.", "warn")
            return None
        bill = compute_bill(table.id, table.name, lines, number=self.bill_numbers())
        self.run([Effect(fx.AUDIT, {
            "action": "generate_bill",
            "table_id": table.id,
            "new_value": str(bill.total),
            "extra": f"bill #{bill.number}",
        })])
        return bill

    def end_session(self, table_id) -> bool:
        lines = self.store.lines(table_id)
        table = self.registry.find_by_id(table_id)
        if table is None:
            return False
        if not lines:
            self.notify("This table has no order to close.", "warn")
            return False
        closing = compute_bill(table.id, table.name, lines)
        effects: List[Effect] = [Effect(fx.AUDIT, {
            "action": "end_session",
            "table_id": table.id,
            "old_value": str(closing.total),
            "new_value": "0",
        })]
        effects += self.store.clear_order(table.id)
        if self.store.current_table_id == table.id:
            effects += self.store.close_session()
        effects.append(notify(f"Session ended for {table.name}.", "success"))
        self.run(_single_render(effects))
        self.bus.emit(SESSION_CHANGED, self.store.current_table_id)
        return True
