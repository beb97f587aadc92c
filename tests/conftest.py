import os
import tempfile

# storage paths are resolved at import time; point them somewhere disposable first
os.environ.setdefault("SPICE_POS_DATA_ROOT", tempfile.mkdtemp(prefix="spice-pos-tests-"))

import pytest  # noqa: E402

from spice_pos.core.bus import EventBus  # noqa: E402
from spice_pos.core.catalog import default_catalog, default_registry  # noqa: E402
from spice_pos.services.orders import OrderStore  # noqa: E402
from spice_pos.services.persistence import OrderPersistence  # noqa: E402
from spice_pos.services.pos import NOTIFY, ORDERS_CHANGED, PosShell  # noqa: E402


@pytest.fixture()
def catalog():
    return default_catalog()


@pytest.fixture()
def registry():
    return default_registry()


@pytest.fixture()
def store(catalog, registry):
    return OrderStore(catalog, registry)


class Recorder:
    """Collects bus traffic and audit rows for assertions."""

    def __init__(self, event_bus: EventBus):
        self.renders = []
        self.notices = []
        self.audits = []
        event_bus.subscribe(ORDERS_CHANGED, self.on_render)
        event_bus.subscribe(NOTIFY, self.on_notify)

    def on_render(self, table_id):
        self.renders.append(table_id)

    def on_notify(self, message, severity):
        self.notices.append((message, severity))

    def audit(self, **row):
        self.audits.append(row)


@pytest.fixture()
def event_bus():
    return EventBus()


@pytest.fixture()
def recorder(event_bus):
    return Recorder(event_bus)


@pytest.fixture()
def persistence(tmp_path):
    return OrderPersistence(tmp_path / "orders.json")


@pytest.fixture()
def shell(catalog, registry, persistence, event_bus, recorder):
    numbers = iter(range(1, 1000))
    return PosShell(
        catalog,
        registry,
        persistence,
        event_bus=event_bus,
        audit=recorder.audit,
        bill_numbers=lambda: next(numbers),
    )
