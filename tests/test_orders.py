from decimal import Decimal
from types import MappingProxyType

import pytest

from spice_pos.core import effects as fx
from spice_pos.core.catalog import MenuCatalog, MenuItem
from spice_pos.core.effects import kinds
from spice_pos.services.orders import OrderInvariantError, OrderLine, OrderStore

BIRYANI = 11
NAAN = 20


def assert_has_orders_invariant(store):
    for table_id, lines in store.snapshot().items():
        assert lines, f"table {table_id} kept an empty order"


def test_add_item_creates_snapshot_line(store):
    effects = store.add_item(2, BIRYANI)

    lines = store.snapshot()[2]
    assert len(lines) == 1
    line = lines[0]
    assert line.item_id == BIRYANI
    assert line.name == "Hyderabadi Biryani"
    assert line.price == Decimal("350")
    assert line.quantity == 1
    assert line.category == "mains"
    assert kinds(effects) == [fx.SAVE, fx.AUDIT, fx.RENDER]


def test_add_item_twice_increments_quantity(store):
    store.add_item(2, BIRYANI)
    store.add_item(2, BIRYANI)

    assert [(l.item_id, l.quantity) for l in store.lines(2)] == [(BIRYANI, 2)]


def test_repeated_add_matches_add_then_change_quantity(catalog, registry):
    a = OrderStore(catalog, registry)
    for _ in range(3):
        a.add_item(4, NAAN)

    b = OrderStore(catalog, registry)
    b.add_item(4, NAAN)
    b.change_quantity(4, NAAN, +1)
    b.change_quantity(4, NAAN, +1)

    assert dict(a.snapshot()) == dict(b.snapshot())
    assert a.lines(4)[0].quantity == 3


def test_lines_keep_insertion_order(store):
    for item_id in (NAAN, BIRYANI, 41, NAAN):
        store.add_item(1, item_id)
    assert [l.item_id for l in store.lines(1)] == [NAAN, BIRYANI, 41]


def test_add_unknown_item_is_silent_noop(store):
    assert store.add_item(2, 999) == []
    assert 2 not in store.snapshot()


def test_add_to_unknown_table_is_silent_noop(store):
    assert store.add_item(99, BIRYANI) == []
    assert dict(store.snapshot()) == {}


def test_catalog_price_change_does_not_touch_existing_lines(registry):
    old = MenuCatalog([MenuItem(1, "Chai", "drinks", Decimal("40"))])
    store = OrderStore(old, registry)
    store.add_item(3, 1)

    store.catalog = MenuCatalog([MenuItem(1, "Chai", "drinks", Decimal("55"))])
    store.add_item(3, 1)

    line = store.lines(3)[0]
    assert line.price == Decimal("40")
    assert line.quantity == 2


def test_change_quantity_to_zero_removes_line_and_key(store):
    store.add_item(2, BIRYANI)
    store.add_item(2, BIRYANI)

    effects = store.change_quantity(2, BIRYANI, -2)

    assert 2 not in store.snapshot()
    assert not store.has_orders(2)
    assert kinds(effects).count(fx.SAVE) == 1
    assert kinds(effects).count(fx.RENDER) == 1


def test_change_quantity_below_zero_removes_only_that_line(store):
    store.add_item(2, BIRYANI)
    store.add_item(2, NAAN)

    store.change_quantity(2, NAAN, -5)

    assert [l.item_id for l in store.lines(2)] == [BIRYANI]


def test_change_quantity_on_missing_line_or_table_is_noop(store):
    assert store.change_quantity(5, BIRYANI, 1) == []
    store.add_item(5, NAAN)
    assert store.change_quantity(5, BIRYANI, 1) == []
    assert store.change_quantity(5, NAAN, 0) == []
    assert store.lines(5)[0].quantity == 1


def test_remove_line_keeps_table_while_other_lines_remain(store):
    store.add_item(3, BIRYANI)
    store.add_item(3, NAAN)

    store.remove_line(3, BIRYANI)
    assert store.has_orders(3)
    store.remove_line(3, NAAN)
    assert not store.has_orders(3)
    assert store.remove_line(3, NAAN) == []


def test_clear_order_removes_key_entirely(store):
    store.add_item(2, BIRYANI)
    store.add_item(2, NAAN)

    effects = store.clear_order(2)

    assert 2 not in store.snapshot()
    assert store.lines(2) == ()
    assert kinds(effects) == [fx.SAVE, fx.AUDIT, fx.RENDER]
    assert store.clear_order(2) == []


def test_invariant_holds_after_every_mutation(store):
    steps = [
        lambda: store.add_item(1, BIRYANI),
        lambda: store.add_item(1, NAAN),
        lambda: store.change_quantity(1, NAAN, -1),
        lambda: store.add_item(2, 41),
        lambda: store.remove_line(2, 41),
        lambda: store.add_item(3, BIRYANI),
        lambda: store.clear_order(3),
        lambda: store.change_quantity(1, BIRYANI, -1),
    ]
    for step in steps:
        step()
        assert_has_orders_invariant(store)
    assert dict(store.snapshot()) == {}


def test_snapshot_is_read_only(store):
    store.add_item(2, BIRYANI)
    snap = store.snapshot()

    assert isinstance(snap, MappingProxyType)
    with pytest.raises(TypeError):
        snap[3] = ()
    assert isinstance(snap[2], tuple)

    store.add_item(2, BIRYANI)
    assert snap[2][0].quantity == 1


def test_save_effect_carries_the_new_snapshot(store):
    effects = store.add_item(6, 30)
    saved = effects[0].payload
    assert saved[6][0].item_id == 30


def test_session_open_and_close(store):
    assert store.current_table_id is None
    assert kinds(store.open_session(4)) == [fx.RENDER]
    assert store.current_table_id == 4
    assert store.close_session() != []
    assert store.current_table_id is None
    assert store.close_session() == []


def test_open_session_for_unknown_table_is_ignored(store):
    assert store.open_session(42) == []
    assert store.current_table_id is None


def test_session_changes_are_never_saved(store):
    assert fx.SAVE not in kinds(store.open_session(2))
    assert fx.SAVE not in kinds(store.close_session())


def test_load_drops_empty_tables(store):
    line = OrderLine(BIRYANI, "Hyderabadi Biryani", Decimal("350"), 2, "mains")
    store.load({"2": [line], 3: []})
    assert dict(store.snapshot()) == {2: (line,)}


def test_check_invariant_flags_empty_entry(store):
    store._orders[7] = []
    with pytest.raises(OrderInvariantError):
        store.check_invariant()


def test_item_count_sums_quantities(store):
    store.add_item(1, BIRYANI)
    store.add_item(1, BIRYANI)
    store.add_item(1, NAAN)
    assert store.item_count(1) == 3
    assert store.item_count(2) == 0
