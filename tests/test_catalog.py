from decimal import Decimal

import pytest

from spice_pos.core.catalog import ALL_CATEGORIES, MenuCatalog, MenuItem, Table, TableRegistry
from spice_pos.services.orders import OrderLine


def test_default_catalog_lookup(catalog):
    item = catalog.find_by_id(11)
    assert item.name == "Hyderabadi Biryani"
    assert item.price == Decimal("350")
    assert catalog.find_by_id("11") is item
    assert catalog.find_by_id(999) is None
    assert catalog.find_by_id("abc") is None
    assert catalog.find_by_id(None) is None


def test_categories_in_display_order(catalog):
    assert catalog.categories() == ["starters", "mains", "breads", "desserts", "drinks"]


def test_filter_by_category_and_term(catalog):
    breads = catalog.filter("breads")
    assert [i.id for i in breads] == [20, 21, 22, 23]
    assert catalog.filter(ALL_CATEGORIES) == list(catalog)
    assert [i.id for i in catalog.filter(None, "biryani")] == [11, 15]
    assert [i.id for i in catalog.filter("mains", "  VEG ")] == [15]
    assert catalog.filter("drinks", "naan") == []


def test_duplicate_item_ids_rejected():
    with pytest.raises(ValueError):
        MenuCatalog([MenuItem(1, "A", "x", Decimal("1")), MenuItem(1, "B", "x", Decimal("2"))])


def test_negative_price_rejected():
    with pytest.raises(ValueError):
        MenuCatalog.from_records([{"id": 1, "name": "Refund", "category": "x", "price": -5}])


def test_from_records_keeps_float_prices_exact():
    catalog = MenuCatalog.from_records([{"id": 3, "name": "Tea", "category": "drinks", "price": 0.1}])
    assert catalog.find_by_id(3).price == Decimal("0.1")
    assert catalog.find_by_id(3).icon == ""


def test_registry_lookup(registry):
    assert len(registry) == 8
    assert registry.find_by_id(2) == Table(2, "Table 2", 4)
    assert registry.find_by_id(42) is None


def test_table_search_matches_name_number_or_ordered_dish(registry):
    orders = {3: (OrderLine(11, "Hyderabadi Biryani", Decimal("350"), 1),)}

    assert [t.id for t in registry.search("patio")] == [7, 8]
    assert [t.id for t in registry.search("4")] == [4]
    assert [t.id for t in registry.search("biryani", orders)] == [3]
    assert registry.search("") == list(registry)


def test_duplicate_table_ids_rejected():
    with pytest.raises(ValueError):
        TableRegistry([Table(1, "A", 2), Table(1, "B", 4)])
