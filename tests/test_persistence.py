import json
from decimal import Decimal

import pytest

from spice_pos.services.orders import OrderLine
from spice_pos.services.persistence import OrderPersistence, decode_orders, encode_orders


def sample_orders():
    return {
        2: [OrderLine(11, "Hyderabadi Biryani", Decimal("350"), 2, "mains")],
        7: [
            OrderLine(41, "Masala Chai", Decimal("40"), 1, "drinks"),
            OrderLine(99, "Chef Special", Decimal("12.5"), 3, ""),
        ],
    }


def test_save_then_load_restores_orders(persistence):
    persistence.save(sample_orders())

    loaded = persistence.load()

    assert loaded == sample_orders()
    assert not persistence.path.with_suffix(".tmp").exists()


def test_stored_format_uses_string_keys_and_plain_numbers(persistence):
    persistence.save(sample_orders())

    raw = json.loads(persistence.path.read_text(encoding="utf-8"))

    assert set(raw) == {"2", "7"}
    assert raw["2"] == [
        {"id": 11, "name": "Hyderabadi Biryani", "price": 350, "quantity": 2, "category": "mains"}
    ]
    assert raw["7"][1]["price"] == 12.5


def test_missing_file_loads_empty(tmp_path):
    assert OrderPersistence(tmp_path / "nowhere" / "orders.json").load() == {}


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"2": {"id": 11}}',
        '{"two": []}',
        '{"2": [{"id": 11, "name": "Biryani", "price": 350, "quantity": 0}]}',
        '{"2": [{"id": 11, "name": "Biryani", "price": "lots", "quantity": 1}]}',
        '{"2": [{"name": "Biryani", "price": 350, "quantity": 1}]}',
    ],
)
def test_unreadable_file_loads_empty(persistence, content):
    persistence.path.write_text(content, encoding="utf-8")
    assert persistence.load() == {}


def test_empty_tables_are_not_written():
    assert encode_orders({3: [], 4: sample_orders()[2]}) == {
        "4": [{"id": 11, "name": "Hyderabadi Biryani", "price": 350, "quantity": 2, "category": "mains"}]
    }


def test_decode_accepts_missing_category():
    decoded = decode_orders({"5": [{"id": 20, "name": "Butter Naan", "price": 50, "quantity": 4}]})
    assert decoded == {5: [OrderLine(20, "Butter Naan", Decimal("50"), 4, "")]}



def test_prices_finer_than_a_float_survive_a_round_trip(persistence):
    fine = Decimal("12.345678901234567891")
    orders = {3: [OrderLine(1, "Samosa", fine, 1, "starters")]}

    persistence.save(orders)

    raw = json.loads(persistence.path.read_text(encoding="utf-8"))
    assert raw["3"][0]["price"] == "12.345678901234567891"
    assert persistence.load()[3][0].price == fine


def test_non_finite_price_is_rejected(persistence):
    persistence.path.write_text(
        '{"2": [{"id": 11, "name": "Biryani", "price": "NaN", "quantity": 1}]}', encoding="utf-8"
    )
    assert persistence.load() == {}
