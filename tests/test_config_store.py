import json

import pytest

from spice_pos.core import config_store


@pytest.fixture(autouse=True)
def settings_file(tmp_path, monkeypatch):
    path = tmp_path / "config" / "settings.json"
    monkeypatch.setattr(config_store, "SETTINGS_FILE", path)
    return path


def test_first_load_writes_defaults(settings_file):
    config = config_store.load_config()

    assert config["restaurant_name"] == "Spice Route Kitchen"
    assert config["currency"] == "₹"
    assert json.loads(settings_file.read_text(encoding="utf-8"))["last_bill_number"] == 0


def test_missing_keys_are_filled_in(settings_file):
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text(json.dumps({"restaurant_name": "Curry House"}), encoding="utf-8")

    config = config_store.load_config()

    assert config["restaurant_name"] == "Curry House"
    assert config["bill_footer"]


def test_corrupt_file_falls_back_to_defaults(settings_file):
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text("{oops", encoding="utf-8")

    assert config_store.load_config()["currency"] == "₹"


def test_set_and_get_value():
    config_store.set_config_value("currency", "$")
    assert config_store.get_config_value("currency") == "$"
    assert config_store.get_config_value("missing", "fallback") == "fallback"


def test_bill_numbers_increase_and_persist(settings_file):
    assert config_store.next_bill_number() == 1
    assert config_store.next_bill_number() == 2
    assert json.loads(settings_file.read_text(encoding="utf-8"))["last_bill_number"] == 2
