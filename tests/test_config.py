"""Tests for search settings in the global config file."""

import json

from noty.app import config


def test_defaults_when_config_missing(config_file):
    assert not config_file.exists()
    assert config.load_search_debounce_ms() == 250
    assert config.load_search_max_results() == 20


def test_save_and_load_round_trip(config_file):
    config.save_search_debounce_ms(400)
    config.save_search_max_results(50)

    assert config.load_search_debounce_ms() == 400
    assert config.load_search_max_results() == 50
    payload = json.loads(config_file.read_text(encoding="utf-8"))
    assert payload == {"search_debounce_ms": 400, "search_max_results": 50}


def test_save_keeps_unrelated_keys(config_file):
    config_file.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    config.save_search_max_results(5)

    payload = json.loads(config_file.read_text(encoding="utf-8"))
    assert payload["theme"] == "dark"
    assert payload["search_max_results"] == 5


def test_values_are_clamped(config_file):
    config_file.write_text(
        json.dumps({"search_debounce_ms": 999999, "search_max_results": 0}),
        encoding="utf-8",
    )
    assert config.load_search_debounce_ms() == 5000
    assert config.load_search_max_results() == 1

    config.save_search_debounce_ms(-20)
    assert config.load_search_debounce_ms() == 0


def test_bad_values_fall_back_to_defaults(config_file):
    config_file.write_text(
        json.dumps({"search_debounce_ms": "soon", "search_max_results": None}),
        encoding="utf-8",
    )
    assert config.load_search_debounce_ms() == 250
    assert config.load_search_max_results() == 20


def test_corrupt_config_is_ignored(config_file):
    config_file.write_text("{not json", encoding="utf-8")
    assert config.load_search_debounce_ms() == 250

    config.save_search_debounce_ms(300)
    assert config.load_search_debounce_ms() == 300
