from __future__ import annotations

import json
from pathlib import Path

GLOBAL_CONFIG = Path.home() / ".noty_config.json"

DEFAULT_SEARCH_DEBOUNCE_MS = 250
DEFAULT_SEARCH_MAX_RESULTS = 20


def init_settings() -> None:
    GLOBAL_CONFIG.parent.mkdir(parents=True, exist_ok=True)


def _read_global_config() -> dict:
    """Return the parsed global config, or an empty dict on error/missing."""
    if not GLOBAL_CONFIG.exists():
        return {}
    try:
        payload = json.loads(GLOBAL_CONFIG.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}
    return payload if isinstance(payload, dict) else {}


def _update_global_config(updates: dict) -> None:
    """Merge updates into global config file."""
    existing = _read_global_config()
    existing.update(updates)
    init_settings()
    GLOBAL_CONFIG.write_text(json.dumps(existing, indent=2), encoding="utf-8")


def clamp_search_debounce_ms(ms) -> int:
    try:
        return max(0, min(5000, int(ms)))
    except (TypeError, ValueError):
        return DEFAULT_SEARCH_DEBOUNCE_MS


def clamp_search_max_results(count) -> int:
    try:
        return max(1, min(500, int(count)))
    except (TypeError, ValueError):
        return DEFAULT_SEARCH_MAX_RESULTS


def load_search_debounce_ms() -> int:
    """Load the search field debounce delay in milliseconds (default: 250)."""
    payload = _read_global_config()
    return clamp_search_debounce_ms(payload.get("search_debounce_ms", DEFAULT_SEARCH_DEBOUNCE_MS))


def save_search_debounce_ms(ms: int) -> None:
    _update_global_config({"search_debounce_ms": clamp_search_debounce_ms(ms)})


def load_search_max_results() -> int:
    """Load how many search hits the overlay shows (default: 20)."""
    payload = _read_global_config()
    return clamp_search_max_results(payload.get("search_max_results", DEFAULT_SEARCH_MAX_RESULTS))


def save_search_max_results(count: int) -> None:
    _update_global_config({"search_max_results": clamp_search_max_results(count)})
