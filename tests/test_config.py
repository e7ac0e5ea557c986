from __future__ import annotations

from place_search.config import AppSettings


def test_defaults(monkeypatch):
    monkeypatch.delenv("PLACES_RECENT__STORAGE_KEY", raising=False)
    settings = AppSettings(_env_file=None)

    assert settings.recent.storage_key == "search_list"
    assert settings.search.match_fields == ("name", "address", "category")
    assert settings.database.dsn.startswith("sqlite+aiosqlite://")


def test_nested_environment_overrides(monkeypatch):
    monkeypatch.setenv("PLACES_RECENT__STORAGE_KEY", "recent_places")
    monkeypatch.setenv("PLACES_SEARCH__RESULT_LIMIT", "5")
    monkeypatch.setenv("PLACES_SEED_CATALOG", "false")

    settings = AppSettings(_env_file=None)

    assert settings.recent.storage_key == "recent_places"
    assert settings.search.result_limit == 5
    assert settings.seed_catalog is False
