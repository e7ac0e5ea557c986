"""Preference stores: overwrite semantics and version ordering."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from place_search.db.models.core import Preference
from place_search.services.preferences import InMemoryPreferenceStore, SqlPreferenceStore
from place_search.services.recent_list import RecentListManager


@pytest.mark.asyncio
async def test_sql_store_returns_none_for_missing_key(database):
    store = SqlPreferenceStore(database)

    assert await store.load("search_list") is None


@pytest.mark.asyncio
async def test_sql_store_overwrites_single_row(database, session):
    store = SqlPreferenceStore(database)

    assert await store.save("search_list", "[1]", version=1) is True
    assert await store.save("search_list", "[2]", version=2) is True

    rows = (await session.execute(select(Preference))).scalars().all()
    assert len(rows) == 1
    stored = await store.load("search_list")
    assert stored.value == "[2]"
    assert stored.version == 2


@pytest.mark.asyncio
async def test_sql_store_ignores_older_version(database):
    store = SqlPreferenceStore(database)
    await store.save("search_list", "newer", version=5)

    accepted = await store.save("search_list", "older", version=4)

    assert accepted is False
    assert (await store.load("search_list")).value == "newer"


@pytest.mark.asyncio
async def test_memory_store_ignores_older_version():
    store = InMemoryPreferenceStore()
    await store.save("k", "b", version=2)

    assert await store.save("k", "a", version=1) is False
    assert (await store.load("k")).value == "b"


@pytest.mark.asyncio
async def test_recent_list_survives_restart_through_sql_store(database, make_place):
    first, second = make_place("Cafe 1"), make_place("Pharmacy 3", category="pharmacy")
    manager = await RecentListManager.open(SqlPreferenceStore(database))
    await manager.select(first)
    await manager.select(second)

    restarted = await RecentListManager.open(SqlPreferenceStore(database))

    assert restarted.snapshot() == (second, first)
    assert restarted.is_visible
