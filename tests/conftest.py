"""Shared pytest fixtures for database-backed service tests."""

from __future__ import annotations

from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from place_search.db.base import Base
from place_search.db.models.core import Location
from place_search.domain.models import LocationRecord


class _AsyncSessionWrapper:
    def __init__(self, sync_session) -> None:
        self._sync = sync_session

    async def execute(self, *args, **kwargs):
        return self._sync.execute(*args, **kwargs)

    def add(self, obj) -> None:
        self._sync.add(obj)

    def add_all(self, objs) -> None:
        self._sync.add_all(objs)

    async def flush(self) -> None:
        self._sync.flush()

    async def commit(self) -> None:
        self._sync.commit()

    async def rollback(self) -> None:
        self._sync.rollback()

    async def close(self) -> None:
        self._sync.close()


class DummyDatabase:
    """Stands in for ``Database`` by handing out the shared test session."""

    def __init__(self, session) -> None:
        self._session = session
        self.session_calls = 0

    @asynccontextmanager
    async def session(self):
        self.session_calls += 1
        try:
            yield self._session
        except Exception:
            await self._session.rollback()
            raise


@pytest_asyncio.fixture
async def session():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    sync_session = SessionLocal()
    try:
        yield _AsyncSessionWrapper(sync_session)
    finally:
        sync_session.close()
        engine.dispose()


@pytest.fixture
def database(session):
    return DummyDatabase(session)


def _build_place(name: str, category: str = "cafe", **overrides) -> LocationRecord:
    payload = {
        "name": name,
        "address": f"Seoul {name} Street",
        "category": category,
        "latitude": 37.5,
        "longitude": 127.0,
    }
    payload.update(overrides)
    return LocationRecord(**payload)


@pytest.fixture
def make_place():
    return _build_place


@pytest.fixture
def add_locations(session):
    async def _add(*places: LocationRecord) -> None:
        session.add_all([Location(**place.model_dump()) for place in places])
        await session.commit()

    return _add
