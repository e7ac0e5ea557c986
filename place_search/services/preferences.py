"""Key-value blob storage used to persist the recent-search list."""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict
from sqlalchemy import select

from place_search.db.models.core import Preference
from place_search.db.session import Database
from place_search.logging import logger


class StoredBlob(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str
    version: int = 0


class PreferenceStore(Protocol):
    async def load(self, key: str) -> StoredBlob | None: ...

    async def save(self, key: str, value: str, *, version: int) -> bool: ...


class InMemoryPreferenceStore:
    """Process-local store; handy for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, StoredBlob] | None = None) -> None:
        self._blobs: dict[str, StoredBlob] = dict(initial or {})

    async def load(self, key: str) -> StoredBlob | None:
        return self._blobs.get(key)

    async def save(self, key: str, value: str, *, version: int) -> bool:
        current = self._blobs.get(key)
        if current is not None and current.version > version:
            logger.warning(
                "preference_stale_write_ignored",
                key=key,
                stored_version=current.version,
                version=version,
            )
            return False
        self._blobs[key] = StoredBlob(value=value, version=version)
        return True


class SqlPreferenceStore:
    """Stores one row per key in the ``preferences`` table.

    Each save overwrites the whole value. A save carrying a version lower than
    the stored one is dropped so an older snapshot never replaces a newer one.
    """

    def __init__(self, database: Database) -> None:
        self.database = database

    async def load(self, key: str) -> StoredBlob | None:
        async with self.database.session() as session:
            result = await session.execute(select(Preference).where(Preference.key == key))
            row = result.scalar_one_or_none()
            if row is None:
                return None
            return StoredBlob(value=row.value, version=row.version)

    async def save(self, key: str, value: str, *, version: int) -> bool:
        async with self.database.session() as session:
            result = await session.execute(select(Preference).where(Preference.key == key))
            row = result.scalar_one_or_none()
            if row is not None and row.version > version:
                logger.warning(
                    "preference_stale_write_ignored",
                    key=key,
                    stored_version=row.version,
                    version=version,
                )
                return False
            if row is None:
                session.add(Preference(key=key, value=value, version=version))
            else:
                row.value = value
                row.version = version
            await session.commit()
        return True


__all__ = [
    "InMemoryPreferenceStore",
    "PreferenceStore",
    "SqlPreferenceStore",
    "StoredBlob",
]
