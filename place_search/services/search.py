"""Catalog text search."""

from __future__ import annotations

from typing import Protocol, Sequence

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError

from place_search.config import SearchSettings
from place_search.db.models.core import Location
from place_search.db.session import Database
from place_search.domain.models import LocationRecord
from place_search.services.exceptions import CatalogUnavailable


class SearchEngine(Protocol):
    async def query(self, text: str) -> Sequence[LocationRecord]: ...


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CatalogSearchEngine:
    """Case-insensitive substring match over the ``locations`` table."""

    def __init__(self, database: Database, settings: SearchSettings | None = None) -> None:
        self.database = database
        self.settings = settings or SearchSettings()

    async def query(self, text: str) -> Sequence[LocationRecord]:
        text = text.strip()
        if not text:
            return []

        pattern = _like_pattern(text)
        columns = [getattr(Location, field) for field in self.settings.match_fields]
        stmt = (
            select(Location)
            .where(or_(*(column.ilike(pattern, escape="\\") for column in columns)))
            .order_by(Location.id)
            .limit(self.settings.result_limit)
        )
        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except SQLAlchemyError as exc:
            raise CatalogUnavailable(f"catalog lookup failed: {exc}") from exc
        return [row.to_record() for row in rows]


__all__ = ["CatalogSearchEngine", "SearchEngine"]
