"""Startup seed helpers."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from place_search.db.models.core import Location
from place_search.logging import logger

_BASE_LATITUDE = 37.5446
_BASE_LONGITUDE = 127.0557

# (category, name prefix, count)
_DEMO_CATEGORIES = (
    ("cafe", "Cafe", 20),
    ("pharmacy", "Pharmacy", 20),
    ("restaurant", "Restaurant", 10),
)


def demo_catalog() -> list[dict]:
    """Numbered demo places laid out on a small grid in Seongdong-gu, Seoul."""

    rows: list[dict] = []
    for offset, (category, prefix, count) in enumerate(_DEMO_CATEGORIES):
        for number in range(1, count + 1):
            rows.append(
                {
                    "name": f"{prefix} {number}",
                    "address": f"Seoul Seongdong-gu {prefix} Street {number}",
                    "category": category,
                    "latitude": round(_BASE_LATITUDE + offset * 0.002, 6),
                    "longitude": round(_BASE_LONGITUDE + number * 0.0005, 6),
                }
            )
    return rows


async def ensure_catalog(session: AsyncSession) -> int:
    """Insert the demo catalog when the table is empty; return rows added."""

    result = await session.execute(select(func.count(Location.id)))
    existing = result.scalar_one()
    if existing:
        logger.info("catalog_seed_skipped", existing=existing)
        return 0

    rows = demo_catalog()
    session.add_all([Location(**payload) for payload in rows])
    await session.commit()
    logger.info("catalog_seeded", inserted=len(rows))
    return len(rows)


__all__ = ["demo_catalog", "ensure_catalog"]
