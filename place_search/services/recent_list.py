"""Most-recently-used list of selected places."""

from __future__ import annotations

import asyncio
from typing import Iterable

from place_search.domain.models import LocationRecord, SelectionOutcome
from place_search.logging import logger
from place_search.services.codec import decode_recent_list, encode_recent_list
from place_search.services.exceptions import MalformedBlobError
from place_search.services.preferences import PreferenceStore

DEFAULT_STORAGE_KEY = "search_list"


def _dedupe(records: Iterable[LocationRecord]) -> list[LocationRecord]:
    # dict keeps the first occurrence, which is the most recent one.
    return list(dict.fromkeys(records))


class RecentListManager:
    """Owns the recent-search list and its persisted copy.

    Index 0 is always the most recently selected place and no place appears
    twice. Every structural change rewrites the whole stored blob with a
    higher version than the previous write. Storage problems are logged and
    never raised to the caller.
    """

    def __init__(self, store: PreferenceStore, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._store = store
        self._key = key
        self._items: list[LocationRecord] = []
        self._version = 0
        self._lock = asyncio.Lock()

    @classmethod
    async def open(
        cls, store: PreferenceStore, *, key: str = DEFAULT_STORAGE_KEY
    ) -> "RecentListManager":
        manager = cls(store, key=key)
        await manager.load()
        return manager

    @property
    def key(self) -> str:
        return self._key

    @property
    def version(self) -> int:
        return self._version

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def is_visible(self) -> bool:
        """Whether the recent strip has anything to show."""

        return bool(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, location: object) -> bool:
        return location in self._items

    def snapshot(self) -> tuple[LocationRecord, ...]:
        return tuple(self._items)

    async def load(self) -> tuple[LocationRecord, ...]:
        async with self._lock:
            records: list[LocationRecord] = []
            try:
                stored = await self._store.load(self._key)
            except Exception:
                logger.exception("recent_list_load_failed", key=self._key)
                stored = None

            if stored is not None:
                self._version = max(self._version, stored.version)
                try:
                    records = decode_recent_list(stored.value) or []
                except MalformedBlobError as exc:
                    logger.warning("recent_list_decode_failed", key=self._key, error=str(exc))

            self._items = _dedupe(records)
            logger.info(
                "recent_list_loaded",
                key=self._key,
                size=len(self._items),
                version=self._version,
            )
            return self.snapshot()

    async def select(self, location: LocationRecord) -> SelectionOutcome:
        async with self._lock:
            try:
                index = self._items.index(location)
            except ValueError:
                index = -1

            if index == 0:
                return SelectionOutcome(kind="unchanged", from_index=0)

            if index > 0:
                del self._items[index]
                outcome = SelectionOutcome(kind="moved", from_index=index)
            else:
                outcome = SelectionOutcome(kind="inserted")
            self._items.insert(0, location)

            await self._persist()
            logger.info(
                "recent_list_selected",
                name=location.name,
                change=outcome.kind,
                from_index=outcome.from_index,
                size=len(self._items),
            )
            return outcome

    async def remove(self, location: LocationRecord) -> bool:
        """Drop ``location`` if present; return True when the list is now empty."""

        async with self._lock:
            try:
                index = self._items.index(location)
            except ValueError:
                logger.debug("recent_list_remove_missing", name=location.name)
                return not self._items

            del self._items[index]
            await self._persist()
            logger.info(
                "recent_list_removed",
                name=location.name,
                index=index,
                size=len(self._items),
            )
            return not self._items

    async def clear(self) -> None:
        async with self._lock:
            if not self._items:
                return
            self._items.clear()
            await self._persist()
            logger.info("recent_list_cleared", key=self._key)

    async def _persist(self) -> None:
        self._version += 1
        blob = encode_recent_list(self._items)
        try:
            saved = await self._store.save(self._key, blob, version=self._version)
            if not saved:
                # Our counter fell behind the stored stamp (e.g. load failed);
                # jump past it so the newest submitted list still wins.
                stored = await self._store.load(self._key)
                rejected_version = self._version
                self._version = max(self._version, stored.version if stored else 0) + 1
                logger.warning(
                    "recent_list_save_rejected",
                    key=self._key,
                    version=rejected_version,
                    retry_version=self._version,
                )
                saved = await self._store.save(self._key, blob, version=self._version)
        except Exception:
            logger.exception("recent_list_save_failed", key=self._key, version=self._version)
            return
        if saved:
            logger.debug(
                "recent_list_saved",
                key=self._key,
                size=len(self._items),
                version=self._version,
            )
        else:
            logger.error("recent_list_save_dropped", key=self._key, version=self._version)


__all__ = ["DEFAULT_STORAGE_KEY", "RecentListManager"]
