"""Toolkit-free presenter for the location search screen."""

from __future__ import annotations

from place_search.domain.models import LocationRecord, SelectionOutcome, UiState
from place_search.logging import logger
from place_search.services.broadcaster import UiStateBroadcaster
from place_search.services.recent_list import RecentListManager


class SearchScreen:
    """Holds what a view would render and forwards user events to the services.

    ``results``, ``empty_indicator_visible`` and ``error_visible`` follow the
    broadcaster; ``recent`` and ``recent_visible`` read straight from the
    recent list.
    """

    def __init__(self, broadcaster: UiStateBroadcaster, recent: RecentListManager) -> None:
        self.broadcaster = broadcaster
        self.recent_list = recent
        self.query = ""
        self.results: tuple[LocationRecord, ...] = ()
        self.empty_indicator_visible = False
        self.error_visible = False
        self.last_selection: SelectionOutcome | None = None
        self._unsubscribe = broadcaster.subscribe(self._render)

    @property
    def recent(self) -> tuple[LocationRecord, ...]:
        return self.recent_list.snapshot()

    @property
    def recent_visible(self) -> bool:
        return self.recent_list.is_visible

    async def on_text_changed(self, text: str) -> None:
        await self.broadcaster.on_query_changed(text)

    async def on_clear(self) -> None:
        await self.on_text_changed("")

    async def on_item_tapped(self, location: LocationRecord) -> LocationRecord:
        """Remember the tapped place; the caller navigates to the map with it."""

        self.last_selection = await self.recent_list.select(location)
        logger.info("location_item_tapped", name=location.name)
        return location

    async def on_recent_removed(self, location: LocationRecord) -> bool:
        """Dismiss a recent chip; returns True when the strip should hide."""

        return await self.recent_list.remove(location)

    def close(self) -> None:
        self._unsubscribe()

    def _render(self, state: UiState) -> None:
        self.query = state.query
        self.results = state.matches
        self.empty_indicator_visible = state.show_empty_indicator
        self.error_visible = state.error


__all__ = ["SearchScreen"]
