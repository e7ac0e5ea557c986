"""Fan search results out to UI listeners."""

from __future__ import annotations

import inspect
from typing import Awaitable, Callable

from place_search.domain.models import UiState
from place_search.logging import logger
from place_search.services.search import SearchEngine

UiStateListener = Callable[[UiState], Awaitable[None] | None]


class UiStateBroadcaster:
    """Turns query text into :class:`UiState` snapshots and publishes them.

    Publication is last-write-wins. Every ``on_query_changed`` call takes a
    new generation number and a result that comes back after a newer query
    started is dropped. Delivery of a state also stops as soon as a newer
    state has been published.
    """

    def __init__(self, engine: SearchEngine) -> None:
        self._engine = engine
        self._listeners: list[UiStateListener] = []
        self._generation = 0
        self._latest: UiState | None = None

    @property
    def latest(self) -> UiState | None:
        return self._latest

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: UiStateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: UiStateListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    async def on_query_changed(self, text: str) -> UiState | None:
        """Run the query and publish its state unless a newer query overtook it."""

        self._generation += 1
        generation = self._generation

        try:
            matches = await self._engine.query(text)
            state = UiState.for_query(text, matches)
        except Exception as exc:
            logger.warning("catalog_query_failed", query=text, error=str(exc))
            state = UiState.failed(text)

        if generation != self._generation:
            logger.debug(
                "stale_query_dropped",
                query=text,
                generation=generation,
                latest_generation=self._generation,
            )
            return None

        await self._deliver(state)
        return state

    async def publish(self, state: UiState) -> None:
        """Publish ``state`` directly; queries still in flight become stale."""

        self._generation += 1
        await self._deliver(state)

    async def _deliver(self, state: UiState) -> None:
        self._latest = state
        # Iterate over a copy so (un)subscribing mid-publish is safe.
        for listener in tuple(self._listeners):
            if self._latest is not state:
                logger.debug("ui_state_superseded", query=state.query)
                return
            try:
                result = listener(state)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("ui_state_listener_failed", query=state.query)


__all__ = ["UiStateBroadcaster", "UiStateListener"]
