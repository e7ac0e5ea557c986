"""Application entrypoint: a line-oriented console over the search screen."""

from __future__ import annotations

import asyncio
from typing import Callable, Sequence

from place_search.config import get_settings
from place_search.db.session import Database
from place_search.domain.models import LocationRecord
from place_search.logging import configure_logging, logger
from place_search.screen import SearchScreen
from place_search.services.broadcaster import UiStateBroadcaster
from place_search.services.preferences import SqlPreferenceStore
from place_search.services.recent_list import RecentListManager
from place_search.services.search import CatalogSearchEngine
from place_search.services.seeds import ensure_catalog

HELP_TEXT = (
    "Type text to search. Commands: :pick N (open result N), "
    ":drop N (forget recent N), :recent, :help, :quit"
)

Writer = Callable[[str], None]


def _format_places(places: Sequence[LocationRecord]) -> list[str]:
    return [
        f"{index}. {place.name} [{place.category}] {place.address}"
        for index, place in enumerate(places, start=1)
    ]


def _pick(places: Sequence[LocationRecord], argument: str) -> LocationRecord | None:
    try:
        position = int(argument)
    except ValueError:
        return None
    if 1 <= position <= len(places):
        return places[position - 1]
    return None


def render(screen: SearchScreen, write: Writer) -> None:
    if screen.error_visible:
        write("Search is unavailable right now.")
    elif screen.empty_indicator_visible:
        write("No results.")
    for line in _format_places(screen.results):
        write(line)


async def handle_line(screen: SearchScreen, line: str, write: Writer = print) -> bool:
    """Apply one console line to the screen; return False when the user quits."""

    line = line.rstrip("\n")
    if not line.startswith(":"):
        await screen.on_text_changed(line)
        render(screen, write)
        return True

    command, _, argument = line[1:].partition(" ")
    command = command.lower()
    if command in {"quit", "q", "exit"}:
        return False
    if command == "help":
        write(HELP_TEXT)
    elif command == "recent":
        if not screen.recent_visible:
            write("No recent searches.")
        for text in _format_places(screen.recent):
            write(text)
    elif command == "pick":
        place = _pick(screen.results, argument.strip())
        if place is None:
            write("No such result.")
        else:
            await screen.on_item_tapped(place)
            write(f"Showing {place.name} at {place.latitude:.6f}, {place.longitude:.6f}")
    elif command == "drop":
        place = _pick(screen.recent, argument.strip())
        if place is None:
            write("No such recent search.")
        elif await screen.on_recent_removed(place):
            write("Recent searches cleared.")
        else:
            write(f"Removed {place.name}.")
    else:
        write(f"Unknown command: {command}")
    return True


async def run_console(screen: SearchScreen, write: Writer = print) -> None:
    write(HELP_TEXT)
    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            break
        if not await handle_line(screen, line, write):
            break


async def main() -> None:
    configure_logging()
    settings = get_settings()

    database = Database(settings=settings)
    await database.create_all()
    if settings.seed_catalog:
        async with database.session() as seed_session:
            await ensure_catalog(seed_session)

    recent = await RecentListManager.open(
        SqlPreferenceStore(database), key=settings.recent.storage_key
    )
    broadcaster = UiStateBroadcaster(CatalogSearchEngine(database, settings.search))
    screen = SearchScreen(broadcaster, recent)

    logger.info("search_screen_starting", environment=settings.environment)
    try:
        await run_console(screen)
    finally:
        screen.close()
        await database.dispose()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
