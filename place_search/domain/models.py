"""Pydantic value objects shared by the search and recent-list services."""

from __future__ import annotations

from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field


class LocationRecord(BaseModel):
    """A catalog place. Two records with identical fields are the same place."""

    model_config = ConfigDict(frozen=True)

    name: str
    address: str
    category: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class UiState(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str = ""
    matches: tuple[LocationRecord, ...] = ()
    show_empty_indicator: bool = False
    error: bool = False

    @classmethod
    def for_query(cls, query: str, matches: Sequence[LocationRecord]) -> "UiState":
        matches = tuple(matches)
        return cls(
            query=query,
            matches=matches,
            show_empty_indicator=bool(query.strip()) and not matches,
        )

    @classmethod
    def failed(cls, query: str) -> "UiState":
        """Lookup failed: nothing to list and no "no results" hint."""

        return cls(query=query, error=True)


class SelectionOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["inserted", "moved", "unchanged"]
    from_index: int | None = None

    @property
    def changed(self) -> bool:
        return self.kind != "unchanged"


__all__ = [
    "LocationRecord",
    "SelectionOutcome",
    "UiState",
]
