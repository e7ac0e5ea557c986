"""JSON codec for the persisted recent-search list."""

from __future__ import annotations

from typing import Sequence

from pydantic import TypeAdapter, ValidationError

from place_search.domain.models import LocationRecord
from place_search.services.exceptions import MalformedBlobError

_RECORD_LIST = TypeAdapter(list[LocationRecord])


def encode_recent_list(records: Sequence[LocationRecord]) -> str:
    """Serialize records field-for-field as a JSON array; ``[]`` when empty."""

    return _RECORD_LIST.dump_json(list(records)).decode("utf-8")


def decode_recent_list(blob: str | bytes | None) -> list[LocationRecord] | None:
    """Parse a stored blob.

    Returns ``None`` when nothing was ever stored and raises
    :class:`MalformedBlobError` for anything that is not a valid record array.
    """

    if blob is None:
        return None
    try:
        return _RECORD_LIST.validate_json(blob)
    except ValidationError as exc:
        raise MalformedBlobError(
            f"stored recent list is not a valid record array ({exc.error_count()} errors)"
        ) from exc


__all__ = ["decode_recent_list", "encode_recent_list"]
