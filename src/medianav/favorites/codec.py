"""Encoding of the favorites blob.

Two formats are understood:

- The current format is a versioned JSON document,
  ``{"version": 1, "favorites": [...]}``, written from the pydantic model so
  every value is properly escaped.
- The legacy format is a flat bracketed text that looks like JSON but joins
  fields with ``,`` and ``:`` without escaping anything:
  ``[{"id":"..","path":"..","name":"..","addedTime":<ms>},...]``. A path or
  name containing one of those delimiters corrupts its record.

Decoding is best-effort for both formats: a malformed record is dropped on its
own and the rest of the list still loads. Writes always use the current
format, so a legacy blob is migrated the next time the list changes.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List

from pydantic import ValidationError

from medianav.models.favorite import FavoriteEntry

# Logger for this module
logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class MalformedFavoriteError(ValueError):
    """A persisted favorite record could not be parsed."""


def _to_millis(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def _from_millis(millis: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=millis)


def _dedupe(entries: Iterable[FavoriteEntry]) -> List[FavoriteEntry]:
    """Keep the first entry for each path."""
    seen = set()
    unique: List[FavoriteEntry] = []
    for entry in entries:
        if entry.path in seen:
            logger.debug(f"Dropping duplicate favorite for {entry.path}")
            continue
        seen.add(entry.path)
        unique.append(entry)
    return unique


# ---------------------------------------------------------------------------
# Current format
# ---------------------------------------------------------------------------


def encode_favorites(entries: Iterable[FavoriteEntry]) -> str:
    """Serialize *entries* as a versioned JSON document."""
    document = {
        "version": FORMAT_VERSION,
        "favorites": [entry.model_dump(mode="json") for entry in entries],
    }
    return json.dumps(document, ensure_ascii=False)


def _parse_record(record: Any) -> FavoriteEntry:
    try:
        return FavoriteEntry.model_validate(record)
    except ValidationError as e:
        raise MalformedFavoriteError(str(e)) from e


def _decode_document(text: str) -> List[FavoriteEntry]:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Unreadable favorites document: {e}")
        return []

    records = document.get("favorites") if isinstance(document, dict) else None
    if not isinstance(records, list):
        logger.warning("Favorites document has no favorites list")
        return []
    version = document.get("version")
    if version != FORMAT_VERSION:
        logger.warning(f"Reading favorites written with format version {version}")

    entries: List[FavoriteEntry] = []
    for record in records:
        try:
            entries.append(_parse_record(record))
        except MalformedFavoriteError as e:
            logger.debug(f"Dropping malformed favorite record {record!r}: {e}")
    return entries


# ---------------------------------------------------------------------------
# Legacy format
# ---------------------------------------------------------------------------


def encode_legacy(entries: Iterable[FavoriteEntry]) -> str:
    """Serialize *entries* in the legacy unescaped bracketed format."""
    records = [
        '{"id":"%s","path":"%s","name":"%s","addedTime":%d}'
        % (entry.id, entry.path, entry.name, _to_millis(entry.added_at))
        for entry in entries
    ]
    return "[" + ",".join(records) + "]"


def _unquote(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def _parse_legacy_record(item: str) -> FavoriteEntry:
    fields = {}
    for field in item.strip().removeprefix("{").removesuffix("}").split(","):
        key, sep, value = field.partition(":")
        if sep:
            fields[_unquote(key)] = _unquote(value)

    entry_id = fields.get("id", "")
    path = fields.get("path", "")
    if not entry_id or not path:
        raise MalformedFavoriteError(f"Record without id or path: {item!r}")

    try:
        added_at = _from_millis(int(fields.get("addedTime", "")))
    except (ValueError, OverflowError):
        added_at = datetime.now(timezone.utc)

    return FavoriteEntry(
        id=entry_id, path=path, name=fields.get("name", ""), added_at=added_at
    )


def decode_legacy(text: str) -> List[FavoriteEntry]:
    """Parse the legacy bracketed format, dropping malformed records."""
    content = text.strip().removeprefix("[").removesuffix("]")
    if not content.strip():
        return []

    entries: List[FavoriteEntry] = []
    for item in content.split("},{"):
        try:
            entries.append(_parse_legacy_record(item))
        except MalformedFavoriteError as e:
            logger.debug(f"Dropping malformed legacy favorite: {e}")
    return entries


def decode_favorites(blob: str) -> List[FavoriteEntry]:
    """Decode a favorites blob in either format.

    Args:
        blob: Persisted text; empty means no favorites.

    Returns:
        The favorites, deduplicated by path. Never raises for bad input.
    """
    text = blob.strip()
    if not text:
        return []
    if text.startswith("{"):
        return _dedupe(_decode_document(text))
    if text.startswith("["):
        return _dedupe(decode_legacy(text))
    logger.warning("Unrecognised favorites blob; ignoring it")
    return []
