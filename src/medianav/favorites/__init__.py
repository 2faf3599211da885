"""Persisted favorite directories for medianav."""

from medianav.favorites.codec import (
    decode_favorites,
    decode_legacy,
    encode_favorites,
    encode_legacy,
)
from medianav.favorites.slots import FileSlot, MemorySlot, PreferenceSlot
from medianav.favorites.store import FavoriteStore

__all__ = [
    "FavoriteStore",
    "FileSlot",
    "MemorySlot",
    "PreferenceSlot",
    "decode_favorites",
    "decode_legacy",
    "encode_favorites",
    "encode_legacy",
]
