"""Favorite directories store.

:class:`FavoriteStore` keeps a deduplicated list of starred paths in a
:class:`~medianav.favorites.slots.PreferenceSlot`. Every mutation is a
read-modify-write of the whole list; an ``asyncio.Lock`` serializes those so
concurrent callers sharing a store cannot lose each other's updates. Separate
processes writing the same slot are not coordinated.

Failures never propagate: reads fall back to an empty list and mutations
report False.
"""

import asyncio
import logging
from concurrent.futures import Executor
from pathlib import Path
from typing import List, Optional, Union

from medianav.favorites.codec import decode_favorites, encode_favorites
from medianav.favorites.slots import FileSlot, PreferenceSlot
from medianav.models.favorite import FavoriteEntry
from medianav.utils.aio import run_blocking
from medianav.utils.config import BrowserSettings

# Logger for this module
logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FavoriteStore:
    """Persisted set of favorite directories, unique by path."""

    def __init__(
        self, slot: PreferenceSlot, *, executor: Optional[Executor] = None
    ) -> None:
        self._slot = slot
        self._executor = executor
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: BrowserSettings) -> "FavoriteStore":
        """Build a store backed by the configured favorites file."""
        return cls(FileSlot(settings.favorites_path))

    def _load(self) -> List[FavoriteEntry]:
        return decode_favorites(self._slot.read() or "")

    def _save(self, favorites: List[FavoriteEntry]) -> None:
        self._slot.write(encode_favorites(favorites))

    async def _read(self) -> List[FavoriteEntry]:
        return await run_blocking(self._load, executor=self._executor)

    async def _write(self, favorites: List[FavoriteEntry]) -> None:
        await run_blocking(self._save, favorites, executor=self._executor)

    async def list_favorites(self) -> List[FavoriteEntry]:
        """Return all favorites in insertion order."""
        try:
            return await self._read()
        except OSError as e:
            logger.warning(f"Error reading favorites: {e}")
            return []

    async def is_favorite(self, path: PathLike) -> bool:
        """Return True if *path* is starred."""
        target = str(path)
        return any(entry.path == target for entry in await self.list_favorites())

    async def add_favorite(self, path: PathLike, name: str = "") -> bool:
        """Star *path*.

        Returns:
            False (and changes nothing) if *path* is already a favorite or the
            list cannot be persisted.
        """
        target = str(path)
        if not target:
            return False
        async with self._lock:
            try:
                favorites = await self._read()
                if any(entry.path == target for entry in favorites):
                    logger.debug(f"Already a favorite: {target}")
                    return False
                favorites.append(FavoriteEntry(path=target, name=name))
                await self._write(favorites)
            except OSError as e:
                logger.warning(f"Error adding favorite {target}: {e}")
                return False
        return True

    async def remove_favorite(self, path: PathLike) -> bool:
        """Unstar every entry for *path*; persists only when one was removed."""
        target = str(path)
        async with self._lock:
            try:
                favorites = await self._read()
                remaining = [entry for entry in favorites if entry.path != target]
                if len(remaining) == len(favorites):
                    return False
                await self._write(remaining)
            except OSError as e:
                logger.warning(f"Error removing favorite {target}: {e}")
                return False
        return True

    async def toggle_favorite(self, path: PathLike, name: str = "") -> bool:
        """Star *path* if it is not starred, otherwise unstar it.

        When starring without a name, the last path segment is used.

        Returns:
            Whether *path* is starred afterwards. On a persistence failure the
            previous state is returned.
        """
        target = str(path)
        if not target:
            return False
        async with self._lock:
            try:
                favorites = await self._read()
            except OSError as e:
                logger.warning(f"Error reading favorites: {e}")
                return False
            starred = any(entry.path == target for entry in favorites)
            if starred:
                updated = [entry for entry in favorites if entry.path != target]
            else:
                label = name or target.rstrip("/").rsplit("/", 1)[-1]
                updated = favorites + [FavoriteEntry(path=target, name=label)]
            try:
                await self._write(updated)
            except OSError as e:
                logger.warning(f"Error updating favorite {target}: {e}")
                return starred
        return not starred
