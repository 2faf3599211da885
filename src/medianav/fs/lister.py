"""Asynchronous lister facade.

:class:`FileLister` exposes the listing and mutation helpers as coroutines.
The blocking filesystem work runs on a worker thread (``asyncio.to_thread``)
or on a caller-supplied executor, never on the event loop that publishes
browser state.
"""

from concurrent.futures import Executor
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from medianav.fs import listing, operations
from medianav.models.core import FileEntry, MediaCategory, SortKey
from medianav.utils.aio import run_blocking
from medianav.utils.config import (
    DEFAULT_MOUNT_DIR,
    DEFAULT_PRIMARY_ALIAS,
    BrowserSettings,
)

T = TypeVar("T")


class FileLister:
    """Enumerates and mutates the filesystem off the event loop.

    Args:
        settings: Storage roots and scan depth; defaults to the home directory
            as primary root.
        executor: Optional executor for blocking calls. When omitted the
            default thread pool of ``asyncio.to_thread`` is used.
    """

    def __init__(
        self,
        settings: Optional[BrowserSettings] = None,
        *,
        executor: Optional[Executor] = None,
    ) -> None:
        self.settings = settings or BrowserSettings(
            primary_root=Path.home(),
            mount_dir=Path(DEFAULT_MOUNT_DIR),
            primary_alias=DEFAULT_PRIMARY_ALIAS,
            favorites_path=Path.home() / ".medianav" / "favorites.json",
        )
        self._executor = executor

    async def _run(self, func: Callable[..., T], *args: object, **kwargs: object) -> T:
        return await run_blocking(func, *args, executor=self._executor, **kwargs)

    async def get_files(
        self, path: Path, sort_key: Optional[SortKey] = SortKey.NAME
    ) -> List[FileEntry]:
        """List immediate children of *path* (empty on any failure)."""
        return await self._run(listing.list_directory, Path(path), sort_key)

    async def get_media_files(
        self,
        path: Path,
        category: MediaCategory,
        sort_key: Optional[SortKey] = SortKey.NAME,
    ) -> List[FileEntry]:
        """Recursively collect files of *category* under *path*."""
        return await self._run(
            listing.collect_media,
            Path(path),
            MediaCategory(category),
            sort_key,
            max_depth=self.settings.max_depth,
        )

    async def get_video_files(
        self, path: Path, sort_key: Optional[SortKey] = SortKey.NAME
    ) -> List[FileEntry]:
        """Recursively collect video files under *path*."""
        return await self.get_media_files(path, MediaCategory.VIDEO, sort_key)

    async def get_audio_files(
        self, path: Path, sort_key: Optional[SortKey] = SortKey.NAME
    ) -> List[FileEntry]:
        """Recursively collect audio files under *path*."""
        return await self.get_media_files(path, MediaCategory.AUDIO, sort_key)

    async def create_directory(self, parent: Path, name: str) -> bool:
        return await self._run(operations.create_directory, Path(parent), name)

    async def delete_file(self, path: Path) -> bool:
        return await self._run(operations.delete_file, Path(path))

    async def rename_file(self, path: Path, new_name: str) -> bool:
        return await self._run(operations.rename_file, Path(path), new_name)

    async def copy_file(self, src: Path, dst: Path) -> bool:
        return await self._run(operations.copy_file, Path(src), Path(dst))

    async def move_file(self, src: Path, dst: Path) -> bool:
        return await self._run(operations.move_file, Path(src), Path(dst))

    async def get_storage_roots(self) -> List[Path]:
        """Primary root plus readable mounted volumes."""
        return await self._run(
            listing.storage_roots,
            self.settings.primary_root,
            self.settings.mount_dir,
            self.settings.primary_alias,
        )

    def get_parent_path(self, path: Path) -> Optional[Path]:
        """Parent of *path*, or None at the filesystem root."""
        return listing.parent_path(Path(path))
