"""Navigation controller for the media browser.

The controller owns the directory history and runs the listing pipeline
(lister -> sorter -> filter engine) for the current path.
- State is published as immutable :class:`BrowserState` snapshots; listeners
  registered with :meth:`NavigationController.subscribe` receive each one.
- Every fetch carries a generation number. A result that arrives after a newer
  request has started is dropped, so the last request always wins.
- The raw (unsorted, unfiltered) listing of the current view is cached: sort
  and filter changes re-use it, while navigation always fetches fresh.
- :meth:`NavigationController.close` ends the session; results still in
  flight are discarded and later calls do nothing.
"""

import logging
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Tuple

from medianav.core.filters import FilterEngine
from medianav.core.sorter import sort_entries
from medianav.fs.lister import FileLister
from medianav.models.core import (
    FileEntry,
    FilterKind,
    MediaCategory,
    SortKey,
    ViewMode,
)
from medianav.models.state import BrowserState, NavStatus

# Logger for this module
logger = logging.getLogger(__name__)

Listener = Callable[[BrowserState], None]
Fetch = Callable[[], Awaitable[List[FileEntry]]]


class NavigationController:
    """Directory history plus the listing pipeline for one browsing session.

    Args:
        lister: Filesystem access; a default :class:`FileLister` when omitted.
        sort_key: Initial sort key.
        view_mode: Initial view mode.
        active_filter: Initial category filter.
    """

    def __init__(
        self,
        lister: Optional[FileLister] = None,
        *,
        sort_key: SortKey = SortKey.NAME,
        view_mode: ViewMode = ViewMode.LIST,
        active_filter: FilterKind = FilterKind.NONE,
    ) -> None:
        self.lister = lister or FileLister()
        self._stack: List[Path] = []
        self._sort_key = SortKey(sort_key)
        self._filter = FilterEngine(active_filter)
        self._raw: List[FileEntry] = []
        self._generation = 0
        self._closed = False
        self._listeners: List[Listener] = []
        self._state = BrowserState(
            view_mode=ViewMode(view_mode),
            sort_key=self._sort_key,
            active_filter=self._filter.active,
        )

    async def __aenter__(self) -> "NavigationController":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):  # type: ignore[no-untyped-def]
        self.close()
        return False

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------
    @property
    def state(self) -> BrowserState:
        """The latest published snapshot."""
        return self._state

    @property
    def current_path(self) -> Optional[Path]:
        """Top of the navigation stack."""
        return self._stack[-1] if self._stack else None

    @property
    def history(self) -> Tuple[Path, ...]:
        """Visited paths, oldest first."""
        return tuple(self._stack)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for every new snapshot.

        Returns:
            A callable that unregisters the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, **changes: object) -> BrowserState:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def _visible_items(self) -> Tuple[FileEntry, ...]:
        return tuple(self._filter.apply(sort_entries(self._raw, self._sort_key)))

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    async def _load(self, target: Path, fetch: Fetch, *, navigate: bool) -> BrowserState:
        if self._closed:
            logger.debug(f"Session closed; ignoring request for {target}")
            return self._state

        self._generation += 1
        generation = self._generation
        self._publish(
            status=NavStatus.LOADING, loading_path=target, generation=generation
        )

        try:
            raw = await fetch()
        except BaseException:
            if generation == self._generation:
                settled = (
                    NavStatus.READY
                    if self._state.current_path is not None
                    else NavStatus.IDLE
                )
                self._publish(status=settled, loading_path=None)
            raise

        if generation != self._generation:
            logger.debug(f"Discarding stale result for {target}")
            return self._state

        self._raw = raw
        changes: dict = {}
        if navigate:
            if not self._stack or self._stack[-1] != target:
                self._stack.append(target)
            changes["current_path"] = target
        return self._publish(
            status=NavStatus.READY,
            loading_path=None,
            items=self._visible_items(),
            can_navigate_back=self.can_navigate_back(),
            **changes,
        )

    async def navigate_to_directory(self, path: Path) -> BrowserState:
        """Show the children of *path* and record it in the history.

        The path is pushed only if it differs from the current top.
        """
        target = Path(path).absolute()
        return await self._load(
            target,
            lambda: self.lister.get_files(target, sort_key=None),
            navigate=True,
        )

    async def show_media_files(
        self, path: Path, category: MediaCategory
    ) -> BrowserState:
        """Show every file of *category* below *path*; history is unchanged."""
        target = Path(path).absolute()
        return await self._load(
            target,
            lambda: self.lister.get_media_files(target, category, sort_key=None),
            navigate=False,
        )

    async def show_video_files(self, path: Path) -> BrowserState:
        return await self.show_media_files(path, MediaCategory.VIDEO)

    async def show_audio_files(self, path: Path) -> BrowserState:
        return await self.show_media_files(path, MediaCategory.AUDIO)

    def can_navigate_back(self) -> bool:
        """Whether there is a previous directory to return to."""
        return len(self._stack) > 1

    async def navigate_back(self) -> bool:
        """Return to the previous directory, re-listing it from disk.

        Returns:
            False if there was nothing to go back to.
        """
        if not self.can_navigate_back():
            return False
        self._stack.pop()
        await self.navigate_to_directory(self._stack[-1])
        return True

    async def refresh_current_directory(self) -> BrowserState:
        """Re-list the current directory without touching the history."""
        current = self.current_path
        if current is None:
            return self._state
        return await self.navigate_to_directory(current)

    def breadcrumbs(self) -> List[Tuple[str, Path]]:
        """``(label, path)`` pairs from the filesystem root to the current path."""
        current = self.current_path
        if current is None:
            return []
        chain = list(reversed([current, *current.parents]))
        return [(part.name or str(part), part) for part in chain]

    # ------------------------------------------------------------------
    # Presentation settings
    # ------------------------------------------------------------------
    def toggle_view_mode(self) -> ViewMode:
        """Switch between list and grid layout."""
        mode = ViewMode.GRID if self._state.view_mode == ViewMode.LIST else ViewMode.LIST
        self._publish(view_mode=mode)
        return mode

    def set_sort_option(self, key: SortKey) -> BrowserState:
        """Re-sort the cached listing by *key*."""
        self._sort_key = SortKey(key)
        return self._publish(sort_key=self._sort_key, items=self._visible_items())

    def set_filter(self, kind: FilterKind) -> BrowserState:
        """Replace the active filter and re-filter the cached listing."""
        self._filter.set_filter(kind)
        return self._publish(
            active_filter=self._filter.active, items=self._visible_items()
        )

    # ------------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------------
    async def _refresh_if(self, succeeded: bool) -> bool:
        if succeeded:
            await self.refresh_current_directory()
        return succeeded

    async def create_folder(self, name: str) -> bool:
        """Create *name* inside the current directory."""
        current = self.current_path
        if current is None:
            return False
        return await self._refresh_if(
            await self.lister.create_directory(current, name)
        )

    async def delete_file(self, item: FileEntry) -> bool:
        return await self._refresh_if(await self.lister.delete_file(item.path))

    async def rename_file(self, item: FileEntry, new_name: str) -> bool:
        return await self._refresh_if(
            await self.lister.rename_file(item.path, new_name)
        )

    async def copy_file(self, item: FileEntry, destination: Path) -> bool:
        return await self._refresh_if(
            await self.lister.copy_file(item.path, Path(destination))
        )

    async def move_file(self, item: FileEntry, destination: Path) -> bool:
        return await self._refresh_if(
            await self.lister.move_file(item.path, Path(destination))
        )

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------
    def close(self) -> None:
        """End the session: drop in-flight results and stop publishing."""
        self._closed = True
        self._generation += 1
        self._listeners.clear()
