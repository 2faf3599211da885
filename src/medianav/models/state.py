"""Browser state snapshot published by the navigation controller."""

from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from medianav.models.core import FileEntry, FilterKind, SortKey, ViewMode


class NavStatus(str, Enum):
    """Lifecycle of the controller: nothing loaded, loading, or showing items."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class BrowserState(BaseModel):
    """Immutable snapshot of everything a UI collaborator displays.

    A new snapshot replaces the previous one on every change; listeners
    registered with the controller receive each one.
    """

    model_config = ConfigDict(frozen=True)

    status: NavStatus = NavStatus.IDLE
    current_path: Optional[Path] = None
    """Directory the published items belong to."""

    loading_path: Optional[Path] = None
    """Directory currently being fetched, if any."""

    items: Tuple[FileEntry, ...] = ()
    view_mode: ViewMode = ViewMode.LIST
    sort_key: SortKey = SortKey.NAME
    active_filter: FilterKind = FilterKind.NONE
    can_navigate_back: bool = False
    generation: int = 0
    """Request counter of the navigation that produced this snapshot."""

    @property
    def loading(self) -> bool:
        """Whether a fetch is in flight."""
        return self.status == NavStatus.LOADING
