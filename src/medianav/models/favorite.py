"""Favorite directory model.

A favorite is identified by a generated id, but uniqueness is enforced on the
path: the store rejects a second entry for a path that is already starred.
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def _now_ms() -> datetime:
    """Current UTC time truncated to millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


class FavoriteEntry(BaseModel):
    """A persisted, user-starred directory."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), min_length=1)
    """Unique token, distinct from the path."""

    path: str = Field(min_length=1)
    """Starred directory path."""

    name: str = ""
    """Optional display name."""

    added_at: datetime = Field(default_factory=_now_ms)
    """When the favorite was added (UTC, millisecond precision)."""

    @property
    def display_name(self) -> str:
        """The name, or the last path segment when no name was given."""
        if self.name:
            return self.name
        return self.path.rstrip("/").rsplit("/", 1)[-1] or self.path
