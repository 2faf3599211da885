"""Category filter for listings.

At most one :class:`FilterKind` is active; setting a new one replaces the old
one entirely.
"""

from typing import Callable, Dict, Iterable, List

from medianav.models.core import FileEntry, FilterKind

_PREDICATES: Dict[FilterKind, Callable[[FileEntry], bool]] = {
    FilterKind.NONE: lambda entry: True,
    FilterKind.VIDEO: lambda entry: entry.is_video,
    FilterKind.AUDIO: lambda entry: entry.is_audio,
    FilterKind.IMAGE: lambda entry: entry.is_image,
    FilterKind.DOCUMENT: lambda entry: entry.is_document,
}


def matches(entry: FileEntry, kind: FilterKind) -> bool:
    """Return True if *entry* passes the *kind* filter."""
    return _PREDICATES[FilterKind(kind)](entry)


class FilterEngine:
    """Holds the active filter and applies it to listings."""

    def __init__(self, kind: FilterKind = FilterKind.NONE) -> None:
        self._kind = FilterKind(kind)

    @property
    def active(self) -> FilterKind:
        """The currently active filter kind."""
        return self._kind

    def set_filter(self, kind: FilterKind) -> None:
        """Replace the active filter unconditionally."""
        self._kind = FilterKind(kind)

    def apply(self, listing: Iterable[FileEntry]) -> List[FileEntry]:
        """Return the entries of *listing* matching the active filter.

        An empty result is valid; ``FilterKind.NONE`` returns everything.
        """
        if self._kind == FilterKind.NONE:
            return list(listing)
        return [entry for entry in listing if matches(entry, self._kind)]
