"""Ordering of listings.

Directories always come before files; the sort key only orders entries within
each of those two groups. Python's sort is stable, so entries with equal keys
keep their listing order.
"""

from typing import Any, Callable, Dict, Iterable, List, Tuple

from medianav.models.core import FileEntry, SortKey

_KEY_FUNCS: Dict[SortKey, Callable[[FileEntry], Any]] = {
    SortKey.NAME: lambda entry: entry.name.lower(),
    SortKey.SIZE: lambda entry: entry.size,
    # Most recent first.
    SortKey.DATE: lambda entry: -entry.modified.timestamp(),
    SortKey.TYPE: lambda entry: entry.extension.lower(),
}


def sort_key_for(key: SortKey) -> Callable[[FileEntry], Tuple[bool, Any]]:
    """Return the ``sorted`` key function for *key* with directories first."""
    key_func = _KEY_FUNCS[key]

    def composite(entry: FileEntry) -> Tuple[bool, Any]:
        return (not entry.is_directory, key_func(entry))

    return composite


def sort_entries(entries: Iterable[FileEntry], key: SortKey) -> List[FileEntry]:
    """Sort a listing.

    Args:
        entries: Entries to order.
        key: Field to order by within the directory and file groups.

    Returns:
        A new list; the input is not modified.
    """
    return sorted(entries, key=sort_key_for(SortKey(key)))
