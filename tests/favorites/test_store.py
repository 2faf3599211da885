"""Tests for medianav.favorites.store.FavoriteStore.

Covers add/remove/toggle semantics, persistence through a file slot, failure
handling, and concurrent mutations sharing one store.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

import pytest

from medianav.favorites.codec import encode_legacy
from medianav.favorites.slots import FileSlot, MemorySlot
from medianav.favorites.store import FavoriteStore
from medianav.models.favorite import FavoriteEntry
from medianav.utils.config import BrowserSettings


class BrokenSlot(MemorySlot):
    """Slot whose writes always fail."""

    def write(self, blob: str) -> None:
        raise OSError("disk full")


class UnreadableSlot(MemorySlot):
    def read(self) -> Optional[str]:
        raise OSError("permission denied")


@pytest.mark.asyncio
async def test_add_and_list() -> None:
    store = FavoriteStore(MemorySlot())

    assert await store.add_favorite("/storage/Movies", "Films") is True
    assert await store.add_favorite("/storage/Music") is True

    favorites = await store.list_favorites()
    assert [(f.path, f.name) for f in favorites] == [
        ("/storage/Movies", "Films"),
        ("/storage/Music", ""),
    ]
    assert await store.is_favorite("/storage/Movies")
    assert not await store.is_favorite("/storage/Other")


@pytest.mark.asyncio
async def test_duplicate_add_is_rejected() -> None:
    slot = MemorySlot()
    store = FavoriteStore(slot)

    assert await store.add_favorite("/a") is True
    blob = slot.blob
    assert await store.add_favorite("/a", "again") is False

    assert len(await store.list_favorites()) == 1
    assert slot.blob == blob


@pytest.mark.asyncio
async def test_empty_path_is_rejected() -> None:
    store = FavoriteStore(MemorySlot())
    assert await store.add_favorite("") is False
    assert await store.toggle_favorite("") is False
    assert await store.list_favorites() == []


@pytest.mark.asyncio
async def test_remove() -> None:
    slot = MemorySlot()
    store = FavoriteStore(slot)
    await store.add_favorite("/a")
    await store.add_favorite("/b")

    assert await store.remove_favorite("/a") is True
    assert [f.path for f in await store.list_favorites()] == ["/b"]

    blob = slot.blob
    assert await store.remove_favorite("/missing") is False
    assert slot.blob == blob


@pytest.mark.asyncio
async def test_toggle() -> None:
    store = FavoriteStore(MemorySlot())

    assert await store.toggle_favorite("/storage/Movies/") is True
    (entry,) = await store.list_favorites()
    assert entry.name == "Movies"

    assert await store.toggle_favorite("/storage/Movies/") is False
    assert await store.list_favorites() == []

    assert await store.toggle_favorite("/x", "Named") is True
    assert (await store.list_favorites())[0].name == "Named"


@pytest.mark.asyncio
async def test_accepts_path_objects(tmp_path: Path) -> None:
    store = FavoriteStore(MemorySlot())
    await store.add_favorite(tmp_path)
    assert await store.is_favorite(str(tmp_path))


@pytest.mark.asyncio
async def test_write_failure_reports_false() -> None:
    store = FavoriteStore(BrokenSlot())

    assert await store.add_favorite("/a") is False
    assert await store.toggle_favorite("/a") is False


@pytest.mark.asyncio
async def test_toggle_write_failure_keeps_previous_state() -> None:
    entry = FavoriteEntry(path="/a")
    slot = BrokenSlot(encode_legacy([entry]))

    assert await FavoriteStore(slot).toggle_favorite("/a") is True


@pytest.mark.asyncio
async def test_read_failure_gives_empty() -> None:
    store = FavoriteStore(UnreadableSlot())

    assert await store.list_favorites() == []
    assert await store.add_favorite("/a") is False
    assert await store.remove_favorite("/a") is False
    assert await store.toggle_favorite("/a") is False


@pytest.mark.asyncio
async def test_legacy_blob_is_migrated_on_write() -> None:
    slot = MemorySlot(encode_legacy([FavoriteEntry(id="1", path="/old")]))
    store = FavoriteStore(slot)

    await store.add_favorite("/new")

    assert slot.blob is not None and slot.blob.startswith("{")
    assert [f.path for f in await store.list_favorites()] == ["/old", "/new"]


@pytest.mark.asyncio
async def test_concurrent_adds_are_not_lost(tmp_path: Path) -> None:
    """Test concurrent read-modify-write cycles on one store keep every add."""
    with ThreadPoolExecutor(max_workers=4) as executor:
        store = FavoriteStore(FileSlot(tmp_path / "fav.json"), executor=executor)
        paths = [f"/media/{i}" for i in range(10)]

        results = await asyncio.gather(*(store.add_favorite(p) for p in paths))

        assert all(results)
        assert sorted(f.path for f in await store.list_favorites()) == sorted(paths)


@pytest.mark.asyncio
async def test_concurrent_duplicate_adds_keep_one() -> None:
    store = FavoriteStore(MemorySlot())

    results = await asyncio.gather(*(store.add_favorite("/same") for _ in range(5)))

    assert sorted(results) == [False, False, False, False, True]
    assert len(await store.list_favorites()) == 1


@pytest.mark.asyncio
async def test_from_settings_persists_to_file(tmp_path: Path) -> None:
    settings = BrowserSettings(
        primary_root=tmp_path, favorites_path=tmp_path / "data" / "fav.json"
    )

    await FavoriteStore.from_settings(settings).add_favorite("/a")

    reopened = FavoriteStore.from_settings(settings)
    assert [f.path for f in await reopened.list_favorites()] == ["/a"]


@pytest.mark.asyncio
async def test_undecodable_favorites_file_reads_as_empty(tmp_path: Path) -> None:
    """Test a favorites file with invalid UTF-8 behaves like an empty list."""
    blob = tmp_path / "fav.json"
    blob.write_bytes(b"\xff\xfe[garbage")
    store = FavoriteStore(FileSlot(blob))

    assert await store.list_favorites() == []
    assert await store.is_favorite("/a") is False
    assert await store.remove_favorite("/a") is False

    assert await store.add_favorite("/a") is True
    assert [f.path for f in await store.list_favorites()] == ["/a"]
    assert await store.toggle_favorite("/a") is False
