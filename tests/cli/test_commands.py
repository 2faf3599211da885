"""Tests for the medianav CLI commands.

This test suite covers:
- ls and scan with sort, filter and JSON output
- Error handling for paths that are not directories
- Storage roots discovery
- The fav sub-commands backed by a temporary favorites file
- The config sub-commands backed by a temporary config.toml
"""

import importlib
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from medianav.cli.commands import app
from medianav.utils import config as cfg

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME, the config file and the favorites file at tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("MEDIANAV_FAVORITES_PATH", str(tmp_path / "favorites.json"))
    monkeypatch.setenv("MEDIANAV_STORAGE_MOUNT_DIR", str(tmp_path / "storage"))
    # Wide console so long tmp paths are never wrapped.
    monkeypatch.setenv("COLUMNS", "400")
    importlib.reload(cfg)
    return home


def _names(result) -> list:
    return [record["name"] for record in json.loads(result.stdout)]


def test_ls_table(media_tree: Path) -> None:
    result = runner.invoke(app, ["ls", str(media_tree)])

    assert result.exit_code == 0, result.output
    for name in ("Movies/", "Music/", "cover.jpg", "notes.txt"):
        assert name in result.output
    assert "Directories: 2 | Files: 2" in result.output


def test_ls_json_sorted(media_tree: Path) -> None:
    result = runner.invoke(app, ["ls", str(media_tree), "--sort", "size", "--json"])

    assert result.exit_code == 0, result.output
    assert _names(result)[2:] == ["notes.txt", "cover.jpg"]


def test_ls_json_filtered(media_tree: Path) -> None:
    result = runner.invoke(app, ["ls", str(media_tree), "-f", "image", "--json"])

    assert result.exit_code == 0, result.output
    records = json.loads(result.stdout)
    assert [record["name"] for record in records] == ["cover.jpg"]
    assert records[0]["mime_type"] == "image/jpeg"
    assert records[0]["path"] == str(media_tree / "cover.jpg")


def test_ls_sort_from_config(media_tree: Path) -> None:
    cfg.set_setting("browse.sort", "size")

    result = runner.invoke(app, ["ls", str(media_tree), "--json"])

    assert _names(result)[2:] == ["notes.txt", "cover.jpg"]


def test_ls_not_a_directory(tmp_path: Path) -> None:
    result = runner.invoke(app, ["ls", str(tmp_path / "missing")])

    assert result.exit_code == 1
    assert "Not a directory" in result.output


def test_scan_json(media_tree: Path) -> None:
    result = runner.invoke(app, ["scan", str(media_tree), "--kind", "audio", "--json"])

    assert result.exit_code == 0, result.output
    assert _names(result) == ["song.mp3", "track01.flac"]


def test_scan_table_plain(media_tree: Path) -> None:
    result = runner.invoke(app, ["--no-rich", "scan", str(media_tree)])

    assert result.exit_code == 0, result.output
    assert "clip.MP4" in result.output
    assert "heat.mkv" in result.output
    assert "heat.srt" not in result.output


def test_scan_nothing_found(media_tree: Path) -> None:
    result = runner.invoke(app, ["--no-rich", "scan", str(media_tree), "-k", "archive"])

    assert result.exit_code == 0, result.output
    assert "No archive files found." in result.output


def test_scan_honours_max_depth(media_tree: Path, monkeypatch) -> None:
    monkeypatch.setenv("MEDIANAV_SCAN_MAX_DEPTH", "1")

    result = runner.invoke(app, ["scan", str(media_tree), "--json"])

    assert _names(result) == ["clip.MP4"]


def test_roots(tmp_path: Path, cli_env: Path) -> None:
    (tmp_path / "storage" / "emulated").mkdir(parents=True)
    (tmp_path / "storage" / "sdcard").mkdir()

    result = runner.invoke(app, ["roots"])

    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert lines == [str(cli_env), str(tmp_path / "storage" / "sdcard")]


def test_fav_add_list_remove(tmp_path: Path) -> None:
    movies = tmp_path / "Movies"

    result = runner.invoke(app, ["fav", "add", str(movies), "--name", "Films"])
    assert result.exit_code == 0, result.output
    assert f"Added favorite: {movies}" in result.output
    assert (tmp_path / "favorites.json").exists()

    result = runner.invoke(app, ["fav", "add", str(movies)])
    assert result.exit_code == 1
    assert "Already a favorite" in result.output

    result = runner.invoke(app, ["fav", "list", "--json"])
    records = json.loads(result.stdout)
    assert [(r["path"], r["name"]) for r in records] == [(str(movies), "Films")]

    result = runner.invoke(app, ["fav", "list"])
    assert "Films" in result.output

    result = runner.invoke(app, ["fav", "remove", str(movies)])
    assert result.exit_code == 0, result.output
    assert "Removed favorite" in result.output

    result = runner.invoke(app, ["fav", "remove", str(movies)])
    assert result.exit_code == 1
    assert "Not a favorite" in result.output


def test_fav_list_empty() -> None:
    result = runner.invoke(app, ["fav", "list"])
    assert result.exit_code == 0
    assert "No favorites yet." in result.output


def test_fav_toggle(tmp_path: Path) -> None:
    music = tmp_path / "Music"

    result = runner.invoke(app, ["fav", "toggle", str(music)])
    assert f"Starred: {music}" in result.output

    records = json.loads(runner.invoke(app, ["fav", "list", "--json"]).stdout)
    assert records[0]["name"] == "Music"

    result = runner.invoke(app, ["fav", "toggle", str(music)])
    assert f"Unstarred: {music}" in result.output


def test_fav_relative_path_is_stored_absolute(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    runner.invoke(app, ["fav", "add", "Shows"])

    records = json.loads(runner.invoke(app, ["fav", "list", "--json"]).stdout)
    assert records[0]["path"] == str(tmp_path / "Shows")


def test_config_set_and_get() -> None:
    result = runner.invoke(app, ["config", "set", "scan.max_depth", "3"])
    assert result.exit_code == 0, result.output
    assert "scan.max_depth = 3" in result.output
    assert cfg.get_setting("scan.max_depth") == 3

    runner.invoke(app, ["config", "set", "browse.sort", "date"])
    result = runner.invoke(app, ["config", "get", "browse.sort"])
    assert result.exit_code == 0
    assert "browse.sort = date" in result.output


def test_config_get_missing() -> None:
    result = runner.invoke(app, ["config", "get", "nothing.here"])
    assert result.exit_code == 1
    assert "nothing.here is not set" in result.output


def test_version() -> None:
    from medianav.__about__ import __version__

    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"medianav version: {__version__}" in result.output


def test_ls_with_unknown_sort_setting(media_tree: Path, monkeypatch) -> None:
    monkeypatch.setenv("MEDIANAV_BROWSE_SORT", "bogus")

    result = runner.invoke(app, ["ls", str(media_tree), "--json"])

    assert result.exit_code == 0, result.output
    assert _names(result)[:2] == ["Movies", "Music"]


def test_fav_list_with_undecodable_file(tmp_path: Path) -> None:
    (tmp_path / "favorites.json").write_bytes(b"\xff\xfe[garbage")

    result = runner.invoke(app, ["fav", "list"])

    assert result.exit_code == 0, result.output
    assert "No favorites yet." in result.output
