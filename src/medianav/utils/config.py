"""Config utility for persistent medianav settings.

Settings live in ~/.config/medianav/config.toml (or under $XDG_CONFIG_HOME).
Uses tomli/tomli-w for TOML parsing and writing. Values are resolved with the
precedence CLI > environment (``MEDIANAV_*``) > config file > default.
"""

from pathlib import Path
from typing import Optional, TypeVar, Any, cast
import os
import contextlib
import logging

import tomli
import tomli_w
from pydantic import BaseModel

from medianav.models.core import SortKey

# Logger for this module
logger = logging.getLogger(__name__)

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
# Path like ~/.config/medianav or $XDG_CONFIG_HOME/medianav
CONFIG_DIR = _xdg_config_home / "medianav"
CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_MOUNT_DIR = "/storage"
DEFAULT_PRIMARY_ALIAS = "emulated"

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="storage.mount_dir" will attempt
    ``data["storage"]["mount_dir"]`` returning None if any level is missing.
    """

    keys = dotted_key.split(".")
    current: Any = data
    for part in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = "MEDIANAV_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "storage.mount_dir" -> "MEDIANAV_STORAGE_MOUNT_DIR".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(raw: Any, default: T) -> T:
    """Best-effort coercion of *raw* to the type of *default*."""
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return cast(T, raw)
        if isinstance(raw, str):
            return cast(T, raw.lower() in {"1", "true", "yes", "on"})
        return default
    if isinstance(default, int):
        if isinstance(raw, int):
            return cast(T, raw)
        if isinstance(raw, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(raw))
        return default
    if isinstance(default, float):
        if isinstance(raw, (int, float)):
            return cast(T, float(raw))
        if isinstance(raw, str):
            with contextlib.suppress(ValueError):
                return cast(T, float(raw))
        return default
    if default is None and isinstance(raw, str):
        # Type unknown: infer int/float automatically.
        if raw.isdigit():
            return cast(T, int(raw))
        with contextlib.suppress(ValueError):
            return cast(T, float(raw))
    return cast(T, raw)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"storage.mount_dir"`` or ``"foo"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """

    # 1. CLI value wins if provided (and not ``None`` to mimic Typer semantics).
    if cli_value is not None:
        return cli_value

    # 2. Environment variable
    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    # 3. Config file lookup
    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    # 4. Default
    return default


def get_setting(key: str) -> Optional[Any]:
    """Return the raw config-file value for *key*, or None if it is not set."""
    return _lookup_nested(_read_config_file(), key)


def set_setting(key: str, value: Any) -> None:
    """Write *value* under the dotted *key* in config.toml.

    Args:
        key: Dotted key path, e.g. ``"browse.sort"``.
        value: A TOML-serializable value.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    current = data
    for part in parents:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


class BrowserSettings(BaseModel):
    """Resolved settings used by the lister, favorites store and CLI."""

    primary_root: Path
    """Primary storage root reported first by the lister."""

    mount_dir: Path = Path(DEFAULT_MOUNT_DIR)
    """Directory holding additional mounted volumes."""

    primary_alias: str = DEFAULT_PRIMARY_ALIAS
    """Name under ``mount_dir`` that aliases the primary root."""

    favorites_path: Path
    """File backing the favorites slot."""

    sort: SortKey = SortKey.NAME
    """Default sort key for listings."""

    max_depth: Optional[int] = None
    """Depth limit for recursive media scans (None means unbounded)."""


def _resolve_sort(cli_value: Optional[str]) -> SortKey:
    """Resolve ``browse.sort``; an unknown value falls back to sorting by name."""
    raw = str(resolve_setting("browse.sort", default="name", cli_value=cli_value))
    try:
        return SortKey(raw.lower())
    except ValueError:
        logger.warning(f"Unknown browse.sort value {raw!r}; sorting by name")
        return SortKey.NAME


def load_settings(
    *,
    primary_root: Optional[str] = None,
    mount_dir: Optional[str] = None,
    favorites_path: Optional[str] = None,
    sort: Optional[str] = None,
) -> BrowserSettings:
    """Resolve all settings into a :class:`BrowserSettings`.

    Keyword arguments are CLI overrides; ``None`` means not provided.
    """
    max_depth = resolve_setting("scan.max_depth", default=0)
    return BrowserSettings(
        primary_root=Path(
            resolve_setting(
                "storage.primary_root",
                default=str(Path.home()),
                cli_value=primary_root,
            )
        ).expanduser(),
        mount_dir=Path(
            resolve_setting(
                "storage.mount_dir", default=DEFAULT_MOUNT_DIR, cli_value=mount_dir
            )
        ).expanduser(),
        primary_alias=resolve_setting(
            "storage.primary_alias", default=DEFAULT_PRIMARY_ALIAS
        ),
        favorites_path=Path(
            resolve_setting(
                "favorites.path",
                default=str(Path.home() / ".medianav" / "favorites.json"),
                cli_value=favorites_path,
            )
        ).expanduser(),
        sort=_resolve_sort(sort),
        max_depth=max_depth if max_depth > 0 else None,
    )
