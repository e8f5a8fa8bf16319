"""BrickColor palette table loading with bundled data and external override support.

The table backing BrickColor lives in a YAML data file:
- Bundled ``data/brick_colors.yaml`` shipped with the package
- Environment variable override for custom data directories
- User config directory support (~/.config/rbxmarshal/)
- Explicit path override in API calls

Environment Variables:
    RBXMARSHAL_BRICKCOLOR_DATA: Colon-separated (or semicolon on Windows)
                                paths to directories containing a custom
                                ``brick_colors.yaml``. These are searched
                                before bundled data.

Example:
    export RBXMARSHAL_BRICKCOLOR_DATA="/path/to/my/palettes"

Loaded tables are immutable and cached; they are safe to share between
threads.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

__all__ = [
    "RBXMARSHAL_BRICKCOLOR_DATA",
    "BrickColorEntry",
    "BrickColorTable",
    "load_table",
    "clear_cache",
]

logger = logging.getLogger(__name__)

# Environment variable name for custom data paths
RBXMARSHAL_BRICKCOLOR_DATA = "RBXMARSHAL_BRICKCOLOR_DATA"

TABLE_FILENAME = "brick_colors.yaml"

# Bundled data location (relative to this file)
_BUNDLED_DATA_DIR = Path(__file__).parent / "data"


@dataclass(frozen=True)
class BrickColorEntry:
    """One row of the palette table."""
    number: int
    name: str
    rgb: Tuple[int, int, int]


@dataclass(frozen=True)
class BrickColorTable:
    """An immutable, validated palette table."""
    colors: Tuple[BrickColorEntry, ...]
    palette: Tuple[int, ...]
    default: int
    source_path: str
    by_number: Mapping[int, BrickColorEntry]
    by_name: Mapping[str, BrickColorEntry]

    @property
    def default_entry(self) -> BrickColorEntry:
        return self.by_number[self.default]

    def lookup_number(self, number: int) -> Optional[BrickColorEntry]:
        return self.by_number.get(number)

    def lookup_name(self, name: str) -> Optional[BrickColorEntry]:
        return self.by_name.get(name)

    def closest(self, rgb: Tuple[int, int, int]) -> BrickColorEntry:
        """Entry with the smallest squared RGB distance; the first one wins ties."""
        best = self.colors[0]
        best_distance = None
        for entry in self.colors:
            distance = sum((a - b) ** 2 for a, b in zip(entry.rgb, rgb))
            if best_distance is None or distance < best_distance:
                best, best_distance = entry, distance
        return best


def clear_cache() -> None:
    """Clear all cached table data.

    Call this if you modify external table files and want to reload. BrickColor
    values created before the reload keep the name and rgb they were built
    with; if the new table drops their number, their variants no longer
    decode and raise MismatchedSource.
    """
    _get_data_dirs.cache_clear()
    _load_table_cached.cache_clear()


@lru_cache(maxsize=None)
def _get_data_dirs() -> tuple[Path, ...]:
    """Return tuple of data directories to search, in priority order.

    Search order:
        1. Directories from RBXMARSHAL_BRICKCOLOR_DATA environment variable
        2. User config directory (~/.config/rbxmarshal/)
        3. Bundled data directory
    """
    dirs: List[Path] = []

    # 1. Environment variable (highest priority)
    env_path = os.environ.get(RBXMARSHAL_BRICKCOLOR_DATA)
    if env_path:
        sep = ";" if sys.platform == "win32" else ":"
        for p in env_path.split(sep):
            p = p.strip()
            if p:
                path = Path(p).expanduser().resolve()
                if path.is_dir():
                    dirs.append(path)

    # 2. User config directory
    if sys.platform == "win32":
        config_base = Path(os.environ.get("APPDATA", "~")).expanduser()
    else:
        config_base = Path.home() / ".config"

    user_config = config_base / "rbxmarshal"
    if user_config.is_dir():
        dirs.append(user_config)

    # 3. Bundled data (always available as fallback)
    if _BUNDLED_DATA_DIR.is_dir():
        dirs.append(_BUNDLED_DATA_DIR)

    return tuple(dirs)


@lru_cache(maxsize=8)
def _load_table_cached(custom_path_str: Optional[str]) -> BrickColorTable:
    """Cached table loading (string path for hashability)."""
    custom_path = Path(custom_path_str) if custom_path_str else None
    return _load_table_impl(custom_path)


def _load_table_impl(custom_path: Optional[Path]) -> BrickColorTable:
    """Implementation of table loading."""
    if custom_path:
        if not custom_path.exists():
            raise FileNotFoundError(f"Custom BrickColor table not found: {custom_path}")
        return _load_yaml(custom_path)

    for data_dir in _get_data_dirs():
        path = data_dir / TABLE_FILENAME
        if path.exists():
            return _load_yaml(path)

    searched = [str(d) for d in _get_data_dirs()]
    raise FileNotFoundError(
        f"No BrickColor table found.\n"
        f"Searched directories: {searched}"
    )


def _parse_entry(raw: Any, path: Path) -> BrickColorEntry:
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid color entry in {path}: {raw!r}")
    try:
        number = raw["number"]
        name = raw["name"]
        rgb = raw["rgb"]
    except KeyError as exc:
        raise ValueError(f"Color entry in {path} missing {exc.args[0]!r}: {raw!r}") from exc
    if not isinstance(number, int) or not 0 <= number <= 0xFFFF:
        raise ValueError(f"Invalid color number {number!r} in {path}")
    if not isinstance(name, str) or not name:
        raise ValueError(f"Invalid color name {name!r} in {path}")
    if (not isinstance(rgb, list) or len(rgb) != 3
            or not all(isinstance(c, int) and 0 <= c <= 255 for c in rgb)):
        raise ValueError(f"Invalid rgb {rgb!r} for color {number} in {path}")
    return BrickColorEntry(number, name, tuple(rgb))


def _load_yaml(path: Path) -> BrickColorTable:
    """Load and validate a YAML table file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Invalid table format in {path}: expected dict at root")

    # Validate schema version
    schema_version = data.get("schema_version", "1.0")
    if not isinstance(schema_version, str) or not schema_version.startswith("1."):
        raise ValueError(
            f"Unsupported schema version '{schema_version}' in {path}. "
            f"Expected version 1.x"
        )

    for section in ("colors", "palette", "default"):
        if section not in data:
            raise ValueError(f"Table {path} missing required '{section}' section")

    if not isinstance(data["colors"], list) or not data["colors"]:
        raise ValueError(f"Table {path} has no colors")
    colors = tuple(_parse_entry(raw, path) for raw in data["colors"])

    by_number: Dict[int, BrickColorEntry] = {}
    by_name: Dict[str, BrickColorEntry] = {}
    for entry in colors:
        if entry.number in by_number:
            raise ValueError(f"Duplicate color number {entry.number} in {path}")
        by_number[entry.number] = entry
        # Names repeat in the real table; the first entry wins
        by_name.setdefault(entry.name, entry)

    default = data["default"]
    if default not in by_number:
        raise ValueError(f"Default color {default!r} in {path} is not in the table")

    palette = data["palette"]
    if not isinstance(palette, list):
        raise ValueError(f"Invalid palette in {path}: expected a list")
    for number in palette:
        if number not in by_number:
            raise ValueError(f"Palette entry {number!r} in {path} is not in the table")

    logger.debug("loaded BrickColor table from %s (%d colors, %d palette entries)",
                 path, len(colors), len(palette))

    return BrickColorTable(
        colors=colors,
        palette=tuple(palette),
        default=default,
        source_path=str(path),
        by_number=MappingProxyType(by_number),
        by_name=MappingProxyType(by_name),
    )


def load_table(custom_path: Optional[Path] = None) -> BrickColorTable:
    """Load the BrickColor palette table.

    Args:
        custom_path: Optional explicit path to YAML file (overrides search)

    Returns:
        Validated, immutable BrickColorTable

    Raises:
        FileNotFoundError: If no table file is found
        ValueError: If the table has invalid format

    Search order (unless custom_path specified):
        1. $RBXMARSHAL_BRICKCOLOR_DATA directories
        2. ~/.config/rbxmarshal/
        3. Bundled data
    """
    custom_str = str(custom_path) if custom_path else None
    return _load_table_cached(custom_str)
