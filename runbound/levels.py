"""Reading and writing level directories of tile and mace positions."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enemies import EnemyMace
    from .tiles import TileManager

TILES_FILE = "tiles.txt"
ENEMIES_FILE = "enemies.txt"
DEFAULT_ROOT = "levels"


class LevelError(RuntimeError):
    """A level directory could not be read or written."""


def _read(path: Path) -> str:
    try:
        return path.read_text()
    except OSError as exc:
        raise LevelError(f"Failed to load: {path}") from exc


def _leading_ints(line: str, count: int) -> list[int] | None:
    if not line or line.startswith("#"):
        return None
    tokens = line.split()[:count]
    if len(tokens) < count:
        return None
    try:
        return [int(token) for token in tokens]
    except ValueError:
        return None


def load_level(directory: str | Path, tile_manager: TileManager, enemies: EnemyMace) -> None:
    """Replace the current level with the one stored in ``directory``."""
    base = Path(directory)
    tiles_text = _read(base / TILES_FILE)
    enemies_text = _read(base / ENEMIES_FILE)

    tile_manager.clear_level()
    enemies.clear()

    for line in tiles_text.splitlines():
        values = _leading_ints(line, 2)
        if values is not None:
            tile_manager.add_tile(*values)

    for line in enemies_text.splitlines():
        values = _leading_ints(line, 1)
        if values is not None:
            enemies.add(values[0])


def level_saves(root: str | Path = DEFAULT_ROOT) -> list[str]:
    """Names of the saved level directories under ``root``, sorted."""
    base = Path(root)
    if not base.exists():
        return []
    return sorted(entry.name for entry in base.iterdir() if entry.is_dir())


def save_level(
    name: str,
    tile_manager: TileManager,
    enemies: EnemyMace,
    root: str | Path = DEFAULT_ROOT,
) -> Path:
    """Write the level under ``root/name`` and return that directory."""
    path = Path(root) / name
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise LevelError(f"Failed to create level directory: {path}") from exc

    tile_lines = "".join(
        f"{x} {y}\n" for x, rows in tile_manager.columns() for y in rows
    )
    enemy_lines = "".join(f"{x}\n" for x in enemies.positions())
    for filename, text in ((TILES_FILE, tile_lines), (ENEMIES_FILE, enemy_lines)):
        try:
            (path / filename).write_text(text)
        except OSError as exc:
            raise LevelError(f"Failed to open level file: {path}") from exc
    return path