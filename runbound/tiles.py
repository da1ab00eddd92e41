"""The grid of ground tiles and the generator of new columns."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Iterator

from .constants import (
    GENERATED_ROWS,
    HEIGHT,
    PLACEHOLDER_ROW,
    TILE_SIZE,
    WIDTH,
)

if TYPE_CHECKING:
    import pygame

    from .enemies import EnemyMace


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in screen coordinates."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def intersects(self, other: Rect) -> bool:
        """True when the two rectangles overlap with a non-empty area."""
        return max(self.left, other.left) < min(self.right, other.right) and max(
            self.top, other.top
        ) < min(self.bottom, other.bottom)

    def moved(self, dx: float, dy: float) -> Rect:
        """Return this rectangle shifted by ``(dx, dy)``."""
        return replace(self, left=self.left + dx, top=self.top + dy)


@dataclass
class Tile:
    """A tile in one grid row; ``left`` and ``top`` are where it was last drawn."""

    y: int
    left: float = 0.0
    top: float = 0.0

    def bounds(self) -> Rect:
        return Rect(self.left, self.top, TILE_SIZE, TILE_SIZE)


class TileManager:
    """Tiles stored column by column, keyed by grid x."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.tiles: dict[int, list[Tile]] = {}
        self.last_enemy_x = 0
        self._rng = rng if rng is not None else random.Random()

    def add_tile(self, x: int, y: int) -> None:
        self.tiles.setdefault(x, []).append(Tile(y))

    def _sorted_columns(self) -> Iterator[tuple[int, list[Tile]]]:
        for x in sorted(self.tiles):
            yield x, self.tiles[x]

    def draw(self, surface: pygame.Surface, game_position: float, image: pygame.Surface) -> None:
        """Place and blit every tile in the columns near the visible area."""
        for x, column in self._sorted_columns():
            screen_x = x * TILE_SIZE
            if game_position - TILE_SIZE < screen_x < game_position + WIDTH + TILE_SIZE:
                for tile in column:
                    tile.left = screen_x - game_position
                    tile.top = float(HEIGHT - (tile.y + 1) * TILE_SIZE)
                    surface.blit(image, (tile.left, tile.top))

    def reset_positions(self) -> None:
        for column in self.tiles.values():
            for tile in column:
                tile.left = 0.0
                tile.top = 0.0

    def clear_column(self, x: int) -> None:
        self.tiles.pop(x, None)

    def is_tile(self, x: int, y: int) -> bool:
        return any(tile.y == y for tile in self.tiles.get(x, ()))

    def columns(self) -> Iterator[tuple[int, tuple[int, ...]]]:
        """Yield ``(x, rows)`` for each column in increasing x order."""
        for x, column in self._sorted_columns():
            yield x, tuple(tile.y for tile in column)

    def last_column(self) -> int:
        """Return the largest column x; raises LookupError when empty."""
        if not self.tiles:
            raise LookupError("no tiles loaded")
        return max(self.tiles)

    def check_collision(self, bounds: Rect) -> bool:
        return any(
            bounds.intersects(tile.bounds())
            for column in self.tiles.values()
            for tile in column
        )

    def generate_next_x(self, x: int, path_finding, enemies: EnemyMace) -> None:
        """Fill column ``x`` with random tiles, or place a mace there.

        ``path_finding`` supplies ``last_reachable_positions`` and
        ``last_reachable_jump()``.
        """
        self.clear_column(x)

        min_last_y = min(
            [10] + [jump for _, _, jump in path_finding.last_reachable_positions]
        )

        if enemies.is_enemy_prev(x):
            self.add_tile(x, PLACEHOLDER_ROW)
            return

        if (
            self._rng.randrange(20) == 0
            and min_last_y < 7
            and abs(x - self.last_enemy_x) > 3
            and path_finding.last_reachable_jump() == 0
        ):
            enemies.add(x)
            self.last_enemy_x = x
            self.clear_column(x + 1)
            self.add_tile(x, PLACEHOLDER_ROW)
            return

        for row in range(GENERATED_ROWS):
            if self._rng.randrange(2) == 0:
                self.add_tile(x, row)

    def clear_level(self) -> None:
        self.tiles.clear()
        self.last_enemy_x = 0