"""Breadth-first search that keeps every generated column reachable."""

from __future__ import annotations

from collections import deque
from itertools import pairwise
from typing import TYPE_CHECKING

import pygame

from .constants import HEIGHT, MAX_JUMP_HEIGHT, TILE_SIZE

if TYPE_CHECKING:
    from .enemies import EnemyMace
    from .player import Player
    from .tiles import TileManager

Point = tuple[int, int]

_START = (50, 3, 0)
_MOVES = ((1, 0), (-1, 0), (0, 1), (0, -1))
_DEBUG_RANGE = 6
_CIRCLE_RADIUS = 10
_RED = (255, 0, 0)
_BLUE = (0, 0, 255)
_WHITE = (255, 255, 255)


class PathFinding:
    """Tracks where the player can stand at the frontier of the level."""

    def __init__(self, tile_manager: TileManager, enemies: EnemyMace) -> None:
        self.tile_manager = tile_manager
        self.enemies = enemies
        self.last_reachable_positions: list[tuple[int, int, int]] = [_START]
        self.circles: list[list[int]] = []
        self.paths: dict[int, dict[int, tuple[Point, ...]]] = {}

    def _next_jump(self, x: int, y: int, dx: int, dy: int, jump: int) -> int:
        tiles = self.tile_manager
        if dy > 0:
            return jump + 1
        if tiles.is_tile(x + dx, y + dy - 1):
            return 0
        if dx != 0:
            return 0 if tiles.is_tile(x, y - 1) else jump + 1
        return jump

    def _record(self, found: list[list[int]], x: int, y: int, jump: int) -> None:
        for entry in found:
            if entry[0] == x and entry[1] == y:
                if jump < entry[2]:
                    entry[2] = jump
                    for circle in self.circles:
                        circle[2] = jump
                return
        found.append([x, y, jump])
        self.circles.append([x, y, jump])

    def can_reach(self, reach_x: int) -> bool:
        """Search from every last reachable position to column ``reach_x``.

        On success the reachable positions in that column replace the
        previous ones and True is returned.
        """
        found: list[list[int]] = []

        for start_x, start_y, start_jump in self.last_reachable_positions:
            min_x = min(reach_x, start_x) - 5
            visited = {(start_x, start_y, 0)}
            queue = deque([(start_x, start_y, start_jump, ((start_x, start_y),))])

            while queue:
                x, y, jump, path = queue.popleft()

                if x == reach_x:
                    self.paths.setdefault(start_x, {}).setdefault(start_y, path)
                    self._record(found, x, y, jump)

                for dx, dy in _MOVES:
                    nx, ny = x + dx, y + dy
                    new_jump = self._next_jump(x, y, dx, dy, jump)

                    if nx < min_x or nx > reach_x or ny <= 0 or ny >= 10:
                        continue
                    if new_jump > MAX_JUMP_HEIGHT:
                        continue
                    if (nx, ny, new_jump) in visited:
                        continue
                    if not self.tile_manager.is_tile(nx, ny) and (
                        self.enemies.is_enemy(nx) or ny < 7
                    ):
                        visited.add((nx, ny, new_jump))
                        queue.append((nx, ny, new_jump, path + ((nx, ny),)))

        if found:
            self.last_reachable_positions = [tuple(entry) for entry in found]
            return True
        return False

    def last_reachable_jump(self) -> int:
        """Smallest jump height among the last reachable positions."""
        return min([1000] + [jump for _, _, jump in self.last_reachable_positions])

    def path_for(self, player_x: int, player_y: int) -> list[Point]:
        """The stored path from column ``player_x`` whose start row is closest to ``player_y``."""
        best: tuple[Point, ...] = ()
        best_distance = 1000
        for y, path in sorted(self.paths.get(player_x, {}).items()):
            distance = abs(y - player_y)
            if distance < best_distance:
                best_distance = distance
                best = path
        return list(best)

    @staticmethod
    def _tile_centre(x: int, y: int, game_position: float) -> tuple[float, float]:
        return (
            x * TILE_SIZE - game_position + TILE_SIZE / 2,
            HEIGHT - (y + 1) * TILE_SIZE + TILE_SIZE / 2,
        )

    def draw_debug(self, surface: pygame.Surface, game_position: float, player: Player, font) -> None:
        """Draw reachable markers near the player and the path from its column."""
        player_x, player_y = player.grid_position(game_position)
        for x, y, jump in self.circles:
            if abs(player_x - x) > _DEBUG_RANGE:
                continue
            cx, cy = self._tile_centre(x, y, game_position)
            left, top = cx - 5, cy - _CIRCLE_RADIUS
            pygame.draw.circle(
                surface, _RED, (left + _CIRCLE_RADIUS, top + _CIRCLE_RADIUS), _CIRCLE_RADIUS
            )
            surface.blit(font.render(str(jump), True, _WHITE), (left, top))

        path = self.path_for(player_x, player_y)
        for (x1, y1), (x2, y2) in pairwise(path):
            pygame.draw.line(
                surface,
                _BLUE,
                self._tile_centre(x1, y1, game_position),
                self._tile_centre(x2, y2, game_position),
                2,
            )