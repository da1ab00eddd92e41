"""Falling maces that drop when the player walks under them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import ENEMY_SPEED, HEIGHT, MACE_SIZE, SPEED_MULTIPLIER, TILE_SIZE
from .tiles import Rect

if TYPE_CHECKING:
    import pygame


@dataclass
class Enemy:
    """A mace; ``left`` and ``top`` are where it was last drawn."""

    y: float = 0.0
    falling: bool = False
    left: float = 0.0
    top: float = 0.0

    def bounds(self) -> Rect:
        return Rect(self.left, self.top, MACE_SIZE, MACE_SIZE)


class EnemyMace:
    """All maces in the level, keyed by grid column."""

    def __init__(self) -> None:
        self.enemies: dict[int, list[Enemy]] = {}

    def _all(self):
        for x in sorted(self.enemies):
            for enemy in self.enemies[x]:
                yield x, enemy

    def add(self, x: int) -> None:
        self.enemies.setdefault(x, []).append(Enemy())

    def update(self, delta_time: float) -> None:
        for _, enemy in self._all():
            if enemy.falling:
                enemy.y += ENEMY_SPEED * delta_time * SPEED_MULTIPLIER

    def draw(self, surface: pygame.Surface, game_position: float, image: pygame.Surface) -> None:
        """Place every mace and blit those still above the bottom edge."""
        for x, enemy in self._all():
            enemy.left = x * TILE_SIZE - game_position
            enemy.top = enemy.y
            if enemy.y < HEIGHT:
                surface.blit(image, (enemy.left, enemy.top))

    def reset_positions(self) -> None:
        for _, enemy in self._all():
            enemy.y = 0.0
            enemy.falling = False

    def check_enemies(self, player_x: int) -> None:
        """Start the maces in the player's column falling."""
        for enemy in self.enemies.get(player_x, ()):
            enemy.falling = True

    def check_collision(self, player_bounds: Rect) -> bool:
        return any(player_bounds.intersects(enemy.bounds()) for _, enemy in self._all())

    def is_enemy(self, x: int) -> bool:
        """True when a mace occupies column ``x`` (it is two columns wide)."""
        return x in self.enemies or (x - 1) in self.enemies

    def is_enemy_prev(self, x: int) -> bool:
        return (x - 1) in self.enemies

    def positions(self) -> list[int]:
        """Column of each mace, in increasing order, once per mace."""
        return [x for x, _ in self._all()]

    def clear(self) -> None:
        self.enemies.clear()