"""The player character: input, gravity and tile collisions."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import pygame

from .constants import (
    GRAVITY,
    HEIGHT,
    JUMP_FORCE,
    MOVE_SPEED,
    SPEED_MULTIPLIER,
    TILE_SIZE,
    WIDTH,
)
from .tiles import Rect

if TYPE_CHECKING:
    from .tiles import TileManager

CHARACTER_WIDTH = 168
CHARACTER_HEIGHT = 210
PLAYER_SCALE = 0.2

START_X = WIDTH / 2
START_Y = HEIGHT - 2 * TILE_SIZE


def _round_half_away(value: float) -> int:
    magnitude = math.floor(abs(value) + 0.5)
    return magnitude if value >= 0 else -magnitude


class Player:
    """The runner; ``x`` and ``y`` are the centre of its sprite on screen."""

    def __init__(self) -> None:
        self.x = float(START_X)
        self.y = float(START_Y)
        self.facing_right = True
        self.vertical_speed = 0.0
        self.in_air = False
        self.moving_left = False
        self.moving_right = False

    def bounds(self) -> Rect:
        width = CHARACTER_WIDTH * PLAYER_SCALE
        height = CHARACTER_HEIGHT * PLAYER_SCALE
        return Rect(self.x - width / 2, self.y - height / 2, width, height)

    def update(self, delta_time: float, tile_manager: TileManager, game_position: float) -> float:
        """Advance one frame and return the new game position."""
        self.apply_gravity()

        dx = 0.0
        if self.moving_left:
            dx -= MOVE_SPEED
        if self.moving_right:
            dx += MOVE_SPEED

        if dx < 0 and self.facing_right:
            self.facing_right = False
        elif dx > 0 and not self.facing_right:
            self.facing_right = True

        factor = delta_time * SPEED_MULTIPLIER
        dx *= factor
        dy = self.vertical_speed * factor

        bounds = self.bounds()
        collision = tile_manager.check_collision(bounds.moved(dx, dy))
        collision_x = collision and tile_manager.check_collision(bounds.moved(dx, 0))
        collision_y = collision and tile_manager.check_collision(bounds.moved(0, dy))
        if collision and not collision_x and not collision_y:
            collision_x = collision_y = True

        if collision_y:
            self.vertical_speed = 0.0
            if dy > 0:
                self.in_air = False

        if not collision_x:
            game_position += dx
        game_position = max(game_position, 0.0)

        if not collision_y:
            self.y += dy
        return game_position

    def draw(self, surface: pygame.Surface, image: pygame.Surface) -> None:
        box = self.bounds()
        sprite = pygame.transform.scale(image, (round(box.width), round(box.height)))
        if not self.facing_right:
            sprite = pygame.transform.flip(sprite, True, False)
        surface.blit(sprite, (box.left, box.top))

    def move_left(self, enable: bool) -> None:
        self.moving_left = enable

    def move_right(self, enable: bool) -> None:
        self.moving_right = enable

    def jump(self) -> None:
        if not self.in_air:
            self.vertical_speed = -JUMP_FORCE
            self.in_air = True

    def apply_gravity(self) -> None:
        self.vertical_speed += GRAVITY

    def stop_vertical(self) -> None:
        self.vertical_speed = 0.0
        self.in_air = False

    def set_position(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def grid_position(self, game_position: float) -> tuple[int, int]:
        """The grid column and row the player stands in."""
        return (
            _round_half_away(game_position / TILE_SIZE) + 8 - 1,
            _round_half_away((HEIGHT - self.y) / TILE_SIZE),
        )

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_a:
                self.moving_left = True
            if event.key == pygame.K_d:
                self.moving_right = True
            if event.key == pygame.K_w:
                self.jump()
        elif event.type == pygame.KEYUP:
            if event.key == pygame.K_a:
                self.moving_left = False
            if event.key == pygame.K_d:
                self.moving_right = False

    def reset(self) -> None:
        self.set_position(START_X, START_Y)
        self.moving_left = False
        self.moving_right = False
        self.vertical_speed = 0.0