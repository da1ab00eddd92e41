import pygame
import pytest

from runbound.constants import MAX_JUMP_HEIGHT, TILE_SIZE
from runbound.enemies import EnemyMace
from runbound.pathfinding import PathFinding
from runbound.player import Player
from runbound.tiles import TileManager


@pytest.fixture
def world():
    tiles = TileManager()
    enemies = EnemyMace()
    return tiles, enemies, PathFinding(tiles, enemies)


def _ground(tiles):
    tiles.add_tile(50, 2)
    tiles.add_tile(51, 2)


class _Font:
    def render(self, text, antialias, color):
        return pygame.Surface((1, 1))


def test_initial_state(world):
    _, _, pf = world
    assert pf.last_reachable_positions == [(50, 3, 0)]
    assert pf.last_reachable_jump() == 0
    assert pf.path_for(50, 3) == []


def test_empty_level_is_reachable(world):
    _, _, pf = world
    assert pf.can_reach(51) is True
    positions = pf.last_reachable_positions
    assert positions
    for x, y, jump in positions:
        assert x == 51
        assert 1 <= y < 7
        assert 0 <= jump <= MAX_JUMP_HEIGHT
    assert len({(x, y) for x, y, _ in positions}) == len(positions)


def test_empty_level_needs_a_jump(world):
    _, _, pf = world
    pf.can_reach(51)
    assert pf.last_reachable_jump() == 1


def test_full_column_blocks(world):
    tiles, _, pf = world
    for row in range(10):
        tiles.add_tile(51, row)
    assert pf.can_reach(51) is False
    assert pf.last_reachable_positions == [(50, 3, 0)]


def test_ground_resets_jump(world):
    tiles, _, pf = world
    _ground(tiles)
    assert pf.can_reach(51)
    assert (51, 3, 0) in pf.last_reachable_positions
    assert pf.last_reachable_jump() == 0


def test_path_is_connected(world):
    tiles, _, pf = world
    _ground(tiles)
    pf.can_reach(51)
    path = pf.path_for(50, 3)
    assert path[0] == (50, 3)
    assert path[-1][0] == 51
    for (x1, y1), (x2, y2) in zip(path, path[1:]):
        assert abs(x1 - x2) + abs(y1 - y2) == 1


def test_path_for_picks_only_start_row(world):
    tiles, _, pf = world
    _ground(tiles)
    pf.can_reach(51)
    assert pf.path_for(50, 9) == pf.path_for(50, 3)
    assert pf.path_for(49, 3) == []


def test_high_rows_need_enemy_column(world):
    _, _, pf = world
    pf.last_reachable_positions = [(50, 8, 0)]
    assert pf.can_reach(51) is False


def test_enemy_column_opens_high_rows(world):
    _, enemies, pf = world
    enemies.add(51)
    pf.last_reachable_positions = [(50, 8, 0)]
    assert pf.can_reach(51) is True
    assert (51, 8, 1) in pf.last_reachable_positions
    assert any(y >= 7 for _, y, _ in pf.last_reachable_positions)


def test_circles_track_found_positions(world):
    tiles, _, pf = world
    _ground(tiles)
    pf.can_reach(51)
    assert {(x, y) for x, y, _ in pf.circles} == {
        (x, y) for x, y, _ in pf.last_reachable_positions
    }


def test_draw_debug_draws_path_and_markers(world):
    tiles, _, pf = world
    _ground(tiles)
    pf.can_reach(51)
    surface = pygame.Surface((960, 640))
    game_position = 43 * TILE_SIZE
    pf.draw_debug(surface, game_position, Player(), _Font())
    assert tuple(surface.get_at((510, 416)))[:3] == (0, 0, 255)
    assert tuple(surface.get_at((549, 416)))[:3] == (255, 0, 0)