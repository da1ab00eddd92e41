import random

import pygame
import pytest

from runbound.constants import HEIGHT, TILE_SIZE, WIDTH
from runbound.game import Game, main


def _write_level(directory, tiles, enemies=()):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "tiles.txt").write_text("".join(f"{x} {y}\n" for x, y in tiles))
    (directory / "enemies.txt").write_text("".join(f"{x}\n" for x in enemies))
    return directory


@pytest.fixture
def game(tmp_path):
    start = _write_level(tmp_path / "start", [(x, 0) for x in range(0, 51)] + [(50, 2)])
    return Game(
        rng=random.Random(7),
        levels_root=tmp_path / "levels",
        start_level=start,
    )


def test_constructor_loads_start_level(game):
    assert game.tile_manager.is_tile(50, 2)
    assert game.tile_manager.last_column() == 50
    assert game.is_menu is True


def test_missing_start_level_is_reported(tmp_path, capsys):
    game = Game(levels_root=tmp_path / "levels", start_level=tmp_path / "absent")
    assert game.tile_manager.tiles == {}
    assert "Level loading failed" in capsys.readouterr().err


def test_space_starts_game(game):
    game.score = 12
    game.fog_position = 100.0
    game.handle_menu_key(pygame.K_SPACE)
    assert game.is_menu is False
    assert game.score == 0
    assert game.fog_position == 0.0


def test_h_toggles_debug(game):
    game.handle_menu_key(pygame.K_h)
    assert game.debug is True
    game.handle_menu_key(pygame.K_h)
    assert game.debug is False


def test_l_toggles_saves_and_refreshes(game, tmp_path):
    _write_level(tmp_path / "levels" / "beta", [(1, 1)])
    _write_level(tmp_path / "levels" / "alpha", [(2, 2)])
    game.handle_menu_key(pygame.K_l)
    assert game.showing_saves is True
    assert game.level_saves == ["alpha", "beta"]
    assert game.save_selected == 0


def test_up_and_down_wrap(game, tmp_path):
    for name in ("a", "b", "c"):
        _write_level(tmp_path / "levels" / name, [(1, 1)])
    game.handle_menu_key(pygame.K_l)
    game.handle_menu_key(pygame.K_UP)
    assert game.save_selected == len(game.level_saves) - 1
    game.handle_menu_key(pygame.K_DOWN)
    assert game.save_selected == 0


def test_enter_loads_selected_save(game, tmp_path):
    _write_level(tmp_path / "levels" / "only", [(3, 4)], enemies=[9])
    game.handle_menu_key(pygame.K_l)
    game.handle_menu_key(pygame.K_RETURN)
    assert game.showing_saves is False
    assert game.tile_manager.is_tile(3, 4)
    assert not game.tile_manager.is_tile(50, 2)
    assert game.enemies.positions() == [9]


def test_enter_after_game_over_starts_typing(game):
    game.is_game_over = True
    game.handle_menu_key(pygame.K_RETURN)
    assert game.is_typing is True


def test_text_input_keeps_letters_and_backspace(game):
    game.is_typing = True
    game.handle_text_input(pygame.event.Event(pygame.TEXTINPUT, text="ab1C"))
    assert game.input == "abC"
    game.handle_text_input(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_BACKSPACE))
    assert game.input == "ab"
    game.handle_text_input(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    assert game.is_typing is False


def test_enter_while_typing_saves_level(game, tmp_path):
    game.is_typing = True
    game.handle_text_input(pygame.event.Event(pygame.TEXTINPUT, text="mine"))
    game.handle_text_input(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN))
    assert game.is_typing is False
    assert game.level_saves == ["mine"]
    saved = (tmp_path / "levels" / "mine" / "tiles.txt").read_text().splitlines()
    assert "50 2" in saved


def test_process_front_x_generates_reachable_column(game):
    game.x_to_process.add(51)
    for _ in range(200):
        if not game.x_to_process:
            break
        game.process_front_x()
    assert game.x_to_process == set()
    assert 51 in game.tile_manager.tiles
    assert all(x == 51 for x, _, _ in game.path_finding.last_reachable_positions)


def test_falling_off_screen_ends_game(game):
    game.reset()
    game.player.set_position(WIDTH / 2, HEIGHT + 200)
    game.update(0.0)
    assert game.is_game_over is True
    assert game.is_menu is True


def test_fog_catching_player_ends_game(game):
    game.reset()
    game.fog_position = 10 * WIDTH
    game.update(0.0)
    assert game.is_game_over is True
    assert game.fog_speed > 3.0


def test_update_queues_frontier_column(game):
    game.reset()
    game.update(0.0)
    assert game.is_game_over is False
    assert 51 in game.x_to_process


def test_update_drops_mace_in_player_column(game):
    game.reset()
    column = game.player.grid_position(game.game_position)[0]
    game.enemies.add(column)
    game.update(0.0)
    assert game.enemies.enemies[column][0].falling is True


def test_score_grows_with_distance_and_reset_clears_it(game):
    game.reset()
    game.game_position = 10 * TILE_SIZE
    game.update(0.0)
    assert game.score >= 10
    game.reset()
    assert game.score == 0
    assert game.game_position == 0.0


def test_render_without_display_raises(game):
    with pytest.raises(RuntimeError):
        game.render()


def test_main_reports_missing_assets(tmp_path, capsys):
    assert main(["--assets", str(tmp_path / "nothing")]) == 0
    assert "Exception: Failed to load character.png" in capsys.readouterr().err