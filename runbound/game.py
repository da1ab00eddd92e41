"""The game loop: menu, level saves, world generation and drawing."""

from __future__ import annotations

import argparse
import math
import random
import string
import sys
from pathlib import Path

import pygame

from .assets import Assets
from .constants import HEIGHT, SPEED_MULTIPLIER, TILE_SIZE, WIDTH
from .enemies import EnemyMace
from .levels import DEFAULT_ROOT, LevelError, level_saves, load_level, save_level
from .pathfinding import PathFinding
from .player import Player
from .tiles import TileManager

START_LEVEL = Path("assets") / "start"
FRAME_RATE = 60
START_FOG_SPEED = 3.0
FOG_ACCELERATION = 1.0001
FRONTIER_MARGIN = 12

_BLACK = (0, 0, 0)
_WHITE = (255, 255, 255)
_RED = (255, 0, 0)
_BLUE = (0, 0, 255)
_FOG_COLOUR = (255, 100, 100, 200)
_DEFAULT_TEXT_SIZE = 30


class Game:
    """State of one game session, from the menu to the running level."""

    def __init__(
        self,
        assets: Assets | None = None,
        *,
        rng: random.Random | None = None,
        levels_root: str | Path = DEFAULT_ROOT,
        start_level: str | Path = START_LEVEL,
    ) -> None:
        self.assets = assets
        self.levels_root = Path(levels_root)
        self.tile_manager = TileManager(rng)
        self.enemies = EnemyMace()
        self.path_finding = PathFinding(self.tile_manager, self.enemies)
        self.player = Player()

        self.is_game_over = False
        self.is_menu = True
        self.debug = False
        self.showing_saves = False
        self.is_typing = False

        self.level_saves: list[str] = []
        self.save_selected = 0
        self.input = ""

        self.game_position = 0.0
        self.fog_position = 0.0
        self.fog_speed = START_FOG_SPEED
        self.score = 0

        self.x_to_process: set[int] = set()

        self.surface: pygame.Surface | None = None
        self._images: dict[str, pygame.Surface] = {}
        self._fonts: dict[int, pygame.font.Font] = {}
        self._running = False

        try:
            load_level(start_level, self.tile_manager, self.enemies)
        except LevelError as exc:
            print(f"Level loading failed: {exc}", file=sys.stderr)

        self._refresh_saves()

    # ----------------------------------------------------------------- input

    def _refresh_saves(self) -> None:
        self.level_saves = level_saves(self.levels_root)
        self.save_selected = 0

    def handle_menu_key(self, key: int) -> None:
        """React to a key pressed while the menu is shown."""
        if key == pygame.K_SPACE:
            self.reset()
        if key == pygame.K_h:
            self.debug = not self.debug
        if key == pygame.K_l:
            self.showing_saves = not self.showing_saves
            self._refresh_saves()
        if key == pygame.K_RETURN and self.showing_saves and self.level_saves:
            chosen = self.levels_root / self.level_saves[self.save_selected]
            load_level(chosen, self.tile_manager, self.enemies)
            self.showing_saves = False
        if key == pygame.K_RETURN and not self.showing_saves and self.is_game_over:
            self.is_typing = True
        if key == pygame.K_DOWN and self.level_saves:
            self.save_selected = (self.save_selected + 1) % len(self.level_saves)
        if key == pygame.K_UP and self.level_saves:
            self.save_selected = (self.save_selected - 1) % len(self.level_saves)

    def handle_text_input(self, event: pygame.event.Event) -> None:
        """Edit the save name, save on Enter, cancel on Escape."""
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.is_typing = False
            if event.key == pygame.K_RETURN:
                try:
                    save_level(self.input, self.tile_manager, self.enemies, self.levels_root)
                except LevelError as exc:
                    print(exc, file=sys.stderr)
                else:
                    self._refresh_saves()
                    self.is_typing = False
            if event.key == pygame.K_BACKSPACE and self.input:
                self.input = self.input[:-1]
        elif event.type == pygame.TEXTINPUT:
            self.input += "".join(ch for ch in event.text if ch in string.ascii_letters)

    def _poll_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            if not self.is_menu:
                self.player.handle_event(event)
            elif self.is_typing:
                self.handle_text_input(event)
            elif event.type == pygame.KEYDOWN:
                self.handle_menu_key(event.key)

    # ----------------------------------------------------------------- logic

    def process_front_x(self) -> None:
        """Generate the next pending column until the path finder can reach it."""
        if not self.x_to_process:
            return
        x = min(self.x_to_process)
        self.tile_manager.generate_next_x(x, self.path_finding, self.enemies)
        if self.path_finding.can_reach(x):
            self.x_to_process.discard(x)

    def _game_over(self) -> None:
        self.is_game_over = True
        self.is_menu = True

    def update(self, delta_time: float) -> None:
        """Advance the running game by ``delta_time`` seconds."""
        self.process_front_x()
        self.game_position = self.player.update(delta_time, self.tile_manager, self.game_position)

        if self.enemies.check_collision(self.player.bounds()):
            self._game_over()
            return

        if self.player.y > HEIGHT + 100:
            self._game_over()
            return

        self.fog_speed *= FOG_ACCELERATION
        self.fog_position += self.fog_speed * delta_time * SPEED_MULTIPLIER

        if self.game_position + WIDTH / 2 < self.fog_position:
            self._game_over()

        self.enemies.check_enemies(self.player.grid_position(self.game_position)[0])
        self.enemies.update(delta_time)

        if self.tile_manager.tiles:
            last_x = self.tile_manager.last_column()
            if self.game_position / TILE_SIZE > last_x - FRONTIER_MARGIN:
                self.x_to_process.add(last_x + 1)

        self.score = int(
            max(float(self.score), self.game_position / TILE_SIZE * self.fog_speed)
        )

    def reset(self) -> None:
        """Start a new run on the current level."""
        self.is_menu = False
        self.is_game_over = False
        self.game_position = 0.0
        self.fog_position = 0.0
        self.fog_speed = START_FOG_SPEED

        self.tile_manager.reset_positions()
        self.enemies.reset_positions()
        self.player.reset()

        self.score = 0

    # --------------------------------------------------------------- drawing

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            if self.assets is None:
                raise RuntimeError("no assets loaded")
            self._fonts[size] = pygame.font.Font(str(self.assets.font("oswald")), size)
        return self._fonts[size]

    def _text(self, text: str, size: int, colour) -> pygame.Surface:
        return self._font(size).render(text, True, colour)

    def _blit_lines(self, lines: list[str], size: int, colour, centre_x: float, top: float) -> None:
        for line in lines:
            rendered = self._text(line, size, colour)
            self._require_surface().blit(rendered, (centre_x - rendered.get_width() / 2, top))
            top += rendered.get_height()

    def _lines_height(self, lines: list[str], size: int) -> int:
        return sum(self._font(size).size(line)[1] for line in lines)

    def _require_surface(self) -> pygame.Surface:
        if self.surface is None:
            raise RuntimeError("no display surface")
        return self.surface

    def _prepare_images(self) -> None:
        if self.assets is None:
            raise RuntimeError("no assets loaded")
        self._images = {
            "grass": pygame.transform.scale(self.assets.texture("grass"), (TILE_SIZE, TILE_SIZE)),
            "background": pygame.transform.scale(
                self.assets.texture("background"), (WIDTH, HEIGHT)
            ),
            "mace": self.assets.texture("mace"),
            "character": self.assets.texture("character"),
        }

    def _draw_background(self) -> None:
        surface = self._require_surface()
        position = -self.game_position / 5
        adjusted = position - math.floor(position / WIDTH) * WIDTH
        image = self._images["background"]
        surface.blit(image, (adjusted, 0))
        surface.blit(image, (adjusted - WIDTH, 0))

    def _draw_fog(self) -> None:
        width = self.fog_position - self.game_position
        if width <= 0:
            return
        fog = pygame.Surface((int(width), HEIGHT), pygame.SRCALPHA)
        fog.fill(_FOG_COLOUR)
        self._require_surface().blit(fog, (0, 0))

    def render(self) -> None:
        """Draw one frame of the running game."""
        surface = self._require_surface()
        surface.fill(_WHITE)
        self._draw_background()

        self.tile_manager.draw(surface, self.game_position, self._images["grass"])
        self.enemies.draw(surface, self.game_position, self._images["mace"])
        self.player.draw(surface, self._images["character"])

        self._draw_fog()

        if self.debug:
            player_x, player_y = self.player.grid_position(self.game_position)
            surface.blit(self._text(f"X: {player_x}, Y: {player_y}", 20, _BLACK), (10, 10))
            self.path_finding.draw_debug(surface, self.game_position, self.player, self._font(15))

        score = self._text(f"Score: {self.score}", 32, _WHITE)
        surface.blit(score, (WIDTH / 2 - score.get_width() / 2, 10))

    def _draw_menu(self) -> None:
        surface = self._require_surface()
        if self.is_typing:
            typed = self._text(self.input, 20, _BLACK)
            box_w, box_h = typed.get_width() + 50, typed.get_height() + 20
            pygame.draw.rect(
                surface, _WHITE, (WIDTH / 2 - box_w / 2, HEIGHT / 2 - box_h / 2, box_w, box_h)
            )
            surface.blit(
                typed,
                (WIDTH / 2 - typed.get_width() / 2, HEIGHT / 2 - typed.get_height() / 2),
            )
            label = self._text("Input SAVE name:", 30, _BLACK)
            surface.blit(
                label,
                (WIDTH / 2 - label.get_width() / 2, HEIGHT / 2 - label.get_height() / 2 - 150),
            )
            return

        menu = self._text("Press SPACE to start", 40, _BLACK)
        surface.blit(menu, (WIDTH / 2 - menu.get_width() / 2, 100))
        if self.is_game_over:
            surface.blit(self._text("GG", 32, _BLACK), (WIDTH / 2 - 30, 10))
            if not self.showing_saves:
                save = self._text("Press ENTER to save", 32, _BLUE)
                surface.blit(
                    save,
                    (WIDTH / 2 - save.get_width() / 2, HEIGHT / 2 - save.get_height() / 2),
                )

        debug_lines = [f"Debug mode: {'ON' if self.debug else 'OFF'}", "Press H to change"]
        self._blit_lines(
            debug_lines,
            20,
            _RED if self.debug else _BLACK,
            WIDTH / 2,
            HEIGHT - self._lines_height(debug_lines, 20),
        )

        saves_lines = [
            f"Showing saves: {'ON' if self.showing_saves else 'OFF'}",
            "Press L to change",
        ]
        self._blit_lines(
            saves_lines,
            26,
            _BLACK,
            WIDTH / 2,
            HEIGHT / 2 - self._lines_height(saves_lines, 26) / 2 - 100,
        )

        if self.showing_saves:
            for index, name in enumerate(self.level_saves):
                colour = _BLUE if index == self.save_selected else _BLACK
                option = self._text(f"{index + 1}. {name}", _DEFAULT_TEXT_SIZE, colour)
                surface.blit(
                    option,
                    (
                        WIDTH / 2 - option.get_width() / 2,
                        HEIGHT / 2 + (option.get_height() + 10) * index,
                    ),
                )

    def run(self) -> None:
        """Open the window and run until it is closed."""
        pygame.init()
        self.surface = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("RUN!")
        self._prepare_images()
        clock = pygame.time.Clock()
        self._running = True
        try:
            while self._running:
                delta_time = clock.tick(FRAME_RATE) / 1000.0
                self._poll_events()
                if not self._running:
                    break
                if self.is_menu:
                    self._require_surface().fill(_WHITE)
                    self._draw_background()
                    self._draw_menu()
                else:
                    self.update(delta_time)
                    self.render()
                pygame.display.flip()
        finally:
            pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Load the assets and play until the window is closed."""
    parser = argparse.ArgumentParser(prog="runbound", description="Side-scrolling runner.")
    parser.add_argument("--assets", default="assets", help="directory holding the game assets")
    parser.add_argument("--levels", default=DEFAULT_ROOT, help="directory of saved levels")
    args = parser.parse_args(argv)

    try:
        pygame.init()
        assets = Assets()
        assets.load(args.assets)
        game = Game(
            assets,
            levels_root=args.levels,
            start_level=Path(args.assets) / "start",
        )
        game.run()
    except Exception as exc:  # noqa: BLE001 - report any failure like the launcher does
        print(f"Exception: {exc}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())