"""Loading of the textures and fonts the game draws with."""

from __future__ import annotations

from pathlib import Path

import pygame

_TEXTURE_FILES = {
    "character": "character.png",
    "grass": "grass.png",
    "dirt": "dirt.png",
    "mace": "mace.png",
    "background": "Background.png",
    "fog": "fog.png",
}

_FONT_FILES = {
    "oswald": "oswald.ttf",
}


class Assets:
    """A registry of loaded textures and font files, looked up by name."""

    def __init__(self) -> None:
        self._textures: dict[str, pygame.Surface] = {}
        self._fonts: dict[str, Path] = {}

    def load(self, directory: str | Path) -> None:
        """Load every texture and font from ``directory``.

        Raises RuntimeError naming the first file that cannot be loaded.
        """
        base = Path(directory)
        textures: dict[str, pygame.Surface] = {}
        for name, filename in _TEXTURE_FILES.items():
            try:
                textures[name] = pygame.image.load(str(base / filename))
            except (pygame.error, OSError) as exc:
                raise RuntimeError(f"Failed to load {filename}") from exc

        if not pygame.font.get_init():
            pygame.font.init()
        fonts: dict[str, Path] = {}
        for name, filename in _FONT_FILES.items():
            path = base / filename
            try:
                pygame.font.Font(str(path), 12)
            except (pygame.error, OSError) as exc:
                raise RuntimeError(f"Failed to load {filename}") from exc
            fonts[name] = path

        self._textures.update(textures)
        self._fonts.update(fonts)

    def texture(self, name: str) -> pygame.Surface:
        """Return the texture registered under ``name``."""
        try:
            return self._textures[name]
        except KeyError:
            raise KeyError(f"Texture not found: {name}") from None

    def font(self, name: str) -> Path:
        """Return the path of the font file registered under ``name``."""
        try:
            return self._fonts[name]
        except KeyError:
            raise KeyError(f"Font not found: {name}") from None