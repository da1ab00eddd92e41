import shutil
from pathlib import Path

import pygame
import pytest

from runbound.assets import Assets

TEXTURE_FILES = [
    "character.png",
    "grass.png",
    "dirt.png",
    "mace.png",
    "Background.png",
    "fog.png",
]


def _default_font_path() -> Path:
    return Path(pygame.__file__).parent / pygame.font.get_default_font()


def _write_assets(directory: Path, skip=()):
    for index, filename in enumerate(TEXTURE_FILES):
        if filename in skip:
            continue
        surface = pygame.Surface((4 + index, 6 + index))
        surface.fill((10 * index, 20, 30))
        pygame.image.save(surface, str(directory / filename))
    if "oswald.ttf" not in skip:
        shutil.copyfile(_default_font_path(), directory / "oswald.ttf")


def test_load_registers_textures_by_name(tmp_path):
    _write_assets(tmp_path)
    assets = Assets()
    assets.load(tmp_path)
    assert assets.texture("character").get_size() == (4, 6)
    assert assets.texture("grass").get_size() == (5, 7)
    assert assets.texture("background").get_size() == (8, 10)
    assert assets.texture("fog").get_size() == (9, 11)


def test_load_registers_font_path(tmp_path):
    _write_assets(tmp_path)
    assets = Assets()
    assets.load(tmp_path)
    path = assets.font("oswald")
    assert path == tmp_path / "oswald.ttf"
    assert path.read_bytes() == _default_font_path().read_bytes()


def test_missing_texture_file_names_it(tmp_path):
    _write_assets(tmp_path, skip={"grass.png"})
    with pytest.raises(RuntimeError, match="Failed to load grass.png"):
        Assets().load(tmp_path)


def test_missing_font_file_names_it(tmp_path):
    _write_assets(tmp_path, skip={"oswald.ttf"})
    with pytest.raises(RuntimeError, match="Failed to load oswald.ttf"):
        Assets().load(tmp_path)


def test_failed_load_registers_nothing(tmp_path):
    _write_assets(tmp_path, skip={"fog.png"})
    assets = Assets()
    with pytest.raises(RuntimeError):
        assets.load(tmp_path)
    with pytest.raises(KeyError):
        assets.texture("character")


def test_unknown_texture_raises_key_error():
    with pytest.raises(KeyError, match="Texture not found: stone"):
        Assets().texture("stone")


def test_unknown_font_raises_key_error():
    with pytest.raises(KeyError, match="Font not found: arial"):
        Assets().font("arial")