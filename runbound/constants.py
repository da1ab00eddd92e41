"""Screen, grid and physics constants shared by the game."""

WIDTH = 960
HEIGHT = 640
TILE_SIZE = 64

MOVE_SPEED = 6.0
GRAVITY = 0.5
JUMP_FORCE = 15.0
SPEED_MULTIPLIER = 50.0
ENEMY_SPEED = 5.0

MAX_JUMP_HEIGHT = 2

# Side length, in pixels, of the mace texture, which is drawn unscaled.
MACE_SIZE = 128
# Side length, in pixels, of the tile textures before scaling to TILE_SIZE.
TILE_TEXTURE_SIZE = 128

# Lowest tile row that the generator uses as a column placeholder.
PLACEHOLDER_ROW = 11
# Number of rows the generator fills with random tiles.
GENERATED_ROWS = 10