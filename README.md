# runbound

A small side-scrolling runner built on pygame. You run right across a
grass-tiled world while a red fog follows you from the left and speeds up
over time. New columns of terrain are generated as you approach the end of
the level. Each new column is checked with a breadth-first search from the
cells that were reachable in the previous column; if it cannot be reached,
it is generated again on the next frame. Sometimes a mace is placed over a
column instead, and it drops when you step into that column.

## Installing

```
pip install .
```

The tests need the `test` extra:

```
pip install .[test]
pytest
```

## Assets

The game needs a directory of assets holding `character.png`, `grass.png`,
`dirt.png`, `mace.png`, `Background.png`, `fog.png` and the font
`oswald.ttf`. All of them must load, or the game stops with a message naming
the first file that failed. The opening level is read from the `start`
subdirectory of the assets directory, which holds `tiles.txt` and
`enemies.txt`. If it cannot be read, a message is printed and the game starts
with an empty level.

## Playing

```
runbound
```

Options:

- `--assets DIR` – directory holding the assets (default `assets`).
- `--levels DIR` – directory of saved levels (default `levels`).

Menu:

- **Space** starts a run.
- **H** switches debug mode on or off. In debug mode the player's grid
  position, the reachable cells found by the path search near the player
  (with their jump heights) and the stored path from the player's column are
  drawn.
- **L** shows or hides the list of saved levels. **Up** and **Down** choose
  one and **Enter** loads it.
- After a game over, **Enter** asks for a name and saves the current level
  under `<levels>/<name>/`. Only letters are accepted; **Backspace** deletes
  and **Escape** cancels.

In a run:

- **A** and **D** move left and right.
- **W** jumps.

The run ends when you fall more than 100 pixels below the bottom of the
screen, a mace hits you, or the fog catches up. The score is the largest
value reached of the distance covered (in tiles) times the current fog speed.

## Level files

A saved level is a directory with two text files. `tiles.txt` has one tile
per line, `x y`, in grid units with `y` counted from the bottom.
`enemies.txt` has the column `x` of one mace per line. Empty lines, lines
starting with `#` and lines that do not begin with the expected integers are
ignored.

## Using the modules

- `runbound.levels.load_level(directory, tile_manager, enemies)` replaces the
  level held by a `TileManager` and an `EnemyMace` with the one in
  `directory`; it raises `LevelError` when either file cannot be read.
- `runbound.levels.save_level(name, tile_manager, enemies, root)` writes the
  level to `root/name` and returns that directory.
- `runbound.levels.level_saves(root)` lists the saved level directories,
  sorted.
- `runbound.tiles.TileManager` holds tiles by column and generates new
  columns with `generate_next_x`; it accepts a `random.Random` for
  reproducible generation.
- `runbound.pathfinding.PathFinding.can_reach(x)` runs the reachability
  search to column `x`.
- `runbound.game.Game` holds a whole session; `Game.update` and
  `Game.handle_menu_key` can be driven without opening a window.

## What it does not do

There is no sound, no high-score storage and no configurable key bindings.
The window size and physics values are fixed in `runbound.constants`.