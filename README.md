# solong

A small top-down puzzle game. You move a player around a walled map,
pick up every collectible, and then walk onto the exit. Each move that
is taken is counted and printed as `Moves: <n>`; reaching the exit with
every collectible gathered prints `GG! You've completed the level` and
ends the game.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Playing

```
solong path/to/level.ber
```

The command takes exactly one argument, a map file whose name ends in
`.ber`. Tile images are read from XPM files in an `assets` directory in
the current working directory: `wall.xpm`, `player.xpm`,
`collectible.xpm`, `exit.xpm` and `floor.xpm`. Each map tile is drawn
as a 64×64 pixel square, and the window takes the title "So Long".

Controls:

| Key               | Action     |
|-------------------|------------|
| `W` / Up arrow    | move up    |
| `S` / Down arrow  | move down  |
| `A` / Left arrow  | move left  |
| `D` / Right arrow | move right |
| Escape            | quit       |

Closing the window also quits. On any error the command prints a
message to standard error and exits with status 1.

## Map format

A map is a text file of equal-length lines made of these characters:

- `1` wall
- `0` floor
- `C` collectible (at least one)
- `E` exit (exactly one)
- `P` player start (exactly one)

A map is rejected when:

- the file does not exist or its name does not end in `.ber`
  ("Invalid files");
- it is empty or holds a blank line ("Invalid map");
- its lines differ in length or it has fewer than 15 tiles in all
  ("Map is not rectangular");
- any border tile is not a wall ("Invalid walls");
- it holds an unknown character, or the player, exit or collectible
  counts are wrong ("Invalid Elements");
- some collectible or the exit cannot be reached from the player's start
  ("Invalid map").

The window must also fit on the screen ("Map is too large for the
screen").

```
1111111111
1P0C00E001
1111111111
```

## Using it as a library

- `solong.mapfile.load_map(path)` reads and validates a map, returning a
  frozen `GameMap` (`rows`, `player`, `exit_pos`, `collectibles`, plus
  `width`, `height` and `tile(x, y)`) or raising `MapError` with the
  reason. The individual checks are available too: `check_extension`,
  `read_map_lines`, `check_rectangular`, `check_walls`,
  `count_elements` and `flood_fill`.
- `solong.game.Game(game_map)` holds the play state: a mutable `grid`,
  the player position `x`/`y`, the remaining `collectibles`, `moves`,
  and the `won`, `closed` and `finished` flags. `Game.move(dx, dy)`
  returns whether the move was taken, `Game.is_valid_move(x, y)` tells
  whether a square can be entered, and `Game.handle_key(keycode)` takes
  X keysyms (Escape, `w`/`a`/`s`/`d` and the arrow keys). Messages go to
  the `output` callable, `print` by default.
- `solong.xpm.load_xpm(path)` and `solong.xpm.parse_xpm_text(text)` read
  XPM images into an `XpmImage` (`width`, `height`, `pixels`,
  `pixel(x, y)`, `to_bytes(bytes_per_pixel, big_endian)`), raising
  `XpmError` on bad input. `parse_xpm(lines)` takes the string values
  directly. Only the `c` colour key is used; colours may be `#` hex
  values or names, and `None` becomes the transparent value
  `0xFF000000`.
- `solong.colors.lookup_color(name)` resolves X11 colour names
  case-insensitively (`"none"` gives -1, unknown names `None`), and
  `solong.colors.text_to_rgb(name, end)` parses an XPM colour spec.
- `solong.visual.channel_shifts(red_mask, green_mask, blue_mask)` and
  `solong.visual.convert_color(color, depth, shifts)` pack a 0xRRGGBB
  colour into the pixel layout of a display of the given depth.
- `solong.display` holds the pygame side: `xpm_to_surface`,
  `load_tiles`, `tile_for`, `draw_map`, `check_screen_size`,
  `keysym_for` and the `main` entry point, raising `DisplayError` when
  the window or images cannot be set up.

## What it does not do

The package ships no tile images; the five XPM files must be supplied
in `assets`. There is a single level per run and no saving of progress
or scores.