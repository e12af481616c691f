"""Drawing a level with pygame and running the game window."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

import pygame

from solong.game import Game
from solong.mapfile import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, MapError, load_map
from solong.xpm import XpmError, XpmImage, load_xpm

TILE_SIZE = 64
WINDOW_TITLE = "So Long"
ASSET_DIR = Path("assets")
FRAME_RATE = 60

TILE_FILES: dict[str, str] = {
    "wall": "wall.xpm",
    "player": "player.xpm",
    "collectible": "collectible.xpm",
    "exit": "exit.xpm",
    "floor": "floor.xpm",
}

_TILE_LAYERS: dict[str, tuple[str, ...]] = {
    WALL: ("wall",),
    FLOOR: ("floor",),
    COLLECTIBLE: ("collectible",),
    PLAYER: ("player",),
}

_SPECIAL_KEYSYMS: dict[int, int] = {
    pygame.K_ESCAPE: 65307,
    pygame.K_LEFT: 65361,
    pygame.K_UP: 65362,
    pygame.K_RIGHT: 65363,
    pygame.K_DOWN: 65364,
}


class DisplayError(RuntimeError):
    """Raised when the window or its images cannot be set up."""


def xpm_to_surface(image: XpmImage) -> pygame.Surface:
    """Turn a decoded XPM image into a surface with per-pixel alpha.

    The top byte of a pixel value counts as transparency: 0xFF is fully clear.
    """
    surface = pygame.Surface((image.width, image.height), pygame.SRCALPHA)
    for y, row in enumerate(image.pixels):
        for x, value in enumerate(row):
            alpha = 255 - ((value >> 24) & 0xFF)
            color = ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, alpha)
            surface.set_at((x, y), color)
    return surface


def load_tiles(asset_dir: str | Path) -> dict[str, pygame.Surface]:
    """Load the five tile images from ``asset_dir``, keyed by tile kind."""
    base = Path(asset_dir)
    tiles: dict[str, pygame.Surface] = {}
    for kind, filename in TILE_FILES.items():
        try:
            tiles[kind] = xpm_to_surface(load_xpm(base / filename))
        except XpmError as exc:
            raise DisplayError("Failed to load images") from exc
    return tiles


def tile_for(game: Game, x: int, y: int) -> tuple[str, ...]:
    """Return the tile kinds drawn at (x, y), bottom layer first."""
    tile = game.grid[y][x]
    if tile == EXIT:
        if (x, y) == (game.x, game.y):
            return ("exit", "player")
        return ("exit",)
    return _TILE_LAYERS.get(tile, ())


def draw_map(
    surface: pygame.Surface,
    game: Game,
    tiles: Mapping[str, pygame.Surface],
    tile_size: int = TILE_SIZE,
) -> None:
    """Draw every tile of the game grid onto ``surface``."""
    for y, row in enumerate(game.grid):
        for x in range(len(row)):
            for kind in tile_for(game, x, y):
                surface.blit(tiles[kind], (x * tile_size, y * tile_size))


def check_screen_size(
    game: Game, tile_size: int, screen_size: Sequence[int]
) -> tuple[int, int]:
    """Return the window size for the level, or raise if it exceeds the screen."""
    width = game.width * tile_size
    height = game.height * tile_size
    screen_width, screen_height = screen_size
    if width > screen_width or height > screen_height:
        raise DisplayError("Map is too large for the screen")
    return width, height


def keysym_for(key: int) -> int | None:
    """Map a pygame key code to the X keysym the game understands, if any."""
    special = _SPECIAL_KEYSYMS.get(key)
    if special is not None:
        return special
    if 32 <= key < 127:
        return key
    return None


def _run(game: Game, asset_dir: Path) -> int:
    info = pygame.display.Info()
    size = check_screen_size(game, TILE_SIZE, (info.current_w, info.current_h))
    try:
        screen = pygame.display.set_mode(size)
    except pygame.error as exc:
        raise DisplayError("Failed to create window") from exc
    pygame.display.set_caption(WINDOW_TITLE)
    tiles = load_tiles(asset_dir)
    clock = pygame.time.Clock()
    draw_map(screen, game, tiles, TILE_SIZE)
    pygame.display.flip()
    while not game.finished:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                game.closed = True
            elif event.type == pygame.KEYDOWN:
                keysym = keysym_for(event.key)
                if keysym is not None:
                    game.handle_key(keysym)
        draw_map(screen, game, tiles, TILE_SIZE)
        pygame.display.flip()
        clock.tick(FRAME_RATE)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Play the level named on the command line; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Error: Not enough argument", file=sys.stderr)
        return 1
    try:
        game_map = load_map(args[0])
    except MapError as exc:
        print("Error", file=sys.stderr)
        print(exc, file=sys.stderr)
        return 1
    game = Game(game_map)
    pygame.init()
    try:
        return _run(game, ASSET_DIR)
    except DisplayError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())