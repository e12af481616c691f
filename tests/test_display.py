import pygame
import pytest

from solong.display import (
    DisplayError,
    check_screen_size,
    draw_map,
    keysym_for,
    load_tiles,
    main,
    tile_for,
    xpm_to_surface,
)
from solong.game import Game
from solong.mapfile import GameMap
from solong.xpm import TRANSPARENT, XpmImage

XPM_TEXT = (
    "/* XPM */\n"
    "static char *img[] = {\n"
    '"2 2 2 1",\n'
    '"a c #FF0000",\n'
    '"b c None",\n'
    '"ab",\n'
    '"ba"};\n'
)


def _quiet(_message):
    return None


def _game():
    game_map = GameMap(
        rows=("111111", "1PEC01", "111111"),
        player=(1, 1),
        exit_pos=(2, 1),
        collectibles=1,
    )
    return Game(game_map, output=_quiet)


def _solid(color, size):
    surface = pygame.Surface((size, size), pygame.SRCALPHA)
    surface.fill(color)
    return surface


def test_xpm_to_surface_colors_and_transparency():
    image = XpmImage(width=2, height=1, pixels=((0xFF0000, TRANSPARENT),))
    surface = xpm_to_surface(image)
    assert surface.get_size() == (2, 1)
    assert tuple(surface.get_at((0, 0))) == (255, 0, 0, 255)
    assert surface.get_at((1, 0)).a == 0


def test_load_tiles_reads_all_files(tmp_path):
    for name in ("wall", "player", "collectible", "exit", "floor"):
        (tmp_path / f"{name}.xpm").write_text(XPM_TEXT)
    tiles = load_tiles(tmp_path)
    assert set(tiles) == {"wall", "player", "collectible", "exit", "floor"}
    assert all(surface.get_size() == (2, 2) for surface in tiles.values())
    assert tuple(tiles["wall"].get_at((0, 0))) == (255, 0, 0, 255)
    assert tiles["wall"].get_at((1, 0)).a == 0


def test_load_tiles_missing_file(tmp_path):
    (tmp_path / "wall.xpm").write_text(XPM_TEXT)
    with pytest.raises(DisplayError, match="Failed to load images"):
        load_tiles(tmp_path)


def test_tile_for_basic_tiles():
    game = _game()
    assert tile_for(game, 0, 0) == ("wall",)
    assert tile_for(game, 1, 1) == ("player",)
    assert tile_for(game, 2, 1) == ("exit",)
    assert tile_for(game, 3, 1) == ("collectible",)
    assert tile_for(game, 4, 1) == ("floor",)


def test_tile_for_player_on_exit():
    game = _game()
    assert game.move(1, 0)
    assert tile_for(game, 2, 1) == ("exit", "player")
    assert tile_for(game, 1, 1) == ("floor",)


def test_draw_map_places_tiles():
    game = _game()
    size = 4
    colors = {
        "wall": (10, 10, 10, 255),
        "floor": (20, 20, 20, 255),
        "player": (30, 30, 30, 255),
        "exit": (40, 40, 40, 255),
        "collectible": (50, 50, 50, 255),
    }
    tiles = {kind: _solid(color, size) for kind, color in colors.items()}
    surface = pygame.Surface((game.width * size, game.height * size), pygame.SRCALPHA)
    draw_map(surface, game, tiles, size)
    assert tuple(surface.get_at((0, 0))) == colors["wall"]
    assert tuple(surface.get_at((1 * size + 1, 1 * size + 1))) == colors["player"]
    assert tuple(surface.get_at((2 * size, 1 * size))) == colors["exit"]
    assert tuple(surface.get_at((3 * size + 3, 1 * size + 3))) == colors["collectible"]
    assert tuple(surface.get_at((4 * size, 1 * size))) == colors["floor"]


def test_check_screen_size_fits():
    game = _game()
    assert check_screen_size(game, 10, (60, 30)) == (60, 30)


def test_check_screen_size_too_large():
    game = _game()
    with pytest.raises(DisplayError, match="too large"):
        check_screen_size(game, 10, (59, 30))
    with pytest.raises(DisplayError):
        check_screen_size(game, 10, (60, 29))


def test_keysym_for_special_and_letter_keys():
    assert keysym_for(pygame.K_ESCAPE) == 65307
    assert keysym_for(pygame.K_UP) == 65362
    assert keysym_for(pygame.K_DOWN) == 65364
    assert keysym_for(pygame.K_LEFT) == 65361
    assert keysym_for(pygame.K_RIGHT) == 65363
    assert keysym_for(pygame.K_w) == 119
    assert keysym_for(pygame.K_F1) is None


def test_keysym_drives_game():
    game = _game()
    game.handle_key(keysym_for(pygame.K_RIGHT))
    assert (game.x, game.y) == (2, 1)
    game.handle_key(keysym_for(pygame.K_ESCAPE))
    assert game.closed


def test_main_requires_one_argument(capsys):
    assert main([]) == 1
    assert "Not enough argument" in capsys.readouterr().err


def test_main_rejects_wrong_extension(tmp_path, capsys):
    path = tmp_path / "level.txt"
    path.write_text("11111\n1PCE1\n11111\n")
    assert main([str(path)]) == 1
    assert "Invalid files" in capsys.readouterr().err


def test_main_rejects_bad_map(tmp_path, capsys):
    path = tmp_path / "level.ber"
    path.write_text("11111\n1PCE\n11111\n")
    assert main([str(path)]) == 1
    assert "Map is not rectangular" in capsys.readouterr().err