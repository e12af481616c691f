import pytest

from solong.mapfile import (
    GameMap,
    MapError,
    check_extension,
    check_rectangular,
    check_walls,
    count_elements,
    flood_fill,
    load_map,
    read_map_lines,
)

VALID = "1111111\n1P0C0E1\n1111111\n"


def write(tmp_path, text, name="level.ber"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_load_valid_map(tmp_path):
    game_map = load_map(write(tmp_path, VALID))
    assert game_map.rows == ("1111111", "1P0C0E1", "1111111")
    assert game_map.width == 7
    assert game_map.height == 3
    assert game_map.player == (1, 1)
    assert game_map.exit_pos == (5, 1)
    assert game_map.collectibles == 1
    assert game_map.tile(3, 1) == "C"


def test_tile_out_of_range(tmp_path):
    game_map = load_map(write(tmp_path, VALID))
    with pytest.raises(IndexError):
        game_map.tile(7, 0)


def test_last_line_without_newline(tmp_path):
    game_map = load_map(write(tmp_path, VALID.rstrip("\n")))
    assert game_map.rows[-1] == "1111111"


@pytest.mark.parametrize(
    "path, expected",
    [
        ("maps/level.ber", True),
        ("level.ber.txt", False),
        ("level", False),
        ("level.berx", False),
        ("dir.ber/level", False),
    ],
)
def test_check_extension(path, expected):
    assert check_extension(path) is expected


def test_wrong_extension(tmp_path):
    with pytest.raises(MapError, match="Invalid files"):
        load_map(write(tmp_path, VALID, name="level.txt"))


def test_missing_file(tmp_path):
    with pytest.raises(MapError, match="Invalid files"):
        load_map(tmp_path / "absent.ber")


@pytest.mark.parametrize(
    "text",
    ["", "1111111\n\n1P0C0E1\n1111111\n", VALID + "\n", "\n" + VALID],
)
def test_blank_lines_and_empty_file(tmp_path, text):
    with pytest.raises(MapError, match="Invalid map"):
        load_map(write(tmp_path, text))


def test_read_map_lines_splits_rows(tmp_path):
    assert read_map_lines(write(tmp_path, VALID)) == ["1111111", "1P0C0E1", "1111111"]


def test_read_map_lines_missing(tmp_path):
    with pytest.raises(MapError):
        read_map_lines(tmp_path / "nothing.ber")


def test_check_rectangular():
    assert check_rectangular(["11111"] * 3)
    assert not check_rectangular(["11111", "11111"])
    assert not check_rectangular(["1111111", "111111", "1111111"])
    assert not check_rectangular([])


def test_not_rectangular_map(tmp_path):
    with pytest.raises(MapError, match="Map is not rectangular"):
        load_map(write(tmp_path, "1111111\n1P0C0E\n1111111\n"))


def test_check_walls():
    assert check_walls(["1111111", "1P0C0E1", "1111111"])
    assert not check_walls(["1111111", "0P0C0E1", "1111111"])
    assert not check_walls(["1111111", "1P0C0E1", "1110111"])


def test_broken_wall_map(tmp_path):
    with pytest.raises(MapError, match="Invalid walls"):
        load_map(write(tmp_path, "1111111\n1P0C0E0\n1111111\n"))


def test_count_elements():
    player, exit_pos, collectibles = count_elements(["1111111", "1PCC0E1", "1111111"])
    assert player == (1, 1)
    assert exit_pos == (5, 1)
    assert collectibles == 2


@pytest.mark.parametrize(
    "middle",
    ["1PPC0E1", "1P0C0E1".replace("E", "0"), "1P000E1", "1P0CEE1", "1P0CXE1"],
)
def test_invalid_elements(tmp_path, middle):
    with pytest.raises(MapError, match="Invalid Elements"):
        load_map(write(tmp_path, f"1111111\n{middle}\n1111111\n"))


def test_flood_fill_blocked_by_walls():
    rows = ["11111", "1P101", "11111"]
    assert flood_fill(rows, (1, 1)) == frozenset({(1, 1)})


def test_flood_fill_never_enters_walls():
    rows = ["1111111", "1P0C0E1", "1011101", "1111111"]
    reached = flood_fill(rows, (1, 1))
    assert all(rows[y][x] != "1" for x, y in reached)
    assert (5, 2) in reached
    assert (5, 1) in reached


def test_unreachable_collectible(tmp_path):
    with pytest.raises(MapError, match="Invalid map"):
        load_map(write(tmp_path, "1111111\n1P1C0E1\n1111111\n"))


def test_unreachable_exit(tmp_path):
    with pytest.raises(MapError, match="Invalid map"):
        load_map(write(tmp_path, "1111111\n1PC01E1\n1111111\n"))


def test_game_map_is_immutable(tmp_path):
    game_map = load_map(write(tmp_path, VALID))
    with pytest.raises(AttributeError):
        game_map.collectibles = 5
    assert isinstance(game_map, GameMap) and game_map.collectibles == 1