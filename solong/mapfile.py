"""Loading and validating ``.ber`` level files."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

WALL = "1"
FLOOR = "0"
COLLECTIBLE = "C"
EXIT = "E"
PLAYER = "P"
TILES = frozenset({WALL, FLOOR, COLLECTIBLE, EXIT, PLAYER})

MIN_AREA = 3 * 5
EXTENSION = ".ber"

Position = tuple[int, int]


class MapError(ValueError):
    """Raised when a level file is missing or does not describe a playable map."""


@dataclass(frozen=True)
class GameMap:
    """A validated level: rows top to bottom, positions as (x, y)."""

    rows: tuple[str, ...]
    player: Position
    exit_pos: Position
    collectibles: int

    @property
    def width(self) -> int:
        """Number of columns."""
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    def tile(self, x: int, y: int) -> str:
        """Return the tile character at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"tile ({x}, {y}) outside {self.width}x{self.height} map")
        return self.rows[y][x]


def check_extension(path: str | Path) -> bool:
    """Return True when the text after the last '.' of ``path`` is exactly ``.ber``."""
    text = str(path)
    dot = text.rfind(".")
    return dot != -1 and text[dot:] == EXTENSION


def read_map_lines(path: str | Path) -> list[str]:
    """Read the rows of a map file, rejecting empty files and blank lines."""
    try:
        text = Path(path).read_bytes().decode("latin-1")
    except OSError as exc:
        raise MapError("Invalid map") from exc
    if not text:
        raise MapError("Invalid map")
    parts = text.split("\n")
    # Every piece but the last was followed by a newline; an empty one is a blank line.
    if any(not part for part in parts[:-1]):
        raise MapError("Invalid map")
    return [part for part in parts if part]


def check_rectangular(rows: Sequence[str]) -> bool:
    """Return True when all rows share one length and the map is large enough."""
    if not rows or not rows[0]:
        return False
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        return False
    return len(rows) * width >= MIN_AREA


def check_walls(rows: Sequence[str]) -> bool:
    """Return True when every border tile of a rectangular map is a wall."""
    if not rows or not rows[0]:
        return False
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        return False
    if set(rows[0]) != {WALL} or set(rows[-1]) != {WALL}:
        return False
    return all(row[0] == WALL and row[-1] == WALL for row in rows)


def count_elements(rows: Sequence[str]) -> tuple[Position, Position, int]:
    """Return (player, exit, collectible count) of a map.

    Raises MapError unless the map holds exactly one player, exactly one exit,
    at least one collectible and no unknown tiles.
    """
    player: Position | None = None
    exit_pos: Position | None = None
    collectibles = 0
    for y, row in enumerate(rows):
        for x, tile in enumerate(row):
            if tile not in TILES:
                raise MapError("Invalid Elements")
            if tile == COLLECTIBLE:
                collectibles += 1
            elif tile == EXIT:
                if exit_pos is not None:
                    raise MapError("Invalid Elements")
                exit_pos = (x, y)
            elif tile == PLAYER:
                if player is not None:
                    raise MapError("Invalid Elements")
                player = (x, y)
    if player is None or exit_pos is None or collectibles == 0:
        raise MapError("Invalid Elements")
    return player, exit_pos, collectibles


def flood_fill(rows: Sequence[str], start: Position) -> frozenset[Position]:
    """Return every (x, y) reachable from ``start`` without crossing walls."""
    height = len(rows)
    seen: set[Position] = set()
    pending = deque([start])
    while pending:
        x, y = pending.popleft()
        if not (0 <= y < height and 0 <= x < len(rows[y])):
            continue
        if (x, y) in seen or rows[y][x] == WALL:
            continue
        seen.add((x, y))
        pending.extend(((x, y + 1), (x, y - 1), (x + 1, y), (x - 1, y)))
    return frozenset(seen)


def load_map(path: str | Path) -> GameMap:
    """Read and validate a level file, raising MapError with the reason."""
    if not Path(path).exists() or not check_extension(path):
        raise MapError("Invalid files")
    rows = read_map_lines(path)
    if not check_rectangular(rows):
        raise MapError("Map is not rectangular")
    if not check_walls(rows):
        raise MapError("Invalid walls")
    player, exit_pos, collectibles = count_elements(rows)
    reached = flood_fill(rows, player)
    reached_collectibles = sum(1 for x, y in reached if rows[y][x] == COLLECTIBLE)
    if reached_collectibles != collectibles or exit_pos not in reached:
        raise MapError("Invalid map")
    return GameMap(
        rows=tuple(rows),
        player=player,
        exit_pos=exit_pos,
        collectibles=collectibles,
    )