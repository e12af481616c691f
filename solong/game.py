"""Game state and player movement."""

from __future__ import annotations

from collections.abc import Callable

from solong.mapfile import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, GameMap

KEY_ESCAPE = 65307

_DIRECTIONS: dict[int, tuple[int, int]] = {
    119: (0, -1),  # w
    65362: (0, -1),  # up
    115: (0, 1),  # s
    65364: (0, 1),  # down
    97: (-1, 0),  # a
    65361: (-1, 0),  # left
    100: (1, 0),  # d
    65363: (1, 0),  # right
}

WIN_MESSAGE = "GG! You've completed the level"


class Game:
    """A level being played: a mutable grid, the player and the move count."""

    def __init__(self, game_map: GameMap, output: Callable[[str], object] = print) -> None:
        self.grid: list[list[str]] = [list(row) for row in game_map.rows]
        self.x, self.y = game_map.player
        self.exit_pos = game_map.exit_pos
        self.collectibles = game_map.collectibles
        self.moves = 0
        self.won = False
        self.closed = False
        self._output = output

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def finished(self) -> bool:
        """True once the level is won or the player asked to quit."""
        return self.won or self.closed

    def is_valid_move(self, x: int, y: int) -> bool:
        """Return True when (x, y) lies inside the map and is not a wall."""
        return 0 <= x < self.width and 0 <= y < self.height and self.grid[y][x] != WALL

    def move(self, dx: int, dy: int) -> bool:
        """Move the player by (dx, dy); return True when the move was taken."""
        if self.finished:
            return False
        new_x, new_y = self.x + dx, self.y + dy
        if not self.is_valid_move(new_x, new_y):
            return False
        if self.grid[new_y][new_x] == COLLECTIBLE:
            self.collectibles -= 1
            self.grid[new_y][new_x] = FLOOR
        if self.grid[new_y][new_x] == EXIT and self.collectibles == 0:
            self._output(WIN_MESSAGE)
            self.won = True
            return True
        self.grid[self.y][self.x] = EXIT if (self.x, self.y) == self.exit_pos else FLOOR
        self.x, self.y = new_x, new_y
        self.grid[new_y][new_x] = EXIT if (new_x, new_y) == self.exit_pos else PLAYER
        self.moves += 1
        self._output(f"Moves: {self.moves}")
        return True

    def handle_key(self, keycode: int) -> None:
        """React to an X keysym: Escape quits, WASD and arrows move."""
        if keycode == KEY_ESCAPE:
            self.closed = True
            return
        direction = _DIRECTIONS.get(keycode)
        if direction is not None:
            self.move(*direction)