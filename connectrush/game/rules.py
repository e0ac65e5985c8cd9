"""Board rules for ConnectRush: free placement, N in a row to win."""

from collections.abc import Sequence

import numpy as np

from ..core.types import EMPTY, BoardState, Position


# The four axes, each checked in both directions from the placed disc
AXES = [
    (0, 1),   # Horizontal
    (1, 0),   # Vertical
    (1, 1),   # Diagonal down-right
    (-1, 1),  # Diagonal up-right
]


class ConnectRules:
    """Rules for a rows x cols board where any empty cell may be played.

    Win condition: win_length in a row (horizontal, vertical, or diagonal)
    through the disc just placed.
    """

    def __init__(self, rows: int = 6, cols: int = 7, win_length: int = 4):
        """Initialize rules.

        Args:
            rows: Board height (6 default)
            cols: Board width (7 default)
            win_length: Number in a row to win (4 default)
        """
        if rows < 1 or cols < 1:
            raise ValueError(f"Board must be at least 1x1, got {rows}x{cols}")
        if win_length < 2:
            raise ValueError(f"win_length must be >= 2, got {win_length}")
        self.rows = rows
        self.cols = cols
        self.win_length = win_length

    @classmethod
    def from_settings(cls, settings) -> "ConnectRules":
        return cls(rows=settings.rows, cols=settings.cols, win_length=settings.win_length)

    def create_grid(self) -> BoardState:
        """Allocate an empty board."""
        return BoardState(grid=[[EMPTY] * self.cols for _ in range(self.rows)])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_empty(self, board: BoardState, row: int, col: int) -> bool:
        return board.grid[row][col] == EMPTY

    def count_direction(
        self,
        board: BoardState,
        row: int,
        col: int,
        dr: int,
        dc: int,
        color: str,
    ) -> int:
        """Count consecutive color cells next to (row, col) in direction (dr, dc).

        The starting cell itself is not counted.
        """
        count = 0
        r, c = row + dr, col + dc
        while self.in_bounds(r, c) and board.grid[r][c] == color:
            count += 1
            r += dr
            c += dc
        return count

    def winning_positions(self, board: BoardState, row: int, col: int) -> list[Position]:
        """Find a winning run through the disc at (row, col).

        Returns:
            Positions of the run on the first axis reaching win_length,
            ordered from one end to the other; empty list if no win
        """
        color = board.grid[row][col]
        if color == EMPTY:
            return []

        for dr, dc in AXES:
            backward = self.count_direction(board, row, col, -dr, -dc, color)
            forward = self.count_direction(board, row, col, dr, dc, color)
            if backward + forward + 1 >= self.win_length:
                return [
                    Position(row=row + i * dr, col=col + i * dc)
                    for i in range(-backward, forward + 1)
                ]

        return []

    def check_win(self, board: BoardState, row: int, col: int) -> bool:
        """Check if the disc at (row, col) completes a run."""
        return bool(self.winning_positions(board, row, col))

    def is_full(self, board: BoardState, palette: Sequence[str]) -> bool:
        """Check if every cell holds a color."""
        return bool(np.all(board.as_matrix(palette) != 0))


def roster_size(level: int, palette_size: int) -> int:
    """Number of competing colors at a level: 2 at level 1, +1 per level, capped."""
    if level <= 0:
        raise ValueError(f"level must be >= 1, got {level}")
    return min(2 + level - 1, palette_size)


def roster_for_level(level: int, palette: Sequence[str]) -> tuple[str, ...]:
    """Ordered colors playing at a level."""
    return tuple(palette[: roster_size(level, len(palette))])
