"""
Shared data types for the ConnectRush game.

These types are the contracts between the engine and its collaborators.
The presentation and effects layers only ever see these structures.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np


EMPTY = ""  # Cell value for an unoccupied slot


# ─────────────────────────────────────────────────────────────
# GAME PHASE & OUTCOMES
# ─────────────────────────────────────────────────────────────


class GamePhase(Enum):
    """Current phase of a round."""

    ACTIVE = auto()  # Accepting moves and ticks
    WIN_PENDING = auto()  # Round won, waiting for next level
    DRAW_PENDING = auto()  # Board full, waiting to retry the level
    TIMEOUT_PENDING = auto()  # Timer ran out, waiting to retry the level
    GAME_FINISHED = auto()  # Last level won, needs a full reset

    @property
    def is_pending(self) -> bool:
        """Whether a delayed level transition follows this phase."""
        return self in (GamePhase.WIN_PENDING, GamePhase.DRAW_PENDING, GamePhase.TIMEOUT_PENDING)


class Outcome(Enum):
    """Result kind of a move or a timer tick."""

    IGNORED = auto()  # Guarded no-op, nothing changed
    CONTINUE = auto()  # Turn advanced
    WIN = auto()
    DRAW = auto()
    TIMEOUT = auto()


# ─────────────────────────────────────────────────────────────
# BOARD REPRESENTATION
# ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Position:
    """Grid position (0-indexed)."""

    row: int  # 0 = top
    col: int  # 0 = left


@dataclass
class BoardState:
    """
    Board grid for one level.

    The grid is a 2D list where:
    - grid[0] is the top row
    - grid[row][col] holds EMPTY or a color identifier
    """

    grid: list[list[str]] = field(
        default_factory=lambda: [[EMPTY] * 7 for _ in range(6)]
    )

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def cell(self, row: int, col: int) -> str:
        return self.grid[row][col]

    def as_matrix(self, palette: Sequence[str]) -> np.ndarray:
        """Convert to a numpy matrix of palette indices.

        Returns:
            numpy array where EMPTY=0 and palette[i]=i+1
        """
        mapping = {color: index + 1 for index, color in enumerate(palette)}
        mapping[EMPTY] = 0
        return np.array([[mapping[cell] for cell in row] for row in self.grid], dtype=np.int8)

    def copy(self) -> "BoardState":
        """Create a deep copy of the board state."""
        return BoardState(grid=[[cell for cell in row] for row in self.grid])


# ─────────────────────────────────────────────────────────────
# MOVE RESULT & GAME STATE
# ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class MoveResult:
    """What happened after a move attempt or a timer tick."""

    outcome: Outcome
    color: str | None = None  # Mover for CONTINUE, winner for WIN
    position: Position | None = None
    winning_positions: tuple[Position, ...] = ()

    @property
    def is_draw(self) -> bool:
        """Board-full draws and timeouts are both draws."""
        return self.outcome in (Outcome.DRAW, Outcome.TIMEOUT)

    def __str__(self) -> str:
        if self.outcome == Outcome.WIN:
            return f"WIN({self.color})"
        return self.outcome.name


@dataclass
class GameState:
    """Complete engine state snapshot."""

    board: BoardState
    phase: GamePhase
    roster: tuple[str, ...]
    turn_index: int
    level: int
    score: int
    time_left: int
    last_result: MoveResult | None = None

    @property
    def current_color(self) -> str:
        return self.roster[self.turn_index]

    @property
    def is_active(self) -> bool:
        return self.phase == GamePhase.ACTIVE
