"""Game engine for ConnectRush state management."""

import logging

from ..core.bus import EventBus, get_event_bus
from ..core.config import GameSettings, get_settings
from ..core.events import Event, EventType
from ..core.scheduler import ManualScheduler, ScheduledCall, Scheduler
from ..core.types import BoardState, GamePhase, GameState, MoveResult, Outcome, Position
from .rules import ConnectRules, roster_for_level


logger = logging.getLogger(__name__)

_IGNORED = MoveResult(outcome=Outcome.IGNORED)


class GameEngine:
    """Owns the board, roster, turn pointer, level, score and countdown.

    Stateful engine that:
    - Accepts moves from the current color
    - Detects wins, full-board draws and timeouts
    - Schedules level transitions on an injected scheduler
    - Emits events for every state change

    The engine starts active at level 1.
    """

    def __init__(
        self,
        rules: ConnectRules | None = None,
        bus: EventBus | None = None,
        scheduler: Scheduler | None = None,
        settings: GameSettings | None = None,
    ):
        """Initialize game engine.

        Args:
            rules: Board rules (built from settings if None)
            bus: Event bus (uses global if None)
            scheduler: Delayed-callback source (virtual clock if None)
            settings: Game settings (uses global if None)
        """
        self.settings = settings or get_settings().game
        self.rules = rules or ConnectRules.from_settings(self.settings)
        self.bus = bus or get_event_bus()
        self.scheduler = scheduler or ManualScheduler()
        self.palette: tuple[str, ...] = tuple(self.settings.palette)

        self._board: BoardState = self.rules.create_grid()
        self._roster: tuple[str, ...] = roster_for_level(1, self.palette)
        self._turn_index = 0
        self._level = 1
        self._score = 0
        self._time_left = self.settings.round_seconds
        self._phase = GamePhase.ACTIVE
        self._last_result: MoveResult | None = None
        self._round = 0
        self._pending: ScheduledCall | None = None
        self._countdown: ScheduledCall | None = None

        self.reset_game()

    # ─────────────────────────────────────────────────────────
    # MOVES
    # ─────────────────────────────────────────────────────────

    def create_board(self) -> BoardState:
        """Discard the current grid and allocate an empty one."""
        self._board = self.rules.create_grid()
        self._publish(EventType.BOARD_CHANGED, self._board.copy())
        return self._board

    def attempt_move(self, row: int, col: int) -> MoveResult:
        """Place the current color at (row, col).

        Moves while the round is inactive, outside the board, or onto an
        occupied cell are ignored without touching any state.

        Returns:
            CONTINUE, WIN or DRAW result; IGNORED for rejected targets
        """
        if not self.is_active:
            logger.debug("Ignoring move (%d, %d): round not active (%s)", row, col, self._phase.name)
            return _IGNORED
        if not self.rules.in_bounds(row, col):
            logger.debug("Ignoring move (%d, %d): out of bounds", row, col)
            return _IGNORED
        if not self.rules.is_empty(self._board, row, col):
            logger.debug("Ignoring move (%d, %d): cell taken by %s", row, col, self._board.cell(row, col))
            return _IGNORED

        color = self.current_color
        self._board.grid[row][col] = color
        position = Position(row=row, col=col)

        self._publish(EventType.MOVE_MADE, {"color": color, "row": row, "col": col})
        self._publish(EventType.BOARD_CHANGED, self._board.copy())

        winning = self.rules.winning_positions(self._board, row, col)
        if winning:
            result = MoveResult(
                outcome=Outcome.WIN,
                color=color,
                position=position,
                winning_positions=tuple(winning),
            )
            self.on_round_won(color, result)
        elif self.rules.is_full(self._board, self.palette):
            result = MoveResult(outcome=Outcome.DRAW, position=position)
            self.on_round_drawn(result)
        else:
            self._turn_index = (self._turn_index + 1) % len(self._roster)
            result = MoveResult(outcome=Outcome.CONTINUE, color=color, position=position)
            self._last_result = result
            self._publish(
                EventType.TURN_CHANGED,
                {"color": self.current_color, "index": self._turn_index},
            )

        return result

    # ─────────────────────────────────────────────────────────
    # ROUND ENDINGS
    # ─────────────────────────────────────────────────────────

    def on_round_won(self, color: str, result: MoveResult | None = None) -> None:
        """Score the win and schedule the next level, or finish the game."""
        if not self.is_active:
            return

        self._score += 1
        self._stop_countdown()
        result = result or MoveResult(outcome=Outcome.WIN, color=color)
        self._last_result = result

        if self._level < self.settings.max_level:
            self._phase = GamePhase.WIN_PENDING
            self._pending = self.scheduler.call_later(
                self.settings.win_delay, self._advance_level
            )
        else:
            self._phase = GamePhase.GAME_FINISHED

        logger.info("Level %d won by %s (score %d)", self._level, color, self._score)
        self._publish(EventType.SCORE_CHANGED, {"score": self._score})
        self._publish(EventType.ROUND_ENDED, result)

        if self._phase == GamePhase.GAME_FINISHED:
            logger.info("All %d levels completed", self.settings.max_level)
            self._publish(EventType.GAME_FINISHED, {"level": self._level, "score": self._score})

    def on_round_drawn(self, result: MoveResult | None = None) -> None:
        """End the round as a draw and schedule a retry of the same level."""
        if not self.is_active:
            return
        result = result or MoveResult(outcome=Outcome.DRAW)
        self._end_in_draw(GamePhase.DRAW_PENDING, result)

    def on_timeout(self) -> MoveResult | None:
        """One countdown tick; ends the round as a draw when time runs out."""
        return self.tick()

    def tick(self) -> MoveResult | None:
        """Decrement the timer while the round is active.

        Returns:
            TIMEOUT result when the timer reaches zero, otherwise None
        """
        if not self.is_active:
            return None

        self._time_left = max(0, self._time_left - 1)
        self._publish(EventType.TIME_CHANGED, {"seconds_left": self._time_left})

        if self._time_left > 0:
            return None

        result = MoveResult(outcome=Outcome.TIMEOUT)
        self._end_in_draw(GamePhase.TIMEOUT_PENDING, result)
        return result

    def _end_in_draw(self, phase: GamePhase, result: MoveResult) -> None:
        self._stop_countdown()
        self._phase = phase
        self._last_result = result
        self._pending = self.scheduler.call_later(self.settings.draw_delay, self._retry_level)
        logger.info("Level %d ended in %s", self._level, result)
        self._publish(EventType.ROUND_ENDED, result)

    # ─────────────────────────────────────────────────────────
    # LEVELS
    # ─────────────────────────────────────────────────────────

    def start_level(self, level: int) -> GameState:
        """Set up a fresh round at the given level.

        Cancels any pending transition and the previous countdown.

        Raises:
            ValueError: If level is outside 1..max_level
        """
        if not 1 <= level <= self.settings.max_level:
            raise ValueError(f"level must be in 1..{self.settings.max_level}, got {level}")

        self._cancel_pending()
        self._stop_countdown()

        self._round += 1
        self._level = level
        self._roster = roster_for_level(level, self.palette)
        self._turn_index = 0
        self._time_left = self.settings.round_seconds
        self._last_result = None
        self.create_board()
        self._phase = GamePhase.ACTIVE
        self._start_countdown()

        logger.info("Level %d started with %d colors", level, len(self._roster))
        self._publish(EventType.LEVEL_CHANGED, {"level": level, "roster": self._roster})
        self._publish(EventType.SCORE_CHANGED, {"score": self._score})
        self._publish(EventType.TURN_CHANGED, {"color": self.current_color, "index": 0})
        self._publish(EventType.TIME_CHANGED, {"seconds_left": self._time_left})

        return self.state

    def reset_game(self) -> GameState:
        """Back to level 1 with a zero score."""
        self._level = 1
        self._score = 0
        state = self.start_level(1)
        self._publish(EventType.GAME_RESET)
        return state

    def reset_level(self) -> bool:
        """Restart the current level, keeping the score.

        Only allowed once the round has ended (won, drawn or timed out) or
        when the board is already full; a finished game needs reset_game().

        Returns:
            True if the level was restarted
        """
        if self._phase == GamePhase.GAME_FINISHED:
            logger.debug("Ignoring level reset: game finished")
            return False
        if self.is_active and not self.rules.is_full(self._board, self.palette):
            logger.debug("Ignoring level reset: round still in play")
            return False

        self.start_level(self._level)
        self._publish(EventType.LEVEL_RESET, {"level": self._level})
        return True

    def _advance_level(self) -> None:
        self._pending = None
        self.start_level(self._level + 1)

    def _retry_level(self) -> None:
        self._pending = None
        self.start_level(self._level)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    # ─────────────────────────────────────────────────────────
    # COUNTDOWN
    # ─────────────────────────────────────────────────────────

    def _start_countdown(self) -> None:
        if self.settings.auto_countdown:
            self._countdown = self.scheduler.call_later(
                self.settings.tick_interval, self._on_countdown
            )

    def _stop_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    def _on_countdown(self) -> None:
        self._countdown = None
        self.tick()
        if self.is_active:
            self._start_countdown()

    def _publish(self, event_type: EventType, data=None) -> None:
        self.bus.publish(Event(type=event_type, data=data, source="game_engine"))

    # ─────────────────────────────────────────────────────────
    # ACCESSORS
    # ─────────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        """Snapshot of the current game state."""
        return GameState(
            board=self._board.copy(),
            phase=self._phase,
            roster=self._roster,
            turn_index=self._turn_index,
            level=self._level,
            score=self._score,
            time_left=self._time_left,
            last_result=self._last_result,
        )

    @property
    def board(self) -> BoardState:
        """Copy of the current grid."""
        return self._board.copy()

    @property
    def roster(self) -> tuple[str, ...]:
        return self._roster

    @property
    def current_color(self) -> str:
        return self._roster[self._turn_index]

    @property
    def turn_index(self) -> int:
        return self._turn_index

    @property
    def level(self) -> int:
        return self._level

    @property
    def score(self) -> int:
        return self._score

    @property
    def time_left(self) -> int:
        return self._time_left

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def last_result(self) -> MoveResult | None:
        return self._last_result

    @property
    def is_active(self) -> bool:
        """Check if moves and ticks are accepted."""
        return self._phase == GamePhase.ACTIVE

    @property
    def is_finished(self) -> bool:
        """Check if the last level has been won."""
        return self._phase == GamePhase.GAME_FINISHED

    @property
    def round_number(self) -> int:
        """Increments every time a round starts, including retries."""
        return self._round

    @property
    def has_pending_transition(self) -> bool:
        return self._pending is not None and self._pending.active
