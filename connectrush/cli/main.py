"""
CLI for ConnectRush.

Usage:
    python -m connectrush.cli.main --help
    python -m connectrush.cli.main play
    python -m connectrush.cli.main play --seconds 45 --max-level 5 --mute
    python -m connectrush.cli.main info
"""

import logging
from typing import Annotated

import typer
from pydantic import ValidationError

from ..core.bus import EventBus
from ..core.config import GameSettings, get_settings
from ..core.events import Event, EventType
from ..core.scheduler import MonotonicScheduler
from ..core.types import EMPTY, BoardState, MoveResult, Outcome
from ..effects.feedback import Cue, FeedbackController, Spark
from ..game.engine import GameEngine


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="connectrush",
    help="Connect-four with a ticking clock and one more color every level.",
    add_completion=False,
)

COLOR_SYMBOLS = {
    "red": "🔴",
    "yellow": "🟡",
    "green": "🟢",
    "blue": "🔵",
    "purple": "🟣",
    "orange": "🟠",
    "brown": "🟤",
    "white": "⚪",
    "black": "⚫",
}

SPARK_COLORS = ["red", "yellow", "green", "cyan", "blue", "magenta"]

HELP_LINE = "Enter ROW COL to play, 'l' reset level, 'n' new game, 'm' mute, 'q' quit"


def color_symbol(color: str) -> str:
    """Two-column glyph for a cell."""
    if color == EMPTY:
        return "  "
    return COLOR_SYMBOLS.get(color, color[:1].upper() + " ")


def board_to_ascii(board: BoardState) -> str:
    """Convert board to ASCII display with row/column indices."""
    header = "    " + "".join(f"{col:<4}" for col in range(board.cols))
    separator = "   +" + "---+" * board.cols
    lines = [header.rstrip(), separator]

    for index, row in enumerate(board.grid):
        cells = "".join(f"{color_symbol(cell)} |" for cell in row)
        lines.append(f"{index:>2} |{cells}")
        lines.append(separator)

    return "\n".join(lines)


def describe_outcome(result: MoveResult, level: int) -> str | None:
    """Message shown when a round ends."""
    if result.outcome == Outcome.WIN:
        return f"Player {result.color.upper()} wins Level {level}!"
    if result.outcome == Outcome.DRAW:
        return f"Level {level} Draw!"
    if result.outcome == Outcome.TIMEOUT:
        return f"⏳ Time Up! Level {level} Draw!"
    return None


def print_status(engine: GameEngine, messages: list[str]) -> None:
    """Print board, counters and any queued messages (then clear them)."""
    typer.echo(board_to_ascii(engine.board))
    typer.echo(
        f"\nLevel: {engine.level}   Score: {engine.score}   "
        f"⏱️ Time Left: {engine.time_left}s"
    )
    roster = " ".join(color_symbol(color).strip() for color in engine.roster)
    typer.echo(f"Players: {roster}")
    if engine.is_active:
        typer.echo(f"Turn: {color_symbol(engine.current_color).strip()} {engine.current_color.upper()}")

    for message in messages:
        typer.echo(f"\n{message}")
    messages.clear()


def parse_cell(command: str) -> tuple[int, int]:
    """Parse 'ROW COL' (space or comma separated).

    Raises:
        ValueError: If the text is not two integers
    """
    parts = command.replace(",", " ").split()
    if len(parts) != 2:
        raise ValueError(f"Expected ROW COL, got {command!r}")
    return int(parts[0]), int(parts[1])


def apply_command(
    engine: GameEngine,
    feedback: FeedbackController | None,
    command: str,
    round_number: int | None = None,
) -> tuple[bool, str | None]:
    """Run one line of player input against the engine.

    A move typed while round `round_number` was open is dropped if that
    round has ended or been replaced by the time it arrives.

    Returns:
        Tuple of (keep_playing, message_for_player)
    """
    command = command.strip().lower()

    if command in ("q", "quit", "exit"):
        return False, "Game quit."
    if command == "":
        return True, None
    if command == "m":
        if feedback is None:
            return True, None
        enabled = feedback.toggle_mute()
        return True, "🔊 Sound on" if enabled else "🔇 Sound muted"
    if command == "l":
        if engine.reset_level():
            return True, "Level Reset!"
        return True, "Level can only be reset once the round is over."
    if command == "n":
        engine.reset_game()
        return True, "🔄 New game!"

    try:
        row, col = parse_cell(command)
    except ValueError:
        return True, HELP_LINE

    if round_number is not None and (engine.round_number != round_number or not engine.is_active):
        return True, f"Too late: round over, move ({row}, {col}) discarded."

    result = engine.attempt_move(row, col)
    if result.outcome == Outcome.IGNORED:
        return True, f"Cell ({row}, {col}) is not available."
    return True, None


def _ring(cue: Cue) -> None:
    typer.echo("\a", nl=False)


def _show_sparkles(sparks: list[Spark]) -> None:
    line = [" "] * 80
    for spark in sparks:
        col = min(max(int(spark.x), 0), len(line) - 1)
        line[col] = typer.style("*", fg=SPARK_COLORS[spark.hue * len(SPARK_COLORS) // 360], bold=True)
    typer.echo("".join(line))


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def play(
    rows: Annotated[int | None, typer.Option("--rows", help="Board rows")] = None,
    cols: Annotated[int | None, typer.Option("--cols", help="Board columns")] = None,
    seconds: Annotated[int | None, typer.Option("--seconds", "-s", help="Seconds per round")] = None,
    max_level: Annotated[int | None, typer.Option("--max-level", help="Last level")] = None,
    mute: Annotated[bool, typer.Option("--mute", help="Start with sound off")] = False,
    log_level: Annotated[str, typer.Option("--log-level", help="Logging level")] = "WARNING",
):
    """
    Play ConnectRush in the terminal.

    Every level won adds a color; the clock forces a draw at zero.
    """
    _configure_logging(log_level)

    settings = get_settings()
    overrides = {
        key: value
        for key, value in {
            "rows": rows,
            "cols": cols,
            "round_seconds": seconds,
            "max_level": max_level,
        }.items()
        if value is not None
    }
    try:
        game_settings = GameSettings(**{**settings.game.model_dump(), **overrides})
    except ValidationError as e:
        problems = "; ".join(error["msg"] for error in e.errors())
        typer.echo(f"Invalid game settings: {problems}", err=True)
        raise typer.Exit(1) from e

    bus = EventBus()
    scheduler = MonotonicScheduler()
    messages: list[str] = []

    def on_round_ended(event: Event) -> None:
        message = describe_outcome(event.data, engine.level)
        if message:
            messages.append(message)

    bus.subscribe(EventType.ROUND_ENDED, on_round_ended)
    bus.subscribe(
        EventType.GAME_FINISHED,
        lambda event: messages.append("Game Over! You completed all levels."),
    )

    feedback = FeedbackController(
        cue_player=_ring,
        sparkle_handler=_show_sparkles,
        bus=bus,
        settings=settings.effects,
    )
    if mute:
        feedback.sound_enabled = False

    engine = GameEngine(bus=bus, scheduler=scheduler, settings=game_settings)

    typer.echo("\n" + "=" * 50)
    typer.echo("  CONNECT RUSH")
    typer.echo("=" * 50)
    typer.echo(f"\n{HELP_LINE}\n")

    try:
        while True:
            scheduler.poll()

            if engine.phase.is_pending:
                if messages:
                    print_status(engine, messages)
                scheduler.wait_for_next()
                continue

            print_status(engine, messages)

            if engine.is_finished:
                if typer.confirm("\n🔁 Play Again?", default=True):
                    engine.reset_game()
                    continue
                break

            round_number = engine.round_number
            command = typer.prompt("\nYour move", default="", show_default=False)
            scheduler.poll()
            keep_playing, message = apply_command(engine, feedback, command, round_number)
            if message:
                messages.append(message)
            if not keep_playing:
                typer.echo(message)
                break
    except (KeyboardInterrupt, typer.Abort):
        typer.echo("\nGame quit.")
    finally:
        feedback.close()

    typer.echo(f"Final score: {engine.score} (reached level {engine.level})")


@app.command()
def info():
    """Show the effective configuration."""
    settings = get_settings()
    typer.echo(settings.model_dump_json(indent=2))


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
