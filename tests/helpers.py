from connectrush.core.types import EMPTY, BoardState


def board_from_rows(*rows: str) -> BoardState:
    """Build a board from strings like 'RY..' (R=red, Y=yellow, G=green, .=empty)."""
    names = {"R": "red", "Y": "yellow", "G": "green", "B": "blue", "P": "purple", ".": EMPTY}
    return BoardState(grid=[[names[ch] for ch in row] for row in rows])


def play_moves(engine, moves):
    """Play (row, col) pairs in order, returning the last result."""
    result = None
    for row, col in moves:
        result = engine.attempt_move(row, col)
    return result


# Full 6x7 board, 21 discs per color, longest run on any axis is two.
DRAW_PATTERN = [
    "RRYYRRY",
    "YYRRYYR",
    "RRYYRRY",
    "YYRRYYR",
    "RRYYRRY",
    "YYRRYYR",
]
