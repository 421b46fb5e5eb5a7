from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


class Cell(str, Enum):
    """
    contents of one board square, value is the drawn text
    """
    EMPTY = ""
    X = "X"
    O = "O"

    @property
    def opponent(self):
        # only meaningful for markers
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        raise ValueError("empty cell has no opponent")


BOARD_CELLS = 9

# rows, columns, diagonals; checked in this order
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


@dataclass(frozen=True)
class Outcome:
    """
    result of evaluating a board
    done=False: still in progress
    done=True, winner set: win along line
    done=True, winner None: draw
    """
    done: bool
    winner: Optional[Cell] = None
    line: Optional[Tuple[int, int, int]] = None

    @property
    def is_win(self):
        return self.done and self.winner is not None

    @property
    def is_draw(self):
        return self.done and self.winner is None

    @property
    def message(self):
        if self.is_win:
            return f"{self.winner.value} wins!"
        if self.is_draw:
            return "It's a draw!"
        return ""


IN_PROGRESS = Outcome(done=False)
DRAW = Outcome(done=True)


def evaluate(board: Sequence[Cell]) -> Outcome:
    """
    win if any line holds three equal markers, draw if the board is full,
    otherwise in progress
    """
    for a, b, c in WIN_LINES:
        if board[a] != Cell.EMPTY and board[a] == board[b] == board[c]:
            return Outcome(done=True, winner=Cell(board[a]), line=(a, b, c))
    if all(cell != Cell.EMPTY for cell in board):
        return DRAW
    return IN_PROGRESS


def empty_cells(board: Sequence[Cell]):
    # ascending order, search relies on it
    return [i for i, cell in enumerate(board) if cell == Cell.EMPTY]
