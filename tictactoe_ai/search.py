import logging
from functools import lru_cache
from typing import Sequence

from .evaluator import Cell, empty_cells, evaluate

log = logging.getLogger(__name__)

WIN_SCORE = 10
LOSS_SCORE = -10
DRAW_SCORE = 0


def _place(board, index, player):
    return board[:index] + (player,) + board[index + 1:]


@lru_cache(maxsize=None)
def minimax(board: tuple, maximizing: bool, computer: Cell) -> int:
    """
    score for the computer under best play: +10 win, -10 loss, 0 draw
    maximizing is True when the computer is to move
    """
    outcome = evaluate(board)
    if outcome.done:
        if outcome.winner == computer:
            return WIN_SCORE
        if outcome.winner == computer.opponent:
            return LOSS_SCORE
        return DRAW_SCORE

    player = computer if maximizing else computer.opponent
    scores = (minimax(_place(board, i, player), not maximizing, computer)
              for i in empty_cells(board))
    return max(scores) if maximizing else min(scores)


def best_move(board: Sequence[Cell], computer: Cell) -> int:
    """
    computer's optimal move, lowest index on ties
    raises ValueError on a finished board
    """
    board = tuple(Cell(cell) for cell in board)
    if evaluate(board).done:
        raise ValueError("no move on a finished board")

    best_index, best_score = -1, None
    for i in empty_cells(board):
        score = minimax(_place(board, i, computer), False, computer)
        # strict > keeps the first of equal scores
        if best_score is None or score > best_score:
            best_index, best_score = i, score
    log.debug("best move for %s: %d (score %d)", computer.value, best_index, best_score)
    return best_index
