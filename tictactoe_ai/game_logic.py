import logging
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from .errors import InvalidModeForComputerTurn, InvalidMove
from .evaluator import BOARD_CELLS, IN_PROGRESS, Cell, evaluate
from .search import best_move

log = logging.getLogger(__name__)

FIRST_PLAYER = Cell.X


class GameMode(str, Enum):
    LOCAL = "local"
    VS_COMPUTER = "cpu"


class Move(NamedTuple):
    index: int
    player: Cell


@dataclass
class Scoreboard:
    """
    win/draw counters, kept across rounds
    """
    wins_x: int = 0
    wins_o: int = 0
    draws: int = 0

    def record(self, outcome):
        # only finished rounds count
        if not outcome.done:
            return
        if outcome.winner == Cell.X:
            self.wins_x += 1
        elif outcome.winner == Cell.O:
            self.wins_o += 1
        else:
            self.draws += 1

    def reset(self):
        self.wins_x = self.wins_o = self.draws = 0


class GameEngine:
    """
    tic-tac-toe match state and turn flow
    """
    def __init__(self, mode=GameMode.LOCAL, computer=Cell.O, scoreboard=None,
                 on_change=None, on_round_end=None):
        """
        init board and counters

        on_change() is called after every state change (redraw hook),
        on_round_end(outcome) once when a round finishes.
        """
        self.computer = Cell(computer)
        self.scoreboard = scoreboard if scoreboard is not None else Scoreboard()
        self.on_change = on_change
        self.on_round_end = on_round_end
        self.mode = GameMode(mode)
        self._board = [Cell.EMPTY] * BOARD_CELLS
        self.active_player = FIRST_PLAYER
        self.is_over = False
        self.outcome = IN_PROGRESS
        self.history = []

    @property
    def board(self):
        # snapshot, callers can't write through it
        return tuple(self._board)

    @property
    def move_count(self):
        return len(self.history)

    @property
    def is_computer_turn(self):
        return (self.mode == GameMode.VS_COMPUTER
                and not self.is_over
                and self.active_player == self.computer)

    def start_round(self, mode=None):
        """
        clear board, X to move; mode kept unless given
        """
        if mode is not None:
            self.mode = GameMode(mode)
        self._board = [Cell.EMPTY] * BOARD_CELLS
        self.active_player = FIRST_PLAYER
        self.is_over = False
        self.outcome = IN_PROGRESS
        self.history = []
        log.debug("new round, mode=%s", self.mode.value)
        self._changed()

    def change_mode(self, mode):
        # mode changes always start fresh
        self.start_round(mode)

    def apply_move(self, index):
        """
        place active player's mark, check result
        returns: 'win', 'draw' or 'continue'; raises InvalidMove
        """
        if self.is_over:
            raise InvalidMove(index, "round is over")
        if isinstance(index, bool) or not isinstance(index, int) \
           or not 0 <= index < BOARD_CELLS:
            raise InvalidMove(index, "out of range")
        if self._board[index] != Cell.EMPTY:
            raise InvalidMove(index, "cell taken")

        player = self.active_player
        self._board[index] = player
        self.history.append(Move(index, player))
        log.debug("%s -> %d", player.value, index)

        outcome = evaluate(self._board)
        if outcome.done:
            self._end_round(outcome)
            return "win" if outcome.is_win else "draw"

        self.active_player = player.opponent
        self._changed()
        return "continue"

    def computer_turn(self):
        """
        let the search pick a move and apply it like a human one
        """
        if not self.is_computer_turn:
            raise InvalidModeForComputerTurn(
                f"computer turn not allowed (mode={self.mode.value}, "
                f"to move={self.active_player.value}, over={self.is_over})"
            )
        return self.apply_move(best_move(self._board, self.computer))

    def undo(self):
        """
        take back the last move (local) or last move pair (vs computer)
        always hands the turn back to X
        """
        if not self.history:
            return []
        steps = 2 if self.mode == GameMode.VS_COMPUTER else 1
        popped = []
        for _ in range(steps):
            if not self.history:
                break
            move = self.history.pop()
            self._board[move.index] = Cell.EMPTY
            popped.append(move)
        # TODO: derive the side to move from len(history) once intended undo behaviour is settled
        self.active_player = FIRST_PLAYER
        self.is_over = False
        self.outcome = IN_PROGRESS
        log.debug("undo %s", [m.index for m in popped])
        self._changed()
        return popped

    def status_message(self):
        if self.is_over:
            return self.outcome.message
        return f"{self.active_player.value} to move"

    def _end_round(self, outcome):
        self.is_over = True
        self.outcome = outcome
        self.scoreboard.record(outcome)
        log.debug("round over: %s", outcome.message)
        self._changed()
        if self.on_round_end:
            self.on_round_end(outcome)

    def _changed(self):
        if self.on_change:
            self.on_change()
