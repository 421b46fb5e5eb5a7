import os

import pytest

# widgets render without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from tictactoe_ai.evaluator import Cell  # noqa: E402

_ = Cell.EMPTY
X = Cell.X
O = Cell.O


def board_from(text):
    """'XX.OO....' -> tuple of cells"""
    return tuple({"X": X, "O": O, ".": _}[ch] for ch in text)


@pytest.fixture
def play():
    def _play(engine, *indices):
        results = [engine.apply_move(i) for i in indices]
        return results[-1] if results else None
    return _play
