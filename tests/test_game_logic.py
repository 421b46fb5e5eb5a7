import pytest

from tictactoe_ai.errors import InvalidModeForComputerTurn, InvalidMove
from tictactoe_ai.evaluator import Cell, evaluate
from tictactoe_ai.game_logic import GameEngine, GameMode, Move, Scoreboard

X, O, _ = Cell.X, Cell.O, Cell.EMPTY


def _snapshot(engine):
    return (engine.board, engine.active_player, engine.is_over,
            list(engine.history), engine.mode, engine.outcome)


@pytest.fixture
def engine():
    return GameEngine()


@pytest.fixture
def cpu_engine():
    return GameEngine(mode=GameMode.VS_COMPUTER)


def test_fresh_round(engine):
    assert engine.board == (_,) * 9
    assert engine.active_player == X
    assert not engine.is_over
    assert engine.history == []
    assert engine.mode == GameMode.LOCAL
    assert engine.status_message() == "X to move"


def test_move_records_history_and_swaps(engine):
    assert engine.apply_move(4) == "continue"
    assert engine.board[4] == X
    assert engine.history == [Move(4, X)]
    assert engine.active_player == O
    assert engine.status_message() == "O to move"


def test_top_row_win_scores_for_x(engine, play):
    play(engine, 0, 3, 1, 4)
    assert engine.board == (X, X, _, O, O, _, _, _, _)
    assert engine.active_player == X
    assert engine.apply_move(2) == "win"
    assert engine.is_over
    assert engine.outcome.winner == X
    assert engine.outcome.line == (0, 1, 2)
    assert engine.scoreboard.wins_x == 1
    assert engine.scoreboard.wins_o == 0
    assert engine.status_message() == "X wins!"
    # turn not passed on after the win
    assert engine.active_player == X


def test_draw_counts(engine, play):
    assert play(engine, 0, 1, 2, 4, 3, 5, 7, 6, 8) == "draw"
    assert engine.board == (X, O, X, X, O, O, O, X, X)
    assert engine.is_over
    assert engine.outcome.is_draw
    assert engine.scoreboard.draws == 1
    assert engine.status_message() == "It's a draw!"


def test_active_player_alternates(engine, play):
    order = [4, 0, 8, 2, 1, 7, 6, 3, 5]
    for n, index in enumerate(order, start=1):
        if engine.is_over:
            break
        assert engine.active_player == (X if n % 2 == 1 else O)
        engine.apply_move(index)
        assert len(engine.history) == sum(c != _ for c in engine.board)


@pytest.mark.parametrize("index", [-1, 9, 100, "3", 2.0, None, True])
def test_bad_index_rejected(engine, index):
    engine.apply_move(0)
    before = _snapshot(engine)
    with pytest.raises(InvalidMove):
        engine.apply_move(index)
    assert _snapshot(engine) == before


def test_occupied_cell_rejected(engine):
    engine.apply_move(0)
    before = _snapshot(engine)
    with pytest.raises(InvalidMove) as info:
        engine.apply_move(0)
    assert info.value.index == 0
    assert _snapshot(engine) == before


def test_no_moves_after_round_over(engine, play):
    play(engine, 0, 3, 1, 4, 2)
    before = _snapshot(engine)
    with pytest.raises(InvalidMove):
        engine.apply_move(8)
    assert _snapshot(engine) == before
    assert engine.scoreboard.wins_x == 1


def test_is_over_matches_evaluator(engine, play):
    for index in (4, 0, 8, 2, 1, 7, 6, 3, 5):
        if engine.is_over:
            break
        engine.apply_move(index)
        assert engine.is_over == evaluate(engine.board).done


def test_start_round_keeps_mode_and_scores(cpu_engine):
    cpu_engine.apply_move(0)
    cpu_engine.computer_turn()
    cpu_engine.scoreboard.wins_o = 2
    cpu_engine.start_round()
    assert cpu_engine.mode == GameMode.VS_COMPUTER
    assert cpu_engine.board == (_,) * 9
    assert cpu_engine.history == []
    assert cpu_engine.active_player == X
    assert cpu_engine.scoreboard.wins_o == 2


def test_change_mode_starts_fresh(engine, play):
    play(engine, 0, 1)
    engine.change_mode(GameMode.VS_COMPUTER)
    assert engine.mode == GameMode.VS_COMPUTER
    assert engine.history == []
    assert engine.board == (_,) * 9
    engine.change_mode("local")
    assert engine.mode == GameMode.LOCAL


def test_board_snapshot_is_read_only(engine):
    board = engine.board
    assert isinstance(board, tuple)
    engine.apply_move(0)
    assert board[0] == _


# -- undo --

def test_undo_local_pops_one(engine, play):
    play(engine, 0, 4)
    popped = engine.undo()
    assert popped == [Move(4, O)]
    assert engine.board == (X, _, _, _, _, _, _, _, _)
    assert engine.history == [Move(0, X)]


def test_undo_forces_x_to_move(engine):
    engine.apply_move(0)
    assert engine.active_player == O
    engine.undo()
    assert engine.active_player == X
    # same after a single undo with one X move left in history
    engine.apply_move(0)
    engine.apply_move(1)
    engine.undo()
    assert engine.history == [Move(0, X)]
    assert engine.active_player == X


def test_undo_clears_over(engine, play):
    play(engine, 0, 3, 1, 4, 2)
    engine.undo()
    assert not engine.is_over
    assert not engine.outcome.done
    assert engine.board[2] == _
    # finished rounds stay counted
    assert engine.scoreboard.wins_x == 1
    assert engine.apply_move(2) == "win"
    assert engine.scoreboard.wins_x == 2


def test_undo_empty_history_noop(engine):
    calls = []
    engine.on_change = lambda: calls.append(1)
    assert engine.undo() == []
    assert calls == []
    assert engine.board == (_,) * 9


def test_undo_until_empty(engine, play):
    play(engine, 0, 1, 2, 4, 3, 5, 7, 6, 8)
    assert engine.is_over
    steps = 0
    while engine.history:
        engine.undo()
        steps += 1
    assert steps == 9
    assert engine.board == (_,) * 9
    assert engine.history == []


def test_undo_vs_computer_pops_pair(cpu_engine):
    cpu_engine.apply_move(0)
    cpu_engine.computer_turn()
    cpu_engine.apply_move(cpu_engine.board.index(_))
    cpu_engine.computer_turn()
    assert cpu_engine.move_count == 4
    popped = cpu_engine.undo()
    assert len(popped) == 2
    assert [m.player for m in popped] == [O, X]
    assert cpu_engine.move_count == 2
    assert sum(c != _ for c in cpu_engine.board) == 2


def test_undo_vs_computer_stops_when_history_runs_out(cpu_engine):
    cpu_engine.apply_move(4)
    popped = cpu_engine.undo()
    assert popped == [Move(4, X)]
    assert cpu_engine.history == []
    assert cpu_engine.undo() == []


# -- computer turn --

def test_computer_turn_rejected_in_local_mode(engine):
    engine.apply_move(0)
    with pytest.raises(InvalidModeForComputerTurn):
        engine.computer_turn()
    assert engine.move_count == 1


def test_computer_turn_rejected_out_of_turn(cpu_engine):
    assert not cpu_engine.is_computer_turn
    with pytest.raises(InvalidModeForComputerTurn):
        cpu_engine.computer_turn()


def test_computer_turn_is_assertion(cpu_engine):
    with pytest.raises(AssertionError):
        cpu_engine.computer_turn()


def test_computer_turn_rejected_after_round_over():
    engine = GameEngine(mode=GameMode.VS_COMPUTER, computer=X)
    # X is the computer here, so it opens
    assert engine.is_computer_turn
    while not engine.is_over:
        if engine.is_computer_turn:
            engine.computer_turn()
        else:
            engine.apply_move(engine.board.index(_))
    with pytest.raises(InvalidModeForComputerTurn):
        engine.computer_turn()


def test_computer_blocks(cpu_engine, play):
    play(cpu_engine, 0)
    assert cpu_engine.is_computer_turn
    cpu_engine.computer_turn()
    # center is the only reply to a corner that does not lose
    assert cpu_engine.board[4] == O
    cpu_engine.apply_move(1)
    cpu_engine.computer_turn()
    assert cpu_engine.board[2] == O


def test_computer_wins_scores_for_o(cpu_engine):
    # X keeps taking the lowest free cell, O should win
    while not cpu_engine.is_over:
        if cpu_engine.is_computer_turn:
            cpu_engine.computer_turn()
        else:
            cpu_engine.apply_move(cpu_engine.board.index(_))
    assert cpu_engine.outcome.winner == O
    assert cpu_engine.scoreboard.wins_o == 1
    assert cpu_engine.scoreboard.wins_x == 0


# -- notifications --

def test_callbacks():
    changes, ends = [], []
    engine = GameEngine(on_change=lambda: changes.append(1), on_round_end=ends.append)
    for index in (0, 3, 1, 4):
        engine.apply_move(index)
    assert len(changes) == 4
    assert ends == []
    engine.apply_move(2)
    assert len(ends) == 1
    assert ends[0].winner == X
    assert ends[0].line == (0, 1, 2)
    engine.undo()
    engine.start_round()
    assert len(changes) == 7
    assert len(ends) == 1


def test_shared_scoreboard():
    scores = Scoreboard()
    engine = GameEngine(scoreboard=scores)
    for index in (0, 3, 1, 4, 2):
        engine.apply_move(index)
    assert engine.scoreboard is scores
    assert scores.wins_x == 1


def test_scoreboard_ignores_unfinished_and_resets():
    scores = Scoreboard()
    scores.record(evaluate([_] * 9))
    assert (scores.wins_x, scores.wins_o, scores.draws) == (0, 0, 0)
    scores.record(evaluate([O, O, O, X, X, _, X, _, _]))
    scores.record(evaluate([X, O, X, X, O, O, O, X, X]))
    assert (scores.wins_x, scores.wins_o, scores.draws) == (0, 1, 1)
    scores.reset()
    assert (scores.wins_x, scores.wins_o, scores.draws) == (0, 0, 0)
