import logging
from typing import Optional, get_type_hints

import pytest

from game import (
    DRAW, O, ONGOING, WIN, WIN_LINES, X, GameOutcome,
    InvalidMark, InvalidMove, TicTacToe, TicTacToeError,
    apply_move, classify, empty_cells, find_winning_line, is_full, new_board, opponent,
)


def board_from(s):
    # 'XO.' notation, row-major
    return [None if c == '.' else c for c in s]


def test_win_lines_table():
    assert len(WIN_LINES) == 8
    assert WIN_LINES[:3] == ((0, 1, 2), (3, 4, 5), (6, 7, 8))
    assert WIN_LINES[3:6] == ((0, 3, 6), (1, 4, 7), (2, 5, 8))
    assert WIN_LINES[6:] == ((0, 4, 8), (2, 4, 6))


def test_new_board_is_empty_and_ongoing():
    board = new_board()
    assert board == [None] * 9
    assert classify(board).status == ONGOING
    assert empty_cells(board) == list(range(9))


def test_apply_move_sets_cell_in_place():
    board = new_board()
    result = apply_move(board, 4, X)
    assert result is board
    assert board[4] == X


@pytest.mark.parametrize("index", [-1, 9, 100, "4", 4.0, None, True])
def test_apply_move_rejects_bad_index(index):
    board = new_board()
    with pytest.raises(InvalidMove):
        apply_move(board, index, X)
    assert board == new_board()


def test_apply_move_rejects_occupied_cell():
    board = board_from("X........")
    with pytest.raises(InvalidMove):
        apply_move(board, 0, O)
    assert board[0] == X


@pytest.mark.parametrize("mark", ["Z", "x", "", None, 1])
def test_apply_move_rejects_bad_mark(mark):
    with pytest.raises(InvalidMark):
        apply_move(new_board(), 0, mark)


def test_errors_share_a_base_class():
    assert issubclass(InvalidMove, TicTacToeError)
    assert issubclass(InvalidMark, TicTacToeError)
    assert issubclass(InvalidMove, ValueError)


def test_opponent():
    assert opponent(X) == O
    assert opponent(O) == X
    with pytest.raises(InvalidMark):
        opponent("Z")


@pytest.mark.parametrize("line", WIN_LINES)
def test_every_line_is_detected(line):
    board = new_board()
    for i in line:
        board[i] = O
    assert find_winning_line(board) == line
    outcome = classify(board)
    assert outcome.status == WIN
    assert outcome.winner == O
    assert outcome.line == line


def test_find_winning_line_reports_first_in_table_order():
    # Row 0 and column 0 both complete
    board = board_from("XXXX..X..")
    assert find_winning_line(board) == (0, 1, 2)


def test_mixed_line_is_not_a_win():
    board = board_from("XXO......")
    assert find_winning_line(board) is None
    assert classify(board).status == ONGOING


def test_full_board_with_o_row_is_a_win():
    board = board_from("OOOXXOXOX")
    assert is_full(board)
    outcome = classify(board)
    assert outcome.status == WIN
    assert outcome.winner == O
    assert outcome.line == (0, 1, 2)


def test_draw_board():
    board = [X, O, X, X, O, O, O, X, X]
    assert find_winning_line(board) is None
    assert is_full(board)
    outcome = classify(board)
    assert outcome.status == DRAW
    assert outcome.winner is None
    assert outcome.is_over
    assert str(outcome) == "Draw"


def test_is_full():
    assert not is_full(board_from("XOXOXOXO."))
    assert is_full(board_from("XOXOXOOXO"))


class TestSession:
    def test_turns_alternate_starting_with_x(self):
        game = TicTacToe()
        assert game.current_player == X
        game.make_move(0)
        assert game.board[0] == X
        assert game.current_player == O
        game.make_move(4)
        assert game.board[4] == O
        assert game.current_player == X

    def test_rejected_move_keeps_turn(self):
        game = TicTacToe()
        game.make_move(0)
        with pytest.raises(InvalidMove):
            game.make_move(0)
        assert game.current_player == O

    def test_win_is_tallied_once(self):
        game = TicTacToe()
        for i in (0, 3, 1, 4):
            game.make_move(i)
        outcome = game.make_move(2)
        assert outcome.status == WIN
        assert game.winner == X
        assert game.winning_line == (0, 1, 2)
        assert game.is_game_over()
        assert game.scores == {X: 1, O: 0, 'Draw': 0}

        with pytest.raises(InvalidMove):
            game.make_move(5)
        assert game.scores == {X: 1, O: 0, 'Draw': 0}

    def test_draw_is_tallied(self):
        game = TicTacToe()
        # Produces X O X / X O O / O X X
        for i in (0, 1, 2, 4, 3, 5, 7, 6, 8):
            outcome = game.make_move(i)
        assert game.board == [X, O, X, X, O, O, O, X, X]
        assert outcome.status == DRAW
        assert game.scores == {X: 0, O: 0, 'Draw': 1}

    def test_reset_keeps_score_and_is_idempotent(self):
        game = TicTacToe()
        for i in (0, 3, 1, 4, 2):
            game.make_move(i)

        game.reset_game()
        game.reset_game()
        assert game.board == [None] * 9
        assert game.current_player == X
        assert classify(game.board).status == ONGOING
        assert not game.is_game_over()
        assert game.get_available_moves() == list(range(9))
        assert game.scores[X] == 1

    def test_game_over_is_logged(self, caplog):
        game = TicTacToe()
        with caplog.at_level(logging.INFO, logger="game"):
            for i in (0, 3, 1, 4, 2):
                game.make_move(i)
        assert "Game over: X wins" in caplog.text


def test_outcome_fields_are_optional():
    hints = get_type_hints(GameOutcome)
    assert hints['winner'] == Optional[str]
    assert hints['line'] == Optional[tuple]
    outcome = GameOutcome(ONGOING)
    assert outcome.winner is None
    assert outcome.line is None
    assert not outcome.is_over
