import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

X = 'X'  # Human, always moves first
O = 'O'  # Computer opponent
MARKS = (X, O)

BOARD_SIZE = 9

# Winning lines as cell indices (row-major board)
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)

ONGOING = 'ongoing'
WIN = 'win'
DRAW = 'draw'


class TicTacToeError(Exception):
    """Base class for game errors."""


class InvalidMove(TicTacToeError, ValueError):
    """Move on an occupied cell, an out-of-range index or a finished game."""


class InvalidMark(TicTacToeError, ValueError):
    """Mark outside of X/O."""


@dataclass(frozen=True)
class GameOutcome:
    status: str
    winner: Optional[str] = None
    line: Optional[tuple] = None

    @property
    def is_over(self):
        return self.status != ONGOING

    def __str__(self):
        if self.status == WIN:
            return f"{self.winner} wins"
        if self.status == DRAW:
            return "Draw"
        return "Ongoing"


def new_board():
    return [None] * BOARD_SIZE


def check_mark(mark):
    if mark not in MARKS:
        raise InvalidMark(f"Invalid mark {mark!r}, expected one of {MARKS}")
    return mark


def opponent(mark):
    return O if check_mark(mark) == X else X


def apply_move(board, index, mark):
    """Place mark on board[index] in place and return the board."""
    check_mark(mark)
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < BOARD_SIZE:
        raise InvalidMove(f"Cell index {index!r} out of range 0-{BOARD_SIZE - 1}")
    if board[index] is not None:
        raise InvalidMove(f"Cell {index} is already occupied by {board[index]}")
    board[index] = mark
    return board


def find_winning_line(board):
    # First complete line in table order
    for line in WIN_LINES:
        a, b, c = line
        if board[a] is not None and board[a] == board[b] == board[c]:
            return line
    return None


def is_full(board):
    return all(cell is not None for cell in board)


def empty_cells(board):
    return [i for i, cell in enumerate(board) if cell is None]


def classify(board):
    line = find_winning_line(board)
    if line is not None:
        return GameOutcome(WIN, winner=board[line[0]], line=line)
    if is_full(board):
        return GameOutcome(DRAW)
    return GameOutcome(ONGOING)


class TicTacToe:
    """Game session: the board, whose turn it is and the running score tally."""

    def __init__(self):
        self.board = new_board()
        self.current_player = X  # X goes first
        self.outcome = GameOutcome(ONGOING)
        # Session tally, kept across restarts
        self.scores = {X: 0, O: 0, 'Draw': 0}

    def reset_game(self):
        # Clear the board but keep the score
        self.board = new_board()
        self.current_player = X
        self.outcome = GameOutcome(ONGOING)

    def make_move(self, index):
        if self.outcome.is_over:
            raise InvalidMove("Game is already over")

        apply_move(self.board, index, self.current_player)
        self.outcome = classify(self.board)

        if self.outcome.is_over:
            self._record(self.outcome)
        else:
            self.current_player = opponent(self.current_player)
        return self.outcome

    def _record(self, outcome):
        key = outcome.winner if outcome.status == WIN else 'Draw'
        self.scores[key] += 1
        logger.info("Game over: %s (X %d, O %d, draws %d)", outcome,
                    self.scores[X], self.scores[O], self.scores['Draw'])

    @property
    def winner(self):
        return self.outcome.winner

    @property
    def winning_line(self):
        return self.outcome.line

    def get_available_moves(self):
        return empty_cells(self.board)

    def is_game_over(self):
        return self.outcome.is_over
