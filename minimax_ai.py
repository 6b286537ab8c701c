import logging
from dataclasses import dataclass

from game import O, X, InvalidMove, check_mark, find_winning_line, is_full

logger = logging.getLogger(__name__)

WIN_SCORE = 10


@dataclass(frozen=True)
class Move:
    """A candidate cell and its backed-up score. index is None on terminal boards."""
    index: int
    score: int


class MinimaxAI:
    """
    Full-depth minimax opponent.

    O maximizes and X minimizes. Terminal scores are +10 for an O line,
    -10 for an X line and 0 for a draw, independent of depth. Children are
    tried in ascending index order and only a strictly better score replaces
    the current best, so the lowest index wins ties.
    """

    def __init__(self, player=O):
        self.player = check_mark(player)
        self.nodes_evaluated = 0

    def evaluate(self, board):
        line = find_winning_line(board)
        if line is None:
            return None
        return WIN_SCORE if board[line[0]] == O else -WIN_SCORE

    def search(self, board, mark):
        check_mark(mark)
        # Private working copy, the caller's board is never touched
        work = list(board)
        self.nodes_evaluated = 0
        move = self.minimax(work, mark)
        logger.debug("minimax(%s) evaluated %d nodes -> index=%s score=%d",
                     mark, self.nodes_evaluated, move.index, move.score)
        return move

    def minimax(self, board, mark):
        self.nodes_evaluated += 1

        # Terminal states
        score = self.evaluate(board)
        if score is not None:
            return Move(None, score)
        if is_full(board):
            return Move(None, 0)

        next_mark = X if mark == O else O
        moves = []
        for i in range(len(board)):
            if board[i] is None:
                board[i] = mark
                try:
                    result = self.minimax(board, next_mark)
                finally:
                    board[i] = None
                moves.append(Move(i, result.score))

        best = moves[0]
        for move in moves[1:]:
            if mark == O and move.score > best.score:
                best = move
            elif mark == X and move.score < best.score:
                best = move
        return best

    def best_move(self, board):
        """Return the cell index the AI plays on board."""
        move = self.search(board, self.player)
        if move.index is None:
            raise InvalidMove("No move available on a finished board")
        return move.index

    def set_player(self, player):
        """Set the player marker (X or O)."""
        self.player = check_mark(player)


def search(board, mark):
    return MinimaxAI().search(board, mark)
