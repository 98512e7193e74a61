"""Algebraic notation for recorded moves and a scrolling list of past moves."""

from __future__ import annotations

from .board import Gameboard
from .pieces import Color

_FILE_LETTERS = "abcdefgh"


def _square(file: int, rank: int) -> str:
    return f"{_FILE_LETTERS[file]}{rank + 1}"


def move_to_string(board: Gameboard) -> str:
    """The most recent move on ``board`` in short algebraic notation.

    Castling is written as ``O-O`` or ``O-O-O``, captures carry an ``x``,
    promotions end in ``=Q``; ``#`` is appended when either side has no
    legal move, otherwise ``+`` when either side is in check.
    """
    move = board.prev_move
    if move.previous is None:
        raise ValueError("no move has been recorded")
    piece = board.get_piece(move.new_file, move.new_rank)
    if piece is None:
        raise ValueError("no piece stands on the square of the last move")

    promoted = move.promoted_piece is not None
    kind = "p" if promoted else piece.kind
    shift = move.new_file - move.old_file

    if kind == "k" and shift > 1:
        text = "O-O"
    elif kind == "k" and shift < -1:
        text = "O-O-O"
    else:
        letter = "" if kind == "p" else kind.upper()
        capture = "x" if move.captured_piece is not None else ""
        promotion = "=Q" if promoted else ""
        text = f"{letter}{capture}{_square(move.new_file, move.new_rank)}{promotion}"

    if board.is_in_mate(Color.WHITE) or board.is_in_mate(Color.BLACK):
        text += "#"
    elif board.is_in_check(Color.WHITE) or board.is_in_check(Color.BLACK):
        text += "+"
    return text


class MoveStack:
    """The most recent moves of a game, numbered in white/black pairs.

    ``buttons`` is the number of controls sharing the panel; each one takes
    room that would otherwise hold four moves.
    """

    def __init__(self, buttons: int = 3) -> None:
        self.capacity = 27 - buttons * 4
        if self.capacity < 2:
            raise ValueError(f"no room for moves beside {buttons} buttons")
        self.history: list[str] = []
        self.past_moves = 0

    @property
    def text(self) -> str:
        """The displayed moves, one numbered line per pair."""
        lines = []
        start = 1 + self.past_moves
        for number, index in enumerate(range(0, len(self.history), 2), start=start):
            white = self.history[index]
            black = self.history[index + 1] if index + 1 < len(self.history) else ""
            lines.append(f"{number}. {white} {black}\n")
        return "".join(lines)

    def push(self, board: Gameboard) -> None:
        """Add the most recent move on ``board``, dropping old moves when full."""
        move = move_to_string(board)
        if len(self.history) > self.capacity:
            del self.history[0]
            del self.history[1]
            self.past_moves += 1
        self.history.append(move)

    def update_all(self, board: Gameboard) -> None:
        """Rebuild the list from the history of ``board``, leaving the board as it was."""
        self.reset()
        total = board.move_count()
        if total == 0:
            return
        black_move = total % 2 == 1
        self.past_moves = total // 2 - self.capacity

        start = self.capacity * 2 if black_move else self.capacity * 2 - 1
        for depth in range(start, 0, -1):
            if self.past_moves >= 0:
                board.reverse_board(depth)
                try:
                    self.push(board)
                finally:
                    board.unreverse_board(depth)
            elif (depth % 2 == 1) == black_move:
                self.past_moves += 1
        self.push(board)

    def reset(self) -> None:
        """Forget every move."""
        self.history.clear()
        self.past_moves = 0