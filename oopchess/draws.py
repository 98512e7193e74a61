"""Draw rules: threefold repetition, the fifty-move rule and insufficient material."""

from __future__ import annotations

from .board import Gameboard, en_passant_target
from .moves import BOARD_SIZE, Grid, MoveNode

_CASTLING_MOVES = ((4, 7, 2, 7), (4, 7, 6, 7), (4, 0, 2, 0), (4, 0, 6, 0))
_DIAGONALS = ((1, 1), (-1, 1), (1, -1), (-1, -1))
_FIFTY_MOVES = 99


def _copy_grid(grid: Grid) -> Grid:
    return [column[:] for column in grid]


def _piece_count(grid: Grid) -> int:
    return sum(piece is not None for column in grid for piece in column)


def _castling_rights(board: Gameboard) -> tuple[bool, ...]:
    return tuple(board.is_castling(*move) for move in _CASTLING_MOVES)


def _en_passant_possible(grid: Grid, node: MoveNode, file: int, rank: int) -> bool:
    for file_step, rank_step in _DIAGONALS:
        new_file, new_rank = file + file_step, rank + rank_step
        if not (0 <= new_file < BOARD_SIZE and 0 <= new_rank < BOARD_SIZE):
            continue
        target = en_passant_target(grid, node, file, rank, new_file, new_rank)
        if target is not grid[new_file][new_rank]:
            return True
    return False


def threefold_repetition(board: Gameboard) -> bool:
    """Whether the current position has occurred three times.

    The history is stepped back two moves at a time; the search stops as
    soon as a pawn has moved, a piece was captured, castling rights changed
    or an en passant capture was available.
    """
    history = board.prev_move
    rights = _castling_rights(board)
    piece_count = _piece_count(board.grid)
    past = _copy_grid(board.grid)
    node = history
    depth = 0
    repeats = 1

    try:
        while True:
            if node.back(2).previous is None:
                return False
            node.reverse_board(past, 2)
            depth += 2
            node = history.back(depth)

            same = True
            old_count = 0
            for file in range(BOARD_SIZE):
                for rank in range(BOARD_SIZE):
                    old = past[file][rank]
                    current = board.grid[file][rank]
                    if old is not current:
                        same = False
                    if old is None:
                        continue
                    old_count += 1
                    if old is not current and old.kind == "p":
                        return False
                    if _en_passant_possible(past, node, file, rank):
                        return False

            if old_count and _castling_rights(board) != rights:
                return False
            if old_count != piece_count:
                return False
            if same:
                repeats += 1
            if repeats == 3:
                return True
    finally:
        history.unreverse_board(past, depth)


def fifty_move_rule(board: Gameboard) -> bool:
    """Whether the last moves went by without a capture or a pawn move."""
    history = board.prev_move
    if history.back(_FIFTY_MOVES).previous is None:
        return False

    past = _copy_grid(board.grid)
    history.reverse_board(past, _FIFTY_MOVES)
    try:
        old_count = _piece_count(past)
        count = _piece_count(board.grid)
        pawn_moved = any(
            piece is not None and piece.kind == "p" and piece is not past[file][rank]
            for file, column in enumerate(board.grid)
            for rank, piece in enumerate(column)
        )
    finally:
        history.unreverse_board(past, _FIFTY_MOVES)

    return not (pawn_moved or count < old_count)


def insufficient_material(board: Gameboard) -> bool:
    """Whether neither side has enough material left to give checkmate."""
    white_minor = False
    black_minor = False
    for column in board.grid:
        for piece in column:
            if piece is None:
                continue
            name = piece.name
            if name in "prqPRQ":
                return False
            if name in "NB":
                if white_minor:
                    return False
                white_minor = True
            elif name in "nb":
                if black_minor:
                    return False
                black_minor = True
    return True