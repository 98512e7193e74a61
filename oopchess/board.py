"""The chess board: piece placement, move legality, check and mate."""

from __future__ import annotations

from typing import Iterator, Mapping, Optional

from .moves import BOARD_SIZE, Grid, MoveNode, empty_grid
from .pieces import Color, Piece, Queen

_FILE_LETTERS = "ABCDEFGH"


def _on_board(file: int, rank: int) -> bool:
    return 0 <= file < BOARD_SIZE and 0 <= rank < BOARD_SIZE


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def en_passant_target(
    grid: Grid,
    node: MoveNode,
    old_file: int,
    old_rank: int,
    new_file: int,
    new_rank: int,
) -> Optional[Piece]:
    """The piece a move would capture, taking en passant into account.

    ``node`` is the most recent move; a pawn that has just advanced two
    squares beside the moving pawn is the target instead of whatever stands
    on the destination square.
    """
    source = grid[old_file][old_rank]
    target = grid[new_file][new_rank]
    if source is None or source.kind != "p":
        return target

    candidate = grid[new_file][old_rank]
    if (
        candidate is None
        or candidate.kind != "p"
        or candidate.color is source.color
        or candidate.move_count != 1
    ):
        return target
    if node.new_file != new_file or node.new_rank != old_rank:
        return target
    return candidate


class Gameboard:
    """An 8x8 board indexed as ``grid[file][rank]`` with its move history."""

    def __init__(self) -> None:
        self.grid: Grid = empty_grid()
        self.prev_move = MoveNode()
        self._latest_move: Optional[MoveNode] = None

    @staticmethod
    def _require_square(file: int, rank: int) -> None:
        if not _on_board(file, rank):
            raise IndexError(f"square ({file}, {rank}) is off the board")

    def _occupied(self) -> Iterator[tuple[int, int, Piece]]:
        for file, column in enumerate(self.grid):
            for rank, piece in enumerate(column):
                if piece is not None:
                    yield file, rank, piece

    # Placement

    def add_piece(self, file: int, rank: int, piece: Piece) -> None:
        self._require_square(file, rank)
        self.grid[file][rank] = piece

    def remove_piece(self, file: int, rank: int) -> None:
        self._require_square(file, rank)
        self.grid[file][rank] = None

    def clear(self) -> None:
        """Remove every piece and forget the move history."""
        self.grid = empty_grid()
        self.prev_move = MoveNode()
        self._latest_move = None

    def get_piece(self, file: int, rank: int) -> Optional[Piece]:
        self._require_square(file, rank)
        return self.grid[file][rank]

    # Move rules

    def target_with_en_passant(
        self, old_file: int, old_rank: int, new_file: int, new_rank: int
    ) -> Optional[Piece]:
        return en_passant_target(
            self.grid, self.prev_move, old_file, old_rank, new_file, new_rank
        )

    def _path_clear(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        file_delta = new_file - old_file
        rank_delta = new_rank - old_rank
        if file_delta and rank_delta and abs(file_delta) != abs(rank_delta):
            return True
        file_step, rank_step = _sign(file_delta), _sign(rank_delta)
        steps = max(abs(file_delta), abs(rank_delta))
        return all(
            self.grid[old_file + i * file_step][old_rank + i * rank_step] is None
            for i in range(1, steps)
        )

    def is_castling(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        """Whether the move is a legal castling move of a king."""
        if not (_on_board(old_file, old_rank) and _on_board(new_file, new_rank)):
            return False
        king = self.grid[old_file][old_rank]
        if king is None or king.kind != "k" or king.move_count != 0:
            return False
        if old_rank != new_rank or abs(new_file - old_file) != 2:
            return False

        if new_file > old_file:
            rook_file, step = BOARD_SIZE - 1, 1
        else:
            rook_file, step = 0, -1
        rook = self.grid[rook_file][old_rank]
        if (
            rook is None
            or rook.kind != "r"
            or rook.color is not king.color
            or rook.move_count != 0
        ):
            return False
        if not self._path_clear(old_file, old_rank, rook_file, new_rank):
            return False
        return not any(
            self.is_threatened(king.color, old_file + i * step, old_rank) for i in range(3)
        )

    def castle(self, old_file: int, new_file: int, rank: int) -> None:
        """Move king and rook to their castled squares; assumes the castle is valid."""
        king = self.grid[old_file][rank]
        self.grid[new_file][rank] = king
        self.grid[old_file][rank] = None

        if new_file > old_file:
            rook_home, rook_to = BOARD_SIZE - 1, new_file - 1
        else:
            rook_home, rook_to = 0, new_file + 1
        rook = self.grid[rook_home][rank]
        self.grid[rook_to][rank] = rook
        self.grid[rook_home][rank] = None

        king.move()
        rook.move()

    def _valid_move(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        if self.is_castling(old_file, old_rank, new_file, new_rank):
            return True
        piece = self.grid[old_file][old_rank]
        if not piece.can_move(old_file, old_rank, new_file, new_rank):
            return False
        self.grid[old_file][old_rank] = None
        self.grid[new_file][new_rank] = piece
        try:
            return not self.is_in_check(piece.color)
        finally:
            self.grid[new_file][new_rank] = None
            self.grid[old_file][old_rank] = piece

    def _valid_capture(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        piece = self.grid[old_file][old_rank]
        target = self.target_with_en_passant(old_file, old_rank, new_file, new_rank)
        en_passant = target is not self.grid[new_file][new_rank]

        if piece.color is target.color:
            return False
        if not piece.can_capture(old_file, old_rank, new_file, new_rank):
            return False

        captured_rank = old_rank if en_passant else new_rank
        self.grid[old_file][old_rank] = None
        if en_passant:
            self.grid[new_file][old_rank] = None
        self.grid[new_file][new_rank] = piece
        try:
            return not self.is_in_check(piece.color)
        finally:
            self.grid[new_file][new_rank] = None
            self.grid[old_file][old_rank] = piece
            self.grid[new_file][captured_rank] = target

    def _valid_movement(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        if not (_on_board(old_file, old_rank) and _on_board(new_file, new_rank)):
            return False
        if self.grid[old_file][old_rank] is None:
            return False
        target = self.target_with_en_passant(old_file, old_rank, new_file, new_rank)
        if (old_file, old_rank) == (new_file, new_rank):
            return False
        if not self._path_clear(old_file, old_rank, new_file, new_rank):
            return False
        if target is None:
            return self._valid_move(old_file, old_rank, new_file, new_rank)
        return self._valid_capture(old_file, old_rank, new_file, new_rank)

    def move_piece(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        """Make the move if it is legal; return whether it was made."""
        if not self._valid_movement(old_file, old_rank, new_file, new_rank):
            return False

        if self.is_castling(old_file, old_rank, new_file, new_rank):
            self.castle(old_file, new_file, new_rank)
            self.prev_move.add_move(old_file, old_rank, new_file, new_rank, False, None, None)
            return True

        piece = self.grid[old_file][old_rank]
        target = self.target_with_en_passant(old_file, old_rank, new_file, new_rank)
        en_passant = target is not self.grid[new_file][new_rank]

        if en_passant:
            self.grid[new_file][old_rank] = None
        if target is not None:
            target.capture()

        piece.move()
        self.grid[old_file][old_rank] = None
        self.grid[new_file][new_rank] = piece

        replaced: Optional[Piece] = None
        last_rank = BOARD_SIZE - 1 if piece.color is Color.WHITE else 0
        if piece.kind == "p" and new_rank == last_rank:
            queen = Queen(piece.color)
            queen.move_count = piece.move_count
            self.grid[new_file][new_rank] = queen
            replaced = piece

        self.prev_move.add_move(
            old_file, old_rank, new_file, new_rank, en_passant, replaced, target
        )
        return True

    # Check and mate

    def king_coords(self, color: Color | str) -> Optional[tuple[int, int]]:
        """(file, rank) of the king of ``color``, or None if it has no king."""
        color = Color(color)
        for file, rank, piece in self._occupied():
            if piece.color is color and piece.kind == "k":
                return file, rank
        return None

    def is_threatened(self, color: Color | str, file: int, rank: int) -> bool:
        """Whether a piece of the other colour could capture on the square."""
        color = Color(color)
        for enemy_file, enemy_rank, piece in self._occupied():
            if (enemy_file, enemy_rank) == (file, rank) or piece.color is color:
                continue
            if piece.can_capture(enemy_file, enemy_rank, file, rank) and self._path_clear(
                enemy_file, enemy_rank, file, rank
            ):
                return True
        return False

    def is_in_check(self, color: Color | str) -> bool:
        coords = self.king_coords(color)
        if coords is None:
            return False
        return self.is_threatened(color, *coords)

    def is_in_mate(self, color: Color | str) -> bool:
        """Whether ``color`` has no legal move at all."""
        color = Color(color)
        friendly = [(f, r) for f, r, piece in self._occupied() if piece.color is color]
        return not any(
            self._valid_movement(file, rank, new_file, new_rank)
            for file, rank in friendly
            for new_file in range(BOARD_SIZE)
            for new_rank in range(BOARD_SIZE)
        )

    def is_in_checkmate(self, color: Color | str) -> bool:
        return self.is_in_check(color) and self.is_in_mate(color)

    def is_in_stalemate(self, color: Color | str) -> bool:
        return not self.is_in_check(color) and self.is_in_mate(color)

    # Display and inspection

    def render(self, color: Color | str = Color.WHITE) -> str:
        """The board as text, seen from the side of ``color``."""
        if Color(color) is Color.BLACK:
            files = range(BOARD_SIZE - 1, -1, -1)
            ranks = range(BOARD_SIZE)
        else:
            files = range(BOARD_SIZE)
            ranks = range(BOARD_SIZE - 1, -1, -1)

        header = "  " + " ".join(_FILE_LETTERS[f] for f in files)
        lines = [header]
        for rank in ranks:
            cells = "".join(
                ("." if self.grid[f][rank] is None else self.grid[f][rank].name) + " "
                for f in files
            )
            lines.append(f"{rank + 1} {cells}{rank + 1}")
        lines.append(header)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()

    def matches(self, placements: Mapping[tuple[int, int], Piece]) -> bool:
        """Whether exactly these pieces stand on these squares and all others are empty."""
        return all(
            self.grid[file][rank] is placements.get((file, rank))
            for file in range(BOARD_SIZE)
            for rank in range(BOARD_SIZE)
        )

    # History

    def move_count(self) -> int:
        """Number of moves recorded in the history."""
        return sum(1 for _ in self.prev_move)

    def reverse_board(self, moves: int) -> None:
        """Take back the last ``moves`` moves until :meth:`unreverse_board` is called."""
        self.prev_move.reverse_board(self.grid, moves)
        self._latest_move = self.prev_move
        self.prev_move = self.prev_move.back(moves)

    def unreverse_board(self, moves: int) -> None:
        """Replay the moves taken back by :meth:`reverse_board`."""
        if self._latest_move is None:
            raise RuntimeError("the board has not been reversed")
        self.prev_move = self._latest_move
        self._latest_move = None
        self.prev_move.unreverse_board(self.grid, moves)