"""Move history as a linked list that can rewind and replay a board grid."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator, List, Optional

from .pieces import Piece

BOARD_SIZE = 8

Grid = List[List[Optional[Piece]]]


def empty_grid() -> Grid:
    """An 8x8 grid of empty squares, indexed as grid[file][rank]."""
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@dataclass(eq=False)
class MoveNode:
    """The most recent move, linked to the moves before it.

    A node whose ``previous`` is None marks the start of the history and
    holds no move.
    """

    old_file: int = -1
    old_rank: int = -1
    new_file: int = -1
    new_rank: int = -1
    en_passant: bool = False
    promoted_piece: Optional[Piece] = None
    captured_piece: Optional[Piece] = None
    previous: Optional[MoveNode] = field(default=None, repr=False)

    def add_move(
        self,
        old_file: int,
        old_rank: int,
        new_file: int,
        new_rank: int,
        en_passant: bool,
        promoted_piece: Optional[Piece],
        captured_piece: Optional[Piece],
    ) -> None:
        """Record a new move in this node, pushing its former contents back."""
        self.previous = replace(self)
        self.old_file = old_file
        self.old_rank = old_rank
        self.new_file = new_file
        self.new_rank = new_rank
        self.en_passant = en_passant
        self.promoted_piece = promoted_piece
        self.captured_piece = captured_piece

    def back(self, distance: int) -> MoveNode:
        """The node ``distance`` moves back, stopping at the start of the history."""
        node = self
        while node.previous is not None:
            if distance <= 1:
                return node.previous
            node = node.previous
            distance -= 1
        return node

    def __iter__(self) -> Iterator[MoveNode]:
        """Yield the recorded moves, newest first."""
        node = self
        while node.previous is not None:
            yield node
            node = node.previous

    def _recorded(self, moves: int) -> list[MoveNode]:
        nodes = []
        node = self
        for _ in range(moves):
            if node.previous is None:
                raise ValueError(f"history holds fewer than {moves} moves")
            nodes.append(node)
            node = node.previous
        return nodes

    def reverse_board(self, grid: Grid, moves: int) -> None:
        """Take back the last ``moves`` moves on ``grid``, newest first."""
        if moves < 1:
            raise ValueError("at least one move must be reversed")
        for node in self._recorded(moves):
            node._take_back(grid)

    def unreverse_board(self, grid: Grid, moves: int) -> None:
        """Replay the last ``moves`` moves on ``grid``, oldest first."""
        if moves < 0:
            raise ValueError("the number of moves cannot be negative")
        for node in reversed(self._recorded(moves)):
            node._replay(grid)

    def _take_back(self, grid: Grid) -> None:
        mover = grid[self.new_file][self.new_rank]
        if mover is None:
            raise ValueError("no piece stands on the destination square")
        grid[self.old_file][self.old_rank] = mover

        if self.en_passant:
            grid[self.new_file][self.new_rank] = None
            grid[self.new_file][self.old_rank] = self.captured_piece
        else:
            grid[self.new_file][self.new_rank] = self.captured_piece

        mover.reverse_move()
        if self.captured_piece is not None:
            self.captured_piece.reverse_move()

        if mover.kind == "k" and abs(self.new_file - self.old_file) == 2:
            if self.new_file > self.old_file:
                rook_from, rook_home = self.new_file - 1, BOARD_SIZE - 1
            else:
                rook_from, rook_home = self.new_file + 1, 0
            rook = grid[rook_from][self.new_rank]
            grid[rook_home][self.old_rank] = rook
            grid[rook_from][self.new_rank] = None
            rook.reverse_move()

        if self.promoted_piece is not None:
            grid[self.old_file][self.old_rank] = self.promoted_piece
            self.promoted_piece = mover

    def _replay(self, grid: Grid) -> None:
        mover = grid[self.old_file][self.old_rank]
        if mover is None:
            raise ValueError("no piece stands on the source square")
        grid[self.new_file][self.new_rank] = mover
        grid[self.old_file][self.old_rank] = None

        mover.move()
        if self.captured_piece is not None:
            self.captured_piece.capture()

        if self.en_passant:
            grid[self.new_file][self.old_rank] = None

        if mover.kind == "k" and abs(self.new_file - self.old_file) == 2:
            if self.new_file > self.old_file:
                rook_home, rook_to = BOARD_SIZE - 1, self.new_file - 1
            else:
                rook_home, rook_to = 0, self.new_file + 1
            rook = grid[rook_home][self.old_rank]
            grid[rook_to][self.old_rank] = rook
            grid[rook_home][self.old_rank] = None
            rook.move()

        if self.promoted_piece is not None:
            grid[self.new_file][self.new_rank] = self.promoted_piece
            self.promoted_piece.move()
            self.promoted_piece = mover