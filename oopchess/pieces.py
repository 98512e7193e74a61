"""Chess pieces and the geometry of their moves on an otherwise empty board."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar


class Color(Enum):
    """Side a piece belongs to, stored as the single letter used in saves."""

    WHITE = "W"
    BLACK = "B"

    @property
    def opponent(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    def __str__(self) -> str:
        return self.value


class Piece(ABC):
    """A chess piece with a colour, a move counter and a capture flag.

    Pieces are compared by identity: two pawns of the same colour are
    still different pieces on the board.
    """

    kind: ClassVar[str]

    def __init__(self, color: Color | str = Color.WHITE) -> None:
        self.color = Color(color)
        self.captured = False
        self.move_count = 0

    @property
    def name(self) -> str:
        """Letter shown on text boards: upper case for white, lower for black."""
        return self.kind.lower() if self.color is Color.BLACK else self.kind.upper()

    @abstractmethod
    def can_move(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        """Whether the piece could move between the squares on an empty board."""

    def can_capture(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        """Whether the piece could capture on the target square; same as moving by default."""
        return self.can_move(old_file, old_rank, new_file, new_rank)

    def capture(self) -> None:
        self.captured = True

    def move(self) -> None:
        self.move_count += 1

    def reverse_move(self) -> None:
        """Undo a capture if the piece is captured, otherwise undo one move."""
        if self.captured:
            self.captured = False
        else:
            self.move_count -= 1

    def reset(self) -> None:
        self.captured = False
        self.move_count = 0

    def swap_color(self) -> None:
        self.color = self.color.opponent

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.color.name}, moves={self.move_count}, "
            f"captured={self.captured})"
        )


class Pawn(Piece):
    kind = "p"

    def can_move(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        advance = old_rank - new_rank if self.color is Color.BLACK else new_rank - old_rank
        return old_file == new_file and (
            advance == 1 or (self.move_count == 0 and advance == 2)
        )

    def can_capture(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        step = -1 if self.color is Color.BLACK else 1
        return new_rank == old_rank + step and abs(new_file - old_file) == 1


class King(Piece):
    kind = "k"

    def can_move(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        return abs(new_rank - old_rank) <= 1 and abs(new_file - old_file) <= 1


class Knight(Piece):
    kind = "n"

    def can_move(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        return {abs(new_rank - old_rank), abs(new_file - old_file)} == {1, 2}


class Bishop(Piece):
    kind = "b"

    def can_move(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        return abs(new_rank - old_rank) == abs(new_file - old_file)


class Rook(Piece):
    kind = "r"

    def can_move(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        return old_rank == new_rank or old_file == new_file


class Queen(Piece):
    kind = "q"

    def can_move(self, old_file: int, old_rank: int, new_file: int, new_rank: int) -> bool:
        diagonal = abs(new_rank - old_rank) == abs(new_file - old_file)
        return diagonal or old_rank == new_rank or old_file == new_file


_PIECE_CLASSES: dict[str, type[Piece]] = {
    cls.kind: cls for cls in (Rook, Bishop, Knight, King, Queen, Pawn)
}


def piece_from_type(kind: str, color: Color | str) -> Piece:
    """Create a new piece from its type letter ('p', 'k', 'n', 'b', 'r' or 'q')."""
    try:
        cls = _PIECE_CLASSES[kind]
    except KeyError:
        raise ValueError(f"unknown piece type {kind!r}") from None
    return cls(color)