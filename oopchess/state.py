"""Saving a board and its move history to text files, and loading them back."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Union

from .board import Gameboard
from .moves import BOARD_SIZE, Grid, MoveNode, empty_grid
from .pieces import Piece, piece_from_type

DEFAULT_DIRECTORY = Path("build")
BOARD_FILE = "board.txt"
MOVES_FILE = "moves.txt"

_CELL = re.compile(r"\{([^{}]*)\}")
_MOVE = re.compile(
    r"\{\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,"
    r"\s*\{([^{}]*)\}\s*,\s*(\S)\s*,\s*\{([^{}]*)\}\s*\}"
)

PathLike = Union[str, Path]


def encode_piece(piece: Optional[Piece]) -> str:
    """'type, move count, colour' for a piece, or an empty string for no piece."""
    if piece is None:
        return ""
    return f"{piece.kind}, {piece.move_count}, {piece.color.value}"


def decode_piece(text: str) -> Optional[Piece]:
    """Create a piece from :func:`encode_piece` text; None if empty or of unknown type."""
    fields = "".join(text.split()).split(",")
    kind = fields[0][-1:] if fields[0] else ""
    if kind not in "prnbkq" or not kind:
        return None
    if len(fields) < 3 or not fields[2]:
        raise ValueError(f"piece {text!r} has no colour")
    move_count = int(fields[1]) if fields[1] else 0
    piece = piece_from_type(kind, fields[2][0])
    piece.move_count = move_count
    return piece


def _format_move(node: MoveNode) -> str:
    en_passant = "T" if node.en_passant else "F"
    return (
        f"{{{node.old_file}, {node.old_rank}, {node.new_file}, {node.new_rank}, "
        f"{{{encode_piece(node.captured_piece)}}}, {en_passant}, {{}}}}\n"
    )


class State:
    """A saved copy of a board grid and its move history, kept in a directory."""

    def __init__(
        self,
        grid: Optional[Grid] = None,
        prev_move: Optional[MoveNode] = None,
        *,
        directory: PathLike = DEFAULT_DIRECTORY,
    ) -> None:
        self.directory = Path(directory)
        self.grid: Grid = empty_grid()
        self.prev_move = prev_move
        if grid is not None:
            self._copy(grid)
            if self.prev_move is None:
                self.prev_move = MoveNode()
            self.directory.mkdir(parents=True, exist_ok=True)
            self.board_path.write_text("")
            self.moves_path.write_text("")

    @property
    def board_path(self) -> Path:
        return self.directory / BOARD_FILE

    @property
    def moves_path(self) -> Path:
        return self.directory / MOVES_FILE

    def _copy(self, grid: Grid) -> None:
        self.grid = [column[:] for column in grid]

    def _history(self) -> MoveNode:
        if self.prev_move is None:
            raise RuntimeError("no move history to save")
        return self.prev_move

    def _write_board(self) -> None:
        lines = [
            "".join(
                "{" + encode_piece(self.grid[file][rank]) + "} "
                for file in range(BOARD_SIZE)
            )
            + "\n"
            for rank in range(BOARD_SIZE - 1, -1, -1)
        ]
        self.board_path.write_text("".join(lines))

    def save(self) -> None:
        """Overwrite the save files with the board and the whole history."""
        history = self._history()
        self.directory.mkdir(parents=True, exist_ok=True)
        self._write_board()
        self.moves_path.write_text("".join(_format_move(n) for n in reversed(list(history))))

    def update(self, grid: Grid) -> None:
        """Rewrite the board and append the most recent move to the history file."""
        history = self._history()
        self._copy(grid)
        self._write_board()
        if history.previous is not None:
            with self.moves_path.open("a") as moves:
                moves.write(_format_move(history))

    def _read_board(self) -> Grid:
        lines = self.board_path.read_text().splitlines()
        if len(lines) < BOARD_SIZE:
            raise ValueError("board save holds fewer than eight ranks")
        grid = empty_grid()
        for rank, line in zip(range(BOARD_SIZE - 1, -1, -1), lines):
            cells = _CELL.findall(line)
            if len(cells) < BOARD_SIZE:
                raise ValueError(f"board save line {line!r} holds fewer than eight squares")
            for file, cell in enumerate(cells[:BOARD_SIZE]):
                grid[file][rank] = decode_piece(cell)
        return grid

    def _read_moves(self) -> MoveNode:
        history = MoveNode()
        for line in self.moves_path.read_text().splitlines():
            if not line.startswith("{"):
                break
            match = _MOVE.match(line)
            if match is None:
                raise ValueError(f"malformed move {line!r}")
            old_file, old_rank, new_file, new_rank = (int(match.group(i)) for i in range(1, 5))
            history.add_move(
                old_file,
                old_rank,
                new_file,
                new_rank,
                match.group(6) == "T",
                decode_piece(match.group(7)),
                decode_piece(match.group(5)),
            )
        return history

    def load(self) -> tuple[Grid, MoveNode]:
        """Read the save files; return a fresh grid and the loaded history."""
        grid = self._read_board()
        history = self._read_moves()
        self.grid = grid
        self.prev_move = history
        return [column[:] for column in grid], history


def save_board(board: Gameboard, directory: PathLike = DEFAULT_DIRECTORY) -> State:
    """Save a board and its history, returning the state for later updates."""
    state = State(board.grid, board.prev_move, directory=directory)
    state.save()
    return state


def load_board(directory: PathLike = DEFAULT_DIRECTORY) -> Gameboard:
    """A new board built from the save files in ``directory``."""
    grid, history = State(directory=directory).load()
    board = Gameboard()
    board.grid = grid
    board.prev_move = history
    return board