# oopchess

A small chess rules engine. It knows how each piece moves and captures,
keeps a history of moves that can be stepped backwards and forwards, and
decides check, checkmate, stalemate and the common draw rules. Games can
be saved to and loaded from plain text files, and recent moves can be
listed in algebraic notation.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Squares and colours

Squares are `(file, rank)` pairs counted from zero, so `a1` is `(0, 0)`
and `h8` is `(7, 7)`. A board's `grid` is indexed as `grid[file][rank]`.
Colours are `Color.WHITE` and `Color.BLACK`; anywhere a colour is taken,
the letters `"W"` and `"B"` work as well.

## Modules

### `oopchess.pieces`

`Color`, the abstract `Piece` and its subclasses `Pawn`, `King`, `Knight`,
`Bishop`, `Rook` and `Queen`. Each piece has a `color`, a `move_count`, a
`captured` flag, a `kind` letter (`p k n b r q`) and a `name` – the kind
in upper case for white and lower case for black.

- `can_move(old_file, old_rank, new_file, new_rank)` and
  `can_capture(...)` answer whether the move fits the piece's geometry on
  an otherwise empty board. Pawns advance one square, or two on their
  first move, and capture one square diagonally forward.
- `move()`, `capture()`, `reverse_move()`, `reset()` and `swap_color()`
  update the piece's state.
- `piece_from_type(kind, color)` builds a piece from its kind letter and
  raises `ValueError` for an unknown letter.

### `oopchess.moves`

`MoveNode` is the newest entry of a linked history of moves; a node whose
`previous` is `None` marks the start and holds no move. `add_move(...)`
records a move, `back(distance)` walks back (stopping at the start), and
iterating a node yields the recorded moves newest first.
`reverse_board(grid, moves)` takes moves back on a grid and
`unreverse_board(grid, moves)` replays them, including castling, en
passant and promotion. `empty_grid()` makes an empty 8×8 grid.

### `oopchess.board`

`Gameboard` holds the grid and its history in `prev_move`.

- `add_piece`, `remove_piece`, `get_piece` and `clear()`; these raise
  `IndexError` for squares off the board.
- `move_piece(old_file, old_rank, new_file, new_rank)` makes the move if
  it is legal and returns whether it was made. Illegal moves – off the
  board, onto the piece's own square, through other pieces, onto a
  friendly piece, or leaving the mover's king in check – leave the board
  unchanged. Castling, en passant and promotion (always to a queen) are
  handled.
- `is_castling`, `castle`, `target_with_en_passant`, and the module
  function `en_passant_target(grid, node, ...)`.
- `king_coords(color)`, `is_threatened(color, file, rank)`,
  `is_in_check`, `is_in_mate` (no legal move), `is_in_checkmate` and
  `is_in_stalemate`.
- `render(color)` returns the board as text seen from that side;
  `str(board)` shows it from white's side.
- `matches(placements)` checks that exactly the given pieces stand on the
  given squares, with `placements` a mapping of `(file, rank)` to piece.
- `move_count()`, and `reverse_board(moves)` / `unreverse_board(moves)` to
  look at an earlier position and return to the current one.

### `oopchess.draws`

`threefold_repetition(board)`, `fifty_move_rule(board)` and
`insufficient_material(board)`, each returning a bool.

### `oopchess.state`

`State(grid, prev_move, directory=...)` writes a board to `board.txt` and
its history to `moves.txt` in a directory (`build` by default).
`save()` rewrites both files, `update(grid)` rewrites the board and
appends the latest move, and `load()` returns a fresh grid and history
read from the files. `save_board(board, directory)` and
`load_board(directory)` do the same for a whole `Gameboard`;
`encode_piece` and `decode_piece` convert a single piece to and from its
`"kind, move count, colour"` text. The moves file does not record
promoted pieces.

### `oopchess.notation`

`move_to_string(board)` gives the latest move in short algebraic notation
(`O-O`, `O-O-O`, `x` for captures, `=Q` for promotion, `#` when either
side has no legal move, otherwise `+` when either side is in check).
`MoveStack(buttons=3)` keeps the most recent moves as numbered
white/black pairs in its `text`, with `push(board)`, `update_all(board)`
and `reset()`.

## Example

```python
from oopchess.board import Gameboard
from oopchess.pieces import Color, King, Rook

board = Gameboard()
board.add_piece(0, 0, King(Color.BLACK))
board.add_piece(7, 1, Rook(Color.WHITE))
board.add_piece(7, 2, Rook(Color.WHITE))

board.move_piece(7, 2, 0, 2)  # True: the move was legal
print(board.is_in_check(Color.BLACK))
print(board.render(Color.WHITE))
```

## What it does not do

The package is a library only. It has no command to run, no graphical or
terminal interface for playing, no opponent that chooses moves, and no
notion of whose turn it is: `move_piece` accepts a legal move for either
colour at any time. Offering or accepting draws and resigning are left to
the program that uses it.