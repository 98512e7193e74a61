import pytest

from oopchess.moves import BOARD_SIZE, MoveNode, empty_grid
from oopchess.pieces import Color, King, Pawn, Queen, Rook


def snapshot(grid):
    return [list(column) for column in grid]


def counts(pieces):
    return [(p.move_count, p.captured) for p in pieces]


def test_empty_grid_is_all_empty():
    grid = empty_grid()
    assert len(grid) == BOARD_SIZE
    assert all(len(column) == BOARD_SIZE for column in grid)
    assert all(square is None for column in grid for square in column)


def test_empty_grid_columns_are_independent():
    grid = empty_grid()
    grid[0][0] = Pawn(Color.WHITE)
    assert grid[1][0] is None


def test_new_node_is_start_of_history():
    node = MoveNode()
    assert node.previous is None
    assert node.old_file == -1 and node.new_rank == -1
    assert list(node) == []
    assert node.back(3) is node


def test_add_move_pushes_previous_contents():
    node = MoveNode()
    node.add_move(4, 1, 4, 3, False, None, None)
    first = node.previous
    node.add_move(4, 6, 4, 4, False, None, None)
    assert node.previous is not first
    assert (node.previous.old_file, node.previous.old_rank) == (4, 1)
    assert (node.previous.new_file, node.previous.new_rank) == (4, 3)
    assert node.previous.previous is first
    assert first.previous is None


def test_back_walks_and_stops_at_start():
    node = MoveNode()
    node.add_move(4, 1, 4, 3, False, None, None)
    node.add_move(4, 6, 4, 4, False, None, None)
    start = node.previous.previous
    assert node.back(1) is node.previous
    assert node.back(2) is start
    assert node.back(10) is start


def test_iteration_yields_newest_first():
    node = MoveNode()
    node.add_move(4, 1, 4, 3, False, None, None)
    node.add_move(4, 6, 4, 4, False, None, None)
    moves = [(m.old_file, m.old_rank, m.new_file, m.new_rank) for m in node]
    assert moves == [(4, 6, 4, 4), (4, 1, 4, 3)]


def test_simple_move_round_trip():
    pawn = Pawn(Color.WHITE)
    grid = empty_grid()
    grid[4][1] = pawn
    before = snapshot(grid)
    start_counts = counts([pawn])

    node = MoveNode()
    node.add_move(4, 1, 4, 3, False, None, None)
    node.unreverse_board(grid, 1)
    assert grid[4][3] is pawn
    assert grid[4][1] is None

    node.reverse_board(grid, 1)
    assert grid == before
    assert counts([pawn]) == start_counts


def test_capture_round_trip():
    rook = Rook(Color.WHITE)
    victim = Rook(Color.BLACK)
    grid = empty_grid()
    grid[4][4] = rook
    grid[2][4] = victim
    before = snapshot(grid)

    node = MoveNode()
    node.add_move(4, 4, 2, 4, False, None, victim)
    node.unreverse_board(grid, 1)
    assert grid[2][4] is rook
    assert victim.captured

    node.reverse_board(grid, 1)
    assert grid == before
    assert not victim.captured


def test_en_passant_round_trip():
    white = Pawn(Color.WHITE)
    black = Pawn(Color.BLACK)
    white.move()
    black.move()
    grid = empty_grid()
    grid[3][4] = white
    grid[2][4] = black
    before = snapshot(grid)
    start_counts = counts([white, black])

    node = MoveNode()
    node.add_move(3, 4, 2, 5, True, None, black)
    node.unreverse_board(grid, 1)
    assert grid[2][5] is white
    assert grid[2][4] is None
    assert black.captured

    node.reverse_board(grid, 1)
    assert grid == before
    assert counts([white, black]) == start_counts


@pytest.mark.parametrize(
    "king_to, rook_home, rook_to",
    [(6, 7, 5), (2, 0, 3)],
)
def test_castling_round_trip(king_to, rook_home, rook_to):
    king = King(Color.WHITE)
    rook = Rook(Color.WHITE)
    grid = empty_grid()
    grid[4][0] = king
    grid[rook_home][0] = rook
    before = snapshot(grid)
    start_counts = counts([king, rook])

    node = MoveNode()
    node.add_move(4, 0, king_to, 0, False, None, None)
    node.unreverse_board(grid, 1)
    assert grid[king_to][0] is king
    assert grid[rook_to][0] is rook
    assert grid[rook_home][0] is None
    assert king.move_count == rook.move_count

    node.reverse_board(grid, 1)
    assert grid == before
    assert counts([king, rook]) == start_counts


def test_promotion_round_trip():
    pawn = Pawn(Color.WHITE)
    queen = Queen(Color.WHITE)
    grid = empty_grid()
    grid[0][6] = pawn
    before = snapshot(grid)

    node = MoveNode()
    node.add_move(0, 6, 0, 7, False, queen, None)
    node.unreverse_board(grid, 1)
    assert grid[0][7] is queen
    assert grid[0][6] is None
    assert node.promoted_piece is pawn

    node.reverse_board(grid, 1)
    assert grid == before
    assert node.promoted_piece is queen


def test_multiple_moves_round_trip():
    white = Pawn(Color.WHITE)
    black = Pawn(Color.BLACK)
    grid = empty_grid()
    grid[4][1] = white
    grid[4][6] = black
    start = snapshot(grid)
    start_counts = counts([white, black])

    node = MoveNode()
    node.add_move(4, 1, 4, 3, False, None, None)
    node.add_move(4, 6, 4, 4, False, None, None)
    node.unreverse_board(grid, 2)
    assert grid[4][3] is white
    assert grid[4][4] is black
    played = snapshot(grid)

    node.reverse_board(grid, 2)
    assert grid == start
    assert counts([white, black]) == start_counts

    node.unreverse_board(grid, 2)
    assert grid == played


def test_reverse_one_of_two_moves():
    white = Pawn(Color.WHITE)
    black = Pawn(Color.BLACK)
    grid = empty_grid()
    grid[4][3] = white
    grid[4][4] = black

    node = MoveNode()
    node.add_move(4, 1, 4, 3, False, None, None)
    node.add_move(4, 6, 4, 4, False, None, None)
    node.reverse_board(grid, 1)
    assert grid[4][6] is black
    assert grid[4][3] is white
    assert grid[4][4] is None


def test_reverse_more_moves_than_recorded_raises():
    grid = empty_grid()
    grid[4][3] = Pawn(Color.WHITE)
    node = MoveNode()
    node.add_move(4, 1, 4, 3, False, None, None)
    with pytest.raises(ValueError):
        node.reverse_board(grid, 2)


def test_reverse_zero_moves_raises():
    node = MoveNode()
    node.add_move(4, 1, 4, 3, False, None, None)
    with pytest.raises(ValueError):
        node.reverse_board(empty_grid(), 0)


def test_unreverse_zero_moves_leaves_grid():
    grid = empty_grid()
    pawn = Pawn(Color.WHITE)
    grid[4][1] = pawn
    before = snapshot(grid)
    node = MoveNode()
    node.add_move(4, 1, 4, 3, False, None, None)
    node.unreverse_board(grid, 0)
    assert grid == before


def test_unreverse_negative_raises():
    node = MoveNode()
    node.add_move(4, 1, 4, 3, False, None, None)
    with pytest.raises(ValueError):
        node.unreverse_board(empty_grid(), -1)


def test_reverse_with_missing_piece_raises():
    node = MoveNode()
    node.add_move(4, 1, 4, 3, False, None, None)
    with pytest.raises(ValueError):
        node.reverse_board(empty_grid(), 1)