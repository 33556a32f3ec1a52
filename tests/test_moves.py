from corners_ai import engine
from corners_ai.types import Piece, Player


def build_pieces(a_cells=(), b_cells=()):
    pieces = [Piece(id=f"A-{i}", player=Player.A, row=r, col=c) for i, (r, c) in enumerate(a_cells, start=1)]
    pieces += [Piece(id=f"B-{i}", player=Player.B, row=r, col=c) for i, (r, c) in enumerate(b_cells, start=1)]
    return tuple(pieces)


def test_lone_piece_has_four_steps():
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3)]))
    destinations = engine.compute_valid_destinations(board, (3, 3))
    assert set(destinations) == {(2, 3), (4, 3), (3, 2), (3, 4)}
    assert len(destinations) == 4


def test_corner_piece_stays_inside_board():
    board = engine.board_from_pieces(build_pieces(a_cells=[(0, 0)]))
    assert set(engine.compute_valid_destinations(board, (0, 0))) == {(1, 0), (0, 1)}


def test_single_jump_over_opponent():
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3)], b_cells=[(3, 4)]))
    destinations = engine.compute_valid_destinations(board, (3, 3))
    assert (3, 5) in destinations
    assert (3, 4) not in destinations


def test_jumps_over_both_colours():
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3), (3, 4)], b_cells=[(2, 3)]))
    destinations = set(engine.compute_valid_destinations(board, (3, 3)))
    assert {(4, 3), (3, 2)} <= destinations
    assert (1, 3) in destinations
    assert (3, 5) in destinations


def test_multi_jump_chain():
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3), (3, 6)], b_cells=[(3, 4)]))
    destinations = engine.compute_valid_destinations(board, (3, 3))
    assert (3, 5) in destinations
    assert (3, 7) in destinations
    assert len(destinations) == len(set(destinations))


def test_chain_with_turns():
    # (3,3) -> (3,5) over (3,4), then down over (4,5) to (5,5).
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3)], b_cells=[(3, 4), (4, 5)]))
    assert (5, 5) in engine.compute_valid_destinations(board, (3, 3))


def test_blocked_jump_landing():
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3), (3, 5)], b_cells=[(3, 4)]))
    assert (3, 5) not in engine.compute_valid_destinations(board, (3, 3))


def test_no_diagonal_moves():
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3)], b_cells=[(4, 4)]))
    destinations = engine.compute_valid_destinations(board, (3, 3))
    assert (4, 4) not in destinations
    assert (5, 5) not in destinations


def test_no_move_returns_to_origin():
    # A square of pieces lets jump chains loop back toward the start.
    pieces = build_pieces(a_cells=[(2, 2)], b_cells=[(2, 3), (3, 4), (4, 3), (3, 2), (2, 1), (1, 2)])
    board = engine.board_from_pieces(pieces)
    for piece in pieces:
        assert piece.position not in engine.compute_valid_destinations(board, piece.position)


def test_fully_blocked_piece_has_no_moves():
    board = engine.board_from_pieces(build_pieces(a_cells=[(0, 0)], b_cells=[(0, 1), (1, 0), (0, 2), (2, 0)]))
    assert engine.compute_valid_destinations(board, (0, 0)) == []


def test_is_move_valid():
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3)], b_cells=[(3, 4)]))
    assert engine.is_move_valid(board, (3, 3), (3, 5))
    assert not engine.is_move_valid(board, (3, 3), (3, 7))
