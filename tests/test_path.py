import logging

from corners_ai import engine
from corners_ai.types import Piece, Player


def build_pieces(a_cells=(), b_cells=()):
    pieces = [Piece(id=f"A-{i}", player=Player.A, row=r, col=c) for i, (r, c) in enumerate(a_cells, start=1)]
    pieces += [Piece(id=f"B-{i}", player=Player.B, row=r, col=c) for i, (r, c) in enumerate(b_cells, start=1)]
    return tuple(pieces)


def test_adjacent_path_is_direct():
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3)]))
    assert engine.find_path(board, (3, 3), (3, 4)) == [(3, 3), (3, 4)]


def test_single_jump_path():
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3)], b_cells=[(3, 4)]))
    assert engine.find_path(board, (3, 3), (3, 5)) == [(3, 3), (3, 5)]


def test_multi_jump_path():
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3), (3, 6)], b_cells=[(3, 4)]))
    path = engine.find_path(board, (3, 3), (3, 7))
    assert path == [(3, 3), (3, 5), (3, 7)]
    assert engine.is_path_valid(board, path)


def test_unreachable_target_falls_back_to_direct_path(caplog):
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3)]))
    with caplog.at_level(logging.WARNING, logger="corners_ai.engine"):
        path = engine.find_path(board, (3, 3), (6, 6))
    assert path == [(3, 3), (6, 6)]
    assert "No jump chain" in caplog.text


def test_every_destination_has_a_reconstructable_path():
    for corner in engine.CORNER_SHAPES:
        pieces = engine.initial_pieces(corner)
        board = engine.board_from_pieces(pieces)
        for piece in pieces:
            for dest in engine.compute_valid_destinations(board, piece.position):
                path = engine.find_path(board, piece.position, dest)
                assert path[0] == piece.position
                assert path[-1] == dest
                assert engine.is_path_valid(board, path)


def test_destinations_in_crowded_midgame_are_traceable():
    pieces = build_pieces(
        a_cells=[(2, 2), (2, 4), (3, 3), (4, 2), (4, 4), (5, 5), (1, 1)],
        b_cells=[(2, 3), (3, 2), (3, 4), (4, 3), (5, 4), (6, 5), (3, 6)],
    )
    board = engine.board_from_pieces(pieces)
    for piece in pieces:
        for dest in engine.compute_valid_destinations(board, piece.position):
            path = engine.find_path(board, piece.position, dest)
            assert path[-1] == dest
            assert engine.is_path_valid(board, path)


def test_path_validation_rejects_bad_hops():
    board = engine.board_from_pieces(build_pieces(a_cells=[(3, 3)]))
    assert not engine.is_path_valid(board, [(3, 3)])
    assert not engine.is_path_valid(board, [(3, 3), (3, 5)])
    assert not engine.is_path_valid(board, [(3, 3), (4, 4)])
    assert engine.is_path_valid(board, [(3, 3), (2, 3)])
