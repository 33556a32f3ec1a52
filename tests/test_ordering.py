from corners_ai import engine
from corners_ai.evaluation import quick_evaluate_move
from corners_ai.ordering import any_legal_move, ordered_moves
from corners_ai.types import Piece, Player


def build_pieces(a_cells=(), b_cells=()):
    pieces = [Piece(id=f"A-{i}", player=Player.A, row=r, col=c) for i, (r, c) in enumerate(a_cells, start=1)]
    pieces += [Piece(id=f"B-{i}", player=Player.B, row=r, col=c) for i, (r, c) in enumerate(b_cells, start=1)]
    return tuple(pieces)


def test_moves_are_sorted_best_first():
    pieces = engine.initial_pieces()
    board = engine.board_from_pieces(pieces)
    for player in Player:
        moves = ordered_moves(board, pieces, player)
        assert moves
        scores = [m.score for m in moves]
        assert scores == sorted(scores, reverse=True)
        for move in moves:
            assert move.piece.player is player
            assert move.score == quick_evaluate_move(move.piece.position, move.to_rc, player)


def test_every_legal_move_is_listed_once():
    pieces = engine.initial_pieces()
    board = engine.board_from_pieces(pieces)
    moves = ordered_moves(board, pieces, Player.A)
    expected = {
        (p.position, dest)
        for p in engine.pieces_for_player(pieces, Player.A)
        for dest in engine.compute_valid_destinations(board, p.position)
    }
    listed = [(m.piece.position, m.to_rc) for m in moves]
    assert len(listed) == len(set(listed))
    assert set(listed) == expected


def test_ties_keep_generation_order():
    pieces = build_pieces(a_cells=[(3, 3)], b_cells=[(7, 0)])
    board = engine.board_from_pieces(pieces)
    moves = ordered_moves(board, pieces, Player.A)
    assert [m.to_rc for m in moves] == [(4, 3), (3, 4), (2, 3), (3, 2)]


def test_jumps_rank_above_steps():
    pieces = build_pieces(a_cells=[(3, 3)], b_cells=[(3, 4)])
    board = engine.board_from_pieces(pieces)
    moves = ordered_moves(board, pieces, Player.A)
    assert moves[0].to_rc == (3, 5)
    assert moves[0].score == 30


def test_any_legal_move():
    pieces = build_pieces(a_cells=[(0, 0)], b_cells=[(0, 1), (1, 0), (0, 2), (2, 0)])
    board = engine.board_from_pieces(pieces)
    assert not any_legal_move(board, pieces, Player.A)
    assert ordered_moves(board, pieces, Player.A) == []
    assert any_legal_move(board, pieces, Player.B)
