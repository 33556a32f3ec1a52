from corners_ai import engine
from corners_ai.types import CornerShape, Piece, Player


def build_pieces(a_cells=(), b_cells=()):
    pieces = [Piece(id=f"A-{i}", player=Player.A, row=r, col=c) for i, (r, c) in enumerate(a_cells, start=1)]
    pieces += [Piece(id=f"B-{i}", player=Player.B, row=r, col=c) for i, (r, c) in enumerate(b_cells, start=1)]
    return tuple(pieces)


A_GOAL_3X3 = [(r, c) for r in range(5, 8) for c in range(5, 8)]
B_GOAL_3X3 = [(r, c) for r in range(0, 3) for c in range(0, 3)]


def test_a_wins_with_full_goal():
    corner = CornerShape(3, 3)
    pieces = build_pieces(a_cells=A_GOAL_3X3, b_cells=[(3, 0), (3, 1)])
    assert engine.has_player_won(pieces, Player.A, corner)
    assert not engine.has_player_won(pieces, Player.B, corner)
    assert engine.winner(pieces, corner) is Player.A
    assert engine.is_terminal(pieces, corner)


def test_removing_any_goal_piece_breaks_the_win():
    corner = CornerShape(3, 3)
    for missing in A_GOAL_3X3:
        cells = [cell for cell in A_GOAL_3X3 if cell != missing] + [(4, 4)]
        pieces = build_pieces(a_cells=cells)
        assert not engine.has_player_won(pieces, Player.A, corner)


def test_opponent_piece_in_goal_blocks_win():
    corner = CornerShape(3, 3)
    cells = A_GOAL_3X3[:-1]
    pieces = build_pieces(a_cells=cells + [(4, 4)], b_cells=[A_GOAL_3X3[-1]])
    assert not engine.has_player_won(pieces, Player.A, corner)


def test_b_wins_top_left():
    corner = CornerShape(3, 3)
    pieces = build_pieces(a_cells=[(4, 4)], b_cells=B_GOAL_3X3)
    assert engine.winner(pieces, corner) is Player.B


def test_rectangular_goal():
    corner = CornerShape(3, 4)
    cells = [(r, c) for r in range(5, 8) for c in range(4, 8)]
    assert engine.has_player_won(build_pieces(a_cells=cells), Player.A, corner)
    # Same pieces do not fill a 4x4 goal.
    assert not engine.has_player_won(build_pieces(a_cells=cells), Player.A, CornerShape(4, 4))


def test_start_position_is_not_terminal():
    for corner in engine.CORNER_SHAPES:
        assert engine.winner(engine.initial_pieces(corner), corner) is None


def test_tie_is_detectable():
    corner = CornerShape(3, 3)
    pieces = build_pieces(a_cells=A_GOAL_3X3, b_cells=B_GOAL_3X3)
    assert engine.is_tie(pieces, corner)
    assert not engine.is_tie(engine.initial_pieces(corner), corner)
