"""Static position evaluation for the search.

Every heuristic is a pure function of the pieces (mobility also needs the
board) and one player; ``evaluate_position`` scores the difference between
the player and the opponent so that the result is antisymmetric.
"""

from __future__ import annotations

from typing import Sequence

from . import engine
from .types import Coord, CornerShape, Piece, Player

GOAL_DISTANCE_WEIGHT = 10.0
ADVANCEMENT_WEIGHT = 5.0
PIECES_IN_GOAL_WEIGHT = 1.0
MOBILITY_WEIGHT = 1.0
CLUSTERING_WEIGHT = 0.5
BLOCKING_WEIGHT = 0.5


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def goal_distance_score(
    pieces: Sequence[Piece], player: Player, corner: CornerShape = engine.DEFAULT_CORNER_SHAPE
) -> float:
    """Negative mean distance from each piece to the nearest goal cell."""

    own = engine.pieces_for_player(pieces, player)
    if not own:
        return 0.0
    goals = engine.goal_cells(player, corner)
    total = 0
    for piece in own:
        total += min(manhattan(piece.position, goal) for goal in goals)
    return -total / len(own)


def advancement_score(pieces: Sequence[Piece], player: Player) -> float:
    """Raw progress toward the far diagonal corner, whatever the goal shape."""

    last = engine.BOARD_SIZE - 1
    score = 0
    for piece in engine.pieces_for_player(pieces, player):
        if player is Player.A:
            score += piece.row + piece.col
        else:
            score += (last - piece.row) + (last - piece.col)
    return float(score)


def pieces_in_goal_score(
    pieces: Sequence[Piece], player: Player, corner: CornerShape = engine.DEFAULT_CORNER_SHAPE
) -> float:
    """Convex bonus: count of pieces already home, squared, times 100."""

    goals = set(engine.goal_cells(player, corner))
    count = sum(1 for piece in engine.pieces_for_player(pieces, player) if piece.position in goals)
    return float(count * count * 100)


def mobility_score(board: engine.Board, pieces: Sequence[Piece], player: Player) -> float:
    """Twice the number of destinations over all of the player's pieces."""

    total = 0
    for piece in engine.pieces_for_player(pieces, player):
        total += len(engine.compute_valid_destinations(board, piece.position))
    return float(total * 2)


def clustering_score(pieces: Sequence[Piece], player: Player) -> float:
    """Reward pairs close enough to support jumps, punish pairs far apart."""

    own = engine.pieces_for_player(pieces, player)
    score = 0
    for i, first in enumerate(own):
        for second in own[i + 1 :]:
            distance = manhattan(first.position, second.position)
            if 2 <= distance <= 4:
                score += 5
            elif distance > 6:
                score -= 3
    return float(score)


def blocking_score(
    pieces: Sequence[Piece], player: Player, corner: CornerShape = engine.DEFAULT_CORNER_SHAPE
) -> float:
    """+10 for each piece within three steps of the opponent's goal corner."""

    opponent_goals = engine.goal_cells(player.opponent(), corner)
    score = 0
    for piece in engine.pieces_for_player(pieces, player):
        if min(manhattan(piece.position, goal) for goal in opponent_goals) <= 3:
            score += 10
    return float(score)


def _side_terms(board: engine.Board, pieces: Sequence[Piece], player: Player, corner: CornerShape):
    return (
        goal_distance_score(pieces, player, corner),
        advancement_score(pieces, player),
        pieces_in_goal_score(pieces, player, corner),
        mobility_score(board, pieces, player),
        clustering_score(pieces, player),
        blocking_score(pieces, player, corner),
    )


WEIGHTS = (
    GOAL_DISTANCE_WEIGHT,
    ADVANCEMENT_WEIGHT,
    PIECES_IN_GOAL_WEIGHT,
    MOBILITY_WEIGHT,
    CLUSTERING_WEIGHT,
    BLOCKING_WEIGHT,
)


def evaluate_position(
    board: engine.Board,
    pieces: Sequence[Piece],
    player: Player,
    corner: CornerShape = engine.DEFAULT_CORNER_SHAPE,
) -> float:
    """Score ``pieces`` for ``player``; positive favours ``player``."""

    mine = _side_terms(board, pieces, player, corner)
    theirs = _side_terms(board, pieces, player.opponent(), corner)
    return sum((m - t) * w for m, t, w in zip(mine, theirs, WEIGHTS))


def quick_evaluate_move(from_rc: Coord, to_rc: Coord, player: Player) -> float:
    """Cheap move score for ordering: progress toward the far corner plus a jump bonus."""

    last = engine.BOARD_SIZE - 1
    corner = (last, last) if player is Player.A else (0, 0)
    improvement = manhattan(from_rc, corner) - manhattan(to_rc, corner)
    jump_bonus = 10 if manhattan(from_rc, to_rc) > 1 else 0
    return float(improvement * 10 + jump_bonus)
