"""Move generation with ordering for alpha-beta search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from . import engine
from .evaluation import quick_evaluate_move
from .types import Coord, Piece, Player


@dataclass(frozen=True)
class OrderedMove:
    piece: Piece
    to_rc: Coord
    score: float


def ordered_moves(board: engine.Board, pieces: Sequence[Piece], player: Player) -> List[OrderedMove]:
    """Return every legal move for ``player``, most promising first.

    Ties keep generation order (piece order, then destination order).
    """

    moves: List[OrderedMove] = []
    for piece in engine.pieces_for_player(pieces, player):
        for dest in engine.compute_valid_destinations(board, piece.position):
            moves.append(OrderedMove(piece=piece, to_rc=dest, score=quick_evaluate_move(piece.position, dest, player)))
    moves.sort(key=lambda mv: -mv.score)
    return moves


def any_legal_move(board: engine.Board, pieces: Sequence[Piece], player: Player) -> bool:
    for piece in engine.pieces_for_player(pieces, player):
        if engine.compute_valid_destinations(board, piece.position):
            return True
    return False
