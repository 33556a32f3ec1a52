"""Game engine for Corners.

Rules:
- Board is 8×8 with coordinates (r, c) from top-left.
- A starts in the top-left corner block, B in the mirrored bottom-right block.
- A piece either steps to an empty orthogonal neighbour or makes a chain of
  orthogonal jumps, each over one occupied cell (either colour) onto an empty cell.
- Win: fill every cell of the opponent's start corner with your own pieces.

The board is always derived from a piece tuple; nothing here mutates its inputs.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .types import Coord, CornerShape, Piece, Player

logger = logging.getLogger(__name__)

BOARD_SIZE = 8
# up, down, left, right
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
CORNER_SHAPES: Tuple[CornerShape, ...] = (
    CornerShape(3, 3),
    CornerShape(3, 4),
    CornerShape(4, 4),
)
DEFAULT_CORNER_SHAPE = CORNER_SHAPES[0]

Board = List[List[Optional[Player]]]
Rect = Tuple[int, int, int, int]


class BoardError(ValueError):
    """Raised when a piece layout or move cannot exist on the board."""


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_adjacent(a: Coord, b: Coord) -> bool:
    """Whether ``b`` is one orthogonal step from ``a``."""

    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def empty_board() -> Board:
    return [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


def board_from_pieces(pieces: Iterable[Piece]) -> Board:
    """Build the occupancy grid for ``pieces``, failing fast on impossible layouts."""

    board = empty_board()
    for piece in pieces:
        if not in_bounds(piece.row, piece.col):
            raise BoardError(f"Invalid piece position for {piece.id}: [{piece.row}, {piece.col}]")
        if board[piece.row][piece.col] is not None:
            raise BoardError(f"Cell [{piece.row}, {piece.col}] is already occupied")
        board[piece.row][piece.col] = piece.player
    return board


def _start_rect(player: Player, corner: CornerShape) -> Rect:
    if player is Player.A:
        return (0, corner.rows, 0, corner.cols)
    return (BOARD_SIZE - corner.rows, BOARD_SIZE, BOARD_SIZE - corner.cols, BOARD_SIZE)


def goal_rect(player: Player, corner: CornerShape) -> Rect:
    """Return ``(start_row, end_row, start_col, end_col)`` of the player's goal, ends exclusive."""

    return _start_rect(player.opponent(), corner)


@lru_cache(maxsize=None)
def goal_cells(player: Player, corner: CornerShape = DEFAULT_CORNER_SHAPE) -> Tuple[Coord, ...]:
    r0, r1, c0, c1 = goal_rect(player, corner)
    return tuple((r, c) for r in range(r0, r1) for c in range(c0, c1))


@lru_cache(maxsize=None)
def start_cells(player: Player, corner: CornerShape = DEFAULT_CORNER_SHAPE) -> Tuple[Coord, ...]:
    r0, r1, c0, c1 = _start_rect(player, corner)
    return tuple((r, c) for r in range(r0, r1) for c in range(c0, c1))


def initial_pieces(corner: CornerShape = DEFAULT_CORNER_SHAPE) -> Tuple[Piece, ...]:
    """Create the starting layout: A fills the top-left block, B the bottom-right one.

    Ids are ``"<player>-<n>"`` numbered row-major from 1.
    """

    pieces: List[Piece] = []
    for player in (Player.A, Player.B):
        for pid, (r, c) in enumerate(start_cells(player, corner), start=1):
            pieces.append(Piece(id=f"{player.value}-{pid}", player=player, row=r, col=c))
    return tuple(pieces)


def pieces_for_player(pieces: Iterable[Piece], player: Player) -> List[Piece]:
    return [p for p in pieces if p.player is player]


def find_piece_at(pieces: Iterable[Piece], coord: Coord) -> Optional[Piece]:
    for piece in pieces:
        if piece.row == coord[0] and piece.col == coord[1]:
            return piece
    return None


def position_signature(pieces: Iterable[Piece]) -> Tuple[Tuple[str, int, int], ...]:
    """Identity- and order-free key of a position: the sorted (owner, row, col) triples."""

    return tuple(sorted((p.player.value, p.row, p.col) for p in pieces))


def move_piece(pieces: Sequence[Piece], piece_id: str, to_rc: Coord) -> Tuple[Piece, ...]:
    """Return a new piece tuple with ``piece_id`` relocated to ``to_rc``."""

    if not in_bounds(*to_rc):
        raise BoardError(f"Invalid move position: [{to_rc[0]}, {to_rc[1]}]")
    return tuple(p.moved_to(to_rc) if p.id == piece_id else p for p in pieces)


def apply_move(pieces: Sequence[Piece], from_rc: Coord, to_rc: Coord) -> Tuple[Piece, ...]:
    """Move whichever piece stands on ``from_rc``; legality is the caller's concern."""

    if not in_bounds(*to_rc):
        raise BoardError(f"Invalid move position: [{to_rc[0]}, {to_rc[1]}]")
    moved = False
    result: List[Piece] = []
    for piece in pieces:
        if not moved and piece.row == from_rc[0] and piece.col == from_rc[1]:
            result.append(piece.moved_to(to_rc))
            moved = True
        else:
            result.append(piece)
    if not moved:
        raise BoardError(f"No piece at [{from_rc[0]}, {from_rc[1]}]")
    return tuple(result)


def _jump_landings(board: Board, coord: Coord):
    """Yield every square reachable from ``coord`` by a single jump."""

    r, c = coord
    for dr, dc in DIRECTIONS:
        jr, jc = r + 2 * dr, c + 2 * dc
        if not in_bounds(jr, jc):
            continue
        if board[r + dr][c + dc] is not None and board[jr][jc] is None:
            yield (jr, jc)


def compute_valid_destinations(board: Board, from_rc: Coord) -> List[Coord]:
    """Return every square the piece on ``from_rc`` may finish its move on.

    Steps come first, then jump landings in depth-first order. A square is
    listed at most once, whichever route reached it first.
    """

    destinations: List[Coord] = []
    visited: Set[Coord] = set()
    r, c = from_rc
    for dr, dc in DIRECTIONS:
        nr, nc = r + dr, c + dc
        if in_bounds(nr, nc) and board[nr][nc] is None and (nr, nc) not in visited:
            destinations.append((nr, nc))
            visited.add((nr, nc))

    def _walk(coord: Coord) -> None:
        for landing in _jump_landings(board, coord):
            if landing in visited:
                continue
            destinations.append(landing)
            visited.add(landing)
            _walk(landing)

    _walk(from_rc)
    return destinations


def is_move_valid(board: Board, from_rc: Coord, to_rc: Coord) -> bool:
    return tuple(to_rc) in compute_valid_destinations(board, from_rc)


def find_path(board: Board, from_rc: Coord, to_rc: Coord) -> List[Coord]:
    """Return one sequence of landing cells leading from ``from_rc`` to ``to_rc``.

    Falls back to ``[from_rc, to_rc]`` when no jump chain reaches the target.
    """

    from_rc, to_rc = tuple(from_rc), tuple(to_rc)
    if is_adjacent(from_rc, to_rc):
        return [from_rc, to_rc]

    path: List[Coord] = [from_rc]
    visited: Set[Coord] = {from_rc}

    def _search(current: Coord) -> bool:
        if current == to_rc:
            return True
        for landing in _jump_landings(board, current):
            if landing in visited:
                continue
            visited.add(landing)
            path.append(landing)
            if _search(landing):
                return True
            path.pop()
        return False

    if _search(from_rc):
        return path

    logger.warning("No jump chain from %s to %s; using a direct two-point path", from_rc, to_rc)
    return [from_rc, to_rc]


def is_path_valid(board: Board, path: Sequence[Coord]) -> bool:
    """Whether every hop of ``path`` is a step or a jump over an occupied cell."""

    if len(path) < 2:
        return False
    for (fr, fc), (tr, tc) in zip(path, path[1:]):
        if not in_bounds(tr, tc):
            return False
        if is_adjacent((fr, fc), (tr, tc)):
            continue
        dr, dc = abs(fr - tr), abs(fc - tc)
        if not ((dr == 2 and dc == 0) or (dr == 0 and dc == 2)):
            return False
        if board[(fr + tr) // 2][(fc + tc) // 2] is None:
            return False
    return True


def has_player_won(pieces: Iterable[Piece], player: Player, corner: CornerShape) -> bool:
    """True iff every cell of the player's goal corner holds one of their pieces."""

    occupied = {(p.row, p.col) for p in pieces if p.player is player}
    return all(cell in occupied for cell in goal_cells(player, corner))


def winner(pieces: Sequence[Piece], corner: CornerShape) -> Optional[Player]:
    """Return the winner if the position is terminal; A is reported on a tie."""

    for player in (Player.A, Player.B):
        if has_player_won(pieces, player, corner):
            return player
    return None


def is_tie(pieces: Sequence[Piece], corner: CornerShape) -> bool:
    return has_player_won(pieces, Player.A, corner) and has_player_won(pieces, Player.B, corner)


def is_terminal(pieces: Sequence[Piece], corner: CornerShape) -> bool:
    return winner(pieces, corner) is not None
