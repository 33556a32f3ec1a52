"""Negamax search with alpha-beta pruning, a transposition table and iterative deepening."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Hashable, Optional, Sequence, Tuple

from . import engine
from .difficulty import DifficultyConfig, preset_difficulty
from .evaluation import evaluate_position
from .ordering import ordered_moves
from .types import AIMove, CornerShape, Piece, Player

logger = logging.getLogger(__name__)

INFINITY = 999999.0
WIN_SCORE = 100000.0
NODE_CHECK_INTERVAL = 1000
DEFAULT_TT_SIZE = 100000


class Bound(str, Enum):
    EXACT = "EXACT"
    LOWER = "LOWER"
    UPPER = "UPPER"


@dataclass(frozen=True)
class TTEntry:
    depth: int
    score: float
    bound: Bound
    best_move: Optional[AIMove] = None


@dataclass
class SearchStats:
    """Aggregated statistics from a single search."""

    nodes: int
    depth_reached: int
    tt_hits: int
    tt_stores: int
    tt_cutoffs: int
    tt_size: int
    elapsed_ms: float
    timed_out: bool


class TranspositionTable:
    """Bounded position cache; when full the oldest inserted key is dropped."""

    def __init__(self, max_size: int = DEFAULT_TT_SIZE) -> None:
        if max_size < 1:
            raise ValueError("transposition table needs room for at least one entry")
        self.max_size = max_size
        self._table: Dict[Hashable, TTEntry] = {}

    @staticmethod
    def key_for(pieces: Sequence[Piece], player: Player) -> Tuple:
        return (player.value, engine.position_signature(pieces))

    def get(self, key: Hashable) -> Optional[TTEntry]:
        return self._table.get(key)

    def store(self, key: Hashable, entry: TTEntry) -> bool:
        """Insert ``entry`` unless a deeper result is already cached; return whether it was written."""

        existing = self._table.get(key)
        if existing is not None:
            if existing.depth > entry.depth:
                return False
        elif len(self._table) >= self.max_size:
            del self._table[next(iter(self._table))]
        self._table[key] = entry
        return True

    def clear(self) -> None:
        self._table.clear()

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._table


class SearchEngine:
    """Game-tree search for one player seat.

    The engine owns its transposition table. Call :meth:`clear_cache` when a new
    game starts; the table is also dropped automatically whenever the corner
    shape or the piece counts differ from the previous search.
    """

    def __init__(
        self,
        config: Optional[DifficultyConfig] = None,
        tt_size: int = DEFAULT_TT_SIZE,
        node_check_interval: int = NODE_CHECK_INTERVAL,
    ) -> None:
        self.config = config or preset_difficulty("medium")
        self.node_check_interval = max(1, node_check_interval)
        self._ttable = TranspositionTable(tt_size)
        self._context: Optional[Tuple] = None
        self.last_stats: Optional[SearchStats] = None
        self._reset_counters()

    def _reset_counters(self) -> None:
        self._nodes = 0
        self._tt_hits = 0
        self._tt_stores = 0
        self._tt_cutoffs = 0
        self._depth_reached = 0

    @property
    def tt_size(self) -> int:
        return len(self._ttable)

    def clear_cache(self) -> None:
        """Forget every cached position (call between games)."""

        self._ttable.clear()
        self._context = None

    def _sync_context(self, pieces: Sequence[Piece], corner: CornerShape) -> None:
        a_count = sum(1 for p in pieces if p.player is Player.A)
        context = (corner, a_count, len(pieces) - a_count)
        if self._context is not None and self._context != context:
            logger.debug("Rule context changed from %s to %s; clearing transposition table", self._context, context)
            self._ttable.clear()
        self._context = context

    def _time_check(self, deadline: float) -> None:
        if time.monotonic() >= deadline:
            raise TimeoutError

    def find_best_move(
        self,
        pieces: Sequence[Piece],
        player: Player,
        corner: CornerShape,
        config: Optional[DifficultyConfig] = None,
    ) -> Optional[AIMove]:
        """Return the best move for ``player`` found within the configured depth and time.

        Returns ``None`` when ``player`` has no legal move or when the budget runs
        out before depth 1 completes.
        """

        cfg = config or self.config
        pieces = tuple(pieces)
        board = engine.board_from_pieces(pieces)
        self._reset_counters()
        self._sync_context(pieces, corner)

        start_time = time.monotonic()
        deadline = start_time + cfg.max_time_ms / 1000.0
        best: Optional[AIMove] = None
        timed_out = False

        for depth in range(1, cfg.max_depth + 1):
            if time.monotonic() >= deadline:
                timed_out = True
                break
            try:
                result = self._search_root(board, pieces, depth, player, corner, deadline)
            except TimeoutError:
                timed_out = True
                logger.debug("Time budget exhausted during depth %d; keeping depth %d result", depth, depth - 1)
                break
            if result is None:
                break
            best = result
            self._depth_reached = depth
            logger.debug(
                "depth=%d best=%s->%s score=%.1f nodes=%d", depth, result.from_rc, result.to_rc, result.score, self._nodes
            )
            # A forced win cannot be improved on.
            if result.score >= WIN_SCORE:
                break

        elapsed_ms = (time.monotonic() - start_time) * 1000.0
        self.last_stats = SearchStats(
            nodes=self._nodes,
            depth_reached=self._depth_reached,
            tt_hits=self._tt_hits,
            tt_stores=self._tt_stores,
            tt_cutoffs=self._tt_cutoffs,
            tt_size=len(self._ttable),
            elapsed_ms=elapsed_ms,
            timed_out=timed_out,
        )
        logger.info("searched %d nodes in %.0fms (TT size: %d)", self._nodes, elapsed_ms, len(self._ttable))
        return best

    def _search_root(
        self,
        board: engine.Board,
        pieces: Tuple[Piece, ...],
        depth: int,
        player: Player,
        corner: CornerShape,
        deadline: float,
    ) -> Optional[AIMove]:
        moves = ordered_moves(board, pieces, player)
        if not moves:
            return None

        opponent = player.opponent()
        alpha = -INFINITY
        best_score = -INFINITY
        best: Optional[AIMove] = None
        for move in moves:
            self._time_check(deadline)
            child = engine.move_piece(pieces, move.piece.id, move.to_rc)
            score = -self._negamax(
                engine.board_from_pieces(child), child, depth - 1, -INFINITY, -alpha, opponent, corner, deadline
            )
            if score > best_score:
                best_score = score
                best = AIMove(from_rc=move.piece.position, to_rc=move.to_rc, score=score)
            alpha = max(alpha, best_score)
        return best

    def _negamax(
        self,
        board: engine.Board,
        pieces: Tuple[Piece, ...],
        depth: int,
        alpha: float,
        beta: float,
        player: Player,
        corner: CornerShape,
        deadline: float,
    ) -> float:
        self._nodes += 1
        if self._nodes % self.node_check_interval == 0:
            self._time_check(deadline)

        opponent = player.opponent()
        # Shallower wins score higher, slower losses score less badly.
        if engine.has_player_won(pieces, player, corner):
            return WIN_SCORE + depth
        if engine.has_player_won(pieces, opponent, corner):
            return -WIN_SCORE - depth

        if depth == 0:
            return evaluate_position(board, pieces, player, corner)

        alpha_orig = alpha
        beta_orig = beta
        key = TranspositionTable.key_for(pieces, player)
        entry = self._ttable.get(key)
        if entry is not None and entry.depth >= depth:
            self._tt_hits += 1
            if entry.bound is Bound.EXACT:
                return entry.score
            if entry.bound is Bound.LOWER:
                alpha = max(alpha, entry.score)
            elif entry.bound is Bound.UPPER:
                beta = min(beta, entry.score)
            if alpha >= beta:
                self._tt_cutoffs += 1
                return entry.score

        moves = ordered_moves(board, pieces, player)
        if not moves:
            # Stalemate has no rule behind it; treat it as neutral.
            return 0.0

        best_score = -INFINITY
        best_move: Optional[AIMove] = None
        for move in moves:
            child = engine.move_piece(pieces, move.piece.id, move.to_rc)
            score = -self._negamax(
                engine.board_from_pieces(child), child, depth - 1, -beta, -alpha, opponent, corner, deadline
            )
            if score > best_score:
                best_score = score
                best_move = AIMove(from_rc=move.piece.position, to_rc=move.to_rc, score=score)
            alpha = max(alpha, best_score)
            if alpha >= beta:
                break

        if best_score <= alpha_orig:
            bound = Bound.UPPER
        elif best_score >= beta_orig:
            bound = Bound.LOWER
        else:
            bound = Bound.EXACT
        # Win scores carry the depth they were found at, so a transposed hit only approximates the faster-win bonus.
        if self._ttable.store(key, TTEntry(depth=depth, score=best_score, bound=bound, best_move=best_move)):
            self._tt_stores += 1
        return best_score


def find_best_move(
    pieces: Sequence[Piece],
    player: Player,
    corner: CornerShape,
    config: Optional[DifficultyConfig] = None,
    engine_instance: Optional[SearchEngine] = None,
) -> Optional[AIMove]:
    """Run one search; pass ``engine_instance`` to reuse its cache across moves of a game."""

    searcher = engine_instance if engine_instance is not None else SearchEngine(config)
    return searcher.find_best_move(pieces, player, corner, config=config)
