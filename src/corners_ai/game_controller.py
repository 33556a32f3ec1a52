"""Game controller utilities for UI-driven or scripted play.

This module keeps UI concerns separate from core game logic so turn order,
move validation, history and the computer opponent can be tested without
driving a GUI.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from . import engine
from .difficulty import DifficultyConfig, preset_difficulty
from .ordering import any_legal_move
from .search import SearchEngine
from .types import AIMove, Coord, CornerShape, Move, Piece, Player

logger = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    """Raised when a requested move breaks the rules or the game is over."""


@dataclass(frozen=True)
class HistoryEntry:
    """Snapshot after a move; the first entry holds the start position and no move."""

    pieces: Tuple[Piece, ...]
    to_move: Player
    move: Optional[Move] = None


class GameController:
    """Manage a single Corners game, including turns, history and an optional AI seat."""

    def __init__(
        self,
        corner: CornerShape = engine.DEFAULT_CORNER_SHAPE,
        ai_player: Optional[Player] = None,
        difficulty: Optional[DifficultyConfig] = None,
        search_engine: Optional[SearchEngine] = None,
    ) -> None:
        self.ai_player = ai_player
        self.difficulty = difficulty or preset_difficulty("medium")
        self.search_engine = search_engine or SearchEngine(self.difficulty)
        self.corner = corner
        self.pieces: Tuple[Piece, ...] = ()
        self.current_player = Player.A
        self.winner: Optional[Player] = None
        self.history: List[HistoryEntry] = []
        self.new_game(corner)

    def new_game(self, corner: Optional[CornerShape] = None) -> None:
        """Reset to the starting layout; the AI cache is cleared as well."""

        self.corner = self.corner if corner is None else corner
        self.set_position(engine.initial_pieces(self.corner), Player.A)
        ai_seat = self.ai_player.value if self.ai_player else "none"
        logger.info("New game: corner=%s ai=%s difficulty=%s", self.corner, ai_seat, self.difficulty.name)

    def set_position(self, pieces: Sequence[Piece], to_move: Player) -> None:
        """Start from an arbitrary legal position (custom setups and tests)."""

        snapshot = tuple(pieces)
        engine.board_from_pieces(snapshot)
        self.search_engine.clear_cache()
        self.pieces = snapshot
        self.current_player = to_move
        self.history = [HistoryEntry(pieces=snapshot, to_move=to_move)]
        self.winner = engine.winner(snapshot, self.corner)

    @property
    def board(self) -> engine.Board:
        return engine.board_from_pieces(self.pieces)

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def is_ai_turn(self) -> bool:
        return not self.is_over and self.ai_player is self.current_player

    @property
    def last_move(self) -> Optional[Move]:
        return self.history[-1].move

    def piece_at(self, coord: Coord) -> Optional[Piece]:
        return engine.find_piece_at(self.pieces, coord)

    def legal_destinations(self, coord: Coord) -> Set[Coord]:
        """Return destination cells for the current player's piece on ``coord``."""

        piece = self.piece_at(coord)
        if piece is None or piece.player is not self.current_player or self.is_over:
            return set()
        return set(engine.compute_valid_destinations(self.board, piece.position))

    def has_legal_move(self) -> bool:
        return any_legal_move(self.board, self.pieces, self.current_player)

    def apply_move(self, from_rc: Coord, to_rc: Coord) -> Move:
        """Validate and play a move for the current player, returning it with its path."""

        from_rc, to_rc = tuple(from_rc), tuple(to_rc)
        if self.is_over:
            raise IllegalMoveError("game is already over")
        piece = self.piece_at(from_rc)
        if piece is None:
            raise IllegalMoveError(f"no piece at {from_rc}")
        if piece.player is not self.current_player:
            raise IllegalMoveError(f"piece at {from_rc} belongs to {piece.player.value}, not {self.current_player.value}")
        board = self.board
        if not engine.is_move_valid(board, from_rc, to_rc):
            raise IllegalMoveError(f"{to_rc} is not reachable from {from_rc}")

        path = tuple(engine.find_path(board, from_rc, to_rc))
        move = Move(from_rc=from_rc, to_rc=to_rc, path=path)
        mover = self.current_player
        self.pieces = engine.move_piece(self.pieces, piece.id, to_rc)
        self.current_player = mover.opponent()
        self.history.append(HistoryEntry(pieces=self.pieces, to_move=self.current_player, move=move))
        logger.debug("%s moved %s -> %s via %s", mover.value, from_rc, to_rc, path)

        if engine.has_player_won(self.pieces, mover, self.corner):
            self.winner = mover
            logger.info("Player %s wins after %d moves", mover.value, len(self.history) - 1)
        return move

    def compute_ai_move(self, config: Optional[DifficultyConfig] = None) -> Optional[AIMove]:
        """Ask the search for the current player's move without playing it."""

        if self.is_over:
            return None
        return self.search_engine.find_best_move(
            self.pieces, self.current_player, self.corner, config=config or self.difficulty
        )

    def step_ai(self, config: Optional[DifficultyConfig] = None) -> Optional[Move]:
        """Search and play the current player's move; ``None`` means no move was available."""

        ai_move = self.compute_ai_move(config)
        if ai_move is None:
            logger.warning("AI could not decide a move for %s", self.current_player.value)
            return None
        return self.apply_move(ai_move.from_rc, ai_move.to_rc)

    def jump_to_history(self, index: int) -> None:
        """Return to the position after ``index`` moves, discarding later moves."""

        if not 0 <= index < len(self.history):
            raise IndexError(f"history index {index} out of range (0..{len(self.history) - 1})")
        del self.history[index + 1 :]
        entry = self.history[index]
        self.pieces = entry.pieces
        self.current_player = entry.to_move
        self.winner = engine.winner(self.pieces, self.corner)

    def undo(self) -> bool:
        """Take back the last move; returns ``False`` at the start position."""

        if len(self.history) < 2:
            return False
        self.jump_to_history(len(self.history) - 2)
        return True
