"""Corners game engine and computer opponent."""

from .types import AIMove, Coord, CornerShape, Move, Piece, Player
from .engine import (
    BOARD_SIZE,
    CORNER_SHAPES,
    DEFAULT_CORNER_SHAPE,
    BoardError,
    apply_move,
    board_from_pieces,
    compute_valid_destinations,
    find_path,
    goal_cells,
    has_player_won,
    initial_pieces,
    is_move_valid,
    is_path_valid,
    start_cells,
    winner,
)
from .evaluation import evaluate_position
from .ordering import OrderedMove, any_legal_move, ordered_moves
from .difficulty import DIFFICULTY_PRESETS, DifficultyConfig, preset_difficulty
from .search import WIN_SCORE, SearchEngine, SearchStats, TranspositionTable, find_best_move
from .worker import AIWorker, AIWorkerError
from .game_controller import GameController, IllegalMoveError

__all__ = [
    "AIMove",
    "AIWorker",
    "AIWorkerError",
    "BOARD_SIZE",
    "BoardError",
    "CORNER_SHAPES",
    "Coord",
    "CornerShape",
    "DEFAULT_CORNER_SHAPE",
    "DIFFICULTY_PRESETS",
    "DifficultyConfig",
    "GameController",
    "IllegalMoveError",
    "Move",
    "OrderedMove",
    "Piece",
    "Player",
    "SearchEngine",
    "SearchStats",
    "TranspositionTable",
    "WIN_SCORE",
    "any_legal_move",
    "apply_move",
    "board_from_pieces",
    "compute_valid_destinations",
    "evaluate_position",
    "find_best_move",
    "find_path",
    "goal_cells",
    "has_player_won",
    "initial_pieces",
    "is_move_valid",
    "is_path_valid",
    "ordered_moves",
    "preset_difficulty",
    "start_cells",
    "winner",
]
