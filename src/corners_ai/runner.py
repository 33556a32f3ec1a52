"""CLI runner for Corners self-play.

Usage examples:
- Single game: ``python -m corners_ai.runner --a medium --b easy --corner 3x3``
- Fixed-depth duel: ``python -m corners_ai.runner --a hard --b hard --max-depth 2 --stats``
"""

from __future__ import annotations

import argparse
import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from . import engine
from .difficulty import DIFFICULTY_PRESETS, DifficultyConfig, preset_difficulty
from .game_controller import GameController
from .search import SearchEngine, SearchStats
from .types import CornerShape, Piece, Player

logger = logging.getLogger(__name__)


@dataclass
class GameSummary:
    winner: Optional[Player]
    turns: int
    reason: str
    move_times: Dict[Player, List[float]]
    search_stats: Dict[Player, List[SearchStats]]


def format_board(pieces: Sequence[Piece]) -> str:
    board = engine.board_from_pieces(pieces)
    lines: List[str] = []
    for row in board:
        lines.append(" ".join("." if cell is None else cell.value for cell in row))
    return "\n".join(lines)


def play_game(
    a_config: DifficultyConfig,
    b_config: DifficultyConfig,
    corner: CornerShape = engine.DEFAULT_CORNER_SHAPE,
    max_turns: int = 200,
    emit_moves: bool = False,
    show_board: bool = False,
    show_stats: bool = False,
) -> GameSummary:
    """Play one engine-versus-engine game and report how it ended."""

    configs = {Player.A: a_config, Player.B: b_config}
    engines = {player: SearchEngine(cfg) for player, cfg in configs.items()}
    controller = GameController(corner=corner, search_engine=engines[Player.A])
    move_times: Dict[Player, List[float]] = {Player.A: [], Player.B: []}
    search_stats: Dict[Player, List[SearchStats]] = {Player.A: [], Player.B: []}

    if show_board:
        print(format_board(controller.pieces))
        print()

    for turn in range(1, max_turns + 1):
        player = controller.current_player
        searcher = engines[player]
        start = time.monotonic()
        ai_move = searcher.find_best_move(controller.pieces, player, corner, config=configs[player])
        move_times[player].append((time.monotonic() - start) * 1000.0)
        if searcher.last_stats is not None:
            search_stats[player].append(searcher.last_stats)

        if ai_move is None:
            if emit_moves:
                print(f"Turn {turn}: {player.value} has no move")
            return GameSummary(winner=None, turns=turn - 1, reason="no move", move_times=move_times,
                               search_stats=search_stats)

        move = controller.apply_move(ai_move.from_rc, ai_move.to_rc)
        if emit_moves:
            route = " -> ".join(f"{r},{c}" for r, c in move.path or (move.from_rc, move.to_rc))
            print(f"Turn {turn}: {player.value} {route} (score {ai_move.score:.1f})")
        if show_stats and searcher.last_stats is not None:
            stats = searcher.last_stats
            print(
                f"{player.value} search stats: depth={stats.depth_reached} nodes={stats.nodes} "
                f"tt_hits={stats.tt_hits} tt_stores={stats.tt_stores} tt_cutoffs={stats.tt_cutoffs} "
                f"tt_size={stats.tt_size} elapsed_ms={stats.elapsed_ms:.1f} timed_out={stats.timed_out}"
            )
        if show_board:
            print(format_board(controller.pieces))
            print()

        if controller.winner is not None:
            return GameSummary(winner=controller.winner, turns=turn, reason="goal", move_times=move_times,
                               search_stats=search_stats)

    return GameSummary(winner=None, turns=max_turns, reason="turn limit", move_times=move_times,
                       search_stats=search_stats)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Corners self-play runner")
    parser.add_argument("--corner", type=str, default="3x3", help="Corner shape: 3x3, 3x4 or 4x4")
    parser.add_argument("--a", choices=sorted(DIFFICULTY_PRESETS), default="medium", help="Difficulty for player A")
    parser.add_argument("--b", choices=sorted(DIFFICULTY_PRESETS), default="easy", help="Difficulty for player B")
    parser.add_argument("--max-depth", type=int, default=None, help="Override search depth for both sides")
    parser.add_argument("--max-time-ms", type=int, default=None, help="Override time budget for both sides")
    parser.add_argument("--max-turns", type=int, default=200)
    parser.add_argument("--verbose", action="store_true", help="Print the board after every move")
    parser.add_argument("--stats", action="store_true", help="Print search stats each move")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        corner = CornerShape.parse(args.corner)
        a_config = preset_difficulty(args.a).with_overrides(args.max_depth, args.max_time_ms)
        b_config = preset_difficulty(args.b).with_overrides(args.max_depth, args.max_time_ms)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        raise SystemExit(1)

    summary = play_game(
        a_config=a_config,
        b_config=b_config,
        corner=corner,
        max_turns=args.max_turns,
        emit_moves=True,
        show_board=args.verbose,
        show_stats=args.stats,
    )
    if summary.winner is None:
        print(f"No winner after {summary.turns} turns ({summary.reason})")
    else:
        print(f"Game winner: {summary.winner.value} in {summary.turns} turns")


if __name__ == "__main__":
    main()
