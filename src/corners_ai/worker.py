"""Background worker that keeps search off the caller's thread.

Requests run one at a time on a single worker thread, in submission order, and
every request returns a :class:`concurrent.futures.Future`. Pieces are copied
into an immutable snapshot on submission, so the caller may keep mutating its
own game state while the search runs. A search cannot be interrupted; dropping
its future only means nobody waits for the result.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, Sequence

from . import engine
from .difficulty import DifficultyConfig
from .evaluation import evaluate_position
from .search import SearchEngine
from .types import AIMove, CornerShape, Piece, Player

logger = logging.getLogger(__name__)


class AIWorkerError(RuntimeError):
    """Raised when a request reaches a worker that has been shut down."""


class AIWorker:
    """Serve search, evaluation and cache requests from a dedicated thread."""

    def __init__(self, config: Optional[DifficultyConfig] = None, search_engine: Optional[SearchEngine] = None) -> None:
        self.engine = search_engine or SearchEngine(config)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="corners-ai")
        self._lock = threading.Lock()
        self._pending = 0
        self._closed = False
        self.last_computation_ms: Optional[float] = None

    @property
    def is_computing(self) -> bool:
        with self._lock:
            return self._pending > 0

    def _submit(self, fn, *args) -> Future:
        with self._lock:
            if self._closed:
                raise AIWorkerError("AI worker has been shut down")
            self._pending += 1
        try:
            future = self._executor.submit(self._run, fn, *args)
        except RuntimeError as exc:
            self._release()
            raise AIWorkerError(str(exc)) from exc
        future.add_done_callback(self._release)
        return future

    def _release(self, _future: Optional[Future] = None) -> None:
        with self._lock:
            self._pending -= 1

    def _run(self, fn, *args):
        try:
            return fn(*args)
        except Exception:
            logger.exception("AI worker request %s failed", getattr(fn, "__name__", fn))
            raise

    def configure(self, config: DifficultyConfig) -> Future:
        """Switch difficulty for subsequent searches; the cache is kept."""

        return self._submit(self._configure, config)

    def _configure(self, config: DifficultyConfig) -> None:
        self.engine.config = config

    def compute_move(self, pieces: Sequence[Piece], player: Player, corner: CornerShape) -> "Future[Optional[AIMove]]":
        return self._submit(self._compute_move, tuple(pieces), player, corner)

    def _compute_move(self, pieces, player: Player, corner: CornerShape) -> Optional[AIMove]:
        start = time.monotonic()
        move = self.engine.find_best_move(pieces, player, corner)
        self.last_computation_ms = (time.monotonic() - start) * 1000.0
        return move

    def evaluate(self, pieces: Sequence[Piece], player: Player, corner: CornerShape) -> "Future[float]":
        return self._submit(self._evaluate, tuple(pieces), player, corner)

    def _evaluate(self, pieces, player: Player, corner: CornerShape) -> float:
        return evaluate_position(engine.board_from_pieces(pieces), pieces, player, corner)

    def clear_search_cache(self) -> Future:
        """Queue a cache reset behind any pending searches."""

        return self._submit(self.engine.clear_cache)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait, cancel_futures=not wait)

    def __enter__(self) -> "AIWorker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)
