"""Minimax with alpha-beta pruning, memoization and iterative deepening."""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from getstuck.config import CONFIG, SearchConfig
from getstuck.core.board import Cell, Position
from getstuck.core.evaluator import Evaluator
from getstuck.core.moves import apply_move, legal_destinations
from getstuck.core.transposition import TT_ALPHA, TT_BETA, TT_EXACT, TranspositionTable
from getstuck.core.utils import format_info

logger = logging.getLogger(__name__)

INF = float("inf")


class SearchStrategy(Enum):
    AUTO = "auto"
    FIXED = "fixed"
    ITERATIVE = "iterative"


@dataclass
class SearchStats:
    depth_reached: int = 0
    nodes_evaluated: int = 0
    pruned: int = 0
    cache_hits: int = 0
    chosen_move: Optional[Cell] = None
    elapsed_ms: float = 0.0


@dataclass(frozen=True)
class SearchResult:
    move: Optional[Cell]
    score: float


@dataclass
class BestMove:
    move: Optional[Cell]
    score: float
    stats: SearchStats


class SearchEngine:
    def __init__(self, evaluator: Optional[Evaluator] = None, depth: Optional[int] = None,
                 config: Optional[SearchConfig] = None, use_pruning: Optional[bool] = None,
                 use_cache: Optional[bool] = None, clock: Callable[[], float] = time.monotonic):
        self.cfg = config or CONFIG.search
        self.evaluator = evaluator or Evaluator()
        self.max_depth = depth if depth is not None else self.cfg.depth
        self.use_pruning = self.cfg.use_pruning if use_pruning is None else use_pruning
        self.use_cache = self.cfg.use_cache if use_cache is None else use_cache
        self.tt = TranspositionTable(max_entries=self.cfg.tt_max_entries)
        self.clock = clock
        self._thread: Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    #  Entry points
    # ------------------------------------------------------------------

    def best_move(self, position: Position, depth: Optional[int] = None,
                  strategy=None) -> BestMove:
        """Pick a move for the side to move.

        ``strategy`` may be a SearchStrategy or its string value; AUTO uses
        iterative deepening only when depth exceeds the configured threshold.
        Each call collects its own counters.
        """
        depth = max(1, depth if depth is not None else self.max_depth)
        strategy = SearchStrategy(strategy or self.cfg.strategy)
        if strategy is SearchStrategy.AUTO:
            iterative = depth > self.cfg.iterative_threshold
        else:
            iterative = strategy is SearchStrategy.ITERATIVE

        stats = SearchStats()
        start = self.clock()

        if not legal_destinations(position):
            stats.nodes_evaluated += 1
            score = self.evaluator.evaluate(position.board, position.side)
            return BestMove(None, score, stats)

        if iterative:
            result = self._iterative(position, depth, start, stats)
        else:
            result = self.search(position, depth, stats=stats)
            stats.depth_reached = depth
            stats.elapsed_ms = (self.clock() - start) * 1000
            logger.debug(format_info(depth, result.score, stats.nodes_evaluated,
                                     stats.pruned, stats.elapsed_ms, result.move))

        stats.chosen_move = result.move
        return BestMove(result.move, result.score, stats)

    def _iterative(self, position: Position, max_depth: int, start: float,
                   stats: SearchStats) -> SearchResult:
        budget_ms = self.cfg.time_limit_ms
        result = SearchResult(None, 0.0)
        for d in range(1, max_depth + 1):
            # A started depth always completes; the budget is checked between depths.
            result = self.search(position, d, stats=stats)
            stats.depth_reached = d
            elapsed_ms = (self.clock() - start) * 1000
            stats.elapsed_ms = elapsed_ms
            logger.info(format_info(d, result.score, stats.nodes_evaluated,
                                    stats.pruned, elapsed_ms, result.move))
            if elapsed_ms > budget_ms:
                logger.info("Time budget of %d ms exhausted after depth %d", budget_ms, d)
                break
        return result

    def search(self, position: Position, depth: int, maximizing: bool = True,
               alpha: float = -INF, beta: float = INF,
               stats: Optional[SearchStats] = None) -> SearchResult:
        """Fixed-depth minimax from ``position``.

        Counters go to ``stats`` when given, so one best_move call can
        accumulate them across depths.
        """
        if stats is None:
            stats = SearchStats()
        perspective = position.side if maximizing else position.side.opponent
        move, score = self._minimax(position, depth, maximizing, alpha, beta, perspective,
                                    stats, root=True)
        return SearchResult(move, score)

    def start_search(self, position: Position, depth: Optional[int] = None,
                     callback: Optional[Callable[[BestMove], None]] = None, strategy=None):
        """Run best_move on a daemon thread. There is no way to stop it early."""
        if self._thread and self._thread.is_alive():
            return None

        def worker():
            result = self.best_move(position, depth, strategy)
            if callback:
                callback(result)

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()
        return self._thread

    def wait(self, timeout: Optional[float] = None):
        if self._thread:
            self._thread.join(timeout)

    # ------------------------------------------------------------------
    #  Core recursion
    # ------------------------------------------------------------------

    def _minimax(self, position: Position, depth: int, maximizing: bool,
                 alpha: float, beta: float, perspective, stats: SearchStats,
                 root: bool = False) -> Tuple[Optional[Cell], float]:
        # TT lookup; shallower entries are never reused
        entry = self.tt.get(position, maximizing) if self.use_cache else None
        if entry is not None and entry.depth >= depth:
            if entry.flag == TT_EXACT:
                stats.nodes_evaluated += 1
                stats.cache_hits += 1
                return entry.best_move, entry.value
            # Bounds only narrow inner windows; the root must keep its full
            # window so ties still resolve to the first best move.
            if not root:
                if entry.flag == TT_BETA:
                    alpha = max(alpha, entry.value)
                elif entry.flag == TT_ALPHA:
                    beta = min(beta, entry.value)
                if alpha >= beta:
                    stats.nodes_evaluated += 1
                    stats.cache_hits += 1
                    return entry.best_move, entry.value

        moves = legal_destinations(position)

        if depth <= 0 or not moves:
            stats.nodes_evaluated += 1
            score = self.evaluator.evaluate(position.board, perspective)
            if self.use_cache:
                self.tt.store(position, maximizing, depth, score, TT_EXACT, None)
            return None, score

        alpha_orig, beta_orig = alpha, beta
        best_move = moves[0]
        best_score = -INF if maximizing else INF

        for move in moves:
            child = apply_move(position, move)
            if self.use_pruning:
                _, score = self._minimax(child, depth - 1, not maximizing, alpha, beta, perspective,
                                         stats)
            else:
                _, score = self._minimax(child, depth - 1, not maximizing, -INF, INF, perspective,
                                         stats)

            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, best_score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, best_score)

            if self.use_pruning and beta <= alpha:
                stats.pruned += 1
                break

        if self.use_cache:
            if best_score <= alpha_orig:
                flag = TT_ALPHA
            elif best_score >= beta_orig:
                flag = TT_BETA
            else:
                flag = TT_EXACT
            self.tt.store(position, maximizing, depth, best_score, flag, best_move)
        return best_move, best_score
