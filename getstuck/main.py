import logging
from typing import Dict, List, Optional, Tuple

from getstuck.config import CONFIG
from getstuck.core.board import Cell, Position
from getstuck.core.cards import Side
from getstuck.core.deal import deal_new_game
from getstuck.core.moves import apply_move, legal_destinations
from getstuck.core.rules import Outcome, outcome
from getstuck.core.search import BestMove, SearchEngine
from getstuck.scoring import Scores, calculate_scores, compute_final_scores

logger = logging.getLogger(__name__)


class Engine:
    """One game session: the current position, per-side AI depths and a search engine."""

    def __init__(self, red_depth: Optional[int] = None, black_depth: Optional[int] = None,
                 seed: Optional[int] = None, search: Optional[SearchEngine] = None):
        default = CONFIG.search.depth
        self.depths: Dict[Side, int] = {
            Side.RED: red_depth if red_depth is not None else default,
            Side.BLACK: black_depth if black_depth is not None else default,
        }
        self.search = search or SearchEngine()
        self.history: List[Tuple[Side, Cell]] = []
        self.last_stats = None
        self.position = deal_new_game(seed if seed is not None else CONFIG.game.seed)

    def new_game(self, seed: Optional[int] = None) -> Position:
        self.position = deal_new_game(seed)
        self.history.clear()
        self.last_stats = None
        return self.position

    def set_position(self, position: Position):
        self.position = position
        self.history.clear()

    @property
    def turn(self) -> Side:
        return self.position.side

    def legal_moves(self) -> List[Cell]:
        return legal_destinations(self.position)

    def outcome(self) -> Outcome:
        return outcome(self.position)

    def is_game_over(self) -> bool:
        return self.outcome().is_over

    def play(self, cell: Tuple[int, int]) -> bool:
        """Play a move for the side to move. Returns True if legal."""
        cell = Cell(*cell)
        if self.is_game_over() or cell not in self.legal_moves():
            return False
        self.history.append((self.position.side, cell))
        self.position = apply_move(self.position, cell)
        return True

    def ai_move(self, depth: Optional[int] = None, strategy=None) -> Optional[BestMove]:
        """Search and play a move for the side to move; None if it cannot move."""
        if self.is_game_over():
            return None
        side = self.position.side
        result = self.search.best_move(self.position,
                                       depth if depth is not None else self.depths[side],
                                       strategy)
        self.last_stats = result.stats
        if result.move is None:
            return None
        logger.debug("%s plays %s (score %g, %d nodes, %d pruned)", side.value, result.move,
                     result.score, result.stats.nodes_evaluated, result.stats.pruned)
        self.play(result.move)
        return result

    def scores(self) -> Scores:
        """Running tally, or final scores once someone is stuck."""
        result = self.outcome()
        if result.is_over:
            return compute_final_scores(self.position, result.winner)
        return calculate_scores(self.position)
