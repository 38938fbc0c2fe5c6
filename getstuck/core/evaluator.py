"""Static evaluator: material (own face-up cards) with optional extra terms."""

from typing import Optional

from getstuck.config import CONFIG, EvalConfig
from getstuck.core.board import Board
from getstuck.core.cards import Side
from getstuck.core.moves import all_destinations


class Evaluator:
    def __init__(self, cfg: Optional[EvalConfig] = None):
        self.cfg = cfg or CONFIG.eval

    def material(self, board: Board, side: Side) -> int:
        return sum(1 for card in board.cells
                   if card is not None and card.face_up and card.side is side)

    def evaluate(self, board: Board, perspective: Side) -> float:
        """Return static score from ``perspective``'s point of view. Read-only."""
        cfg = self.cfg
        score = cfg.material_weight * self.material(board, perspective)
        if cfg.opponent_material_weight:
            score -= cfg.opponent_material_weight * self.material(board, perspective.opponent)
        if cfg.mobility_weight:
            moves = all_destinations(board, board.empty_cell, perspective)
            score += cfg.mobility_weight * len(moves)
        return score


_default = Evaluator()


def static_score(board: Board, perspective: Side) -> float:
    return _default.evaluate(board, perspective)
