"""GetStuck: sliding-card puzzle engine with minimax search."""

from getstuck.core import (
    Board,
    Card,
    Cell,
    DealError,
    Evaluator,
    InvalidBoardError,
    Outcome,
    Position,
    SearchEngine,
    SearchStrategy,
    Side,
    Suit,
    apply_move,
    build_board,
    deal_new_game,
    legal_destinations,
    outcome,
    static_score,
)
from getstuck.main import Engine
from getstuck.scoring import calculate_scores, compute_final_scores, finalise_scores
