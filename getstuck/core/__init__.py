"""Core engine components: cards, board, move generation, rules, evaluator, search and transposition table."""

from .board import Board, Cell, Position, InvalidBoardError, build_board
from .cards import Card, Side, Suit
from .deal import DealError, deal_new_game
from .evaluator import Evaluator, static_score
from .moves import apply_move, legal_destinations
from .rules import Outcome, outcome
from .search import BestMove, SearchEngine, SearchStats, SearchStrategy
from .transposition import TranspositionTable
