"""Shuffle-deal of a new game."""

from __future__ import annotations

import logging
import random
from typing import Optional

from getstuck.config import CONFIG
from getstuck.core.board import CENTER, SIZE, Board, Position
from getstuck.core.cards import Side, generate_deck
from getstuck.core.moves import legal_destinations

logger = logging.getLogger(__name__)


class DealError(RuntimeError):
    pass


def shuffled_board(rng: random.Random) -> Board:
    deck = generate_deck()
    rng.shuffle(deck)
    cells = []
    for i in range(SIZE * SIZE):
        cells.append(None if i == CENTER.index else deck.pop())
    return Board(tuple(cells))


def deal_new_game(seed: Optional[int] = None, max_attempts: Optional[int] = None,
                  rng: Optional[random.Random] = None) -> Position:
    """Deal a uniformly shuffled board, empty cell at the center, RED to move.

    A deal where either side starts without a legal move is thrown away.
    ``rng`` replaces the generator seeded from ``seed``.
    """
    rng = rng or random.Random(seed)
    attempts = max_attempts or CONFIG.game.max_deal_attempts
    for attempt in range(1, attempts + 1):
        position = Position(shuffled_board(rng), CENTER, Side.RED)
        if legal_destinations(position, Side.RED) and legal_destinations(position, Side.BLACK):
            return position
        logger.info("Re-dealing: deal %d leaves a side without moves", attempt)
    raise DealError(f"No playable deal after {attempts} attempts")
