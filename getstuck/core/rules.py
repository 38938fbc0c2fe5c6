"""Terminal-state detection."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from getstuck.core.board import Board, Cell, Position
from getstuck.core.cards import Side
from getstuck.core.moves import all_destinations


class Outcome(Enum):
    ONGOING = "ongoing"
    RED_STUCK = "red_stuck"
    BLACK_STUCK = "black_stuck"
    DRAW = "draw"

    @property
    def is_over(self) -> bool:
        return self is not Outcome.ONGOING

    @property
    def winner(self) -> Optional[Side]:
        if self is Outcome.RED_STUCK:
            return Side.BLACK
        if self is Outcome.BLACK_STUCK:
            return Side.RED
        return None


def is_stuck(board: Board, empty: Cell, side: Side) -> bool:
    # Diagonal moves count here even if orthogonal ones are preferred in play.
    return not all_destinations(board, empty, side)


def outcome_of(board: Board, empty: Cell) -> Outcome:
    red_stuck = is_stuck(board, empty, Side.RED)
    black_stuck = is_stuck(board, empty, Side.BLACK)
    if red_stuck and black_stuck:
        return Outcome.DRAW
    if red_stuck:
        return Outcome.RED_STUCK
    if black_stuck:
        return Outcome.BLACK_STUCK
    return Outcome.ONGOING


def outcome(position: Position) -> Outcome:
    return outcome_of(position.board, position.empty)
