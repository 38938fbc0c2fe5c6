"""Move generation and the move applier.

From the empty cell, every ray is walked outward. A face-up card of the
mover's color on a ray may slide into the empty cell if it is a court card
(J/Q/K jump anything) or if nothing between it and the empty cell is
face-down. Diagonal slides are only offered when no orthogonal slide exists.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from getstuck.core.board import SIZE, Board, Cell, Position
from getstuck.core.cards import Side

# (drow, dcol): right, left, down, up
ORTHOGONAL = ((0, 1), (0, -1), (1, 0), (-1, 0))
# down-right, down-left, up-right, up-left
DIAGONAL = ((1, 1), (1, -1), (-1, 1), (-1, -1))


def has_line_of_sight(board: Board, empty: Cell, target: Cell) -> bool:
    """True if no face-down card sits strictly between target and empty."""
    dr = (empty.row > target.row) - (empty.row < target.row)
    dc = (empty.col > target.col) - (empty.col < target.col)
    r, c = target.row + dr, target.col + dc
    while (r, c) != (empty.row, empty.col):
        card = board[r, c]
        if card is not None and not card.face_up:
            return False
        r += dr
        c += dc
    return True


def _scan(board: Board, empty: Cell, side: Side,
          directions: Sequence[Tuple[int, int]]) -> List[Cell]:
    moves = []
    for dr, dc in directions:
        r, c = empty.row + dr, empty.col + dc
        while 0 <= r < SIZE and 0 <= c < SIZE:
            card = board[r, c]
            if card is not None and card.face_up and card.side is side:
                target = Cell(r, c)
                if card.is_court or has_line_of_sight(board, empty, target):
                    moves.append(target)
            r += dr
            c += dc
    return moves


def orthogonal_destinations(board: Board, empty: Cell, side: Side) -> List[Cell]:
    return _scan(board, empty, side, ORTHOGONAL)


def diagonal_destinations(board: Board, empty: Cell, side: Side) -> List[Cell]:
    return _scan(board, empty, side, DIAGONAL)


def all_destinations(board: Board, empty: Cell, side: Side) -> List[Cell]:
    """Union of orthogonal and diagonal destinations, orthogonal first."""
    return (orthogonal_destinations(board, empty, side)
            + diagonal_destinations(board, empty, side))


def preferred_destinations(board: Board, empty: Cell, side: Side) -> List[Cell]:
    moves = orthogonal_destinations(board, empty, side)
    if moves:
        return moves
    return diagonal_destinations(board, empty, side)


def legal_destinations(position: Position, side: Optional[Side] = None) -> List[Cell]:
    """Orthogonal-preferred legal destinations (defaults to the side to move)."""
    return preferred_destinations(position.board, position.empty, side or position.side)


def apply_move(position: Position, destination: Tuple[int, int]) -> Position:
    """Slide the card at destination into the empty cell, face-down.

    Returns the input position unchanged when destination is off the board,
    is the empty cell, or holds no card. Legality is not checked.
    """
    destination = Cell(*destination)
    if not destination.in_bounds() or destination == position.empty:
        return position
    if position.board[destination] is None:
        return position
    board = position.board.slide(destination, position.empty)
    return Position(board, destination, position.side.opponent)
