"""Immutable 7x7 board and position types.

A Board is a flat tuple of 49 optional cards. Exactly one cell is empty;
the other 48 hold every card of the deck once. Boards coming from outside
(text notation, placements) are validated; boards produced by the move
applier are trusted and not re-validated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from getstuck.core.cards import Card, Side, generate_deck

SIZE = 7
EMPTY_TOKEN = ".."


class InvalidBoardError(ValueError):
    pass


class Cell(NamedTuple):
    row: int
    col: int

    @property
    def index(self) -> int:
        return self.row * SIZE + self.col

    def in_bounds(self) -> bool:
        return 0 <= self.row < SIZE and 0 <= self.col < SIZE

    @classmethod
    def parse(cls, text: str) -> "Cell":
        """Parse 'row,col' (also accepts 'row col')."""
        parts = [p for p in re.split(r"[,\s]+", text.strip()) if p]
        if len(parts) != 2:
            raise ValueError(f"Expected 'row,col', got {text!r}")
        cell = cls(int(parts[0]), int(parts[1]))
        if not cell.in_bounds():
            raise ValueError(f"Cell out of bounds: {text!r}")
        return cell

    def __str__(self):
        return f"{self.row},{self.col}"


CENTER = Cell(SIZE // 2, SIZE // 2)


@dataclass(frozen=True)
class Board:
    cells: Tuple[Optional[Card], ...]

    def __getitem__(self, cell: Tuple[int, int]) -> Optional[Card]:
        row, col = cell
        return self.cells[row * SIZE + col]

    @property
    def empty_cell(self) -> Cell:
        i = self.cells.index(None)
        return Cell(i // SIZE, i % SIZE)

    def rows(self) -> List[Tuple[Optional[Card], ...]]:
        return [self.cells[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]

    def cards(self) -> Iterator[Tuple[Cell, Card]]:
        for i, card in enumerate(self.cells):
            if card is not None:
                yield Cell(i // SIZE, i % SIZE), card

    def slide(self, source: Cell, target: Cell) -> "Board":
        """Move the card at source into target (which must be empty), face-down."""
        cells = list(self.cells)
        cells[target.index] = cells[source.index].flipped_down()
        cells[source.index] = None
        return Board(tuple(cells))

    def validate(self) -> "Board":
        if len(self.cells) != SIZE * SIZE:
            raise InvalidBoardError(f"Board must have {SIZE * SIZE} cells, got {len(self.cells)}")
        empties = sum(1 for c in self.cells if c is None)
        if empties != 1:
            raise InvalidBoardError(f"Board must have exactly one empty cell, got {empties}")
        seen = set()
        for card in self.cells:
            if card is None:
                continue
            if card.identity in seen:
                raise InvalidBoardError(f"Duplicate card: {card.label.rstrip('*')}")
            seen.add(card.identity)
        return self

    def to_text(self) -> str:
        return "/".join(
            " ".join(card.label if card else EMPTY_TOKEN for card in row)
            for row in self.rows()
        )

    @classmethod
    def from_text(cls, text: str) -> "Board":
        rows = [r for r in re.split(r"[/\n]", text.strip()) if r.strip()]
        if len(rows) != SIZE:
            raise InvalidBoardError(f"Expected {SIZE} rows, got {len(rows)}")
        cells: List[Optional[Card]] = []
        for row in rows:
            tokens = row.split()
            if len(tokens) != SIZE:
                raise InvalidBoardError(f"Expected {SIZE} cells per row, got {len(tokens)}: {row!r}")
            for token in tokens:
                if token == EMPTY_TOKEN:
                    cells.append(None)
                    continue
                try:
                    cells.append(Card.from_label(token))
                except ValueError as e:
                    raise InvalidBoardError(str(e)) from None
        return cls(tuple(cells)).validate()

    def __str__(self):
        return "\n".join(
            " ".join(f"{card.label if card else EMPTY_TOKEN:>3}" for card in row)
            for row in self.rows()
        )


@dataclass(frozen=True)
class Position:
    board: Board
    empty: Cell
    side: Side = Side.RED

    @classmethod
    def from_board(cls, board: Board, side: Side = Side.RED) -> "Position":
        board.validate()
        return cls(board, board.empty_cell, side)

    @classmethod
    def from_text(cls, text: str, side: Side = Side.RED) -> "Position":
        board = Board.from_text(text)
        return cls(board, board.empty_cell, side)

    def to_text(self) -> str:
        return self.board.to_text()


def build_board(placements: Dict[Tuple[int, int], Card], empty: Tuple[int, int] = CENTER,
                rest_face_up: bool = False) -> Board:
    """Build a full board from a few explicit placements.

    Cards not placed fill the remaining cells in deck order, face-down unless
    ``rest_face_up``. Useful for puzzle setups and tests.
    """
    empty = Cell(*empty)
    if not empty.in_bounds():
        raise InvalidBoardError(f"Empty cell out of bounds: {empty}")
    cells: List[Optional[Card]] = [None] * (SIZE * SIZE)
    used = set()
    for cell, card in placements.items():
        cell = Cell(*cell)
        if not cell.in_bounds():
            raise InvalidBoardError(f"Cell out of bounds: {cell}")
        if cell == empty:
            raise InvalidBoardError(f"Cannot place {card} on the empty cell {cell}")
        if card.identity in used:
            raise InvalidBoardError(f"Duplicate card: {card.label.rstrip('*')}")
        used.add(card.identity)
        cells[cell.index] = card
    filler = (c if rest_face_up else c.flipped_down()
              for c in generate_deck() if c.identity not in used)
    for i in range(SIZE * SIZE):
        if i != empty.index and cells[i] is None:
            cells[i] = next(filler)
    return Board(tuple(cells)).validate()
