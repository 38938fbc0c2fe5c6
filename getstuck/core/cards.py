"""Card and side value types, plus the 48-card deck."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List


class Suit(Enum):
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Side(Enum):
    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> "Side":
        return Side.BLACK if self is Side.RED else Side.RED


SUITS = (Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES)
# No tens in this game.
RANKS = (1, 2, 3, 4, 5, 6, 7, 8, 9, 11, 12, 13)
COURT_MIN = 11

RANK_CHARS = {1: "A", 11: "J", 12: "Q", 13: "K"}
CHAR_RANKS = {v: k for k, v in RANK_CHARS.items()}


@dataclass(frozen=True)
class Card:
    rank: int
    suit: Suit
    face_up: bool = True

    def __post_init__(self):
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")

    @property
    def side(self) -> Side:
        return Side.RED if self.suit.is_red else Side.BLACK

    @property
    def is_court(self) -> bool:
        return self.rank >= COURT_MIN

    @property
    def identity(self):
        """(rank, suit) ignoring orientation."""
        return self.rank, self.suit

    def flipped_down(self) -> "Card":
        if not self.face_up:
            return self
        return replace(self, face_up=False)

    @property
    def label(self) -> str:
        text = RANK_CHARS.get(self.rank, str(self.rank)) + self.suit.value
        return text if self.face_up else text + "*"

    @classmethod
    def from_label(cls, label: str) -> "Card":
        """Parse 'Qh', '7s*' (face-down) and the like."""
        text = label.strip()
        face_up = True
        if text.endswith("*"):
            face_up = False
            text = text[:-1]
        if len(text) != 2:
            raise ValueError(f"Invalid card label: {label!r}")
        rank_char, suit_char = text[0].upper(), text[1].lower()
        if rank_char in CHAR_RANKS:
            rank = CHAR_RANKS[rank_char]
        elif rank_char.isdigit() and rank_char != "0":
            rank = int(rank_char)
        else:
            raise ValueError(f"Invalid card label: {label!r}")
        try:
            suit = Suit(suit_char)
        except ValueError:
            raise ValueError(f"Invalid card label: {label!r}") from None
        return cls(rank, suit, face_up)

    def __str__(self):
        return self.label


def generate_deck() -> List[Card]:
    """All 48 cards face-up, suit-major order."""
    return [Card(rank, suit) for suit in SUITS for rank in RANKS]


# Stable index per (rank, suit), used for hashing.
DECK_INDEX = {card.identity: i for i, card in enumerate(generate_deck())}
