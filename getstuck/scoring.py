"""Score tallies for display: raw totals and the final court-card rule.

Only face-up cards count. Numerals score their face value (ace = 1) and
every face-up court card is worth 10. When the game ends the winner's
courts are worth +10 each and the loser's -10 each.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from getstuck.core.board import Position
from getstuck.core.cards import Side

COURT_VALUE = 10


@dataclass(frozen=True)
class ScoreBreakdown:
    numerals: int = 0  # sum of A(1)-9 values
    courts: int = 0    # count of J, Q, K still face-up


@dataclass(frozen=True)
class Scores:
    red: int
    black: int
    red_breakdown: ScoreBreakdown
    black_breakdown: ScoreBreakdown

    def to_dict(self) -> Dict[str, object]:
        return {
            "red": self.red,
            "black": self.black,
            "red_breakdown": {"numerals": self.red_breakdown.numerals,
                              "courts": self.red_breakdown.courts},
            "black_breakdown": {"numerals": self.black_breakdown.numerals,
                                "courts": self.black_breakdown.courts},
        }


def calculate_scores(position: Position) -> Scores:
    numerals = {Side.RED: 0, Side.BLACK: 0}
    courts = {Side.RED: 0, Side.BLACK: 0}
    for _, card in position.board.cards():
        if not card.face_up:
            continue
        if card.is_court:
            courts[card.side] += 1
        else:
            numerals[card.side] += card.rank
    red = ScoreBreakdown(numerals[Side.RED], courts[Side.RED])
    black = ScoreBreakdown(numerals[Side.BLACK], courts[Side.BLACK])
    return Scores(
        red=red.numerals + red.courts * COURT_VALUE,
        black=black.numerals + black.courts * COURT_VALUE,
        red_breakdown=red,
        black_breakdown=black,
    )


def finalise_scores(raw: Scores, winner: Optional[Side]) -> Scores:
    """Apply the +10/-10 court rule. A draw (no winner) keeps the raw tally."""
    if winner is None:
        return raw

    def total(breakdown: ScoreBreakdown, side: Side) -> int:
        sign = 1 if side is winner else -1
        return breakdown.numerals + breakdown.courts * COURT_VALUE * sign

    return Scores(
        red=total(raw.red_breakdown, Side.RED),
        black=total(raw.black_breakdown, Side.BLACK),
        red_breakdown=raw.red_breakdown,
        black_breakdown=raw.black_breakdown,
    )


def compute_final_scores(position: Position, winner: Optional[Side]) -> Scores:
    return finalise_scores(calculate_scores(position), winner)
