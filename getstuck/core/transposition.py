"""Zobrist hashing and a bounded, thread-safe transposition table.

This module provides two main classes:

- Zobrist: random keys per (cell, card, orientation) plus side-to-move and
  the maximizing flag. The key is computed from scratch for a position;
  the flag is part of it because the same board is scored differently
  depending on which player is maximizing.

- TranspositionTable: a dict keyed by zobrist keys with least-recently-used
  eviction once ``max_entries`` is reached. Each entry keeps the full
  position for collision detection, the search depth, the stored score,
  its bound flag and the best move found.

Usage (example):

    from getstuck.core.transposition import TranspositionTable, TT_EXACT

    tt = TranspositionTable(max_entries=1000)
    tt.store(position, True, depth=3, value=12.0, flag=TT_EXACT, best_move=cell)
    entry = tt.get(position, True)
    if entry is not None:
        print(entry.depth, entry.value, entry.flag, entry.best_move)
"""
from __future__ import annotations

import random
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional

from getstuck.core.board import SIZE, Cell, Position
from getstuck.core.cards import DECK_INDEX, Side

TT_EXACT = 0
TT_ALPHA = 1  # upper bound: every child failed low
TT_BETA = 2   # lower bound: search was cut off

DEFAULT_MAX_ENTRIES = 500_000


def _rand64(rng: random.Random) -> int:
    return rng.getrandbits(64)


def make_zobrist_table(seed: Optional[int] = None) -> Dict[str, object]:
    """Create a fresh zobrist table.

    Structure returned:
      {
        "card": [cell][deck index * 2 + face_down] -> int,
        "side": int (xor when BLACK to move),
        "maximizing": int (xor when the node is a maximizing node)
      }
    """
    rng = random.Random(seed)
    n_cards = len(DECK_INDEX)
    card_table: List[List[int]] = [
        [_rand64(rng) for _ in range(n_cards * 2)] for _ in range(SIZE * SIZE)
    ]
    return {"card": card_table, "side": _rand64(rng), "maximizing": _rand64(rng)}


@dataclass
class TTEntry:
    position: Position
    maximizing: bool
    depth: int
    value: float
    flag: int
    best_move: Optional[Cell]


class Zobrist:
    """Zobrist hash utilities for positions."""

    def __init__(self, seed: Optional[int] = None):
        self.table = make_zobrist_table(seed)

    def hash(self, position: Position, maximizing: bool) -> int:
        t = self.table["card"]
        h = 0
        for i, card in enumerate(position.board.cells):
            if card is not None:
                h ^= t[i][DECK_INDEX[card.identity] * 2 + (0 if card.face_up else 1)]
        if position.side is Side.BLACK:
            h ^= self.table["side"]
        if maximizing:
            h ^= self.table["maximizing"]
        return h


class TranspositionTable:
    """Thread-safe LRU transposition table keyed by zobrist hash.

    Methods:
      - get(position, maximizing) -> Optional[TTEntry]
      - store(position, maximizing, depth, value, flag, best_move)
      - clear()
      - key(position, maximizing) -> int
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES, seed: Optional[int] = None):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self.z = Zobrist(seed)
        self._table: "OrderedDict[int, TTEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def key(self, position: Position, maximizing: bool) -> int:
        return self.z.hash(position, maximizing)

    def get(self, position: Position, maximizing: bool) -> Optional[TTEntry]:
        k = self.key(position, maximizing)
        with self._lock:
            entry = self._table.get(k)
            if entry is not None:
                self._table.move_to_end(k)
        if entry is None:
            return None
        # verify position to avoid rare collisions
        if entry.maximizing != maximizing or entry.position != position:
            return None
        return entry

    def store(self, position: Position, maximizing: bool, depth: int, value: float,
              flag: int, best_move: Optional[Cell]):
        k = self.key(position, maximizing)
        entry = TTEntry(position, maximizing, depth, value, flag, best_move)
        with self._lock:
            old = self._table.get(k)
            # keep the deeper result for the same position
            if old is not None and old.position == position and old.depth > depth:
                self._table.move_to_end(k)
                return
            self._table[k] = entry
            self._table.move_to_end(k)
            while len(self._table) > self.max_entries:
                self._table.popitem(last=False)

    def clear(self):
        with self._lock:
            self._table.clear()

    def __len__(self):
        with self._lock:
            return len(self._table)
