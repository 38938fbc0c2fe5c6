"""FastAPI REST interface for a single local game session."""

import logging
import threading

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Literal, Optional

from getstuck.config import CONFIG
from getstuck.core.board import Cell, InvalidBoardError, Position
from getstuck.core.cards import Side
from getstuck.core.deal import DealError
from getstuck.main import Engine

logging.basicConfig(level=CONFIG.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared session (preserves the search cache across requests).
engine = Engine()
_lock = threading.Lock()


class PositionRequest(BaseModel):
    board: str
    turn: Literal["red", "black"] = "red"


class MoveRequest(BaseModel):
    row: int
    col: int


class SearchRequest(BaseModel):
    depth: Optional[int] = None
    strategy: Optional[Literal["auto", "fixed", "iterative"]] = None
    play: bool = False


class ResetRequest(BaseModel):
    seed: Optional[int] = None


def _cell(cell):
    return {"row": cell.row, "col": cell.col} if cell is not None else None


def _state():
    position = engine.position
    result = engine.outcome()
    return {
        "board": position.to_text(),
        "empty": _cell(position.empty),
        "turn": position.side.value,
        "legal_moves": [_cell(c) for c in engine.legal_moves()],
        "outcome": result.value,
        "winner": result.winner.value if result.winner else None,
        "is_game_over": result.is_over,
    }


@app.get("/board")
def get_board():
    with _lock:
        return _state()


@app.get("/scores")
def get_scores():
    with _lock:
        return engine.scores().to_dict()


@app.post("/position")
def set_position(req: PositionRequest):
    with _lock:
        try:
            position = Position.from_text(req.board, Side(req.turn))
        except InvalidBoardError as e:
            raise HTTPException(status_code=400, detail=f"Invalid board: {e}")
        engine.set_position(position)
        return _state()


@app.post("/move")
def make_move(req: MoveRequest):
    with _lock:
        if engine.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        cell = Cell(req.row, req.col)
        if not engine.play(cell):
            raise HTTPException(status_code=400, detail=f"Illegal move: {cell}")
        return {**_state(), "move": _cell(cell)}


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    with _lock:
        position = engine.position
        if engine.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        if not engine.legal_moves():
            raise HTTPException(status_code=400, detail="Side to move has no legal move")
        depth = req.depth or engine.depths[position.side]

    result = engine.search.best_move(position, depth, req.strategy)

    with _lock:
        if req.play and engine.position == position and result.move is not None:
            engine.play(result.move)
        stats = result.stats
        return {
            "best_move": _cell(result.move),
            "score": result.score,
            "diagnostics": {
                "depth_reached": stats.depth_reached,
                "nodes_evaluated": stats.nodes_evaluated,
                "pruned": stats.pruned,
                "cache_hits": stats.cache_hits,
                "chosen_move": _cell(stats.chosen_move),
                "elapsed_ms": stats.elapsed_ms,
            },
            "board": engine.position.to_text(),
        }


@app.post("/reset")
def reset_board(req: ResetRequest = ResetRequest()):
    with _lock:
        try:
            engine.new_game(req.seed)
        except DealError as e:
            raise HTTPException(status_code=500, detail=str(e))
        engine.search.tt.clear()
        return _state()
