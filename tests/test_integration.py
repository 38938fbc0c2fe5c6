"""
Integration test suite for the GetStuck engine.

Tests components working together end-to-end:
- Full game simulations (engine vs engine)
- Session facade (Engine)
- Terminal CLI
- FastAPI REST API
"""

import pytest

from getstuck.core.board import Cell, Position, build_board
from getstuck.core.cards import Card, Side, Suit
from getstuck.core.moves import legal_destinations
from getstuck.core.rules import Outcome
from getstuck.core.search import SearchEngine
from getstuck.main import Engine
from getstuck.scoring import calculate_scores

# ════════════════════════════════════════════════════════════════════════════
#  ENGINE VS ENGINE — FULL GAME SIMULATIONS
# ════════════════════════════════════════════════════════════════════════════


class TestFullGame:
    """The engine plays complete games without illegal moves."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_engine_vs_engine_completes(self, seed):
        engine = Engine(red_depth=2, black_depth=1, seed=seed)
        plies = 0
        while not engine.is_game_over():
            legal = engine.legal_moves()
            mover = engine.turn
            result = engine.ai_move()
            assert result is not None
            assert result.move in legal
            assert engine.turn is mover.opponent
            plies += 1
            assert plies <= 48
        assert engine.outcome() in (Outcome.RED_STUCK, Outcome.BLACK_STUCK, Outcome.DRAW)
        assert len(engine.history) == plies

    def test_shared_search_engine_across_games(self):
        search = SearchEngine(depth=2)
        for seed in (4, 5):
            engine = Engine(seed=seed, search=search)
            while engine.ai_move() is not None:
                pass
            assert engine.is_game_over()
        assert len(search.tt) > 0

    def test_deeper_search_iterative_path(self):
        engine = Engine(seed=6)
        result = engine.ai_move(depth=3, strategy="iterative")
        assert result is not None
        assert result.stats.depth_reached >= 1
        assert engine.last_stats is result.stats


# ════════════════════════════════════════════════════════════════════════════
#  SESSION FACADE
# ════════════════════════════════════════════════════════════════════════════


class TestEngineWrapper:
    def test_new_game_resets(self):
        engine = Engine(seed=1)
        engine.play(engine.legal_moves()[0])
        position = engine.new_game(seed=2)
        assert engine.position is position
        assert engine.history == []
        assert engine.turn is Side.RED

    def test_explicit_zero_depth_kept(self):
        engine = Engine(red_depth=0, black_depth=3, seed=1)
        assert engine.depths == {Side.RED: 0, Side.BLACK: 3}
        # best_move searches at least one ply
        result = engine.ai_move(strategy="fixed")
        assert result.stats.depth_reached == 1

    def test_play_rejects_illegal(self):
        engine = Engine(seed=1)
        before = engine.position
        assert engine.play(Cell(3, 3)) is False
        assert engine.position is before

    def test_play_legal(self):
        engine = Engine(seed=1)
        move = engine.legal_moves()[0]
        assert engine.play(move) is True
        assert engine.turn is Side.BLACK
        assert engine.history == [(Side.RED, move)]

    def test_no_moves_after_game_over(self):
        engine = Engine(seed=1)
        engine.set_position(Position.from_board(build_board({(3, 4): Card(5, Suit.HEARTS)})))
        assert engine.outcome() is Outcome.BLACK_STUCK
        assert engine.ai_move() is None
        assert engine.play(Cell(3, 4)) is False

    def test_final_scores_applied(self):
        engine = Engine(seed=1)
        board = build_board({(3, 4): Card(5, Suit.HEARTS), (0, 1): Card(13, Suit.SPADES)})
        engine.set_position(Position.from_board(board))
        scores = engine.scores()
        # red wins: black's face-up king counts -10
        assert scores.red == 5
        assert scores.black == -10

    def test_running_scores(self):
        engine = Engine(seed=3)
        assert engine.scores() == calculate_scores(engine.position)


# ════════════════════════════════════════════════════════════════════════════
#  CLI
# ════════════════════════════════════════════════════════════════════════════


class TestCLI:
    def test_ai_vs_ai_game(self, capsys):
        from interface.cli import main
        code = main(["--mode", "ai-vs-ai", "--red", "easy", "--black", "2", "--seed", "3"])
        assert code == 0
        out = capsys.readouterr().out
        assert "wins" in out or "Draw" in out

    def test_ai_vs_ai_series(self, capsys):
        from interface.cli import main
        code = main(["--mode", "ai-vs-ai", "--red", "1", "--black", "1",
                     "--seed", "10", "--games", "3"])
        assert code == 0
        assert "After 3 games" in capsys.readouterr().out

    def test_bad_difficulty(self, capsys):
        from interface.cli import main
        assert main(["--red", "nightmare"]) == 2

    def test_human_quits(self, capsys):
        from interface.cli import main
        answers = iter(["9,9", "3,3", "q"])
        code = main(["--mode", "local", "--seed", "1"], input_fn=lambda _: next(answers))
        assert code == 1
        out = capsys.readouterr().out
        assert "out of bounds" in out
        assert "Illegal move" in out

    def test_human_plays_a_move(self, capsys):
        from interface.cli import play_game
        engine = Engine(seed=2)
        first = engine.legal_moves()[0]
        answers = iter([str(first), "q"])
        result = play_game(engine, {Side.RED, Side.BLACK}, input_fn=lambda _: next(answers))
        assert result is None
        assert engine.history == [(Side.RED, Cell(*first))]

    def test_render(self):
        from interface.cli import render
        text = render(Engine(seed=1))
        assert "Red: 150" in text
        assert "To move: red" in text


# ════════════════════════════════════════════════════════════════════════════
#  REST API INTEGRATION
# ════════════════════════════════════════════════════════════════════════════


class TestAPIIntegration:
    """Tests FastAPI REST API endpoints."""

    @pytest.fixture(autouse=True)
    def setup_client(self):
        from fastapi.testclient import TestClient
        from interface.api import app

        self.client = TestClient(app)
        # Reset state before each test
        response = self.client.post("/reset", json={"seed": 11})
        assert response.status_code == 200

    def test_get_board_initial(self):
        data = self.client.get("/board").json()
        assert data["turn"] == "red"
        assert data["empty"] == {"row": 3, "col": 3}
        assert data["outcome"] == "ongoing"
        assert data["is_game_over"] is False
        assert len(data["legal_moves"]) > 0

    def test_reset_is_reproducible(self):
        first = self.client.get("/board").json()["board"]
        self.client.post("/reset", json={"seed": 11})
        assert self.client.get("/board").json()["board"] == first

    def test_post_move_valid(self):
        move = self.client.get("/board").json()["legal_moves"][0]
        response = self.client.post("/move", json=move)
        assert response.status_code == 200
        data = response.json()
        assert data["turn"] == "black"
        assert data["empty"] == move
        assert data["move"] == move

    def test_post_move_illegal(self):
        response = self.client.post("/move", json={"row": 3, "col": 3})
        assert response.status_code == 400

    def test_post_move_invalid_body(self):
        response = self.client.post("/move", json={"row": "x"})
        assert response.status_code == 422

    def test_set_position_valid(self):
        board = build_board({(2, 3): Card(3, Suit.SPADES), (3, 4): Card(5, Suit.HEARTS)})
        response = self.client.post("/position", json={"board": board.to_text(), "turn": "black"})
        assert response.status_code == 200
        data = response.json()
        assert data["turn"] == "black"
        assert data["legal_moves"] == [{"row": 2, "col": 3}]

    def test_set_position_invalid(self):
        response = self.client.post("/position", json={"board": "nonsense"})
        assert response.status_code == 400

    def test_search_returns_move(self):
        legal = self.client.get("/board").json()["legal_moves"]
        response = self.client.post("/search", json={"depth": 2})
        assert response.status_code == 200
        data = response.json()
        assert data["best_move"] in legal
        assert data["diagnostics"]["depth_reached"] == 2
        assert data["diagnostics"]["chosen_move"] == data["best_move"]
        # play defaults to False
        assert self.client.get("/board").json()["turn"] == "red"

    def test_search_and_play(self):
        response = self.client.post("/search", json={"depth": 1, "play": True})
        assert response.status_code == 200
        assert self.client.get("/board").json()["turn"] == "black"

    def test_search_stuck_side_returns_400(self):
        board = build_board({(4, 3): Card(8, Suit.CLUBS)})
        self.client.post("/position", json={"board": board.to_text(), "turn": "red"})
        response = self.client.post("/search", json={})
        assert response.status_code == 400

    def test_search_after_opponent_stuck_returns_400(self):
        board = build_board({(3, 4): Card(5, Suit.HEARTS)})
        self.client.post("/position", json={"board": board.to_text(), "turn": "red"})
        response = self.client.post("/search", json={"play": True})
        assert response.status_code == 400
        assert response.json()["detail"] == "Game is already over"
        assert self.client.get("/board").json()["turn"] == "red"

    def test_game_over_reported(self):
        board = build_board({(4, 3): Card(8, Suit.CLUBS)})
        self.client.post("/position", json={"board": board.to_text(), "turn": "black"})
        data = self.client.get("/board").json()
        assert data["outcome"] == "red_stuck"
        assert data["winner"] == "black"
        response = self.client.post("/move", json={"row": 4, "col": 3})
        assert response.status_code == 400

    def test_scores(self):
        data = self.client.get("/scores").json()
        assert data["red"] == 150
        assert data["black"] == 150
        assert data["red_breakdown"] == {"numerals": 90, "courts": 6}

    def test_full_api_game_flow(self):
        for _ in range(4):
            state = self.client.get("/board").json()
            if state["is_game_over"]:
                break
            self.client.post("/search", json={"depth": 1, "play": True})
        state = self.client.get("/board").json()
        assert state["board"] != ""
        position = Position.from_text(state["board"], Side(state["turn"]))
        assert [{"row": c.row, "col": c.col} for c in legal_destinations(position)] == \
            state["legal_moves"]
