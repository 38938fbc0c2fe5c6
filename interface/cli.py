"""Terminal front-end: play against the engine, watch AI vs AI, or hot-seat."""

import argparse
import logging
import sys
from collections import Counter
from typing import List, Optional

from getstuck.config import CONFIG
from getstuck.core.board import Cell
from getstuck.core.cards import Side
from getstuck.core.search import SearchEngine
from getstuck.main import Engine

logger = logging.getLogger(__name__)

MAX_PLIES = 48  # every move turns one face-up card down


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="getstuck", description="Get Stuck card puzzle")
    parser.add_argument("--mode", choices=["vs-ai", "ai-vs-ai", "local"], default="vs-ai")
    parser.add_argument("--red", default=str(CONFIG.search.depth),
                        help="red AI difficulty (easy/intermediate/hard/extreme or a depth)")
    parser.add_argument("--black", default=str(CONFIG.search.depth),
                        help="black AI difficulty (easy/intermediate/hard/extreme or a depth)")
    parser.add_argument("--seed", type=int, default=CONFIG.game.seed)
    parser.add_argument("--games", type=int, default=1, help="number of ai-vs-ai games")
    parser.add_argument("--log-level", default=CONFIG.log_level)
    return parser.parse_args(argv)


def render(engine: Engine) -> str:
    scores = engine.scores()
    header = "    " + " ".join(f"{c:>3}" for c in range(7))
    lines = [header]
    for r, row in enumerate(str(engine.position.board).splitlines()):
        lines.append(f"{r:>3} {row}")
    lines.append(f"Red: {scores.red}  Black: {scores.black}  "
                 f"To move: {engine.turn.value}")
    return "\n".join(lines)


def announce(engine: Engine) -> str:
    result = engine.outcome()
    scores = engine.scores()
    if result.winner is None:
        text = "Draw: both sides are stuck."
    else:
        text = f"{result.winner.value.capitalize()} wins, {result.winner.opponent.value} is stuck."
    return f"{text} Final score red {scores.red}, black {scores.black}"


def prompt_move(engine: Engine, input_fn=input) -> Optional[Cell]:
    moves = engine.legal_moves()
    print("Legal moves: " + " ".join(str(m) for m in moves))
    while True:
        text = input_fn(f"{engine.turn.value} move (row,col) or q: ").strip()
        if text.lower() in ("q", "quit"):
            return None
        try:
            cell = Cell.parse(text)
        except ValueError as e:
            print(e)
            continue
        if cell in moves:
            return cell
        print("Illegal move, try again.")


def play_game(engine: Engine, humans, input_fn=input, quiet: bool = False):
    """Run one game to the end. Returns the outcome, or None if a human quit."""
    for _ in range(MAX_PLIES + 1):
        if engine.is_game_over():
            break
        if not quiet:
            print(render(engine))
        if engine.turn in humans:
            cell = prompt_move(engine, input_fn)
            if cell is None:
                return None
            engine.play(cell)
        else:
            result = engine.ai_move()
            if result is None:
                break
            if not quiet:
                s = result.stats
                print(f"{engine.turn.opponent.value} AI plays {result.move} "
                      f"(depth {s.depth_reached}, {s.nodes_evaluated} nodes, {s.pruned} pruned)")
    outcome = engine.outcome()
    if not quiet:
        print(render(engine))
        print(announce(engine))
    return outcome


def main(argv: Optional[List[str]] = None, input_fn=input) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    try:
        red_depth = CONFIG.depth_for(args.red)
        black_depth = CONFIG.depth_for(args.black)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    humans = {
        "vs-ai": {Side.RED},
        "ai-vs-ai": set(),
        "local": {Side.RED, Side.BLACK},
    }[args.mode]

    search = SearchEngine()
    if args.mode != "ai-vs-ai" or args.games <= 1:
        engine = Engine(red_depth, black_depth, seed=args.seed, search=search)
        return 0 if play_game(engine, humans, input_fn) is not None else 1

    tally = Counter()
    for i in range(args.games):
        seed = None if args.seed is None else args.seed + i
        engine = Engine(red_depth, black_depth, seed=seed, search=search)
        outcome = play_game(engine, humans, quiet=True)
        winner = outcome.winner.value if outcome.winner else "draw"
        tally[winner] += 1
        logger.info("Game %d: %s", i + 1, winner)
    print(f"After {args.games} games: red {tally['red']}, black {tally['black']}, "
          f"draws {tally['draw']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
