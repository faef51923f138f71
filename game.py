# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Live game scorekeeper -- main entry point.

Run with:  uv run game.py                          # score the configured game file
           uv run game.py --game path/to/game.json
           uv run game.py --trace                  # show the state after every play
           uv run game.py --undo 2                 # drop the last two plays first
"""

from __future__ import annotations

import argparse
import logging
import sys

from box_score import format_box_score
from config import get_game_file, get_log_level
from errors import ScoringError
from models import Half
from outcomes import short_code
from play_log_ingestion import IngestionError, ingest_game_file
from scorebook import Scorebook

logger = logging.getLogger(__name__)


def load_scorebook(path: str) -> Scorebook:
    """Build a scorebook from a stored game file."""
    record = ingest_game_file(path)
    return Scorebook(
        record.roster,
        record.plays,
        is_home_game=record.is_home_game,
        initial_score=record.score,
        opponent_score=record.opponent_score,
    )


def format_trace(book: Scorebook) -> str:
    """One line per play with the situation it left behind."""
    names = {p.player_id: p.display_name for p in book.roster}
    lines = []
    for i, (play, state) in enumerate(zip(book.plays, book.history()[1:]), 1):
        half = "T" if play.half_inning == Half.TOP else "B"
        where = f" ({play.field_location})" if play.field_location else ""
        lines.append(
            f"{i:>3}. {half}{play.inning:<2} {names.get(play.batter_id, play.batter_id):<16} "
            f"{short_code(play.outcome):<10}{where}"
        )
        lines.append(f"       -> {state.situation_display()}")
    return "\n".join(lines)


def format_scoreboard(book: Scorebook) -> str:
    lines = ["=" * 72, "SCOREBOOK", "=" * 72]
    state = book.state()
    lines.append(state.situation_display())
    if book.roster:
        lines.append(f"At bat: {book.current_batter().display_name}   "
                     f"On deck: {book.on_deck_batter().display_name}")
    lines.append(f"Plays logged: {len(book.plays)}")
    return "\n".join(lines)


def run(path: str, trace: bool = False, undo: int = 0) -> Scorebook:
    book = load_scorebook(path)
    for _ in range(undo):
        if book.undo() is None:
            break

    print(format_scoreboard(book))
    if trace and book.plays:
        print()
        print(format_trace(book))
    box = book.box_score()
    print()
    print(format_box_score(box.rows, box.totals))
    return book


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Score a game from its stored play log."
    )
    parser.add_argument(
        "--game", type=str, default=None,
        help="Game JSON file (default from SCOREKEEPER_GAME_FILE or data/sample_game.json)",
    )
    parser.add_argument(
        "--trace", action="store_true",
        help="Print the game state after every play",
    )
    parser.add_argument(
        "--undo", type=int, default=0, metavar="N",
        help="Undo the last N plays before printing",
    )
    args = parser.parse_args(argv)

    if args.undo < 0:
        parser.error("--undo must not be negative")

    # Configure logging
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    path = args.game or get_game_file()
    try:
        run(path, trace=args.trace, undo=args.undo)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (IngestionError, ScoringError) as exc:
        logger.error("Could not score %s: %s", path, exc)
        print(f"Error: {exc}", file=sys.stderr)
        for detail in getattr(exc, "details", []):
            print(f"  {detail}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
