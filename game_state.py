# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Game state derivation.

The play log is the only source of truth. ``derive_state`` rebuilds the
live situation (inning, half, outs, runners, next batter, score) from the
full log; ``apply_play`` advances a state by one play, and folding it over
the log with ``replay_state`` must land on exactly the same state. Undo is
just deriving again from a shorter log.

Opposing half-innings are not in this team's log, so the opponent score is
carried in from outside rather than derived.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Sequence, Union

from errors import InconsistentLogError, RosterEmptyError
from models import BaseState, GameState, Half, Play, Player
from outcomes import OUTS_PER_HALF_INNING

logger = logging.getLogger(__name__)

Roster = Sequence[Union[Player, str]]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _half_key(inning: int, half: Half) -> tuple[int, int]:
    return inning, 0 if half == Half.TOP else 1


def _next_half(inning: int, half: Half) -> tuple[int, Half]:
    if half == Half.TOP:
        return inning, Half.BOTTOM
    return inning + 1, Half.TOP


def roster_ids(roster: Roster) -> list[str]:
    """Player ids in batting order.

    Raises:
        RosterEmptyError: If the roster has no players.
    """
    if not roster:
        raise RosterEmptyError()
    return [p.player_id if isinstance(p, Player) else str(p) for p in roster]


def next_batter_index(batter_id: str, ids: list[str]) -> int:
    """Batting-order slot after ``batter_id``, wrapping to the top."""
    try:
        return (ids.index(batter_id) + 1) % len(ids)
    except ValueError:
        logger.warning("Batter %s is not in the batting order; restarting at the top", batter_id)
        return 0


def check_log(plays: Sequence[Play]) -> None:
    """Verify the log never moves backwards or scores past three outs.

    Raises:
        InconsistentLogError: On the first play that breaks either rule.
    """
    prev_key: tuple[int, int] | None = None
    outs_in_half = 0
    for index, play in enumerate(plays):
        key = _half_key(play.inning, play.half_inning)
        if prev_key is not None and key < prev_key:
            raise InconsistentLogError(
                f"Play {play.id} is in {play.half_inning.value} {play.inning}, "
                f"before the previous play's half-inning",
                play_id=play.id, index=index,
            )
        if key != prev_key:
            outs_in_half = 0
        elif outs_in_half >= OUTS_PER_HALF_INNING:
            raise InconsistentLogError(
                f"Play {play.id} was recorded after the third out of "
                f"{play.half_inning.value} {play.inning}",
                play_id=play.id, index=index,
            )
        outs_in_half += play.outs_on_play
        prev_key = key


# ---------------------------------------------------------------------------
# From-scratch derivation
# ---------------------------------------------------------------------------

def initial_state(initial_score: int = 0, initial_opponent_score: int = 0) -> GameState:
    return GameState(score=initial_score, opponent_score=initial_opponent_score)


def derive_state(
    plays: Sequence[Play],
    roster: Roster,
    initial_score: int = 0,
    initial_opponent_score: int = 0,
) -> GameState:
    """Rebuild the current game state from the complete play log.

    Args:
        plays: The play log in the order plays were confirmed.
        roster: Batting order (players or player ids).
        initial_score: Runs credited to this team outside the log.
        initial_opponent_score: The opponent's runs, tracked out of band.

    Raises:
        RosterEmptyError: If the roster is empty.
        InconsistentLogError: If the log is out of order.
    """
    ids = roster_ids(roster)
    check_log(plays)

    if not plays:
        return initial_state(initial_score, initial_opponent_score)

    last = plays[-1]
    inning, half = last.inning, last.half_inning
    outs = sum(p.outs_on_play for p in plays
               if p.inning == inning and p.half_inning == half)
    runners = last.resulting_base_state

    # The last play may have ended the half-inning.
    if outs >= OUTS_PER_HALF_INNING:
        outs = 0
        runners = BaseState()
        inning, half = _next_half(inning, half)

    return GameState(
        inning=inning,
        half_inning=half,
        outs=outs,
        batting_order_index=next_batter_index(last.batter_id, ids),
        runners=runners,
        score=initial_score + sum(p.rbi for p in plays),
        opponent_score=initial_opponent_score,
    )


# ---------------------------------------------------------------------------
# Incremental fold
# ---------------------------------------------------------------------------

def apply_play(state: GameState, play: Play, roster: Roster, index: int | None = None) -> GameState:
    """Advance ``state`` by one play.

    Raises:
        InconsistentLogError: If the play belongs to a half-inning that is
            already over.
    """
    ids = roster_ids(roster)
    play_key = _half_key(play.inning, play.half_inning)
    if play_key < _half_key(state.inning, state.half_inning):
        raise InconsistentLogError(
            f"Play {play.id} is in {play.half_inning.value} {play.inning}, "
            f"but the game is already in {state.half_inning.value} {state.inning}",
            play_id=play.id, index=index,
        )

    same_half = play.inning == state.inning and play.half_inning == state.half_inning
    outs = (state.outs if same_half else 0) + play.outs_on_play
    inning, half = play.inning, play.half_inning
    runners = play.resulting_base_state

    if outs >= OUTS_PER_HALF_INNING:
        outs = 0
        runners = BaseState()
        inning, half = _next_half(inning, half)

    return GameState(
        inning=inning,
        half_inning=half,
        outs=outs,
        batting_order_index=next_batter_index(play.batter_id, ids),
        runners=runners,
        score=state.score + play.rbi,
        opponent_score=state.opponent_score,
    )


def replay_state(
    plays: Sequence[Play],
    roster: Roster,
    initial_score: int = 0,
    initial_opponent_score: int = 0,
) -> GameState:
    """Fold ``apply_play`` over the log, one play at a time."""
    roster_ids(roster)
    return reduce(
        lambda state, item: apply_play(state, item[1], roster, index=item[0]),
        enumerate(plays),
        initial_state(initial_score, initial_opponent_score),
    )


def state_history(
    plays: Sequence[Play],
    roster: Roster,
    initial_score: int = 0,
    initial_opponent_score: int = 0,
) -> list[GameState]:
    """State before the first play and after every play, in order."""
    history = [initial_state(initial_score, initial_opponent_score)]
    for index, play in enumerate(plays):
        history.append(apply_play(history[-1], play, roster, index=index))
    return history


# ---------------------------------------------------------------------------
# Batting half
# ---------------------------------------------------------------------------

def batting_half(is_home_game: bool) -> Half:
    """Visitors bat in the top of each inning, the home team in the bottom."""
    return Half.BOTTOM if is_home_game else Half.TOP


def next_batting_half(state: GameState, is_home_game: bool) -> tuple[int, Half]:
    """Inning and half our next plate appearance belongs to.

    When the state sits in the opponent's half, their half is skipped.
    """
    ours = batting_half(is_home_game)
    if state.half_inning == ours:
        return state.inning, ours
    if ours == Half.BOTTOM:
        return state.inning, Half.BOTTOM
    return state.inning + 1, Half.TOP
