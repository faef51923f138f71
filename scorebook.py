# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Scorebook for one game.

Owns the append-only play log and runs the scoring pipeline: project
runner advancement, resolve the play, append it, and re-derive the game
state and box score from the log. Derived views are memoized on the log
contents and never updated by hand.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from box_score import PlayerGameStats, aggregate, team_totals
from errors import RosterEmptyError
from field_zones import clamp
from game_state import batting_half, check_log, derive_state, next_batting_half, state_history
from models import (
    AdvancementCategory,
    BaseState,
    BattingSide,
    GameState,
    Half,
    Outcome,
    Play,
    Player,
    RunnerResults,
)
from outcomes import OUTS_PER_HALF_INNING, implied_outs, parse_outcome, resolution_category
from play_resolver import build_play, resolve
from runner_resolver import RunnerProjection, project

logger = logging.getLogger(__name__)


def _new_play_id() -> str:
    return uuid.uuid4().hex


@dataclass
class BoxScore:
    rows: list[PlayerGameStats]
    totals: PlayerGameStats


class Scorebook:
    """Live scoring for one team's side of one game."""

    def __init__(
        self,
        roster: Sequence[Player],
        plays: Iterable[Play] = (),
        *,
        is_home_game: bool = False,
        initial_score: int = 0,
        opponent_score: int = 0,
        id_factory: Callable[[], str] | None = None,
    ):
        self.roster = list(roster)
        self.is_home_game = is_home_game
        self.initial_score = initial_score
        self.opponent_score = opponent_score
        self._id_factory = id_factory or _new_play_id
        self._plays: list[Play] = []
        self._state_cache: tuple[tuple, GameState] | None = None
        self._box_cache: tuple[tuple, BoxScore] | None = None
        for play in plays:
            self.add_play(play)

    # ------------------------------------------------------------------
    # Log access
    # ------------------------------------------------------------------

    @property
    def plays(self) -> tuple[Play, ...]:
        return tuple(self._plays)

    @property
    def last_play(self) -> Play | None:
        return self._plays[-1] if self._plays else None

    def _log_key(self) -> tuple:
        return tuple(p.id for p in self._plays)

    def add_play(self, play: Play) -> bool:
        """Append a play delivered from outside (e.g. another device).

        Returns False when a play with the same id is already logged.

        Raises:
            InconsistentLogError: If the play would put the log out of order.
        """
        if any(p.id == play.id for p in self._plays):
            logger.warning("Ignoring duplicate play %s", play.id)
            return False
        check_log(self._plays + [play])
        self._plays.append(play)
        return True

    def undo(self) -> Play | None:
        """Remove and return the most recent play."""
        if not self._plays:
            return None
        play = self._plays.pop()
        logger.info("Undid play %s (%s by %s)", play.id, play.outcome.value, play.batter_id)
        return play

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def state(self) -> GameState:
        key = (self._log_key(), self.initial_score, self.opponent_score)
        if self._state_cache is None or self._state_cache[0] != key:
            state = derive_state(self._plays, self.roster, self.initial_score, self.opponent_score)
            self._state_cache = (key, state)
        return self._state_cache[1]

    def box_score(self) -> BoxScore:
        key = self._log_key()
        if self._box_cache is None or self._box_cache[0] != key:
            rows = aggregate(self._plays, self.roster)
            self._box_cache = (key, BoxScore(rows=rows, totals=team_totals(rows)))
        return self._box_cache[1]

    def history(self) -> list[GameState]:
        return state_history(self._plays, self.roster, self.initial_score, self.opponent_score)

    def current_batter(self) -> Player:
        if not self.roster:
            raise RosterEmptyError()
        return self.roster[self.state().batting_order_index]

    def on_deck_batter(self) -> Player:
        if not self.roster:
            raise RosterEmptyError()
        return self.roster[(self.state().batting_order_index + 1) % len(self.roster)]

    def is_our_half(self, state: GameState | None = None) -> bool:
        state = state or self.state()
        return state.half_inning == batting_half(self.is_home_game)

    # ------------------------------------------------------------------
    # Scoring a plate appearance
    # ------------------------------------------------------------------

    def _situation(self) -> tuple[int, Half, int, BaseState]:
        """Inning, half, outs and bases our next plate appearance starts from."""
        state = self.state()
        inning, half = next_batting_half(state, self.is_home_game)
        if (inning, half) == (state.inning, state.half_inning):
            return inning, half, state.outs, state.runners
        return inning, half, 0, BaseState()

    def needs_runner_decisions(self, outcome: Outcome | str) -> bool:
        outcome = parse_outcome(outcome)
        _, _, outs, bases = self._situation()
        cat = resolution_category(outcome, bases, outs)
        return cat in (AdvancementCategory.HIT, AdvancementCategory.MANUAL)

    def project(self, outcome: Outcome | str) -> RunnerProjection | None:
        """Default runner decisions for confirming a play.

        Returns None when the play's own out ends the half-inning, since
        runner advancement no longer matters.
        """
        outcome = parse_outcome(outcome)
        _, _, outs, bases = self._situation()
        if outs + implied_outs(outcome) >= OUTS_PER_HALF_INNING:
            return None
        return project(outcome, bases, outs)

    def record_play(
        self,
        outcome: Outcome | str,
        runner_results: RunnerResults | dict | None = None,
        *,
        hit_x: float | None = None,
        hit_y: float | None = None,
        fielding_position: str | None = None,
        batting_side: BattingSide | str | None = None,
    ) -> Play:
        """Resolve the current batter's plate appearance and log it.

        Raises:
            InvalidOutcomeError: If the outcome is not recognised.
            RosterEmptyError: If there is no lineup to score against.
            MissingRunnerDecisionError: If runner decisions are required
                but missing.
        """
        outcome = parse_outcome(outcome)
        if not self.roster:
            raise RosterEmptyError("You must create a lineup before scoring")

        inning, half, outs, bases = self._situation()
        batter = self.current_batter()

        if isinstance(runner_results, dict):
            runner_results = RunnerResults.model_validate(runner_results)
        if runner_results is None and outcome == Outcome.HOMERUN:
            # Nothing to decide on a home run: everyone scores.
            runner_results = project(outcome, bases, outs).guess

        if hit_x is not None and hit_y is not None:
            hit_x, hit_y = clamp(hit_x, hit_y, outcome)

        result = resolve(outcome, batter.player_id, bases, runner_results, outs)
        play = build_play(
            self._id_factory(), inning, half, batter.player_id, outcome, result,
            hit_x=hit_x,
            hit_y=hit_y,
            fielding_position=fielding_position,
            batting_side=BattingSide(batting_side) if batting_side else None,
        )
        self.add_play(play)
        logger.info(
            "Logged %s by %s in %s %d: %d run(s), %d out(s)",
            outcome.value, batter.player_id, half.value, inning,
            result.runs_on_play, result.outs_recorded,
        )
        return play

    def record_opponent_run(self, runs: int = 1) -> int:
        """Add runs for the opponent; returns the new opponent score."""
        if runs < 0:
            raise ValueError("Opponent runs cannot be negative")
        self.opponent_score += runs
        return self.opponent_score
