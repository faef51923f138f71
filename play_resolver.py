# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Play resolution.

Turns a batter, an outcome and the confirmed runner decisions into an
atomic ``PlayResult`` (new bases, runs, outs, who scored), and builds the
immutable ``Play`` entry that goes into the game log.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from errors import MissingRunnerDecisionError
from field_zones import zone_of
from models import (
    AdvancementCategory,
    BaseState,
    BattingSide,
    Half,
    Outcome,
    Play,
    RunnerResults,
)
from outcomes import resolution_category
from runner_resolver import advance_runners, force_walk, missing_decisions


@dataclass
class PlayResult:
    """Everything a play changed, before it is stamped into the log."""
    new_base_state: BaseState
    runs_on_play: int = 0
    outs_recorded: int = 0
    scored_player_ids: list[str] = field(default_factory=list)


def resolve(
    outcome: Outcome,
    batter_id: str,
    current_bases: BaseState,
    runner_results: RunnerResults | None,
    outs: int = 0,
) -> PlayResult:
    """Resolve one plate appearance.

    Args:
        outcome: The plate-appearance outcome.
        batter_id: Player id of the batter.
        current_bases: Base occupancy before the play.
        runner_results: Confirmed decisions for the batter and each
            occupied base. Required for hits and for fielded outs that
            still have runners to decide about.
        outs: Outs in the half-inning before the play. Only used to tell
            whether a fielded out ends the half-inning.

    Raises:
        MissingRunnerDecisionError: If decisions are required but absent
            or incomplete.
    """
    cat = resolution_category(outcome, current_bases, outs)

    if cat == AdvancementCategory.WALK:
        adv = force_walk(current_bases, batter_id)
        return PlayResult(
            new_base_state=adv.bases,
            runs_on_play=adv.runs,
            outs_recorded=0,
            scored_player_ids=adv.scored,
        )

    if cat == AdvancementCategory.AUTOMATIC_OUT:
        return PlayResult(new_base_state=current_bases, outs_recorded=1)

    missing = missing_decisions(runner_results or RunnerResults(), current_bases)
    if missing:
        raise MissingRunnerDecisionError(outcome.value, missing)

    adv = advance_runners(runner_results, current_bases, batter_id)
    return PlayResult(
        new_base_state=adv.bases,
        runs_on_play=adv.runs,
        outs_recorded=adv.outs,
        scored_player_ids=adv.scored,
    )


def rbi_for(outcome: Outcome, result: PlayResult) -> int:
    """Runs batted in credited for a resolved play.

    Every run that scores on the play is credited, reach-on-error
    included. The team score is summed from RBI, so withholding them
    would drop runs from the scoreboard.
    """
    return result.runs_on_play


def build_play(
    play_id: str,
    inning: int,
    half_inning: Half,
    batter_id: str,
    outcome: Outcome,
    result: PlayResult,
    *,
    hit_x: float | None = None,
    hit_y: float | None = None,
    fielding_position: str | None = None,
    batting_side: BattingSide | None = None,
) -> Play:
    """Stamp a resolved play into an immutable log entry."""
    location = None
    if hit_x is not None and hit_y is not None:
        location = zone_of(hit_x, hit_y, outcome) or None
    return Play(
        id=play_id,
        inning=inning,
        half_inning=half_inning,
        batter_id=batter_id,
        outcome=outcome,
        rbi=rbi_for(outcome, result),
        outs_on_play=result.outs_recorded,
        resulting_base_state=result.new_base_state,
        scored_player_ids=tuple(result.scored_player_ids),
        field_location=location,
        hit_x=hit_x,
        hit_y=hit_y,
        fielding_position=fielding_position,
        batting_side=batting_side,
    )
