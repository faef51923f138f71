# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Baserunner advancement.

Produces the default ("guessed") runner decisions for an outcome, the
legal choices a scorer may pick from for each occupied base, and the
shared interpreter that applies confirmed decisions to a base state.

Walks bypass the guess/override step entirely: runners move only when
forced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from models import (
    BASES,
    AdvancementCategory,
    Base,
    BaseState,
    Outcome,
    RunnerDecision,
    RunnerResults,
)
from outcomes import category

logger = logging.getLogger(__name__)

# Placeholder shown for the batter in a projected (unconfirmed) base state.
BATTER_PLACEHOLDER = "Batter"

BATTER_SLOT = "batter"

# Default destination of the batter on each hit-category outcome.
BATTER_DESTINATION: dict[Outcome, RunnerDecision] = {
    Outcome.SINGLE: RunnerDecision.FIRST,
    Outcome.ERROR: RunnerDecision.FIRST,
    Outcome.FIELDERS_CHOICE: RunnerDecision.FIRST,
    Outcome.DOUBLE: RunnerDecision.SECOND,
    Outcome.TRIPLE: RunnerDecision.THIRD,
    Outcome.HOMERUN: RunnerDecision.SCORE,
}

# Intermediate bases a runner may be sent to, by starting base.
_INTERMEDIATE_OPTIONS: dict[Base, tuple[RunnerDecision, ...]] = {
    Base.THIRD: (),
    Base.SECOND: (RunnerDecision.THIRD,),
    Base.FIRST: (RunnerDecision.SECOND, RunnerDecision.THIRD),
}

_BATTER_OPTIONS = (RunnerDecision.FIRST, RunnerDecision.SECOND, RunnerDecision.THIRD)

# Outcomes where the scorer also decides how far the batter got.
_BATTER_CHOICE_OUTCOMES = frozenset({Outcome.ERROR, Outcome.FIELDERS_CHOICE})


# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BaseOptions:
    """Choices offered for one runner slot.

    Attributes:
        slot: "first", "second", "third" or "batter".
        should_show: Whether a control for this slot should be offered.
        options: Intermediate bases the runner may be sent to.
    """
    slot: str
    should_show: bool
    options: tuple[RunnerDecision, ...] = ()

    @property
    def choices(self) -> tuple[RunnerDecision, ...]:
        """Every legal decision for the slot, in display order."""
        if self.slot == BATTER_SLOT:
            return self.options + (RunnerDecision.SCORE, RunnerDecision.OUT)
        return (RunnerDecision.STAY,) + self.options + (RunnerDecision.SCORE, RunnerDecision.OUT)


@dataclass
class RunnerProjection:
    """Default decisions plus the choices for overriding them."""
    outcome: Outcome
    guess: RunnerResults
    options: dict[str, BaseOptions] = field(default_factory=dict)

    def visible_slots(self) -> list[str]:
        return [slot for slot, opt in self.options.items() if opt.should_show]


@dataclass
class Advancement:
    """Outcome of applying runner decisions to a base state."""
    bases: BaseState
    runs: int = 0
    outs: int = 0
    scored: list[str] = field(default_factory=list)


@dataclass
class ProjectedState:
    """Preview of a play before it is confirmed."""
    runners: dict[str, str | None]
    occupied: dict[str, bool]
    runs: int
    outs: int


# ---------------------------------------------------------------------------
# Walks
# ---------------------------------------------------------------------------

def force_walk(bases: BaseState, batter_id: str) -> Advancement:
    """Resolve a walk: the batter takes first, forced runners move up one.

    A runner is forced only when every base behind them is occupied, so
    the runner on third scores only with the bases loaded.
    """
    r1, r2, r3 = bases.first, bases.second, bases.third
    scored: list[str] = []
    if r1 and r2 and r3:
        scored.append(r3)

    new_bases = BaseState(
        first=batter_id,
        second=r1 if r1 else r2,
        third=r2 if (r1 and r2) else r3,
    )
    return Advancement(bases=new_bases, runs=len(scored), outs=0, scored=scored)


def _walk_guess(bases: BaseState) -> RunnerResults:
    forced = True
    decisions: dict[str, RunnerDecision | None] = {}
    for idx, base in enumerate(BASES):
        if not bases.is_occupied(base):
            forced = False
            decisions[base.value] = None
            continue
        if forced:
            nxt = BASES[idx + 1] if idx + 1 < len(BASES) else None
            decisions[base.value] = RunnerDecision.advance_to(nxt) if nxt else RunnerDecision.SCORE
        else:
            decisions[base.value] = RunnerDecision.STAY
    return RunnerResults(batter=RunnerDecision.FIRST, **decisions)


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def _hit_guess(outcome: Outcome, bases: BaseState) -> RunnerResults:
    # Aggressive defaults: each runner takes at least one extra base.
    if outcome == Outcome.DOUBLE:
        moves = {Base.FIRST: RunnerDecision.THIRD,
                 Base.SECOND: RunnerDecision.SCORE,
                 Base.THIRD: RunnerDecision.SCORE}
    elif outcome in (Outcome.TRIPLE, Outcome.HOMERUN):
        moves = {b: RunnerDecision.SCORE for b in BASES}
    else:
        moves = {Base.FIRST: RunnerDecision.SECOND,
                 Base.SECOND: RunnerDecision.THIRD,
                 Base.THIRD: RunnerDecision.SCORE}
    return RunnerResults(
        batter=BATTER_DESTINATION[outcome],
        **{b.value: (moves[b] if bases.is_occupied(b) else None) for b in BASES},
    )


def _conservative_guess(outcome: Outcome, bases: BaseState) -> RunnerResults:
    decisions = {b.value: (RunnerDecision.STAY if bases.is_occupied(b) else None) for b in BASES}
    if outcome == Outcome.SACRIFICE_FLY and bases.is_occupied(Base.THIRD):
        decisions[Base.THIRD.value] = RunnerDecision.SCORE
    return RunnerResults(batter=RunnerDecision.OUT, **decisions)


def runner_options(outcome: Outcome, bases: BaseState) -> dict[str, BaseOptions]:
    """Per-slot choices, third base first, batter last when applicable."""
    decides = category(outcome) in (AdvancementCategory.HIT, AdvancementCategory.MANUAL)
    options: dict[str, BaseOptions] = {}
    for base in reversed(BASES):
        options[base.value] = BaseOptions(
            slot=base.value,
            should_show=decides and bases.is_occupied(base),
            options=_INTERMEDIATE_OPTIONS[base],
        )
    if outcome in _BATTER_CHOICE_OUTCOMES:
        options[BATTER_SLOT] = BaseOptions(slot=BATTER_SLOT, should_show=True, options=_BATTER_OPTIONS)
    return options


def project(outcome: Outcome, current_bases: BaseState, outs: int = 0) -> RunnerProjection:
    """Default runner decisions and override choices for an outcome.

    ``outs`` is accepted so callers can pass the live count; when the
    play's own outs end the half-inning callers skip projection entirely.
    """
    cat = category(outcome)
    if cat == AdvancementCategory.HIT:
        guess = _hit_guess(outcome, current_bases)
    elif cat == AdvancementCategory.WALK:
        guess = _walk_guess(current_bases)
    else:
        guess = _conservative_guess(outcome, current_bases)
    return RunnerProjection(
        outcome=outcome,
        guess=guess,
        options=runner_options(outcome, current_bases),
    )


# ---------------------------------------------------------------------------
# Applying decisions
# ---------------------------------------------------------------------------

def missing_decisions(results: RunnerResults, bases: BaseState) -> list[str]:
    """Slots that need a decision but have none."""
    missing = []
    if results.batter is None:
        missing.append(BATTER_SLOT)
    for base in reversed(BASES):
        if bases.is_occupied(base) and results.for_base(base) is None:
            missing.append(base.value)
    return missing


def advance_runners(results: RunnerResults, bases: BaseState, batter_id: str) -> Advancement:
    """Apply decisions: the batter first, then runners from third to first.

    Slots without a decision, and decisions for empty bases, are skipped.
    Conflicting placements are not repaired; the later runner takes the
    base and a warning is logged.
    """
    placed: dict[Base, str] = {}
    scored: list[str] = []
    outs = 0

    def apply(decision: RunnerDecision | None, runner_id: str, origin: Base | None) -> None:
        nonlocal outs
        if decision is None:
            return
        if decision == RunnerDecision.SCORE:
            scored.append(runner_id)
            return
        if decision == RunnerDecision.OUT:
            outs += 1
            return
        target = origin if decision == RunnerDecision.STAY else decision.target_base
        if target is None:
            return
        if target in placed:
            logger.warning(
                "Runner %s placed on %s already held by %s", runner_id, target.value, placed[target],
            )
        placed[target] = runner_id

    apply(results.batter, batter_id, None)
    for base in reversed(BASES):
        runner = bases.runner_on(base)
        if runner is not None:
            apply(results.for_base(base), runner, base)

    new_bases = BaseState(**{b.value: placed.get(b) for b in BASES})
    return Advancement(bases=new_bases, runs=len(scored), outs=outs, scored=scored)


def projected_state(results: RunnerResults, bases: BaseState) -> ProjectedState:
    """Preview the bases, runs and outs the decisions would produce."""
    adv = advance_runners(results, bases, BATTER_PLACEHOLDER)
    runners = {b.value: adv.bases.runner_on(b) for b in BASES}
    return ProjectedState(
        runners=runners,
        occupied={slot: pid is not None for slot, pid in runners.items()},
        runs=adv.runs,
        outs=adv.outs,
    )
