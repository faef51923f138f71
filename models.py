# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Data models for the live game scorekeeper."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Outcome(str, Enum):
    """Closed set of plate-appearance outcomes."""
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    HOMERUN = "homerun"
    WALK = "walk"
    STRIKEOUT = "strikeout"
    GROUND_OUT = "ground_out"
    FLY_OUT = "fly_out"
    LINE_OUT = "line_out"
    POP_OUT = "pop_out"
    ERROR = "error"
    FIELDERS_CHOICE = "fielders_choice"
    SACRIFICE_FLY = "sacrifice_fly"


class AdvancementCategory(str, Enum):
    HIT = "hit"
    WALK = "walk"
    AUTOMATIC_OUT = "automatic_out"
    MANUAL = "manual"


class Half(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"


class Base(str, Enum):
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"


# Home-to-third order; bases behind a base are the ones earlier in the list.
BASES: tuple[Base, ...] = (Base.FIRST, Base.SECOND, Base.THIRD)


class RunnerDecision(str, Enum):
    """What happened to one runner (or the batter) on a play.

    ``FIRST``/``SECOND``/``THIRD`` are the advance-to-base members.
    """
    STAY = "stay"
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    SCORE = "score"
    OUT = "out"

    @classmethod
    def advance_to(cls, base: Base) -> RunnerDecision:
        return cls(base.value)

    @property
    def target_base(self) -> Base | None:
        """The base this decision places the runner on, if any."""
        if self in (RunnerDecision.FIRST, RunnerDecision.SECOND, RunnerDecision.THIRD):
            return Base(self.value)
        return None


class BattingSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"


# ---------------------------------------------------------------------------
# Roster
# ---------------------------------------------------------------------------

class Player(BaseModel):
    """A lineup entry. Roster order is batting order."""
    player_id: str = Field(min_length=1)
    first_name: str = ""
    last_name: str = ""
    bats: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Short box-score name like 'Mike T.'."""
        if not self.first_name and not self.last_name:
            return self.player_id
        initial = f" {self.last_name[0]}." if self.last_name else ""
        return f"{self.first_name}{initial}".strip()


# ---------------------------------------------------------------------------
# Base occupancy
# ---------------------------------------------------------------------------

class BaseState(BaseModel):
    """Who occupies each base. A player may stand on at most one base."""
    model_config = ConfigDict(frozen=True)

    first: Optional[str] = None
    second: Optional[str] = None
    third: Optional[str] = None

    @model_validator(mode="after")
    def _no_ghost_runners(self) -> BaseState:
        occupants = [p for p in (self.first, self.second, self.third) if p is not None]
        if len(occupants) != len(set(occupants)):
            raise ValueError(f"Player appears on more than one base: {occupants}")
        return self

    def runner_on(self, base: Base) -> str | None:
        return getattr(self, base.value)

    def is_occupied(self, base: Base) -> bool:
        return self.runner_on(base) is not None

    @property
    def is_empty(self) -> bool:
        return self.first is None and self.second is None and self.third is None

    @property
    def is_loaded(self) -> bool:
        return all(self.is_occupied(b) for b in BASES)

    def runners(self) -> list[str]:
        return [p for p in (self.first, self.second, self.third) if p is not None]

    def bases_string(self) -> str:
        """Return base state string like '110' for runners on 1st and 2nd."""
        return "".join("1" if self.is_occupied(b) else "0" for b in BASES)


EMPTY_BASES = BaseState()


# ---------------------------------------------------------------------------
# Runner decisions
# ---------------------------------------------------------------------------

class RunnerResults(BaseModel):
    """Per-runner decisions confirmed for one play.

    ``None`` means no decision was supplied for that slot.
    """
    batter: Optional[RunnerDecision] = None
    first: Optional[RunnerDecision] = None
    second: Optional[RunnerDecision] = None
    third: Optional[RunnerDecision] = None

    @field_validator("batter")
    @classmethod
    def validate_batter(cls, v: Optional[RunnerDecision]) -> Optional[RunnerDecision]:
        if v == RunnerDecision.STAY:
            raise ValueError("The batter has no base to stay on")
        return v

    def for_base(self, base: Base) -> RunnerDecision | None:
        return getattr(self, base.value)


# ---------------------------------------------------------------------------
# Play log entry
# ---------------------------------------------------------------------------

class Play(BaseModel):
    """One confirmed plate appearance. Never mutated once logged."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    inning: int = Field(ge=1)
    half_inning: Half
    batter_id: str = Field(min_length=1)
    outcome: Outcome
    rbi: int = Field(default=0, ge=0)
    outs_on_play: int = Field(default=0, ge=0, le=3)
    resulting_base_state: BaseState = Field(default_factory=BaseState)
    scored_player_ids: tuple[str, ...] = ()
    field_location: Optional[str] = None
    hit_x: Optional[float] = None
    hit_y: Optional[float] = None
    fielding_position: Optional[str] = None
    batting_side: Optional[BattingSide] = None

    @model_validator(mode="after")
    def _scored_runners_left_the_bases(self) -> Play:
        still_on = set(self.resulting_base_state.runners()) & set(self.scored_player_ids)
        if still_on:
            raise ValueError(f"Players scored and remain on base: {sorted(still_on)}")
        return self


# ---------------------------------------------------------------------------
# Derived game state
# ---------------------------------------------------------------------------

class GameState(BaseModel):
    """Live game situation derived from the play log."""
    model_config = ConfigDict(frozen=True)

    inning: int = Field(default=1, ge=1)
    half_inning: Half = Half.TOP
    outs: int = Field(default=0, ge=0, le=2)
    batting_order_index: int = Field(default=0, ge=0)
    runners: BaseState = Field(default_factory=BaseState)
    score: int = 0
    opponent_score: int = 0

    def situation_display(self) -> str:
        half_str = "Top" if self.half_inning == Half.TOP else "Bot"
        on_bases = [label for base, label in zip(BASES, ("1st", "2nd", "3rd"))
                    if self.runners.is_occupied(base)]
        runners_str = "runners on " + ", ".join(on_bases) if on_bases else "bases empty"
        return (f"{half_str} {self.inning}, {self.outs} out, {runners_str}, "
                f"Us {self.score} - Them {self.opponent_score}")
