# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Plate-appearance outcome taxonomy.

Maps every ``Outcome`` to its advancement category and at-bat status, and
parses outcome codes arriving from outside the engine. Display short codes
("1B", "K", "Ground Out", ...) are translated here and nowhere else.
"""

from __future__ import annotations

from typing import Any

from errors import InvalidOutcomeError
from models import AdvancementCategory, BaseState, Outcome

OUTS_PER_HALF_INNING = 3

_CATEGORY: dict[Outcome, AdvancementCategory] = {
    Outcome.SINGLE: AdvancementCategory.HIT,
    Outcome.DOUBLE: AdvancementCategory.HIT,
    Outcome.TRIPLE: AdvancementCategory.HIT,
    Outcome.HOMERUN: AdvancementCategory.HIT,
    Outcome.ERROR: AdvancementCategory.HIT,
    Outcome.FIELDERS_CHOICE: AdvancementCategory.HIT,
    Outcome.WALK: AdvancementCategory.WALK,
    Outcome.STRIKEOUT: AdvancementCategory.AUTOMATIC_OUT,
    Outcome.GROUND_OUT: AdvancementCategory.MANUAL,
    Outcome.FLY_OUT: AdvancementCategory.MANUAL,
    Outcome.LINE_OUT: AdvancementCategory.MANUAL,
    Outcome.POP_OUT: AdvancementCategory.MANUAL,
    Outcome.SACRIFICE_FLY: AdvancementCategory.MANUAL,
}

_NOT_AT_BAT = frozenset({Outcome.WALK, Outcome.SACRIFICE_FLY})

HITS = (Outcome.SINGLE, Outcome.DOUBLE, Outcome.TRIPLE, Outcome.HOMERUN)
FIELDED_OUTS = (Outcome.GROUND_OUT, Outcome.FLY_OUT, Outcome.LINE_OUT, Outcome.POP_OUT)

# Outcomes that put an out on the board unless runner decisions say otherwise.
_IMPLIED_OUTS = frozenset(FIELDED_OUTS + (Outcome.STRIKEOUT, Outcome.SACRIFICE_FLY))

TOTAL_BASES: dict[Outcome, int] = {
    Outcome.SINGLE: 1,
    Outcome.DOUBLE: 2,
    Outcome.TRIPLE: 3,
    Outcome.HOMERUN: 4,
}

SHORT_CODES: dict[Outcome, str] = {
    Outcome.SINGLE: "1B",
    Outcome.DOUBLE: "2B",
    Outcome.TRIPLE: "3B",
    Outcome.HOMERUN: "HR",
    Outcome.WALK: "BB",
    Outcome.STRIKEOUT: "K",
    Outcome.GROUND_OUT: "Ground Out",
    Outcome.FLY_OUT: "Fly Out",
    Outcome.LINE_OUT: "Line Out",
    Outcome.POP_OUT: "Pop Out",
    Outcome.ERROR: "E",
    Outcome.FIELDERS_CHOICE: "FC",
    Outcome.SACRIFICE_FLY: "SF",
}

_FROM_SHORT_CODE = {code: outcome for outcome, code in SHORT_CODES.items()}


def category(outcome: Outcome) -> AdvancementCategory:
    return _CATEGORY[outcome]


def is_at_bat(outcome: Outcome) -> bool:
    return outcome not in _NOT_AT_BAT


def is_hit(outcome: Outcome) -> bool:
    return outcome in TOTAL_BASES


def implied_outs(outcome: Outcome) -> int:
    """Outs the outcome records on its own, before any runner decisions."""
    return 1 if outcome in _IMPLIED_OUTS else 0


def resolution_category(outcome: Outcome, bases: BaseState, outs: int = 0) -> AdvancementCategory:
    """Category that actually governs resolving this play.

    A fielded out or sacrifice fly only needs runner decisions while there
    are runners to decide about and the out does not end the half-inning.
    Otherwise it resolves like a strikeout.
    """
    cat = category(outcome)
    if cat == AdvancementCategory.MANUAL:
        if bases.is_empty or outs + implied_outs(outcome) >= OUTS_PER_HALF_INNING:
            return AdvancementCategory.AUTOMATIC_OUT
    return cat


def parse_outcome(value: Any) -> Outcome:
    """Parse an outcome from a canonical value or a display short code.

    Raises:
        InvalidOutcomeError: If the value names no known outcome.
    """
    if isinstance(value, Outcome):
        return value
    if isinstance(value, str):
        if value in _FROM_SHORT_CODE:
            return _FROM_SHORT_CODE[value]
        try:
            return Outcome(value.strip().lower())
        except ValueError:
            pass
    raise InvalidOutcomeError(value)


def short_code(outcome: Outcome) -> str:
    return SHORT_CODES[outcome]
