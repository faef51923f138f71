# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Play log ingestion module.

Parses persisted play log records and whole game documents into the
scorekeeper's models (Play, Player, GameRecord). Records use the stored
camelCase shape::

    {"$id": "...", "inning": 3, "halfInning": "top", "playerId": "p7",
     "eventType": "2B", "rbi": 1, "outsOnPlay": 0,
     "baseState": "{\\"second\\": \\"p7\\", \\"scored\\": [\\"p4\\"]}",
     "hitLocation": "deep left-center gap", "hitX": 31.2, "hitY": 22.0,
     "position": "CF", "battingSide": "right"}

``eventType`` may be the short UI code ("1B", "K", "Fly Out") or the
canonical outcome value. ``baseState`` may be a JSON string or a dict.

All ingestion paths validate the result with the Pydantic models and return
clear errors for missing or invalid data.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel, Field, ValidationError

from models import BaseState, BASES, Play, Player
from outcomes import parse_outcome, short_code


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class IngestionError(Exception):
    """Raised when a play log payload cannot be ingested."""

    def __init__(self, message: str, field: str | None = None,
                 details: list[str] | None = None):
        self.field = field
        self.details = details or []
        super().__init__(message)


class IngestionValidationError(IngestionError):
    """Raised when a parsed record fails Pydantic validation."""

    def __init__(self, message: str, validation_errors: list[dict]):
        self.validation_errors = validation_errors
        super().__init__(message, details=[
            f"{e.get('loc', '?')}: {e.get('msg', '?')}" for e in validation_errors
        ])


# ---------------------------------------------------------------------------
# Game document
# ---------------------------------------------------------------------------

class GameRecord(BaseModel):
    """A stored game: lineup, side, out-of-band scores and the play log."""
    roster: list[Player] = Field(default_factory=list)
    is_home_game: bool = False
    score: int = Field(default=0, ge=0)
    opponent_score: int = Field(default=0, ge=0)
    plays: list[Play] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _validation_details(model: str, exc: ValidationError, index: int | None = None) -> list[dict]:
    prefix = f"[{index}] " if index is not None else ""
    return [
        {
            "model": model,
            "loc": prefix + str(e.get("loc", "")),
            "msg": e.get("msg", ""),
            "type": e.get("type", ""),
        }
        for e in exc.errors()
    ]


def _require(record: dict[str, Any], key: str) -> Any:
    if key not in record or record[key] is None:
        raise IngestionError(f"Play record is missing '{key}'", field=key)
    return record[key]


def _parse_base_state(raw: Any) -> tuple[dict[str, str | None], tuple[str, ...]]:
    """Split a stored base state into occupancy and the scored list.

    Older records store ``true`` rather than a player id for an occupied
    base; those runners get a placeholder id naming the base.
    """
    if raw in (None, ""):
        return {}, ()
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise IngestionError(f"Invalid baseState JSON: {exc}", field="baseState") from exc
    if not isinstance(raw, dict):
        raise IngestionError(
            f"baseState must be an object, got {type(raw).__name__}",
            field="baseState",
        )

    occupancy: dict[str, str | None] = {}
    for base in BASES:
        value = raw.get(base.value)
        if value is True:
            value = f"runner-on-{base.value}"
        elif value is False:
            value = None
        occupancy[base.value] = value
    scored = raw.get("scored") or []
    if not isinstance(scored, list):
        raise IngestionError("baseState.scored must be a list", field="baseState")
    return occupancy, tuple(str(s) for s in scored)


def _dump_base_state(bases: BaseState, scored: tuple[str, ...]) -> str:
    data: dict[str, Any] = {base.value: bases.runner_on(base) for base in BASES}
    data["scored"] = list(scored)
    return json.dumps(data)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def play_from_record(record: dict[str, Any], index: int | None = None) -> Play:
    """Build a Play from one stored record.

    Raises:
        IngestionError: If a required field is missing or baseState is malformed.
        InvalidOutcomeError: If ``eventType`` is not a known outcome.
        IngestionValidationError: If the resulting Play fails validation.
    """
    if not isinstance(record, dict):
        raise IngestionError(
            f"Play record must be a dict, got {type(record).__name__}",
            field="record",
        )
    outcome = parse_outcome(_require(record, "eventType"))
    occupancy, scored = _parse_base_state(record.get("baseState"))

    try:
        return Play(
            id=str(_require(record, "$id")),
            inning=_require(record, "inning"),
            half_inning=str(_require(record, "halfInning")).lower(),
            batter_id=str(_require(record, "playerId")),
            outcome=outcome,
            rbi=record.get("rbi") or 0,
            outs_on_play=record.get("outsOnPlay") or 0,
            resulting_base_state=BaseState(**occupancy),
            scored_player_ids=scored,
            field_location=record.get("hitLocation") or None,
            hit_x=record.get("hitX"),
            hit_y=record.get("hitY"),
            fielding_position=record.get("position") or None,
            batting_side=record.get("battingSide") or None,
        )
    except ValidationError as exc:
        raise IngestionValidationError(
            f"Play record failed validation with {exc.error_count()} error(s)",
            validation_errors=_validation_details("Play", exc, index),
        ) from exc


def play_to_record(play: Play) -> dict[str, Any]:
    """Stored record shape for a Play; the inverse of ``play_from_record``."""
    return {
        "$id": play.id,
        "inning": play.inning,
        "halfInning": play.half_inning.value,
        "playerId": play.batter_id,
        "eventType": short_code(play.outcome),
        "rbi": play.rbi,
        "outsOnPlay": play.outs_on_play,
        "baseState": _dump_base_state(play.resulting_base_state, play.scored_player_ids),
        "hitLocation": play.field_location,
        "hitX": play.hit_x,
        "hitY": play.hit_y,
        "position": play.fielding_position,
        "battingSide": play.batting_side.value if play.batting_side else None,
    }


def ingest_play_log(records: Iterable[dict[str, Any]] | str) -> list[Play]:
    """Parse a play log (list of records, or its JSON text) in stored order."""
    if isinstance(records, str):
        try:
            records = json.loads(records)
        except json.JSONDecodeError as exc:
            raise IngestionError(f"Invalid JSON payload: {exc}", field="plays") from exc
    if not isinstance(records, list):
        raise IngestionError(
            f"Play log must be a list, got {type(records).__name__}",
            field="plays",
        )
    return [play_from_record(record, index=i) for i, record in enumerate(records)]


def _player_from_record(record: dict[str, Any], index: int) -> Player:
    if isinstance(record, str):
        record = {"playerId": record}
    try:
        return Player(
            player_id=str(record.get("playerId") or record.get("$id") or ""),
            first_name=record.get("firstName", ""),
            last_name=record.get("lastName", ""),
            bats=record.get("bats"),
        )
    except ValidationError as exc:
        raise IngestionValidationError(
            f"Roster entry {index} failed validation",
            validation_errors=_validation_details("Player", exc, index),
        ) from exc


# ---------------------------------------------------------------------------
# Game documents
# ---------------------------------------------------------------------------

def ingest_game(payload: dict[str, Any] | str) -> GameRecord:
    """Ingest a whole game document.

    Expected keys: ``roster`` (batting order), ``logs`` (the play log), and
    optionally ``isHome``, ``score`` and ``opponentScore``.

    Raises:
        IngestionError: If the payload is not a JSON object.
        IngestionValidationError: If any roster entry or play is invalid.
    """
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise IngestionError(f"Invalid JSON payload: {exc}", field="payload") from exc
    if not isinstance(payload, dict):
        raise IngestionError(
            f"Payload must be a dict or JSON string, got {type(payload).__name__}",
            field="payload",
        )

    roster = [_player_from_record(r, i) for i, r in enumerate(payload.get("roster") or [])]
    plays = ingest_play_log(payload.get("logs") or [])
    try:
        return GameRecord(
            roster=roster,
            is_home_game=bool(payload.get("isHome", False)),
            score=payload.get("score") or 0,
            opponent_score=payload.get("opponentScore") or 0,
            plays=plays,
        )
    except ValidationError as exc:
        raise IngestionValidationError(
            f"Game failed validation with {exc.error_count()} error(s)",
            validation_errors=_validation_details("GameRecord", exc),
        ) from exc


def ingest_game_file(path: str | Path) -> GameRecord:
    """Load a game JSON file and ingest it.

    Raises:
        FileNotFoundError: If the file does not exist.
        IngestionError: On parse/validation errors.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Game file not found: {path}")

    with open(p) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise IngestionError(f"Invalid JSON in {path}: {exc}", field="payload") from exc

    return ingest_game(data)
