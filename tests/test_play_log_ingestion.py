# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0", "pytest"]
# ///
"""Tests for play_log_ingestion module.

Verifies:
1. Stored play records parse into Play models (codes, base states)
2. Legacy boolean base states are accepted
3. Missing fields, bad JSON and invalid values produce clear errors
4. Plays serialize back to the stored record shape
5. Whole game files load into a GameRecord usable by the Scorebook
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from errors import InvalidOutcomeError
from models import BaseState, BattingSide, Half, Outcome
from play_log_ingestion import (
    GameRecord,
    IngestionError,
    IngestionValidationError,
    ingest_game,
    ingest_game_file,
    ingest_play_log,
    play_from_record,
    play_to_record,
)
from scorebook import Scorebook

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SAMPLE_GAME = PROJECT_ROOT / "data" / "sample_game.json"


def _record(**overrides) -> dict:
    record = {
        "$id": "abc",
        "inning": 2,
        "halfInning": "top",
        "playerId": "p3",
        "eventType": "2B",
        "rbi": 1,
        "outsOnPlay": 0,
        "baseState": json.dumps({"first": None, "second": "p3", "third": None, "scored": ["p1"]}),
        "hitLocation": "left-center gap",
        "hitX": 38,
        "hitY": 30,
        "position": "CF",
        "battingSide": "right",
    }
    record.update(overrides)
    return record


# ---------------------------------------------------------------------------
# Single records
# ---------------------------------------------------------------------------

class TestPlayFromRecord:
    def test_full_record(self):
        play = play_from_record(_record())
        assert play.id == "abc"
        assert (play.inning, play.half_inning) == (2, Half.TOP)
        assert play.batter_id == "p3"
        assert play.outcome == Outcome.DOUBLE
        assert play.rbi == 1
        assert play.resulting_base_state == BaseState(second="p3")
        assert play.scored_player_ids == ("p1",)
        assert play.field_location == "left-center gap"
        assert (play.hit_x, play.hit_y) == (38, 30)
        assert play.fielding_position == "CF"
        assert play.batting_side == BattingSide.RIGHT

    def test_canonical_event_type(self):
        assert play_from_record(_record(eventType="double")).outcome == Outcome.DOUBLE

    def test_dict_base_state(self):
        play = play_from_record(_record(baseState={"second": "p3", "scored": ["p1"]}))
        assert play.resulting_base_state == BaseState(second="p3")

    def test_boolean_base_state(self):
        play = play_from_record(_record(baseState={"first": True, "second": False}, rbi=0))
        assert play.resulting_base_state.first == "runner-on-first"
        assert play.resulting_base_state.second is None

    def test_minimal_record(self):
        play = play_from_record({"$id": "k1", "inning": 1, "halfInning": "TOP",
                                 "playerId": "p1", "eventType": "K", "outsOnPlay": 1})
        assert play.outs_on_play == 1
        assert play.resulting_base_state == BaseState()
        assert play.field_location is None

    def test_unknown_event_type(self):
        with pytest.raises(InvalidOutcomeError):
            play_from_record(_record(eventType="balk"))

    def test_missing_id(self):
        record = _record()
        del record["$id"]
        with pytest.raises(IngestionError) as exc_info:
            play_from_record(record)
        assert exc_info.value.field == "$id"

    def test_bad_base_state_json(self):
        with pytest.raises(IngestionError) as exc_info:
            play_from_record(_record(baseState="{first:"))
        assert exc_info.value.field == "baseState"

    def test_ghost_runner_fails_validation(self):
        with pytest.raises(IngestionValidationError):
            play_from_record(_record(baseState={"first": "p3", "second": "p3"}))

    def test_negative_rbi_fails_validation(self):
        with pytest.raises(IngestionValidationError) as exc_info:
            play_from_record(_record(rbi=-1), index=4)
        assert exc_info.value.validation_errors
        assert any("[4]" in d for d in exc_info.value.details)

    def test_not_a_dict(self):
        with pytest.raises(IngestionError):
            play_from_record(["abc"])


class TestPlayToRecord:
    def test_record_shape(self):
        record = play_to_record(play_from_record(_record()))
        assert record["$id"] == "abc"
        assert record["eventType"] == "2B"
        assert record["halfInning"] == "top"
        assert json.loads(record["baseState"]) == {
            "first": None, "second": "p3", "third": None, "scored": ["p1"],
        }

    def test_parses_back(self):
        play = play_from_record(_record())
        assert play_from_record(play_to_record(play)) == play


# ---------------------------------------------------------------------------
# Logs and games
# ---------------------------------------------------------------------------

class TestIngestPlayLog:
    def test_json_text(self):
        plays = ingest_play_log(json.dumps([_record(), _record(**{"$id": "def"})]))
        assert [p.id for p in plays] == ["abc", "def"]

    def test_invalid_json(self):
        with pytest.raises(IngestionError):
            ingest_play_log("[{")

    def test_not_a_list(self):
        with pytest.raises(IngestionError):
            ingest_play_log({"plays": []})


class TestIngestGame:
    def test_sample_game_file(self):
        game = ingest_game_file(SAMPLE_GAME)
        assert isinstance(game, GameRecord)
        assert len(game.roster) == 9
        assert len(game.plays) == 12
        assert game.is_home_game is False
        assert game.opponent_score == 3

    def test_sample_game_scores(self):
        game = ingest_game_file(SAMPLE_GAME)
        book = Scorebook(game.roster, game.plays, is_home_game=game.is_home_game,
                         initial_score=game.score, opponent_score=game.opponent_score)
        state = book.state()
        assert state.situation_display() == "Bot 2, 0 out, bases empty, Us 4 - Them 3"
        assert book.current_batter().player_id == "p4"
        assert book.box_score().totals.runs == 4

    def test_roster_as_ids(self):
        game = ingest_game({"roster": ["p1", "p2"], "logs": []})
        assert [p.player_id for p in game.roster] == ["p1", "p2"]

    def test_bad_roster_entry(self):
        with pytest.raises(IngestionValidationError):
            ingest_game({"roster": [{"firstName": "NoId"}]})

    def test_negative_score(self):
        with pytest.raises(IngestionValidationError):
            ingest_game({"roster": [], "score": -2})

    def test_payload_must_be_object(self):
        with pytest.raises(IngestionError):
            ingest_game("[]")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ingest_game_file(tmp_path / "nope.json")

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text("{not json")
        with pytest.raises(IngestionError):
            ingest_game_file(path)
