# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0", "pytest"]
# ///
"""Tests for box score aggregation."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from box_score import (
    TOTALS_ID,
    PlayerGameStats,
    aggregate,
    format_box_score,
    format_rate,
    team_totals,
)
from models import BaseState, Half, Outcome, Play, Player

ROSTER = [
    Player(player_id="p1", first_name="Alex", last_name="Rivera"),
    Player(player_id="p2", first_name="Ben", last_name="Carter"),
    Player(player_id="p3"),
]


def _play(pid, batter, outcome, rbi=0, outs=0, scored=(), inning=1):
    return Play(id=pid, inning=inning, half_inning=Half.TOP, batter_id=batter, outcome=outcome,
                rbi=rbi, outs_on_play=outs, resulting_base_state=BaseState(),
                scored_player_ids=scored)


def _rows_by_id(plays):
    return {row.player_id: row for row in aggregate(plays, ROSTER)}


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatRate:
    @pytest.mark.parametrize("value,expected", [
        (0.0, ".000"),
        (0.75, ".750"),
        (1 / 3, ".333"),
        (1.25, "1.250"),
        (2.0, "2.000"),
    ])
    def test_format(self, value, expected):
        assert format_rate(value) == expected


# ---------------------------------------------------------------------------
# Per-player rows
# ---------------------------------------------------------------------------

class TestAggregate:
    def test_every_roster_player_has_a_row(self):
        rows = aggregate([], ROSTER)
        assert [r.player_id for r in rows] == ["p1", "p2", "p3"]
        assert all(r.pa == 0 for r in rows)
        assert rows[0].name == "Alex R."
        assert rows[2].name == "p3"

    def test_counting_stats(self):
        plays = [
            _play("a", "p1", Outcome.SINGLE),
            _play("b", "p1", Outcome.DOUBLE, rbi=1, scored=("p2",)),
            _play("c", "p1", Outcome.WALK),
            _play("d", "p1", Outcome.STRIKEOUT, outs=1),
            _play("e", "p1", Outcome.SACRIFICE_FLY, rbi=1, outs=1, scored=("p3",)),
        ]
        p1 = _rows_by_id(plays)["p1"]
        assert (p1.pa, p1.ab, p1.hits, p1.bb, p1.k, p1.sf, p1.rbi) == (5, 3, 2, 1, 1, 1, 2)
        assert (p1.singles, p1.doubles, p1.total_bases) == (1, 1, 3)
        assert p1.avg == ".667"
        assert p1.obp == ".600"
        assert p1.slg == "1.000"
        assert p1.ops == "1.600"

    def test_runs_go_to_scorers(self):
        plays = [_play("a", "p1", Outcome.HOMERUN, rbi=2, scored=("p1", "p2"))]
        rows = _rows_by_id(plays)
        assert rows["p1"].runs == 1
        assert rows["p2"].runs == 1
        assert rows["p2"].pa == 0

    def test_reach_on_error_is_at_bat_without_hit(self):
        p2 = _rows_by_id([_play("a", "p2", Outcome.ERROR)])["p2"]
        assert (p2.ab, p2.hits) == (1, 0)
        assert p2.avg == ".000"

    def test_batter_not_on_roster_is_skipped(self):
        rows = aggregate([_play("a", "sub", Outcome.SINGLE)], ROSTER)
        assert sum(r.pa for r in rows) == 0

    def test_rates_without_at_bats(self):
        p1 = _rows_by_id([_play("a", "p1", Outcome.WALK)])["p1"]
        assert p1.avg == ".000"
        assert p1.obp == "1.000"

    def test_to_dict(self):
        d = PlayerGameStats(player_id="x", hits=1, ab=4, singles=1).to_dict()
        assert d["AVG"] == ".250"
        assert d["H"] == 1
        assert {"PA", "AB", "R", "RBI", "BB", "K", "SF", "HR", "OBP", "SLG", "OPS"} <= set(d)


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------

class TestTeamTotals:
    def test_totals_equal_sum_of_rows(self):
        plays = [
            _play("a", "p1", Outcome.SINGLE),
            _play("b", "p2", Outcome.TRIPLE, rbi=1, scored=("p1",)),
            _play("c", "p3", Outcome.WALK),
            _play("d", "p1", Outcome.FLY_OUT, outs=1),
            _play("e", "p2", Outcome.SACRIFICE_FLY, rbi=1, outs=1, scored=("p2",)),
        ]
        rows = aggregate(plays, ROSTER)
        totals = team_totals(rows)
        assert totals.player_id == TOTALS_ID
        for name, value in totals.counting_stats().items():
            assert value == sum(r.counting_stats()[name] for r in rows)
        assert totals.runs == 2
        assert totals.rbi == 2

    def test_totals_rates_recomputed_from_sums(self):
        rows = [
            PlayerGameStats(player_id="a", ab=1, hits=1, singles=1),
            PlayerGameStats(player_id="b", ab=3, hits=0),
        ]
        assert team_totals(rows).avg == ".250"

    def test_format_box_score(self):
        text = format_box_score(aggregate([_play("a", "p1", Outcome.SINGLE)], ROSTER))
        assert "Alex R." in text
        assert "TEAM TOTALS" in text
        assert "1.000" in text
