# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Box score statistics derived from the play log.

Counting stats are tallied from scratch on every call; rate stats are
computed from the tallies when read and never stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from models import Outcome, Play, Player
from outcomes import is_at_bat, is_hit

TOTALS_ID = "totals"

_COUNTING_FIELDS = ("pa", "ab", "hits", "singles", "doubles", "triples", "hr",
                    "bb", "k", "sf", "rbi", "runs")


def format_rate(value: float) -> str:
    """Three decimals without a leading zero: .750, 1.250."""
    text = f"{value:.3f}"
    return text[1:] if text.startswith("0") else text


def _ratio(num: int, den: int) -> float:
    return num / den if den > 0 else 0.0


@dataclass
class PlayerGameStats:
    player_id: str
    name: str = ""
    pa: int = 0
    ab: int = 0
    hits: int = 0
    singles: int = 0
    doubles: int = 0
    triples: int = 0
    hr: int = 0
    bb: int = 0
    k: int = 0
    sf: int = 0
    rbi: int = 0
    runs: int = 0

    @property
    def total_bases(self) -> int:
        return self.singles + 2 * self.doubles + 3 * self.triples + 4 * self.hr

    @property
    def avg_value(self) -> float:
        return _ratio(self.hits, self.ab)

    @property
    def obp_value(self) -> float:
        return _ratio(self.hits + self.bb, self.ab + self.bb + self.sf)

    @property
    def slg_value(self) -> float:
        return _ratio(self.total_bases, self.ab)

    @property
    def avg(self) -> str:
        return format_rate(self.avg_value)

    @property
    def obp(self) -> str:
        return format_rate(self.obp_value)

    @property
    def slg(self) -> str:
        return format_rate(self.slg_value)

    @property
    def ops(self) -> str:
        return format_rate(self.obp_value + self.slg_value)

    def counting_stats(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in _COUNTING_FIELDS}

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id, "name": self.name,
            "PA": self.pa, "AB": self.ab, "H": self.hits, "R": self.runs,
            "RBI": self.rbi, "BB": self.bb, "K": self.k, "SF": self.sf,
            "1B": self.singles, "2B": self.doubles, "3B": self.triples, "HR": self.hr,
            "AVG": self.avg, "OBP": self.obp, "SLG": self.slg, "OPS": self.ops,
        }


_HIT_FIELD = {
    Outcome.SINGLE: "singles",
    Outcome.DOUBLE: "doubles",
    Outcome.TRIPLE: "triples",
    Outcome.HOMERUN: "hr",
}


def _tally(stats: PlayerGameStats, play: Play) -> None:
    stats.pa += 1
    stats.rbi += play.rbi
    if is_at_bat(play.outcome):
        stats.ab += 1
    if is_hit(play.outcome):
        stats.hits += 1
        field_name = _HIT_FIELD[play.outcome]
        setattr(stats, field_name, getattr(stats, field_name) + 1)
    elif play.outcome == Outcome.WALK:
        stats.bb += 1
    elif play.outcome == Outcome.STRIKEOUT:
        stats.k += 1
    elif play.outcome == Outcome.SACRIFICE_FLY:
        stats.sf += 1


def aggregate(plays: Sequence[Play], roster: Sequence[Player]) -> list[PlayerGameStats]:
    """One stats row per roster player, in batting order.

    Plays by batters who are not on the roster are skipped. Runs go to
    every player listed as scoring on a play, whoever was batting.
    """
    rows = {p.player_id: PlayerGameStats(player_id=p.player_id, name=p.display_name)
            for p in roster}
    for play in plays:
        batter = rows.get(play.batter_id)
        if batter is not None:
            _tally(batter, play)
        for scorer_id in play.scored_player_ids:
            scorer = rows.get(scorer_id)
            if scorer is not None:
                scorer.runs += 1
    return list(rows.values())


def team_totals(stats: Sequence[PlayerGameStats]) -> PlayerGameStats:
    """Field-wise sum of the counting stats; rates recomputed from the sums."""
    totals = PlayerGameStats(player_id=TOTALS_ID, name="TEAM TOTALS")
    for row in stats:
        for name in _COUNTING_FIELDS:
            setattr(totals, name, getattr(totals, name) + getattr(row, name))
    return totals


def format_box_score(rows: Sequence[PlayerGameStats], totals: PlayerGameStats | None = None) -> str:
    """Generate a formatted box score string."""
    totals = totals or team_totals(rows)
    lines = []
    header = (f"  {'Name':<20} {'AB':>3} {'R':>3} {'H':>3} {'RBI':>4} {'BB':>3} {'K':>3} "
              f"{'AVG':>5} {'OBP':>5} {'SLG':>5} {'OPS':>5}")
    lines.append(header)
    lines.append(f"  {'-'*20} {'-'*3} {'-'*3} {'-'*3} {'-'*4} {'-'*3} {'-'*3} "
                 f"{'-'*5} {'-'*5} {'-'*5} {'-'*5}")
    for b in list(rows) + [totals]:
        lines.append(
            f"  {b.name:<20} {b.ab:>3} {b.runs:>3} {b.hits:>3} {b.rbi:>4} {b.bb:>3} {b.k:>3} "
            f"{b.avg:>5} {b.obp:>5} {b.slg:>5} {b.ops:>5}"
        )
    return "\n".join(lines)
