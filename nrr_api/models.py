from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, NewType, Optional, Union

TeamId = NewType("TeamId", str)

# -----------------------------
# Match shape / rank strategy
# -----------------------------
Scenario = Literal["batting_first", "bowling_first"]
RankStrategy = Literal["live", "threshold"]


# -----------------------------
# Canonical TeamRecord
# -----------------------------
@dataclass(frozen=True)
class TeamRecord:
    """
    One row of the points table.
    Overs are mixed-radix (128.2 = 128 overs + 2 balls).
    """
    team: TeamId
    name: str

    played: int
    won: int
    lost: int
    points: int
    nrr: float

    runs_for: int
    overs_for: float
    runs_against: int
    overs_against: float

    nr: int = 0


@dataclass(frozen=True)
class StandingRow:
    pos: int
    team: TeamId
    name: str
    points: int
    nrr: float

    def as_dict(self) -> dict:
        return {
            "pos": self.pos,
            "team": self.team,
            "name": self.name,
            "points": self.points,
            "nrr": round(self.nrr, 3),
        }


# -----------------------------
# Solver input / output
# -----------------------------
@dataclass(frozen=True)
class RequirementQuery:
    """
    runs: the acting team's score when batting first,
          the opponent's score when bowling first.
    """
    acting_team: TeamId
    opponent_team: TeamId
    match_overs: float
    desired_rank: int
    scenario: Scenario
    runs: int
    strategy: RankStrategy = "live"


@dataclass(frozen=True)
class BattingFirstRange:
    restrict_runs_min: int
    restrict_runs_max: int
    own_rate_min: float
    own_rate_max: float
    opponent_rate_min: float
    opponent_rate_max: float


@dataclass(frozen=True)
class BowlingFirstRange:
    chase_target: int
    chase_overs_min: float
    chase_overs_max: float
    chase_overs_min_decimal: float
    chase_overs_max_decimal: float
    own_rate_min: float
    own_rate_max: float
    opponent_rate_min: float
    opponent_rate_max: float


RequirementResult = Optional[Union[BattingFirstRange, BowlingFirstRange]]
