# nrr_api/points_table.py
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from nrr_api.models import StandingRow, TeamId, TeamRecord

WIN_POINTS = 2


class PointsTable:
    """
    Immutable team -> TeamRecord lookup.
    Iteration follows input order, which is also the tie order in every snapshot.
    """

    def __init__(self, records: Iterable[TeamRecord]):
        rows: Dict[TeamId, TeamRecord] = {}
        for r in records:
            if r.team in rows:
                raise ValueError(f"Duplicate team in points table: {r.team}")
            rows[r.team] = r
        self._rows = MappingProxyType(rows)

    def __contains__(self, team: object) -> bool:
        return team in self._rows

    def __iter__(self) -> Iterator[TeamRecord]:
        return iter(self._rows.values())

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def team_ids(self) -> List[TeamId]:
        return list(self._rows.keys())

    def get(self, team: TeamId) -> TeamRecord:
        return self._rows[team]

    def resolve_id(self, raw: str) -> Optional[TeamId]:
        """Match a user string against team codes first, then display names (case-insensitive)."""
        if raw is None:
            return None
        key = str(raw).strip().upper()
        if not key:
            return None
        for team_id in self._rows:
            if team_id.upper() == key:
                return team_id
        for team_id, r in self._rows.items():
            if r.name.strip().upper() == key:
                return team_id
        return None


def _rank(rows: List[Tuple[TeamRecord, int, float]]) -> List[StandingRow]:
    # sorted() with reverse=True keeps equal keys in input order
    ordered = sorted(rows, key=lambda x: (x[1], x[2]), reverse=True)
    return [
        StandingRow(pos=idx, team=r.team, name=r.name, points=pts, nrr=rate)
        for idx, (r, pts, rate) in enumerate(ordered, start=1)
    ]


def current_standings(table: PointsTable) -> List[StandingRow]:
    """
    Table as it stands, sorted by:
    1) Points (desc)
    2) NRR (desc)
    """
    return _rank([(r, r.points, r.nrr) for r in table])


def resolve_standings(
    table: PointsTable,
    acting_team: TeamId,
    opponent_team: TeamId,
    acting_rate: float,
    opponent_rate: float,
) -> Tuple[int, List[StandingRow]]:
    """
    Re-rank the table assuming acting_team beats opponent_team.

    - acting team: +WIN_POINTS, NRR replaced by acting_rate
    - opponent: points unchanged, NRR replaced by opponent_rate
    - everyone else: stored points and NRR

    Returns (1-based rank of acting_team, snapshot).
    """
    rows: List[Tuple[TeamRecord, int, float]] = []
    for r in table:
        if r.team == acting_team:
            rows.append((r, r.points + WIN_POINTS, acting_rate))
        elif r.team == opponent_team:
            rows.append((r, r.points, opponent_rate))
        else:
            rows.append((r, r.points, r.nrr))

    snapshot = _rank(rows)
    for row in snapshot:
        if row.team == acting_team:
            return row.pos, snapshot
    raise ValueError(f"Unknown acting team: {acting_team}")


def target_rate_for_rank(table: PointsTable, acting_team: TeamId, desired_rank: int) -> float:
    """
    Single NRR the acting team has to beat to take desired_rank after a win,
    read off the current table:

    - if the team now at desired_rank will be level on points, its NRR
    - else the best NRR among teams that will be level on points
    - else -inf (points alone decide)
    """
    new_points = table.get(acting_team).points + WIN_POINTS
    ordered = current_standings(table)

    level_rates = [r.nrr for r in ordered if r.team != acting_team and r.points == new_points]

    target_row = ordered[desired_rank - 1]
    if target_row.points == new_points:
        return target_row.nrr
    if not level_rates:
        return float("-inf")
    return max(level_rates)
