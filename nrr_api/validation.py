# nrr_api/validation.py
from __future__ import annotations

from typing import Dict, Tuple

from nrr_api.models import RankStrategy, RequirementQuery, Scenario, TeamId
from nrr_api.overs import OversLike, parse_overs
from nrr_api.points_table import PointsTable

_TOSS_TO_SCENARIO: Dict[str, Scenario] = {
    "batting": "batting_first",
    "batting_first": "batting_first",
    "bowling": "bowling_first",
    "bowling_first": "bowling_first",
}

_STRATEGIES = ("live", "threshold")


class RequirementInputError(ValueError):
    """Raised when calculator input is rejected before it reaches the solver."""
    pass


def resolve_team(table: PointsTable, raw: str, label: str = "Team") -> TeamId:
    team_id = table.resolve_id(raw)
    if team_id is None:
        known = ", ".join(table.team_ids)
        raise RequirementInputError(f'{label} "{raw}" not found in points table (known teams: {known})')
    return team_id


def resolve_pair(table: PointsTable, your_team: str, opponent_team: str) -> Tuple[TeamId, TeamId]:
    acting = resolve_team(table, your_team, "Team")
    opponent = resolve_team(table, opponent_team, "Opponent team")
    if acting == opponent:
        raise RequirementInputError("your_team and opponent_team must be different")
    return acting, opponent


def parse_scenario(toss_result: str) -> Scenario:
    key = str(toss_result or "").strip().lower()
    if key not in _TOSS_TO_SCENARIO:
        raise RequirementInputError('toss_result must be "batting" or "bowling"')
    return _TOSS_TO_SCENARIO[key]


def parse_positive_overs(overs: OversLike, label: str = "match_overs") -> float:
    try:
        value = parse_overs(overs)
    except ValueError as e:
        raise RequirementInputError(f"{label}: {e}") from e
    if value <= 0:
        raise RequirementInputError(f"{label} must be positive")
    return value


def parse_runs(runs: object, label: str = "runs") -> int:
    if isinstance(runs, bool) or not isinstance(runs, int):
        raise RequirementInputError(f"{label} must be a whole number")
    if runs < 0:
        raise RequirementInputError(f"{label} cannot be negative")
    return runs


def validate_requirement(
    table: PointsTable,
    *,
    your_team: str,
    opponent_team: str,
    match_overs: OversLike,
    desired_position: int,
    toss_result: str,
    runs: int,
    strategy: str = "live",
) -> RequirementQuery:
    """
    Check raw calculator input against the table and return a RequirementQuery
    the solver can trust. Raises RequirementInputError.
    """
    acting, opponent = resolve_pair(table, your_team, opponent_team)
    scenario = parse_scenario(toss_result)
    overs = parse_positive_overs(match_overs)
    run_count = parse_runs(runs)

    if isinstance(desired_position, bool) or not isinstance(desired_position, int):
        raise RequirementInputError("desired_position must be a whole number")
    if desired_position < 1 or desired_position > len(table):
        raise RequirementInputError(f"desired_position must be between 1 and {len(table)}")

    if strategy not in _STRATEGIES:
        raise RequirementInputError(f"strategy must be one of {', '.join(_STRATEGIES)}")
    rank_strategy: RankStrategy = strategy

    return RequirementQuery(
        acting_team=acting,
        opponent_team=opponent,
        match_overs=overs,
        desired_rank=desired_position,
        scenario=scenario,
        runs=run_count,
        strategy=rank_strategy,
    )
